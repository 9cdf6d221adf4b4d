"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from food_expiry_tracker.adapters.supabase_food_repository import (
    SupabaseFoodRepository,
)
from food_expiry_tracker.config import Settings
from food_expiry_tracker.services.foods import FoodService
from food_expiry_tracker.services.tokens import TokenService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    token_service: TokenService
    food_service: FoodService
    close_resources: Callable[[], Awaitable[None]]


def build_token_service(settings: Settings) -> TokenService:
    """Create the token service from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry=timedelta(hours=settings.token_expiry_hours),
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(
        supabase_client, table_name=resolved_settings.food_table
    )
    food_service = FoodService(
        repository=food_repository,
        expiring_soon_days=resolved_settings.expiring_soon_days,
        timezone_name=resolved_settings.timezone,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        token_service=build_token_service(resolved_settings),
        food_service=food_service,
        close_resources=close_resources,
    )
