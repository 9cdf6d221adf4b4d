"""Application configuration."""

import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    food_table: str = "food_items"
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    token_expiry_hours: int = 1
    cookie_secure: bool = True
    cookie_samesite: str = "none"
    client_origin: str = "http://localhost:5173"
    expiring_soon_days: int = 5
    timezone: str = "UTC"
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the comma-separated list of allowed client origins."""
    if raw is None:
        return []
    origins: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
