"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from food_expiry_tracker.config import Settings
from food_expiry_tracker.containers import AppContainer, build_token_service
from food_expiry_tracker.domain.foods import FoodFilter, FoodItem, FoodNote
from food_expiry_tracker.services.foods import FoodRepository, FoodService


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)

    def list_foods(self, food_filter: FoodFilter) -> list[FoodItem]:
        results = []
        for food in self.foods.values():
            if food_filter.search:
                term = food_filter.search.lower()
                if term not in food.title.lower() and term not in food.category.lower():
                    continue
            if food_filter.category and food.category != food_filter.category:
                continue
            if food_filter.user_email and food.user_email != food_filter.user_email:
                continue
            if (
                food_filter.expires_before
                and food.expiry_date > food_filter.expires_before
            ):
                continue
            results.append(food)
        return results

    def get_food(self, food_id: UUID) -> FoodItem | None:
        return self.foods.get(food_id)

    def create_food(self, payload: dict[str, object]) -> UUID:
        food_id = uuid4()
        self.foods[food_id] = FoodItem(id=food_id, **payload)
        return food_id

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> bool:
        current = self.foods.get(food_id)
        if current is None:
            return False
        self.foods[food_id] = replace(current, **payload)
        return True

    def delete_food(self, food_id: UUID) -> int:
        return 1 if self.foods.pop(food_id, None) else 0

    def append_note(self, food_id: UUID, note: FoodNote) -> None:
        current = self.foods[food_id]
        self.foods[food_id] = replace(current, notes=[*current.notes, note])

    def list_notes(self, food_id: UUID) -> list[FoodNote]:
        food = self.foods.get(food_id)
        return list(food.notes) if food else []


class FailingFoodRepository(FoodRepository):
    """Repository whose every call fails like an unreachable store."""

    def _fail(self, *_args: object) -> None:
        raise RuntimeError("connection refused")

    list_foods = _fail
    get_food = _fail
    create_food = _fail
    update_food = _fail
    delete_food = _fail
    append_note = _fail
    list_notes = _fail


def add_food(
    repository: InMemoryFoodRepository,
    *,
    expires_in: timedelta = timedelta(days=30),
    **overrides: object,
) -> FoodItem:
    """Insert a food item directly into the repository and return it."""
    now = datetime.now(tz=UTC)
    payload: dict[str, object] = {
        "image": "https://example.com/milk.png",
        "title": "Milk",
        "category": "dairy",
        "quantity": 1.0,
        "expiry_date": now + expires_in,
        "description": "",
        "added_date": now,
        "user_email": "owner@example.com",
    }
    payload.update(overrides)
    food_id = repository.create_food(payload)
    return repository.foods[food_id]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        jwt_secret="test-secret",
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def food_service(food_repository: InMemoryFoodRepository) -> FoodService:
    return FoodService(food_repository)


@pytest.fixture
def container(settings: Settings, food_service: FoodService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        token_service=build_token_service(settings),
        food_service=food_service,
        close_resources=close_resources,
    )


@pytest.fixture
def auth_headers(container: AppContainer) -> Callable[[str], dict[str, str]]:
    def _headers(email: str) -> dict[str, str]:
        issued = container.token_service.issue_token(email)
        return {"Authorization": f"Bearer {issued.token}"}

    return _headers
