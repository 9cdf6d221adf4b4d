"""Domain models for tracked food items."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodNote:
    """A note appended to a food item by its owner."""

    text: str
    author_email: str
    created_at: datetime
    food_id: UUID


@dataclass(frozen=True)
class FoodItem:
    """Represents a perishable item with an expiry date."""

    id: UUID
    image: str
    title: str
    category: str
    quantity: float
    expiry_date: datetime
    description: str
    added_date: datetime
    user_email: str
    notes: list[FoodNote] = field(default_factory=list)


@dataclass(frozen=True)
class FoodFilter:
    """Filter for listing foods; empty fields are not applied."""

    search: str | None = None
    category: str | None = None
    user_email: str | None = None
    expires_before: datetime | None = None
