"""Services for tracked food items and their notes."""

import logging
import math
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from food_expiry_tracker.domain.errors import (
    FoodTrackerError,
    Forbidden,
    NotFound,
    StoreError,
    ValidationError,
)
from food_expiry_tracker.domain.foods import FoodFilter, FoodItem, FoodNote

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "image",
    "title",
    "category",
    "quantity",
    "expiry_date",
    "user_email",
)
TEXT_FIELDS = ("image", "title", "category", "user_email")
DATE_FIELDS = ("expiry_date", "added_date")
EDITABLE_FIELDS = frozenset((*REQUIRED_FIELDS, "description", "added_date"))

API_FIELD_NAMES = {
    "expiry_date": "expiryDate",
    "added_date": "addedDate",
    "user_email": "userEmail",
}


class FoodRepository(Protocol):
    """Persistence interface for food items."""

    def list_foods(self, food_filter: FoodFilter) -> list[FoodItem]:
        """Return foods matching every non-empty filter field."""

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def create_food(self, payload: dict[str, object]) -> UUID:
        """Insert a food item and return its id."""

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> bool:
        """Merge fields into a food item; return False when nothing matched."""

    def delete_food(self, food_id: UUID) -> int:
        """Delete a food item and return the number of deleted rows."""

    def append_note(self, food_id: UUID, note: FoodNote) -> None:
        """Atomically append a note to a food item."""

    def list_notes(self, food_id: UUID) -> list[FoodNote]:
        """Return notes for a food item, empty when it does not exist."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FoodService:
    """Application service enforcing validation and ownership for foods."""

    repository: FoodRepository
    expiring_soon_days: int = 5
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = _utcnow

    def search(
        self, search: str | None = None, category: str | None = None
    ) -> list[FoodItem]:
        """List foods, optionally by title/category substring and exact category."""
        food_filter = FoodFilter(
            search=_blank_to_none(search), category=_blank_to_none(category)
        )
        with self._store_call("Failed to fetch foods"):
            return self.repository.list_foods(food_filter)

    def list_expiring_soon(self) -> list[FoodItem]:
        """Return foods expiring by the end of the window, including expired ones."""
        with self._store_call("Failed to fetch expiring foods"):
            return self.repository.list_foods(
                FoodFilter(expires_before=self.expiring_soon_cutoff())
            )

    def expiring_soon_cutoff(self) -> datetime:
        """Return the end of the last day in the expiring-soon window."""
        tz = ZoneInfo(self.timezone_name)
        now = self.clock().astimezone(tz)
        end = (now + timedelta(days=self.expiring_soon_days)).replace(
            hour=23, minute=59, second=59, microsecond=999999
        )
        return end.astimezone(UTC)

    def list_for_owner(self, email: str | None) -> list[FoodItem]:
        """Return foods owned by the email."""
        owner = _blank_to_none(email)
        if owner is None:
            raise ValidationError("User email is required")
        with self._store_call("Failed to fetch user foods"):
            return self.repository.list_foods(FoodFilter(user_email=owner))

    def get(self, food_id: str) -> FoodItem:
        """Return a food item or raise NotFound."""
        parsed_id = parse_food_id(food_id)
        if parsed_id is None:
            raise NotFound("Food item not found")
        with self._store_call("Failed to fetch food item"):
            food = self.repository.get_food(parsed_id)
        if food is None:
            raise NotFound("Food item not found")
        return food

    def create(self, payload: dict[str, object]) -> UUID:
        """Validate and insert a new food item; return its id."""
        client_fields = {
            name: value for name, value in payload.items() if name != "added_date"
        }
        fields = self.validate_fields(client_fields, required=REQUIRED_FIELDS)
        fields.setdefault("description", "")
        fields["added_date"] = self.clock()
        with self._store_call("Failed to add food"):
            food_id = self.repository.create_food(fields)
        logger.info("Created food item %s", food_id)
        return food_id

    def update(self, food_id: str, payload: dict[str, object]) -> None:
        """Merge the supplied fields into an existing food item."""
        fields = self.validate_fields(payload, required=())
        if not fields:
            raise ValidationError("No fields to update")
        parsed_id = parse_food_id(food_id)
        if parsed_id is None:
            raise NotFound("Food item not found")
        with self._store_call("Failed to update food item"):
            matched = self.repository.update_food(parsed_id, fields)
        if not matched:
            raise NotFound("Food item not found")

    def delete(self, food_id: str) -> int:
        """Delete a food item; a missing item deletes nothing and is not an error."""
        parsed_id = parse_food_id(food_id)
        if parsed_id is None:
            return 0
        with self._store_call("Failed to delete food item"):
            return self.repository.delete_food(parsed_id)

    def add_note(
        self,
        food_id: str,
        text: str | None,
        author_email: str | None,
        claimed_author: str | None = None,
    ) -> UUID:
        """Append a note to a food item owned by the author.

        ``claimed_author`` is the author named by the client, if any. It is
        checked only after the text, the parent item and its owner, and must
        equal ``author_email``.
        """
        if _blank_to_none(text) is None or _blank_to_none(author_email) is None:
            raise ValidationError("Text and authorEmail are required")
        if claimed_author is not None and _blank_to_none(claimed_author) is None:
            raise ValidationError("Text and authorEmail are required")
        parsed_id = parse_food_id(food_id)
        if parsed_id is None:
            raise NotFound("Food not found")
        with self._store_call("Failed to add note"):
            food = self.repository.get_food(parsed_id)
        if food is None:
            raise NotFound("Food not found")
        if food.user_email != author_email:
            raise Forbidden("Unauthorized to add note")
        if claimed_author is not None and claimed_author != author_email:
            raise Forbidden("Unauthorized to add note")
        note = FoodNote(
            text=str(text),
            author_email=str(author_email),
            created_at=self.clock(),
            food_id=parsed_id,
        )
        with self._store_call("Failed to add note"):
            self.repository.append_note(parsed_id, note)
        return parsed_id

    def list_notes(self, food_id: str) -> list[FoodNote]:
        """Return notes for a food item, or an empty list when it is absent."""
        parsed_id = parse_food_id(food_id)
        if parsed_id is None:
            return []
        with self._store_call("Failed to fetch notes"):
            return self.repository.list_notes(parsed_id)

    def validate_fields(
        self, payload: dict[str, object], required: Iterable[str]
    ) -> dict[str, object]:
        """Validate and coerce food fields.

        Fields in ``required`` must be present and non-empty; any other
        supplied field is checked with the same rules. Returns a new dict
        with quantity as a float and dates as aware datetimes.
        """
        unknown = sorted(set(payload) - EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(
                "Unknown or read-only fields: "
                + ", ".join(_api_name(name) for name in unknown)
            )
        if any(_is_missing(payload.get(name)) for name in required):
            raise ValidationError("Required fields are missing")

        fields: dict[str, object] = {}
        for name, value in payload.items():
            if name == "quantity":
                fields[name] = _parse_quantity(value)
            elif name in DATE_FIELDS:
                fields[name] = _parse_date(value, name, ZoneInfo(self.timezone_name))
            elif name in TEXT_FIELDS:
                if not isinstance(value, str) or not value.strip():
                    raise ValidationError(f"{_api_name(name)} must be non-empty text")
                fields[name] = value
            else:
                if value is None:
                    value = ""
                if not isinstance(value, str):
                    raise ValidationError(f"{_api_name(name)} must be text")
                fields[name] = value
        return fields

    @contextmanager
    def _store_call(self, message: str) -> Iterator[None]:
        """Translate unexpected store failures into a generic StoreError."""
        try:
            yield
        except FoodTrackerError:
            raise
        except Exception as exc:
            logger.exception(message)
            raise StoreError(message) from exc


def parse_food_id(raw: str) -> UUID | None:
    """Parse a food identifier, returning None when it is malformed."""
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _api_name(name: str) -> str:
    return API_FIELD_NAMES.get(name, name)


def _parse_quantity(value: object) -> float:
    """Coerce a quantity to a positive finite number."""
    message = "Quantity must be a positive number"
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int | float):
        quantity = float(value)
    elif isinstance(value, str):
        try:
            quantity = float(value.strip())
        except ValueError as exc:
            raise ValidationError(message) from exc
    else:
        raise ValidationError(message)
    if not math.isfinite(quantity) or quantity <= 0:
        raise ValidationError(message)
    return quantity


def _parse_date(value: object, name: str, tz: ZoneInfo) -> datetime:
    """Coerce an ISO-8601 date or date-time to an aware datetime."""
    message = f"{_api_name(name)} must be a valid date"
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(message) from exc
    else:
        raise ValidationError(message)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed
