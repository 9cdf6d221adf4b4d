"""Supabase implementation for tracked food items."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from food_expiry_tracker.domain.foods import FoodFilter, FoodItem, FoodNote
from food_expiry_tracker.services.foods import FoodRepository

APPEND_NOTE_FUNCTION = "append_food_note"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for food items with embedded notes."""

    client: Client
    table_name: str = "food_items"

    def list_foods(self, food_filter: FoodFilter) -> list[FoodItem]:
        """Return foods matching every non-empty filter field."""
        query = self.client.table(self.table_name).select("*")
        if food_filter.search:
            pattern = _quote_filter_value(f"*{_escape_like(food_filter.search)}*")
            query = query.or_(f"title.ilike.{pattern},category.ilike.{pattern}")
        if food_filter.category:
            query = query.eq("category", food_filter.category)
        if food_filter.user_email:
            query = query.eq("user_email", food_filter.user_email)
        if food_filter.expires_before:
            query = query.lte("expiry_date", food_filter.expires_before.isoformat())
        response = query.order("added_date").execute()
        return [_parse_food(row) for row in response.data or []]

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def create_food(self, payload: dict[str, object]) -> UUID:
        """Insert a food item and return its id."""
        response = (
            self.client.table(self.table_name)
            .insert({**_serialize_fields(payload), "notes": []})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return UUID(response.data[0]["id"])

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> bool:
        """Merge fields into a food item; return False when nothing matched."""
        response = (
            self.client.table(self.table_name)
            .update(_serialize_fields(payload))
            .eq("id", str(food_id))
            .execute()
        )
        return bool(response.data)

    def delete_food(self, food_id: UUID) -> int:
        """Delete a food item and return the number of deleted rows."""
        response = (
            self.client.table(self.table_name)
            .delete()
            .eq("id", str(food_id))
            .execute()
        )
        return len(response.data or [])

    def append_note(self, food_id: UUID, note: FoodNote) -> None:
        """Append a note in a single store-side update."""
        self.client.rpc(
            APPEND_NOTE_FUNCTION,
            {"food_id": str(food_id), "note": _serialize_note(note)},
        ).execute()

    def list_notes(self, food_id: UUID) -> list[FoodNote]:
        """Return notes for a food item, empty when it does not exist."""
        response = (
            self.client.table(self.table_name)
            .select("notes")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return []
        return _parse_notes(response.data[0].get("notes"))


def _escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a plain substring.

    PostgREST rewrites every ``*`` to ``%``, so a literal ``*`` cannot be
    expressed and is matched by the single-character wildcard instead.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")


def _quote_filter_value(value: str) -> str:
    """Quote a value for a PostgREST logical filter."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _serialize_fields(payload: dict[str, object]) -> dict[str, object]:
    return {
        name: value.isoformat() if isinstance(value, datetime) else value
        for name, value in payload.items()
    }


def _serialize_note(note: FoodNote) -> dict[str, object]:
    return {
        "text": note.text,
        "author_email": note.author_email,
        "created_at": note.created_at.isoformat(),
        "food_id": str(note.food_id),
    }


def _parse_datetime(raw: object) -> datetime:
    if isinstance(raw, datetime):
        return raw
    return datetime.fromisoformat(str(raw))


def _parse_notes(raw: object) -> list[FoodNote]:
    if not isinstance(raw, list):
        return []
    return [
        FoodNote(
            text=str(entry.get("text", "")),
            author_email=str(entry.get("author_email", "")),
            created_at=_parse_datetime(entry["created_at"]),
            food_id=UUID(str(entry["food_id"])),
        )
        for entry in raw
        if isinstance(entry, dict)
    ]


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food row into a domain model."""
    return FoodItem(
        id=UUID(str(row["id"])),
        image=str(row.get("image", "")),
        title=str(row.get("title", "")),
        category=str(row.get("category", "")),
        quantity=float(row.get("quantity", 0.0)),
        expiry_date=_parse_datetime(row["expiry_date"]),
        description=str(row.get("description") or ""),
        added_date=_parse_datetime(row["added_date"]),
        user_email=str(row.get("user_email", "")),
        notes=_parse_notes(row.get("notes")),
    )
