"""Food item and note endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from food_expiry_tracker.api.auth import require_identity
from food_expiry_tracker.api.models import FoodPayload, NoteRequest  # noqa: TC001
from food_expiry_tracker.domain.auth import Identity  # noqa: TC001

if TYPE_CHECKING:
    from food_expiry_tracker.domain.foods import FoodItem, FoodNote
    from food_expiry_tracker.services.foods import FoodService

router = APIRouter(tags=["foods"])


def _food_service(request: Request) -> FoodService:
    return request.app.state.container.food_service


@router.get("/foods")
def list_foods(
    request: Request, search: str | None = None, category: str | None = None
) -> list[dict[str, object]]:
    """List foods, filtered by a search term and/or an exact category."""
    foods = _food_service(request).search(search=search, category=category)
    return [serialize_food(food) for food in foods]


@router.get("/foods/expiring-soon")
def list_expiring_soon(request: Request) -> list[dict[str, object]]:
    """List foods expiring within the window, including expired ones."""
    foods = _food_service(request).list_expiring_soon()
    return [serialize_food(food) for food in foods]


@router.get("/myfoods")
def list_my_foods(
    request: Request,
    email: str | None = None,
    identity: Identity = Depends(require_identity),
) -> list[dict[str, object]]:
    """List foods owned by the given email."""
    foods = _food_service(request).list_for_owner(email)
    return [serialize_food(food) for food in foods]


@router.get("/foods/{food_id}")
def get_food(food_id: str, request: Request) -> dict[str, object]:
    """Return a single food item."""
    return serialize_food(_food_service(request).get(food_id))


@router.post("/foods")
def create_food(
    body: FoodPayload,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> dict[str, object]:
    """Create a food item."""
    food_id = _food_service(request).create(body.supplied_fields())
    return {"acknowledged": True, "insertedId": str(food_id)}


@router.put("/foods/{food_id}")
def update_food(
    food_id: str,
    body: FoodPayload,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> dict[str, object]:
    """Merge the supplied fields into a food item."""
    _food_service(request).update(food_id, body.supplied_fields())
    return {"message": "Food item updated successfully"}


@router.delete("/foods/{food_id}")
def delete_food(
    food_id: str,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> dict[str, object]:
    """Delete a food item; deleting a missing item reports zero deletions."""
    deleted = _food_service(request).delete(food_id)
    return {"acknowledged": True, "deletedCount": deleted}


@router.post("/foods/{food_id}/notes")
def add_note(
    food_id: str,
    body: NoteRequest,
    request: Request,
    identity: Identity = Depends(require_identity),
) -> dict[str, object]:
    """Append a note; only the item's owner may annotate it."""
    parent_id = _food_service(request).add_note(
        food_id, body.text, identity.email, claimed_author=body.author_email
    )
    return {"insertedId": str(parent_id)}


@router.get("/foods/{food_id}/notes")
def list_notes(food_id: str, request: Request) -> list[dict[str, object]]:
    """Return notes for a food item, empty when it does not exist."""
    return [serialize_note(note) for note in _food_service(request).list_notes(food_id)]


def serialize_food(food: FoodItem) -> dict[str, object]:
    """Format a food item for JSON responses."""
    return {
        "id": str(food.id),
        "image": food.image,
        "title": food.title,
        "category": food.category,
        "quantity": food.quantity,
        "expiryDate": food.expiry_date.isoformat(),
        "description": food.description,
        "addedDate": food.added_date.isoformat(),
        "userEmail": food.user_email,
        "notes": [serialize_note(note) for note in food.notes],
    }


def serialize_note(note: FoodNote) -> dict[str, object]:
    """Format a note for JSON responses."""
    return {
        "text": note.text,
        "authorEmail": note.author_email,
        "createdAt": note.created_at.isoformat(),
        "foodId": str(note.food_id),
    }
