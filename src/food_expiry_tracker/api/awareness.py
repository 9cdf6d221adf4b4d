"""Static awareness and recipe endpoints."""

from fastapi import APIRouter

from food_expiry_tracker.awareness import (
    awareness_stats,
    awareness_tips,
    recipe_suggestions,
)

router = APIRouter(tags=["awareness"])


@router.get("/awareness-stats")
async def get_awareness_stats() -> dict[str, int]:
    """Return community food-waste totals."""
    return awareness_stats()


@router.get("/awareness-tips")
async def get_awareness_tips() -> list[str]:
    """Return tips for reducing food waste."""
    return awareness_tips()


@router.get("/recipes/suggestions")
async def get_recipe_suggestions() -> list[dict[str, object]]:
    """Return recipes that use up ingredients close to expiry."""
    return recipe_suggestions()
