"""Static food-waste awareness content."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AwarenessStats:
    """Community totals shown on the awareness page."""

    total_food_saved_kg: int
    meals_provided: int
    carbon_footprint_reduced_kg: int


@dataclass(frozen=True)
class RecipeSuggestion:
    """A recipe that uses up ingredients close to expiry."""

    id: int
    title: str
    ingredients: tuple[str, ...]
    steps: tuple[str, ...]


AWARENESS_STATS = AwarenessStats(
    total_food_saved_kg=120,
    meals_provided=300,
    carbon_footprint_reduced_kg=450,
)

AWARENESS_TIPS: tuple[str, ...] = (
    "Plan your meals before shopping to avoid waste.",
    "Store food properly to extend freshness.",
    "Use leftovers creatively for new meals.",
    "Check expiry dates regularly.",
)

RECIPE_SUGGESTIONS: tuple[RecipeSuggestion, ...] = (
    RecipeSuggestion(
        id=1,
        title="Veggie Stir Fry",
        ingredients=("carrots", "broccoli", "soy sauce"),
        steps=("Chop veggies", "Stir fry with sauce", "Serve hot"),
    ),
    RecipeSuggestion(
        id=2,
        title="Banana Pancakes",
        ingredients=("ripe bananas", "flour", "milk", "eggs"),
        steps=("Mash bananas", "Mix with other ingredients", "Cook on pan"),
    ),
)


def awareness_stats() -> dict[str, int]:
    """Return awareness totals formatted for the API."""
    return {
        "totalFoodSaved": AWARENESS_STATS.total_food_saved_kg,
        "mealsProvided": AWARENESS_STATS.meals_provided,
        "carbonFootprintReduced": AWARENESS_STATS.carbon_footprint_reduced_kg,
    }


def awareness_tips() -> list[str]:
    """Return food waste reduction tips."""
    return list(AWARENESS_TIPS)


def recipe_suggestions() -> list[dict[str, object]]:
    """Return recipe suggestions formatted for the API."""
    return [
        {
            "id": recipe.id,
            "title": recipe.title,
            "ingredients": list(recipe.ingredients),
            "steps": list(recipe.steps),
        }
        for recipe in RECIPE_SUGGESTIONS
    ]
