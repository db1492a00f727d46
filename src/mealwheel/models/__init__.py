"""Pydantic models defining shared data contracts."""

from mealwheel.models.catalog import (
    HouseholdCategory,
    HouseholdGroupSnapshot,
    IngredientCategory,
    MealSnapshot,
    QuantityLine,
    RotationEntrySnapshot,
    Unit,
)
from mealwheel.models.grocery import (
    ClearResult,
    GroceryCheckResult,
    GroceryList,
    GroceryRow,
    Source,
)

__all__ = [
    "HouseholdCategory",
    "HouseholdGroupSnapshot",
    "IngredientCategory",
    "MealSnapshot",
    "QuantityLine",
    "RotationEntrySnapshot",
    "Unit",
    "ClearResult",
    "GroceryCheckResult",
    "GroceryList",
    "GroceryRow",
    "Source",
]
