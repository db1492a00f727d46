"""Meal, rotation and household snapshot models consumed by the grocery engine."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Unit(str, Enum):
    """Measurement units accepted on meal ingredients and household items."""

    UNIT = "unit"
    CUP = "cup"
    TBSP = "tbsp"
    TSP = "tsp"
    ML = "ml"
    L = "l"
    G = "g"
    KG = "kg"
    WITH_LOVE = "with_love"

    @property
    def label(self) -> str:
        """Display text for the unit."""
        if self is Unit.WITH_LOVE:
            return "with love"
        return self.value


class IngredientCategory(str, Enum):
    PRODUCE = "produce"
    MEATS = "meats"
    SEAFOOD = "seafood"
    DAIRY = "dairy"
    PANTRY = "pantry"
    FROZEN = "frozen"
    BAKERY = "bakery"
    BEVERAGES = "beverages"
    OTHER = "other"


class HouseholdCategory(str, Enum):
    HOUSEHOLD = "household"
    PERSONAL_CARE = "personal_care"
    PETS = "pets"
    CLEANING = "cleaning"
    PAPER_GOODS = "paper_goods"
    PANTRY = "pantry"
    OTHER = "other"


class QuantityLine(BaseModel):
    """One ingredient (or household item) with its per-meal quantity pair."""

    name: str
    category: Optional[str] = Field(default=None)
    quantity_value: Optional[float] = Field(default=None)
    quantity_unit: Optional[Unit] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class MealSnapshot(BaseModel):
    """Meal as resolved for a rotation entry."""

    id: int
    owner_id: int
    name: str
    servings: Optional[int] = Field(default=None)
    ingredients: list[QuantityLine] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class RotationEntrySnapshot(BaseModel):
    """Scheduled meal occurrence; ``meal`` is None when the reference did not resolve."""

    id: Optional[int] = Field(default=None)
    week_number: int = Field(ge=1, le=4)
    servings: Optional[int] = Field(default=None)
    meal: Optional[MealSnapshot] = Field(default=None)

    model_config = ConfigDict(frozen=True)


class HouseholdGroupSnapshot(BaseModel):
    """Household group already filtered to those included in the grocery list."""

    name: str
    items: list[QuantityLine] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


__all__ = [
    "HouseholdCategory",
    "HouseholdGroupSnapshot",
    "IngredientCategory",
    "MealSnapshot",
    "QuantityLine",
    "RotationEntrySnapshot",
    "Unit",
]
