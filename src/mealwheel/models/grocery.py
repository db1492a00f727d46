"""Grocery list response models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Source = Literal["meal", "household"]


class GroceryRow(BaseModel):
    """Single aggregated line of the grocery list."""

    item_key: str
    checked: bool = Field(default=False)
    name: str
    combined_quantity: str
    meals: list[str] = Field(default_factory=list)
    totals: dict[str, Optional[float]] = Field(default_factory=dict)
    source: Source

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class GroceryList(BaseModel):
    """Grocery rows grouped by category for the requested rotation weeks."""

    weeks: list[int]
    items: dict[str, list[GroceryRow]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class GroceryCheckResult(BaseModel):
    item_key: str
    checked: bool

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ClearResult(BaseModel):
    cleared: bool = True

    model_config = ConfigDict(frozen=True)


__all__ = ["ClearResult", "GroceryCheckResult", "GroceryList", "GroceryRow", "Source"]
