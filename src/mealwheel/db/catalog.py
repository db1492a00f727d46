"""Write helpers for meals, rotation entries and household groups.

These back the demo seeding command and the test-suite; the grocery engine
itself only reads this data.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from mealwheel.grocery.weeks import ROTATION_WEEKS
from mealwheel.models.catalog import HouseholdCategory, IngredientCategory, Unit

from .models import (
    HouseholdGroupItemORM,
    HouseholdGroupORM,
    HouseholdItemORM,
    IngredientORM,
    MealIngredientORM,
    MealORM,
    RotationEntryORM,
)
from .repository import session_scope

LineInput = Mapping[str, object]


def _unit(value: object) -> Optional[Unit]:
    if value is None or value == "":
        return None
    return Unit(value)


def _quantity(value: object) -> Optional[float]:
    return float(value) if value is not None else None  # type: ignore[arg-type]


def _get_or_create_ingredient(
    session: Session, user_id: int, name: str, category: object
) -> IngredientORM:
    existing = session.execute(
        select(IngredientORM).where(IngredientORM.user_id == user_id, IngredientORM.name == name)
    ).scalar_one_or_none()
    if existing:
        return existing
    ingredient = IngredientORM(
        user_id=user_id,
        name=name,
        category=IngredientCategory(category or IngredientCategory.OTHER),
    )
    session.add(ingredient)
    session.flush()
    return ingredient


def _get_or_create_household_item(
    session: Session, user_id: int, name: str, category: object
) -> HouseholdItemORM:
    existing = session.execute(
        select(HouseholdItemORM).where(
            HouseholdItemORM.user_id == user_id, HouseholdItemORM.name == name
        )
    ).scalar_one_or_none()
    if existing:
        return existing
    item = HouseholdItemORM(
        user_id=user_id,
        name=name,
        category=HouseholdCategory(category or HouseholdCategory.OTHER),
    )
    session.add(item)
    session.flush()
    return item


def create_meal(
    user_id: int,
    name: str,
    *,
    servings: int = 2,
    ingredients: Iterable[LineInput] = (),
    notes: Optional[str] = None,
) -> int:
    """Create a meal; ingredient mappings carry ``name``, ``category``, ``quantity_value``, ``quantity_unit``."""

    with session_scope() as session:
        meal = MealORM(user_id=user_id, name=name, servings=servings, notes=notes)
        session.add(meal)
        for line in ingredients:
            ingredient = _get_or_create_ingredient(
                session, user_id, str(line["name"]), line.get("category")
            )
            meal.ingredients.append(
                MealIngredientORM(
                    ingredient=ingredient,
                    quantity_value=_quantity(line.get("quantity_value")),
                    quantity_unit=_unit(line.get("quantity_unit")),
                )
            )
        session.flush()
        return meal.id


def add_rotation_entry(
    user_id: int,
    meal_id: Optional[int],
    week_number: int,
    servings: Optional[int] = None,
) -> int:
    if week_number not in ROTATION_WEEKS:
        raise ValueError(f"week_number must be one of {ROTATION_WEEKS}, got {week_number}")
    if servings is not None and servings < 1:
        raise ValueError("servings must be positive")

    with session_scope() as session:
        entry = RotationEntryORM(
            user_id=user_id,
            meal_id=meal_id,
            week_number=week_number,
            servings=servings,
        )
        session.add(entry)
        session.flush()
        return entry.id


def create_household_group(
    user_id: int,
    name: str,
    *,
    items: Iterable[LineInput] = (),
    category: object = HouseholdCategory.OTHER,
    include_in_grocery_list: bool = True,
    notes: Optional[str] = None,
) -> int:
    with session_scope() as session:
        group = HouseholdGroupORM(
            user_id=user_id,
            name=name,
            category=HouseholdCategory(category),
            include_in_grocery_list=include_in_grocery_list,
            notes=notes,
        )
        session.add(group)
        for line in items:
            item = _get_or_create_household_item(
                session, user_id, str(line["name"]), line.get("category")
            )
            group.items.append(
                HouseholdGroupItemORM(
                    item=item,
                    quantity_value=_quantity(line.get("quantity_value")),
                    quantity_unit=_unit(line.get("quantity_unit")) or Unit.UNIT,
                )
            )
        session.flush()
        return group.id


def delete_meal(meal_id: int) -> None:
    """Remove a meal; rotation entries that referenced it are left dangling."""

    with session_scope() as session:
        row = session.get(MealORM, meal_id)
        if row is None:
            raise ValueError(f"Meal {meal_id} not found")
        session.delete(row)


__all__ = ["add_rotation_entry", "create_household_group", "create_meal", "delete_meal"]
