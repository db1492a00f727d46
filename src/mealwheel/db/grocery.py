"""Grocery list persistence helpers."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.orm import joinedload, selectinload

from mealwheel.models.catalog import (
    HouseholdGroupSnapshot,
    MealSnapshot,
    QuantityLine,
    RotationEntrySnapshot,
)

from .models import (
    GroceryCheckORM,
    HouseholdGroupItemORM,
    HouseholdGroupORM,
    MealIngredientORM,
    MealORM,
    RotationEntryORM,
)
from .repository import session_scope


def _enum_value(value) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", value)


def _meal_line(row: MealIngredientORM) -> QuantityLine:
    return QuantityLine(
        name=row.ingredient.name,
        category=_enum_value(row.ingredient.category),
        quantity_value=row.quantity_value,
        quantity_unit=row.quantity_unit,
    )


def _household_line(row: HouseholdGroupItemORM) -> QuantityLine:
    return QuantityLine(
        name=row.item.name,
        category=_enum_value(row.item.category),
        quantity_value=row.quantity_value,
        quantity_unit=row.quantity_unit,
    )


def _to_meal(row: MealORM) -> MealSnapshot:
    return MealSnapshot(
        id=row.id,
        owner_id=row.user_id,
        name=row.name,
        servings=row.servings,
        ingredients=[_meal_line(line) for line in row.ingredients],
    )


def _to_entry(row: RotationEntryORM, user_id: int) -> RotationEntrySnapshot:
    meal = row.meal if row.meal is not None and row.meal.user_id == user_id else None
    return RotationEntrySnapshot(
        id=row.id,
        week_number=row.week_number,
        servings=row.servings,
        meal=_to_meal(meal) if meal is not None else None,
    )


def list_rotation_entries(user_id: int, weeks: Sequence[int]) -> List[RotationEntrySnapshot]:
    """Return the user's rotation entries for ``weeks`` with their meals resolved.

    Meals owned by another user are treated as unresolved.
    """

    with session_scope() as session:
        rows = (
            session.execute(
                select(RotationEntryORM)
                .where(
                    RotationEntryORM.user_id == user_id,
                    RotationEntryORM.week_number.in_(list(weeks)),
                )
                .order_by(RotationEntryORM.week_number.asc(), RotationEntryORM.id.asc())
                .options(
                    selectinload(RotationEntryORM.meal)
                    .selectinload(MealORM.ingredients)
                    .joinedload(MealIngredientORM.ingredient)
                )
            )
            .scalars()
            .all()
        )
        return [_to_entry(row, user_id) for row in rows]


def list_eligible_household_groups(user_id: int) -> List[HouseholdGroupSnapshot]:
    """Return household groups flagged for inclusion in the grocery list."""

    with session_scope() as session:
        rows = (
            session.execute(
                select(HouseholdGroupORM)
                .where(
                    HouseholdGroupORM.user_id == user_id,
                    HouseholdGroupORM.include_in_grocery_list.is_(True),
                )
                .order_by(HouseholdGroupORM.id.asc())
                .options(
                    selectinload(HouseholdGroupORM.items).joinedload(HouseholdGroupItemORM.item)
                )
            )
            .scalars()
            .all()
        )
        return [
            HouseholdGroupSnapshot(
                name=row.name,
                items=[_household_line(item) for item in row.items],
            )
            for row in rows
        ]


def get_checked_keys(user_id: int, keys: Iterable[str]) -> Set[str]:
    wanted = list(keys)
    if not wanted:
        return set()
    with session_scope() as session:
        rows = session.execute(
            select(GroceryCheckORM.item_key).where(
                GroceryCheckORM.user_id == user_id,
                GroceryCheckORM.item_key.in_(wanted),
                GroceryCheckORM.checked.is_(True),
            )
        ).scalars()
        return set(rows)


def upsert_check(user_id: int, item_key: str) -> None:
    """Mark ``item_key`` checked; concurrent duplicates resolve to a single row."""

    statement = insert(GroceryCheckORM).values(user_id=user_id, item_key=item_key, checked=True)
    statement = statement.on_conflict_do_update(
        index_elements=[GroceryCheckORM.user_id, GroceryCheckORM.item_key],
        set_={"checked": True, "updated_at": func.now()},
    )
    with session_scope() as session:
        session.execute(statement)


def delete_check(user_id: int, item_key: str) -> None:
    with session_scope() as session:
        session.execute(
            delete(GroceryCheckORM).where(
                GroceryCheckORM.user_id == user_id,
                GroceryCheckORM.item_key == item_key,
            )
        )


def delete_all_checks(user_id: int) -> None:
    with session_scope() as session:
        session.execute(delete(GroceryCheckORM).where(GroceryCheckORM.user_id == user_id))


def count_checks(user_id: int) -> int:
    with session_scope() as session:
        return session.execute(
            select(func.count(GroceryCheckORM.id)).where(GroceryCheckORM.user_id == user_id)
        ).scalar_one()


class SqlGroceryStorage:
    """Grocery storage collaborator backed by the SQLite repository."""

    def list_rotation_entries(
        self, user_id: int, weeks: Sequence[int]
    ) -> List[RotationEntrySnapshot]:
        return list_rotation_entries(user_id, weeks)

    def list_eligible_household_groups(self, user_id: int) -> List[HouseholdGroupSnapshot]:
        return list_eligible_household_groups(user_id)

    def get_checked_keys(self, user_id: int, keys: Iterable[str]) -> Set[str]:
        return get_checked_keys(user_id, keys)

    def upsert_check(self, user_id: int, item_key: str) -> None:
        upsert_check(user_id, item_key)

    def delete_check(self, user_id: int, item_key: str) -> None:
        delete_check(user_id, item_key)

    def delete_all_checks(self, user_id: int) -> None:
        delete_all_checks(user_id)


__all__ = [
    "SqlGroceryStorage",
    "count_checks",
    "delete_all_checks",
    "delete_check",
    "get_checked_keys",
    "list_eligible_household_groups",
    "list_rotation_entries",
    "upsert_check",
]
