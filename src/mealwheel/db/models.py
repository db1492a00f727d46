"""SQLAlchemy models representing Mealwheel persistence tables."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from mealwheel.models.catalog import HouseholdCategory, IngredientCategory, Unit


def _enum_column(enum_cls: type, name: str) -> Enum:
    # Store enum values ("with_love"), not member names ("WITH_LOVE").
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
    )


class Base(DeclarativeBase):
    """Declarative base class for Mealwheel ORM models."""


class UserORM(Base):
    """Allow-listed account, created on first sign-in."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )


class IngredientORM(Base):
    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[IngredientCategory] = mapped_column(
        _enum_column(IngredientCategory, "ingredient_category"),
        nullable=False,
        default=IngredientCategory.OTHER,
    )

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_ingredients_user_name"),)


class MealORM(Base):
    """Meal in a user's meal bank."""

    __tablename__ = "meals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    servings: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )

    ingredients: Mapped[List["MealIngredientORM"]] = relationship(
        back_populates="meal",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_meals_user_name"),)


class MealIngredientORM(Base):
    """Per-meal quantity of an ingredient."""

    __tablename__ = "meal_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("meals.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False
    )
    quantity_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    quantity_unit: Mapped[Optional[Unit]] = mapped_column(
        _enum_column(Unit, "quantity_unit"), nullable=True
    )

    meal: Mapped[MealORM] = relationship(back_populates="ingredients")
    ingredient: Mapped[IngredientORM] = relationship()


class RotationEntryORM(Base):
    """Meal scheduled into one week of the rotation."""

    __tablename__ = "rotation_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    week_number: Mapped[int] = mapped_column(Integer, nullable=False)
    meal_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("meals.id", ondelete="SET NULL"), nullable=True
    )
    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    meal: Mapped[Optional[MealORM]] = relationship()

    __table_args__ = (Index("idx_rotation_entries_user_week", "user_id", "week_number"),)


class HouseholdItemORM(Base):
    __tablename__ = "household_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[HouseholdCategory] = mapped_column(
        _enum_column(HouseholdCategory, "household_category"),
        nullable=False,
        default=HouseholdCategory.OTHER,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_household_items_user_name"),)


class HouseholdGroupORM(Base):
    """Named bundle of recurring household items."""

    __tablename__ = "household_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[HouseholdCategory] = mapped_column(
        _enum_column(HouseholdCategory, "household_group_category"),
        nullable=False,
        default=HouseholdCategory.OTHER,
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    include_in_grocery_list: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    items: Mapped[List["HouseholdGroupItemORM"]] = relationship(
        back_populates="group",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_household_groups_user_name"),)


class HouseholdGroupItemORM(Base):
    __tablename__ = "household_group_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    group_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("household_groups.id", ondelete="CASCADE"), nullable=False
    )
    item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("household_items.id", ondelete="CASCADE"), nullable=False
    )
    quantity_value: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    quantity_unit: Mapped[Unit] = mapped_column(
        _enum_column(Unit, "household_quantity_unit"),
        nullable=False,
        default=Unit.UNIT,
    )

    group: Mapped[HouseholdGroupORM] = relationship(back_populates="items")
    item: Mapped[HouseholdItemORM] = relationship()


class GroceryCheckORM(Base):
    """Checked-off grocery row; absence of a row means unchecked."""

    __tablename__ = "grocery_checks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    item_key: Mapped[str] = mapped_column(String(255), nullable=False)
    checked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("user_id", "item_key", name="uq_grocery_checks_user_item"),)


__all__ = [
    "Base",
    "GroceryCheckORM",
    "HouseholdGroupItemORM",
    "HouseholdGroupORM",
    "HouseholdItemORM",
    "IngredientORM",
    "MealIngredientORM",
    "MealORM",
    "RotationEntryORM",
    "UserORM",
]
