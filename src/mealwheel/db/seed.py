"""Demo data for local development."""

from __future__ import annotations

import logging
from typing import Dict, Iterable

from sqlalchemy import select

from .catalog import add_rotation_entry, create_household_group, create_meal
from .models import MealORM
from .repository import session_scope
from .users import get_or_create_user

logger = logging.getLogger(__name__)

SAMPLE_MEALS = [
    {
        "name": "Avocado Toast",
        "servings": 2,
        "notes": "Whole grain toast with smashed avo and eggs.",
        "ingredients": [
            {"name": "Avocado", "quantity_value": 2, "quantity_unit": "unit", "category": "produce"},
            {"name": "Eggs", "quantity_value": 4, "quantity_unit": "unit", "category": "dairy"},
            {"name": "Sourdough Bread", "quantity_value": 4, "quantity_unit": "unit", "category": "bakery"},
            {"name": "Cherry Tomatoes", "quantity_value": 1, "quantity_unit": "cup", "category": "produce"},
            {"name": "Salt", "quantity_value": None, "quantity_unit": "unit", "category": "pantry"},
        ],
    },
    {
        "name": "Lemon Herb Chicken",
        "servings": 4,
        "notes": "Sheet pan chicken with seasonal veg.",
        "ingredients": [
            {"name": "Chicken Thighs", "quantity_value": 1, "quantity_unit": "kg", "category": "meats"},
            {"name": "Lemon", "quantity_value": 2, "quantity_unit": "unit", "category": "produce"},
            {"name": "Green Beans", "quantity_value": 400, "quantity_unit": "g", "category": "produce"},
            {"name": "Olive Oil", "quantity_value": 2, "quantity_unit": "tbsp", "category": "pantry"},
            {"name": "Salt", "quantity_value": None, "quantity_unit": "unit", "category": "pantry"},
        ],
    },
    {
        "name": "Mediterranean Grain Bowl",
        "servings": 3,
        "ingredients": [
            {"name": "Quinoa", "quantity_value": 2, "quantity_unit": "cup", "category": "pantry"},
            {"name": "Cucumber", "quantity_value": 1, "quantity_unit": "unit", "category": "produce"},
            {"name": "Cherry Tomatoes", "quantity_value": 1, "quantity_unit": "cup", "category": "produce"},
            {"name": "Feta Cheese", "quantity_value": 0.5, "quantity_unit": "cup", "category": "dairy"},
            {"name": "Chickpeas", "quantity_value": 1, "quantity_unit": "unit", "category": "pantry"},
        ],
    },
]

SAMPLE_HOUSEHOLD_GROUPS = [
    {
        "name": "Dog essentials",
        "category": "pets",
        "items": [
            {"name": "Dog Food", "quantity_value": 1, "quantity_unit": "kg", "category": "pets"},
            {"name": "Poop Bags", "quantity_value": None, "quantity_unit": "unit", "category": "pets"},
        ],
    },
    {
        "name": "Cleaning cupboard",
        "category": "cleaning",
        "include_in_grocery_list": False,
        "items": [
            {"name": "Dish Soap", "quantity_value": 1, "quantity_unit": "unit", "category": "cleaning"},
        ],
    },
]

# (meal name, week, servings override)
SAMPLE_ROTATION = [
    ("Avocado Toast", 1, None),
    ("Lemon Herb Chicken", 1, 2),
    ("Mediterranean Grain Bowl", 2, 6),
    ("Lemon Herb Chicken", 3, None),
]


def _has_meals(user_id: int) -> bool:
    with session_scope() as session:
        return (
            session.execute(select(MealORM.id).where(MealORM.user_id == user_id).limit(1)).first()
            is not None
        )


def seed_user(user_id: int) -> None:
    meal_ids: Dict[str, int] = {}
    for meal in SAMPLE_MEALS:
        meal_ids[meal["name"]] = create_meal(
            user_id,
            meal["name"],
            servings=meal["servings"],
            ingredients=meal["ingredients"],
            notes=meal.get("notes"),
        )
    for meal_name, week, servings in SAMPLE_ROTATION:
        add_rotation_entry(user_id, meal_ids[meal_name], week, servings)
    for group in SAMPLE_HOUSEHOLD_GROUPS:
        create_household_group(
            user_id,
            group["name"],
            items=group["items"],
            category=group["category"],
            include_in_grocery_list=group.get("include_in_grocery_list", True),
        )


def seed_demo_data(usernames: Iterable[str]) -> Dict[str, int]:
    """Create users with sample meals, rotation and household groups; existing users are skipped."""

    seeded: Dict[str, int] = {}
    for username in usernames:
        user_id = get_or_create_user(username)
        if _has_meals(user_id):
            logger.info("User %s already has meals; skipping seed", username)
            continue
        seed_user(user_id)
        seeded[username] = user_id
        logger.info("Seeded demo data for %s (id=%s)", username, user_id)
    return seeded


__all__ = ["SAMPLE_HOUSEHOLD_GROUPS", "SAMPLE_MEALS", "SAMPLE_ROTATION", "seed_demo_data", "seed_user"]
