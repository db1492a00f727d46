"""Tests for the SQLite-backed grocery storage helpers."""

from __future__ import annotations

import pytest

from mealwheel.db.catalog import (
    add_rotation_entry,
    create_household_group,
    create_meal,
    delete_meal,
)
from mealwheel.db.grocery import (
    count_checks,
    delete_all_checks,
    delete_check,
    get_checked_keys,
    list_eligible_household_groups,
    list_rotation_entries,
    upsert_check,
)
from mealwheel.db.users import find_user_id, get_or_create_user
from mealwheel.models.catalog import Unit

PANCAKES = [
    {"name": "Flour", "category": "pantry", "quantity_value": 2, "quantity_unit": "cup"},
    {"name": "Salt", "category": "pantry", "quantity_value": None, "quantity_unit": None},
]


def test_get_or_create_user_is_idempotent_and_case_insensitive():
    first = get_or_create_user("Kuato")
    assert get_or_create_user("kuato ") == first
    assert find_user_id("KUATO") == first
    assert find_user_id("noodle") is None

    with pytest.raises(ValueError):
        get_or_create_user("   ")


def test_rotation_entries_resolve_meals_for_requested_weeks():
    user_id = get_or_create_user("kuato")
    meal_id = create_meal(user_id, "Pancakes", servings=2, ingredients=PANCAKES)
    add_rotation_entry(user_id, meal_id, 1, servings=4)
    add_rotation_entry(user_id, meal_id, 3)

    entries = list_rotation_entries(user_id, [1, 2])
    assert len(entries) == 1
    entry = entries[0]
    assert entry.week_number == 1
    assert entry.servings == 4
    assert entry.meal is not None
    assert entry.meal.name == "Pancakes"
    assert entry.meal.servings == 2

    flour, salt = entry.meal.ingredients
    assert (flour.name, flour.category, flour.quantity_value, flour.quantity_unit) == (
        "Flour",
        "pantry",
        2.0,
        Unit.CUP,
    )
    assert salt.quantity_value is None
    assert salt.quantity_unit is None

    assert [entry.week_number for entry in list_rotation_entries(user_id, [1, 2, 3, 4])] == [1, 3]


def test_rotation_entries_never_expose_other_users_meals():
    kuato = get_or_create_user("kuato")
    noodle = get_or_create_user("noodle")
    foreign_meal = create_meal(noodle, "Noodle Soup", ingredients=PANCAKES)
    add_rotation_entry(kuato, foreign_meal, 2)

    (entry,) = list_rotation_entries(kuato, [2])
    assert entry.meal is None
    assert list_rotation_entries(noodle, [2]) == []


def test_deleted_meal_leaves_dangling_entry():
    user_id = get_or_create_user("kuato")
    meal_id = create_meal(user_id, "Pancakes", ingredients=PANCAKES)
    add_rotation_entry(user_id, meal_id, 1)

    delete_meal(meal_id)

    (entry,) = list_rotation_entries(user_id, [1])
    assert entry.meal is None


def test_rotation_entry_validation():
    user_id = get_or_create_user("kuato")
    meal_id = create_meal(user_id, "Pancakes")

    with pytest.raises(ValueError):
        add_rotation_entry(user_id, meal_id, 5)
    with pytest.raises(ValueError):
        add_rotation_entry(user_id, meal_id, 1, servings=0)


def test_only_included_household_groups_are_listed():
    user_id = get_or_create_user("kuato")
    create_household_group(
        user_id,
        "Dog essentials",
        category="pets",
        items=[{"name": "Dog Food", "category": "pets", "quantity_value": 1, "quantity_unit": "kg"}],
    )
    create_household_group(
        user_id,
        "Cleaning cupboard",
        category="cleaning",
        include_in_grocery_list=False,
        items=[{"name": "Dish Soap", "category": "cleaning", "quantity_value": 1}],
    )

    (group,) = list_eligible_household_groups(user_id)
    assert group.name == "Dog essentials"
    (item,) = group.items
    assert (item.name, item.category, item.quantity_unit) == ("Dog Food", "pets", Unit.KG)


def test_household_items_default_to_unit():
    user_id = get_or_create_user("kuato")
    create_household_group(user_id, "Bathroom", items=[{"name": "Soap", "quantity_value": 2}])

    (group,) = list_eligible_household_groups(user_id)
    assert group.items[0].quantity_unit == Unit.UNIT
    assert group.items[0].category == "other"


def test_upsert_check_keeps_a_single_row():
    user_id = get_or_create_user("kuato")

    upsert_check(user_id, "flour")
    upsert_check(user_id, "flour")

    assert count_checks(user_id) == 1
    assert get_checked_keys(user_id, ["flour", "salt"]) == {"flour"}
    assert get_checked_keys(user_id, []) == set()


def test_delete_check_and_clear():
    kuato = get_or_create_user("kuato")
    noodle = get_or_create_user("noodle")
    upsert_check(kuato, "flour")
    upsert_check(kuato, "household:dog food")
    upsert_check(noodle, "flour")

    delete_check(kuato, "flour")
    delete_check(kuato, "never checked")
    assert get_checked_keys(kuato, ["flour", "household:dog food"]) == {"household:dog food"}

    delete_all_checks(kuato)
    assert count_checks(kuato) == 0
    assert count_checks(noodle) == 1
