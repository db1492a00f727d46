"""Tests for merging rotation meals and household groups into grocery aggregates."""

from __future__ import annotations

from mealwheel.grocery.aggregator import DEFAULT_CATEGORY, GroceryAggregator, aggregate
from mealwheel.models.catalog import (
    HouseholdGroupSnapshot,
    MealSnapshot,
    QuantityLine,
    RotationEntrySnapshot,
    Unit,
)


def test_aggregate_scales_and_merges_meal_ingredients(sample_entries):
    items = aggregate(sample_entries, [], user_id=1)

    flour = items["flour"]
    assert flour.per_unit_totals == {"cup": 4.0}
    assert flour.contributing_names == ["Pancakes"]

    eggs = items["eggs"]
    assert eggs.display_name == "Eggs"
    assert eggs.per_unit_totals == {"unit": 7.0}
    assert eggs.contributing_names == ["Pancakes", "Fried Rice"]


def test_unquantified_ingredient_in_two_meals_stays_as_needed(sample_entries):
    salt = aggregate(sample_entries, [])["salt"]

    assert salt.per_unit_totals == {"unit": None}
    assert salt.contributing_names == ["Pancakes", "Fried Rice"]
    assert salt.category == "pantry"


def test_household_items_never_merge_with_meal_ingredients(sample_entries, pantry_group):
    items = aggregate(sample_entries, [pantry_group], user_id=1)

    assert items["rice"].per_unit_totals == {"cup": 1.0}
    assert items["rice"].source == "meal"
    household_rice = items["household:rice"]
    assert household_rice.per_unit_totals == {"kg": 1.0}
    assert household_rice.source == "household"
    assert household_rice.contributing_names == ["Pantry staples"]


def test_household_items_are_not_scaled(pantry_group):
    aggregator = GroceryAggregator()
    aggregator.add_household_group(pantry_group)
    aggregator.add_household_group(pantry_group)

    towels = aggregator.items["household:paper towels"]
    assert towels.per_unit_totals == {"unit": 4.0}
    assert towels.contributing_names == ["Pantry staples"]


def test_same_meal_in_two_weeks_counts_twice_but_lists_once(pancakes):
    entries = [
        RotationEntrySnapshot(id=1, week_number=1, meal=pancakes),
        RotationEntrySnapshot(id=2, week_number=3, meal=pancakes),
    ]

    flour = aggregate(entries, [])["flour"]
    assert flour.per_unit_totals == {"cup": 4.0}
    assert flour.contributing_names == ["Pancakes"]


def test_entries_without_resolvable_meal_are_skipped(pancakes):
    foreign = pancakes.model_copy(update={"owner_id": 2})
    entries = [
        RotationEntrySnapshot(id=1, week_number=1, meal=None),
        RotationEntrySnapshot(id=2, week_number=1, meal=foreign),
    ]

    aggregator = GroceryAggregator()
    assert [aggregator.add_rotation_entry(entry, user_id=1) for entry in entries] == [False, False]
    assert aggregator.items == {}


def test_first_seen_name_and_category_win():
    meal = MealSnapshot(
        id=1,
        owner_id=1,
        name="Salad",
        servings=1,
        ingredients=[
            QuantityLine(name=" Tomato", category="produce", quantity_value=1),
            QuantityLine(name="tomato", category="pantry", quantity_value=2),
        ],
    )

    tomato = aggregate([RotationEntrySnapshot(week_number=2, meal=meal)], [])["tomato"]
    assert tomato.display_name == "Tomato"
    assert tomato.category == "produce"
    assert tomato.per_unit_totals == {"unit": 3.0}


def test_missing_category_and_unit_use_defaults():
    group = HouseholdGroupSnapshot(
        name="Odds and ends",
        items=[QuantityLine(name="Batteries", quantity_value=4)],
    )

    batteries = aggregate([], [group])["household:batteries"]
    assert batteries.category == DEFAULT_CATEGORY
    assert batteries.per_unit_totals == {Unit.UNIT.value: 4.0}


def test_units_are_not_converted():
    meal = MealSnapshot(
        id=1,
        owner_id=1,
        name="Stew",
        servings=2,
        ingredients=[
            QuantityLine(name="Beef", quantity_value=400, quantity_unit=Unit.G),
            QuantityLine(name="Beef", quantity_value=1, quantity_unit=Unit.KG),
        ],
    )

    beef = aggregate([RotationEntrySnapshot(week_number=1, meal=meal)], [])["beef"]
    assert beef.per_unit_totals == {"g": 400.0, "kg": 1.0}
