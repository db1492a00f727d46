"""Grocery-list aggregation engine."""

from mealwheel.grocery.aggregator import AggregatedItem, GroceryAggregator, aggregate
from mealwheel.grocery.checks import clear_all, merge_check_state, set_check
from mealwheel.grocery.grouping import group_by_category
from mealwheel.grocery.keys import derive_key, normalize_check_key
from mealwheel.grocery.quantities import fold_quantity, format_combined, format_number
from mealwheel.grocery.scaling import scale_factor
from mealwheel.grocery.service import GroceryListError, GroceryListService, default_service
from mealwheel.grocery.storage import GroceryStorage, InMemoryGroceryStorage
from mealwheel.grocery.weeks import ROTATION_WEEKS, parse_weeks

__all__ = [
    "AggregatedItem",
    "GroceryAggregator",
    "GroceryListError",
    "GroceryListService",
    "GroceryStorage",
    "InMemoryGroceryStorage",
    "ROTATION_WEEKS",
    "aggregate",
    "clear_all",
    "default_service",
    "derive_key",
    "fold_quantity",
    "format_combined",
    "format_number",
    "group_by_category",
    "merge_check_state",
    "normalize_check_key",
    "parse_weeks",
    "scale_factor",
    "set_check",
]
