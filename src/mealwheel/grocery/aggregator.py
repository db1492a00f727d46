"""Merge rotation meals and household groups into per-key grocery aggregates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from mealwheel.models.catalog import (
    HouseholdGroupSnapshot,
    QuantityLine,
    RotationEntrySnapshot,
    Unit,
)
from mealwheel.models.grocery import Source

from .keys import SourceType, derive_key, normalize_name
from .quantities import UnitTotals, fold_quantity
from .scaling import scale_factor

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "other"


@dataclass
class AggregatedItem:
    """Running totals for one grocery row.

    ``display_name`` and ``category`` come from the first contribution seen for the key.
    """

    item_key: str
    display_name: str
    category: str
    source: Source
    per_unit_totals: UnitTotals = field(default_factory=dict)
    contributing_names: List[str] = field(default_factory=list)

    def add_contributor(self, name: str) -> None:
        if name not in self.contributing_names:
            self.contributing_names.append(name)


class GroceryAggregator:
    """Accumulates quantity lines keyed by their aggregation key."""

    def __init__(self) -> None:
        self.items: Dict[str, AggregatedItem] = {}

    def add_line(
        self,
        source: SourceType,
        line: QuantityLine,
        contributor: str,
        scale: float = 1.0,
    ) -> AggregatedItem:
        key = derive_key(source, line.name)
        item = self.items.get(key)
        if item is None:
            item = AggregatedItem(
                item_key=key,
                display_name=normalize_name(line.name),
                category=line.category or DEFAULT_CATEGORY,
                source=source,
            )
            self.items[key] = item

        item.add_contributor(contributor)
        unit = (line.quantity_unit or Unit.UNIT).value
        fold_quantity(item.per_unit_totals, unit, line.quantity_value, scale)
        return item

    def add_rotation_entry(self, entry: RotationEntrySnapshot, user_id: Optional[int] = None) -> bool:
        """Fold a rotation entry's meal; returns False when the entry was skipped."""
        meal = entry.meal
        if meal is None:
            logger.debug("Skipping rotation entry %s without a resolvable meal", entry.id)
            return False
        if user_id is not None and meal.owner_id != user_id:
            logger.debug(
                "Skipping rotation entry %s referencing meal %s owned by another user",
                entry.id,
                meal.id,
            )
            return False

        scale = scale_factor(entry.servings, meal.servings)
        for line in meal.ingredients:
            self.add_line("meal", line, meal.name, scale)
        return True

    def add_household_group(self, group: HouseholdGroupSnapshot) -> None:
        # Household items are never serving-scaled.
        for line in group.items:
            self.add_line("household", line, group.name)


def aggregate(
    entries: Iterable[RotationEntrySnapshot],
    groups: Iterable[HouseholdGroupSnapshot],
    user_id: Optional[int] = None,
) -> Dict[str, AggregatedItem]:
    """Aggregate rotation meals and household groups into a key -> item mapping.

    ``entries`` should already be filtered to the requested weeks and ``groups``
    to those included in the grocery list. When ``user_id`` is given, meals
    owned by anyone else are ignored.
    """
    aggregator = GroceryAggregator()
    for entry in entries:
        aggregator.add_rotation_entry(entry, user_id)
    for group in groups:
        aggregator.add_household_group(group)
    return aggregator.items


__all__ = ["AggregatedItem", "DEFAULT_CATEGORY", "GroceryAggregator", "aggregate"]
