"""Category grouping and ordering of aggregated grocery rows."""

from __future__ import annotations

import unicodedata
from typing import AbstractSet, Dict, List, Mapping, Tuple

from mealwheel.models.grocery import GroceryRow

from .aggregator import AggregatedItem
from .quantities import format_combined


def _fold_accents(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def display_sort_key(name: str) -> Tuple[str, str, str]:
    """Alphabetical ordering that ignores accents and case first.

    Ties are broken by case (lower-case first), then by the accented form,
    so "Éclair" sorts between "apple" and "Fig".
    """
    plain = _fold_accents(name)
    return plain.casefold(), plain.swapcase(), name.casefold()


def to_row(item: AggregatedItem, checked: bool) -> GroceryRow:
    return GroceryRow(
        item_key=item.item_key,
        checked=checked,
        name=item.display_name,
        combined_quantity=format_combined(item.per_unit_totals),
        meals=list(item.contributing_names),
        totals=dict(item.per_unit_totals),
        source=item.source,
    )


def group_by_category(
    items: Mapping[str, AggregatedItem],
    checked_keys: AbstractSet[str],
) -> Dict[str, List[GroceryRow]]:
    """Bucket rows by category, each bucket sorted by display name.

    Only categories with at least one row appear in the result.
    """
    grouped: Dict[str, List[GroceryRow]] = {}
    for item in items.values():
        grouped.setdefault(item.category, []).append(to_row(item, item.item_key in checked_keys))

    for rows in grouped.values():
        rows.sort(key=lambda row: display_sort_key(row.name))
    return grouped


__all__ = ["display_sort_key", "group_by_category", "to_row"]
