"""Per-unit quantity folding and display formatting.

Quantities are totalled per unit string exactly as stored. No conversion is
attempted between units, so ``g`` and ``kg`` (or ``cup`` and ``ml``) of the same
ingredient remain separate totals and render as ``"400 g + 1 kg"``.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional

from mealwheel.models.catalog import Unit

AS_NEEDED = "as needed"
SEGMENT_SEPARATOR = " + "

# unit -> running sum, or None when only unquantified ("as needed") contributions exist
UnitTotals = Dict[str, Optional[float]]


def fold_quantity(
    bucket: UnitTotals,
    unit: str,
    raw_value: Optional[float],
    scale: float = 1.0,
) -> UnitTotals:
    """Fold one (value, unit) contribution into ``bucket`` in place and return it.

    A missing value marks the unit as "as needed" only while it has no numeric
    total; it never erases an established sum and never counts as zero.
    """
    if raw_value is None:
        bucket.setdefault(unit, None)
        return bucket

    scaled = raw_value * scale
    current = bucket.get(unit)
    bucket[unit] = scaled if current is None else current + scaled
    return bucket


def unit_label(unit: str) -> str:
    try:
        return Unit(unit).label
    except ValueError:
        return unit


def format_number(value: float) -> str:
    """Render ``value`` with at most two decimals and no trailing zeros."""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.2f}".rstrip("0").rstrip(".")


def _format_segment(unit: str, value: Optional[float]) -> str:
    is_default_unit = unit == Unit.UNIT.value
    if value is None:
        return AS_NEEDED if is_default_unit else f"{AS_NEEDED} {unit_label(unit)}"
    number = format_number(value)
    return number if is_default_unit else f"{number} {unit_label(unit)}"


def format_combined(per_unit_totals: Mapping[str, Optional[float]]) -> str:
    """Render per-unit totals as one combined quantity string.

    Segments are ordered by unit name so the output is stable for identical
    totals, e.g. ``{"unit": 2, "cup": 1.5}`` renders ``"1.5 cup + 2"``.
    """
    if not per_unit_totals:
        return AS_NEEDED
    return SEGMENT_SEPARATOR.join(
        _format_segment(unit, per_unit_totals[unit]) for unit in sorted(per_unit_totals)
    )


__all__ = [
    "AS_NEEDED",
    "UnitTotals",
    "fold_quantity",
    "format_combined",
    "format_number",
    "unit_label",
]
