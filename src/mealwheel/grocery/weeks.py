"""Rotation week selection parsing."""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

ROTATION_WEEKS = (1, 2, 3, 4)

WeeksInput = Union[str, Iterable[Union[int, float, str]], None]


def _coerce_week(value: Union[int, float, str]) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    # "2.0" selects week 2; "2.5", "nan" and "inf" select nothing.
    return int(number) if number.is_integer() else None


def parse_weeks(raw: WeeksInput) -> List[int]:
    """Return the sorted, de-duplicated rotation weeks requested.

    Accepts a comma-separated string (``"1, 3"``) or an iterable of values.
    Unparseable and out-of-range weeks are dropped rather than rejected, and an
    empty selection falls back to every rotation week.
    """
    if raw is None:
        return list(ROTATION_WEEKS)
    values = raw.split(",") if isinstance(raw, str) else raw

    selected = set()
    for value in values:
        week = _coerce_week(value)
        if week in ROTATION_WEEKS:
            selected.add(week)

    return sorted(selected) if selected else list(ROTATION_WEEKS)


__all__ = ["ROTATION_WEEKS", "WeeksInput", "parse_weeks"]
