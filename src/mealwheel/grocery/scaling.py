"""Serving-size scaling for rotation entries."""

from __future__ import annotations

from typing import Optional


def scale_factor(entry_servings: Optional[float], meal_base_servings: Optional[float]) -> float:
    """Ratio between the servings requested on a rotation entry and the meal's base servings.

    A missing or zero base is treated as one serving; a missing entry override
    uses the recipe as written. Inputs are assumed to be validated upstream.
    """
    base = meal_base_servings or 1
    if not entry_servings:
        return 1.0
    return entry_servings / base


__all__ = ["scale_factor"]
