"""Tests for serving-size scaling."""

from __future__ import annotations

import pytest

from mealwheel.grocery.scaling import scale_factor


@pytest.mark.parametrize(
    ("entry_servings", "base_servings", "expected"),
    [
        (4, 2, 2.0),
        (1, 4, 0.25),
        (2, 2, 1.0),
        (None, 4, 1.0),
        (0, 4, 1.0),
        (3, None, 3.0),
        (3, 0, 3.0),
    ],
)
def test_scale_factor(entry_servings, base_servings, expected):
    assert scale_factor(entry_servings, base_servings) == pytest.approx(expected)
