"""Aggregation key derivation for grocery rows."""

from __future__ import annotations

from typing import Literal

HOUSEHOLD_PREFIX = "household:"

SourceType = Literal["meal", "household"]


def normalize_name(raw_name: str | None) -> str:
    """Trim a stored name for display; missing names become empty strings."""
    return (raw_name or "").strip()


def derive_key(source: SourceType, raw_name: str | None) -> str:
    """Return the case-insensitive aggregation key for an ingredient or household item.

    Household items are namespaced so that a meal ingredient and a household item
    sharing a name never merge. Blank names are not rejected here and aggregate
    under the degenerate ``""`` / ``"household:"`` keys.
    """
    key = normalize_name(raw_name).lower()
    if source == "household":
        return HOUSEHOLD_PREFIX + key
    return key


def normalize_check_key(item_key: str) -> str:
    """Normalize a client supplied item key before check-state storage or lookup."""
    normalized = (item_key or "").strip().lower()
    if not normalized:
        raise ValueError("itemKey must not be empty")
    return normalized


__all__ = ["HOUSEHOLD_PREFIX", "SourceType", "derive_key", "normalize_check_key", "normalize_name"]
