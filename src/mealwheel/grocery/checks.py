"""Persisted check-off state for grocery rows."""

from __future__ import annotations

from typing import AbstractSet, Set

from .keys import normalize_check_key
from .storage import GroceryStorage


def merge_check_state(
    item_keys: AbstractSet[str],
    user_id: int,
    storage: GroceryStorage,
) -> Set[str]:
    """Return the subset of ``item_keys`` the user has checked off."""
    if not item_keys:
        return set()
    return set(storage.get_checked_keys(user_id, sorted(item_keys))) & set(item_keys)


def set_check(storage: GroceryStorage, user_id: int, item_key: str, checked: bool) -> str:
    """Check or uncheck ``item_key``; returns the normalized key.

    Unchecking deletes the stored row, so both directions are idempotent.
    """
    key = normalize_check_key(item_key)
    if checked:
        storage.upsert_check(user_id, key)
    else:
        storage.delete_check(user_id, key)
    return key


def clear_all(storage: GroceryStorage, user_id: int) -> None:
    storage.delete_all_checks(user_id)


__all__ = ["clear_all", "merge_check_state", "set_check"]
