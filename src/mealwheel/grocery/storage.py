"""Storage collaborator contract required by the grocery engine."""

from __future__ import annotations

from typing import AbstractSet, Iterable, List, Protocol, Sequence, Set

from mealwheel.models.catalog import HouseholdGroupSnapshot, RotationEntrySnapshot


class GroceryStorage(Protocol):
    """Read access to rotation/household snapshots plus the keyed check store."""

    def list_rotation_entries(
        self, user_id: int, weeks: Sequence[int]
    ) -> List[RotationEntrySnapshot]:
        """Entries for ``weeks``; ``meal`` is None unless the meal belongs to ``user_id``."""

    def list_eligible_household_groups(self, user_id: int) -> List[HouseholdGroupSnapshot]:
        """Groups flagged for inclusion in the grocery list."""

    def get_checked_keys(self, user_id: int, keys: Iterable[str]) -> Set[str]:
        ...

    def upsert_check(self, user_id: int, item_key: str) -> None:
        ...

    def delete_check(self, user_id: int, item_key: str) -> None:
        ...

    def delete_all_checks(self, user_id: int) -> None:
        ...


class InMemoryGroceryStorage:
    """Dictionary backed storage for tests and callers without a database."""

    def __init__(
        self,
        entries: Iterable[RotationEntrySnapshot] = (),
        groups: Iterable[HouseholdGroupSnapshot] = (),
    ) -> None:
        self.entries = list(entries)
        self.groups = list(groups)
        self.checks: dict[int, set[str]] = {}

    def list_rotation_entries(
        self, user_id: int, weeks: Sequence[int]
    ) -> List[RotationEntrySnapshot]:
        requested: AbstractSet[int] = set(weeks)
        return [entry for entry in self.entries if entry.week_number in requested]

    def list_eligible_household_groups(self, user_id: int) -> List[HouseholdGroupSnapshot]:
        return list(self.groups)

    def get_checked_keys(self, user_id: int, keys: Iterable[str]) -> Set[str]:
        return self.checks.get(user_id, set()) & set(keys)

    def upsert_check(self, user_id: int, item_key: str) -> None:
        self.checks.setdefault(user_id, set()).add(item_key)

    def delete_check(self, user_id: int, item_key: str) -> None:
        self.checks.get(user_id, set()).discard(item_key)

    def delete_all_checks(self, user_id: int) -> None:
        self.checks.pop(user_id, None)


__all__ = ["GroceryStorage", "InMemoryGroceryStorage"]
