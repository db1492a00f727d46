"""Grocery list facade combining storage reads, aggregation and check state."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from mealwheel import metrics
from mealwheel.models.grocery import ClearResult, GroceryCheckResult, GroceryList

from .aggregator import aggregate
from .checks import clear_all, merge_check_state, set_check
from .grouping import group_by_category
from .storage import GroceryStorage
from .weeks import WeeksInput, parse_weeks

logger = logging.getLogger(__name__)


class GroceryListError(RuntimeError):
    """Raised when the storage collaborator fails while serving a grocery request."""


class GroceryListService:
    def __init__(self, storage: GroceryStorage) -> None:
        self.storage = storage

    def get_grocery_list(self, user_id: int, weeks: WeeksInput = None) -> GroceryList:
        """Build the categorized grocery list for ``user_id`` over the requested weeks."""

        selected = parse_weeks(weeks)
        try:
            entries = self.storage.list_rotation_entries(user_id, selected)
            groups = self.storage.list_eligible_household_groups(user_id)
            items = aggregate(entries, groups, user_id=user_id)
            checked = merge_check_state(set(items), user_id, self.storage)
        except SQLAlchemyError as exc:
            metrics.GROCERY_LIST_BUILDS.labels(outcome="error").inc()
            logger.exception(
                "Grocery list build failed",
                extra={"user_id": user_id, "weeks": selected},
            )
            raise GroceryListError("Unable to build grocery list") from exc

        metrics.GROCERY_LIST_BUILDS.labels(outcome="success").inc()
        metrics.GROCERY_LIST_ROWS.observe(len(items))
        logger.debug(
            "Built grocery list user=%s weeks=%s entries=%s groups=%s rows=%s checked=%s",
            user_id,
            selected,
            len(entries),
            len(groups),
            len(items),
            len(checked),
        )
        return GroceryList(weeks=selected, items=group_by_category(items, checked))

    def set_grocery_check(self, user_id: int, item_key: str, checked: bool) -> GroceryCheckResult:
        try:
            key = set_check(self.storage, user_id, item_key, checked)
        except SQLAlchemyError as exc:
            logger.exception("Saving grocery check failed", extra={"user_id": user_id})
            raise GroceryListError("Unable to update grocery checks") from exc

        metrics.GROCERY_CHECKS.labels(action="check" if checked else "uncheck").inc()
        return GroceryCheckResult(item_key=key, checked=checked)

    def clear_grocery_checks(self, user_id: int) -> ClearResult:
        try:
            clear_all(self.storage, user_id)
        except SQLAlchemyError as exc:
            logger.exception("Clearing grocery checks failed", extra={"user_id": user_id})
            raise GroceryListError("Unable to update grocery checks") from exc

        metrics.GROCERY_CHECKS.labels(action="clear").inc()
        logger.info("Cleared grocery checks for user %s", user_id)
        return ClearResult(cleared=True)


def default_service(storage: Optional[GroceryStorage] = None) -> GroceryListService:
    """Service bound to ``storage``, or to the SQLAlchemy-backed store by default."""
    if storage is None:
        from mealwheel.db.grocery import SqlGroceryStorage

        storage = SqlGroceryStorage()
    return GroceryListService(storage)


__all__ = ["GroceryListError", "GroceryListService", "default_service"]
