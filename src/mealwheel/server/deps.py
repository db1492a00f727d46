"""Dependency definitions for the Mealwheel API server."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, Request, status

from mealwheel.config import Settings, get_settings
from mealwheel.db.users import get_or_create_user
from mealwheel.grocery.service import GroceryListService, default_service

logger = logging.getLogger(__name__)

UserResolver = Callable[[str], int]


def get_grocery_service() -> GroceryListService:
    """Return the grocery service bound to the default SQLite storage."""

    return default_service()


def get_user_resolver() -> UserResolver:
    return get_or_create_user


def require_api_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


def get_current_user_id(
    request: Request,
    x_user: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    resolver: UserResolver = Depends(get_user_resolver),
) -> int:
    """Resolve the ``X-User`` header to a user id for allow-listed usernames."""

    username = (x_user or "").strip().lower()
    if not username or username not in settings.allowed_usernames:
        logger.info("Rejected request for unknown user %r", username or None)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    user_id = resolver(username)
    request.state.user_id = user_id
    return user_id
