"""User lookup helpers."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert

from .models import UserORM
from .repository import session_scope


def get_or_create_user(username: str) -> int:
    """Return the id for ``username`` (lower-cased), creating the row on first use."""

    normalized = username.strip().lower()
    if not normalized:
        raise ValueError("username must not be empty")

    with session_scope() as session:
        session.execute(
            insert(UserORM).values(username=normalized).on_conflict_do_nothing(
                index_elements=[UserORM.username]
            )
        )
        return session.execute(
            select(UserORM.id).where(UserORM.username == normalized)
        ).scalar_one()


def find_user_id(username: str) -> Optional[int]:
    with session_scope() as session:
        return session.execute(
            select(UserORM.id).where(UserORM.username == username.strip().lower())
        ).scalar_one_or_none()


__all__ = ["find_user_id", "get_or_create_user"]
