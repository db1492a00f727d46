"""Shared SQLite engine and transactional sessions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from mealwheel.config import get_settings
from mealwheel.db.models import Base

logger = logging.getLogger(__name__)

_state: dict[str, object] = {}


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:  # noqa: ARG001
    # SQLite ignores ON DELETE actions unless enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(database_path: Optional[Path] = None) -> Engine:
    """Return the process-wide engine, creating the schema on first use."""

    engine = _state.get("engine")
    if isinstance(engine, Engine):
        return engine

    path = database_path or get_settings().database_path
    path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(f"sqlite:///{path}")
    event.listen(engine, "connect", _enable_foreign_keys)
    Base.metadata.create_all(engine, checkfirst=True)

    _state["engine"] = engine
    _state["sessions"] = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    logger.debug("Opened SQLite database at %s", path)
    return engine


def get_session() -> Session:
    if "sessions" not in _state:
        get_engine()
    factory: sessionmaker[Session] = _state["sessions"]  # type: ignore[assignment]
    return factory()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on any error."""

    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_repository_state() -> None:
    """Dispose the cached engine so the next call re-reads settings (used by tests)."""

    engine = _state.pop("engine", None)
    _state.pop("sessions", None)
    if isinstance(engine, Engine):
        engine.dispose()


__all__ = ["get_engine", "get_session", "reset_repository_state", "session_scope"]
