"""Shared pytest fixtures for the Mealwheel test suite."""

from __future__ import annotations

from typing import Generator, List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mealwheel.config import get_settings
from mealwheel.db.repository import reset_repository_state
from mealwheel.models.catalog import (
    HouseholdGroupSnapshot,
    MealSnapshot,
    QuantityLine,
    RotationEntrySnapshot,
    Unit,
)
from mealwheel.server.app import create_app


@pytest.fixture()
def app() -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app instance for each test and reset overrides."""

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)


@pytest.fixture()
def kuato_headers() -> dict[str, str]:
    return {"X-User": "kuato"}


@pytest.fixture()
def pancakes() -> MealSnapshot:
    """Two-serving meal owned by user 1."""

    return MealSnapshot(
        id=10,
        owner_id=1,
        name="Pancakes",
        servings=2,
        ingredients=[
            QuantityLine(name="Flour", category="pantry", quantity_value=2, quantity_unit=Unit.CUP),
            QuantityLine(name="Eggs", category="dairy", quantity_value=2, quantity_unit=Unit.UNIT),
            QuantityLine(name="Salt", category="pantry"),
        ],
    )


@pytest.fixture()
def fried_rice() -> MealSnapshot:
    return MealSnapshot(
        id=11,
        owner_id=1,
        name="Fried Rice",
        servings=4,
        ingredients=[
            QuantityLine(name="Rice", category="pantry", quantity_value=1, quantity_unit=Unit.CUP),
            QuantityLine(name="eggs ", category="dairy", quantity_value=3),
            QuantityLine(name="salt", category="pantry", quantity_unit=Unit.UNIT),
        ],
    )


@pytest.fixture()
def sample_entries(pancakes, fried_rice) -> List[RotationEntrySnapshot]:
    return [
        RotationEntrySnapshot(id=1, week_number=1, servings=4, meal=pancakes),
        RotationEntrySnapshot(id=2, week_number=2, meal=fried_rice),
    ]


@pytest.fixture()
def pantry_group() -> HouseholdGroupSnapshot:
    return HouseholdGroupSnapshot(
        name="Pantry staples",
        items=[
            QuantityLine(name="Rice", category="pantry", quantity_value=1, quantity_unit=Unit.KG),
            QuantityLine(name="Paper Towels", category="paper_goods", quantity_value=2),
        ],
    )


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    db_path = tmp_path / "test_mealwheel.db"
    monkeypatch.setenv("MEALWHEEL_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("MEALWHEEL_API_TOKEN", raising=False)
    monkeypatch.delenv("MEALWHEEL_ALLOWED_USERNAMES", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    yield
    reset_repository_state()
    monkeypatch.delenv("MEALWHEEL_DATABASE_PATH", raising=False)
    get_settings.cache_clear()
