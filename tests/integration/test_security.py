"""Security-related integration tests."""

from __future__ import annotations

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from mealwheel.config import get_settings
from mealwheel.db.repository import reset_repository_state
from mealwheel.server.app import create_app


@pytest.fixture()
def secure_client(tmp_path, monkeypatch) -> TestClient:
    db_path = tmp_path / "secure.db"
    monkeypatch.setenv("MEALWHEEL_DATABASE_PATH", str(db_path))
    monkeypatch.setenv("MEALWHEEL_API_TOKEN", "secret-token")
    monkeypatch.setenv("MEALWHEEL_ALLOWED_USERNAMES", "kuato, Quaid")
    get_settings.cache_clear()
    reset_repository_state()
    app = create_app()
    client = TestClient(app)
    yield client
    monkeypatch.delenv("MEALWHEEL_API_TOKEN", raising=False)
    monkeypatch.delenv("MEALWHEEL_ALLOWED_USERNAMES", raising=False)
    reset_repository_state()
    get_settings.cache_clear()


def test_grocery_list_requires_api_token(secure_client):
    headers = {"X-User": "kuato"}
    response = secure_client.get("/grocery-list", headers=headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED

    headers["Authorization"] = "Bearer secret-token"
    response = secure_client.get("/grocery-list", headers=headers)
    assert response.status_code == status.HTTP_200_OK


def test_api_token_accepted_as_query_parameter(secure_client):
    response = secure_client.delete(
        "/grocery-list/checks",
        params={"api_token": "secret-token"},
        headers={"X-User": "kuato"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"cleared": True}


def test_allow_list_is_configurable(secure_client):
    headers = {"Authorization": "Bearer secret-token"}

    response = secure_client.get("/grocery-list", headers={**headers, "X-User": "quaid"})
    assert response.status_code == status.HTTP_200_OK

    response = secure_client.get("/grocery-list", headers={**headers, "X-User": "noodle"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
