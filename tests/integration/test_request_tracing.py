"""Integration tests covering request ID propagation and middleware."""

from __future__ import annotations

from fastapi.testclient import TestClient

from mealwheel.config import get_settings
from mealwheel.server.app import create_app


def test_request_id_echoed_when_provided(client):
    request_id = "test-request-123"
    response = client.get("/health", headers={"X-Request-ID": request_id})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == request_id


def test_request_id_generated_when_missing(client, kuato_headers):
    response = client.get("/grocery-list", headers=kuato_headers)
    assert response.status_code == 200
    generated = response.headers.get("X-Request-ID")
    assert generated
    assert len(generated) >= 8


def test_request_logging_can_be_disabled(monkeypatch):
    monkeypatch.setenv("MEALWHEEL_LOG_REQUESTS", "false")
    get_settings.cache_clear()

    response = TestClient(create_app()).get("/health")
    assert response.status_code == 200
    assert "X-Request-ID" not in response.headers
