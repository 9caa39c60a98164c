"""API tests for the unhandled-error response."""

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.database import InMemoryStore, get_store
from app.main import app


class BrokenStore(InMemoryStore):
    """Store whose record counts cannot be read."""

    def counts(self):
        raise RuntimeError("store unavailable")


@pytest.fixture
def failing_client():
    app.dependency_overrides[get_store] = lambda: BrokenStore()
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_unhandled_error_returns_500_body(failing_client, monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", False)

    response = failing_client.get("/health")

    assert response.status_code == 500
    assert response.json() == {
        "error": "store unavailable",
        "type": "RuntimeError",
        "path": "/health",
        "method": "GET",
    }


def test_debug_mode_includes_traceback(failing_client, monkeypatch):
    monkeypatch.setattr(settings, "DEBUG", True)

    response = failing_client.get("/health")

    assert response.status_code == 500
    assert "RuntimeError: store unavailable" in response.json()["traceback"]
