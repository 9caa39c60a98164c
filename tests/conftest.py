"""Pytest configuration and shared fixtures for all tests."""

import os

# Minimal environment for tests; must be set before app modules are imported
os.environ.setdefault("SECRET_KEY", "test_secret_key_for_testing_only")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LANDING_URL", "https://shop.example.com/")

import pytest
from fastapi.testclient import TestClient

from app.database import InMemoryStore, get_store
from app.main import app


@pytest.fixture
def store():
    """Fresh in-memory store per test."""
    return InMemoryStore()


@pytest.fixture
def client(store):
    """TestClient wired to the per-test store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(store):
    """Add a user straight to the store with a chosen code."""
    def _make_user(code, referrer_code=None, email=None, name=None):
        return store.add_user(
            email=email or f"{code.lower()}@example.com",
            password_hash="not-a-real-hash",
            code=code,
            name=name,
            referrer_code=referrer_code,
        )
    return _make_user


@pytest.fixture
def chain(make_user):
    """A refers B refers C."""
    a = make_user("AAA")
    b = make_user("BBB", referrer_code="AAA")
    c = make_user("CCC", referrer_code="BBB")
    return a, b, c


@pytest.fixture
def signup(client):
    """Sign up through the API and return the response body."""
    def _signup(email, password="secret123", ref=None, name=None):
        payload = {"email": email, "password": password}
        if ref is not None:
            payload["ref"] = ref
        if name is not None:
            payload["name"] = name
        response = client.post("/auth/signup", json=payload)
        assert response.status_code == 200, response.text
        return response.json()
    return _signup


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a token."""
    def _auth_headers(token):
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers
