"""Shared fixtures for storefront tests."""

import pytest
from fastapi.testclient import TestClient

import storefront.infrastructure.security as security
from storefront.catalog.memory import reset_repositories
from storefront.domain.value_objects import new_id
from storefront.infrastructure.security import PasswordHasher, get_token_issuer
from storefront.main import app


@pytest.fixture(autouse=True)
def reset_state():
    """Reset in-memory repositories before and after each test."""
    reset_repositories()
    # minimum bcrypt cost
    security._password_hasher = PasswordHasher(rounds=4)
    yield
    reset_repositories()
    security._password_hasher = None


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get authentication headers carrying a freshly signed token."""
    token = get_token_issuer().issue(
        {"sub": new_id(), "email": "admin@example.com", "role": "admin"}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_client(auth_headers: dict[str, str]) -> TestClient:
    """Create test client with a valid access token."""
    return TestClient(app, headers=auth_headers)
