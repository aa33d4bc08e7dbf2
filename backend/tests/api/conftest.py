"""Fixtures for API route tests."""

import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_role_repository
from modules.users.models import Role
from tests.conftest import TEST_JWT_SECRET, create_test_token


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def jwt_secret():
    """Validate tokens with the test secret."""
    with patch("modules.auth.service.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
        yield mock_settings


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def role_repository(app):
    """Role lookups used by require_roles; defaults to no row."""
    roles = MagicMock()
    roles.get_role.return_value = Role.UNASSIGNED
    app.dependency_overrides[get_role_repository] = lambda: roles
    return roles


def bearer(user_id: str = "test-user-123") -> dict[str, str]:
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id)}"}
