"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock
import jwt  # PyJWT

from api.dependencies import reset_container
from shared.models import AuthenticatedUser
from modules.users.models import Actor, Role


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

OWNER_ID = "owner-1"
MODERATOR_ID = "moderator-1"
USER_ID = "user-1"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_actor(user_id: str, role: Role, email: str = "actor@example.com") -> Actor:
    """Build an Actor for service-level tests."""
    return Actor(user=AuthenticatedUser(id=user_id, email=email), role=role)


def query_result(data) -> MagicMock:
    """Fake the object returned by a postgrest .execute() call."""
    result = MagicMock()
    result.data = data
    return result


def profile_row(user_id: str, username: str = "", email: str = "", full_name: str = "") -> dict:
    """A profiles table row as Supabase returns it."""
    return {
        "id": f"profile-{user_id}",
        "user_id": user_id,
        "email": email or f"{user_id}@example.com",
        "full_name": full_name or user_id.title(),
        "username": username or user_id,
        "created_at": "2024-01-01T00:00:00+00:00",
    }


def request_row(
    request_id: str = "req-1",
    target_user_id: str = USER_ID,
    requester_id: str = MODERATOR_ID,
    action_type: str = "remove",
    status: str = "pending",
    reason: str = "spam",
    created_at: str = "2024-01-02T00:00:00+00:00",
) -> dict:
    """A moderation_requests table row as Supabase returns it."""
    return {
        "id": request_id,
        "target_user_id": target_user_id,
        "requester_id": requester_id,
        "action_type": action_type,
        "reason": reason,
        "status": status,
        "created_at": created_at,
        "reviewed_at": None if status == "pending" else "2024-01-03T00:00:00+00:00",
    }


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
