"""
Authentication module.

Handles JWT validation, the per-client session store, and the
sign-in/sign-up/sign-out endpoints.

Public API:
- IAuthService: Interface for token validation
- AuthSession, SessionUser, AuthResult: Session models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import (
    JWTPayload,
    SessionUser,
    AuthSession,
    AuthFailure,
    AuthResult,
    SessionSnapshot,
    SessionStatus,
    SignInRequest,
    SignUpRequest,
    AuthResponse,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
    SessionNotStartedError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "JWTPayload",
    "SessionUser",
    "AuthSession",
    "AuthFailure",
    "AuthResult",
    "SessionSnapshot",
    "SessionStatus",
    "SignInRequest",
    "SignUpRequest",
    "AuthResponse",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InsufficientPermissionsError",
    "SessionNotStartedError",
]
