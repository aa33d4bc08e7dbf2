"""
Shared infrastructure for Rolegate backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- models: Authenticated user and notification models
- repository: Base class for table repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import (
    BACKEND_ERRORS,
    get_supabase_client,
    get_supabase_anon_client,
    get_supabase_user_client,
    reset_client_cache,
)
from .exceptions import (
    RolegateError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExternalServiceError,
)
from .models import AuthenticatedUser, Notification, NotificationVariant, Outcome, Screen

__all__ = [
    "BACKEND_ERRORS",
    "Settings",
    "get_settings",
    "get_supabase_client",
    "get_supabase_anon_client",
    "get_supabase_user_client",
    "reset_client_cache",
    "RolegateError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "Notification",
    "NotificationVariant",
    "Outcome",
    "Screen",
]
