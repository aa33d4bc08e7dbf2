"""
Base exception classes for the Rolegate backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class RolegateError(Exception):
    """
    Base exception for all Rolegate errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(RolegateError):
    """Resource not found."""

    pass


class ValidationError(RolegateError):
    """Input validation failed."""

    pass


class ConflictError(RolegateError):
    """Request conflicts with the current state of a resource."""

    pass


class AuthenticationError(RolegateError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(RolegateError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(RolegateError):
    """A component was used without the setup it depends on."""

    pass


class ExternalServiceError(RolegateError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
