"""
Users module exceptions.
"""

from shared.exceptions import AuthorizationError, ValidationError


class ProtectedAccountError(AuthorizationError):
    """Raised when an action targets an owner account."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Owner accounts cannot be targeted: {user_id}",
            code="PROTECTED_ACCOUNT",
            details={"user_id": user_id},
        )


class UnsupportedActionError(ValidationError):
    """Raised when a role tries an action that is not offered to it."""

    def __init__(self, action: str, role: str):
        super().__init__(
            f"Action '{action}' is not available to role '{role}'",
            code="UNSUPPORTED_ACTION",
            details={"action": action, "role": role},
        )


class MissingReasonError(ValidationError):
    """Raised when a moderator submits a request without a reason."""

    def __init__(self):
        super().__init__(
            "A reason is required for moderation requests",
            code="REASON_REQUIRED",
        )


class InvalidRoleError(ValidationError):
    """Raised when a role change asks for a role that cannot be assigned."""

    def __init__(self, role: str):
        super().__init__(
            f"Role cannot be assigned: {role}",
            code="INVALID_ROLE",
            details={"role": role},
        )
