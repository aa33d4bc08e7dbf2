"""
Users module.

Handles profiles, role assignments and the user management panel.

Public API:
- IUserManagementService: Interface for user management
- Role, Profile, ManagedUser, Actor: User models
- User exceptions: ProtectedAccountError, MissingReasonError, etc.
"""

from .interfaces import IUserManagementService
from .models import (
    ASSIGNABLE_ROLES,
    Role,
    UserAction,
    Profile,
    RoleAssignment,
    Actor,
    ManagedUser,
    UserListResponse,
    RoleChangeRequest,
    ActionOutcome,
)
from .exceptions import (
    ProtectedAccountError,
    UnsupportedActionError,
    MissingReasonError,
    InvalidRoleError,
)

__all__ = [
    # Interface
    "IUserManagementService",
    # Models
    "ASSIGNABLE_ROLES",
    "Role",
    "UserAction",
    "Profile",
    "RoleAssignment",
    "Actor",
    "ManagedUser",
    "UserListResponse",
    "RoleChangeRequest",
    "ActionOutcome",
    # Exceptions
    "ProtectedAccountError",
    "UnsupportedActionError",
    "MissingReasonError",
    "InvalidRoleError",
]
