"""
Users module data models.

Typed bindings for the profiles and user_roles tables, plus the
request/response shapes of the user management panel.
"""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, field_validator

from shared.models import AuthenticatedUser, Outcome


class Role(str, Enum):
    """
    Application role of a user.

    UNASSIGNED means no user_roles row exists. It carries the
    permissions of USER but is kept distinct so callers can tell a
    defaulted role from an assigned one.
    """

    OWNER = "owner"
    MODERATOR = "moderator"
    USER = "user"
    UNASSIGNED = "unassigned"

    @property
    def effective(self) -> "Role":
        """The role whose permissions apply."""
        return Role.USER if self is Role.UNASSIGNED else self


# Roles an owner may hand out through a role change
ASSIGNABLE_ROLES = (Role.USER, Role.MODERATOR)


class UserAction(str, Enum):
    """Actions the management panel can offer on a user row."""

    ROLE_CHANGE = "role_change"
    REMOVE = "remove"
    BAN = "ban"


class Profile(BaseModel):
    """A row of the profiles table."""

    id: str
    user_id: str
    email: str
    full_name: str = ""
    username: str = ""
    created_at: datetime


class RoleAssignment(BaseModel):
    """A row of the user_roles table."""

    user_id: str
    role: Role


class Actor(BaseModel):
    """The authenticated caller together with their effective role."""

    user: AuthenticatedUser
    role: Role

    model_config = {"frozen": True}


class ManagedUser(BaseModel):
    """A user row in the management panel."""

    id: str
    user_id: str
    email: str
    full_name: str
    username: str
    created_at: datetime
    role: Role = Field(..., description="Effective role shown on the badge")
    role_assigned: bool = Field(..., description="Whether a user_roles row exists")
    actions: list[UserAction] = Field(default_factory=list)


class UserListResponse(Outcome):
    """All users with roles and the actions available to the viewer."""

    users: list[ManagedUser] = Field(default_factory=list)


class RoleChangeRequest(BaseModel):
    """Owner request to set a user's role."""

    role: Role

    @field_validator("role")
    @classmethod
    def role_must_be_assignable(cls, value: Role) -> Role:
        if value not in ASSIGNABLE_ROLES:
            raise ValueError("role must be 'user' or 'moderator'")
        return value


class ActionOutcome(Outcome):
    """Result of a management action on a single user."""

    action: UserAction
    target_user_id: str

    @classmethod
    def succeeded(cls, action: UserAction, target_user_id: str, notification) -> "ActionOutcome":
        return cls(action=action, target_user_id=target_user_id, notifications=[notification])

    @classmethod
    def failed(cls, action: UserAction, target_user_id: str, notification) -> "ActionOutcome":
        return cls(
            success=False,
            action=action,
            target_user_id=target_user_id,
            notifications=[notification],
        )
