"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection.

    Application roles (owner/moderator/user) are NOT carried here; they
    live in the user_roles table and are resolved per request.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: EmailStr = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }


class NotificationVariant(str, Enum):
    """Visual weight of a notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """
    A transient message for the caller.

    Every user-facing success or failure is reported as one of these,
    e.g. {"title": "Error", "description": "Failed to fetch users"}.
    """

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    model_config = {"frozen": True}

    @classmethod
    def success(cls, description: str, title: str = "Success") -> "Notification":
        return cls(title=title, description=description)

    @classmethod
    def error(cls, description: str, title: str = "Error") -> "Notification":
        return cls(title=title, description=description, variant=NotificationVariant.DESTRUCTIVE)

    @classmethod
    def warning(cls, description: str) -> "Notification":
        return cls(title="Warning", description=description, variant=NotificationVariant.DESTRUCTIVE)


class Outcome(BaseModel):
    """Base for responses that report success alongside notifications."""

    success: bool = True
    notifications: list[Notification] = Field(default_factory=list)


class Screen(str, Enum):
    """Client navigation targets returned as redirect_to."""

    LANDING = "/"
    AUTH = "/auth"
    DASHBOARD = "/dashboard"
