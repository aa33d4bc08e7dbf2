"""
Moderation module data models.

A moderation request is a moderator's proposal to ban or remove a user,
decided once by an owner:

    pending --approve--> approved   (deletes the target if action is remove)
    pending --reject-->  rejected
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field, field_validator

from shared.models import Outcome


class ModerationActionType(str, Enum):
    """What a moderation request asks the owner to do."""

    BAN = "ban"
    REMOVE = "remove"


class ModerationStatus(str, Enum):
    """Moderation request status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ProfileSnippet(BaseModel):
    """Display fields of a profile joined onto a moderation request."""

    full_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None


# Final states an owner can move a pending request to
DECISIONS = (ModerationStatus.APPROVED, ModerationStatus.REJECTED)

UNKNOWN_TARGET = ProfileSnippet(full_name="Unknown", username="unknown", email="unknown")
UNKNOWN_REQUESTER = ProfileSnippet(full_name="Unknown", username="unknown")


class ModerationRequest(BaseModel):
    """A row of the moderation_requests table."""

    id: str
    action_type: ModerationActionType
    reason: str = ""
    status: ModerationStatus
    created_at: datetime
    reviewed_at: Optional[datetime] = None
    target_user_id: str
    requester_id: str


class ModerationRequestView(ModerationRequest):
    """A moderation request with target and requester display data."""

    target_user: ProfileSnippet
    requester: ProfileSnippet

    @computed_field
    @property
    def available_decisions(self) -> list[ModerationStatus]:
        """Decisions that can still be taken; empty once reviewed."""
        if self.status is ModerationStatus.PENDING:
            return list(DECISIONS)
        return []


class ModerationRequestListResponse(Outcome):
    """All moderation requests, newest first."""

    requests: list[ModerationRequestView] = Field(default_factory=list)


class ModerationRequestSubmission(BaseModel):
    """Moderator request to ban or remove a user."""

    action_type: ModerationActionType
    reason: str = ""


class DecisionRequest(BaseModel):
    """Owner decision on a pending request."""

    decision: ModerationStatus

    @field_validator("decision")
    @classmethod
    def decision_must_be_final(cls, value: ModerationStatus) -> ModerationStatus:
        if value not in DECISIONS:
            raise ValueError("decision must be 'approved' or 'rejected'")
        return value


class DecisionOutcome(Outcome):
    """
    Result of deciding a request.

    deletion_failed marks the partial outcome where the request was
    approved but the target account could not be deleted.
    """

    request_id: str
    status: Optional[ModerationStatus] = None
    deletion_attempted: bool = False
    deletion_failed: bool = False
