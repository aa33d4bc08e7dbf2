"""
Moderation module.

Moderators' ban/remove requests and the owner's decisions on them.

Public API:
- IModerationService: Interface for reviewing requests
- ModerationRequest, ModerationRequestView, DecisionOutcome: Models
- Moderation exceptions: ModerationRequestNotFoundError, RequestAlreadyReviewedError
"""

from .interfaces import IModerationService
from .models import (
    DECISIONS,
    UNKNOWN_REQUESTER,
    UNKNOWN_TARGET,
    ModerationActionType,
    ModerationStatus,
    ProfileSnippet,
    ModerationRequest,
    ModerationRequestView,
    ModerationRequestListResponse,
    ModerationRequestSubmission,
    DecisionRequest,
    DecisionOutcome,
)
from .exceptions import ModerationRequestNotFoundError, RequestAlreadyReviewedError

__all__ = [
    # Interface
    "IModerationService",
    # Models
    "DECISIONS",
    "UNKNOWN_REQUESTER",
    "UNKNOWN_TARGET",
    "ModerationActionType",
    "ModerationStatus",
    "ProfileSnippet",
    "ModerationRequest",
    "ModerationRequestView",
    "ModerationRequestListResponse",
    "ModerationRequestSubmission",
    "DecisionRequest",
    "DecisionOutcome",
    # Exceptions
    "ModerationRequestNotFoundError",
    "RequestAlreadyReviewedError",
]
