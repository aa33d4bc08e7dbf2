"""
Moderation module interface.

The API layer depends on IModerationService for the owner's
moderation requests panel.
"""

from typing import Protocol, runtime_checkable

from .models import (
    DecisionOutcome,
    ModerationRequestListResponse,
    ModerationRequestView,
    ModerationStatus,
)


@runtime_checkable
class IModerationService(Protocol):
    """
    Interface for reviewing moderation requests.

    Callers are expected to have checked that the viewer is an owner.
    """

    async def list_requests(self) -> ModerationRequestListResponse:
        """
        List all requests, newest first, with target and requester details.

        Missing or unreadable profiles are shown as "Unknown".
        """
        ...

    async def get_request(self, request_id: str) -> ModerationRequestView:
        """
        Get a single request with display details.

        Raises:
            ModerationRequestNotFoundError: If no such request exists
        """
        ...

    async def decide(self, request_id: str, decision: ModerationStatus) -> DecisionOutcome:
        """
        Approve or reject a pending request.

        Approving a remove request deletes the target account once.

        Raises:
            ModerationRequestNotFoundError: If no such request exists
            RequestAlreadyReviewedError: If the request is no longer pending
            ActionInProgressError: If a decision on it is already running
        """
        ...
