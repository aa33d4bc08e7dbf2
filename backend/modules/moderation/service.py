"""
Moderation service.

Lists moderation requests for the owner and applies decisions. Approving
a remove request deletes the target account; a failed deletion leaves
the request approved and is reported as a warning.
"""

import asyncio
import logging
from typing import Optional

from shared.database import BACKEND_ERRORS
from shared.exceptions import ExternalServiceError
from shared.guard import InFlightGuard
from shared.models import Notification
from modules.users.repository import AccountRepository

from .interfaces import IModerationService
from .models import (
    UNKNOWN_REQUESTER,
    UNKNOWN_TARGET,
    DecisionOutcome,
    ModerationActionType,
    ModerationRequest,
    ModerationRequestListResponse,
    ModerationRequestView,
    ModerationStatus,
    ProfileSnippet,
)
from .repository import ModerationRequestRepository
from .exceptions import ModerationRequestNotFoundError, RequestAlreadyReviewedError

logger = logging.getLogger(__name__)

# Verb used in failure messages, by decision
_DECISION_VERBS = {
    ModerationStatus.APPROVED: "approve",
    ModerationStatus.REJECTED: "reject",
}


class ModerationService(IModerationService):
    """Moderation request review backed by Supabase."""

    def __init__(
        self,
        requests: ModerationRequestRepository,
        accounts: AccountRepository,
        guard: InFlightGuard,
    ):
        self._requests = requests
        self._accounts = accounts
        self._guard = guard

    async def list_requests(self) -> ModerationRequestListResponse:
        try:
            requests = self._requests.list_all()
        except BACKEND_ERRORS as e:
            logger.error("Failed to fetch moderation requests: %s", e)
            return ModerationRequestListResponse(
                success=False,
                notifications=[Notification.error("Failed to fetch moderation requests")],
            )

        # Profile lookups for all requests run concurrently; order is preserved
        views = await asyncio.gather(*(self._decorate(request) for request in requests))
        return ModerationRequestListResponse(requests=list(views))

    async def get_request(self, request_id: str) -> ModerationRequestView:
        try:
            request = self._requests.get_by_id(request_id)
        except BACKEND_ERRORS as e:
            logger.error("Failed to fetch moderation request %s: %s", request_id, e)
            raise ExternalServiceError(
                "Failed to fetch moderation request",
                service="supabase",
                details={"request_id": request_id},
            )
        if request is None:
            raise ModerationRequestNotFoundError(request_id)
        return await self._decorate(request)

    async def decide(self, request_id: str, decision: ModerationStatus) -> DecisionOutcome:
        verb = _DECISION_VERBS[decision]
        with self._guard.hold("decision", request_id):
            try:
                request = self._requests.get_by_id(request_id)
                if request is None:
                    raise ModerationRequestNotFoundError(request_id)
                if request.status is not ModerationStatus.PENDING:
                    raise RequestAlreadyReviewedError(request_id, request.status.value)

                updated = self._requests.mark_reviewed(request_id, decision)
                if updated is None:
                    # Someone else decided it between the read and the update
                    current = self._requests.get_by_id(request_id)
                    status = current.status.value if current else "reviewed"
                    raise RequestAlreadyReviewedError(request_id, status)
            except BACKEND_ERRORS as e:
                logger.error("Failed to %s request %s: %s", verb, request_id, e)
                return DecisionOutcome(
                    success=False,
                    request_id=request_id,
                    notifications=[Notification.error(f"Failed to {verb} request")],
                )

            outcome = DecisionOutcome(request_id=request_id, status=updated.status)
            if decision is ModerationStatus.APPROVED and request.action_type is ModerationActionType.REMOVE:
                self._delete_target(request, outcome)

        logger.info("Moderation request %s %s", request_id, decision.value)
        outcome.notifications.append(Notification.success(f"Request {decision.value} successfully"))
        return outcome

    def _delete_target(self, request: ModerationRequest, outcome: DecisionOutcome) -> None:
        outcome.deletion_attempted = True
        try:
            self._accounts.delete_user(request.target_user_id)
        except BACKEND_ERRORS as e:
            logger.error(
                "Request %s approved but deleting user %s failed: %s",
                request.id,
                request.target_user_id,
                e,
            )
            outcome.deletion_failed = True
            outcome.notifications.append(
                Notification.warning("Request approved but user deletion failed")
            )
            return
        logger.info("Deleted user %s for request %s", request.target_user_id, request.id)

    async def _decorate(self, request: ModerationRequest) -> ModerationRequestView:
        target, requester = await asyncio.gather(
            self._snippet(request.target_user_id, include_email=True),
            self._snippet(request.requester_id),
        )
        return ModerationRequestView(
            **request.model_dump(),
            target_user=target or UNKNOWN_TARGET,
            requester=requester or UNKNOWN_REQUESTER,
        )

    async def _snippet(self, user_id: str, include_email: bool = False) -> Optional[ProfileSnippet]:
        try:
            return await asyncio.to_thread(self._requests.get_profile_snippet, user_id, include_email)
        except BACKEND_ERRORS as e:
            logger.warning("Profile lookup failed for %s: %s", user_id, e)
            return None
