"""
Moderation request API endpoints (owner only).
"""

from fastapi import APIRouter, Depends, Response, status

from api.middleware.auth import require_roles
from api.dependencies import get_moderation_service
from modules.users.models import Actor, Role

from .interfaces import IModerationService
from .models import (
    DecisionOutcome,
    DecisionRequest,
    ModerationRequestListResponse,
    ModerationRequestView,
)

router = APIRouter()

require_owner = require_roles(Role.OWNER)


@router.get("/requests", response_model=ModerationRequestListResponse)
async def list_requests(
    response: Response,
    actor: Actor = Depends(require_owner),
    service: IModerationService = Depends(get_moderation_service),
) -> ModerationRequestListResponse:
    """
    List all moderation requests, newest first.

    Answers 502 with an error notification if the requests cannot be
    loaded.
    """
    result = await service.list_requests()
    if not result.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return result


@router.get("/requests/{request_id}", response_model=ModerationRequestView)
async def get_request(
    request_id: str,
    actor: Actor = Depends(require_owner),
    service: IModerationService = Depends(get_moderation_service),
) -> ModerationRequestView:
    """
    Get one request with target and requester details.
    """
    return await service.get_request(request_id)


@router.post("/requests/{request_id}/decision", response_model=DecisionOutcome)
async def decide_request(
    request_id: str,
    request: DecisionRequest,
    response: Response,
    actor: Actor = Depends(require_owner),
    service: IModerationService = Depends(get_moderation_service),
) -> DecisionOutcome:
    """
    Approve or reject a pending request.

    Approving a remove request also deletes the target account; if that
    fails the request stays approved and a warning is returned.
    """
    result = await service.decide(request_id, request.decision)
    if not result.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return result
