"""
User management API endpoints.

Owners change roles and remove users directly; moderators file ban and
remove requests. Backend failures answer 502 with the notification in
the body.
"""

from fastapi import APIRouter, Depends, Response, status

from api.middleware.auth import require_roles
from api.dependencies import get_user_service
from modules.moderation.models import ModerationRequestSubmission

from .interfaces import IUserManagementService
from .models import ActionOutcome, Actor, Role, RoleChangeRequest, UserListResponse

router = APIRouter()


def _reflect(outcome, response: Response):
    if not outcome.success:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return outcome


@router.get("", response_model=UserListResponse)
async def list_users(
    response: Response,
    actor: Actor = Depends(require_roles(Role.OWNER, Role.MODERATOR)),
    service: IUserManagementService = Depends(get_user_service),
) -> UserListResponse:
    """
    List all users with their roles and the actions the caller may take.
    """
    return _reflect(await service.list_users(actor.role), response)


@router.put("/{user_id}/role", response_model=ActionOutcome)
async def change_role(
    user_id: str,
    request: RoleChangeRequest,
    response: Response,
    actor: Actor = Depends(require_roles(Role.OWNER)),
    service: IUserManagementService = Depends(get_user_service),
) -> ActionOutcome:
    """
    Set a user's role to 'user' or 'moderator'.
    """
    return _reflect(await service.change_role(actor, user_id, request.role), response)


@router.delete("/{user_id}", response_model=ActionOutcome)
async def remove_user(
    user_id: str,
    response: Response,
    actor: Actor = Depends(require_roles(Role.OWNER)),
    service: IUserManagementService = Depends(get_user_service),
) -> ActionOutcome:
    """
    Delete a user's account.
    """
    return _reflect(await service.remove_user(actor, user_id), response)


@router.post("/{user_id}/requests", response_model=ActionOutcome, status_code=201)
async def submit_request(
    user_id: str,
    request: ModerationRequestSubmission,
    response: Response,
    actor: Actor = Depends(require_roles(Role.OWNER, Role.MODERATOR)),
    service: IUserManagementService = Depends(get_user_service),
) -> ActionOutcome:
    """
    Ask the owner to ban or remove a user.

    Moderators only; owners act directly and get 422 here.
    """
    return _reflect(
        await service.submit_request(actor, user_id, request.action_type, request.reason),
        response,
    )
