"""
User management service.

Lists accounts with their roles and carries out the management panel's
actions. Owners act directly (role change, removal); moderators file
moderation requests instead. Owner accounts are never targeted.
"""

import logging

from shared.database import BACKEND_ERRORS
from shared.guard import InFlightGuard
from shared.models import Notification
from modules.auth.exceptions import InsufficientPermissionsError
from modules.moderation.models import ModerationActionType
from modules.moderation.repository import ModerationRequestRepository

from .interfaces import IUserManagementService
from .models import (
    ASSIGNABLE_ROLES,
    ActionOutcome,
    Actor,
    ManagedUser,
    Role,
    UserAction,
    UserListResponse,
)
from .repository import AccountRepository, ProfileRepository, RoleRepository
from .exceptions import (
    InvalidRoleError,
    MissingReasonError,
    ProtectedAccountError,
    UnsupportedActionError,
)

logger = logging.getLogger(__name__)


def resolve_role(roles: RoleRepository, user_id: str) -> Role:
    """
    Look up a user's role without ever failing.

    Returns Role.UNASSIGNED when no row exists and Role.USER when the
    lookup itself fails.
    """
    try:
        return roles.get_role(user_id)
    except BACKEND_ERRORS as e:
        logger.warning("Role lookup failed for %s, defaulting to user: %s", user_id, e)
        return Role.USER


def available_actions(viewer_role: Role, target_role: Role) -> list[UserAction]:
    """Actions a viewer may take on a user with the given role."""
    if target_role.effective is Role.OWNER:
        return []
    viewer_role = viewer_role.effective
    if viewer_role is Role.OWNER:
        return [UserAction.ROLE_CHANGE, UserAction.REMOVE]
    if viewer_role is Role.MODERATOR:
        return [UserAction.BAN, UserAction.REMOVE]
    return []


class UserManagementService(IUserManagementService):
    """User management backed by the profiles and user_roles tables."""

    def __init__(
        self,
        profiles: ProfileRepository,
        roles: RoleRepository,
        accounts: AccountRepository,
        requests: ModerationRequestRepository,
        guard: InFlightGuard,
    ):
        self._profiles = profiles
        self._roles = roles
        self._accounts = accounts
        self._requests = requests
        self._guard = guard

    async def list_users(self, viewer_role: Role) -> UserListResponse:
        """Join profiles with role assignments, in profile fetch order."""
        try:
            profiles = self._profiles.list_all()
        except BACKEND_ERRORS as e:
            logger.error("Failed to fetch profiles: %s", e)
            return UserListResponse(
                success=False,
                notifications=[Notification.error("Failed to fetch users")],
            )

        try:
            assigned = {a.user_id: a.role for a in self._roles.list_all()}
        except BACKEND_ERRORS as e:
            # Users still render, all with the default role
            logger.error("Failed to fetch roles: %s", e)
            assigned = {}

        users = []
        for profile in profiles:
            stored = assigned.get(profile.user_id)
            role = stored.effective if stored is not None else Role.USER
            users.append(
                ManagedUser(
                    **profile.model_dump(),
                    role=role,
                    role_assigned=stored is not None,
                    actions=available_actions(viewer_role, role),
                )
            )
        return UserListResponse(users=users)

    async def change_role(self, actor: Actor, target_user_id: str, new_role: Role) -> ActionOutcome:
        """Set the target's role to user or moderator."""
        self._require_owner(actor)
        if new_role not in ASSIGNABLE_ROLES:
            raise InvalidRoleError(new_role.value)

        action = UserAction.ROLE_CHANGE
        with self._guard.hold(action.value, target_user_id):
            try:
                self._ensure_targetable(target_user_id)
                self._roles.set_role(target_user_id, new_role)
            except BACKEND_ERRORS as e:
                logger.error("Failed to update role for %s: %s", target_user_id, e)
                return ActionOutcome.failed(
                    action, target_user_id, Notification.error("Failed to update user role")
                )

        logger.info("User %s set role of %s to %s", actor.user.id, target_user_id, new_role.value)
        return ActionOutcome.succeeded(
            action, target_user_id, Notification.success(f"User role updated to {new_role.value}")
        )

    async def remove_user(self, actor: Actor, target_user_id: str) -> ActionOutcome:
        """Delete the target's account through the auth admin API."""
        self._require_owner(actor)

        action = UserAction.REMOVE
        with self._guard.hold(action.value, target_user_id):
            try:
                self._ensure_targetable(target_user_id)
                self._accounts.delete_user(target_user_id)
            except BACKEND_ERRORS as e:
                logger.error("Failed to remove user %s: %s", target_user_id, e)
                return ActionOutcome.failed(
                    action, target_user_id, Notification.error("Failed to remove user")
                )

        logger.info("User %s removed %s", actor.user.id, target_user_id)
        return ActionOutcome.succeeded(
            action, target_user_id, Notification.success("User removed successfully")
        )

    async def submit_request(
        self,
        actor: Actor,
        target_user_id: str,
        action_type: ModerationActionType,
        reason: str,
    ) -> ActionOutcome:
        """Insert a pending moderation request instead of acting directly."""
        role = actor.role.effective
        if role is Role.OWNER:
            raise UnsupportedActionError(action_type.value, role.value)
        if role is not Role.MODERATOR:
            raise InsufficientPermissionsError(required_role=Role.MODERATOR.value, user_role=role.value)
        if not reason.strip():
            raise MissingReasonError()

        action = UserAction(action_type.value)
        with self._guard.hold(f"request:{action.value}", target_user_id):
            try:
                self._ensure_targetable(target_user_id)
                self._requests.create(target_user_id, actor.user.id, action_type, reason.strip())
            except BACKEND_ERRORS as e:
                logger.error("Failed to submit %s request for %s: %s", action.value, target_user_id, e)
                return ActionOutcome.failed(
                    action, target_user_id, Notification.error("Failed to submit request")
                )

        logger.info("User %s requested %s of %s", actor.user.id, action.value, target_user_id)
        return ActionOutcome.succeeded(
            action,
            target_user_id,
            Notification.success(
                "Your moderation request has been sent to the owner for approval",
                title="Request Submitted",
            ),
        )

    def _require_owner(self, actor: Actor) -> None:
        if actor.role.effective is not Role.OWNER:
            raise InsufficientPermissionsError(required_role=Role.OWNER.value, user_role=actor.role.value)

    def _ensure_targetable(self, target_user_id: str) -> None:
        if self._roles.get_role(target_user_id) is Role.OWNER:
            raise ProtectedAccountError(target_user_id)
