"""
Users module interface.

The API layer depends on IUserManagementService for the user
management panel.
"""

from typing import Protocol, runtime_checkable

from modules.moderation.models import ModerationActionType

from .models import ActionOutcome, Actor, Role, UserListResponse


@runtime_checkable
class IUserManagementService(Protocol):
    """
    Interface for user management operations.

    Backend failures are reported through the returned outcome's
    notifications; permission and validation problems raise.
    """

    async def list_users(self, viewer_role: Role) -> UserListResponse:
        """
        List every user with their role and the actions the viewer may take.

        Args:
            viewer_role: Effective role of the caller

        Returns:
            Users in profile fetch order
        """
        ...

    async def change_role(self, actor: Actor, target_user_id: str, new_role: Role) -> ActionOutcome:
        """
        Set a user's role directly (owner only).

        Raises:
            InsufficientPermissionsError: If the actor is not an owner
            ProtectedAccountError: If the target is an owner
        """
        ...

    async def remove_user(self, actor: Actor, target_user_id: str) -> ActionOutcome:
        """
        Delete a user's account directly (owner only).

        Raises:
            InsufficientPermissionsError: If the actor is not an owner
            ProtectedAccountError: If the target is an owner
        """
        ...

    async def submit_request(
        self,
        actor: Actor,
        target_user_id: str,
        action_type: ModerationActionType,
        reason: str,
    ) -> ActionOutcome:
        """
        File a ban/remove request for owner approval (moderator only).

        Raises:
            UnsupportedActionError: If the actor is an owner
            InsufficientPermissionsError: If the actor is a plain user
            MissingReasonError: If the reason is blank
            ProtectedAccountError: If the target is an owner
        """
        ...
