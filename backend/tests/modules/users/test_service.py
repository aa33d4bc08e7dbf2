"""Tests for the user management service."""

import httpx
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from supabase import AuthError, PostgrestAPIError

from shared.guard import ActionInProgressError, InFlightGuard
from modules.auth.exceptions import InsufficientPermissionsError
from modules.moderation.models import ModerationActionType
from modules.users.exceptions import (
    InvalidRoleError,
    MissingReasonError,
    ProtectedAccountError,
    UnsupportedActionError,
)
from modules.users.models import Profile, Role, RoleAssignment, UserAction
from modules.users.service import UserManagementService, available_actions, resolve_role
from tests.conftest import MODERATOR_ID, OWNER_ID, USER_ID, make_actor


def make_profile(user_id: str) -> Profile:
    return Profile(
        id=f"profile-{user_id}",
        user_id=user_id,
        email=f"{user_id}@example.com",
        full_name=user_id.title(),
        username=user_id,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def profiles():
    return MagicMock()


@pytest.fixture
def roles():
    roles = MagicMock()
    roles.get_role.return_value = Role.USER
    return roles


@pytest.fixture
def accounts():
    return MagicMock()


@pytest.fixture
def requests():
    return MagicMock()


@pytest.fixture
def guard():
    return InFlightGuard()


@pytest.fixture
def service(profiles, roles, accounts, requests, guard):
    return UserManagementService(profiles, roles, accounts, requests, guard)


@pytest.fixture
def owner():
    return make_actor(OWNER_ID, Role.OWNER)


@pytest.fixture
def moderator():
    return make_actor(MODERATOR_ID, Role.MODERATOR)


class TestResolveRole:
    def test_returns_stored_role(self, roles):
        roles.get_role.return_value = Role.MODERATOR
        assert resolve_role(roles, "x") is Role.MODERATOR

    def test_lookup_failure_defaults_to_user(self, roles):
        roles.get_role.side_effect = PostgrestAPIError({"message": "boom"})
        assert resolve_role(roles, "x") is Role.USER


class TestAvailableActions:
    def test_owner_rows_have_no_actions(self):
        assert available_actions(Role.OWNER, Role.OWNER) == []
        assert available_actions(Role.MODERATOR, Role.OWNER) == []

    def test_owner_viewer(self):
        assert available_actions(Role.OWNER, Role.USER) == [UserAction.ROLE_CHANGE, UserAction.REMOVE]

    def test_moderator_viewer(self):
        assert available_actions(Role.MODERATOR, Role.UNASSIGNED) == [UserAction.BAN, UserAction.REMOVE]

    def test_user_viewer(self):
        assert available_actions(Role.UNASSIGNED, Role.USER) == []


class TestListUsers:
    @pytest.mark.asyncio
    async def test_joins_roles_in_profile_order(self, service, profiles, roles):
        profiles.list_all.return_value = [make_profile("c"), make_profile("a"), make_profile("b")]
        roles.list_all.return_value = [
            RoleAssignment(user_id="a", role=Role.OWNER),
            RoleAssignment(user_id="b", role=Role.MODERATOR),
        ]

        result = await service.list_users(Role.OWNER)

        assert result.success is True
        assert [u.user_id for u in result.users] == ["c", "a", "b"]
        assert [u.role for u in result.users] == [Role.USER, Role.OWNER, Role.MODERATOR]
        assert [u.role_assigned for u in result.users] == [False, True, True]
        assert result.users[1].actions == []
        assert result.users[2].actions == [UserAction.ROLE_CHANGE, UserAction.REMOVE]

    @pytest.mark.asyncio
    async def test_profile_failure_returns_empty_with_error(self, service, profiles, roles):
        profiles.list_all.side_effect = PostgrestAPIError({"message": "boom"})

        result = await service.list_users(Role.OWNER)

        assert result.success is False
        assert result.users == []
        assert result.notifications[0].description == "Failed to fetch users"
        roles.list_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_role_failure_defaults_everyone_to_user(self, service, profiles, roles):
        profiles.list_all.return_value = [make_profile("a"), make_profile("b")]
        roles.list_all.side_effect = PostgrestAPIError({"message": "boom"})

        result = await service.list_users(Role.MODERATOR)

        assert result.success is True
        assert result.notifications == []
        assert all(u.role is Role.USER and not u.role_assigned for u in result.users)
        assert all(u.actions == [UserAction.BAN, UserAction.REMOVE] for u in result.users)

    @pytest.mark.asyncio
    async def test_refetch_reflects_backend(self, service, profiles, roles):
        profiles.list_all.return_value = [make_profile("a")]
        roles.list_all.return_value = []
        first = await service.list_users(Role.OWNER)

        roles.list_all.return_value = [RoleAssignment(user_id="a", role=Role.MODERATOR)]
        second = await service.list_users(Role.OWNER)

        assert first.users[0].role is Role.USER
        assert second.users[0].role is Role.MODERATOR


class TestChangeRole:
    @pytest.mark.asyncio
    async def test_success(self, service, roles, owner):
        roles.get_role.return_value = Role.UNASSIGNED

        outcome = await service.change_role(owner, USER_ID, Role.MODERATOR)

        roles.set_role.assert_called_once_with(USER_ID, Role.MODERATOR)
        assert outcome.success is True
        assert outcome.action is UserAction.ROLE_CHANGE
        assert outcome.notifications[0].description == "User role updated to moderator"

    @pytest.mark.asyncio
    async def test_owner_target_protected(self, service, roles, owner):
        roles.get_role.return_value = Role.OWNER

        with pytest.raises(ProtectedAccountError):
            await service.change_role(owner, "other-owner", Role.USER)
        roles.set_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_moderator_cannot_change_roles(self, service, roles, moderator):
        with pytest.raises(InsufficientPermissionsError):
            await service.change_role(moderator, USER_ID, Role.MODERATOR)
        roles.set_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_cannot_grant_owner(self, service, owner):
        with pytest.raises(InvalidRoleError):
            await service.change_role(owner, USER_ID, Role.OWNER)

    @pytest.mark.asyncio
    async def test_backend_failure(self, service, roles, owner):
        roles.set_role.side_effect = PostgrestAPIError({"message": "boom"})

        outcome = await service.change_role(owner, USER_ID, Role.USER)

        assert outcome.success is False
        assert outcome.notifications[0].title == "Error"
        assert outcome.notifications[0].description == "Failed to update user role"

    @pytest.mark.asyncio
    async def test_duplicate_in_flight_rejected(self, service, guard, roles, owner):
        with guard.hold(UserAction.ROLE_CHANGE.value, USER_ID):
            with pytest.raises(ActionInProgressError):
                await service.change_role(owner, USER_ID, Role.USER)
        roles.set_role.assert_not_called()


class TestRemoveUser:
    @pytest.mark.asyncio
    async def test_success(self, service, accounts, owner):
        outcome = await service.remove_user(owner, USER_ID)

        accounts.delete_user.assert_called_once_with(USER_ID)
        assert outcome.notifications[0].description == "User removed successfully"

    @pytest.mark.asyncio
    async def test_backend_failure(self, service, accounts, owner):
        accounts.delete_user.side_effect = AuthError("User not allowed", "not_admin")

        outcome = await service.remove_user(owner, USER_ID)

        assert outcome.success is False
        assert outcome.notifications[0].description == "Failed to remove user"

    @pytest.mark.asyncio
    async def test_moderator_cannot_remove_directly(self, service, accounts, moderator):
        with pytest.raises(InsufficientPermissionsError):
            await service.remove_user(moderator, USER_ID)
        accounts.delete_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_target_protected(self, service, roles, accounts, owner):
        roles.get_role.return_value = Role.OWNER
        with pytest.raises(ProtectedAccountError):
            await service.remove_user(owner, "other-owner")
        accounts.delete_user.assert_not_called()


class TestSubmitRequest:
    @pytest.mark.asyncio
    async def test_moderator_files_pending_request(self, service, requests, accounts, moderator):
        outcome = await service.submit_request(
            moderator, USER_ID, ModerationActionType.REMOVE, "  spam account  "
        )

        requests.create.assert_called_once_with(
            USER_ID, MODERATOR_ID, ModerationActionType.REMOVE, "spam account"
        )
        accounts.delete_user.assert_not_called()
        assert outcome.success is True
        assert outcome.action is UserAction.REMOVE
        assert outcome.notifications[0].title == "Request Submitted"

    @pytest.mark.asyncio
    async def test_ban_request(self, service, requests, moderator):
        outcome = await service.submit_request(moderator, USER_ID, ModerationActionType.BAN, "abuse")
        assert outcome.action is UserAction.BAN
        requests.create.assert_called_once()

    @pytest.mark.asyncio
    async def test_blank_reason_rejected(self, service, requests, moderator):
        with pytest.raises(MissingReasonError):
            await service.submit_request(moderator, USER_ID, ModerationActionType.BAN, "   ")
        requests.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_owner_has_no_request_path(self, service, owner):
        with pytest.raises(UnsupportedActionError):
            await service.submit_request(owner, USER_ID, ModerationActionType.BAN, "abuse")

    @pytest.mark.asyncio
    async def test_plain_user_rejected(self, service):
        user = make_actor(USER_ID, Role.USER)
        with pytest.raises(InsufficientPermissionsError):
            await service.submit_request(user, "someone", ModerationActionType.BAN, "abuse")

    @pytest.mark.asyncio
    async def test_owner_target_protected(self, service, roles, requests, moderator):
        roles.get_role.return_value = Role.OWNER
        with pytest.raises(ProtectedAccountError):
            await service.submit_request(moderator, OWNER_ID, ModerationActionType.REMOVE, "x")
        requests.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_backend_failure(self, service, requests, moderator):
        requests.create.side_effect = PostgrestAPIError({"message": "boom"})

        outcome = await service.submit_request(moderator, USER_ID, ModerationActionType.BAN, "abuse")

        assert outcome.success is False
        assert outcome.notifications[0].description == "Failed to submit request"


class TestUnreachableBackend:
    @pytest.mark.asyncio
    async def test_list_users(self, service, profiles):
        profiles.list_all.side_effect = httpx.ConnectError("connection refused")

        result = await service.list_users(Role.OWNER)

        assert result.success is False
        assert result.notifications[0].description == "Failed to fetch users"

    @pytest.mark.asyncio
    async def test_change_role(self, service, roles, owner):
        roles.set_role.side_effect = httpx.ConnectError("connection refused")

        outcome = await service.change_role(owner, USER_ID, Role.MODERATOR)

        assert outcome.success is False
        assert outcome.notifications[0].description == "Failed to update user role"

    @pytest.mark.asyncio
    async def test_owner_check_times_out(self, service, roles, accounts, owner):
        roles.get_role.side_effect = httpx.ReadTimeout("timed out")

        outcome = await service.remove_user(owner, USER_ID)

        assert outcome.success is False
        assert outcome.notifications[0].description == "Failed to remove user"
        accounts.delete_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_submit_request(self, service, requests, moderator):
        requests.create.side_effect = httpx.ConnectError("connection refused")

        outcome = await service.submit_request(moderator, USER_ID, ModerationActionType.BAN, "abuse")

        assert outcome.success is False
        assert outcome.notifications[0].description == "Failed to submit request"

    @pytest.mark.asyncio
    async def test_guard_released_after_failure(self, service, roles, guard, owner):
        roles.set_role.side_effect = httpx.ConnectError("connection refused")
        await service.change_role(owner, USER_ID, Role.USER)
        assert not guard.is_active(UserAction.ROLE_CHANGE.value, USER_ID)
