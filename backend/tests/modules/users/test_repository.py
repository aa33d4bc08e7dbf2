"""Tests for users repositories."""

import pytest
from unittest.mock import MagicMock

from modules.users.models import Role
from modules.users.repository import AccountRepository, ProfileRepository, RoleRepository
from tests.conftest import profile_row, query_result


class TestProfileRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return ProfileRepository(mock_db)

    def test_list_all_keeps_fetch_order(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.execute.return_value = query_result(
            [profile_row("b"), profile_row("a")]
        )

        profiles = repo.list_all()

        mock_db.table.assert_called_with("profiles")
        assert [p.user_id for p in profiles] == ["b", "a"]

    def test_list_all_empty(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.execute.return_value = query_result(None)
        assert repo.list_all() == []

    def test_get_by_user_id(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = query_result([profile_row("user-1", username="alice")])

        profile = repo.get_by_user_id("user-1")

        mock_db.table.return_value.select.return_value.eq.assert_called_with("user_id", "user-1")
        assert profile.username == "alice"
        assert profile.email == "user-1@example.com"

    def test_get_by_user_id_missing(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = query_result([])
        assert repo.get_by_user_id("nobody") is None

    def test_get_email_by_username(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = query_result([{"email": "alice@example.com"}])

        assert repo.get_email_by_username("alice") == "alice@example.com"
        mock_db.table.return_value.select.assert_called_with("email")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("username", "alice")

    def test_get_email_by_unknown_username(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = query_result([])
        assert repo.get_email_by_username("ghost") is None

    def test_null_columns_mapped_to_empty_strings(self, repo):
        row = profile_row("user-1")
        row.update({"full_name": None, "username": None})
        profile = repo._map_to_profile(row)
        assert profile.full_name == ""
        assert profile.username == ""


class TestRoleRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return RoleRepository(mock_db)

    def test_get_role(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = query_result([{"role": "moderator"}])

        assert repo.get_role("user-1") is Role.MODERATOR
        mock_db.table.assert_called_with("user_roles")

    def test_get_role_without_row_is_unassigned(self, repo, mock_db):
        chain = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        chain.execute.return_value = query_result([])

        role = repo.get_role("user-1")

        assert role is Role.UNASSIGNED
        assert role.effective is Role.USER

    def test_list_all(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.execute.return_value = query_result(
            [{"user_id": "a", "role": "owner"}, {"user_id": "b", "role": "user"}]
        )

        assignments = repo.list_all()

        assert [(a.user_id, a.role) for a in assignments] == [("a", Role.OWNER), ("b", Role.USER)]

    def test_set_role_upserts_on_user_id(self, repo, mock_db):
        upsert = mock_db.table.return_value.upsert
        upsert.return_value.execute.return_value = query_result(
            [{"user_id": "user-1", "role": "moderator"}]
        )

        assignment = repo.set_role("user-1", Role.MODERATOR)

        upsert.assert_called_once_with(
            {"user_id": "user-1", "role": "moderator"}, on_conflict="user_id"
        )
        assert assignment.role is Role.MODERATOR

    def test_set_role_without_returned_row(self, repo, mock_db):
        mock_db.table.return_value.upsert.return_value.execute.return_value = query_result([])
        assignment = repo.set_role("user-1", Role.USER)
        assert assignment.user_id == "user-1"
        assert assignment.role is Role.USER


class TestAccountRepository:
    def test_delete_user_uses_admin_api(self):
        mock_db = MagicMock()
        AccountRepository(mock_db).delete_user("user-1")
        mock_db.auth.admin.delete_user.assert_called_once_with("user-1")
