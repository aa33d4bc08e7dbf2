"""
Users repositories for database access.

Encapsulates Supabase queries and data mapping for:
- profiles
- user_roles
- auth users (admin deletion)

Backend failures (PostgrestAPIError, AuthError) propagate to the caller.
"""

from typing import Optional, Any

from shared.repository import BaseRepository
from .models import Profile, Role, RoleAssignment


class ProfileRepository(BaseRepository[Profile]):
    """
    Repository for the profiles table.

    Profiles are created by the database on sign-up; this code only reads them.
    """

    table_name = "profiles"

    def list_all(self) -> list[Profile]:
        """Load every profile in fetch order."""
        result = self._table().select("*").execute()
        return [self._map_to_profile(row) for row in result.data or []]

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        """
        Get the profile linked to an auth user.

        Args:
            user_id: The auth user UUID.

        Returns:
            Profile, or None if the user has no profile row.
        """
        result = self._table().select("*").eq("user_id", user_id).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def get_email_by_username(self, username: str) -> Optional[str]:
        """Resolve a username to the email it signs in with."""
        result = self._table().select("email").eq("username", username).limit(1).execute()
        if not result.data:
            return None
        return result.data[0].get("email") or None

    def _map_to_profile(self, data: dict[str, Any]) -> Profile:
        """Map database row to Profile model."""
        return Profile(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            email=data.get("email") or "",
            full_name=data.get("full_name") or "",
            username=data.get("username") or "",
            created_at=data["created_at"],
        )


class RoleRepository(BaseRepository[RoleAssignment]):
    """Repository for the user_roles table (one row per user)."""

    table_name = "user_roles"

    def list_all(self) -> list[RoleAssignment]:
        """Load every role assignment."""
        result = self._table().select("user_id, role").execute()
        return [self._map_to_assignment(row) for row in result.data or []]

    def get_role(self, user_id: str) -> Role:
        """
        Get a user's assigned role.

        Returns:
            The stored role, or Role.UNASSIGNED if the user has no row.
        """
        result = self._table().select("role").eq("user_id", user_id).limit(1).execute()
        if not result.data:
            return Role.UNASSIGNED
        return Role(result.data[0]["role"])

    def set_role(self, user_id: str, role: Role) -> RoleAssignment:
        """
        Set a user's role, creating the row if the user had none.

        Args:
            user_id: The auth user UUID.
            role: The role to store.
        """
        data = {"user_id": user_id, "role": role.value}
        result = self._table().upsert(data, on_conflict="user_id").execute()
        if result.data:
            return self._map_to_assignment(result.data[0])
        return RoleAssignment(user_id=user_id, role=role)

    def _map_to_assignment(self, data: dict[str, Any]) -> RoleAssignment:
        """Map database row to RoleAssignment model."""
        return RoleAssignment(user_id=str(data["user_id"]), role=Role(data["role"]))


class AccountRepository(BaseRepository[None]):
    """
    Account deletion through the Supabase auth admin API.

    Requires a service-role client. Profile and role rows are removed by
    ON DELETE CASCADE in the database.
    """

    def delete_user(self, user_id: str) -> None:
        """Delete an auth user and everything that cascades from it."""
        self._db.auth.admin.delete_user(user_id)
