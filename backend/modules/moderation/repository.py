"""
Moderation repository for database access.

Encapsulates all Supabase queries and data mapping for the
moderation_requests table, plus the profile lookups that decorate
requests for display. Rows are never deleted by this code.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from shared.repository import BaseRepository
from .models import ModerationActionType, ModerationRequest, ModerationStatus, ProfileSnippet


class ModerationRequestRepository(BaseRepository[ModerationRequest]):
    """
    Repository for moderation request data access.

    Note: This repository does NOT perform authorization checks.
    The service layer and route dependencies are responsible for that.
    """

    table_name = "moderation_requests"

    def create(
        self,
        target_user_id: str,
        requester_id: str,
        action_type: ModerationActionType,
        reason: str,
    ) -> ModerationRequest:
        """
        Insert a new pending request.

        Args:
            target_user_id: The user the action is proposed against.
            requester_id: The moderator submitting the request.
            action_type: ban or remove.
            reason: Free-text justification.

        Returns:
            The created request with generated ID and timestamps.
        """
        data = {
            "target_user_id": target_user_id,
            "requester_id": requester_id,
            "action_type": action_type.value,
            "reason": reason,
            "status": ModerationStatus.PENDING.value,
        }
        result = self._table().insert(data).execute()
        return self._map_to_request(result.data[0])

    def list_all(self) -> list[ModerationRequest]:
        """All requests, newest first."""
        result = self._table().select("*").order("created_at", desc=True).execute()
        return [self._map_to_request(row) for row in result.data or []]

    def get_by_id(self, request_id: str) -> Optional[ModerationRequest]:
        """Get a request by ID, or None if it does not exist."""
        result = self._table().select("*").eq("id", request_id).limit(1).execute()
        if not result.data:
            return None
        return self._map_to_request(result.data[0])

    def mark_reviewed(
        self,
        request_id: str,
        status: ModerationStatus,
    ) -> Optional[ModerationRequest]:
        """
        Move a pending request to a final status and stamp reviewed_at.

        The update only matches rows still pending, so a request is
        decided at most once.

        Returns:
            The updated request, or None if no pending row matched.
        """
        data = {
            "status": status.value,
            "reviewed_at": datetime.now(timezone.utc).isoformat(),
        }
        result = (
            self._table()
            .update(data)
            .eq("id", request_id)
            .eq("status", ModerationStatus.PENDING.value)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_request(result.data[0])

    def get_profile_snippet(self, user_id: str, include_email: bool = False) -> Optional[ProfileSnippet]:
        """
        Display fields of the profile joined onto a request.

        Args:
            user_id: The auth user UUID.
            include_email: Also select the email column.

        Returns:
            ProfileSnippet, or None if the user has no profile.
        """
        columns = "full_name, username, email" if include_email else "full_name, username"
        result = self._db.table("profiles").select(columns).eq("user_id", user_id).limit(1).execute()
        if not result.data:
            return None
        row = result.data[0]
        return ProfileSnippet(
            full_name=row.get("full_name"),
            username=row.get("username"),
            email=row.get("email") if include_email else None,
        )

    def _map_to_request(self, data: dict[str, Any]) -> ModerationRequest:
        """Map database row to ModerationRequest model."""
        return ModerationRequest(
            id=str(data["id"]),
            action_type=ModerationActionType(data["action_type"]),
            reason=data.get("reason") or "",
            status=ModerationStatus(data["status"]),
            created_at=data["created_at"],
            reviewed_at=data.get("reviewed_at"),
            target_user_id=str(data["target_user_id"]),
            requester_id=str(data["requester_id"]),
        )
