"""
Dashboard service.

Fetches the caller's profile, then their role, and decides which panels
the dashboard renders.
"""

import logging

from shared.database import BACKEND_ERRORS
from shared.models import AuthenticatedUser, Notification
from modules.users.repository import ProfileRepository, RoleRepository
from modules.users.service import resolve_role

from .interfaces import IDashboardService
from .models import DashboardView, panels_for_role

logger = logging.getLogger(__name__)


class DashboardService(IDashboardService):
    """Dashboard assembly backed by the profiles and user_roles tables."""

    def __init__(self, profiles: ProfileRepository, roles: RoleRepository):
        self._profiles = profiles
        self._roles = roles

    async def load(self, user: AuthenticatedUser) -> DashboardView:
        try:
            profile = self._profiles.get_by_user_id(user.id)
        except BACKEND_ERRORS as e:
            logger.error("Failed to fetch profile for %s: %s", user.id, e)
            profile = None

        if profile is None:
            # Role is not looked up without a profile
            return DashboardView(
                success=False,
                notifications=[Notification.error("Failed to fetch profile data")],
            )

        role = resolve_role(self._roles, user.id)
        logger.debug("Dashboard for %s with role %s", user.id, role.value)
        return DashboardView(
            profile=profile,
            role=role,
            effective_role=role.effective,
            panels=panels_for_role(role),
        )
