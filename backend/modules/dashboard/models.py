"""
Dashboard module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from shared.models import Outcome
from modules.users.models import Profile, Role


class Panel(str, Enum):
    """Dashboard sections, in display order."""

    PROFILE = "profile"
    OWNER_CONTROLS = "owner_controls"
    MODERATOR_TOOLS = "moderator_tools"
    USER_MANAGEMENT = "user_management"
    MODERATION_REQUESTS = "moderation_requests"


# Panels rendered for each effective role
ROLE_PANELS: dict[Role, tuple[Panel, ...]] = {
    Role.OWNER: (
        Panel.PROFILE,
        Panel.OWNER_CONTROLS,
        Panel.USER_MANAGEMENT,
        Panel.MODERATION_REQUESTS,
    ),
    Role.MODERATOR: (
        Panel.PROFILE,
        Panel.MODERATOR_TOOLS,
        Panel.USER_MANAGEMENT,
    ),
    Role.USER: (Panel.PROFILE,),
}


def panels_for_role(role: Role) -> list[Panel]:
    """Panels visible to a role; unassigned users see what users see."""
    return list(ROLE_PANELS[role.effective])


class DashboardView(Outcome):
    """
    The caller's dashboard.

    When the profile cannot be loaded, profile and role stay unset and
    no panels are shown.
    """

    profile: Optional[Profile] = None
    role: Optional[Role] = Field(None, description="Stored role, or 'unassigned'")
    effective_role: Optional[Role] = None
    panels: list[Panel] = Field(default_factory=list)
    redirect_to: Optional[str] = None
