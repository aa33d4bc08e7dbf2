"""
Dashboard module interface.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import DashboardView


@runtime_checkable
class IDashboardService(Protocol):
    """Interface for assembling the role-gated dashboard."""

    async def load(self, user: AuthenticatedUser) -> DashboardView:
        """
        Load the caller's profile and role and pick the panels to show.

        Backend failures are reported as notifications, never raised.
        """
        ...
