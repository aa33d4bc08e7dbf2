"""
Dashboard module.

Picks the panels a signed-in user sees from their role.

Public API:
- IDashboardService: Interface for loading the dashboard
- DashboardView, Panel: Dashboard models
- panels_for_role: Role to panel mapping
"""

from .interfaces import IDashboardService
from .models import DashboardView, Panel, ROLE_PANELS, panels_for_role

__all__ = [
    "IDashboardService",
    "DashboardView",
    "Panel",
    "ROLE_PANELS",
    "panels_for_role",
]
