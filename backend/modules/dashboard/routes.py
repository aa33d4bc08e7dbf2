"""
Dashboard API endpoint.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_dashboard_service
from shared.models import AuthenticatedUser

from .interfaces import IDashboardService
from .models import DashboardView

router = APIRouter()


@router.get("", response_model=DashboardView)
async def get_dashboard(
    user: AuthenticatedUser = Depends(get_current_user),
    service: IDashboardService = Depends(get_dashboard_service),
) -> DashboardView:
    """
    Get the caller's profile, role and visible panels.

    Unauthenticated callers get 401 with redirect_to="/auth".
    """
    return await service.load(user)
