"""
Landing endpoint.

Public entry point; signed-in callers are sent on to the dashboard.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import get_settings
from shared.models import AuthenticatedUser, Screen
from ..middleware.auth import get_optional_user

router = APIRouter()


class LandingResponse(BaseModel):
    """Landing page response model."""

    app_name: str
    authenticated: bool
    redirect_to: Optional[str] = None


@router.get("/landing", response_model=LandingResponse)
async def landing(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> LandingResponse:
    """
    Landing page data.

    Anonymous callers stay here; authenticated callers get
    redirect_to="/dashboard".
    """
    return LandingResponse(
        app_name=get_settings().app_name,
        authenticated=user is not None,
        redirect_to=Screen.DASHBOARD.value if user else None,
    )
