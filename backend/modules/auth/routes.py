"""
Auth API endpoints.

Sign-in, sign-up and sign-out over a request-scoped SessionStore.
Provider failures come back as notifications with a 4xx status rather
than as exceptions.
"""

from fastapi import APIRouter, Depends, Response, status

from api.middleware.auth import get_current_user, get_session_store
from shared.models import AuthenticatedUser, Notification, Screen

from .models import AuthResponse, SessionStatus, SignInRequest, SignUpRequest
from .session import SessionStore

router = APIRouter()


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    request: SignInRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """
    Sign in with an email or username and a password.

    Returns the session tokens and redirect_to="/dashboard" on success,
    401 with a "Sign In Failed" notification otherwise.
    """
    result = store.sign_in(request.email_or_username, request.password)
    if not result.ok:
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return AuthResponse(
            success=False,
            error=result.error,
            notifications=[Notification.error(result.error.message, title="Sign In Failed")],
        )

    return AuthResponse(
        session=result.session,
        redirect_to=Screen.DASHBOARD.value,
        notifications=[
            Notification.success("You have been signed in successfully.", title="Welcome back!")
        ],
    )


@router.post("/signup", response_model=AuthResponse)
async def sign_up(
    request: SignUpRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """
    Create an account and sign it in.

    Returns 400 with a "Sign Up Failed" notification if registration or
    the follow-up sign-in fails.
    """
    result = store.sign_up(request.email, request.password, request.full_name, request.username)
    if not result.ok:
        response.status_code = status.HTTP_400_BAD_REQUEST
        return AuthResponse(
            success=False,
            error=result.error,
            notifications=[Notification.error(result.error.message, title="Sign Up Failed")],
        )

    return AuthResponse(
        session=result.session,
        redirect_to=Screen.DASHBOARD.value,
        notifications=[Notification.success("Welcome to the platform!", title="Account Created!")],
    )


@router.post("/signout", response_model=AuthResponse)
async def sign_out(
    user: AuthenticatedUser = Depends(get_current_user),
    store: SessionStore = Depends(get_session_store),
) -> AuthResponse:
    """
    Sign out and return to the auth screen.

    Always answers 200; a provider failure is only reported as a
    notification.
    """
    notification = store.sign_out()
    return AuthResponse(
        redirect_to=Screen.AUTH.value,
        notifications=[notification] if notification else [],
    )


@router.get("/session", response_model=SessionStatus)
async def get_session(store: SessionStore = Depends(get_session_store)) -> SessionStatus:
    """Who the bearer token (if any) is signed in as."""
    snapshot = store.snapshot()
    return SessionStatus(
        user=snapshot.user,
        authenticated=snapshot.session is not None,
        loading=snapshot.loading,
    )
