"""
Session store.

Holds the auth state of one Supabase client and exposes sign-up,
sign-in and sign-out on top of it. A store is created explicitly,
started, used, then closed:

    store = SessionStore(client, profiles, redirect_url)
    store.start()
    try:
        result = store.sign_in("alice", "secret")
    finally:
        store.close()

start() subscribes to auth state changes before reading the current
session, so a change landing between the two is not lost. Reading state
outside start()/close() raises SessionNotStartedError.
"""

import logging
from typing import Any, Optional

import httpx
from supabase import AuthError, Client

from shared.database import BACKEND_ERRORS
from shared.models import Notification
from modules.users.repository import ProfileRepository

from .exceptions import SessionNotStartedError
from .models import AuthResult, AuthSession, SessionSnapshot, SessionUser

logger = logging.getLogger(__name__)

# Shown when the auth provider could not be reached at all
UNEXPECTED_ERROR = "An unexpected error occurred"


class SessionStore:
    """
    Auth state and operations for a single Supabase client.

    sign_in and sign_up report failures through AuthResult.error and
    never raise for provider or lookup errors. sign_out reports failure
    as a Notification.
    """

    def __init__(
        self,
        client: Client,
        profiles: ProfileRepository,
        redirect_url: str = "",
    ) -> None:
        self._client = client
        self._profiles = profiles
        self._redirect_url = redirect_url

        self._user: Optional[SessionUser] = None
        self._session: Optional[AuthSession] = None
        self._loading = True
        self._subscription: Any = None
        self._started = False

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> "SessionStore":
        """Subscribe to auth changes, then load the existing session."""
        if self._started:
            return self
        self._started = True

        self._subscription = self._client.auth.on_auth_state_change(self._on_auth_state_change)

        try:
            session = self._client.auth.get_session()
        except (AuthError, httpx.HTTPError) as e:
            logger.warning("Initial session check failed: %s", e)
            session = None
        self._apply(session)
        return self

    def close(self) -> None:
        """Unsubscribe from auth changes. Safe to call more than once."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self._started = False

    def __enter__(self) -> "SessionStore":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def user(self) -> Optional[SessionUser]:
        self._require_started()
        return self._user

    @property
    def session(self) -> Optional[AuthSession]:
        self._require_started()
        return self._session

    @property
    def loading(self) -> bool:
        self._require_started()
        return self._loading

    def snapshot(self) -> SessionSnapshot:
        """Current user, session and loading flag."""
        self._require_started()
        return SessionSnapshot(user=self._user, session=self._session, loading=self._loading)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def sign_up(self, email: str, password: str, full_name: str, username: str) -> AuthResult:
        """
        Register an account and make sure it ends up signed in.

        If the provider does not return a session (email confirmation
        enabled), a password sign-in with the same credentials follows.
        The first error to occur is returned.
        """
        self._require_started()
        logger.info("Starting sign-up for %s", email)

        try:
            response = self._client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {
                        "email_redirect_to": self._redirect_url,
                        "data": {"full_name": full_name, "username": username},
                    },
                }
            )
        except AuthError as e:
            logger.error("Sign-up failed for %s: %s", email, e)
            return AuthResult.failed(str(e), code=_error_code(e))
        except httpx.HTTPError as e:
            logger.error("Sign-up request failed for %s: %s", email, e)
            return _unreachable()

        if response.session is None:
            logger.info("No session returned on sign-up for %s; signing in", email)
            return self._password_sign_in(email, password)

        self._apply(response.session)
        return AuthResult(session=self._session)

    def sign_in(self, email_or_username: str, password: str) -> AuthResult:
        """
        Sign in with an email, or a username resolved to its email.

        Identifiers without "@" are looked up in profiles first; an
        unknown username fails without calling the auth provider.
        """
        self._require_started()
        email = email_or_username

        if "@" not in email_or_username:
            try:
                email = self._profiles.get_email_by_username(email_or_username)
            except BACKEND_ERRORS as e:
                logger.error("Username lookup failed for %s: %s", email_or_username, e)
                return AuthResult.failed("Error looking up username", code="USERNAME_LOOKUP_FAILED")

            if not email:
                logger.info("Username not found: %s", email_or_username)
                return AuthResult.failed("Username not found", code="USERNAME_NOT_FOUND")

        return self._password_sign_in(email, password)

    def sign_out(self) -> Optional[Notification]:
        """
        Sign out of the provider.

        Returns:
            None on success, or an error Notification. Never raises for
            provider errors.
        """
        self._require_started()
        try:
            self._client.auth.sign_out()
        except AuthError as e:
            logger.error("Sign-out failed: %s", e)
            return Notification.error(str(e))
        except httpx.HTTPError as e:
            logger.error("Sign-out request failed: %s", e)
            return Notification.error(UNEXPECTED_ERROR)

        self._apply(None)
        return None

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _password_sign_in(self, email: str, password: str) -> AuthResult:
        try:
            response = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except AuthError as e:
            logger.warning("Sign-in failed for %s: %s", email, e)
            return AuthResult.failed(str(e), code=_error_code(e))
        except httpx.HTTPError as e:
            logger.error("Sign-in request failed for %s: %s", email, e)
            return _unreachable()

        self._apply(response.session)
        logger.info("Signed in %s", email)
        return AuthResult(session=self._session)

    def _on_auth_state_change(self, event: Any, session: Any) -> None:
        logger.debug("Auth state change: %s", event)
        self._apply(session)

    def _apply(self, session: Any) -> None:
        self._session = _map_session(session) if session is not None else None
        self._user = self._session.user if self._session else None
        self._loading = False

    def _require_started(self) -> None:
        if not self._started:
            raise SessionNotStartedError()


def _unreachable() -> AuthResult:
    return AuthResult.failed(UNEXPECTED_ERROR, code="AUTH_UNREACHABLE")


def _error_code(error: AuthError) -> str:
    code = getattr(error, "code", None)
    return str(code).upper() if code else "AUTH_ERROR"


def _map_session(session: Any) -> AuthSession:
    """Map a Supabase Session object to AuthSession."""
    user = session.user
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token or "",
        token_type=session.token_type or "bearer",
        expires_at=session.expires_at,
        user=SessionUser(
            id=str(user.id),
            email=user.email or "",
            full_name=metadata.get("full_name"),
            username=metadata.get("username"),
        ),
    )
