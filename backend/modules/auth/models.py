"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from shared.models import Outcome


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role claim")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class SessionUser(BaseModel):
    """The auth-provider user attached to a session."""

    id: str
    email: str = ""
    full_name: Optional[str] = None
    username: Optional[str] = None

    model_config = {"frozen": True}


class AuthSession(BaseModel):
    """Tokens issued by the auth provider for a signed-in user."""

    access_token: str
    refresh_token: str = ""
    token_type: str = "bearer"
    expires_at: Optional[int] = None
    user: SessionUser


class AuthFailure(BaseModel):
    """Error value returned by sign-in/sign-up instead of raising."""

    message: str
    code: str = "AUTH_ERROR"


class AuthResult(BaseModel):
    """Result of a sign-in or sign-up attempt."""

    session: Optional[AuthSession] = None
    error: Optional[AuthFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, message: str, code: str = "AUTH_ERROR") -> "AuthResult":
        return cls(error=AuthFailure(message=message, code=code))


class SessionSnapshot(BaseModel):
    """Read-only view of a session store's state."""

    user: Optional[SessionUser] = None
    session: Optional[AuthSession] = None
    loading: bool = True


class SignInRequest(BaseModel):
    """Credentials for signing in with an email or a username."""

    email_or_username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignUpRequest(BaseModel):
    """Account details for registration."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)


class SessionStatus(BaseModel):
    """Who the caller is signed in as, without exposing tokens."""

    user: Optional[SessionUser] = None
    authenticated: bool = False
    loading: bool = False


class AuthResponse(Outcome):
    """API response for sign-in, sign-up and sign-out."""

    session: Optional[AuthSession] = None
    error: Optional[AuthFailure] = None
    redirect_to: Optional[str] = None
