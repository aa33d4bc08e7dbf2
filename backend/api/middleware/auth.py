"""
JWT Authentication middleware.

Validates Supabase JWT tokens, resolves application roles, and opens a
request-scoped session store.
"""

import logging
from typing import Iterator, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import httpx
from supabase import AuthError

from shared.exceptions import AuthenticationError, ExternalServiceError
from shared.models import AuthenticatedUser
from modules.auth.exceptions import (
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingTokenError,
)
from modules.auth.session import SessionStore
from modules.users.models import Actor, Role
from modules.users.repository import RoleRepository
from modules.users.service import resolve_role

from ..dependencies import get_container, get_role_repository

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingTokenError("Missing authorization header")

    return await get_container().auth.validate_token(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    Invalid or expired tokens are treated as anonymous.
    """
    if credentials is None:
        return None

    try:
        return await get_container().auth.validate_token(credentials.credentials)
    except AuthenticationError:
        return None


def require_roles(*allowed: Role):
    """
    Build a dependency that admits only callers with one of the given roles.

    Roles are compared after mapping 'unassigned' to 'user'. The
    dependency resolves to an Actor carrying the effective role.

    Usage:
        @router.delete("/{user_id}")
        async def remove(actor: Actor = Depends(require_roles(Role.OWNER))):
            ...
    """

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
        roles: RoleRepository = Depends(get_role_repository),
    ) -> Actor:
        role = resolve_role(roles, user.id).effective
        if role not in allowed:
            raise InsufficientPermissionsError(
                required_role=" or ".join(r.value for r in allowed),
                user_role=role.value,
            )
        return Actor(user=user, role=role)

    return dependency


def get_session_store(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Iterator[SessionStore]:
    """
    Dependency that yields a started SessionStore for this request.

    The store is bound to the caller's bearer token when one is sent and
    closed once the response is produced.
    """
    access_token = credentials.credentials if credentials else None
    try:
        store = get_container().new_session_store(access_token)
    except AuthError as e:
        logger.info("Rejected session token: %s", e)
        raise InvalidTokenError(f"Invalid session: {e}")
    except httpx.HTTPError as e:
        logger.error("Auth provider unreachable while opening session: %s", e)
        raise ExternalServiceError("Authentication service unavailable", service="supabase")

    store.start()
    try:
        yield store
    finally:
        store.close()

