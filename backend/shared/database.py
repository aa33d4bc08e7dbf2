"""
Database client factory for Supabase.

Provides service-role clients (for backend operations bypassing RLS),
anonymous clients (for sign-in and sign-up), and user-authenticated
clients (for operations respecting RLS).
"""

from typing import Optional

import httpx
from supabase import create_client, Client, AuthError, PostgrestAPIError

from .config import get_settings

# Errors a Supabase call can raise for a failed remote operation.
# httpx.HTTPError covers transport failures (connect, timeout) that
# neither the auth nor the PostgREST client wraps.
BACKEND_ERRORS = (AuthError, PostgrestAPIError, httpx.HTTPError)

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as reading every profile or deleting accounts through the
    auth admin API.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_anon_client() -> Client:
    """
    Get a fresh Supabase client with the anon key and no session.

    Sign-in and sign-up mutate the client's auth state, so each
    caller gets its own instance instead of a shared one.
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )
    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )


def get_supabase_user_client(access_token: str, refresh_token: str = "") -> Client:
    """
    Get Supabase client authenticated as a specific user.

    Use this for operations that should respect Row Level Security (RLS)
    or act on the user's own session, such as signing out.

    Args:
        access_token: JWT access token from Supabase Auth
        refresh_token: Refresh token, if the caller has one

    Returns:
        Supabase client configured with user's access token
    """
    client = get_supabase_anon_client()
    client.auth.set_session(access_token, refresh_token)
    return client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
