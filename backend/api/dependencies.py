"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Repositories share the cached service-role Supabase client. Session
stores are the exception: each request gets a fresh one over its own
anon (or token-bound) client.
"""

from typing import TYPE_CHECKING, Optional

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from shared.guard import InFlightGuard
    from modules.auth.interfaces import IAuthService
    from modules.auth.session import SessionStore
    from modules.dashboard.interfaces import IDashboardService
    from modules.moderation.interfaces import IModerationService
    from modules.moderation.repository import ModerationRequestRepository
    from modules.users.interfaces import IUserManagementService
    from modules.users.repository import (
        AccountRepository,
        ProfileRepository,
        RoleRepository,
    )


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._auth_service: "IAuthService | None" = None
        self._dashboard_service: "IDashboardService | None" = None
        self._user_service: "IUserManagementService | None" = None
        self._moderation_service: "IModerationService | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._role_repository: "RoleRepository | None" = None
        self._account_repository: "AccountRepository | None" = None
        self._moderation_repository: "ModerationRequestRepository | None" = None
        self._guard: "InFlightGuard | None" = None

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService()
        return self._auth_service

    @property
    def guard(self) -> "InFlightGuard":
        """Get the in-flight action guard shared by all services."""
        if self._guard is None:
            from shared.guard import InFlightGuard
            self._guard = InFlightGuard()
        return self._guard

    @property
    def profile_repository(self) -> "ProfileRepository":
        """Get the profile repository instance."""
        if self._profile_repository is None:
            from modules.users.repository import ProfileRepository
            from shared.database import get_supabase_client
            self._profile_repository = ProfileRepository(get_supabase_client())
        return self._profile_repository

    @property
    def role_repository(self) -> "RoleRepository":
        """Get the role repository instance."""
        if self._role_repository is None:
            from modules.users.repository import RoleRepository
            from shared.database import get_supabase_client
            self._role_repository = RoleRepository(get_supabase_client())
        return self._role_repository

    @property
    def account_repository(self) -> "AccountRepository":
        """Get the account repository instance."""
        if self._account_repository is None:
            from modules.users.repository import AccountRepository
            from shared.database import get_supabase_client
            self._account_repository = AccountRepository(get_supabase_client())
        return self._account_repository

    @property
    def moderation_repository(self) -> "ModerationRequestRepository":
        """Get the moderation request repository instance."""
        if self._moderation_repository is None:
            from modules.moderation.repository import ModerationRequestRepository
            from shared.database import get_supabase_client
            self._moderation_repository = ModerationRequestRepository(get_supabase_client())
        return self._moderation_repository

    @property
    def dashboard(self) -> "IDashboardService":
        """Get the dashboard service instance."""
        if self._dashboard_service is None:
            from modules.dashboard.service import DashboardService
            self._dashboard_service = DashboardService(
                profiles=self.profile_repository,
                roles=self.role_repository,
            )
        return self._dashboard_service

    @property
    def users(self) -> "IUserManagementService":
        """Get the user management service instance."""
        if self._user_service is None:
            from modules.users.service import UserManagementService
            self._user_service = UserManagementService(
                profiles=self.profile_repository,
                roles=self.role_repository,
                accounts=self.account_repository,
                requests=self.moderation_repository,
                guard=self.guard,
            )
        return self._user_service

    @property
    def moderation(self) -> "IModerationService":
        """Get the moderation service instance."""
        if self._moderation_service is None:
            from modules.moderation.service import ModerationService
            self._moderation_service = ModerationService(
                requests=self.moderation_repository,
                accounts=self.account_repository,
                guard=self.guard,
            )
        return self._moderation_service

    def new_session_store(self, access_token: Optional[str] = None) -> "SessionStore":
        """
        Build an unstarted session store over a fresh Supabase client.

        Args:
            access_token: Bind the client to this user's session if given.

        Raises:
            AuthError: If the token cannot be turned into a session.
        """
        from modules.auth.session import SessionStore
        from shared.config import get_settings
        from shared.database import get_supabase_anon_client, get_supabase_user_client

        if access_token:
            client = get_supabase_user_client(access_token)
        else:
            client = get_supabase_anon_client()
        return SessionStore(
            client,
            profiles=self.profile_repository,
            redirect_url=get_settings().auth_redirect_url,
        )

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._auth_service = None
        self._dashboard_service = None
        self._user_service = None
        self._moderation_service = None
        self._profile_repository = None
        self._role_repository = None
        self._account_repository = None
        self._moderation_repository = None
        self._guard = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_dashboard_service() -> "IDashboardService":
    """FastAPI dependency for dashboard service."""
    return get_container().dashboard


def get_user_service() -> "IUserManagementService":
    """FastAPI dependency for user management service."""
    return get_container().users


def get_moderation_service() -> "IModerationService":
    """FastAPI dependency for moderation service."""
    return get_container().moderation


def get_role_repository() -> "RoleRepository":
    """FastAPI dependency for role repository."""
    return get_container().role_repository
