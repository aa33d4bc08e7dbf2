"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    RolegateError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ExternalServiceError,
)
from shared.models import Screen
from .routes import health, landing
from modules.auth.routes import router as auth_router
from modules.dashboard.routes import router as dashboard_router
from modules.users.routes import router as users_router
from modules.moderation.routes import router as moderation_router

logger = logging.getLogger(__name__)

# Most specific first; RolegateError itself falls through to 500
ERROR_STATUS_CODES: list[tuple[type[RolegateError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (ConflictError, 409),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ConfigurationError, 500),
    (ExternalServiceError, 502),
]


def status_code_for(error: RolegateError) -> int:
    """HTTP status for an application error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


async def handle_rolegate_error(request: Request, exc: RolegateError) -> JSONResponse:
    """Render application errors as {error, message, details}."""
    status_code = status_code_for(exc)
    body = exc.to_dict()
    headers = None

    if isinstance(exc, AuthenticationError):
        body["redirect_to"] = Screen.AUTH.value
        headers = {"WWW-Authenticate": "Bearer"}

    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.code)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Role-based dashboard API: owners, moderators and users",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RolegateError, handle_rolegate_error)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(landing.router, prefix="/api", tags=["landing"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(moderation_router, prefix="/api/moderation", tags=["moderation"])

    return app


# Application instance for uvicorn
app = create_app()
