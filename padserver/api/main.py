"""
FastAPI application factory.

The application publishes no settings of its own: it is handed a
SettingsStore and reads snapshots from it on every request, so a runtime
reload is visible to the next request.

Features:
    - Settings bootstrap on startup (process exits on fatal settings errors)
    - Health check endpoint (/health)
    - Admin settings reload endpoint (/admin/settings/reload)
    - Consistent JSON error responses

Usage:
    # Run through the CLI (resolves --settings first)
    padserver --settings settings.json

    # Or create an app programmatically (useful for testing)
    from padserver.api.main import create_app
    from padserver.config import SettingsStore

    app = create_app(SettingsStore(root=tmp_path))
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from padserver import __version__
from padserver.api.routes import admin_router, health_router
from padserver.config import (
    FatalSettingsError,
    SettingsStore,
    bootstrap_settings,
    get_settings_store,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = structlog.get_logger(__name__)


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifespan events.

    Startup:
        - Loads settings into the application's store (exits on fatal errors)
        - Logs startup information

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded to the application after startup.
    """
    # === Startup ===
    settings = bootstrap_settings(app.state.settings_store)
    logger.info(
        "application_started",
        version=__version__,
        title=settings.title,
        db_type=settings.db_type,
    )

    yield  # Application runs here

    # === Shutdown ===
    logger.info("application_shutdown")


# =============================================================================
# Application Factory
# =============================================================================


def create_app(store: SettingsStore | None = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        store: SettingsStore to serve. Defaults to the process-wide store.
            Settings are not loaded until the application starts.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="padserver",
        description="Pad server settings, health and administration API.",
        version=__version__,
        lifespan=lifespan,
    )
    application.state.settings_store = store or get_settings_store()

    _register_error_handlers(application)
    _register_routes(application)

    return application


# =============================================================================
# Error Handlers
# =============================================================================


def _register_error_handlers(app: FastAPI) -> None:
    """Register global error handlers for the application."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request, exc: HTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions with consistent response format."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "status_code": exc.status_code,
                "error_type": "http_error",
            },
            headers=exc.headers,
        )

    @app.exception_handler(FatalSettingsError)
    async def settings_error_handler(
        request: Request, exc: FatalSettingsError
    ) -> JSONResponse:
        """
        Handle settings that failed to resolve at runtime.

        The previously published settings stay live, so the server keeps
        running and the operator gets the reason back.
        """
        logger.error(
            "settings_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=str(request.url.path),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": str(exc),
                "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "error_type": "settings_error",
            },
        )


# =============================================================================
# Route Registration
# =============================================================================


def _register_routes(app: FastAPI) -> None:
    """Register API routes with the application."""
    app.include_router(health_router)
    app.include_router(admin_router)


__all__ = ["create_app", "lifespan"]
