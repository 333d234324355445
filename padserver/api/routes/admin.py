"""
Administrative endpoints.

POST /admin/settings/reload re-runs the settings pipeline (environment,
settings.json, derivations) and publishes the result. Callers authenticate
with HTTP Basic credentials of a user from the ``users`` setting that has
``is_admin`` set.

A reload that hits a fatal settings error answers 422 and leaves the
previous settings live.
"""

from __future__ import annotations

import hmac
import secrets
from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from pydantic import BaseModel, Field

from padserver.api.dependencies import get_store
from padserver.config import SettingsStore

logger = structlog.get_logger(__name__)

security = HTTPBasic()
_UNKNOWN_USER_PASSWORD = secrets.token_urlsafe(32)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    responses={
        200: {"description": "Settings reloaded"},
        401: {"description": "Invalid credentials"},
        403: {"description": "User is not an admin"},
        422: {"description": "New settings could not be resolved"},
    },
)


class ReloadResponse(BaseModel):
    """Settings reload response."""

    status: str = Field(..., examples=["reloaded"])
    settings: dict[str, Any] = Field(
        ...,
        description="Secret-free summary of the newly published settings.",
    )


def require_admin(
    credentials: HTTPBasicCredentials = Depends(security),
    store: SettingsStore = Depends(get_store),
) -> str:
    """
    Authenticate the caller against the configured users.

    Returns:
        str: The authenticated admin username.

    Raises:
        HTTPException: 401 for unknown users or wrong passwords, 403 for
            users without admin rights.
    """
    settings = store.current
    user = settings.users.get(credentials.username) or {}
    expected = user.get("password")
    known_user = isinstance(expected, str)

    # Unknown users still pay for a comparison
    password_matches = hmac.compare_digest(
        (expected if known_user else _UNKNOWN_USER_PASSWORD).encode("utf-8"),
        credentials.password.encode("utf-8"),
    )
    if not (known_user and password_matches):
        logger.warning("admin_login_failed", username=credentials.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    if not settings.is_admin(credentials.username):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )

    return credentials.username


@router.post(
    "/settings/reload",
    response_model=ReloadResponse,
    summary="Reload settings",
)
def reload_settings(
    username: str = Depends(require_admin),
    store: SettingsStore = Depends(get_store),
) -> ReloadResponse:
    """Re-run the settings pipeline and publish the new snapshot."""
    logger.info("settings_reload_requested", username=username)
    settings = store.reload()
    return ReloadResponse(status="reloaded", settings=settings.summary())


__all__ = ["router", "require_admin", "ReloadResponse"]
