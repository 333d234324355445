"""
Health check endpoint.

Reports that the server is up together with a few non-secret facts about the
settings snapshot it is currently serving.

Example Response:
    {
        "status": "ok",
        "title": "Etherpad",
        "version": "1.0.0",
        "db_type": "dirty",
        "plugins": ["ep_comments"]
    }
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from padserver import __version__
from padserver.api.dependencies import get_store
from padserver.config import SettingsStore

# =============================================================================
# Response Models
# =============================================================================


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str = Field(..., examples=["ok"])
    title: str = Field(..., examples=["Etherpad"])
    version: str = Field(..., examples=["1.0.0"])
    db_type: str = Field(..., examples=["dirty"])
    plugins: list[str] = Field(default_factory=list, examples=[["ep_comments"]])


# =============================================================================
# Router Definition
# =============================================================================

router = APIRouter(
    tags=["Health"],
    responses={200: {"description": "Server is healthy"}},
)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
)
async def health_check(store: SettingsStore = Depends(get_store)) -> HealthResponse:
    """Return server status and the identity of the live settings."""
    settings = store.current
    return HealthResponse(
        status="ok",
        title=settings.title,
        version=__version__,
        db_type=settings.db_type,
        plugins=sorted(settings.plugins),
    )


__all__ = ["router", "HealthResponse"]
