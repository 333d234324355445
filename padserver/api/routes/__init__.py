"""
API routes package.

Usage:
    from padserver.api.routes import admin_router, health_router

    app.include_router(health_router)
    app.include_router(admin_router)
"""

from __future__ import annotations

from padserver.api.routes.admin import router as admin_router
from padserver.api.routes.health import router as health_router

__all__ = [
    "health_router",
    "admin_router",
]
