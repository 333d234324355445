"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import Request

from padserver.config import SettingsStore


def get_store(request: Request) -> SettingsStore:
    """Return the SettingsStore the application was created with."""
    return request.app.state.settings_store


__all__ = ["get_store"]
