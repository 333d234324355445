"""
API package for the pad server.

Package Structure:
    - main.py: FastAPI application factory
    - dependencies.py: shared request dependencies
    - routes/: endpoint definitions
        - health.py: health check
        - admin.py: runtime settings reload

Usage:
    from padserver.api import create_app

    app = create_app()
"""

from __future__ import annotations

from padserver.api.main import create_app

__all__ = ["create_app"]
