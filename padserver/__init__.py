"""
padserver: settings resolution for a collaborative pad server.

Package Structure:
    - config/: settings schema, defaults, settings.json parsing and the
      published SettingsStore
    - logging.py: structlog configuration driven by settings
    - api/: FastAPI application with health and admin reload endpoints
    - cli.py: command-line entry point
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
