"""
Settings resolution pipeline.

    defaults  ->  locate settings.json  ->  parse  ->  merge  ->  validate  ->  derive

Each call runs every stage from scratch: the environment is read again, the
settings file is re-read and derivations run again. The function never
touches published state; publishing is the job of SettingsStore.

Usage:
    from padserver.config.loader import load_settings

    settings = load_settings(settings_path="settings.local.json")
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from padserver.config.defaults import build_defaults
from padserver.config.derive import LoggingConfigurator, derive_settings
from padserver.config.errors import SettingsValidationError
from padserver.config.locator import DEFAULT_ROOT, locate_settings_file
from padserver.config.merge import merge_overrides
from padserver.config.parser import load_overrides
from padserver.config.settings import Settings
from padserver.logging import configure_logging

logger = structlog.get_logger(__name__)


def validate_settings(merged: Mapping[str, Any]) -> Settings:
    """
    Check merged values against the declared schema.

    Raises:
        SettingsValidationError: Listing every key whose value is invalid.
    """
    try:
        return Settings.model_validate(dict(merged))
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: "
            f"{error['msg']}"
            for error in e.errors()
        ]
        raise SettingsValidationError(problems) from e


def load_settings(
    root: Path | str = DEFAULT_ROOT,
    settings_path: str | None = None,
    configure_logs: LoggingConfigurator = configure_logging,
) -> Settings:
    """
    Resolve settings from defaults, environment and settings.json.

    Args:
        root: Installation root the settings file is resolved against.
        settings_path: Optional settings file override (``--settings``).
        configure_logs: Logging collaborator applied during derivation.

    Returns:
        Settings: Fully resolved settings, ready to publish.

    Raises:
        FatalSettingsError: If the environment, the settings file or the
            merged values are invalid.
    """
    defaults = build_defaults()
    path = locate_settings_file(root, settings_path)
    overrides = load_overrides(path)

    merged = merge_overrides(defaults, overrides, Settings.known_keys())
    settings = validate_settings(merged)
    settings = derive_settings(settings, configure_logs)

    logger.info("settings_loaded", path=str(path), **settings.summary())
    return settings


__all__ = ["validate_settings", "load_settings"]
