"""
Configuration package for the pad server settings.

This package resolves the settings every other component reads, merging
compiled-in defaults, environment variables and settings.json, and
publishes them through a SettingsStore.

Usage:
    from padserver.config import Settings, get_settings, reload_settings

    # Get the current snapshot (loaded on first access)
    settings = get_settings()
    print(settings.port)

    # Re-run the pipeline, e.g. after editing settings.json
    settings = reload_settings()

    # Private store, useful for testing
    from padserver.config import SettingsStore
    store = SettingsStore(root=tmp_path, settings_path="settings.json")
    print(store.current.title)
"""

from padserver.config.errors import (
    DatabaseUrlError,
    EnvironmentSettingsError,
    FatalSettingsError,
    SettingsError,
    SettingsParseError,
    SettingsValidationError,
)
from padserver.config.loader import load_settings
from padserver.config.settings import PLUGIN_PREFIX, Settings, SSLSettings
from padserver.config.store import (
    SettingsStore,
    bootstrap_settings,
    get_settings,
    get_settings_store,
    reload_settings,
)

__all__ = [
    "Settings",
    "SSLSettings",
    "PLUGIN_PREFIX",
    "SettingsStore",
    "load_settings",
    "get_settings",
    "get_settings_store",
    "reload_settings",
    "bootstrap_settings",
    "SettingsError",
    "FatalSettingsError",
    "SettingsParseError",
    "DatabaseUrlError",
    "EnvironmentSettingsError",
    "SettingsValidationError",
]
