"""
Published settings.

SettingsStore owns the settings snapshot the rest of the process reads. A
reload runs the whole pipeline into a new Settings object and only then
swaps the reference, so readers either see the old snapshot or the new one,
never a mix. Reloads are serialized with a lock because they can be
triggered at runtime through the admin API.

Usage:
    from padserver.config import get_settings, reload_settings

    settings = get_settings()       # first call loads
    settings = reload_settings()    # full re-run, atomically published
"""

from __future__ import annotations

import threading
from functools import lru_cache
from pathlib import Path

import structlog

from padserver.config.derive import LoggingConfigurator
from padserver.config.errors import FatalSettingsError
from padserver.config.loader import load_settings
from padserver.config.locator import DEFAULT_ROOT
from padserver.config.settings import Settings
from padserver.logging import configure_logging

logger = structlog.get_logger(__name__)


class SettingsStore:
    """Owner of the process-wide settings snapshot."""

    def __init__(
        self,
        root: Path | str = DEFAULT_ROOT,
        settings_path: str | None = None,
        configure_logs: LoggingConfigurator = configure_logging,
    ) -> None:
        self.root = Path(root)
        self.settings_path = settings_path
        self._configure_logs = configure_logs
        self._lock = threading.Lock()
        self._current: Settings | None = None

    @property
    def loaded(self) -> bool:
        """Check if a snapshot has been published."""
        return self._current is not None

    @property
    def current(self) -> Settings:
        """
        Return the published snapshot, loading it on first access.

        Raises:
            FatalSettingsError: If the first load fails.
        """
        current = self._current
        if current is None:
            with self._lock:
                if self._current is None:
                    self._current = self._load()
                current = self._current
        return current

    def reload(self) -> Settings:
        """
        Re-run the full pipeline and publish the result.

        On failure the previously published snapshot stays in place.

        Returns:
            Settings: The newly published snapshot.

        Raises:
            FatalSettingsError: If the new settings cannot be resolved.
        """
        with self._lock:
            settings = self._load()
            self._current = settings
        logger.info("settings_reloaded")
        return settings

    def _load(self) -> Settings:
        return load_settings(
            root=self.root,
            settings_path=self.settings_path,
            configure_logs=self._configure_logs,
        )


@lru_cache
def get_settings_store() -> SettingsStore:
    """
    Get the process-wide settings store.

    The store is created lazily on first access; nothing is loaded until
    settings are first read.
    """
    return SettingsStore()


def get_settings() -> Settings:
    """Return the current settings snapshot of the process-wide store."""
    return get_settings_store().current


def reload_settings() -> Settings:
    """Reload the process-wide store and return the new snapshot."""
    return get_settings_store().reload()


def bootstrap_settings(store: SettingsStore | None = None) -> Settings:
    """
    Load settings at process start-up, exiting on fatal errors.

    Args:
        store: Store to load. Defaults to the process-wide store.

    Returns:
        Settings: The published snapshot.

    Raises:
        SystemExit: With status 1 when settings cannot be resolved.
    """
    if store is None:
        store = get_settings_store()
    try:
        return store.current
    except FatalSettingsError as e:
        logger.error("settings_load_failed", error=str(e))
        raise SystemExit(1) from e


__all__ = [
    "SettingsStore",
    "get_settings_store",
    "get_settings",
    "reload_settings",
    "bootstrap_settings",
]
