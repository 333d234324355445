"""
Exception hierarchy for settings resolution.

Recoverable problems (missing settings file, unknown keys, naming
convention) are only logged as warnings and never raise. Everything here is
raised for conditions that must stop start-up; the caller decides whether
that means exiting the process or rejecting a runtime reload.

Usage:
    from padserver.config.errors import FatalSettingsError

    try:
        store.reload()
    except FatalSettingsError as e:
        logger.error("settings_reload_failed", error=str(e))
"""

from __future__ import annotations

from pathlib import Path


class SettingsError(Exception):
    """Base class for all settings errors."""


class FatalSettingsError(SettingsError):
    """A settings problem that must prevent the settings from being published."""


class SettingsParseError(FatalSettingsError):
    """The settings file exists but could not be parsed."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"Error processing settings file {self.path}: {message}")


class DatabaseUrlError(FatalSettingsError):
    """DATABASE_URL is set but cannot be decomposed into connection settings."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid DATABASE_URL: {message}")


class EnvironmentSettingsError(FatalSettingsError):
    """An environment variable holds a value of the wrong type."""


class SettingsValidationError(FatalSettingsError):
    """A settings file value does not match the declared type of its key."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid settings: " + "; ".join(problems))


__all__ = [
    "SettingsError",
    "FatalSettingsError",
    "SettingsParseError",
    "DatabaseUrlError",
    "EnvironmentSettingsError",
    "SettingsValidationError",
]
