from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import structlog

from padserver.config import SettingsStore
from padserver.config.store import get_settings_store

SETTINGS_ENV_VARS = (
    "TITLE",
    "PORT",
    "SSL",
    "DATABASE_URL",
    "DEFAULTPADTEXT",
    "REQUIRESESSION",
    "EDITONLY",
    "MAXAGE",
    "MINIFY",
    "LOGLEVEL",
    "SESSIONKEY",
    "TRUSTPROXY",
    "REQUIREAUTHENTICATION",
    "REQUIREAUTHORIZATION",
    "USERS",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Remove settings variables so every test starts from literal defaults."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(name.lower(), raising=False)
    get_settings_store.cache_clear()
    yield
    get_settings_store.cache_clear()


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Undo any logging configuration a test applied."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def configure_logs() -> MagicMock:
    """Stand-in for the logging collaborator."""
    return MagicMock(name="configure_logging")


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[..., Path]:
    """Write a settings file under tmp_path and return its path."""

    def _write(content: str | dict[str, Any], name: str = "settings.json") -> Path:
        path = tmp_path / name
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store(tmp_path: Path, configure_logs: MagicMock) -> SettingsStore:
    """SettingsStore rooted at tmp_path with logging stubbed out."""
    return SettingsStore(root=tmp_path, configure_logs=configure_logs)
