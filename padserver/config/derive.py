"""
Post-merge derivation.

Runs once the merged settings have been validated, in this order:

1. Re-apply the logging configuration from ``logconfig`` and ``loglevel``.
2. Generate a session key when none was configured.
3. Warn when the embedded dirty database is in use.

Operator supplied values are never replaced.
"""

from __future__ import annotations

import secrets
import string
from collections.abc import Callable, Mapping
from typing import Any

import structlog
from pydantic import SecretStr

from padserver.config.errors import SettingsValidationError
from padserver.config.settings import DIRTY_DB_TYPE, Settings

logger = structlog.get_logger(__name__)

SESSION_KEY_LENGTH = 32
SESSION_KEY_ALPHABET = string.ascii_letters + string.digits

LoggingConfigurator = Callable[[Mapping[str, Any], str], None]


def generate_session_key(length: int = SESSION_KEY_LENGTH) -> str:
    """Return a cryptographically random alphanumeric string."""
    return "".join(secrets.choice(SESSION_KEY_ALPHABET) for _ in range(length))


def derive_settings(
    settings: Settings,
    configure_logs: LoggingConfigurator,
) -> Settings:
    """
    Apply post-merge side effects and fill in missing derived values.

    Args:
        settings: Validated, merged settings.
        configure_logs: Logging collaborator, called with
            ``(logconfig, loglevel)``.

    Returns:
        Settings: The settings to publish. A new instance when a session
        key had to be generated, otherwise ``settings`` itself.

    Raises:
        SettingsValidationError: If the logging configuration is rejected.
    """
    try:
        configure_logs(settings.logconfig, settings.loglevel)
    except (ValueError, OSError) as e:
        raise SettingsValidationError([f"logconfig: {e}"]) from e

    if settings.session_key is None:
        settings = settings.model_copy(
            update={"session_key": SecretStr(generate_session_key())}
        )
        logger.warning(
            "session_key_generated",
            detail=(
                "Set a sessionKey value in settings.json so users can reconnect "
                "after the server restarts"
            ),
        )

    if settings.db_type == DIRTY_DB_TYPE:
        logger.warning(
            "dirty_database_in_use",
            detail="DirtyDB is fine for testing but not recommended for production",
        )

    return settings


__all__ = [
    "SESSION_KEY_LENGTH",
    "SESSION_KEY_ALPHABET",
    "generate_session_key",
    "derive_settings",
]
