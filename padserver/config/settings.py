"""
Declared schema for the pad server settings.

This module defines the immutable Settings model that every other component
reads. Each built-in setting is a typed field whose alias is the key used in
settings.json (camelCase, e.g. ``defaultPadText``); the Python attribute is
the snake_case form (``default_pad_text``).

Keys outside the schema are only accepted when they carry the plugin prefix
(``ep_``). Those plugin sub-trees are stored verbatim and exposed through
``Settings.plugins``.

Settings instances are frozen. A reload builds a brand new instance and the
SettingsStore swaps its reference, so a reader holding a Settings object
always sees one consistent snapshot.

Usage:
    from padserver.config import get_settings

    settings = get_settings()
    print(settings.port)
    print(settings.plugins.get("ep_comments"))
"""

from __future__ import annotations

import platform
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

# Keys starting with this prefix belong to plugins and bypass the schema
PLUGIN_PREFIX = "ep_"

DIRTY_DB_TYPE = "dirty"

DEFAULT_PAD_TEXT = (
    "Welcome to Etherpad!\n\n"
    "This pad text is synchronized as you type, so that everyone viewing this "
    "page sees the same text. This allows you to collaborate seamlessly on "
    "documents!\n\n"
    "Etherpad on Github: http://j.mp/ep-lite\n"
)

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

# log4js-style level names still found in older settings files
_LOG_LEVEL_ALIASES = {
    "ALL": "DEBUG",
    "TRACE": "DEBUG",
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "OFF": "CRITICAL",
}


class SSLSettings(BaseModel):
    """Paths to the TLS key material used when SSL is enabled via settings.json."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Path to the server private key.")
    cert: str = Field(..., description="Path to the server certificate.")
    ca: list[str] | None = Field(
        default=None,
        description="Optional chain of certificate authority files.",
    )


class Settings(BaseModel):
    """
    Resolved settings for the pad server.

    Attributes are organized into logical groups:
    - Branding
    - Network Configuration
    - Database Configuration
    - Pad Behaviour
    - Logging Configuration
    - Security Configuration
    """

    # =========================================================================
    # Branding
    # =========================================================================
    title: str = Field(
        default="Etherpad",
        description="Application title, visible e.g. in the browser window.",
    )

    favicon: str = Field(
        default="favicon.ico",
        description="Favicon url relative to the site root.",
    )

    favicon_pad: str = Field(
        default="../favicon.ico",
        description="Favicon url as seen from a pad page.",
    )

    favicon_timeslider: str = Field(
        default="../../favicon.ico",
        description="Favicon url as seen from the timeslider page.",
    )

    # =========================================================================
    # Network Configuration
    # =========================================================================
    ip: str = Field(
        default="0.0.0.0",
        description="Address the server binds to.",
    )

    port: int = Field(
        default=9001,
        ge=1,
        le=65535,
        description="Port the server listens on.",
    )

    ssl: bool | SSLSettings = Field(
        default=False,
        description=(
            "SSL configuration. False disables SSL; an object with key/cert "
            "paths enables it."
        ),
    )

    socket_transport_protocols: list[str] = Field(
        default_factory=lambda: ["xhr-polling", "jsonp-polling", "htmlfile"],
        description="Transports offered to realtime clients, in order of preference.",
    )

    trust_proxy: bool = Field(
        default=False,
        description="Whether to trust the X-Forwarded-For header.",
    )

    # =========================================================================
    # Database Configuration
    # =========================================================================
    db_type: str = Field(
        default=DIRTY_DB_TYPE,
        description="Database backend type.",
    )

    db_settings: dict[str, Any] = Field(
        default_factory=lambda: {"filename": "var/dirty.db"},
        description="Backend specific connection settings.",
    )

    # =========================================================================
    # Pad Behaviour
    # =========================================================================
    default_pad_text: str = Field(
        default=DEFAULT_PAD_TEXT,
        description="Text of a newly created pad.",
    )

    require_session: bool = Field(
        default=False,
        description="Require a valid API session before a pad can be accessed.",
    )

    edit_only: bool = Field(
        default=False,
        description="Prevent users from creating new pads.",
    )

    max_age: int = Field(
        default=1000 * 60 * 60 * 6,
        ge=0,
        description="Max age of cacheable responses in milliseconds.",
    )

    minify: bool = Field(
        default=True,
        description="Serve minified client assets.",
    )

    abiword: str | None = Field(
        default=None,
        description="Path to the abiword executable used for import/export.",
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================
    loglevel: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.",
    )

    logconfig: dict[str, Any] = Field(
        default_factory=lambda: {"appenders": [{"type": "console"}]},
        description="Appender configuration handed to the logging subsystem.",
    )

    # =========================================================================
    # Security Configuration
    # =========================================================================
    session_key: SecretStr | None = Field(
        default=None,
        description=(
            "Secret used to sign sessions. Generated at start-up when unset, "
            "which invalidates sessions on every restart."
        ),
    )

    require_authentication: bool = Field(
        default=False,
        description="Require HTTP authentication for every pad.",
    )

    require_authorization: bool = Field(
        default=False,
        description="Require an authorization hook or admin user for every pad.",
    )

    users: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Local user accounts keyed by username.",
    )

    model_config = ConfigDict(
        # settings.json keys are camelCase
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        # Only plugin keys survive as extras, see reject_unknown_keys
        extra="allow",
    )

    # =========================================================================
    # Validators
    # =========================================================================
    @model_validator(mode="before")
    @classmethod
    def reject_unknown_keys(cls, data: Any) -> Any:
        """Refuse extra keys that are neither built-in nor plugin owned."""
        if isinstance(data, dict):
            known = cls.known_keys() | set(cls.model_fields)
            unknown = sorted(
                key
                for key in data
                if key not in known and not str(key).startswith(PLUGIN_PREFIX)
            )
            if unknown:
                raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        return data

    @field_validator("loglevel")
    @classmethod
    def validate_loglevel(cls, v: str) -> str:
        """Normalize the level to a standard Python logging level name."""
        upper_v = _LOG_LEVEL_ALIASES.get(v.upper(), v.upper())
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {sorted(VALID_LOG_LEVELS)}"
            )
        return upper_v

    @field_validator("session_key", mode="before")
    @classmethod
    def empty_session_key_is_unset(cls, v: Any) -> Any:
        """Treat false, null and empty strings as an unset session key."""
        if v is None or v is False or v == "":
            return None
        return v

    # =========================================================================
    # Helper Methods
    # =========================================================================
    @classmethod
    def known_keys(cls) -> frozenset[str]:
        """Return the settings.json keys of every built-in setting."""
        return frozenset(
            field.alias or to_camel(name) for name, field in cls.model_fields.items()
        )

    @property
    def plugins(self) -> dict[str, Any]:
        """Plugin owned settings, keyed by their ``ep_`` name."""
        return dict(self.model_extra or {})

    def abiword_available(self) -> str:
        """
        Report whether document conversion through abiword is possible.

        Returns:
            str: "no" when no abiword path is configured, "withoutPDF" on
            Windows (abiword cannot export PDF there), otherwise "yes".
        """
        if self.abiword is None:
            return "no"
        if "Windows" in platform.system():
            return "withoutPDF"
        return "yes"

    def is_admin(self, username: str) -> bool:
        """Check if the named local user carries the is_admin flag."""
        user = self.users.get(username)
        return bool(user and user.get("is_admin"))

    def summary(self) -> dict[str, Any]:
        """Return a secret-free view of the settings for logs and diagnostics."""
        return {
            "title": self.title,
            "ip": self.ip,
            "port": self.port,
            "ssl": bool(self.ssl),
            "dbType": self.db_type,
            "loglevel": self.loglevel,
            "minify": self.minify,
            "requireSession": self.require_session,
            "editOnly": self.edit_only,
            "requireAuthentication": self.require_authentication,
            "requireAuthorization": self.require_authorization,
            "trustProxy": self.trust_proxy,
            "users": sorted(self.users),
            "plugins": sorted(self.plugins),
        }


__all__ = [
    "PLUGIN_PREFIX",
    "DIRTY_DB_TYPE",
    "DEFAULT_PAD_TEXT",
    "VALID_LOG_LEVELS",
    "SSLSettings",
    "Settings",
]
