"""
Logging configuration driven by the ``logconfig`` and ``loglevel`` settings.

This module configures structlog on top of the standard library logging
module. It is (re)applied every time settings are loaded, so a reload that
changes the log level or the appenders takes effect immediately.

logconfig format:
    {
        "appenders": [
            {"type": "console"},                       # stdout, pretty output
            {"type": "console", "format": "json"},     # stdout, one JSON object per line
            {"type": "file", "filename": "var/pad.log"}  # JSON lines by default
        ]
    }

Usage:
    from padserver.logging import configure_logging

    configure_logging(settings.logconfig, settings.loglevel)

    # In modules
    import structlog
    logger = structlog.get_logger(__name__)

    logger.info("pad_created", pad_id=pad_id)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Sensitive field patterns to redact from logs
SENSITIVE_FIELDS = frozenset(
    {
        "password",
        "secret",
        "token",
        "session_key",
        "sessionkey",
        "credential",
        "private_key",
    }
)

# Redacted on an exact key match only
SENSITIVE_EXACT_FIELDS = frozenset({"authorization", "cookie"})

DEFAULT_APPENDERS: list[dict[str, Any]] = [{"type": "console"}]


def _redact_sensitive_data(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """
    Redact sensitive data from log events.

    Scans event dict keys for sensitive field names and replaces their
    values with "[REDACTED]".
    """
    for key in list(event_dict.keys()):
        key_lower = key.lower()
        if key_lower in SENSITIVE_EXACT_FIELDS or any(
            sensitive in key_lower for sensitive in SENSITIVE_FIELDS
        ):
            event_dict[key] = "[REDACTED]"
    return event_dict


def _build_handler(
    appender: Mapping[str, Any],
    shared_processors: list[Processor],
) -> logging.Handler:
    """
    Create a stdlib handler for one appender entry.

    Raises:
        ValueError: If the appender type is unknown or a file appender has
            no filename.
    """
    if not isinstance(appender, Mapping):
        raise ValueError(f"Appender must be an object, got {type(appender).__name__}")
    appender_type = appender.get("type", "console")

    if appender_type == "console":
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        output_format = appender.get("format", "console")
    elif appender_type == "file":
        filename = appender.get("filename")
        if not filename:
            raise ValueError("File appender requires a 'filename'")
        handler = logging.FileHandler(filename, encoding="utf-8")
        output_format = appender.get("format", "json")
    else:
        raise ValueError(f"Unknown appender type '{appender_type}'")

    renderer: Processor
    if output_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=appender_type == "console" and sys.stdout.isatty()
        )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    logconfig: Mapping[str, Any] | None = None,
    loglevel: str = "INFO",
) -> None:
    """
    Configure logging for the pad server.

    Replaces every handler on the root logger with the appenders described
    by ``logconfig`` and sets the root level to ``loglevel``.

    Args:
        logconfig: Appender configuration (see module docstring). Falls back
            to a single console appender when empty.
        loglevel: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Raises:
        ValueError: If an appender entry is invalid.
    """
    numeric_level = getattr(logging, loglevel.upper(), logging.INFO)
    appenders = (logconfig or {}).get("appenders") or DEFAULT_APPENDERS

    # Shared processors for both structlog and stdlib integration
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive_data,
    ]

    handlers = [_build_handler(appender, shared_processors) for appender in appenders]

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        # Loggers must pick up the next reconfiguration on reload
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for old_handler in root_logger.handlers:
        if isinstance(old_handler, logging.FileHandler):
            old_handler.close()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    # Set specific log levels for noisy libraries
    logging.getLogger("uvicorn.access").setLevel(max(numeric_level, logging.INFO))

    logger = structlog.get_logger("padserver.logging")
    logger.info(
        "logging_configured",
        log_level=loglevel,
        appenders=[appender.get("type", "console") for appender in appenders],
    )


__all__ = [
    "configure_logging",
    "SENSITIVE_FIELDS",
    "SENSITIVE_EXACT_FIELDS",
]
