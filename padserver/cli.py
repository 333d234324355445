"""
Command-line entry point for the pad server.

Resolves settings (optionally from a custom settings file) and either prints
a summary of them or starts the HTTP server with uvicorn.

Examples:
  # Start with <root>/settings.json
  padserver

  # Use another settings file, resolved against the installation root
  padserver --settings settings.local.json

  # Only check that settings resolve, print a summary and exit
  padserver --settings settings.local.json --check
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog
import uvicorn

from padserver.api.main import create_app
from padserver.config import SettingsStore, SSLSettings, bootstrap_settings
from padserver.config.locator import DEFAULT_ROOT

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``padserver`` command."""
    parser = argparse.ArgumentParser(
        prog="padserver",
        description="Resolve pad server settings and run the server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument(
        "-s",
        "--settings",
        type=str,
        default=None,
        help="Settings file, relative to the installation root (default: settings.json)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=DEFAULT_ROOT,
        help=f"Installation root (default: {DEFAULT_ROOT})",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Resolve settings, print a summary and exit",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success). Fatal settings errors exit with status 1.
    """
    args = build_parser().parse_args(argv)

    store = SettingsStore(root=args.root, settings_path=args.settings)
    settings = bootstrap_settings(store)

    if args.check:
        print(json.dumps(settings.summary(), indent=2, sort_keys=True))
        return 0

    ssl_options: dict[str, str] = {}
    if isinstance(settings.ssl, SSLSettings):
        ssl_options["ssl_keyfile"] = settings.ssl.key
        ssl_options["ssl_certfile"] = settings.ssl.cert
        if settings.ssl.ca:
            ssl_options["ssl_ca_certs"] = settings.ssl.ca[0]
            if len(settings.ssl.ca) > 1:
                logger.warning(
                    "ssl_extra_ca_ignored",
                    used=settings.ssl.ca[0],
                    ignored=settings.ssl.ca[1:],
                    detail="Only the first ca entry is passed to the server",
                )
    elif settings.ssl:
        logger.warning(
            "ssl_without_certificates",
            detail="Set ssl to an object with key and cert paths to enable TLS",
        )

    uvicorn.run(
        create_app(store),
        host=settings.ip,
        port=settings.port,
        # Logging is owned by padserver.logging
        log_config=None,
        proxy_headers=settings.trust_proxy,
        **ssl_options,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
