"""Settings file location."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_SETTINGS_FILENAME = "settings.json"

# Directory containing the padserver package
DEFAULT_ROOT = Path(__file__).resolve().parents[2]


def locate_settings_file(root: Path | str, override: str | None = None) -> Path:
    """
    Resolve the settings file path under the installation root.

    No filesystem access happens here; the path is only joined and
    normalized. An absolute override is used as-is.

    Args:
        root: Installation root directory.
        override: Path from the ``--settings`` command-line flag, if any.

    Returns:
        Path: Normalized path of the settings file.
    """
    filename = override or DEFAULT_SETTINGS_FILENAME
    return Path(os.path.normpath(os.path.join(os.fspath(root), filename)))


__all__ = ["DEFAULT_SETTINGS_FILENAME", "DEFAULT_ROOT", "locate_settings_file"]
