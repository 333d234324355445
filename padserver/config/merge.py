"""
Merge settings.json overrides onto the defaults table.

Policy per top-level key:
    - A key that does not start with a lowercase ASCII letter is reported,
      but still merged.
    - A key is accepted when it is a built-in setting (exact, case-sensitive
      match) or starts with the plugin prefix. Any other key is reported as
      unknown and dropped.
    - Accepted values replace the default wholesale; nested objects are not
      merged.

Neither input is mutated.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Mapping
from typing import Any

import structlog

from padserver.config.settings import PLUGIN_PREFIX

logger = structlog.get_logger(__name__)

_LOWERCASE_START = re.compile(r"[a-z]")


def merge_overrides(
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any],
    known_keys: Collection[str],
    plugin_prefix: str = PLUGIN_PREFIX,
) -> dict[str, Any]:
    """
    Apply overrides onto defaults.

    Args:
        defaults: Defaults table keyed by settings.json key.
        overrides: Parsed settings.json contents.
        known_keys: Keys of the built-in settings.
        plugin_prefix: Prefix marking plugin owned keys.

    Returns:
        dict: A new mapping with accepted overrides applied.
    """
    merged = dict(defaults)

    for key, value in overrides.items():
        if not _LOWERCASE_START.match(key):
            logger.warning("setting_should_start_lowercase", key=key)

        if key in known_keys or key.startswith(plugin_prefix):
            merged[key] = value
        else:
            logger.warning(
                "unknown_setting",
                key=key,
                detail="This setting doesn't exist or it was removed",
            )

    return merged


__all__ = ["merge_overrides"]
