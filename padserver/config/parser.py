"""
Restricted parser for settings.json.

settings.json is JSON with a few relaxations that hand-edited files tend to
need:

    - ``// line`` and ``/* block */`` comments
    - trailing commas before ``]`` or ``}``
    - bare identifier keys (``{port: 9001}``)

Nothing in the file is ever evaluated. The document is rewritten into strict
JSON and handed to the standard json module; the result then goes through a
JSON round-trip so callers only ever see dict, list, str, int, float, bool
and None.

A missing file is not an error: the loader logs a warning and continues with
defaults. A file that exists but cannot be parsed raises SettingsParseError.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from padserver.config.errors import SettingsParseError

logger = structlog.get_logger(__name__)

_IDENTIFIER_START = frozenset("_$")


def _string_end(text: str, start: int) -> int:
    """Return the index just past the double-quoted string opening at start."""
    i = start + 1
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == '"':
            return i + 1
        i += 1
    return n


def _strip_comments(text: str) -> str:
    """Blank out comments, keeping newlines so line numbers stay correct."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            if end == -1:
                end = n
            out.append(" " * (end - i))
            i = end
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                line = text.count("\n", 0, i) + 1
                raise ValueError(f"Unterminated comment starting on line {line}")
            end += 2
            out.append("".join(c if c == "\n" else " " for c in text[i:end]))
            i = end
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _to_strict_json(text: str) -> str:
    """Drop trailing commas and quote bare keys in comment-free text."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            end = _string_end(text, i)
            out.append(text[i:end])
            i = end
            continue
        if ch == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j < n and text[j] in "]}":
                out.append(" ")
                i += 1
                continue
        elif ch.isalpha() or ch in _IDENTIFIER_START:
            j = i
            while j < n and (text[j].isalnum() or text[j] in _IDENTIFIER_START):
                j += 1
            word = text[i:j]
            k = j
            while k < n and text[k].isspace():
                k += 1
            if k < n and text[k] == ":":
                out.append(json.dumps(word))
            else:
                out.append(word)
            i = j
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid settings value")


def parse_settings(text: str, source: Path | str = "settings.json") -> dict[str, Any]:
    """
    Parse settings.json contents into plain data.

    Args:
        text: Raw file contents.
        source: Path used in error messages.

    Returns:
        dict: The parsed overrides. Empty when the document holds no value.

    Raises:
        SettingsParseError: If the document is malformed or its top-level
            value is not an object.
    """
    try:
        strict = _to_strict_json(_strip_comments(text))
        if not strict.strip():
            return {}
        parsed = json.loads(strict, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise SettingsParseError(source, f"{e.msg} (line {e.lineno})") from e
    except (ValueError, RecursionError) as e:
        raise SettingsParseError(source, str(e)) from e

    if not isinstance(parsed, dict):
        raise SettingsParseError(
            source,
            f"top-level value must be an object, got {type(parsed).__name__}",
        )

    # Round-trip through JSON so only plain data types remain
    return json.loads(json.dumps(parsed))


def read_settings_file(path: Path) -> str | None:
    """
    Read settings.json synchronously.

    Returns:
        str | None: File contents, or None when the file cannot be read.

    Raises:
        SettingsParseError: If the file is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise SettingsParseError(path, f"file is not valid UTF-8: {e}") from e
    except OSError as e:
        logger.warning(
            "settings_file_not_found",
            path=str(path),
            error=e.strerror or str(e),
            detail="Continuing using defaults and/or environment",
        )
        return None


def load_overrides(path: Path) -> dict[str, Any]:
    """Read and parse the settings file; a missing file yields no overrides."""
    text = read_settings_file(path)
    if text is None:
        return {}
    return parse_settings(text, source=path)


__all__ = ["parse_settings", "read_settings_file", "load_overrides"]
