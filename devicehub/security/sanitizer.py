"""Sanitization of untrusted values embedded in commands and URL paths."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# Anything outside this set is replaced before reaching a shell argument or URL path
_DISALLOWED = re.compile(r"[^A-Za-z0-9_.]")


def sanitize(value: str, max_length: int) -> str:
    """Make a value safe to interpolate into a command or URL path.

    The value is truncated to max_length first, then every character outside
    [A-Za-z0-9_.] is replaced with an underscore.

    Args:
        value: Untrusted input (device id, command token)
        max_length: Maximum length of the result

    Returns:
        Sanitized string of at most max_length characters

    Raises:
        ValueError: If max_length is negative

    Examples:
        >>> sanitize("abc/../; rm -rf", 8)
        'abc_..__'
    """
    if max_length < 0:
        raise ValueError(f"max_length must be >= 0, got {max_length}")

    truncated = str(value)[:max_length]
    cleaned = _DISALLOWED.sub("_", truncated)
    if cleaned != value:
        logger.debug(f"Sanitized argument {value!r} -> {cleaned!r}")
    return cleaned
