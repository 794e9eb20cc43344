"""
Core Utilities.

Shared utility functions used across the backend and the editor core.
All modules should import utilities from this module.
"""

import re
from datetime import datetime, timezone

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def strip_tags(markup: str) -> str:
    """
    Remove markup tags from a string.

    Best-effort: anything between '<' and the next '>' is dropped and the
    rest is kept verbatim. Malformed markup never raises; an unterminated
    '<' is left as text.
    """
    if not markup:
        return ""
    return _TAG_PATTERN.sub("", markup)


def slugify(text: str) -> str:
    """Lowercase text and replace whitespace runs with '-' (path separators dropped)."""
    cleaned = text.strip().lower().replace("/", "").replace("\\", "")
    return _WHITESPACE_PATTERN.sub("-", cleaned)
