"""
Rich-Text Editor Seam.

The editor core never edits markup itself; it talks to whatever rich-text
component the front end provides through this protocol. MarkupBuffer is the
headless implementation used by the command line and the tests.
"""

from typing import Protocol

from scribe.backend.core.utils import strip_tags

CHARACTER_LIMIT = 1000


class RichTextEditor(Protocol):
    def get_html(self) -> str:
        """Return the current rendered markup."""
        ...

    def set_content(self, markup: str) -> None:
        """Replace the editor content."""
        ...


class MarkupBuffer:
    """Headless editor that simply holds markup."""

    def __init__(self, markup: str = "") -> None:
        self._markup = markup

    def get_html(self) -> str:
        return self._markup

    def set_content(self, markup: str) -> None:
        self._markup = markup


def character_count(markup: str) -> int:
    """Number of visible characters (tags excluded)."""
    return len(strip_tags(markup))


def usage_percentage(markup: str, limit: int = CHARACTER_LIMIT) -> float:
    """Share of the character limit used, capped at 100."""
    return min(100.0, character_count(markup) / limit * 100)
