"""
Deep-Link Addresses.

Articles are addressable as /article/<id>; the root address / means that
nothing is selected.
"""

import re
from urllib.parse import quote, unquote

ROOT_ADDRESS = "/"

_ARTICLE_ADDRESS = re.compile(r"^/article/(.+)$")


def article_address(article_id: str) -> str:
    return f"/article/{quote(article_id, safe='')}"


def parse_address(path: str) -> str | None:
    """
    Extract the article id from an address.

    Returns None for the root address and for anything that is not an
    article address.
    """
    match = _ARTICLE_ADDRESS.match(path or "")
    if match is None:
        return None
    return unquote(match.group(1))
