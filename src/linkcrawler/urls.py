"""
URL normalization and validation.
"""
from __future__ import annotations

from urllib.parse import urlparse

ALLOWED_SCHEMES: frozenset[str] = frozenset(("http", "https"))


def normalize_url(url: str) -> str:
    """
    Normalize URL for deduplication and comparison.

    - Drops fragments (#...)
    - Drops querystrings (?...)
    - Ensures a trailing slash

    Comparison stays case-sensitive; scheme and host are left untouched.
    """
    url = url.split("#", 1)[0]
    url = url.split("?", 1)[0]

    if not url.endswith("/"):
        url += "/"

    return url


def is_valid_url(url: str) -> bool:
    """Check if URL is an absolute http(s) URL."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        # urlparse rejects malformed netlocs such as unbalanced IPv6 brackets
        return False
    return parsed.scheme.lower() in ALLOWED_SCHEMES and bool(parsed.netloc)
