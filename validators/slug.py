"""
Slug generation for store URLs.
"""

import re

_DISALLOWED = re.compile(r"[^a-z0-9_\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def slugify(text: str) -> str:
    """
    Derive a URL-safe slug from a display name.

    "My Café!! Shop" -> "my-caf-shop". Non-ASCII letters are dropped, not
    transliterated.
    """
    slug = (text or "").lower()
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return _EDGE_HYPHENS.sub("", slug)


def slug_preview(slug: str, base_url: str) -> str:
    """Public store URL shown under the slug field, or "" with no slug."""
    if not slug:
        return ""
    return f"{base_url.rstrip('/')}/store/{slug}"
