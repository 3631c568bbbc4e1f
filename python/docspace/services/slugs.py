"""Slug derivation for spaces and articles.

Slugs are lower-case ASCII words joined by hyphens:
1. Unicode NFKD normalization, combining marks dropped ("Café" -> "cafe")
2. Lower-case
3. Every run of characters outside [a-z0-9] becomes one "-"
4. Leading and trailing "-" stripped

Collisions are resolved by appending -1, -2, ... to the base slug.
"""

import re
import unicodedata
from collections.abc import Callable

NON_SLUG_CHARS_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Convert a display name into its base slug (may be empty)."""
    decomposed = unicodedata.normalize("NFKD", value)
    ascii_text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return NON_SLUG_CHARS_RE.sub("-", ascii_text.lower()).strip("-")


def unique_slug(value: str, exists: Callable[[str], bool], fallback: str) -> str:
    """Derive a slug from ``value`` that ``exists`` reports as unused.

    Args:
        value: Display name or title to derive from.
        exists: Predicate telling whether a slug is already taken.
        fallback: Base slug when ``value`` has no slug-able characters.

    Returns:
        The base slug, or the first free ``{base}-{n}`` for n = 1, 2, ...
    """
    base = slugify(value) or fallback
    slug = base
    suffix = 1
    while exists(slug):
        slug = f"{base}-{suffix}"
        suffix += 1
    return slug
