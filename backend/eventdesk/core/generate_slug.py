"""Slug Generation - deterministic title-to-URL-identifier mapping.

Invariants:
    - Output only contains [a-z0-9-]
    - No leading, trailing, or doubled hyphens
    - Empty or symbol-only titles produce "" (rejected upstream by enforce_event)

Design Decisions:
    - ASCII-only alphabet: non-ASCII letters collapse into separators so slugs
      always match the route parameter pattern
"""

import re

from eventdesk.core.domain_types import SLUG_PATTERN
from eventdesk.core.errors import InvalidSlugError

# Straight and curly single/double quotes
_QUOTES = re.compile("['\"‘’“”]")
_SEPARATORS = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str) -> str:
    """Map a display title to a URL-safe slug.

    >>> generate_slug("Dev's   Meetup!!")
    'devs-meetup'
    """
    slug = title.lower().strip()
    slug = _QUOTES.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))


def normalize_slug_param(raw: str) -> str:
    """Normalize a slug received as a path parameter.

    Raises:
        InvalidSlugError: empty after trimming, characters outside [a-z0-9-],
            or leading, trailing or doubled hyphens.
    """
    slug = raw.strip().lower()
    if not slug:
        raise InvalidSlugError("Slug cannot be empty.")
    if not is_valid_slug(slug):
        raise InvalidSlugError()
    return slug
