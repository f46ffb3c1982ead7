"""Email Validation - permissive syntactic shape check.

Invariants:
    - Exactly one "@" separating non-empty local and domain parts
    - Domain is one or more characters, a ".", then one or more characters;
      labels are not checked, so a@b..com passes
    - No whitespace anywhere

Design Decisions:
    - Shape check only, not RFC 5322 and not deliverability (ADR: keep bookings frictionless)
"""

import re

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: str) -> str:
    return value.strip().lower()


def is_valid_email(value: str) -> bool:
    """Return True iff value looks like local@domain.tld."""
    return _EMAIL.fullmatch(value) is not None
