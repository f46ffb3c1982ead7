"""Domain Types - canonical record shapes and constants shared across the codebase.

Invariants:
    - EventRecord / BookingRecord only ever hold canonical (normalized) values
    - REQUIRED_EVENT_FIELDS order is the order fields are checked and reported
    - Records are frozen: normalization returns a new record, never mutates

Design Decisions:
    - Frozen dataclasses over dicts: a validated record cannot be half-updated
    - agenda/tags as tuples: hashable, ordered, immutable
"""

import re
from dataclasses import dataclass, asdict
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

EventId = NewType("EventId", UUID)
BookingId = NewType("BookingId", UUID)


# ─── Constants ───────────────────────────────────────────────────

REQUIRED_EVENT_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "organizer",
)

LIST_EVENT_FIELDS: tuple[str, ...] = ("agenda", "tags")

# Hyphen-separated runs of [a-z0-9]: the same shape generate_slug produces
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class EventRecord:
    """A fully validated Event, ready to persist."""
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    organizer: str
    agenda: tuple[str, ...]
    tags: tuple[str, ...]

    def to_fields(self) -> dict:
        """Column values for the ORM model (lists instead of tuples)."""
        fields = asdict(self)
        fields["agenda"] = list(self.agenda)
        fields["tags"] = list(self.tags)
        return fields


@dataclass(frozen=True)
class BookingRecord:
    """A validated Booking candidate (event existence checked by the store)."""
    event_id: UUID
    email: str
