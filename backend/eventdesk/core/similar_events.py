"""Similar Events - tag-overlap matching for the event detail page.

Invariants:
    - PURE: works on already-loaded records, preserves input order
    - The reference event itself is never returned
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar


class TaggedEvent(Protocol):
    slug: str
    tags: Sequence[str]


T = TypeVar("T", bound=TaggedEvent)


def find_similar_events(
    reference: TaggedEvent, candidates: Iterable[T], limit: int | None = None,
) -> list[T]:
    """Events sharing at least one tag with reference, in candidate order."""
    wanted = set(reference.tags)
    similar = [
        event for event in candidates
        if event.slug != reference.slug and wanted.intersection(event.tags)
    ]
    return similar[:limit] if limit is not None else similar
