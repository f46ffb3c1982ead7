"""Event Record Enforcement - the normalize-and-validate gate for every Event write.

Invariants:
    - PURE: no IO, no async, no DB; input mapping is never mutated
    - Either a complete EventRecord is returned or an error is raised (atomic)
    - Check order: agenda, tags, required strings, date, time, slug
    - Slug regenerated only when the title changed or the slug is absent
    - validate_event_record(record.to_fields(), previous=record) == record (fixed point)

Design Decisions:
    - Explicit pipeline called by the store on create AND update, instead of an
      ORM before-flush hook: control flow stays visible and testable without a DB
    - agenda/tags checked first so an empty agenda is reported as such even when
      other fields are also wrong
    - Explicit slug honored only on create; afterwards the title owns the slug
"""

from collections.abc import Mapping

from eventdesk.core.domain_types import EventRecord, REQUIRED_EVENT_FIELDS
from eventdesk.core.errors import (
    MissingRequiredFieldError, InvalidDateError, InvalidTimeFormatError,
    InvalidTimeRangeError, InvalidEventDateError, InvalidEventTimeError,
    InvalidAgendaError, InvalidTagsError, InvalidSlugError,
)
from eventdesk.core.generate_slug import generate_slug, is_valid_slug
from eventdesk.core.normalize_schedule import normalize_date, normalize_time


def validate_event_record(
    candidate: Mapping[str, object], previous: EventRecord | None = None,
) -> EventRecord:
    """Normalize and validate a candidate Event.

    Args:
        candidate: raw field values (create payload, or previous state merged
            with an update payload).
        previous: last persisted state, or None on create.

    Raises:
        InvalidAgendaError, InvalidTagsError, MissingRequiredFieldError,
        InvalidEventDateError, InvalidEventTimeError, InvalidSlugError.
    """
    agenda = _clean_string_list(candidate.get("agenda"))
    if agenda is None:
        raise InvalidAgendaError()
    tags = _clean_string_list(candidate.get("tags"))
    if tags is None:
        raise InvalidTagsError()

    fields = {name: _require_string(candidate, name) for name in REQUIRED_EVENT_FIELDS}

    try:
        fields["date"] = normalize_date(fields["date"])
    except InvalidDateError as e:
        raise InvalidEventDateError(e) from e
    try:
        fields["time"] = normalize_time(fields["time"])
    except (InvalidTimeFormatError, InvalidTimeRangeError) as e:
        raise InvalidEventTimeError(e) from e

    slug = _resolve_slug(candidate.get("slug"), fields["title"], previous)

    return EventRecord(slug=slug, agenda=agenda, tags=tags, **fields)


# --- Helpers -----------------------------------------------------------------

def _require_string(candidate: Mapping[str, object], name: str) -> str:
    value = candidate.get(name)
    if not isinstance(value, str) or not value.strip():
        raise MissingRequiredFieldError(name)
    return value.strip()


def _clean_string_list(value: object) -> tuple[str, ...] | None:
    """Trimmed items, or None if value is not a non-empty list of non-empty strings."""
    if not isinstance(value, (list, tuple)) or not value:
        return None
    if not all(isinstance(item, str) and item.strip() for item in value):
        return None
    return tuple(item.strip() for item in value)


def _resolve_slug(raw_slug: object, title: str, previous: EventRecord | None) -> str:
    current = raw_slug.strip().lower() if isinstance(raw_slug, str) else ""

    if previous is None and current:
        if not is_valid_slug(current):
            raise InvalidSlugError()
        return current

    title_changed = previous is None or title != previous.title
    if title_changed or not current:
        current = generate_slug(title)
        if not current:
            raise InvalidSlugError(
                "Title must contain at least one letter or digit to build a slug.",
            )
    return current
