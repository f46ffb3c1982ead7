"""Booking Record Enforcement - pure part of the Booking write gate.

Invariants:
    - PURE: email normalized (trimmed, lowercased) then shape-checked
    - Event existence is NOT checked here (needs IO); BookingStore does it
      after this succeeds, so malformed emails never cost a DB round trip
"""

from uuid import UUID

from eventdesk.core.domain_types import BookingRecord
from eventdesk.core.errors import InvalidEmailFormatError
from eventdesk.core.validate_email import is_valid_email, normalize_email


def prepare_booking(event_id: UUID, email: object) -> BookingRecord:
    """Normalize and validate the email of a booking candidate.

    Raises:
        InvalidEmailFormatError: email missing, non-string, or malformed.
    """
    if not isinstance(email, str):
        raise InvalidEmailFormatError()
    normalized = normalize_email(email)
    if not is_valid_email(normalized):
        raise InvalidEmailFormatError()
    return BookingRecord(event_id=event_id, email=normalized)
