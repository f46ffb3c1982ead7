"""Schedule Normalization - canonical calendar-day and 24-hour time strings.

Invariants:
    - normalize_date returns YYYY-MM-DD taken from the UTC calendar fields
    - normalize_time returns zero-padded HH:MM within 00:00-23:59
    - Both are pure: same input, same output, no clock or locale dependency

Design Decisions:
    - Only ISO-8601 shaped dates are accepted: YYYY-M-D calendar days and
      YYYY-MM-DD[T ]... date-times. Compact (20240305), week (2024-W10-2) and
      ordinal (2024-065) forms are rejected even though fromisoformat reads them.
      Ambiguous forms like 03/05/2024 are rejected instead of guessed
      (ADR: no implicit MM/DD vs DD/MM interpretation)
    - Naive date-times are treated as UTC so the host timezone never shifts the day
    - ASCII digit classes: str.isdigit/\\d would accept non-ASCII numerals
"""

import re
from datetime import date, datetime, timezone

from eventdesk.core.errors import (
    InvalidDateError, InvalidTimeFormatError, InvalidTimeRangeError,
)

_CALENDAR_DAY = re.compile(r"^([0-9]{4})-([0-9]{1,2})-([0-9]{1,2})$")
_DATE_TIME_PREFIX = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}[T ]")
_CLOCK_TIME = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")


def normalize_date(value: str) -> str:
    """Normalize a date string to YYYY-MM-DD (UTC).

    Raises:
        InvalidDateError: not an ISO-8601 date/date-time, or not a real day.
    """
    text = value.strip()
    match = _CALENDAR_DAY.match(text)
    if not match and not _DATE_TIME_PREFIX.match(text):
        raise InvalidDateError(value)
    try:
        if match:
            year, month, day = (int(part) for part in match.groups())
            return date(year, month, day).isoformat()
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is not None:
            # Shifting to UTC can leave the representable date range
            parsed = parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(value) from e
    return parsed.date().isoformat()


def normalize_time(value: str) -> str:
    """Normalize H:MM / HH:MM to zero-padded 24-hour HH:MM.

    Raises:
        InvalidTimeFormatError: not a colon-separated hour/two-digit-minute pair.
        InvalidTimeRangeError: hour outside 0-23 or minute outside 0-59.
    """
    match = _CLOCK_TIME.match(value.strip())
    if not match:
        raise InvalidTimeFormatError(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise InvalidTimeRangeError(value)

    return f"{hours:02d}:{minutes:02d}"
