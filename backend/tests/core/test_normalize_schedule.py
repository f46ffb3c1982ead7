"""Schedule normalization tests - canonical date and time strings."""

import pytest

from eventdesk.core.errors import (
    InvalidDateError, InvalidTimeFormatError, InvalidTimeRangeError,
)
from eventdesk.core.normalize_schedule import normalize_date, normalize_time


# --- normalize_date -----------------------------------------------------------

def test_date_pads_month_and_day():
    assert normalize_date("2024-3-5") == "2024-03-05"


def test_date_canonical_is_unchanged():
    assert normalize_date("2024-03-05") == "2024-03-05"


def test_date_trims_whitespace():
    assert normalize_date("  2024-12-31 ") == "2024-12-31"


def test_date_time_with_offset_uses_utc_day():
    assert normalize_date("2024-03-05T23:30:00-02:00") == "2024-03-06"
    assert normalize_date("2024-03-05T01:00:00+02:00") == "2024-03-04"


def test_date_time_zulu():
    assert normalize_date("2024-03-05T10:00:00Z") == "2024-03-05"


def test_naive_date_time_is_taken_as_utc():
    assert normalize_date("2024-03-05T23:59:59") == "2024-03-05"


def test_date_time_with_space_separator():
    assert normalize_date("2024-03-05 10:00:00+00:00") == "2024-03-05"


def test_date_time_at_calendar_edges_within_range():
    assert normalize_date("0001-01-01T01:30:00+01:00") == "0001-01-01"
    assert normalize_date("9999-12-31T22:30:00-01:00") == "9999-12-31"


@pytest.mark.parametrize("value", [
    "not-a-date",
    "",
    "03/05/2024",
    "2024-02-30",
    "2024-13-01",
    "March 5, 2024",
    "20240305",
    "2024-W10-2",
    "2024-065",
    "2024-03-05junk",
    "0001-01-01T00:30:00+01:00",
    "9999-12-31T23:30:00-01:00",
])
def test_date_rejects_unparsable(value):
    with pytest.raises(InvalidDateError) as exc:
        normalize_date(value)
    assert exc.value.code == "INVALID_DATE"


# --- normalize_time -----------------------------------------------------------

def test_time_canonical_is_unchanged():
    assert normalize_time("09:05") == "09:05"


def test_time_pads_single_digit_hour():
    assert normalize_time("9:05") == "09:05"


def test_time_trims_whitespace():
    assert normalize_time(" 18:30 ") == "18:30"


def test_time_boundaries():
    assert normalize_time("0:00") == "00:00"
    assert normalize_time("23:59") == "23:59"


@pytest.mark.parametrize("value", ["9:5", "0905", "9.05", "09:05:00", "", "ab:cd", "123:00"])
def test_time_rejects_bad_shape(value):
    with pytest.raises(InvalidTimeFormatError):
        normalize_time(value)


@pytest.mark.parametrize("value", ["24:00", "12:60", "99:99"])
def test_time_rejects_out_of_range(value):
    with pytest.raises(InvalidTimeRangeError):
        normalize_time(value)


def test_time_rejects_non_ascii_digits():
    with pytest.raises(InvalidTimeFormatError):
        normalize_time("٩:٠٥")
