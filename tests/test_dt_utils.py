"""Date/time helper tests across multiple timezones.

Tests the pure functions in utils/dt_utils.py with focus on:
- Local day and week boundaries in each configured timezone
- DST transition days
- Parsing of stored timestamps and user input
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from custom_components.ecoscore.utils import dt_utils

# Timezone matrix
TEST_TIMEZONES = [
    "America/New_York",  # UTC-5/-4, DST
    "Europe/London",  # UTC+0/+1, DST
    "Asia/Tokyo",  # UTC+9, no DST
    "Australia/Sydney",  # UTC+11/+10, DST opposite hemisphere
    "UTC",
]


@pytest.fixture(params=TEST_TIMEZONES)
def local_tz(request):
    """Configure dt_utils with each test timezone in turn."""
    tz = ZoneInfo(request.param)
    dt_utils.set_default_timezone(tz)
    return tz


# ============================================================================
# Day boundaries
# ============================================================================


def test_day_bounds_are_local_midnights(local_tz) -> None:
    """Start is 00:00 and end is the microsecond before the next 00:00."""
    day = date(2026, 10, 21)
    start = dt_utils.start_of_local_day(day)
    end = dt_utils.end_of_local_day(day)

    assert start == datetime(2026, 10, 21, tzinfo=local_tz)
    assert end == datetime(2026, 10, 21, 23, 59, 59, 999999, tzinfo=local_tz)
    assert dt_utils.local_date(start) == day
    assert dt_utils.local_date(end) == day
    assert dt_utils.local_date(end + timedelta(microseconds=1)) == day + timedelta(days=1)


def test_day_bounds_from_instant_use_local_date(local_tz) -> None:
    """An instant is mapped to its local date before taking bounds."""
    instant = datetime(2026, 10, 21, 12, 0, tzinfo=UTC)
    local_day = instant.astimezone(local_tz).date()

    assert dt_utils.start_of_local_day(instant).date() == local_day
    assert dt_utils.end_of_local_day(instant).date() == local_day


def test_dst_fall_back_day_is_25_hours() -> None:
    """The day DST ends in New York covers 25 hours."""
    dt_utils.set_default_timezone(ZoneInfo("America/New_York"))
    day = date(2026, 11, 1)
    start = dt_utils.as_utc(dt_utils.start_of_local_day(day))
    end = dt_utils.as_utc(dt_utils.end_of_local_day(day))

    assert end - start == timedelta(hours=25) - timedelta(microseconds=1)


def test_explicit_timezone_overrides_default() -> None:
    """Passing tz ignores the configured default."""
    tokyo = ZoneInfo("Asia/Tokyo")
    instant = datetime(2026, 10, 20, 16, 0, tzinfo=UTC)

    assert dt_utils.local_date(instant) == date(2026, 10, 20)
    assert dt_utils.local_date(instant, tokyo) == date(2026, 10, 21)


# ============================================================================
# Weeks and windows
# ============================================================================


@pytest.mark.parametrize(
    ("day", "monday"),
    [
        (date(2026, 10, 18), date(2026, 10, 12)),  # Sunday
        (date(2026, 10, 19), date(2026, 10, 19)),  # Monday
        (date(2026, 10, 21), date(2026, 10, 19)),  # Wednesday
        (date(2026, 10, 25), date(2026, 10, 19)),  # Sunday
    ],
)
def test_start_of_local_week(local_tz, day: date, monday: date) -> None:
    """Weeks start Monday 00:00 local time."""
    start = dt_utils.start_of_local_week(day)

    assert start.date() == monday
    assert start.hour == 0
    assert start.tzinfo == local_tz


def test_trailing_dates() -> None:
    """Oldest first, ending at the given date."""
    assert dt_utils.trailing_dates(date(2026, 10, 19), 3) == [
        date(2026, 10, 17),
        date(2026, 10, 18),
        date(2026, 10, 19),
    ]
    assert dt_utils.trailing_dates(date(2026, 3, 1), 2) == [
        date(2026, 2, 28),
        date(2026, 3, 1),
    ]
    assert dt_utils.trailing_dates(date(2026, 10, 19), 0) == []


# ============================================================================
# Parsing
# ============================================================================


def test_dt_to_utc_converts_offsets() -> None:
    """Offsets are honored and the result is UTC."""
    assert dt_utils.dt_to_utc("2025-04-07T14:30:00-05:00") == datetime(
        2025, 4, 7, 19, 30, tzinfo=UTC
    )
    assert dt_utils.dt_to_utc("2025-09-19T07:00:00.000Z") == datetime(
        2025, 9, 19, 7, 0, tzinfo=UTC
    )


def test_naive_input_uses_default_timezone() -> None:
    """Naive strings and dates are interpreted in local time."""
    dt_utils.set_default_timezone(ZoneInfo("Asia/Tokyo"))

    assert dt_utils.dt_to_utc("2026-10-21T09:00:00") == datetime(
        2026, 10, 21, 0, 0, tzinfo=UTC
    )
    assert dt_utils.dt_to_utc(date(2026, 10, 21)) == datetime(
        2026, 10, 20, 15, 0, tzinfo=UTC
    )


@pytest.mark.parametrize("value", [None, "", "not a date", "2026-13-45", 12345])
def test_unparseable_input_returns_none(value) -> None:
    """Invalid input never raises."""
    assert dt_utils.dt_to_utc(value) is None


def test_dt_parse_return_types() -> None:
    """The requested return type is honored."""
    value = "2026-10-21T12:00:00+00:00"

    assert dt_utils.dt_parse(value, dt_utils.HELPER_RETURN_DATE) == date(2026, 10, 21)
    assert dt_utils.dt_parse(value, dt_utils.HELPER_RETURN_ISO_DATETIME) == value
