# File: utils/dt_utils.py
"""Date and time utilities for EcoScore.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo, dateutil.

All calendar-day and calendar-week boundaries are computed in the configured
local timezone (see set_default_timezone). Record timestamps are stored as
ISO 8601 strings and converted to aware datetimes here.

Functions:
    - dt_today_local: Get today's date in local timezone
    - dt_now_local: Get current datetime in local timezone
    - dt_now_utc / dt_now_iso: Current instant
    - as_utc / as_local: Timezone conversion
    - local_date: Calendar date of an instant in local timezone
    - start_of_local_day / end_of_local_day: Closed day interval bounds
    - start_of_local_week: Monday 00:00 of the week containing an instant
    - trailing_dates: The N calendar dates ending at a given date
    - dt_parse: Normalize datetime inputs
    - dt_to_utc: Parse and convert to UTC
"""

from __future__ import annotations

from datetime import UTC, date, datetime, time, timedelta
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import MO, relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Return type constants
HELPER_RETURN_DATETIME = "datetime"
HELPER_RETURN_DATETIME_UTC = "datetime_utc"
HELPER_RETURN_DATETIME_LOCAL = "datetime_local"
HELPER_RETURN_DATE = "date"
HELPER_RETURN_ISO_DATETIME = "iso_datetime"

# Smallest representable step; end of day is the instant before next midnight
_ONE_MICROSECOND = timedelta(microseconds=1)


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware)."""
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO 8601 string.

    Example:
        "2026-10-19T14:30:00.123456+00:00"
    """
    return dt_now_utc().isoformat()


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in the default timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Naive datetimes are assumed to be in UTC.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


def local_date(dt_obj: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the local calendar date an instant falls on."""
    return as_local(dt_obj, tz).date()


# ==============================================================================
# Day / Week Boundaries
# ==============================================================================


def start_of_local_day(
    day: date | datetime, tz: ZoneInfo | None = None
) -> datetime:
    """Get the start of day (00:00:00) in local timezone.

    Accepts either a calendar date or an instant; an instant is first
    converted to local time so the boundary matches the local calendar.

    Args:
        day: Calendar date or datetime (any timezone)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime at 00:00:00 in local timezone (timezone-aware)
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if isinstance(day, datetime):
        day = as_local(day, tz_info).date()
    return datetime.combine(day, time.min, tzinfo=tz_info)


def end_of_local_day(day: date | datetime, tz: ZoneInfo | None = None) -> datetime:
    """Get the last instant of the local day (23:59:59.999999).

    Together with start_of_local_day this forms a closed interval
    [start, end] covering exactly one calendar day.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if isinstance(day, datetime):
        day = as_local(day, tz_info).date()
    next_midnight = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz_info)
    return next_midnight - _ONE_MICROSECOND


def start_of_local_week(
    dt_obj: date | datetime, tz: ZoneInfo | None = None
) -> datetime:
    """Get Monday 00:00 local time of the week containing dt_obj.

    Example:
        Sunday 2026-10-18 → Monday 2026-10-12T00:00
        Monday 2026-10-19 → Monday 2026-10-19T00:00
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if isinstance(dt_obj, datetime):
        dt_obj = as_local(dt_obj, tz_info).date()
    monday = dt_obj + relativedelta(weekday=MO(-1))
    return datetime.combine(monday, time.min, tzinfo=tz_info)


def trailing_dates(end: date, days: int) -> list[date]:
    """Return the `days` calendar dates ending at `end`, oldest first.

    Example:
        trailing_dates(date(2026, 10, 19), 3)
        → [date(2026, 10, 17), date(2026, 10, 18), date(2026, 10, 19)]
    """
    if days <= 0:
        return []
    return [end - relativedelta(days=offset) for offset in range(days - 1, -1, -1)]


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse(
    dt_input: str | date | datetime | None,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str | None:
    """Normalize various datetime input formats to an aware datetime.

    Accepts ISO 8601 strings (including a trailing "Z"), dates and
    datetimes. Naive values are interpreted in DEFAULT_TIME_ZONE.

    Args:
        dt_input: String, date or datetime to normalize, or None
        return_type: One of HELPER_RETURN_DATETIME, HELPER_RETURN_DATETIME_UTC,
            HELPER_RETURN_DATETIME_LOCAL, HELPER_RETURN_DATE,
            HELPER_RETURN_ISO_DATETIME.

    Returns:
        Normalized value, or None if the input could not be parsed.

    Example:
        >>> dt_parse("2025-09-19T07:00:00.000Z", HELPER_RETURN_DATETIME_UTC)
        datetime.datetime(2025, 9, 19, 7, 0, tzinfo=datetime.timezone.utc)
    """
    if not dt_input:
        return None

    result: datetime
    if isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input.strip())
        except ValueError:
            _LOGGER.debug("Unparseable datetime string: %s", dt_input)
            return None
    elif isinstance(dt_input, datetime):
        result = dt_input
    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, time.min)
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=DEFAULT_TIME_ZONE)

    if return_type == HELPER_RETURN_DATETIME_UTC:
        return as_utc(result)
    if return_type == HELPER_RETURN_DATETIME_LOCAL:
        return as_local(result)
    if return_type == HELPER_RETURN_DATE:
        return as_local(result).date()
    if return_type == HELPER_RETURN_ISO_DATETIME:
        return result.isoformat()
    return result


def dt_to_utc(dt_input: str | date | datetime | None) -> datetime | None:
    """Parse a datetime input, apply timezone if naive, and convert to UTC.

    Example:
        "2025-04-07T14:30:00-05:00" → datetime.datetime(2025, 4, 7, 19, 30, tzinfo=UTC)
    """
    result = dt_parse(dt_input, return_type=HELPER_RETURN_DATETIME_UTC)
    if isinstance(result, datetime):
        return result
    return None
