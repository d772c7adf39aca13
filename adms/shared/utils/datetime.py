"""
UTC datetime utilities for consistent timezone handling.

All datetime values compared by the rule sets are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    The only wall-clock read in the framework; rule sets receive the value
    through their validation context so one run uses a single instant.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Persistence layer stores naive UTC
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def is_unset(dt: datetime | None) -> bool:
    """Return whether a datetime is missing or the default (datetime.min) value."""
    return dt is None or dt.replace(tzinfo=None) == datetime.min


def age_in_days(dt: datetime, now: datetime) -> float:
    """Return fractional days elapsed between dt and now (negative if dt is later)."""
    return (ensure_utc(now) - ensure_utc(dt)).total_seconds() / 86400


def business_days_between(start: datetime, end: datetime) -> int:
    """
    Count weekdays (Mon-Fri) from start's date to end's date, inclusive.

    Returns 0 when end precedes start.

    Args:
        start: First instant
        end: Last instant

    Returns:
        Number of business days in the closed date range
    """
    first: date = ensure_utc(start).date()
    last: date = ensure_utc(end).date()
    if last < first:
        return 0
    total_days = (last - first).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5
    for offset in range(remainder):
        if (first + timedelta(days=full_weeks * 7 + offset)).weekday() < 5:
            count += 1
    return count


def is_top_of_hour(dt: datetime) -> bool:
    """Return whether dt falls exactly on a UTC hour boundary (mm:ss.ffffff == 00:00.000000)."""
    dt = ensure_utc(dt)
    return dt.minute == 0 and dt.second == 0 and dt.microsecond == 0


def is_weekend(dt: datetime) -> bool:
    """Return whether dt falls on a Saturday or Sunday in UTC."""
    return ensure_utc(dt).weekday() >= 5


def in_hour_window(dt: datetime, start_hour: int, end_hour: int) -> bool:
    """
    Return whether dt's UTC hour lies in [start_hour, end_hour).

    Windows that wrap midnight (start_hour > end_hour) are supported; an
    empty window (start_hour == end_hour) contains nothing.
    """
    hour = ensure_utc(dt).hour
    if start_hour == end_hour:
        return False
    if start_hour < end_hour:
        return start_hour <= hour < end_hour
    return hour >= start_hour or hour < end_hour
