"""
UTC datetime utilities for consistent timezone handling.

All timestamps in the system are timezone-aware UTC; task start and deadline
values are plain calendar dates. Use these helpers instead of datetime.now().
"""

from datetime import UTC, date, datetime, time


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    This is the single server clock: completion timestamps and audit entries
    are stamped from here, never from client input.

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

    Use at repository/persistence boundaries to normalize datetimes
    (some drivers hand back naive values).

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def start_of_day_utc(day: date) -> datetime:
    """Return 00:00 UTC of a calendar date, the instant a deadline date stands for."""
    return datetime.combine(day, time.min, tzinfo=UTC)
