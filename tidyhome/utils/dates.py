"""Date and timestamp helpers.

Timestamps are stored as naive UTC. Day-level comparisons happen on the
local calendar date, so every instant is converted to local time before it
is truncated to a day.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Union

DateLike = Union[date, datetime, str]


def utcnow() -> datetime:
    """Current instant as naive UTC, the storage convention for timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_instant(value: DateLike) -> Union[date, datetime]:
    """
    Parse an ISO-8601 string into a date or datetime.

    Non-string values are returned unchanged. A trailing ``Z`` is accepted.

    Example:
        >>> parse_instant("2024-03-15")
        datetime.date(2024, 3, 15)
        >>> parse_instant("2024-03-15T10:30:00Z")
        datetime.datetime(2024, 3, 15, 10, 30, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    if "T" not in text and " " not in text:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text)


def to_local(value: datetime) -> datetime:
    """
    Convert an instant to an aware datetime in the local timezone.

    Naive values are read as UTC, matching how timestamps are stored.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone()


def to_storage(value: datetime) -> datetime:
    """
    Convert a caller-supplied instant to naive UTC for storage.

    Naive values are read as local wall-clock time, the way a browser reads
    an ISO string without an offset.
    """
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def normalize_to_day(value: DateLike) -> date:
    """Strip the time of day, returning the local calendar date of ``value``."""
    value = parse_instant(value)
    if isinstance(value, datetime):
        return to_local(value).date()
    return value


def get_today() -> date:
    """Today's local date."""
    return date.today()


def start_of_day(day: date) -> datetime:
    """Local midnight of ``day`` as an aware datetime."""
    return datetime.combine(day, time.min).astimezone()


def add_days(value: datetime, days: int) -> datetime:
    """
    Add calendar days to an instant.

    The arithmetic runs on the local wall clock, so crossing a daylight
    saving change keeps the time of day instead of drifting by an hour.
    The result is an aware local datetime.
    """
    wall_clock = to_local(value).replace(tzinfo=None) + timedelta(days=days)
    return wall_clock.astimezone()
