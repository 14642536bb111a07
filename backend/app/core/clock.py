"""
Clock helpers.

Anything that needs "now" takes a zero-argument callable so tests can
freeze time.
"""
from datetime import date, datetime, time, timezone
from typing import Callable, Union

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: Union[date, datetime]) -> datetime:
    """
    Coerce a date or datetime to an aware UTC datetime.

    Plain dates become midnight UTC, naive datetimes are assumed to be UTC.
    """
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(value: Union[date, datetime]) -> datetime:
    """Midnight UTC of the calendar day containing value."""
    moment = as_utc(value)
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)
