from datetime import datetime, time, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def end_of_utc_day(now: Optional[datetime] = None) -> datetime:
    now = now or utcnow()
    return datetime.combine(now.date(), time.max)


def created_window(range_days: int, now: Optional[datetime] = None) -> tuple:
    """Return ``(lower, upper)`` for a ``lower < created_at <= upper`` filter.

    The upper bound is pinned to the end of the current UTC day. A range
    reaching past the earliest representable date leaves the window open
    at the bottom; one reaching past the latest matches nothing.
    """
    upper = end_of_utc_day(now)
    try:
        return upper - timedelta(days=range_days), upper
    except OverflowError:
        if range_days > 0:
            return datetime.min, upper
        return upper, upper
