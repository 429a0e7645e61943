"""Calendar window helpers used by the statistics endpoints."""

import calendar
from datetime import datetime, time, UTC
from typing import Optional, Tuple


def month_window(year: int, month: int) -> Tuple[datetime, datetime]:
    """Return the inclusive [first instant, last instant] of a calendar month in UTC."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be 1..12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=UTC)
    end = datetime.combine(datetime(year, month, last_day).date(), time.max, tzinfo=UTC)
    return start, end


def current_month_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    now = now or datetime.now(UTC)
    return month_window(now.year, now.month)


def end_of_day(value: datetime) -> datetime:
    """Push a datetime to 23:59:59.999999 of the same day, keeping its tzinfo."""
    return value.replace(hour=23, minute=59, second=59, microsecond=999999)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
