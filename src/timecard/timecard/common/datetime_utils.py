from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional

MONTH_KEY_FORMAT = "%Y%m"
DATE_KEY_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def to_month_key(value: date) -> str:
    """Format a date's month as the store's ``YYYYMM`` key."""
    return f"{value.year:04d}{value.month:02d}"


def to_date_key(value: date) -> str:
    """Format a date as the store's ``YYYY-MM-DD`` key."""
    return value.isoformat()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def parse_month_key(value: str) -> tuple[int, int]:
    """Parse ``YYYYMM`` into ``(year, month)``."""
    if len(value) != 6 or not value.isdigit():
        raise ValueError(f"Invalid month key: {value!r}")
    parsed = datetime.strptime(value, MONTH_KEY_FORMAT)
    return parsed.year, parsed.month


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def sunday_based_weekday(value: date) -> int:
    """Day of week with Sunday = 0 ... Saturday = 6."""
    return (value.weekday() + 1) % 7


def parse_time_of_day(value: Optional[str]) -> Optional[time]:
    v = (value or "").strip()
    if not v:
        return None
    parts = v.split(":")
    if len(parts) == 3:
        return datetime.strptime(v, "%H:%M:%S").time().replace(second=0)
    return datetime.strptime(v, TIME_FORMAT).time()


def format_time_of_day(value: Optional[time]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(TIME_FORMAT)


def days_between(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
