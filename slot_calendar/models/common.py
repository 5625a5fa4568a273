# File: slot_calendar/models/common.py

import datetime
from typing import Tuple, Union

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
MINUTES_PER_DAY = MINUTES_PER_HOUR * HOURS_PER_DAY
LAST_MINUTE = MINUTES_PER_DAY - 1

DateLike = Union[datetime.date, datetime.datetime, str]


def to_date(value: DateLike) -> datetime.date:
    """Normalize a date, datetime or YYYY-MM-DD string to a plain date (midnight)."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.datetime.strptime(value, "%Y-%m-%d").date()


def day_key(value: DateLike) -> str:
    """Canonical YYYY-MM-DD key for the calendar day of `value`, ignoring time-of-day."""
    return to_date(value).strftime("%Y-%m-%d")


def is_valid_minute(minute: int) -> bool:
    return 0 <= minute <= LAST_MINUTE


def split_minute(minute: int) -> Tuple[int, int]:
    """Split a minute index into (hour, minute-of-hour)."""
    return minute // MINUTES_PER_HOUR, minute % MINUTES_PER_HOUR


def join_minute(hour: int, minute: int) -> int:
    """Combine an hour and minute-of-hour into a minute index."""
    return hour * MINUTES_PER_HOUR + minute


def format_minute(minute: int) -> str:
    """Format a minute index as HH:MM."""
    hour, mins = split_minute(minute)
    return f"{hour:02d}:{mins:02d}"
