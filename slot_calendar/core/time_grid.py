# File: slot_calendar/core/time_grid.py
"""
Date arithmetic for the day, week and month grids.

Everything here is a pure function of its arguments. Weeks start on
Sunday and month grids use Sunday as column 0.
"""

import calendar
import datetime
from typing import List, Optional

from slot_calendar.models.common import (
    HOURS_PER_DAY,
    MINUTES_PER_DAY,
    MINUTES_PER_HOUR,
    DateLike,
    to_date,
)
from slot_calendar.models.enums import ViewMode

DAYS_PER_WEEK = 7


def _sunday_column(date: datetime.date) -> int:
    # date.weekday() is Monday=0; shift so Sunday=0
    return (date.weekday() + 1) % DAYS_PER_WEEK


def day_minutes() -> List[int]:
    """All 1440 clickable minute indexes of one day."""
    return list(range(MINUTES_PER_DAY))


def hour_rows() -> List[List[int]]:
    """The day split into 24 rows of 60 minute indexes."""
    return [
        list(range(hour * MINUTES_PER_HOUR, (hour + 1) * MINUTES_PER_HOUR))
        for hour in range(HOURS_PER_DAY)
    ]


def week_of(value: DateLike) -> List[datetime.date]:
    """The seven dates of the week containing `value`, Sunday first."""
    date = to_date(value)
    start = date - datetime.timedelta(days=_sunday_column(date))
    return [start + datetime.timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def month_cells(value: DateLike) -> List[Optional[datetime.date]]:
    """
    Cells of the month grid containing `value`.

    Leading None cells pad the first day into its weekday column; the
    month's real days follow with no trailing padding.
    """
    date = to_date(value)
    first = date.replace(day=1)
    days_in_month = calendar.monthrange(first.year, first.month)[1]

    cells: List[Optional[datetime.date]] = [None] * _sunday_column(first)
    cells.extend(first.replace(day=day) for day in range(1, days_in_month + 1))
    return cells


def _add_months(date: datetime.date, months: int) -> datetime.date:
    month_index = date.month - 1 + months
    year = date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(date.day, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def shift_period(value: DateLike, view: ViewMode, step: int = 1) -> datetime.date:
    """
    Move `value` by `step` periods of the given view.

    Day and week views move by 1 and 7 days; month view moves by calendar
    months, clamping the day to the target month's length.
    """
    date = to_date(value)
    if view == ViewMode.DAY:
        return date + datetime.timedelta(days=step)
    if view == ViewMode.WEEK:
        return date + datetime.timedelta(days=DAYS_PER_WEEK * step)
    return _add_months(date, step)


def visible_days(value: DateLike, view: ViewMode) -> List[datetime.date]:
    """Real dates shown by a view anchored at `value`."""
    if view == ViewMode.DAY:
        return [to_date(value)]
    if view == ViewMode.WEEK:
        return week_of(value)
    return [cell for cell in month_cells(value) if cell is not None]
