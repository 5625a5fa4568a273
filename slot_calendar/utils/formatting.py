# File: slot_calendar/utils/formatting.py

import datetime
from typing import List

from slot_calendar.core import time_grid
from slot_calendar.core.schedule_store import ScheduleStore
from slot_calendar.models.common import DateLike, format_minute, to_date
from slot_calendar.models.event import Event


def format_event_line(event: Event) -> str:
    """One agenda line: 'HH:MM - HH:MM: Title [video]'."""
    title = event.title or "Untitled"
    marker = f" [video {event.video_ref}]" if event.video_ref else ""
    return f"  {format_minute(event.start_minute)} - {format_minute(event.end_minute)}: {title}{marker}"


def format_day_agenda(store: ScheduleStore, day: DateLike) -> str:
    """Readable agenda of one day's events, in start order."""
    date = to_date(day)
    lines = [f"\n {date.strftime('%A, %B %d').upper()}:", "-" * 60]

    events = store.events_for_day(date)
    if not events:
        lines.append("  No entries scheduled")
    for event in events:
        lines.append(format_event_line(event))
        if event.details:
            lines.append(f"      {event.details}")
    return "\n".join(lines)


def format_week_agenda(store: ScheduleStore, day: DateLike) -> str:
    """Agenda of the Sunday-first week containing `day`."""
    week: List[datetime.date] = time_grid.week_of(day)
    header = [
        "=" * 60,
        f"      WEEK OF {week[0].strftime('%B %d, %Y').upper()}",
        "=" * 60,
    ]
    body = [format_day_agenda(store, date) for date in week]
    total = sum(len(store.events_for_day(date)) for date in week)
    footer = ["", "=" * 60, f"Total Events: {total}", "=" * 60]
    return "\n".join(header + body + footer)
