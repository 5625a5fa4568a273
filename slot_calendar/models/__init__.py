from .enums import ViewMode, SelectionPhase
from .common import (
    MINUTES_PER_DAY,
    LAST_MINUTE,
    day_key,
    to_date,
    is_valid_minute,
    split_minute,
    join_minute,
    format_minute,
)
from .event import Event, event_from_dict
from .selection import (
    PendingSelection,
    Idle,
    StartPicked,
    RangeClosed,
    EditingExisting,
    SelectionState,
)
from .api import FetchResult, SaveResult, DayNotification, ScheduleMapping

__all__ = [
    "ViewMode",
    "SelectionPhase",
    "MINUTES_PER_DAY",
    "LAST_MINUTE",
    "day_key",
    "to_date",
    "is_valid_minute",
    "split_minute",
    "join_minute",
    "format_minute",
    "Event",
    "event_from_dict",
    "PendingSelection",
    "Idle",
    "StartPicked",
    "RangeClosed",
    "EditingExisting",
    "SelectionState",
    "FetchResult",
    "SaveResult",
    "DayNotification",
    "ScheduleMapping",
]
