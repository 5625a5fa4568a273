# File: slot_calendar/models/enums.py

from enum import Enum


class ViewMode(Enum):
    """Calendar view granularity."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class SelectionPhase(Enum):
    """Tags of the slot selection state machine."""
    IDLE = "idle"
    START_PICKED = "start_picked"
    RANGE_CLOSED = "range_closed"
    EDITING_EXISTING = "editing_existing"
