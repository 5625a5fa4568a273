# File: slot_calendar/models/api.py
"""
Data models for remote schedule store responses.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .event import Event

ScheduleMapping = Dict[str, Dict[str, Any]]


@dataclass
class FetchResult:
    """Outcome of reading a profile's schedules from the remote store."""
    status: str  # "success" or "fail"
    schedules: Optional[ScheduleMapping] = None
    message: Optional[str] = None

    def is_success(self) -> bool:
        """Check if the fetch returned usable data."""
        return self.status == "success" and self.schedules is not None


@dataclass
class SaveResult:
    """Outcome of pushing the full schedule mapping to the remote store."""
    status: str  # "success", "fail" or "skipped"
    message: Optional[str] = None
    status_code: Optional[int] = None

    def is_success(self) -> bool:
        return self.status == "success"


@dataclass
class DayNotification:
    """Banner content describing today's events for a profile."""
    message: str
    has_events: bool = False
    first_title: Optional[str] = None
    first_details: Optional[str] = None
    events: List[Event] = field(default_factory=list)
