# File: slot_calendar/models/event.py

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .common import is_valid_minute


@dataclass(frozen=True)
class Event:
    """A titled, colored event occupying a contiguous minute range of one day."""
    title: str
    details: str
    color: str
    start_minute: int
    end_minute: int
    video_ref: Optional[str] = None

    def __post_init__(self):
        """Validate event bounds."""
        if not (is_valid_minute(self.start_minute) and is_valid_minute(self.end_minute)):
            raise ValueError(
                f"Event minutes must be within a day: {self.start_minute}-{self.end_minute}"
            )
        if self.end_minute < self.start_minute:
            raise ValueError(f"Event end must not precede start: {self.title}")

    def duration_minutes(self) -> int:
        """Number of minute slots covered (both bounds inclusive)."""
        return self.end_minute - self.start_minute + 1

    def covers(self, minute: int) -> bool:
        return self.start_minute <= minute <= self.end_minute

    def overlaps_with(self, other: 'Event') -> bool:
        """Check if this event shares any minute with another."""
        return self.start_minute <= other.end_minute and other.start_minute <= self.end_minute

    def with_bounds(self, start_minute: int, end_minute: int) -> 'Event':
        """Copy of this event re-bounded to a new range."""
        return replace(self, start_minute=start_minute, end_minute=end_minute)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire/cache JSON shape."""
        return {
            'title': self.title,
            'details': self.details,
            'color': self.color,
            'startMinute': self.start_minute,
            'endMinute': self.end_minute,
            'youtubeVideoId': self.video_ref,
        }


def event_from_dict(data: Dict[str, Any]) -> Event:
    """Create an Event from its wire/cache JSON shape."""
    return Event(
        title=data.get('title') or "",
        details=data.get('details') or "",
        color=data.get('color') or "",
        start_minute=int(data['startMinute']),
        end_minute=int(data['endMinute']),
        video_ref=data.get('youtubeVideoId') or None,
    )
