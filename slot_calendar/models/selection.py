# File: slot_calendar/models/selection.py
"""
State variants of the slot selection machine.

Each state is its own frozen dataclass tagged with a SelectionPhase, so
callers branch on `state.phase` instead of probing nullable fields.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .enums import SelectionPhase
from .event import Event


@dataclass(frozen=True)
class PendingSelection:
    """In-progress range on one day before an Event exists."""
    day: str
    start_minute: Optional[int] = None
    end_minute: Optional[int] = None

    def is_closed(self) -> bool:
        return self.start_minute is not None and self.end_minute is not None


@dataclass(frozen=True)
class Idle:
    phase = SelectionPhase.IDLE


@dataclass(frozen=True)
class StartPicked:
    day: str
    start_minute: int
    phase = SelectionPhase.START_PICKED


@dataclass(frozen=True)
class RangeClosed:
    selection: PendingSelection
    phase = SelectionPhase.RANGE_CLOSED


@dataclass(frozen=True)
class EditingExisting:
    day: str
    event: Event
    phase = SelectionPhase.EDITING_EXISTING


SelectionState = Union[Idle, StartPicked, RangeClosed, EditingExisting]
