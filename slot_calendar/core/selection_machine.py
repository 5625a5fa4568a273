# File: slot_calendar/core/selection_machine.py
"""
Click-driven selection of minute ranges.

States: Idle -> StartPicked -> RangeClosed, or straight to EditingExisting
when the clicked minute already belongs to an event. An EditSession is
open exactly while the state is RangeClosed or EditingExisting.
"""

import math
from concurrent.futures import Future
from typing import Optional

from slot_calendar.core.config_manager import Config
from slot_calendar.core.edit_session import EditSession
from slot_calendar.core.exceptions import InvalidMinuteError, NoOpenSessionError
from slot_calendar.core.schedule_store import ScheduleStore
from slot_calendar.models.api import SaveResult
from slot_calendar.models.common import (
    LAST_MINUTE,
    MINUTES_PER_HOUR,
    DateLike,
    day_key,
    is_valid_minute,
)
from slot_calendar.models.enums import SelectionPhase
from slot_calendar.models.selection import (
    EditingExisting,
    Idle,
    PendingSelection,
    RangeClosed,
    SelectionState,
    StartPicked,
)
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


def round_up_to_hour(minute: int) -> int:
    """Next whole-hour boundary at or after `minute`, capped at the last minute."""
    return min(math.ceil(minute / MINUTES_PER_HOUR) * MINUTES_PER_HOUR, LAST_MINUTE)


class SlotSelectionMachine:
    """Turns slot clicks into a pending selection and an open edit session."""

    def __init__(
        self,
        store: ScheduleStore,
        video_title: Optional[str] = None,
        video_duration: Optional[float] = None,
        video_id: Optional[str] = None
    ):
        """
        Initialize the machine in Idle.

        Args:
            store: Schedule read for existing events and written on save
            video_title: Title pre-filled for new selections
            video_duration: Fixed length in minutes; when set, the second
                click closes the range at start + floor(duration)
            video_id: Video reference attached to new selections
        """
        self.store = store
        self.video_title = video_title
        self.video_duration = video_duration
        self.video_id = video_id
        self.state: SelectionState = Idle()
        self.session: Optional[EditSession] = None

    @property
    def phase(self) -> SelectionPhase:
        return self.state.phase

    @property
    def is_edit_surface_open(self) -> bool:
        return self.session is not None

    def click(self, minute: int, day: DateLike) -> SelectionState:
        """
        Apply a click on `minute` of `day`.

        Returns:
            The state after the click
        """
        if not is_valid_minute(minute):
            raise InvalidMinuteError(f"Minute index out of range: {minute}", details={"minute": minute})

        if self.is_edit_surface_open:
            logger.debug(f"Ignoring click at {minute} while editor is open")
            return self.state

        key = day_key(day)
        existing = self.store.get(key, minute)

        if existing is not None:
            self._open_existing(key, existing)
        elif isinstance(self.state, StartPicked):
            self._close_range(minute)
        else:
            self.state = StartPicked(day=key, start_minute=minute)
            logger.debug(f"Start picked at {minute} on {key}")

        return self.state

    def _open_existing(self, key: str, event) -> None:
        self.state = EditingExisting(day=key, event=event)
        self.session = EditSession.from_event(self.store, key, event, on_close=self._reset)
        logger.info(f"Editing '{event.title}' on {key} ({event.start_minute}-{event.end_minute})")

    def _close_range(self, minute: int) -> None:
        picked = self.state
        start = picked.start_minute

        if self.video_duration:
            # Length comes from the fixed duration, never from this click
            end = min(start + math.floor(self.video_duration), LAST_MINUTE)
        else:
            if minute < start:
                start, minute = minute, start
            end = round_up_to_hour(minute)

        selection = PendingSelection(day=picked.day, start_minute=start, end_minute=end)
        self.state = RangeClosed(selection=selection)
        self.session = EditSession(
            self.store,
            picked.day,
            start_minute=start,
            end_minute=end,
            title=self.video_title or "",
            color=Config.DEFAULT_COLOR,
            video_ref=self.video_id,
            on_close=self._reset,
        )
        logger.info(f"Selected {start}-{end} on {picked.day}")

    def _reset(self) -> None:
        self.state = Idle()
        self.session = None

    def cancel(self) -> None:
        """Close the editor and drop any pending selection without writing."""
        if self.session is not None:
            self.session.close()
        self._reset()

    def _require_session(self) -> EditSession:
        if self.session is None:
            raise NoOpenSessionError("No edit session is open")
        return self.session

    def save(self) -> Optional["Future[SaveResult]"]:
        """Commit the open session and return to Idle."""
        return self._require_session().save()

    def delete(self) -> Optional["Future[SaveResult]"]:
        """Delete the open session's range and return to Idle."""
        return self._require_session().delete()
