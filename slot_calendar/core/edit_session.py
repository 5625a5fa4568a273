# File: slot_calendar/core/edit_session.py

from concurrent.futures import Future
from typing import Callable, Optional, Tuple

from slot_calendar.core.config_manager import Config
from slot_calendar.core.exceptions import IncompleteRangeError, NoOpenSessionError
from slot_calendar.core.schedule_store import ScheduleStore
from slot_calendar.models.api import SaveResult
from slot_calendar.models.common import day_key, join_minute, split_minute
from slot_calendar.models.event import Event
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


class EditSession:
    """Draft of one event being created or edited, committed on save."""

    def __init__(
        self,
        store: ScheduleStore,
        day: str,
        start_minute: Optional[int] = None,
        end_minute: Optional[int] = None,
        title: str = "",
        details: str = "",
        color: str = Config.DEFAULT_COLOR,
        video_ref: Optional[str] = None,
        on_close: Optional[Callable[[], None]] = None,
        original_bounds: Optional[Tuple[int, int]] = None
    ):
        self.store = store
        self.day = day_key(day)
        self.start_minute = start_minute
        self.end_minute = end_minute
        self.title = title
        self.details = details
        self.color = color
        self.video_ref = video_ref
        self._on_close = on_close
        # Where the edited event sat when the session opened; None for a new one
        self.original_bounds = original_bounds
        self.is_open = True

    @classmethod
    def from_event(
        cls,
        store: ScheduleStore,
        day: str,
        event: Event,
        on_close: Optional[Callable[[], None]] = None
    ) -> 'EditSession':
        """Session preloaded with an existing event's fields and exact bounds."""
        return cls(
            store,
            day,
            start_minute=event.start_minute,
            end_minute=event.end_minute,
            title=event.title,
            details=event.details,
            color=event.color,
            video_ref=event.video_ref,
            on_close=on_close,
            original_bounds=(event.start_minute, event.end_minute),
        )

    # ==================== Field setters ====================

    def set_title(self, title: str) -> None:
        self.title = title

    def set_details(self, details: str) -> None:
        self.details = details

    def set_color(self, color: str) -> None:
        self.color = color

    def set_start_time(self, hour: int, minute: int) -> None:
        self.start_minute = join_minute(hour, minute)

    def set_end_time(self, hour: int, minute: int) -> None:
        self.end_minute = join_minute(hour, minute)

    @property
    def start_time(self) -> Optional[Tuple[int, int]]:
        """Start as (hour, minute), or None while unset."""
        return None if self.start_minute is None else split_minute(self.start_minute)

    @property
    def end_time(self) -> Optional[Tuple[int, int]]:
        """End as (hour, minute), or None while unset."""
        return None if self.end_minute is None else split_minute(self.end_minute)

    # ==================== Commit ====================

    def _require_open(self) -> None:
        if not self.is_open:
            raise NoOpenSessionError("Edit session is already closed")

    def close(self) -> None:
        """Discard the draft without touching the store."""
        if not self.is_open:
            return
        self.is_open = False
        if self._on_close is not None:
            self._on_close()

    def save(self) -> Optional["Future[SaveResult]"]:
        """
        Commit the draft into the store.

        Title is not validated. A missing start means minute 0, a missing
        end means the start minute, an empty color means the default preset. An edited event is moved,
        not copied: its original range is cleared in the same write.

        Returns:
            Future of the remote save, or None without a gateway
        """
        self._require_open()

        start = self.start_minute if self.start_minute is not None else 0
        end = self.end_minute if self.end_minute is not None else start
        if end < start:
            start, end = end, start

        future = self.store.put(
            self.day,
            start,
            end,
            title=self.title,
            details=self.details,
            color=self.color or Config.DEFAULT_COLOR,
            video_ref=self.video_ref,
            replaces=self.original_bounds,
        )
        logger.info(f"Saved '{self.title}' on {self.day} ({start}-{end})")
        self.close()
        return future

    def delete(self) -> Optional["Future[SaveResult]"]:
        """
        Remove the draft's range from the store.

        Raises:
            IncompleteRangeError: if either bound is unset
        """
        self._require_open()

        if self.start_minute is None or self.end_minute is None:
            raise IncompleteRangeError(
                "Cannot delete without both start and end minutes",
                details={"start_minute": self.start_minute, "end_minute": self.end_minute},
            )

        start, end = sorted((self.start_minute, self.end_minute))
        future = self.store.delete(self.day, start, end)
        logger.info(f"Deleted {self.day} ({start}-{end})")
        self.close()
        return future
