# File: slot_calendar/core/calendar_controller.py
"""
Calendar component controller.

Coordinates the store, the selection machine and navigation state for
one mounted calendar:

    1. mount()            -> load the local cache
    2. set_identity(...)  -> fetch the profile's schedule, replacing the store
    3. click_slot(...)    -> selection machine; save/delete write through
    4. unmount()          -> stop the gateway's save worker
"""

import datetime
from typing import List, Optional, Tuple

from slot_calendar.core import time_grid
from slot_calendar.core.schedule_store import ScheduleStore
from slot_calendar.core.selection_machine import SlotSelectionMachine
from slot_calendar.models.common import DateLike, to_date
from slot_calendar.models.enums import ViewMode
from slot_calendar.models.event import Event
from slot_calendar.models.selection import SelectionState
from slot_calendar.services.local_cache import LocalCache
from slot_calendar.services.persistence_gateway import PersistenceGateway
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


class CalendarController:
    """State of one calendar widget: schedule, selection, view and date."""

    def __init__(
        self,
        gateway: Optional[PersistenceGateway] = None,
        cache: Optional[LocalCache] = None,
        identity: Optional[str] = None,
        current_date: Optional[DateLike] = None,
        view: ViewMode = ViewMode.WEEK,
        video_title: Optional[str] = None,
        video_duration: Optional[float] = None,
        video_id: Optional[str] = None
    ):
        """
        Initialize the controller.

        Args:
            gateway: Remote schedule store client
            cache: Local cache for the schedule mapping
            identity: Profile whose schedule is shown
            current_date: Anchor date of the view (default: today)
            view: Initial view granularity
            video_title, video_duration, video_id: Fixed-duration context
                forwarded to the selection machine
        """
        self.gateway = gateway
        self.store = ScheduleStore(identity=identity, gateway=gateway, cache=cache)
        self.selection = SlotSelectionMachine(
            self.store,
            video_title=video_title,
            video_duration=video_duration,
            video_id=video_id,
        )
        self.current_date = to_date(current_date or datetime.date.today())
        self.view = view
        self.error_message: Optional[str] = None

    @property
    def identity(self) -> Optional[str]:
        return self.store.identity

    # ==================== Lifecycle ====================

    def mount(self) -> None:
        """Populate the store from the local cache, then from the remote store."""
        logger.info("Mounting calendar")
        self.store.load_from_cache()
        if self.identity:
            self.refresh()

    def set_identity(self, identity: Optional[str]) -> None:
        """Switch profile and fetch its schedule."""
        if identity == self.identity:
            return
        self.store.identity = identity
        if identity:
            self.refresh()

    def refresh(self) -> bool:
        """
        Replace the store with the remote copy for the current identity.

        Returns:
            True if the remote copy was loaded, False if the store was kept
        """
        if self.gateway is None or not self.identity:
            return False

        result = self.gateway.fetch_schedules(self.identity)
        if not result.is_success():
            self.error_message = result.message
            logger.warning(f"Keeping local schedule: {result.message}")
            return False

        self.store.replace_all(result.schedules)
        self.error_message = None
        return True

    def unmount(self) -> None:
        self.selection.cancel()
        if self.gateway is not None:
            self.gateway.close()
        logger.info("Calendar unmounted")

    def clear_all(self) -> None:
        """Remove every event locally, cached copy included."""
        self.selection.cancel()
        self.store.clear_all()

    # ==================== Navigation ====================

    def switch_view(self, view: ViewMode) -> None:
        self.view = view

    def next_period(self) -> datetime.date:
        self.current_date = time_grid.shift_period(self.current_date, self.view, 1)
        return self.current_date

    def prev_period(self) -> datetime.date:
        self.current_date = time_grid.shift_period(self.current_date, self.view, -1)
        return self.current_date

    def open_day(self, day: DateLike) -> None:
        """Jump to the day view of `day` (week header or month cell click)."""
        self.current_date = to_date(day)
        self.view = ViewMode.DAY

    def visible_days(self) -> List[datetime.date]:
        return time_grid.visible_days(self.current_date, self.view)

    # ==================== Slots ====================

    def click_slot(self, minute: int, day: DateLike) -> SelectionState:
        return self.selection.click(minute, day)

    def slot(self, day: DateLike, minute: int) -> Tuple[Optional[Event], bool]:
        """
        Rendering info for one minute cell.

        Returns:
            (event or None, whether this minute is the event's first)
        """
        event = self.store.get(day, minute)
        return event, event is not None and event.start_minute == minute
