# File: slot_calendar/core/schedule_store.py
"""
Per-profile schedule: DayKey -> minute index -> Event.

The mapping is denormalized. An event spanning minutes [start, end]
appears under every one of those minutes, so lookups by minute are O(1).
Within one day no two events share a minute: `put` truncates whatever
it overlaps before writing.
"""

from concurrent.futures import Future
from typing import Dict, Iterable, List, Optional, Tuple

from slot_calendar.core.config_manager import Config
from slot_calendar.core.exceptions import InvalidMinuteError
from slot_calendar.models.api import SaveResult, ScheduleMapping
from slot_calendar.models.common import DateLike, day_key, is_valid_minute
from slot_calendar.models.event import Event, event_from_dict
from slot_calendar.services.local_cache import LocalCache
from slot_calendar.services.persistence_gateway import PersistenceGateway
from slot_calendar.utils.logger import LoggerMixin

DayMinutes = Dict[int, Event]


class ScheduleStore(LoggerMixin):
    """Minute-indexed event map with cache and remote write-through."""

    def __init__(
        self,
        identity: Optional[str] = None,
        gateway: Optional[PersistenceGateway] = None,
        cache: Optional[LocalCache] = None
    ):
        """
        Initialize an empty store.

        Args:
            identity: Profile the schedule belongs to
            gateway: Remote store receiving a full save after each mutation
            cache: Local cache receiving a write after each mutation
        """
        self.identity = identity
        self.gateway = gateway
        self.cache = cache
        self._days: Dict[str, DayMinutes] = {}

    # ==================== Reads ====================

    def get(self, day: DateLike, minute: int) -> Optional[Event]:
        """Event occupying `minute` of `day`, or None."""
        return self._days.get(day_key(day), {}).get(minute)

    def has_day(self, day: DateLike) -> bool:
        return day_key(day) in self._days

    def days(self) -> List[str]:
        """Day keys holding at least one event, in date order."""
        return sorted(self._days)

    def events_for_day(self, day: DateLike) -> List[Event]:
        """Distinct events of a day ordered by start minute."""
        minutes = self._days.get(day_key(day), {})
        seen = set()
        events = []
        for minute in sorted(minutes):
            event = minutes[minute]
            bounds = (event.start_minute, event.end_minute)
            if bounds not in seen:
                seen.add(bounds)
                events.append(event)
        return events

    def to_dict(self) -> ScheduleMapping:
        """Snapshot in wire shape: minute keys as strings, events as dicts."""
        return {
            key: {str(minute): minutes[minute].to_dict() for minute in sorted(minutes)}
            for key, minutes in sorted(self._days.items())
        }

    # ==================== Writes ====================

    def put(
        self,
        day: DateLike,
        start_minute: int,
        end_minute: int,
        title: str = "",
        details: str = "",
        color: str = Config.DEFAULT_COLOR,
        video_ref: Optional[str] = None,
        replaces: Optional[Tuple[int, int]] = None
    ) -> Optional["Future[SaveResult]"]:
        """
        Write one event into every minute of [start_minute, end_minute].

        The range is taken as given; an inverted range writes nothing and
        persists nothing. Events already occupying part of the range are
        cut back to the minutes outside it, each remaining piece re-bounded.

        Args:
            replaces: Bounds of an existing event this write supersedes.
                That event is removed as a whole before writing, and the
                edit is persisted once.

        Returns:
            Future of the remote save, or None without a gateway or when
            nothing was written
        """
        self._check_minutes(start_minute, end_minute)
        if replaces is not None:
            self._check_minutes(*replaces)
        key = day_key(day)

        if end_minute < start_minute:
            self.logger.warning(
                f"Ignoring inverted range {start_minute}-{end_minute} on {key}"
            )
            return None

        event = Event(
            title=title,
            details=details,
            color=color,
            start_minute=start_minute,
            end_minute=end_minute,
            video_ref=video_ref,
        )
        minutes = self._days.setdefault(key, {})
        if replaces is not None:
            self._remove_event(minutes, *replaces)
        self._truncate_overlaps(minutes, start_minute, end_minute)
        for minute in range(start_minute, end_minute + 1):
            minutes[minute] = event

        self.logger.info(
            f"Stored '{title}' on {key} for minutes {start_minute}-{end_minute}"
        )
        return self._persist()

    def delete(self, day: DateLike, start_minute: int, end_minute: int) -> Optional["Future[SaveResult]"]:
        """
        Remove every minute of [start_minute, end_minute] from `day`.

        The day key is dropped once it holds no minutes. Deleting from a
        day that is already absent is a no-op apart from persistence.
        """
        self._check_minutes(start_minute, end_minute)
        key = day_key(day)
        minutes = self._days.get(key)

        if minutes is None:
            self.logger.debug(f"Delete on {key}: day already empty")
        else:
            for minute in range(start_minute, end_minute + 1):
                minutes.pop(minute, None)
            if not minutes:
                del self._days[key]
            self.logger.info(f"Deleted minutes {start_minute}-{end_minute} on {key}")

        return self._persist()

    def replace_all(self, mapping: ScheduleMapping) -> None:
        """
        Replace the whole store with a wire-shaped mapping.

        Used after a remote fetch; neither the cache nor the remote store
        is written.
        """
        self._days = self._parse_mapping(mapping)
        self.logger.info(f"Replaced schedule with {len(self._days)} day(s)")

    def load_from_cache(self) -> None:
        """Populate the store from the local cache, if one is configured."""
        if self.cache is None:
            return
        self._days = self._parse_mapping(self.cache.load())

    def clear_all(self) -> None:
        """Drop every event and the cached copy."""
        self._days = {}
        if self.cache is not None:
            self.cache.clear()
        self.logger.info("Cleared all schedules")

    # ==================== Internals ====================

    @staticmethod
    def _check_minutes(*minutes: int) -> None:
        for minute in minutes:
            if not is_valid_minute(minute):
                raise InvalidMinuteError(
                    f"Minute index out of range: {minute}",
                    details={"minute": minute},
                )

    @staticmethod
    def _write(minutes: DayMinutes, event: Event, indexes: Iterable[int]) -> None:
        for minute in indexes:
            minutes[minute] = event

    def _remove_event(self, minutes: DayMinutes, start_minute: int, end_minute: int) -> None:
        event = minutes.get(start_minute)
        if event is None or (event.start_minute, event.end_minute) != (start_minute, end_minute):
            self.logger.debug(f"No event at {start_minute}-{end_minute} to replace")
            return
        for minute in range(start_minute, end_minute + 1):
            if minutes.get(minute) == event:
                del minutes[minute]

    def _truncate_overlaps(self, minutes: DayMinutes, start_minute: int, end_minute: int) -> None:
        displaced: Dict[Event, None] = {}
        for minute in range(start_minute, end_minute + 1):
            event = minutes.get(minute)
            if event is not None:
                displaced[event] = None

        for event in displaced:
            owned = [
                minute for minute in range(event.start_minute, event.end_minute + 1)
                if minutes.get(minute) == event
            ]
            for minute in owned:
                del minutes[minute]

            before = [minute for minute in owned if minute < start_minute]
            after = [minute for minute in owned if minute > end_minute]
            if before:
                self._write(minutes, event.with_bounds(before[0], before[-1]), before)
            if after:
                self._write(minutes, event.with_bounds(after[0], after[-1]), after)

            if before or after:
                self.logger.warning(
                    f"'{event.title}' ({event.start_minute}-{event.end_minute}) "
                    f"truncated by new event at {start_minute}-{end_minute}"
                )

    def _parse_mapping(self, mapping: ScheduleMapping) -> Dict[str, DayMinutes]:
        days: Dict[str, DayMinutes] = {}
        for key, raw_minutes in (mapping or {}).items():
            if not isinstance(raw_minutes, dict):
                self.logger.warning(f"Skipping day {key}: expected an object of minutes")
                continue

            parsed: DayMinutes = {}
            for raw_minute, raw_event in raw_minutes.items():
                try:
                    minute = int(raw_minute)
                    event = event_from_dict(raw_event)
                except (KeyError, TypeError, ValueError) as e:
                    self.logger.warning(f"Skipping malformed entry {key}/{raw_minute}: {e}")
                    continue
                if not is_valid_minute(minute):
                    self.logger.warning(f"Skipping out-of-range minute {key}/{minute}")
                    continue
                parsed[minute] = event

            if parsed:
                days[key] = parsed
        return days

    def _persist(self) -> Optional["Future[SaveResult]"]:
        snapshot = self.to_dict()

        if self.cache is not None:
            try:
                self.cache.write(snapshot)
            except OSError as e:
                self.logger.error(f"Failed to write schedule cache: {e}", exc_info=True)

        if self.gateway is None:
            return None
        return self.gateway.save_schedules(self.identity, snapshot)
