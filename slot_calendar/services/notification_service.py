# File: slot_calendar/services/notification_service.py

import datetime
from typing import Optional

import pytz

from slot_calendar.core.config_manager import Config
from slot_calendar.models.api import DayNotification
from slot_calendar.models.common import DateLike, day_key
from slot_calendar.models.event import event_from_dict
from slot_calendar.services.persistence_gateway import FETCH_ERROR_MESSAGE, PersistenceGateway
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)

HAS_EVENTS_MESSAGE = "You have events for today."
NO_EVENTS_MESSAGE = "No events for today."
NO_IDENTITY_MESSAGE = "Invalid date or email."


def today_in_timezone(timezone: str = Config.TARGET_TIMEZONE) -> datetime.date:
    """Current calendar date in the given IANA time zone."""
    return datetime.datetime.now(pytz.timezone(timezone)).date()


class CalendarNotifier:
    """Reports whether a profile has events today, from the remote store."""

    def __init__(self, gateway: PersistenceGateway, timezone: str = Config.TARGET_TIMEZONE):
        self.gateway = gateway
        self.timezone = timezone

    def check_today(self, identity: Optional[str], today: Optional[DateLike] = None) -> DayNotification:
        """
        Build the banner for `today` (default: today in the configured zone).

        Only the requested day is inspected. The first event is the one
        occupying the earliest minute.
        """
        if not identity:
            return DayNotification(message=NO_IDENTITY_MESSAGE)

        key = day_key(today if today is not None else today_in_timezone(self.timezone))
        result = self.gateway.fetch_schedules(identity)
        if not result.is_success():
            return DayNotification(message=FETCH_ERROR_MESSAGE)

        raw_minutes = result.schedules.get(key)
        if not isinstance(raw_minutes, dict) or not raw_minutes:
            logger.info(f"No events for {identity} on {key}")
            return DayNotification(message=NO_EVENTS_MESSAGE)

        events = []
        seen = set()
        for raw_minute in sorted((m for m in raw_minutes if str(m).isdigit()), key=int):
            try:
                event = event_from_dict(raw_minutes[raw_minute])
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed entry {key}/{raw_minute}: {e}")
                continue
            if (event.start_minute, event.end_minute) not in seen:
                seen.add((event.start_minute, event.end_minute))
                events.append(event)

        if not events:
            return DayNotification(message=NO_EVENTS_MESSAGE)

        logger.info(f"{len(events)} event(s) for {identity} on {key}")
        return DayNotification(
            message=HAS_EVENTS_MESSAGE,
            has_events=True,
            first_title=events[0].title,
            first_details=events[0].details,
            events=events,
        )
