# File: slot_calendar/services/persistence_gateway.py
"""
HTTP client for the remote, identity-keyed schedule store.

Reads are synchronous. Writes are fire-and-forget: each save is handed
to a single background worker and the caller gets a Future it may
inspect or ignore. Failures are logged and reported in the result,
never raised.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional
from urllib.parse import quote

import requests

from slot_calendar.core.config_manager import Config
from slot_calendar.models.api import FetchResult, SaveResult, ScheduleMapping
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)

FETCH_ERROR_MESSAGE = "Error fetching events."


class PersistenceGateway:
    """Fetches and saves schedule mappings against the remote store."""

    def __init__(
        self,
        base_url: str = Config.API_BASE_URL,
        timeout: float = Config.REQUEST_TIMEOUT,
        identity_field: str = Config.IDENTITY_FIELD,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the gateway.

        Args:
            base_url: Root URL of the schedule API
            timeout: Per-request timeout in seconds
            identity_field: Body field naming the profile on save
            session: Optional pre-configured requests session
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.identity_field = identity_field
        self.session = session or requests.Session()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="schedule-save")
        self._closed = False

    def fetch_schedules(self, identity: str) -> FetchResult:
        """
        Read the full schedule mapping for a profile.

        Args:
            identity: Profile identity (e.g. an email address)

        Returns:
            FetchResult with the mapping on success, or a fail status
        """
        url = f"{self.base_url}/get_schedules/{quote(identity, safe='@')}"
        logger.info(f"Fetching schedules for {identity}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            if not isinstance(data, dict):
                logger.error(f"Schedule fetch returned {type(data).__name__}, expected object")
                return FetchResult(status="fail", message=FETCH_ERROR_MESSAGE)

            logger.info(f"Fetched schedules for {len(data)} day(s)")
            return FetchResult(status="success", schedules=data)

        except requests.exceptions.Timeout:
            logger.error("Schedule fetch timed out")
            return FetchResult(status="fail", message=FETCH_ERROR_MESSAGE)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error fetching schedules: {e}", exc_info=True)
            return FetchResult(status="fail", message=FETCH_ERROR_MESSAGE)
        except ValueError as e:
            logger.error(f"Invalid schedule payload: {e}", exc_info=True)
            return FetchResult(status="fail", message=FETCH_ERROR_MESSAGE)

    def _post_schedules(self, identity: str, schedules: ScheduleMapping) -> SaveResult:
        url = f"{self.base_url}/save_schedules/"
        payload = {self.identity_field: identity, "schedules": schedules}

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            logger.info("Schedules saved successfully")
            return SaveResult(status="success", status_code=response.status_code)

        except requests.exceptions.Timeout:
            logger.error("Schedule save timed out")
            return SaveResult(status="fail", message="Request timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Error saving schedules: {e}", exc_info=True)
            status_code = e.response.status_code if e.response is not None else None
            return SaveResult(status="fail", message=str(e), status_code=status_code)

    def save_schedules(self, identity: Optional[str], schedules: ScheduleMapping) -> "Future[SaveResult]":
        """
        Push the entire mapping (never a delta) for a profile.

        Args:
            identity: Profile identity; saves are skipped without one
            schedules: Full DayKey -> minute -> event mapping

        Returns:
            Future resolving to a SaveResult
        """
        if not identity or self._closed:
            reason = "no identity" if not identity else "gateway closed"
            logger.debug(f"Skipping schedule save: {reason}")
            skipped: "Future[SaveResult]" = Future()
            skipped.set_result(SaveResult(status="skipped", message=reason))
            return skipped

        logger.debug(f"Queueing save of {len(schedules)} day(s) for {identity}")
        return self._executor.submit(self._post_schedules, identity, schedules)

    def close(self) -> None:
        """Stop accepting saves; writes already queued still complete."""
        self._closed = True
        self._executor.shutdown(wait=False)
