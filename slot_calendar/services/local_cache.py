# File: slot_calendar/services/local_cache.py

import json
from pathlib import Path
from typing import Optional

from slot_calendar.core.config_manager import Config
from slot_calendar.models.api import ScheduleMapping
from slot_calendar.utils.logger import setup_logger

logger = setup_logger(__name__)


class LocalCache:
    """Key-value JSON blob on disk holding the last known schedule mapping."""

    def __init__(self, path: Optional[Path] = None, key: str = Config.CACHE_KEY):
        """
        Initialize the cache.

        Args:
            path: JSON file backing the cache (default: Config.CACHE_FILE)
            key: Key under which the schedule mapping is stored
        """
        self.path = Path(path) if path is not None else Config.CACHE_FILE
        self.key = key

    def _read_blob(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                blob = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable cache file {self.path}: {e}")
            return {}
        if not isinstance(blob, dict):
            logger.warning(f"Ignoring cache file {self.path}: top level is not an object")
            return {}
        return blob

    def load(self) -> ScheduleMapping:
        """
        Read the cached mapping.

        Returns:
            The cached DayKey -> minute -> event mapping, or {} if absent
        """
        schedules = self._read_blob().get(self.key)
        if not isinstance(schedules, dict):
            logger.debug(f"No cached schedules under '{self.key}'")
            return {}
        logger.info(f"Loaded cached schedules for {len(schedules)} day(s)")
        return schedules

    def write(self, schedules: ScheduleMapping) -> None:
        """Persist the full mapping under the cache key."""
        blob = self._read_blob()
        blob[self.key] = schedules
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(blob, f, indent=2, sort_keys=True)
        logger.debug(f"Wrote {len(schedules)} day(s) to cache {self.path}")

    def clear(self) -> None:
        """Remove the cached mapping, keeping any other keys in the file."""
        blob = self._read_blob()
        if self.key not in blob:
            return
        del blob[self.key]
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(blob, f, indent=2, sort_keys=True)
        logger.info("Cleared cached schedules")
