# File: slot_calendar/core/config_manager.py
"""
Centralized configuration management for Slot Calendar.
Loads settings from environment variables and the .env file.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from slot_calendar/core/

    # Subdirectories
    LOGS_DIR = Path(os.getenv("SLOT_CALENDAR_LOG_DIR", str(BASE_DIR / "logs")))
    CACHE_DIR = Path(os.getenv("SLOT_CALENDAR_CACHE_DIR", str(BASE_DIR / "cache")))

    # Files
    CACHE_FILE = CACHE_DIR / "calendar_cache.json"
    ENV_FILE = BASE_DIR / ".env"

    # Remote schedule store
    API_BASE_URL = os.getenv("SLOT_CALENDAR_API_URL", "http://localhost:8000")
    REQUEST_TIMEOUT = float(os.getenv("SLOT_CALENDAR_TIMEOUT", "10"))
    # Body field carrying the profile identity on save
    IDENTITY_FIELD = os.getenv("SLOT_CALENDAR_IDENTITY_FIELD", "identity")

    # Local cache
    CACHE_KEY = "calendarSchedules"

    # Application Settings
    TARGET_TIMEZONE = os.getenv("TIMEZONE", "Europe/Amsterdam")
    LOG_TO_FILE = _env_flag("SLOT_CALENDAR_LOG_TO_FILE", "true")

    # Editor colors
    DEFAULT_COLOR = "#e81416"
    COLOR_PRESETS: List[str] = [
        "#e81416",  # red
        "#ffa500",  # orange
        "#faeb36",  # yellow
        "#79c314",  # green
        "#487de7",  # blue
        "#4b369d",  # indigo
        "#70369d",  # violet
    ]

    @classmethod
    def validate(cls) -> bool:
        """Validate that all required configuration is present."""
        errors = []

        if not cls.API_BASE_URL.startswith(("http://", "https://")):
            errors.append(f"SLOT_CALENDAR_API_URL is not an http(s) URL: {cls.API_BASE_URL}")

        if cls.REQUEST_TIMEOUT <= 0:
            errors.append("SLOT_CALENDAR_TIMEOUT must be positive")

        if not cls.IDENTITY_FIELD:
            errors.append("SLOT_CALENDAR_IDENTITY_FIELD must not be empty")

        if cls.DEFAULT_COLOR not in cls.COLOR_PRESETS:
            errors.append(f"Default color {cls.DEFAULT_COLOR} is not a preset")

        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False

        return True
