# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable test data and mocks for all tests.
"""

import os
import sys
from concurrent.futures import Future
from datetime import date
from pathlib import Path
from unittest.mock import Mock

import pytest

# Keep test runs from writing log files
os.environ.setdefault("SLOT_CALENDAR_LOG_TO_FILE", "false")

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from slot_calendar.core.calendar_controller import CalendarController
from slot_calendar.core.schedule_store import ScheduleStore
from slot_calendar.core.selection_machine import SlotSelectionMachine
from slot_calendar.models.api import FetchResult, SaveResult
from slot_calendar.services.local_cache import LocalCache
from slot_calendar.services.persistence_gateway import PersistenceGateway


IDENTITY = "ada@example.com"


# ==================== Date Fixtures ====================

@pytest.fixture
def day():
    """A fixed Wednesday."""
    return date(2025, 1, 1)


@pytest.fixture
def day_key_str(day):
    return day.strftime("%Y-%m-%d")


# ==================== Wire Data Fixtures ====================

def wire_event(title, start, end, details="", color="#487de7", video=None):
    """Wire-shaped event dict as stored under each minute."""
    return {
        'title': title,
        'details': details,
        'color': color,
        'startMinute': start,
        'endMinute': end,
        'youtubeVideoId': video,
    }


def wire_day(*events):
    """Denormalize wire events into a minute-keyed day mapping."""
    minutes = {}
    for event in events:
        for minute in range(event['startMinute'], event['endMinute'] + 1):
            minutes[str(minute)] = dict(event)
    return minutes


@pytest.fixture
def make_wire_event():
    """Factory fixture for wire-shaped events."""
    return wire_event


@pytest.fixture
def make_wire_day():
    """Factory fixture for denormalized wire days."""
    return wire_day


@pytest.fixture
def sample_mapping():
    """Remote-shaped schedule with two days."""
    return {
        '2025-01-01': wire_day(
            wire_event('Standup', 540, 555, details='Daily sync'),
            wire_event('Lunch', 720, 779, color='#79c314'),
        ),
        '2025-01-02': wire_day(
            wire_event('Talk', 600, 659, video='dQw4w9WgXcQ'),
        ),
    }


# ==================== Collaborator Fixtures ====================

def completed_future(result):
    future = Future()
    future.set_result(result)
    return future


@pytest.fixture
def mock_gateway():
    """Gateway whose saves succeed immediately and whose fetch returns nothing."""
    gateway = Mock(spec=PersistenceGateway)
    gateway.save_schedules.side_effect = lambda identity, schedules: completed_future(
        SaveResult(status="success", status_code=200)
    )
    gateway.fetch_schedules.return_value = FetchResult(status="success", schedules={})
    return gateway


@pytest.fixture
def cache(tmp_path):
    """Local cache backed by a temporary file."""
    return LocalCache(path=tmp_path / "cache.json")


@pytest.fixture
def store():
    """Store with no persistence attached."""
    return ScheduleStore(identity=IDENTITY)


@pytest.fixture
def persisted_store(mock_gateway, cache):
    """Store writing through to a mock gateway and a temp cache."""
    return ScheduleStore(identity=IDENTITY, gateway=mock_gateway, cache=cache)


@pytest.fixture
def machine(store):
    return SlotSelectionMachine(store)


@pytest.fixture
def controller(mock_gateway, cache, day):
    return CalendarController(gateway=mock_gateway, cache=cache, current_date=day)


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
