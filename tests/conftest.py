# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable events, busy blocks, contexts and mocks for all tests.
"""

import pytest
from datetime import datetime
from pathlib import Path
from unittest.mock import Mock
import sys

import pytz

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from schedule_overlay.models import BusyBlock, Event, EventType, OverlayContext


# ==================== Context Fixtures ====================

@pytest.fixture
def utc_context():
    """Wednesday 2024-01-10 12:00 UTC, local zone UTC."""
    return OverlayContext(now=pytz.utc.localize(datetime(2024, 1, 10, 12, 0)), timezone=pytz.utc)


@pytest.fixture
def new_york():
    return pytz.timezone("America/New_York")


@pytest.fixture
def ny_context(new_york):
    """Wednesday 2024-01-10 12:00 in New York (EST, UTC-5)."""
    return OverlayContext(now=new_york.localize(datetime(2024, 1, 10, 12, 0)), timezone=new_york)


# ==================== Event Fixtures ====================

@pytest.fixture
def workday_event():
    """One specific day, 9:00 to 17:00."""
    return Event(
        type=EventType.SPECIFIC_DATES,
        dates=["2023-05-01T09:00:00"],
        duration=8,
        name="Planning Sync",
    )


@pytest.fixture
def two_day_event():
    """Two consecutive specific days, 9:00 to 17:00."""
    return Event(
        type=EventType.SPECIFIC_DATES,
        dates=[datetime(2023, 5, 1, 9, 0), datetime(2023, 5, 2, 9, 0)],
        duration=8,
    )


@pytest.fixture
def mon_wed_event():
    """Weekly Monday/Wednesday event, 9:00 to 17:00, stored in the week of 2018-06-17."""
    return Event(
        type=EventType.DAYS_OF_WEEK,
        dates=[datetime(2018, 6, 18, 9, 0), datetime(2018, 6, 20, 9, 0)],
        duration=8,
        name="Weekly Standup",
    )


# ==================== Busy Block Fixtures ====================

@pytest.fixture
def make_block():
    """Factory fixture for raw busy block dicts."""
    def _create(start: str, end: str, summary: str = "Busy", **extra) -> dict:
        block = {"startDate": start, "endDate": end, "summary": summary}
        block.update(extra)
        return block

    return _create


@pytest.fixture
def team_meeting():
    """A typed busy block inside the 9-17 window of 2023-05-01."""
    return BusyBlock(
        start_date=datetime(2023, 5, 1, 10, 0),
        end_date=datetime(2023, 5, 1, 12, 30),
        summary="Team Meeting",
        event_id="event_1",
        calendar_id="primary",
    )


# ==================== Mock Service Fixtures ====================

@pytest.fixture
def mock_calendar_resource():
    """Mock Google Calendar API resource."""
    mock = Mock()
    mock.events().list().execute.return_value = {'items': []}
    return mock


# ==================== Helper Fixtures ====================

@pytest.fixture
def assert_day_invariants():
    """Helper that checks every clipped block stays inside its day window."""
    def _assert_valid(calendar_events_by_day, duration: float):
        for day in calendar_events_by_day:
            previous_offset = 0.0
            for block in day:
                assert block.hours_offset >= 0, "Offset must not be negative"
                assert block.hours_length > 0, "Zero-length blocks must not be emitted"
                assert block.hours_offset + block.hours_length <= duration + 1e-9, \
                    "Block must end inside the window"
                assert block.hours_offset >= previous_offset, "Blocks must be ordered by offset"
                assert block.start_date < block.end_date
                previous_offset = block.hours_offset

    return _assert_valid


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
