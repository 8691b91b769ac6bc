"""
schedule_overlay
~~~~~~~~~~~~~~~~

Overlays respondents' calendar busy blocks onto an availability event's
candidate days.

Basic usage::

    from schedule_overlay import Event, EventType, OverlayContext, overlay

    event = Event(EventType.SPECIFIC_DATES, ["2023-05-01T09:00:00"], duration=8)
    by_day = overlay(event, [{"startDate": "2023-05-01T08:00:00",
                              "endDate": "2023-05-01T10:00:00"}])
    by_day[0][0].hours_offset, by_day[0][0].hours_length   # (0.0, 1.0)
"""

from schedule_overlay.models import (
    BusyBlock,
    ClippedBusyBlock,
    Event,
    EventType,
    InvalidDateError,
    InvalidEventError,
    OverlayContext,
    busy_block_from_dict,
    event_from_dict,
)
from schedule_overlay.processors.overlay_processor import (
    CalendarOverlayProcessor,
    overlay,
    process_calendar_events,
)
from schedule_overlay.core.orchestrator import OverlayOrchestrator

__all__ = [
    "BusyBlock",
    "ClippedBusyBlock",
    "Event",
    "EventType",
    "InvalidDateError",
    "InvalidEventError",
    "OverlayContext",
    "busy_block_from_dict",
    "event_from_dict",
    "CalendarOverlayProcessor",
    "overlay",
    "process_calendar_events",
    "OverlayOrchestrator",
]
