# File: schedule_overlay/core/orchestrator.py
"""
Fetch-then-overlay coordination.

Asks a calendar provider for the busy blocks an event needs, then hands them to
the overlay processor. The provider is anything with a
`fetch_busy_blocks(time_min, time_max)` method, e.g. GoogleCalendarService.
"""

from typing import Optional, Protocol, Sequence

from schedule_overlay.models import BusyBlock, Event, OverlayContext
from schedule_overlay.processors.overlay_processor import (
    CalendarEventsByDay,
    CalendarOverlayProcessor,
)
from schedule_overlay.utils.logger import LoggerMixin


class BusyBlockSource(Protocol):
    """External calendar provider boundary."""

    def fetch_busy_blocks(self, time_min: str, time_max: str) -> Sequence[BusyBlock]:
        ...


class OverlayOrchestrator(LoggerMixin):
    """
    Coordinates the calendar provider and the overlay processor.
    """

    def __init__(self, calendar_service: BusyBlockSource, context: Optional[OverlayContext] = None):
        """
        Initialize the orchestrator.

        Args:
            calendar_service: Provider of raw busy blocks
            context: Reference instant and local timezone (default: now)
        """
        self.calendar_service = calendar_service
        self.processor = CalendarOverlayProcessor(context)

    @property
    def context(self) -> OverlayContext:
        return self.processor.context

    def get_calendar_events_by_day(self, event: Event, week_offset: int = 0) -> CalendarEventsByDay:
        """
        Fetch the user's busy blocks for `event` and overlay them onto its days.

        Args:
            event: Event whose day windows are shown
            week_offset: Weeks forward/back from the current week (days-of-week events only)

        Returns:
            Per-day clipped busy blocks, one list per event date
        """
        time_min, time_max = self.processor.get_fetch_window(event, week_offset)
        self.logger.info(f"Overlaying calendar for '{event.name or event.event_id}' ({time_min} - {time_max})")

        busy_blocks = self.calendar_service.fetch_busy_blocks(time_min, time_max)
        calendar_events_by_day = self.processor.overlay(event, busy_blocks, week_offset)

        self.logger.info(
            f"Overlay complete: {len(busy_blocks)} busy blocks, "
            f"{sum(len(day) for day in calendar_events_by_day)} shown across "
            f"{len(calendar_events_by_day)} days"
        )
        return calendar_events_by_day
