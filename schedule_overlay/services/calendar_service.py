# File: schedule_overlay/services/calendar_service.py

import datetime
from typing import List, Optional

from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from schedule_overlay.core.config_manager import Config
from schedule_overlay.models import BusyBlock
from schedule_overlay.utils.logger import setup_logger

logger = setup_logger(__name__)


class GoogleCalendarService:
    """Reads busy blocks from Google Calendar."""

    def __init__(self, calendar_service: Resource, calendar_ids: Optional[List[str]] = None):
        """
        Initialize calendar service.

        Args:
            calendar_service: Authenticated Google Calendar API resource
            calendar_ids: Calendars to read (default: Config.CALENDAR_IDS)
        """
        self.service = calendar_service
        self.calendar_ids = list(calendar_ids or Config.CALENDAR_IDS)

    def fetch_busy_blocks(self, time_min: str, time_max: str) -> List[BusyBlock]:
        """
        Fetch events between time_min and time_max and convert them to BusyBlock objects.

        Args:
            time_min: ISO-8601 lower bound (inclusive)
            time_max: ISO-8601 upper bound (exclusive)

        Returns:
            BusyBlocks across all configured calendars, in no particular order

        Raises:
            ConnectionError: if the Calendar API request fails
        """
        logger.info(f"Fetching busy blocks between {time_min} and {time_max}")

        busy_blocks: List[BusyBlock] = []
        for calendar_id in self.calendar_ids:
            try:
                items = self._list_events(calendar_id, time_min, time_max)
            except HttpError as e:
                logger.error(f"Error fetching events for calendar {calendar_id}: {e}", exc_info=True)
                raise ConnectionError(f"Google Calendar request failed for {calendar_id}") from e

            for event in items:
                block = self._to_busy_block(event, calendar_id)
                if block is not None:
                    busy_blocks.append(block)

        logger.info(f"Found {len(busy_blocks)} busy blocks in {len(self.calendar_ids)} calendars")
        return busy_blocks

    def _list_events(self, calendar_id: str, time_min: str, time_max: str) -> List[dict]:
        items: List[dict] = []
        page_token = None

        while True:
            events_result = self.service.events().list(
                calendarId=calendar_id,
                timeMin=time_min,
                timeMax=time_max,
                singleEvents=True,
                orderBy='startTime',
                maxResults=Config.MAX_RESULTS_PER_PAGE,
                pageToken=page_token,
            ).execute()

            items.extend(events_result.get('items', []))
            page_token = events_result.get('nextPageToken')
            if not page_token:
                return items

    def _to_busy_block(self, event: dict, calendar_id: str) -> Optional[BusyBlock]:
        if event.get('status') == 'cancelled':
            return None

        # Extract start/end, preferring dateTime (full timestamp) over date (all-day)
        start_raw = event.get('start', {}).get('dateTime', event.get('start', {}).get('date'))
        end_raw = event.get('end', {}).get('dateTime', event.get('end', {}).get('date'))

        start_dt = self._parse_gc_time(start_raw)
        end_dt = self._parse_gc_time(end_raw)
        if not start_dt or not end_dt:
            logger.warning(f"Skipping event without usable start/end: {event.get('summary')}")
            return None

        return BusyBlock(
            start_date=start_dt,
            end_date=end_dt,
            summary=event.get('summary', 'No Title'),
            event_id=event.get('id'),
            calendar_id=calendar_id,
            free=event.get('transparency') == 'transparent',
        )

    def _parse_gc_time(self, time_str: Optional[str]) -> Optional[datetime.datetime]:
        """Helper to safely parse Google Calendar date/dateTime strings."""
        if not time_str:
            return None
        try:
            if 'T' not in time_str:
                # Date-only format (for all-day events, treat as midnight UTC)
                date_obj = datetime.datetime.strptime(time_str, "%Y-%m-%d").date()
                return datetime.datetime.combine(date_obj, datetime.time.min).replace(
                    tzinfo=datetime.timezone.utc
                )
            # Full ISO format with time and timezone
            return datetime.datetime.fromisoformat(time_str.replace('Z', '+00:00'))
        except ValueError:
            logger.warning(f"Could not parse calendar time: {time_str!r}")
            return None
