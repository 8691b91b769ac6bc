# File: schedule_overlay/services/service_factory.py

from typing import List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from schedule_overlay.utils.logger import setup_logger
from schedule_overlay.services.calendar_service import GoogleCalendarService

logger = setup_logger(__name__)


class ServiceFactory:
    """Factory for creating service instances."""

    @staticmethod
    def build_calendar_resource(credentials: Credentials) -> Resource:
        """
        Build the Google Calendar API resource.

        Args:
            credentials: Already-authorized Google credentials (sign-in happens elsewhere)

        Returns:
            Calendar v3 API resource

        Raises:
            ConnectionError: if the discovery document cannot be loaded
        """
        try:
            logger.debug("Building Calendar API service")
            return build("calendar", "v3", credentials=credentials, cache_discovery=False)
        except HttpError as err:
            logger.error(f"HTTP error occurred building calendar service: {err}", exc_info=True)
            raise ConnectionError("Could not build Google Calendar service") from err

    @staticmethod
    def create_calendar_service(
        calendar_resource: Resource,
        calendar_ids: Optional[List[str]] = None
    ) -> GoogleCalendarService:
        """
        Create the calendar service wrapper.

        Args:
            calendar_resource: Authenticated calendar API resource
            calendar_ids: Calendars to read (default: Config.CALENDAR_IDS)

        Returns:
            GoogleCalendarService instance
        """
        return GoogleCalendarService(calendar_resource, calendar_ids)

    @staticmethod
    def from_credentials(
        credentials: Credentials,
        calendar_ids: Optional[List[str]] = None
    ) -> GoogleCalendarService:
        """Build the API resource and wrap it in one step."""
        resource = ServiceFactory.build_calendar_resource(credentials)
        return ServiceFactory.create_calendar_service(resource, calendar_ids)
