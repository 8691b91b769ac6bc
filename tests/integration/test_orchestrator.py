# File: tests/integration/test_orchestrator.py
"""
Integration tests for the fetch-then-overlay pipeline.
Tests the Google Calendar adapter and the orchestrator with mocked API resources.
"""

import pytest
from unittest.mock import Mock, patch
from datetime import datetime, timezone

from googleapiclient.errors import HttpError

from schedule_overlay.models import BusyBlock
from schedule_overlay.core.orchestrator import OverlayOrchestrator
from schedule_overlay.services.calendar_service import GoogleCalendarService
from schedule_overlay.services.service_factory import ServiceFactory


@pytest.fixture
def sample_calendar_events():
    """Raw Google Calendar API items."""
    return [
        {
            'id': 'gc_1',
            'summary': 'Team Meeting',
            'start': {'dateTime': '2023-05-01T10:00:00Z'},
            'end': {'dateTime': '2023-05-01T11:00:00Z'},
        },
        {
            'id': 'gc_2',
            'summary': 'Lunch (tentative)',
            'start': {'dateTime': '2023-05-01T12:00:00+00:00'},
            'end': {'dateTime': '2023-05-01T13:00:00+00:00'},
            'transparency': 'transparent',
        },
        {
            'id': 'gc_3',
            'summary': 'Cancelled Sync',
            'status': 'cancelled',
            'start': {'dateTime': '2023-05-01T14:00:00Z'},
            'end': {'dateTime': '2023-05-01T15:00:00Z'},
        },
    ]


class RecordingSource:
    """Busy block provider that remembers the window it was asked for."""

    def __init__(self, blocks):
        self.blocks = blocks
        self.calls = []

    def fetch_busy_blocks(self, time_min, time_max):
        self.calls.append((time_min, time_max))
        return self.blocks


class TestGoogleCalendarService:
    """Test conversion of Calendar API items to busy blocks."""

    def test_fetch_converts_items(self, mock_calendar_resource, sample_calendar_events):
        mock_calendar_resource.events().list().execute.return_value = {'items': sample_calendar_events}
        service = GoogleCalendarService(mock_calendar_resource, ['primary'])

        blocks = service.fetch_busy_blocks("2023-05-01T00:00:00+00:00", "2023-05-03T00:00:00+00:00")

        assert [b.summary for b in blocks] == ['Team Meeting', 'Lunch (tentative)']
        assert blocks[0].start_date == datetime(2023, 5, 1, 10, 0, tzinfo=timezone.utc)
        assert blocks[0].event_id == 'gc_1'
        assert blocks[0].calendar_id == 'primary'
        assert blocks[0].free is False
        assert blocks[1].free is True

    def test_all_day_event_starts_at_midnight_utc(self, mock_calendar_resource):
        mock_calendar_resource.events().list().execute.return_value = {'items': [{
            'summary': 'Holiday',
            'start': {'date': '2023-05-01'},
            'end': {'date': '2023-05-02'},
        }]}
        service = GoogleCalendarService(mock_calendar_resource, ['primary'])

        [block] = service.fetch_busy_blocks("2023-05-01T00:00:00Z", "2023-05-03T00:00:00Z")

        assert block.start_date == datetime(2023, 5, 1, tzinfo=timezone.utc)
        assert block.end_date == datetime(2023, 5, 2, tzinfo=timezone.utc)

    def test_event_without_times_skipped(self, mock_calendar_resource):
        mock_calendar_resource.events().list().execute.return_value = {'items': [
            {'summary': 'Broken', 'start': {}, 'end': {}},
            {'summary': 'Garbled', 'start': {'dateTime': 'not-a-time'}, 'end': {'dateTime': 'T'}},
        ]}
        service = GoogleCalendarService(mock_calendar_resource, ['primary'])

        assert service.fetch_busy_blocks("a", "b") == []

    def test_pagination_follows_next_page_token(self, sample_calendar_events):
        resource = Mock()
        resource.events().list().execute.side_effect = [
            {'items': sample_calendar_events[:1], 'nextPageToken': 'page-2'},
            {'items': sample_calendar_events[1:2]},
        ]
        service = GoogleCalendarService(resource, ['primary'])

        blocks = service.fetch_busy_blocks("2023-05-01T00:00:00Z", "2023-05-03T00:00:00Z")

        assert len(blocks) == 2
        assert resource.events().list.call_args.kwargs['pageToken'] == 'page-2'

    def test_reads_every_calendar(self, sample_calendar_events):
        resource = Mock()
        resource.events().list().execute.return_value = {'items': sample_calendar_events[:1]}
        service = GoogleCalendarService(resource, ['primary', 'work'])

        blocks = service.fetch_busy_blocks("2023-05-01T00:00:00Z", "2023-05-03T00:00:00Z")

        assert [b.calendar_id for b in blocks] == ['primary', 'work']

    def test_http_error_raises_connection_error(self):
        resource = Mock()
        resource.events().list().execute.side_effect = HttpError(
            resp=Mock(status=500, reason='Server Error'),
            content=b'error',
        )
        service = GoogleCalendarService(resource, ['primary'])

        with pytest.raises(ConnectionError):
            service.fetch_busy_blocks("2023-05-01T00:00:00Z", "2023-05-03T00:00:00Z")


class TestServiceFactory:
    """Test service construction."""

    def test_create_calendar_service(self, mock_calendar_resource):
        service = ServiceFactory.create_calendar_service(mock_calendar_resource, ['work'])

        assert isinstance(service, GoogleCalendarService)
        assert service.service is mock_calendar_resource
        assert service.calendar_ids == ['work']

    def test_default_calendar_ids(self, mock_calendar_resource):
        with patch('schedule_overlay.services.calendar_service.Config.CALENDAR_IDS', ['primary']):
            service = ServiceFactory.create_calendar_service(mock_calendar_resource)

        assert service.calendar_ids == ['primary']

    @patch('schedule_overlay.services.service_factory.build')
    def test_from_credentials_builds_calendar_v3(self, mock_build):
        credentials = Mock()

        service = ServiceFactory.from_credentials(credentials, ['primary'])

        mock_build.assert_called_once_with("calendar", "v3", credentials=credentials, cache_discovery=False)
        assert service.service is mock_build.return_value

    @patch('schedule_overlay.services.service_factory.build')
    def test_build_failure_raises_connection_error(self, mock_build):
        mock_build.side_effect = HttpError(resp=Mock(status=503, reason='Unavailable'), content=b'down')

        with pytest.raises(ConnectionError):
            ServiceFactory.build_calendar_resource(Mock())


class TestOverlayOrchestrator:
    """Test the fetch-then-overlay pipeline."""

    def test_specific_dates_pipeline(self, workday_event, make_block, utc_context):
        source = RecordingSource([
            make_block("2023-05-01T08:00:00", "2023-05-01T10:00:00", "Standup"),
            make_block("2023-05-01T13:00:00", "2023-05-01T14:00:00", "Review"),
        ])
        orchestrator = OverlayOrchestrator(source, utc_context)

        [day] = orchestrator.get_calendar_events_by_day(workday_event)

        assert source.calls == [("2023-05-01T09:00:00+00:00", "2023-05-03T09:00:00+00:00")]
        assert [(b.summary, b.hours_offset, b.hours_length) for b in day] == [
            ("Standup", 0, 1),
            ("Review", 4, 1),
        ]

    def test_days_of_week_pipeline(self, mon_wed_event, make_block, utc_context):
        source = RecordingSource([make_block("2024-01-17T09:00:00", "2024-01-17T10:00:00", "Retro")])
        orchestrator = OverlayOrchestrator(source, utc_context)

        monday, wednesday = orchestrator.get_calendar_events_by_day(mon_wed_event, week_offset=1)

        assert source.calls == [("2024-01-13T12:00:00+00:00", "2024-01-22T12:00:00+00:00")]
        assert monday == []
        assert wednesday[0].summary == "Retro"
        assert wednesday[0].hours_offset == 0

    def test_google_adapter_end_to_end(self, mock_calendar_resource, sample_calendar_events,
                                       workday_event, utc_context, assert_day_invariants):
        mock_calendar_resource.events().list().execute.return_value = {'items': sample_calendar_events}
        service = ServiceFactory.create_calendar_service(mock_calendar_resource, ['primary'])
        orchestrator = OverlayOrchestrator(service, utc_context)

        result = orchestrator.get_calendar_events_by_day(workday_event)

        # Naive anchors: aware API times are read in the context zone (UTC)
        assert [(b.summary, b.hours_offset) for b in result[0]] == [
            ('Team Meeting', 1),
            ('Lunch (tentative)', 3),
        ]
        assert result[0][1].free is True
        assert_day_invariants(result, workday_event.duration)

    def test_provider_blocks_are_not_modified(self, team_meeting, workday_event, utc_context):
        source = RecordingSource([team_meeting])

        OverlayOrchestrator(source, utc_context).get_calendar_events_by_day(workday_event)

        assert source.blocks == [BusyBlock(
            start_date=datetime(2023, 5, 1, 10, 0),
            end_date=datetime(2023, 5, 1, 12, 30),
            summary="Team Meeting",
            event_id="event_1",
            calendar_id="primary",
        )]

    def test_provider_error_propagates(self, workday_event, utc_context):
        source = Mock()
        source.fetch_busy_blocks.side_effect = ConnectionError("offline")

        with pytest.raises(ConnectionError):
            OverlayOrchestrator(source, utc_context).get_calendar_events_by_day(workday_event)

    def test_context_exposed(self, utc_context):
        assert OverlayOrchestrator(Mock(), utc_context).context is utc_context
