"""Tests for the Google Calendar client.

The API resource is a MagicMock; no request leaves the process.
"""

import socket
from datetime import datetime, timezone
from unittest.mock import MagicMock

import httplib2
import pytest
from google.auth.exceptions import RefreshError
from googleapiclient.errors import HttpError

from calendar_bot.calendar.base import CalendarError
from calendar_bot.calendar.google_calendar import GoogleCalendarClient

from factories import USER_EMAIL, make_event

START = datetime(2024, 6, 15, 0, 0, tzinfo=timezone.utc)
END = datetime(2024, 6, 15, 23, 59, 59, tzinfo=timezone.utc)


def api_event(event_id: str, status: str = "confirmed") -> dict:
    return {
        "id": event_id,
        "status": status,
        "summary": f"Event {event_id}",
        "start": {"dateTime": "2024-06-15T09:00:00Z"},
        "end": {"dateTime": "2024-06-15T10:00:00Z"},
        "attendees": [{"email": USER_EMAIL, "responseStatus": "needsAction"}],
    }


def http_error(status: int) -> HttpError:
    return HttpError(httplib2.Response({"status": status}), b'{"error": {"message": "boom"}}')


@pytest.fixture
def service() -> MagicMock:
    return MagicMock()


@pytest.fixture
def client(service: MagicMock) -> GoogleCalendarClient:
    return GoogleCalendarClient(credentials=None, service=service)


class TestListUpcoming:
    """Tests for list_upcoming_events."""

    def test_request_parameters(self, client, service):
        """Test the listing is ordered, expanded and capped."""
        service.events.return_value.list.return_value.execute.return_value = {"items": []}

        client.list_upcoming_events(START, max_results=100)

        service.events.return_value.list.assert_called_once_with(
            calendarId="primary",
            showDeleted=False,
            singleEvents=True,
            orderBy="startTime",
            timeMin="2024-06-15T00:00:00+00:00",
            maxResults=100,
        )

    def test_parses_items_and_drops_cancelled(self, client, service):
        """Test events are converted and cancelled ones skipped."""
        service.events.return_value.list.return_value.execute.return_value = {
            "items": [api_event("a"), api_event("gone", status="cancelled"), api_event("b")]
        }

        events = client.list_upcoming_events(START)

        assert [e.id for e in events] == ["a", "b"]
        assert events[0].attendees[0].email == USER_EMAIL

    def test_http_error_translated(self, client, service):
        """Test API errors surface as CalendarError."""
        service.events.return_value.list.return_value.execute.side_effect = http_error(500)

        with pytest.raises(CalendarError) as exc_info:
            client.list_upcoming_events(START)
        assert exc_info.value.status_code == 500


class TestListWindow:
    """Tests for list_events_in_window."""

    def test_follows_pages(self, client, service):
        """Test every page of the window is fetched."""
        service.events.return_value.list.return_value.execute.side_effect = [
            {"items": [api_event("a")], "nextPageToken": "page-2"},
            {"items": [api_event("b")]},
        ]

        events = client.list_events_in_window(START, END)

        assert [e.id for e in events] == ["a", "b"]
        calls = service.events.return_value.list.call_args_list
        assert len(calls) == 2
        assert calls[0].kwargs["timeMin"] == "2024-06-15T00:00:00+00:00"
        assert calls[0].kwargs["timeMax"] == "2024-06-15T23:59:59+00:00"
        assert calls[0].kwargs["singleEvents"] is True
        assert calls[0].kwargs["showDeleted"] is False
        assert calls[1].kwargs["pageToken"] == "page-2"

    def test_http_error_translated(self, client, service):
        """Test API errors surface as CalendarError."""
        service.events.return_value.list.return_value.execute.side_effect = http_error(503)

        with pytest.raises(CalendarError):
            client.list_events_in_window(START, END)


class TestUpdateEvent:
    """Tests for update_event."""

    def test_patches_attendees_with_notifications(self, client, service):
        """Test only the attendee list is sent, notifying everyone."""
        event = make_event("e1", "2024-06-15T09:00:00Z", "2024-06-15T10:00:00Z")
        updated = event.with_response_status(USER_EMAIL, "accepted")

        client.update_event(updated, notify_attendees=True)

        service.events.return_value.patch.assert_called_once_with(
            calendarId="primary",
            eventId="e1",
            body={"attendees": updated.attendees_to_api()},
            sendUpdates="all",
        )
        service.events.return_value.patch.return_value.execute.assert_called_once()

    def test_without_notifications(self, client, service):
        """Test notifications can be suppressed."""
        event = make_event("e1", "2024-06-15T09:00:00Z", "2024-06-15T10:00:00Z")

        client.update_event(event, notify_attendees=False)

        kwargs = service.events.return_value.patch.call_args.kwargs
        assert kwargs["sendUpdates"] == "none"

    def test_not_found(self, client, service):
        """Test a vanished event keeps its 404 status."""
        service.events.return_value.patch.return_value.execute.side_effect = http_error(404)
        event = make_event("e1", "2024-06-15T09:00:00Z", "2024-06-15T10:00:00Z")

        with pytest.raises(CalendarError) as exc_info:
            client.update_event(event)
        assert exc_info.value.status_code == 404

    def test_custom_calendar_id(self, service):
        """Test a non-primary calendar ID is used in requests."""
        client = GoogleCalendarClient(credentials=None, calendar_id="team@example.com", service=service)
        event = make_event("e1", "2024-06-15T09:00:00Z", "2024-06-15T10:00:00Z")

        client.update_event(event)

        assert service.events.return_value.patch.call_args.kwargs["calendarId"] == "team@example.com"


class TestTransportErrors:
    """Network failures below the API layer surface as CalendarError."""

    @pytest.mark.parametrize(
        "error",
        [
            socket.timeout("timed out"),
            ConnectionResetError("connection reset by peer"),
            httplib2.ServerNotFoundError("Unable to find the server"),
            RefreshError("invalid_grant"),
        ],
    )
    def test_listing_upcoming(self, client, service, error):
        """Test a transport failure on the upcoming listing."""
        service.events.return_value.list.return_value.execute.side_effect = error

        with pytest.raises(CalendarError) as exc_info:
            client.list_upcoming_events(START)
        assert exc_info.value.status_code is None
        assert exc_info.value.__cause__ is error

    def test_listing_window(self, client, service):
        """Test a timeout on the same-day listing."""
        service.events.return_value.list.return_value.execute.side_effect = socket.timeout(
            "timed out"
        )

        with pytest.raises(CalendarError, match="timed out"):
            client.list_events_in_window(START, END)

    def test_updating(self, client, service):
        """Test a timeout while patching the event."""
        service.events.return_value.patch.return_value.execute.side_effect = socket.timeout(
            "timed out"
        )
        event = make_event("e1", "2024-06-15T09:00:00Z", "2024-06-15T10:00:00Z")

        with pytest.raises(CalendarError, match="Updating event e1"):
            client.update_event(event)
