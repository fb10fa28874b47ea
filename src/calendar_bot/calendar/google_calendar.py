"""Google Calendar API client.

Implements `CalendarClient` on top of the Google Calendar API v3:
- List upcoming events
- List events within a time window
- Update an event's attendee responses

## API Documentation

https://developers.google.com/calendar/api/v3/reference

## Authentication

Uses OAuth 2.0 credentials from `calendar_bot.auth`. Expired access tokens
are refreshed by google-auth on the fly.

## Rate Limits

Google Calendar API has quotas:
- 1,000,000 queries per day (default)
- 500 queries per 100 seconds per user

One poll cycle costs one listing call, plus one window listing and one patch
per pending event.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httplib2
from google.auth.credentials import Credentials
from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from calendar_bot.calendar.base import CalendarClient, CalendarError
from calendar_bot.models.event import Event, format_timestamp

logger = logging.getLogger(__name__)


def _translate_http_error(e: HttpError, action: str) -> CalendarError:
    """Wrap an API HttpError in a CalendarError."""
    status = e.resp.status if e.resp is not None else None
    body = e.content.decode("utf-8", errors="replace") if e.content else None
    return CalendarError(f"{action} failed: {e}", status_code=status, response_body=body)


# Raised below the API layer: sockets, timeouts, TLS, token refresh
TRANSPORT_ERRORS = (OSError, httplib2.HttpLib2Error, GoogleAuthError)


class GoogleCalendarClient(CalendarClient):
    """Client for Google Calendar API.

    Example:
        ```python
        client = GoogleCalendarClient(credentials)

        # Upcoming events
        events = client.list_upcoming_events(datetime.now(timezone.utc))

        # Same-day events
        events = client.list_events_in_window(day_start, day_end)

        # Persist a response
        client.update_event(event, notify_attendees=True)
        ```
    """

    def __init__(
        self,
        credentials: Credentials,
        calendar_id: str = "primary",
        service: Any | None = None,
    ):
        """Initialize the client.

        Args:
            credentials: Authorized Google credentials
            calendar_id: Calendar to operate on ('primary' for the user's own)
            service: Prebuilt API resource (mainly for tests)
        """
        self.calendar_id = calendar_id
        self._service = service or build(
            "calendar", "v3", credentials=credentials, cache_discovery=False
        )

    def list_upcoming_events(
        self,
        time_min: datetime,
        max_results: int = 100,
    ) -> list[Event]:
        """List upcoming events ordered by start time.

        Args:
            time_min: Earliest start time
            max_results: Maximum events to return

        Returns:
            List of Event objects
        """
        params: dict[str, Any] = {
            "calendarId": self.calendar_id,
            "showDeleted": False,
            "singleEvents": True,  # Expand recurring events
            "orderBy": "startTime",
            "timeMin": format_timestamp(time_min),
            "maxResults": max_results,
        }

        try:
            result = self._service.events().list(**params).execute()
        except HttpError as e:
            raise _translate_http_error(e, "Listing upcoming events") from e
        except TRANSPORT_ERRORS as e:
            raise CalendarError(f"Listing upcoming events failed: {e}") from e

        return self._parse_items(result)

    def list_events_in_window(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Event]:
        """List events intersecting a time window.

        Args:
            start: Window start (exclusive bound on event end)
            end: Window end (exclusive bound on event start)

        Returns:
            List of Event objects
        """
        events: list[Event] = []
        page_token = None

        params: dict[str, Any] = {
            "calendarId": self.calendar_id,
            "showDeleted": False,
            "singleEvents": True,
            "timeMin": format_timestamp(start),
            "timeMax": format_timestamp(end),
        }

        while True:
            if page_token:
                params["pageToken"] = page_token

            try:
                result = self._service.events().list(**params).execute()
            except HttpError as e:
                raise _translate_http_error(e, "Listing events in window") from e
            except TRANSPORT_ERRORS as e:
                raise CalendarError(f"Listing events in window failed: {e}") from e

            events.extend(self._parse_items(result))

            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Fetched {len(events)} events between {start} and {end}")
        return events

    def update_event(self, event: Event, notify_attendees: bool = True) -> None:
        """Persist an event's attendee list.

        Only the attendees are patched; the rest of the event is left as is.

        Args:
            event: Event carrying the updated attendees
            notify_attendees: Send update emails to the other attendees
        """
        try:
            (
                self._service.events()
                .patch(
                    calendarId=self.calendar_id,
                    eventId=event.id,
                    body={"attendees": event.attendees_to_api()},
                    sendUpdates="all" if notify_attendees else "none",
                )
                .execute()
            )
        except HttpError as e:
            raise _translate_http_error(e, f"Updating event {event.id}") from e
        except TRANSPORT_ERRORS as e:
            raise CalendarError(f"Updating event {event.id} failed: {e}") from e

    @staticmethod
    def _parse_items(result: dict[str, Any]) -> list[Event]:
        events = []
        for item in result.get("items", []):
            if item.get("status") == "cancelled":
                continue
            events.append(Event.from_api(item))
        return events
