"""Calendar client abstraction.

The decision logic never talks to Google directly. It is handed a
`CalendarClient` that can list events and persist a changed attendee list,
which keeps the engine testable with an in-memory fake.

## Contract

- `list_upcoming_events`: single-occurrence, non-deleted events starting at
  or after `time_min`, ordered by start time, at most `max_results`.
- `list_events_in_window`: single-occurrence, non-deleted events whose span
  intersects `[start, end]`.
- `update_event`: persist the event's attendee list.

All three raise `CalendarError` on failure, transport failures included.
Timeouts are the implementation's concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from calendar_bot.models.event import Event


class CalendarError(Exception):
    """Base exception for calendar API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class CalendarClient(ABC):
    """Abstract base class for calendar backends.

    Example:
        ```python
        class MyCalendar(CalendarClient):
            def list_upcoming_events(self, time_min, max_results=100):
                ...
        ```
    """

    @abstractmethod
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
            Events ordered by start time ascending
        """

    @abstractmethod
    def list_events_in_window(
        self,
        start: datetime,
        end: datetime,
    ) -> list[Event]:
        """List events intersecting a time window.

        Args:
            start: Window start
            end: Window end

        Returns:
            Events overlapping the window
        """

    @abstractmethod
    def update_event(self, event: Event, notify_attendees: bool = True) -> None:
        """Persist an event's attendee list.

        Args:
            event: Event carrying the updated attendees
            notify_attendees: Send update notifications to other attendees
        """
