"""Calendar integration module.

Provides the calendar backend the decision engine works against.

## Google Calendar API

Uses the Google Calendar API v3:
- https://developers.google.com/calendar/api/v3/reference

## Operations

1. List upcoming single-occurrence events ordered by start time
2. List the events of a given day window
3. Patch an event's attendee list with the user's new response
"""

from calendar_bot.calendar.base import (
    CalendarClient,
    CalendarError,
)
from calendar_bot.calendar.google_calendar import GoogleCalendarClient

__all__ = [
    "CalendarClient",
    "CalendarError",
    "GoogleCalendarClient",
]
