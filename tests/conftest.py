"""Pytest fixtures for calendar bot tests.

This module provides test fixtures that ensure:
1. No Google APIs are contacted (the calendar is an in-memory fake)
2. Isolated test environment with controlled configuration
"""

import os

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("GOOGLE_EMAIL", "bot@example.com")
os.environ.setdefault("DEBUG", "true")

from calendar_bot.models.event import Event

from factories import FakeCalendar, make_event


@pytest.fixture
def fake_calendar() -> FakeCalendar:
    """Empty in-memory calendar."""
    return FakeCalendar()


@pytest.fixture
def pending_event() -> Event:
    """Pending 09:00-10:00 meeting in UTC+2."""
    return make_event(
        "pending",
        "2024-06-15T09:00:00+02:00",
        "2024-06-15T10:00:00+02:00",
        status="needsAction",
        summary="Design review",
    )
