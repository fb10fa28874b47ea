"""Tests for event models and timestamp parsing."""

from datetime import datetime, timedelta, timezone

import pytest

from calendar_bot.models.event import (
    Attendee,
    Event,
    ResponseStatus,
    TimestampParseError,
    parse_timestamp,
)

from factories import OTHER_EMAIL, USER_EMAIL, make_event


class TestParseTimestamp:
    """Tests for RFC 3339 parsing."""

    def test_offset(self):
        """Test parsing with an explicit offset."""
        result = parse_timestamp("2024-06-15T09:00:00+02:00")
        assert result == datetime(2024, 6, 15, 9, 0, tzinfo=timezone(timedelta(hours=2)))

    def test_zulu(self):
        """Test parsing a UTC 'Z' timestamp."""
        result = parse_timestamp("2024-06-15T07:00:00Z")
        assert result == datetime(2024, 6, 15, 7, 0, tzinfo=timezone.utc)

    def test_fractional_seconds(self):
        """Test parsing fractional seconds."""
        result = parse_timestamp("2024-06-15T07:00:00.250Z")
        assert result.microsecond == 250000

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "2024-06-15",  # all-day date
            "2024-06-15T09:00:00",  # no offset
            "15/06/2024 09:00",
            "2024-13-45T09:00:00Z",  # matches the shape but not a date
        ],
    )
    def test_rejected(self, value):
        """Test malformed timestamps raise TimestampParseError."""
        with pytest.raises(TimestampParseError):
            parse_timestamp(value)

    def test_error_is_value_error(self):
        """Test TimestampParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_timestamp("nope")


class TestAttendee:
    """Tests for the Attendee model."""

    def test_from_api(self):
        """Test creating from an API attendee."""
        attendee = Attendee.model_validate(
            {"email": USER_EMAIL, "responseStatus": "tentative", "self": True}
        )
        assert attendee.email == USER_EMAIL
        assert attendee.response_status == ResponseStatus.TENTATIVE.value
        assert attendee.is_pending

    def test_missing_status_defaults_to_needs_action(self):
        """Test the API default response status."""
        attendee = Attendee.model_validate({"email": USER_EMAIL})
        assert attendee.response_status == "needsAction"

    def test_unknown_status_passes_through(self):
        """Test statuses outside the known set are kept."""
        attendee = Attendee.model_validate({"email": USER_EMAIL, "responseStatus": "delegated"})
        assert attendee.response_status == "delegated"
        assert not attendee.is_pending

    def test_to_api_keeps_extra_fields(self):
        """Test extra API fields survive a round through the model."""
        data = {
            "email": USER_EMAIL,
            "responseStatus": "accepted",
            "displayName": "Bot",
            "self": True,
        }
        assert Attendee.model_validate(data).to_api() == data


class TestEvent:
    """Tests for the Event model."""

    def test_from_api(self, pending_event: Event):
        """Test creating from an API resource."""
        assert pending_event.id == "pending"
        assert pending_event.summary == "Design review"
        assert pending_event.start == "2024-06-15T09:00:00+02:00"
        assert [a.email for a in pending_event.attendees] == [OTHER_EMAIL, USER_EMAIL]

    def test_default_summary(self):
        """Test events without a title."""
        event = Event.from_api({"id": "x"})
        assert event.summary == "(No title)"
        assert event.attendees == ()

    def test_interval(self, pending_event: Event):
        """Test parsing the event's interval."""
        interval = pending_event.interval()
        assert interval.duration == timedelta(hours=1)

    def test_all_day_event_has_no_interval(self):
        """Test all-day events take the parse error path."""
        event = make_event("allday", None, None)
        assert event.start is None
        with pytest.raises(TimestampParseError):
            event.interval()

    def test_reversed_interval_is_parse_error(self):
        """Test end before start raises TimestampParseError."""
        event = make_event("bad", "2024-06-15T10:00:00Z", "2024-06-15T09:00:00Z")
        with pytest.raises(TimestampParseError):
            event.interval()

    def test_with_response_status_returns_copy(self, pending_event: Event):
        """Test the original event is left untouched."""
        updated = pending_event.with_response_status(USER_EMAIL, "accepted")

        assert updated is not pending_event
        assert updated.attendees[1].response_status == "accepted"
        assert pending_event.attendees[1].response_status == "needsAction"
        # Other attendees unchanged
        assert updated.attendees[0] == pending_event.attendees[0]

    def test_with_response_status_unknown_email(self, pending_event: Event):
        """Test nothing changes when the email is not an attendee."""
        updated = pending_event.with_response_status("stranger@example.com", "declined")
        assert updated.attendees == pending_event.attendees

    def test_attendees_to_api(self, pending_event: Event):
        """Test the attendee list in API format."""
        updated = pending_event.with_response_status(USER_EMAIL, "declined")
        assert updated.attendees_to_api() == [
            {"email": OTHER_EMAIL, "responseStatus": "accepted", "organizer": True},
            {"email": USER_EMAIL, "responseStatus": "declined", "self": True},
        ]
