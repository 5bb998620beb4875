"""Tests for the Google Calendar gateway.

These tests mock the Google API client to avoid requiring credentials.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, Mock, patch

from googleapiclient.errors import HttpError

from calsync.calendar.client import (
    GoogleCalendarGateway,
    get_calendar_service,
    get_gateway,
    log_calendar_error,
)
from calsync.models import CalendarRef


@pytest.fixture
def mock_service():
    return MagicMock()


@pytest.fixture
def gateway(mock_service):
    return GoogleCalendarGateway(mock_service, calendar_id="primary")


class TestListCalendars:
    @pytest.mark.asyncio
    async def test_maps_items_to_calendar_refs(self, gateway, mock_service):
        mock_service.calendarList().list().execute.return_value = {
            "items": [
                {"id": "me@example.com", "summary": "Me"},
                {"id": "holidays", "summary": "Holidays"},
            ]
        }

        result = await gateway.list_calendars()

        assert result == [
            CalendarRef(id="me@example.com", display_name="Me"),
            CalendarRef(id="holidays", display_name="Holidays"),
        ]

    @pytest.mark.asyncio
    async def test_no_items(self, gateway, mock_service):
        mock_service.calendarList().list().execute.return_value = {}

        assert await gateway.list_calendars() == []


class TestListEvents:
    @pytest.mark.asyncio
    async def test_requests_expanded_events_in_window(self, gateway, mock_service):
        mock_service.events().list().execute.return_value = {
            "items": [{"id": "e1"}, {"id": "e2"}]
        }

        result = await gateway.list_events(
            "me@example.com",
            datetime(2025, 1, 1, tzinfo=timezone.utc),
            datetime(2028, 1, 1, tzinfo=timezone.utc),
        )

        assert [e["id"] for e in result] == ["e1", "e2"]
        kwargs = mock_service.events().list.call_args.kwargs
        assert kwargs["calendarId"] == "me@example.com"
        assert kwargs["timeMin"] == "2025-01-01T00:00:00+00:00"
        assert kwargs["timeMax"] == "2028-01-01T00:00:00+00:00"
        assert kwargs["singleEvents"] is True
        assert kwargs["orderBy"] == "startTime"
        assert kwargs["maxResults"] == 2500

    @pytest.mark.asyncio
    async def test_errors_propagate(self, gateway, mock_service):
        mock_service.events().list().execute.side_effect = Exception("boom")

        with pytest.raises(Exception, match="boom"):
            await gateway.list_events(
                "x",
                datetime(2025, 1, 1, tzinfo=timezone.utc),
                datetime(2028, 1, 1, tzinfo=timezone.utc),
            )


class TestSingleEventCalls:
    @pytest.mark.asyncio
    async def test_fetch_event_uses_gateway_calendar(self, gateway, mock_service):
        mock_service.events().get().execute.return_value = {"id": "m1"}

        result = await gateway.fetch_event("m1")

        assert result == {"id": "m1"}
        kwargs = mock_service.events().get.call_args.kwargs
        assert kwargs == {"calendarId": "primary", "eventId": "m1"}

    @pytest.mark.asyncio
    async def test_create_event_returns_id(self, gateway, mock_service):
        mock_service.events().insert().execute.return_value = {"id": "new1"}

        result = await gateway.create_event({"summary": "x"})

        assert result == "new1"
        assert mock_service.events().insert.call_args.kwargs["body"] == {
            "summary": "x"
        }

    @pytest.mark.asyncio
    async def test_delete_event(self, gateway, mock_service):
        mock_service.events().delete().execute.return_value = ""

        await gateway.delete_event("old1")

        kwargs = mock_service.events().delete.call_args.kwargs
        assert kwargs == {"calendarId": "primary", "eventId": "old1"}


class TestGetCalendarService:
    def test_returns_none_when_not_configured(self):
        with patch(
            "calsync.calendar.client.config.is_calendar_configured", return_value=False
        ):
            assert get_calendar_service() is None
            assert get_gateway() is None

    def test_builds_service_from_access_token(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CALENDAR_ACCESS_TOKEN", "tok")
        monkeypatch.setenv("GOOGLE_CALENDAR_ID", "me@example.com")

        with patch("calsync.calendar.client.build") as mock_build:
            mock_build.return_value = MagicMock()
            gateway = get_gateway()

        assert gateway.calendar_id == "me@example.com"
        args = mock_build.call_args
        assert args.args == ("calendar", "v3")
        assert args.kwargs["credentials"].token == "tok"

    def test_returns_none_when_build_fails(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CALENDAR_ACCESS_TOKEN", "tok")

        with patch(
            "calsync.calendar.client.build", side_effect=Exception("no network")
        ):
            assert get_calendar_service() is None


class TestLogCalendarError:
    def test_rate_limit_is_reported_as_warning(self):
        error = HttpError(Mock(status=429, reason="Too Many Requests"), b"")

        with patch("calsync.calendar.client.sentry_sdk") as mock_sentry:
            log_calendar_error(error, operation="list_events")

        mock_sentry.capture_message.assert_called_once()
        mock_sentry.capture_exception.assert_not_called()

    def test_other_errors_are_captured(self):
        error = Exception("500")

        with patch("calsync.calendar.client.sentry_sdk") as mock_sentry:
            log_calendar_error(error, operation="list_events", context={"a": 1})

        mock_sentry.capture_exception.assert_called_once_with(error)
