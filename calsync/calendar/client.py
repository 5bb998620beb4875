"""Google Calendar API client initialization and gateway."""

import asyncio
import json
import logging
from datetime import datetime, timezone

import sentry_sdk
from google.oauth2 import credentials as user_credentials
from google.oauth2 import service_account
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError

from .. import config
from ..models import CalendarRef

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]

# Google caps events.list at 2500 results per page
MAX_EVENTS_PER_CALENDAR = 2500


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if exception is a Google API rate limit error."""
    if isinstance(exception, HttpError):
        return exception.resp.status == 429
    return False


def log_calendar_error(
    exception: Exception,
    operation: str,
    context: dict | None = None,
) -> None:
    """
    Log calendar API errors with appropriate severity.

    Rate limits get warning level + specific Sentry event.
    Other errors get error level.
    """
    context = context or {}

    if _is_rate_limit_error(exception):
        logger.warning(
            f"Google Calendar rate limit hit during {operation}",
            extra={"operation": operation, **context},
        )
        sentry_sdk.capture_message(
            f"Google Calendar rate limit: {operation}",
            level="warning",
            extras={"operation": operation, **context},
        )
    else:
        logger.error(
            f"Google Calendar API error during {operation}: {exception}",
            extra={"operation": operation, **context},
        )
        sentry_sdk.capture_exception(exception)


def _load_credentials():
    """
    Build credentials from the environment.

    Supports, in order of preference:
    - GOOGLE_CALENDAR_ACCESS_TOKEN (OAuth user token issued elsewhere)
    - GOOGLE_CALENDAR_CREDENTIALS_JSON env var (service account, Railway/Heroku)
    - GOOGLE_CALENDAR_CREDENTIALS_FILE path (service account, local dev)
    """
    access_token = config.get_access_token()
    if access_token:
        return user_credentials.Credentials(token=access_token, scopes=SCOPES)

    credentials_json = config.get_credentials_json()
    if credentials_json:
        creds = service_account.Credentials.from_service_account_info(
            json.loads(credentials_json),
            scopes=SCOPES,
        )
    else:
        creds = service_account.Credentials.from_service_account_file(
            config.get_credentials_file(),
            scopes=SCOPES,
        )

    # Delegate to the calendar owner (service account acts as this user)
    calendar_email = config.get_calendar_email()
    if calendar_email:
        creds = creds.with_subject(calendar_email)
    return creds


def get_calendar_service() -> Resource | None:
    """
    Create a Google Calendar API service.

    Returns None if credentials are not configured or cannot be loaded.
    """
    if not config.is_calendar_configured():
        return None

    try:
        creds = _load_credentials()
        return build("calendar", "v3", credentials=creds, cache_discovery=False)
    except Exception as e:
        logger.warning(f"Failed to initialize Google Calendar service: {e}")
        return None


def _to_rfc3339(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat()


class GoogleCalendarGateway:
    """
    Async facade over the Calendar v3 resource.

    The googleapiclient calls are blocking, so each one runs in a worker
    thread and is awaited before returning. Errors propagate to the caller.
    """

    def __init__(self, service: Resource, calendar_id: str = "primary"):
        self.service = service
        self.calendar_id = calendar_id

    async def list_calendars(self) -> list[CalendarRef]:
        def _sync_list():
            return self.service.calendarList().list().execute()

        response = await asyncio.to_thread(_sync_list)
        return [CalendarRef.from_api(item) for item in response.get("items", [])]

    async def list_events(
        self,
        calendar_id: str,
        time_min: datetime,
        time_max: datetime,
        *,
        single_events: bool = True,
        order_by: str = "startTime",
        max_results: int = MAX_EVENTS_PER_CALENDAR,
    ) -> list[dict]:
        """
        List events of one calendar in [time_min, time_max).

        With single_events=True the server expands recurring events into
        their individual instances. Only the first page is read.
        """

        def _sync_list():
            return (
                self.service.events()
                .list(
                    calendarId=calendar_id,
                    timeMin=_to_rfc3339(time_min),
                    timeMax=_to_rfc3339(time_max),
                    singleEvents=single_events,
                    orderBy=order_by,
                    maxResults=max_results,
                )
                .execute()
            )

        response = await asyncio.to_thread(_sync_list)
        return response.get("items", [])

    async def fetch_event(self, event_id: str) -> dict:
        def _sync_get():
            return (
                self.service.events()
                .get(calendarId=self.calendar_id, eventId=event_id)
                .execute()
            )

        return await asyncio.to_thread(_sync_get)

    async def create_event(self, body: dict) -> str:
        def _sync_insert():
            return (
                self.service.events()
                .insert(calendarId=self.calendar_id, body=body)
                .execute()
            )

        result = await asyncio.to_thread(_sync_insert)
        return result["id"]

    async def delete_event(self, event_id: str) -> None:
        def _sync_delete():
            return (
                self.service.events()
                .delete(calendarId=self.calendar_id, eventId=event_id)
                .execute()
            )

        await asyncio.to_thread(_sync_delete)


def get_gateway() -> GoogleCalendarGateway | None:
    """Build a gateway from the environment, or None if not configured."""
    service = get_calendar_service()
    if service is None:
        return None
    return GoogleCalendarGateway(service, calendar_id=config.get_calendar_id())
