"""
Sync of remote calendars into a local event snapshot.

One run:
1. Lists calendars (failure aborts the run)
2. Lists events of each calendar in a fixed window, with recurring events
   expanded into instances by the server
3. Normalizes every event into a CanonicalEvent
4. Writes the flattened list as a full-replacement snapshot

A calendar whose events cannot be listed is logged and skipped; the run
continues with the others, so a short result may be partial.

Output order is calendar listing order, then the server's in-calendar order
(start time). Events are never re-sorted globally.
"""

import logging
from datetime import datetime
from typing import Callable

from dateutil import tz

from .calendar.cache import RecurrenceRuleCache
from .calendar.client import MAX_EVENTS_PER_CALENDAR, log_calendar_error
from .calendar.normalizer import EventNormalizer
from .models import CalendarRef, CanonicalEvent

logger = logging.getLogger(__name__)


class CalendarSyncError(Exception):
    """Base exception for sync errors."""
    pass


class CalendarListError(CalendarSyncError):
    """Calendars could not be listed, so nothing can be synced."""
    pass


def _local_now() -> datetime:
    return datetime.now(tz.tzlocal())


def compute_sync_window(now: datetime) -> tuple[datetime, datetime]:
    """
    Return (start, end) of the sync window for the given moment.

    Jan 1 of last year through Jan 1 of the year after next, at local
    midnight in now's timezone (the machine's timezone for naive datetimes).
    """
    tzinfo = now.tzinfo or tz.tzlocal()
    start = datetime(now.year - 1, 1, 1, tzinfo=tzinfo)
    end = datetime(now.year + 2, 1, 1, tzinfo=tzinfo)
    return start, end


class SyncOrchestrator:
    """
    Runs full syncs against a calendar gateway.

    Args:
        gateway: Object with async list_calendars(), list_events() and
            fetch_event() (see GoogleCalendarGateway)
        store: Object with write_snapshot(key, events) (see SnapshotStore)
        snapshot_key: Key the snapshot is written under
        now: Clock used for the sync window (defaults to local time)
    """

    def __init__(
        self,
        gateway,
        store,
        snapshot_key: str = "events",
        now: Callable[[], datetime] | None = None,
    ):
        self.gateway = gateway
        self.store = store
        self.snapshot_key = snapshot_key
        self.now = now or _local_now
        self.calendars: list[CalendarRef] = []

    async def list_calendars(self) -> list[CalendarRef]:
        try:
            calendars = await self.gateway.list_calendars()
        except Exception as e:
            log_calendar_error(e, operation="list_calendars")
            raise CalendarListError(f"Failed to fetch calendars: {e}") from e

        logger.info(
            f"Found {len(calendars)} calendars: "
            f"{[c.display_name for c in calendars]}"
        )
        return calendars

    async def sync_calendar(
        self,
        calendar: CalendarRef,
        window: tuple[datetime, datetime],
        normalizer: EventNormalizer,
    ) -> list[CanonicalEvent]:
        """Fetch and normalize the events of one calendar. Errors propagate."""
        logger.info(
            f"Fetching events from calendar: {calendar.display_name} ({calendar.id})"
        )
        raw_events = await self.gateway.list_events(
            calendar.id,
            window[0],
            window[1],
            single_events=True,
            order_by="startTime",
            max_results=MAX_EVENTS_PER_CALENDAR,
        )
        logger.info(f"Found {len(raw_events)} events in {calendar.display_name}")

        events = []
        for raw_event in raw_events:
            events.append(await normalizer.normalize(raw_event, calendar))
        return events

    async def run(self) -> list[CanonicalEvent]:
        """Run one full sync and persist its snapshot."""
        self.calendars = await self.list_calendars()

        window = compute_sync_window(self.now())
        logger.info(
            f"Fetching events from {window[0].isoformat()} to {window[1].isoformat()}"
        )

        # Cache lives for this run only
        normalizer = EventNormalizer(RecurrenceRuleCache(self.gateway))

        all_events: list[CanonicalEvent] = []
        for calendar in self.calendars:
            try:
                events = await self.sync_calendar(calendar, window, normalizer)
            except Exception as e:
                log_calendar_error(
                    e,
                    operation="list_events",
                    context={"calendar_id": calendar.id},
                )
                continue
            all_events.extend(events)

        logger.info(f"Found {len(all_events)} total events")

        self.store.write_snapshot(self.snapshot_key, all_events)
        return all_events
