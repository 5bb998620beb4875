"""Create and remove events tagged as created by this tool ("lotus" events)."""

import logging
from datetime import date, datetime

from ..models import CanonicalEvent

logger = logging.getLogger(__name__)

LOTUS_PROPERTY = "isLotus"


def build_lotus_event(title: str, day: date, now: datetime | None = None) -> dict:
    """
    Build the API body for an all-day lotus event.

    The summary is prefixed with the current local time, e.g.
    "🐶🐶14:05 - Buy milk".
    """
    now = now or datetime.now()
    day_str = day.isoformat()
    return {
        "summary": f"🐶🐶{now.strftime('%H:%M')} - {title}",
        "start": {"date": day_str},
        "end": {"date": day_str},
        "extendedProperties": {"private": {LOTUS_PROPERTY: "true"}},
    }


async def create_lotus_event(gateway, title: str, day: date) -> str:
    """
    Create an all-day lotus event.

    Returns:
        Google Calendar event ID
    """
    logger.info(f"Creating event: {title} for date: {day.isoformat()}")
    try:
        event_id = await gateway.create_event(build_lotus_event(title, day))
    except Exception as e:
        logger.error(f"Error creating event: {e}")
        raise
    logger.info(f"Event created successfully with ID: {event_id}")
    return event_id


async def remove_event(gateway, event_id: str) -> None:
    logger.info(f"Removing event with ID: {event_id}")
    try:
        await gateway.delete_event(event_id)
    except Exception as e:
        logger.error(f"Error removing event {event_id}: {e}")
        raise
    logger.info(f"Event {event_id} removed successfully")


def is_lotus_event(event: CanonicalEvent) -> bool:
    private = event.extended_properties.private or {}
    return private.get(LOTUS_PROPERTY) == "true"


async def remove_lotus_events(gateway, events: list[CanonicalEvent]) -> int:
    """
    Remove every lotus event among events.

    Stops at the first failed removal.

    Returns:
        Number of events removed
    """
    lotus_events = [e for e in events if is_lotus_event(e)]
    logger.info(f"Found {len(lotus_events)} events with {LOTUS_PROPERTY}=true")

    for event in lotus_events:
        logger.info(f"Removing lotus event: {event.title} ({event.id})")
        await remove_event(gateway, event.id)

    logger.info(f"Successfully removed {len(lotus_events)} lotus events")
    return len(lotus_events)
