"""Map raw Calendar API events to CanonicalEvent records."""

import logging

from ..models import CalendarRef, CanonicalEvent, ExtendedProperties
from .cache import RecurrenceRuleCache
from .recurrence import parse_rrule_lines

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "No title"


def _event_time(value: dict | None) -> str:
    """Prefer dateTime, fall back to an all-day date, else empty string."""
    value = value or {}
    return value.get("dateTime") or value.get("date") or ""


class EventNormalizer:
    """
    Normalizes raw events of one sync run.

    Instances of recurring events usually carry only recurringEventId; their
    recurrence lines are looked up on the master event through the cache.
    """

    def __init__(self, cache: RecurrenceRuleCache):
        self.cache = cache

    async def resolve_recurrence(self, raw_event: dict) -> list[str]:
        lines = raw_event.get("recurrence") or []
        if lines:
            return list(lines)

        recurring_event_id = raw_event.get("recurringEventId")
        if recurring_event_id:
            logger.debug(
                f"Fetching recurrence rules for {raw_event.get('summary')} "
                f"({recurring_event_id})"
            )
            return list(await self.cache.resolve(recurring_event_id))

        return []

    async def normalize(self, raw_event: dict, calendar: CalendarRef) -> CanonicalEvent:
        recurrence = await self.resolve_recurrence(raw_event)
        extended = ExtendedProperties.from_api(raw_event.get("extendedProperties"))

        event = CanonicalEvent(
            id=raw_event["id"],
            title=raw_event.get("summary") or DEFAULT_TITLE,
            description=raw_event.get("description") or "",
            location=raw_event.get("location") or "",
            start=_event_time(raw_event.get("start")),
            end=_event_time(raw_event.get("end")),
            calendar_id=calendar.id,
            calendar_name=calendar.display_name,
            html_link=raw_event.get("htmlLink"),
            recurring_event_id=raw_event.get("recurringEventId"),
            raw_recurrence_lines=recurrence,
            parsed_recurrence_rules=parse_rrule_lines(recurrence),
            extended_properties=extended,
        )

        logger.debug(
            f"Parsed event: {event.title} (recurrence: {len(recurrence)} rules, "
            f"x-fields: {len(extended.to_dict())})"
        )
        return event
