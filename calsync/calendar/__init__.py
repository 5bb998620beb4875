"""Google Calendar integration: API gateway, event normalization, RRULE parsing."""

from .cache import RecurrenceRuleCache
from .client import (
    GoogleCalendarGateway,
    get_calendar_service,
    get_gateway,
    log_calendar_error,
)
from .events import (
    build_lotus_event,
    create_lotus_event,
    remove_event,
    is_lotus_event,
    remove_lotus_events,
)
from .normalizer import EventNormalizer
from .recurrence import parse_rrule_line, parse_rrule_lines

__all__ = [
    "RecurrenceRuleCache",
    "GoogleCalendarGateway",
    "get_calendar_service",
    "get_gateway",
    "log_calendar_error",
    "build_lotus_event",
    "create_lotus_event",
    "remove_event",
    "is_lotus_event",
    "remove_lotus_events",
    "EventNormalizer",
    "parse_rrule_line",
    "parse_rrule_lines",
]
