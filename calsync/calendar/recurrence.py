"""
RRULE line parsing.

Turns recurrence lines from the Calendar API (e.g. "RRULE:FREQ=WEEKLY;BYDAY=MO,WE")
into RecurrenceRule objects. Only the rule syntax is parsed; occurrences are
never expanded into dates.

Parsing is lenient and never raises:
- segments without "=" (or with an empty key/value) are skipped
- unknown keys are dropped
- integer tokens without a leading number become float("nan")
"""

import re

from ..enums import Frequency, Weekday
from ..models import INT_LIST_FIELDS, RecurrenceRule

RRULE_PREFIX = "RRULE:"

# Leading base-10 integer, trailing junk ignored ("5x" -> 5)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(token: str) -> int | float:
    """Parse the leading integer of token, or return NaN if there is none."""
    match = _LEADING_INT.match(token)
    if not match:
        return float("nan")
    return int(match.group(1))


def _enum_or_raw(enum_cls, value: str):
    value = value.lower()
    try:
        return enum_cls(value)
    except ValueError:
        return value


def parse_rrule_line(raw: str) -> RecurrenceRule:
    """
    Parse a single recurrence line into a RecurrenceRule.

    >>> parse_rrule_line("RRULE:FREQ=DAILY;COUNT=3").to_dict()
    {'freq': 'daily', 'count': 3}
    """
    rule = RecurrenceRule()

    if raw.startswith(RRULE_PREFIX):
        raw = raw[len(RRULE_PREFIX):]

    for part in raw.split(";"):
        pieces = part.split("=")
        if len(pieces) < 2:
            continue
        key, value = pieces[0], pieces[1]
        if not key or not value:
            continue

        key = key.lower()

        if key == "freq":
            rule.freq = _enum_or_raw(Frequency, value)
        elif key == "wkst":
            rule.wkst = _enum_or_raw(Weekday, value)
        elif key == "interval":
            rule.interval = parse_int(value)
        elif key == "count":
            rule.count = parse_int(value)
        elif key == "until":
            rule.until = value
        elif key == "byday":
            rule.byday = [day.lower() for day in value.split(",")]
        elif key in INT_LIST_FIELDS:
            setattr(rule, key, [parse_int(v) for v in value.split(",")])
        elif key in ("rdate", "exdate"):
            setattr(rule, key, value.split(","))

    return rule


def parse_rrule_lines(lines: list[str]) -> list[RecurrenceRule]:
    """Parse each recurrence line, preserving order and length."""
    return [parse_rrule_line(line) for line in lines]
