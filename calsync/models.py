"""
Data model for synced calendars and events.

Field names are snake_case in Python; the JSON form written to the snapshot
uses the camelCase keys of the Google Calendar API.
"""

from dataclasses import dataclass, field, fields

from .enums import Frequency, Weekday


# Recurrence rule fields holding lists of integers (BYxxx parts)
INT_LIST_FIELDS = (
    "bysecond",
    "byminute",
    "byhour",
    "bymonthday",
    "byyearday",
    "byweekno",
    "bymonth",
    "bysetpos",
)


def _coerce_enum(enum_cls, value):
    """Return the enum member for value, or the value itself if it names none."""
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class CalendarRef:
    """A remote calendar, as listed at the start of a sync run."""
    id: str
    display_name: str

    @classmethod
    def from_api(cls, item: dict) -> "CalendarRef":
        return cls(id=item["id"], display_name=item.get("summary", ""))


@dataclass
class RecurrenceRule:
    """
    Structured form of one RRULE line.

    Every field is optional; None means the rule did not carry that part.
    Integer lists may contain float("nan") for tokens that were not numbers.
    """
    freq: Frequency | str | None = None
    interval: int | float | None = None
    until: str | None = None
    count: int | float | None = None
    bysecond: list | None = None
    byminute: list | None = None
    byhour: list | None = None
    byday: list[str] | None = None
    bymonthday: list | None = None
    byyearday: list | None = None
    byweekno: list | None = None
    bymonth: list | None = None
    bysetpos: list | None = None
    wkst: Weekday | str | None = None
    rdate: list[str] | None = None
    exdate: list[str] | None = None

    def to_dict(self) -> dict:
        """Serialize, omitting parts the rule does not carry."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, (Frequency, Weekday)):
                value = value.value
            elif isinstance(value, list):
                value = list(value)
            result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "RecurrenceRule":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        values["freq"] = _coerce_enum(Frequency, values.get("freq"))
        values["wkst"] = _coerce_enum(Weekday, values.get("wkst"))
        return cls(**values)


@dataclass
class ExtendedProperties:
    """Private/shared key-value maps; a map is None unless the source had it."""
    private: dict[str, str] | None = None
    shared: dict[str, str] | None = None

    @classmethod
    def from_api(cls, data: dict | None) -> "ExtendedProperties":
        if not data:
            return cls()
        private = data.get("private")
        shared = data.get("shared")
        return cls(
            private=dict(private) if private is not None else None,
            shared=dict(shared) if shared is not None else None,
        )

    def to_dict(self) -> dict:
        result = {}
        if self.private is not None:
            result["private"] = dict(self.private)
        if self.shared is not None:
            result["shared"] = dict(self.shared)
        return result


@dataclass
class CanonicalEvent:
    """A normalized, calendar-agnostic event record."""
    id: str
    title: str
    description: str
    location: str
    start: str
    end: str
    calendar_id: str
    calendar_name: str
    html_link: str | None = None
    recurring_event_id: str | None = None
    raw_recurrence_lines: list[str] = field(default_factory=list)
    parsed_recurrence_rules: list[RecurrenceRule] = field(default_factory=list)
    extended_properties: ExtendedProperties = field(default_factory=ExtendedProperties)

    def to_dict(self) -> dict:
        result = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "start": self.start,
            "end": self.end,
            "calendarId": self.calendar_id,
            "calendarName": self.calendar_name,
        }
        if self.html_link is not None:
            result["htmlLink"] = self.html_link
        if self.recurring_event_id is not None:
            result["recurringEventId"] = self.recurring_event_id
        result["recurrence"] = list(self.raw_recurrence_lines)
        result["recurrenceRules"] = [r.to_dict() for r in self.parsed_recurrence_rules]
        result["extendedProperties"] = self.extended_properties.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "CanonicalEvent":
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            location=data.get("location", ""),
            start=data.get("start", ""),
            end=data.get("end", ""),
            calendar_id=data.get("calendarId", ""),
            calendar_name=data.get("calendarName", ""),
            html_link=data.get("htmlLink"),
            recurring_event_id=data.get("recurringEventId"),
            raw_recurrence_lines=list(data.get("recurrence", [])),
            parsed_recurrence_rules=[
                RecurrenceRule.from_dict(r) for r in data.get("recurrenceRules", [])
            ],
            extended_properties=ExtendedProperties.from_api(
                data.get("extendedProperties")
            ),
        )
