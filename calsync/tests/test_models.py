"""Tests for model serialization."""

from calsync.enums import Frequency, Weekday
from calsync.models import CalendarRef, CanonicalEvent, ExtendedProperties, RecurrenceRule


class TestCalendarRef:
    def test_from_api_uses_summary(self):
        ref = CalendarRef.from_api({"id": "c1", "summary": "Family", "accessRole": "owner"})

        assert ref == CalendarRef(id="c1", display_name="Family")


class TestRecurrenceRule:
    def test_to_dict_omits_unset_parts(self):
        rule = RecurrenceRule(freq=Frequency.monthly, bymonthday=[1])

        assert rule.to_dict() == {"freq": "monthly", "bymonthday": [1]}

    def test_from_dict_restores_enums(self):
        rule = RecurrenceRule.from_dict({"freq": "weekly", "wkst": "mo", "count": 2})

        assert rule.freq is Frequency.weekly
        assert rule.wkst is Weekday.mo
        assert rule.count == 2

    def test_from_dict_ignores_unknown_keys(self):
        rule = RecurrenceRule.from_dict({"freq": "daily", "tzid": "UTC"})

        assert rule == RecurrenceRule(freq=Frequency.daily)


class TestExtendedProperties:
    def test_absent_maps_are_not_serialized(self):
        assert ExtendedProperties().to_dict() == {}
        assert ExtendedProperties(shared={"a": "b"}).to_dict() == {"shared": {"a": "b"}}

    def test_from_api_copies_maps(self):
        source = {"private": {"isLotus": "true"}}

        props = ExtendedProperties.from_api(source)
        source["private"]["isLotus"] = "false"

        assert props.private == {"isLotus": "true"}
        assert props.shared is None


class TestCanonicalEvent:
    def test_to_dict_uses_api_keys(self):
        event = CanonicalEvent(
            id="e1",
            title="Dentist",
            description="",
            location="",
            start="2026-01-10",
            end="2026-01-11",
            calendar_id="primary",
            calendar_name="Me",
            recurring_event_id="m1",
        )

        assert event.to_dict() == {
            "id": "e1",
            "title": "Dentist",
            "description": "",
            "location": "",
            "start": "2026-01-10",
            "end": "2026-01-11",
            "calendarId": "primary",
            "calendarName": "Me",
            "recurringEventId": "m1",
            "recurrence": [],
            "recurrenceRules": [],
            "extendedProperties": {},
        }
