"""Enum definitions for recurrence rule values."""

import enum


class Frequency(str, enum.Enum):
    yearly = "yearly"
    monthly = "monthly"
    weekly = "weekly"
    daily = "daily"
    hourly = "hourly"
    minutely = "minutely"
    secondly = "secondly"


class Weekday(str, enum.Enum):
    mo = "mo"
    tu = "tu"
    we = "we"
    th = "th"
    fr = "fr"
    sa = "sa"
    su = "su"
