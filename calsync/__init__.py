"""
Calendar sync core - platform-agnostic.
Used by the CLI entry point and maintenance scripts.
"""

# Data model
from .enums import Frequency, Weekday
from .models import CalendarRef, CanonicalEvent, ExtendedProperties, RecurrenceRule

# Snapshot persistence
from .storage import SnapshotStore

# Sync
from .sync import (
    SyncOrchestrator, CalendarSyncError, CalendarListError, compute_sync_window
)
