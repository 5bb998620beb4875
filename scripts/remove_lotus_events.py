#!/usr/bin/env python3
"""
Delete lotus events (created by this tool) from Google Calendar.

Reads the last snapshot written by main.py, so run a sync first.

Usage:
    python scripts/remove_lotus_events.py [--execute]
"""

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
load_dotenv(project_root / ".env")
load_dotenv(project_root / ".env.local", override=True)

from calsync import config
from calsync.calendar.client import get_gateway
from calsync.calendar.events import is_lotus_event, remove_lotus_events
from calsync.storage import SnapshotStore


async def cleanup_lotus_events(dry_run: bool = True) -> int:
    """Delete all lotus events found in the last snapshot."""
    store = SnapshotStore(config.get_data_dir())
    events = store.read_snapshot(config.get_snapshot_key())
    lotus_events = [e for e in events if is_lotus_event(e)]

    if not lotus_events:
        print("No lotus events found.")
        return 0

    print(f"Found {len(lotus_events)} lotus events to delete.")

    if dry_run:
        print("DRY RUN - would delete these events:")
        for event in lotus_events[:10]:
            print(f"  - {event.title} ({event.id})")
        if len(lotus_events) > 10:
            print(f"  ... and {len(lotus_events) - 10} more")
        return 0

    gateway = get_gateway()
    if gateway is None:
        print("Error: Google Calendar is not configured")
        return 0

    deleted = await remove_lotus_events(gateway, lotus_events)
    print(f"\nDeleted: {deleted}")
    return deleted


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--execute", action="store_true", help="Actually delete events")
    args = parser.parse_args()

    asyncio.run(cleanup_lotus_events(dry_run=not args.execute))
