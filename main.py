"""
Calendar sync entry point.

Runs one full sync: lists the account's calendars, pulls their events,
normalizes them and writes the snapshot (default: .mem/events.json).

Run with: python main.py [--data-dir DIR] [--key KEY]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")
load_dotenv()

import sentry_sdk

from calsync import config
from calsync.calendar.client import get_gateway
from calsync.storage import SnapshotStore
from calsync.sync import CalendarListError, SyncOrchestrator

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # googleapiclient logs every discovery/cache lookup at INFO
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)


def setup_sentry() -> None:
    dsn = config.get_sentry_dsn()
    if dsn:
        sentry_sdk.init(dsn=dsn)


async def run_sync(data_dir: Path, key: str) -> int:
    """Run one sync. Returns the number of synced events."""
    missing = config.check_required_env_vars()
    if missing:
        for message in missing:
            print(message)
        raise config.ConfigurationError("Google Calendar is not configured")

    gateway = get_gateway()
    if gateway is None:
        raise config.ConfigurationError("Failed to initialize Google Calendar service")

    print("Connecting to Google Calendar...")
    orchestrator = SyncOrchestrator(gateway, SnapshotStore(data_dir), snapshot_key=key)
    events = await orchestrator.run()
    return len(events)


def main() -> int:
    parser = argparse.ArgumentParser(description="Sync Google Calendar events to a local snapshot")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=config.get_data_dir(),
        help="Directory the snapshot is written to (default: .mem)",
    )
    parser.add_argument(
        "--key",
        default=config.get_snapshot_key(),
        help="Snapshot name (default: events)",
    )
    args = parser.parse_args()

    setup_logging()
    setup_sentry()

    try:
        count = asyncio.run(run_sync(args.data_dir, args.key))
    except config.ConfigurationError as e:
        print(f"Error: {e}")
        return 2
    except CalendarListError as e:
        print(f"Error: {e}")
        return 1

    print(f"Synced {count} events to {args.data_dir / (args.key + '.json')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
