"""
Centralized configuration for calendar sync.

All settings come from environment variables. Entry points load .env and
.env.local (python-dotenv) before reading them.
"""

import os
from pathlib import Path


class ConfigurationError(Exception):
    """Required configuration is missing."""
    pass


def get_access_token() -> str | None:
    """OAuth access token issued by the (external) login flow."""
    return os.environ.get("GOOGLE_CALENDAR_ACCESS_TOKEN") or None


def get_credentials_json() -> str | None:
    """Service account credentials as a JSON string (for Railway/Heroku)."""
    return os.environ.get("GOOGLE_CALENDAR_CREDENTIALS_JSON") or None


def get_credentials_file() -> str | None:
    """Path to a service account credentials file (for local dev)."""
    return os.environ.get("GOOGLE_CALENDAR_CREDENTIALS_FILE") or None


def get_calendar_email() -> str | None:
    """User the service account acts as, if delegation is used."""
    return os.environ.get("GOOGLE_CALENDAR_EMAIL") or None


def get_calendar_id() -> str:
    """Calendar used for single-event fetch, create and delete."""
    return os.getenv("GOOGLE_CALENDAR_ID", "primary")


def is_calendar_configured() -> bool:
    """Check if any kind of Google Calendar credentials are configured."""
    if get_access_token() or get_credentials_json():
        return True
    credentials_file = get_credentials_file()
    return bool(credentials_file and os.path.exists(credentials_file))


def get_data_dir() -> Path:
    """Directory holding sync snapshots."""
    return Path(os.getenv("CALSYNC_DATA_DIR", ".mem"))


def get_snapshot_key() -> str:
    """Name of the snapshot written by each sync run."""
    return os.getenv("CALSYNC_SNAPSHOT_KEY", "events")


def get_sentry_dsn() -> str | None:
    return os.environ.get("SENTRY_DSN") or None


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


# Format: (names, description) - at least one of names must be set
REQUIRED_ENV_VARS = [
    (
        (
            "GOOGLE_CALENDAR_ACCESS_TOKEN",
            "GOOGLE_CALENDAR_CREDENTIALS_JSON",
            "GOOGLE_CALENDAR_CREDENTIALS_FILE",
        ),
        "Google Calendar credentials",
    ),
]


def check_required_env_vars() -> list[str]:
    """
    Check that required environment variables are set.

    Returns:
        List of error messages, empty if everything is configured.
    """
    errors = []
    for names, description in REQUIRED_ENV_VARS:
        if not any(os.environ.get(name) for name in names):
            errors.append(f"  ✗ {' / '.join(names)}: Not set ({description})")
    return errors
