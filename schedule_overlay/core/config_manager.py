# File: schedule_overlay/core/config_manager.py
"""
Centralized configuration management for the schedule overlay.
Loads settings from environment variables (and a local .env file).
"""

import os
from pathlib import Path
from typing import List

import pytz
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ['1', 'true', 'yes', 'y', 'on']


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from schedule_overlay/core/
    LOGS_DIR = Path(os.getenv("LOGS_DIR", str(BASE_DIR / "logs")))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE = _env_flag("LOG_TO_FILE")

    # Timezone used as the "local" zone when none is passed explicitly
    TARGET_TIMEZONE = os.getenv("TIMEZONE", "UTC")

    # Google Calendar fetch boundary
    CALENDAR_IDS: List[str] = _env_list("CALENDAR_IDS", "primary")
    MAX_RESULTS_PER_PAGE = 250

    # Extra days fetched past the last specific date / around the virtual week
    FETCH_BUFFER_DAYS = 2
    DAYS_PER_WEEK = 7

    @classmethod
    def get_timezone(cls, tz_name: str = None) -> pytz.BaseTzInfo:
        """Return the pytz timezone for the given name (default: TARGET_TIMEZONE)."""
        return pytz.timezone(tz_name or cls.TARGET_TIMEZONE)

    @classmethod
    def validate(cls) -> bool:
        """Validate that the configuration is usable."""
        errors = []

        try:
            cls.get_timezone()
        except pytz.UnknownTimeZoneError:
            errors.append(f"Unknown TIMEZONE: {cls.TARGET_TIMEZONE}")

        if not cls.CALENDAR_IDS:
            errors.append("CALENDAR_IDS is empty")

        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False

        return True
