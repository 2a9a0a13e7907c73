"""
Configuration module for the Shabbat times comparison service.

This module centralizes all configuration values and supports environment variable overrides.
All settings can be customized via environment variables - see .env.example for details.
"""

import os
from typing import Optional

# ========= HEBCAL API CONFIGURATION =========

def get_hebcal_shabbat_url() -> str:
    """Get Hebcal Shabbat API URL from environment or use default."""
    return os.getenv("HEBCAL_SHABBAT_URL", "https://www.hebcal.com/shabbat")


def get_havdalah_minutes() -> Optional[int]:
    """
    Get fixed minutes-after-sunset for Havdalah.

    Returns None when unset, in which case Hebcal computes Havdalah from
    tzeit hakochavim (the "M=on" option).
    """
    value = os.getenv("HAVDALAH_MINUTES")
    if value is None or not value.strip():
        return None
    return int(value)

# ========= API TIMEOUT CONFIGURATION =========

API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))  # Timeout in seconds for API requests

# ========= TIMEZONE CONFIGURATION =========

OFFSET_SOURCE_STATIC = "static"
OFFSET_SOURCE_TZDB = "tzdb"


def get_offset_source() -> str:
    """
    Get the timezone offset source: "static" (fixed table) or "tzdb" (pytz).

    Unrecognized values fall back to the static table.
    """
    source = os.getenv("TZ_OFFSET_SOURCE", OFFSET_SOURCE_STATIC).strip().lower()
    if source not in (OFFSET_SOURCE_STATIC, OFFSET_SOURCE_TZDB):
        print(f"Warning: Unknown TZ_OFFSET_SOURCE '{source}', using '{OFFSET_SOURCE_STATIC}'")
        return OFFSET_SOURCE_STATIC
    return source

# ========= LOCATION SUGGESTION CONFIGURATION =========

SUGGESTION_LIMIT = int(os.getenv("SUGGESTION_LIMIT", "8"))
SUGGESTION_MIN_CHARS = int(os.getenv("SUGGESTION_MIN_CHARS", "2"))
