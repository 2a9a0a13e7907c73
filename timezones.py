"""
UTC offset lookup for IANA timezone names.

The default source is a fixed offset table. It hard-codes a single DST regime
(standard time in the northern hemisphere), so its values are approximations
for part of the year. Setting TZ_OFFSET_SOURCE=tzdb resolves offsets from the
tz database through pytz for the date being converted instead.
"""

from datetime import date, datetime, time
from typing import Dict, Optional

import pytz

from config import OFFSET_SOURCE_TZDB, get_offset_source

# ========= STATIC OFFSET TABLE =========
# Hours east of UTC. Fractional values are half- and quarter-hour zones.
TIMEZONE_OFFSETS: Dict[str, float] = {
    "UTC": 0,
    # Americas
    "America/Puerto_Rico": -4,  # AST, no DST
    "America/New_York": -5,  # EST (winter) / -4 (summer)
    "America/Toronto": -5,
    "America/Chicago": -6,
    "America/Denver": -7,
    "America/Phoenix": -7,
    "America/Los_Angeles": -8,
    "America/Anchorage": -9,
    "Pacific/Honolulu": -10,
    "America/Halifax": -4,
    "America/St_Johns": -3.5,
    "America/Sao_Paulo": -3,
    "America/Argentina/Buenos_Aires": -3,
    "America/Mexico_City": -6,
    "America/Panama": -5,
    # Europe
    "Europe/Lisbon": 0,  # WET (winter) / +1 (summer)
    "Europe/London": 0,
    "Europe/Dublin": 0,
    "Europe/Paris": 1,
    "Europe/Berlin": 1,
    "Europe/Rome": 1,
    "Europe/Madrid": 1,
    "Europe/Amsterdam": 1,
    "Europe/Athens": 2,
    "Europe/Kiev": 2,
    "Europe/Istanbul": 3,
    "Europe/Moscow": 3,
    # Middle East / Africa
    "Asia/Jerusalem": 2,
    "Asia/Dubai": 4,
    "Africa/Johannesburg": 2,
    # Asia / Pacific
    "Asia/Kolkata": 5.5,
    "Asia/Kathmandu": 5.75,
    "Asia/Singapore": 8,
    "Asia/Hong_Kong": 8,
    "Asia/Shanghai": 8,
    "Asia/Tokyo": 9,
    "Australia/Adelaide": 9.5,
    "Australia/Melbourne": 10,
    "Australia/Sydney": 10,
    "Pacific/Auckland": 12,
}


def _tzdb_offset(tz_name: str, on_date: Optional[date]) -> Optional[float]:
    """UTC offset in hours of tz_name at local noon on on_date, from pytz."""
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        return None

    local_noon = tz.localize(datetime.combine(on_date or date.today(), time(12, 0)))
    return local_noon.utcoffset().total_seconds() / 3600


def get_offset(
    tz_name: str,
    on_date: Optional[date] = None,
    source: Optional[str] = None,
) -> Optional[float]:
    """
    Get the UTC offset in hours for an IANA timezone name.

    Args:
        tz_name: IANA timezone name (e.g. "America/New_York")
        on_date: Date the offset applies to (only used by the tzdb source)
        source: "static" or "tzdb"; defaults to the configured source

    Returns:
        Offset in (possibly fractional) hours, or None if the zone is unknown
    """
    if not tz_name:
        return None
    if source is None:
        source = get_offset_source()
    if source == OFFSET_SOURCE_TZDB:
        return _tzdb_offset(tz_name, on_date)
    return TIMEZONE_OFFSETS.get(tz_name)
