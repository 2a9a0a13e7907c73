"""
Test configuration and shared fixtures for Shabbat times tests.

This module provides common test utilities and fixtures used across
all test modules.
"""

import os
import sys
from datetime import date

# Ensure parent directory is in path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


# Known test dates
TEST_FRIDAY_JAN_2025 = date(2025, 1, 24)  # Regular Shabbat, standard time
TEST_FRIDAY_JUL_2025 = date(2025, 7, 4)  # Summer Shabbat, DST in the north


def hebcal_response(
    title="San Juan, PR 00901",
    tzid="America/Puerto_Rico",
    candles="Candle lighting: 6:03pm",
    havdalah="Havdalah: 7:00pm",
    candle_date="2025-01-24T18:03:00-04:00",
):
    """Build a Hebcal Shabbat API JSON body; pass None to leave an item out."""
    items = []
    if candles is not None:
        items.append({"title": candles, "date": candle_date, "category": "candles"})
    items.append({"title": "Parashat Mishpatim", "date": "2025-01-25", "category": "parashat"})
    if havdalah is not None:
        items.append({"title": havdalah, "date": "2025-01-25T19:00:00-04:00", "category": "havdalah"})
    return {
        "title": f"Hebcal {title} January 2025",
        "location": {
            "title": title,
            "city": title.split(",")[0],
            "tzid": tzid,
            "latitude": 18.46,
            "longitude": -66.11,
            "cc": "US",
        },
        "items": items,
    }
