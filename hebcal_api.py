"""
Hebcal API integration for fetching weekly Shabbat times.

This module queries the Hebcal Shabbat API once per location and turns the
response into a LocationTime: the location's display name, IANA timezone,
candle-lighting and Havdalah times, and the date of Erev Shabbat.

Lookups are not cached; each request fetches its locations sequentially.
"""

import re
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import requests

from config import API_TIMEOUT, get_havdalah_minutes, get_hebcal_shabbat_url
from locations import resolve_location
from time_normalizer import LocationTime

_HEBCAL_TIME_PATTERN = re.compile(r"(\d{1,2}:\d{2})\s*([ap])m", re.IGNORECASE)


class LocationLookupError(RuntimeError):
    """Raised when Shabbat times cannot be obtained for a location."""

    def __init__(self, location: str, message: str):
        super().__init__(message)
        self.location = location


def format_hebcal_time(time_str: str) -> Optional[str]:
    """
    Normalize a Hebcal time such as "6:45pm" to "6:45 PM".

    Returns:
        The normalized time, or None if no time is present
    """
    match = _HEBCAL_TIME_PATTERN.search(time_str or "")
    if not match:
        return None
    return f"{match.group(1)} {match.group(2).upper()}M"


def _build_shabbat_params(location: str) -> Dict[str, str]:
    """Build the Hebcal Shabbat API query parameters for a location."""
    params = {"cfg": "json", "lg": "s"}
    havdalah_minutes = get_havdalah_minutes()
    if havdalah_minutes is None:
        params["M"] = "on"
    else:
        params["m"] = str(havdalah_minutes)
    params.update(resolve_location(location))
    return params


def _find_item(items: Iterable[Dict[str, Any]], title_fragment: str, category: str) -> Optional[Dict[str, Any]]:
    """Find the first item whose title contains title_fragment or whose category matches."""
    for item in items:
        if title_fragment in item.get("title", "") or item.get("category") == category:
            return item
    return None


def _parse_item_date(item: Dict[str, Any]) -> Optional[date]:
    """Get the calendar date of a Hebcal item ("2025-01-24T16:37:00-04:00" -> 2025-01-24)."""
    date_str = item.get("date", "")
    try:
        return date.fromisoformat(date_str[:10])
    except ValueError:
        return None


def parse_shabbat_response(location: str, data: Dict[str, Any]) -> LocationTime:
    """
    Extract Shabbat times for a location from a Hebcal Shabbat API response.

    Args:
        location: The location text the user supplied (for error messages)
        data: Decoded JSON response

    Returns:
        LocationTime for the location

    Raises:
        LocationLookupError: If location data, candle lighting or Havdalah is missing
    """
    location_info = data.get("location")
    items = data.get("items") or []
    if not location_info or not items:
        raise LocationLookupError(location, f"No location or times data found for {location}")

    candle_lighting = _find_item(items, "Candle lighting", "candles")
    havdalah = _find_item(items, "Havdalah", "havdalah")
    if not candle_lighting or not havdalah:
        raise LocationLookupError(location, f"Incomplete Shabbat times for {location}")

    start = format_hebcal_time(candle_lighting.get("title", ""))
    end = format_hebcal_time(havdalah.get("title", ""))
    observed_date = _parse_item_date(candle_lighting)
    if not start or not end or observed_date is None:
        raise LocationLookupError(location, f"Could not parse times for {location}")

    timezone = location_info.get("tzid")
    if not timezone:
        raise LocationLookupError(location, f"No timezone reported for {location}")

    return LocationTime(
        name=location_info.get("title") or location,
        timezone=timezone,
        shabbat_start=start,
        shabbat_end=end,
        observed_date=observed_date,
        query=location,
        latitude=location_info.get("latitude"),
        longitude=location_info.get("longitude"),
    )


def fetch_shabbat_times(location: str) -> LocationTime:
    """
    Fetch this week's Shabbat times for a location from Hebcal.

    Args:
        location: Free-text location name or postal code

    Returns:
        LocationTime for the location

    Raises:
        ValueError: If the location is empty
        LocationLookupError: If the API call fails or returns incomplete data
    """
    params = _build_shabbat_params(location)
    url = get_hebcal_shabbat_url()
    print(f"Fetching Shabbat times for {location} from {url} with {params}")

    try:
        response = requests.get(url, params=params, timeout=API_TIMEOUT)
    except requests.RequestException as e:
        raise LocationLookupError(location, f"Could not reach Hebcal for {location}: {e}") from e

    if response.status_code != 200:
        raise LocationLookupError(
            location,
            f"API request failed for {location}: HTTP {response.status_code}",
        )

    try:
        data = response.json()
    except ValueError as e:
        raise LocationLookupError(location, f"Invalid response from Hebcal for {location}") from e

    result = parse_shabbat_response(location, data)
    print(f"Received data for {location}: {result.name} ({result.timezone})")
    return result


def fetch_all_shabbat_times(locations: List[str]) -> List[LocationTime]:
    """
    Fetch Shabbat times for several locations, one request at a time, in order.

    The first failure aborts the whole lookup.
    """
    results = []
    for index, location in enumerate(locations):
        print(f"Fetching data for location {index}: {location}")
        results.append(fetch_shabbat_times(location))
    return results
