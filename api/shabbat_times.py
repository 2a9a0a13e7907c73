"""
Vercel serverless function for comparing Shabbat times across locations.
"""

import json
import os
import sys
from http.server import BaseHTTPRequestHandler
from typing import Any, Dict, List

# Add parent directory to path for Vercel serverless environment
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from calendar_utils import format_long_date
from config import get_offset_source
from hebcal_api import LocationLookupError, fetch_all_shabbat_times
from time_normalizer import HomeRelativeTimes, summarize


def _collect_locations(payload: Dict[str, Any]) -> List[str]:
    """
    Get the ordered list of locations (home first) from a request payload.

    Accepts {"homeLocation", "locations": [...]} and the legacy
    {"homeLocation", "secondaryLocation", "tertiaryLocation"} shape.

    Raises:
        ValueError: If the home location or every additional location is missing
    """
    home = payload.get("homeLocation")
    if not isinstance(home, str) or not home.strip():
        raise ValueError("Home location is required")

    others = payload.get("locations")
    if others is None:
        others = [payload.get("secondaryLocation"), payload.get("tertiaryLocation")]
    if not isinstance(others, list):
        raise ValueError("locations must be a list of location names")

    extra = [item.strip() for item in others if isinstance(item, str) and item.strip()]
    if not extra:
        raise ValueError("At least one additional location is required")

    return [home.strip()] + extra


def _location_to_dict(entry: HomeRelativeTimes) -> Dict[str, Any]:
    location = entry.location
    result = {
        "name": location.name,
        "query": location.query,
        "timezone": location.timezone,
        "shabbatStart": location.shabbat_start,
        "shabbatEnd": location.shabbat_end,
        "shabbatStartInHomeTime": entry.start.text,
        "shabbatEndInHomeTime": entry.end.text,
        "startConversion": entry.start.to_dict(),
        "endConversion": entry.end.to_dict(),
        "date": location.observed_date.isoformat(),
    }
    if location.latitude is not None and location.longitude is not None:
        result["coordinates"] = {"lat": location.latitude, "lng": location.longitude}
    return result


def build_shabbat_times_from_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Pure logic function that:
    - Receives a dict representing the JSON payload of a request
    - Returns the JSON-ready response with every location's times and the summary.

    Expected payload structure:
    {
      "homeLocation": "San Juan, Puerto Rico",   # required, always first
      "locations": ["London", "10001"]           # at least one
    }

    Raises:
        ValueError: For an invalid payload
        LocationLookupError: If any location cannot be looked up
    """
    locations = _collect_locations(payload or {})
    print(f"Processing locations: {locations}")

    location_times = fetch_all_shabbat_times(locations)
    source = get_offset_source()
    summary = summarize(location_times, location_times[0].timezone, source)

    earliest = summary.earliest_start
    latest = summary.latest_end
    return {
        "currentDate": format_long_date(location_times[0].observed_date),
        "offsetSource": source,
        "locations": [_location_to_dict(entry) for entry in summary.home_relative],
        "summary": {
            "earliestStart": earliest.describe(),
            "latestEnd": latest.describe(),
            "earliestStartTime": earliest.home_time,
            "latestEndTime": latest.home_time,
            "earliestStartInHomeTime": earliest.home_time,
            "latestEndInHomeTime": latest.home_time,
            "earliestStartLocation": earliest.location.name,
            "latestEndLocation": latest.location.name,
            "earliestStartApproximated": earliest.approximated,
            "latestEndApproximated": latest.approximated,
            "earliestStartStatus": earliest.status,
            "latestEndStatus": latest.status,
        },
    }


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function entrypoint for Shabbat times comparison."""

    def _send_json(self, status: int, body: Dict[str, Any]) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.end_headers()
        self.wfile.write(json.dumps(body, ensure_ascii=False).encode("utf-8"))

    def do_POST(self):
        try:
            content_length = int(self.headers.get("Content-Length", 0))
            body = self.rfile.read(content_length) if content_length > 0 else b"{}"
            payload = json.loads(body.decode("utf-8"))
            if not isinstance(payload, dict):
                raise ValueError("Request body must be a JSON object")

            self._send_json(200, build_shabbat_times_from_payload(payload))

        except (ValueError, LocationLookupError) as e:
            print(f"Error fetching Shabbat times: {e}")
            self._send_json(400, {"message": str(e)})
        except Exception as e:
            print(f"Error fetching Shabbat times: {e}")
            self._send_json(500, {"message": f"Failed to fetch Shabbat times: {e}"})
