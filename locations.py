"""
Location resolution for Hebcal lookups.

Maps user-supplied location text (free-text names or US postal codes) to the
query parameters the Hebcal Shabbat API needs, and provides the suggestion
list used by the location autocomplete box.
"""

import re
from typing import Dict, List, Optional

from config import SUGGESTION_LIMIT, SUGGESTION_MIN_CHARS

# Type aliases for clarity
LocationMapping = Dict[str, str]
Suggestion = Dict[str, str]

# Location-specific zip codes and city mappings for accurate Hebcal API calls.
# Keys are lower-cased user input.
LOCATION_MAPPINGS: Dict[str, LocationMapping] = {
    "san juan, puerto rico": {"zip": "00901"},
    "puerto rico": {"zip": "00901"},
    "san juan": {"zip": "00901"},
    "new york, ny": {"zip": "10001"},
    "new york": {"zip": "10001"},
    "london, uk": {"city": "London", "country": "UK"},
    "london": {"city": "London", "country": "UK"},
    "istanbul, turkey": {"city": "Istanbul", "country": "Turkey"},
    "istanbul": {"city": "Istanbul", "country": "Turkey"},
    "lisbon, portugal": {"city": "Lisbon", "country": "Portugal"},
    "lisbon": {"city": "Lisbon", "country": "Portugal"},
    # Direct zip code mappings
    "00901": {"zip": "00901"},
    "00911": {"zip": "00911"},
    "00912": {"zip": "00912"},
    "10001": {"zip": "10001"},
    "11223": {"zip": "11223"},
    "78640": {"zip": "78640"},
}

# Labels offered by the autocomplete box
KNOWN_LOCATIONS: List[str] = [
    "San Juan, Puerto Rico",
    "New York, NY",
    "Brooklyn, NY",
    "Kyle, TX",
    "Chicago, IL",
    "Los Angeles, CA",
    "Miami, FL",
    "Toronto, Canada",
    "London, UK",
    "Paris, France",
    "Lisbon, Portugal",
    "Istanbul, Turkey",
    "Jerusalem, Israel",
    "Tel Aviv, Israel",
    "Mumbai, India",
    "Sydney, Australia",
    "Buenos Aires, Argentina",
]

_ZIP_PATTERN = re.compile(r"^\d{5}$")


def is_zip_code(location: str) -> bool:
    """Check whether the input looks like a five-digit US postal code."""
    return bool(_ZIP_PATTERN.match(location.strip()))


def get_location_mapping(location: str) -> Optional[LocationMapping]:
    """Get the static mapping for a location name, if one exists."""
    return LOCATION_MAPPINGS.get(location.lower().strip())


def resolve_location(location: str) -> Dict[str, str]:
    """
    Build the Hebcal geolocation query parameters for a location.

    Postal codes use geo=zip directly. Mapped names use their zip code or
    "city, country" string; anything else is passed through as free text.

    Args:
        location: Free-text location name or postal code

    Returns:
        Dict of query parameters (geo plus zip or pos)

    Raises:
        ValueError: If the location is empty
    """
    if not location or not location.strip():
        raise ValueError("Location must not be empty")

    if is_zip_code(location):
        return {"geo": "zip", "zip": location.strip()}

    mapping = get_location_mapping(location)
    if mapping and mapping.get("zip"):
        return {"geo": "zip", "zip": mapping["zip"]}
    if mapping and mapping.get("city") and mapping.get("country"):
        return {"geo": "pos", "pos": f"{mapping['city']}, {mapping['country']}"}
    return {"geo": "pos", "pos": location.strip()}


def suggest_locations(query: str, limit: Optional[int] = None) -> List[Suggestion]:
    """
    Suggest known locations matching a partial query.

    Matching is case-insensitive; labels starting with the query come before
    labels that merely contain it.

    Args:
        query: Text typed so far
        limit: Maximum number of suggestions (defaults to SUGGESTION_LIMIT)

    Returns:
        List of {"value", "label"} dicts, empty for queries that are too short
    """
    if limit is None:
        limit = SUGGESTION_LIMIT

    needle = (query or "").strip().lower()
    if len(needle) < SUGGESTION_MIN_CHARS:
        return []

    prefix_matches = []
    other_matches = []
    for label in KNOWN_LOCATIONS:
        lowered = label.lower()
        if lowered.startswith(needle):
            prefix_matches.append(label)
        elif needle in lowered:
            other_matches.append(label)

    return [{"value": label, "label": label} for label in (prefix_matches + other_matches)[:limit]]
