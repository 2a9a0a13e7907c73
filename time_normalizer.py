"""
Cross-location Shabbat time normalization.

Converts 12-hour clock strings ("6:46 PM") between named timezones and reduces
a set of per-location Shabbat times to the globally earliest start and latest
end, expressed relative to the home location's timezone.

Every conversion carries a status so callers can tell an exact result from an
approximated or failed one:

    exact         both offsets were known
    approximated  an unknown timezone was treated as UTC (reduction only)
    failed        the time could not be parsed or an offset was missing
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from timezones import get_offset

STATUS_EXACT = "exact"
STATUS_APPROXIMATED = "approximated"
STATUS_FAILED = "failed"

UNAVAILABLE_SUFFIX = "(timezone conversion unavailable)"

HOME_START_DAY = "Friday"
HOME_END_DAY = "Saturday"

_TIME_PATTERN = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)", re.IGNORECASE)


# ========= VALUE TYPES =========

@dataclass(frozen=True)
class ClockTime:
    """A wall-clock time (24-hour internally) with a day adjustment of -1, 0 or +1."""

    hour: int
    minute: int
    day_offset: int = 0

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def to_12_hour(self) -> str:
        """Render as "H:MM AM|PM", with "(+1 day)" / "(-1 day)" when the day changed."""
        if self.hour == 0:
            display_hour, meridiem = 12, "AM"
        elif self.hour == 12:
            display_hour, meridiem = 12, "PM"
        elif self.hour > 12:
            display_hour, meridiem = self.hour - 12, "PM"
        else:
            display_hour, meridiem = self.hour, "AM"

        text = f"{display_hour}:{self.minute:02d} {meridiem}"
        if self.day_offset > 0:
            text += f" (+{self.day_offset} day)"
        elif self.day_offset < 0:
            text += f" (-{abs(self.day_offset)} day)"
        return text

    def __str__(self) -> str:
        return self.to_12_hour()


@dataclass(frozen=True)
class Conversion:
    """Outcome of expressing one time in another timezone."""

    text: str
    status: str
    day_offset: int = 0

    def to_dict(self) -> dict:
        return {"text": self.text, "status": self.status, "dayOffset": self.day_offset}


@dataclass(frozen=True)
class LocationTime:
    """Shabbat times for one location, as reported by the calendar provider."""

    name: str
    timezone: str
    shabbat_start: str
    shabbat_end: str
    observed_date: date
    query: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(frozen=True)
class HomeRelativeTimes:
    """A location's start and end re-expressed in the home timezone."""

    location: LocationTime
    start: Conversion
    end: Conversion


@dataclass(frozen=True)
class SummaryPick:
    """The location chosen for one side of the summary."""

    location: LocationTime
    local_time: str
    home_time: str
    approximated: bool = False

    @property
    def status(self) -> str:
        return STATUS_APPROXIMATED if self.approximated else STATUS_EXACT

    def describe(self) -> str:
        """Raw local time labelled with its location, e.g. "6:46 PM (San Juan time)"."""
        return f"{self.local_time} ({self.location.name} time)"


@dataclass(frozen=True)
class SummaryResult:
    earliest_start: SummaryPick
    latest_end: SummaryPick
    home_relative: Tuple[HomeRelativeTimes, ...]


# ========= PARSING AND SHIFTING =========

def parse_clock_time(time_str: Optional[str]) -> Optional[ClockTime]:
    """
    Parse an "H:MM AM|PM" string into a 24-hour ClockTime.

    Args:
        time_str: Time such as "6:46 PM" or "7:01pm"

    Returns:
        ClockTime, or None if the string is not a valid 12-hour time
    """
    if not time_str:
        return None

    match = _TIME_PATTERN.search(time_str)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    meridiem = match.group(3).upper()
    if not 1 <= hours <= 12 or minutes > 59:
        return None

    # Convert to 24-hour format
    if meridiem == "PM" and hours != 12:
        hours += 12
    if meridiem == "AM" and hours == 12:
        hours = 0
    return ClockTime(hours, minutes)


def shift_clock_time(clock: ClockTime, hours_diff: float) -> ClockTime:
    """
    Move a clock time by a (possibly fractional) number of hours.

    The difference is split into whole hours and leftover minutes; minutes carry
    into or borrow from the hour, and an hour outside [0, 24) wraps with a day
    adjustment.
    """
    whole_hours = int(hours_diff)  # truncates toward zero
    extra_minutes = round((hours_diff - whole_hours) * 60)

    hour = clock.hour + whole_hours
    minute = clock.minute + extra_minutes
    if minute >= 60:
        minute -= 60
        hour += 1
    elif minute < 0:
        minute += 60
        hour -= 1

    day_offset = 0
    if hour >= 24:
        hour -= 24
        day_offset = 1
    elif hour < 0:
        hour += 24
        day_offset = -1

    return ClockTime(hour, minute, day_offset)


# ========= CONVERSION =========

def convert_clock_time(
    time_str: str,
    on_date: Optional[date],
    from_tz: str,
    to_tz: str,
    source: Optional[str] = None,
) -> Conversion:
    """
    Express time_str, measured in from_tz, as a wall-clock time in to_tz.

    Never raises for a well-formed call: an unparseable time comes back
    unchanged and an unknown timezone comes back annotated, both with
    status "failed".
    """
    clock = parse_clock_time(time_str)
    if clock is None:
        return Conversion(time_str, STATUS_FAILED)

    from_offset = get_offset(from_tz, on_date, source)
    to_offset = get_offset(to_tz, on_date, source)
    if from_offset is None or to_offset is None:
        return Conversion(f"{time_str} {UNAVAILABLE_SUFFIX}", STATUS_FAILED)

    shifted = shift_clock_time(clock, to_offset - from_offset)
    return Conversion(shifted.to_12_hour(), STATUS_EXACT, shifted.day_offset)


def convert_time(
    time_str: str,
    on_date: Optional[date],
    from_tz: str,
    to_tz: str,
    source: Optional[str] = None,
) -> str:
    """Convert a "H:MM AM|PM" string from one timezone to another; see convert_clock_time."""
    return convert_clock_time(time_str, on_date, from_tz, to_tz, source).text


def utc_minutes(
    time_str: str,
    tz_name: str,
    on_date: Optional[date] = None,
    source: Optional[str] = None,
) -> Optional[Tuple[float, bool]]:
    """
    Minutes since UTC midnight for a local time.

    Returns:
        (minutes, approximated) where approximated is True when tz_name had no
        known offset and UTC was assumed, or None if time_str does not parse
    """
    clock = parse_clock_time(time_str)
    if clock is None:
        return None

    offset = get_offset(tz_name, on_date, source)
    approximated = offset is None
    if approximated:
        offset = 0
    return clock.minutes_since_midnight - offset * 60, approximated


# ========= SUMMARY =========

def home_relative_times(
    locations: Sequence[LocationTime],
    home_timezone: str,
    source: Optional[str] = None,
) -> List[HomeRelativeTimes]:
    """Home-relative start/end for every location; the first location is home."""
    results = []
    for index, location in enumerate(locations):
        if index == 0:
            start = Conversion(f"{location.shabbat_start} {HOME_START_DAY}", STATUS_EXACT)
            end = Conversion(f"{location.shabbat_end} {HOME_END_DAY}", STATUS_EXACT)
        else:
            start = convert_clock_time(
                location.shabbat_start, location.observed_date,
                location.timezone, home_timezone, source,
            )
            end = convert_clock_time(
                location.shabbat_end, location.observed_date,
                location.timezone, home_timezone, source,
            )
        results.append(HomeRelativeTimes(location, start, end))
    return results


def _summary_minutes(
    location: LocationTime,
    source: Optional[str],
) -> Tuple[Optional[Tuple[float, bool]], Optional[Tuple[float, bool]]]:
    """UTC minutes of a location's start and end, warning once about any degradation."""
    start = utc_minutes(location.shabbat_start, location.timezone, location.observed_date, source)
    end = utc_minutes(location.shabbat_end, location.timezone, location.observed_date, source)

    if start is None or end is None:
        print(f"Warning: Could not parse Shabbat times for {location.name}; "
              "leaving them out of the summary")
    if any(value is not None and value[1] for value in (start, end)):
        print(f"Warning: No UTC offset for timezone '{location.timezone}' ({location.name}); "
              "assuming UTC for the summary")
    return start, end


def _pick_extreme(
    relative: Sequence[HomeRelativeTimes],
    minutes: Sequence[Optional[Tuple[float, bool]]],
    local_time: Callable[[LocationTime], str],
    home_time: Callable[[HomeRelativeTimes], Conversion],
    latest: bool,
) -> SummaryPick:
    best_index = None
    best_minutes = None
    best_approximated = False

    for index, value in enumerate(minutes):
        if value is None:
            continue

        value_minutes, approximated = value
        # Strict comparison keeps the first occurrence on ties
        if best_minutes is None or (value_minutes > best_minutes if latest else value_minutes < best_minutes):
            best_index = index
            best_minutes = value_minutes
            best_approximated = approximated

    if best_index is None:
        best_index = 0
        best_approximated = True

    chosen = relative[best_index]
    return SummaryPick(
        location=chosen.location,
        local_time=local_time(chosen.location),
        home_time=home_time(chosen).text,
        approximated=best_approximated,
    )


def summarize(
    locations: Sequence[LocationTime],
    home_timezone: Optional[str] = None,
    source: Optional[str] = None,
) -> SummaryResult:
    """
    Find the earliest Shabbat start and latest Shabbat end across locations.

    Args:
        locations: Per-location times; locations[0] is the home location
        home_timezone: Timezone to express results in (defaults to home's)
        source: Offset source override ("static" or "tzdb")

    Returns:
        SummaryResult with the chosen locations and every location's
        home-relative times
    """
    if not locations:
        raise ValueError("At least one location is required")
    if home_timezone is None:
        home_timezone = locations[0].timezone

    relative = home_relative_times(locations, home_timezone, source)
    start_minutes, end_minutes = zip(*(_summary_minutes(location, source) for location in locations))

    earliest = _pick_extreme(
        relative, start_minutes, lambda loc: loc.shabbat_start, lambda entry: entry.start,
        latest=False,
    )
    latest = _pick_extreme(
        relative, end_minutes, lambda loc: loc.shabbat_end, lambda entry: entry.end,
        latest=True,
    )
    return SummaryResult(earliest, latest, tuple(relative))
