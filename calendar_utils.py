"""
Calendar utility functions.

Helpers for formatting the Shabbat a response refers to.
"""

from datetime import date


def format_long_date(d: date) -> str:
    """Format a date as "Friday, October 23, 2026"."""
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"
