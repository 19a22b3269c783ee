"""Formatting utilities for display."""

from gpx_track3d.distance import meters_to_miles

FEET_PER_METER = 3.28084


def format_distance(meters: float) -> str:
    """Format meters as 'X.XX km (Y.YY mi)'."""
    return f"{meters / 1000:.2f} km ({meters_to_miles(meters):.2f} mi)"


def format_elevation(meters: float) -> str:
    """Format meters as 'X m (Y ft)'."""
    return f"{meters:.0f} m ({meters * FEET_PER_METER:.0f} ft)"


def format_grade(grade_percent: float) -> str:
    sign = "+" if grade_percent > 0 else ""
    return f"{sign}{grade_percent:.1f}%"
