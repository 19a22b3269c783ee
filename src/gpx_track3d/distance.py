"""Distance accumulation along a track.

Haversine on a spherical Earth is accurate to well under 1% at track scale,
and every consumer (grade segments, milestones, stats) reads the cumulative
distances produced here rather than measuring on its own.
"""

import math

from gpx_track3d.models import METERS_PER_MILE, DistanceSample, TrackPoint

# Earth's mean radius in meters
EARTH_RADIUS_M = 6_371_000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points using Haversine formula.

    Args:
        lat1, lon1: First point coordinates in degrees
        lat2, lon2: Second point coordinates in degrees

    Returns:
        Distance in meters
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Rounding can push a fractionally above 1 for antipodal points
    c = 2 * math.asin(math.sqrt(min(a, 1.0)))

    return EARTH_RADIUS_M * c


def cumulative_distances(points: list[TrackPoint]) -> list[DistanceSample]:
    """Cumulative distance from the first point to each point, in meters.

    Returns one sample per point; the first is always 0.
    """
    if not points:
        return []

    samples = [DistanceSample(point_index=0, cumulative_meters=0.0)]
    total = 0.0
    for i in range(1, len(points)):
        total += haversine_distance(
            points[i - 1].lat, points[i - 1].lon,
            points[i].lat, points[i].lon,
        )
        samples.append(DistanceSample(point_index=i, cumulative_meters=total))
    return samples


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE
