import logging
import math
import warnings

from gpx_track3d.errors import DegenerateBoundsWarning, EmptyTrackError, InvalidTrackPointError
from gpx_track3d.models import Bounds, TrackPoint

logger = logging.getLogger(__name__)


def extract_bounds(points: list[TrackPoint], stacklevel: int = 2) -> Bounds:
    """Find the latitude, longitude and elevation extents of a track.

    Raises EmptyTrackError for an empty track and InvalidTrackPointError when a
    coordinate is NaN or infinite. Emits DegenerateBoundsWarning when an axis
    has zero extent; stacklevel is passed to warnings.warn so wrappers can
    attribute the warning to their own caller.
    """
    if not points:
        raise EmptyTrackError()

    first = points[0]
    min_lat = max_lat = first.lat
    min_lon = max_lon = first.lon
    min_ele = max_ele = first.elevation

    for i, pt in enumerate(points):
        for name, value in (("lat", pt.lat), ("lon", pt.lon), ("elevation", pt.elevation)):
            if not math.isfinite(value):
                raise InvalidTrackPointError(i, name, value)
        min_lat = min(min_lat, pt.lat)
        max_lat = max(max_lat, pt.lat)
        min_lon = min(min_lon, pt.lon)
        max_lon = max(max_lon, pt.lon)
        min_ele = min(min_ele, pt.elevation)
        max_ele = max(max_ele, pt.elevation)

    bounds = Bounds(
        min_lat=min_lat,
        max_lat=max_lat,
        min_lon=min_lon,
        max_lon=max_lon,
        min_ele=min_ele,
        max_ele=max_ele,
    )

    degenerate = bounds.degenerate_axes()
    if degenerate:
        logger.debug("Degenerate track bounds on %s", ", ".join(degenerate))
        warnings.warn(
            f"All track points share the same {', '.join(degenerate)}",
            DegenerateBoundsWarning,
            stacklevel=stacklevel,
        )

    return bounds
