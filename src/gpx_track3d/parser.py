import logging

import gpxpy
import gpxpy.gpx

from gpx_track3d.models import TrackPoint

logger = logging.getLogger(__name__)


def _to_track_points(gpx: gpxpy.gpx.GPX) -> list[TrackPoint]:
    raw = [
        pt
        for track in gpx.tracks
        for segment in track.segments
        for pt in segment.points
    ]
    if not raw:
        # Files exported from route planners often carry only <rte> points
        raw = [pt for route in gpx.routes for pt in route.points]

    points: list[TrackPoint] = []
    missing = 0
    for pt in raw:
        elevation = pt.elevation
        if elevation is None:
            missing += 1
            elevation = 0.0
        points.append(TrackPoint(lat=pt.latitude, lon=pt.longitude, elevation=elevation))

    if missing:
        logger.warning("%d of %d points have no elevation; using 0 m", missing, len(points))
    return points


def parse_gpx_text(text: str) -> list[TrackPoint]:
    """Parse GPX content and return its points in order."""
    return _to_track_points(gpxpy.parse(text))


def parse_gpx(filepath: str) -> list[TrackPoint]:
    """Parse a GPX file and return a list of TrackPoints."""
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)
    return _to_track_points(gpx)
