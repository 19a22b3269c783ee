"""Equirectangular projection of track points into local scene coordinates.

Longitude and latitude offsets from the track's south-west corner are scaled
linearly, so east-west distances are stretched by 1/cos(latitude). That is
acceptable for tracks covering a small area and is not a geodesic projection.
"""

from gpx_track3d.models import Bounds, ProjectedPoint, TrackPoint

DEFAULT_SCALE = 100_000.0  # scene units per degree

# Floor for the suggested initial camera height, in scene units
MIN_CAMERA_HEIGHT = 200.0


def project_point(
    point: TrackPoint,
    bounds: Bounds,
    flip_x: int = 1,
    flip_z: int = 1,
    scale: float = DEFAULT_SCALE,
) -> ProjectedPoint:
    """Map a geographic point to scene coordinates.

    x follows longitude, z follows latitude, y is elevation above the
    track minimum (in meters, unscaled).
    """
    return ProjectedPoint(
        x=flip_x * (point.lon - bounds.min_lon) * scale,
        y=point.elevation - bounds.min_ele,
        z=flip_z * (point.lat - bounds.min_lat) * scale,
    )


def project_track(
    points: list[TrackPoint],
    bounds: Bounds,
    flip_x: int = 1,
    flip_z: int = 1,
    scale: float = DEFAULT_SCALE,
) -> list[ProjectedPoint]:
    return [project_point(pt, bounds, flip_x, flip_z, scale) for pt in points]


def project_center(
    bounds: Bounds,
    flip_x: int = 1,
    flip_z: int = 1,
    scale: float = DEFAULT_SCALE,
) -> ProjectedPoint:
    """Project the center of the bounding box, for use as a camera target."""
    center = TrackPoint(
        lat=(bounds.min_lat + bounds.max_lat) / 2,
        lon=(bounds.min_lon + bounds.max_lon) / 2,
        elevation=(bounds.min_ele + bounds.max_ele) / 2,
    )
    return project_point(center, bounds, flip_x, flip_z, scale)


def recommended_camera_height(bounds: Bounds, scale: float = DEFAULT_SCALE) -> float:
    """Suggest an initial camera height that keeps the whole track in view."""
    horizontal_span = max(
        (bounds.max_lon - bounds.min_lon) * scale,
        (bounds.max_lat - bounds.min_lat) * scale,
    )
    return max(horizontal_span * 0.5, bounds.elevation_range * 2, MIN_CAMERA_HEIGHT)
