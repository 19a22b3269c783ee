"""Assemble renderable 3D geometry from a GPS track.

The pipeline runs in fixed order: bounds, projection, cumulative distance,
grade segments, colors, then a single read-only pass that emits the line and
fill buffers, the markers and the summary stats.
"""

import logging
import math
from dataclasses import dataclass, field

from gpx_track3d.bounds import extract_bounds
from gpx_track3d.color import color_strategy, darken
from gpx_track3d.distance import cumulative_distances, meters_to_miles
from gpx_track3d.grade import point_grades, segment_grades
from gpx_track3d.models import (
    ColorSample,
    GeometryOptions,
    Marker,
    MarkerKind,
    ProjectedPoint,
    TrackGeometry,
    TrackPoint,
    TrackStats,
)
from gpx_track3d.projection import project_center, project_track, recommended_camera_height

logger = logging.getLogger(__name__)


@dataclass
class _Assembly:
    """Running state of the assembly pass."""
    line_positions: list[float] = field(default_factory=list)
    line_colors: list[float] = field(default_factory=list)
    fill_positions: list[float] = field(default_factory=list)
    fill_colors: list[float] = field(default_factory=list)
    milestones: list[Marker] = field(default_factory=list)
    last_mile: int = 0
    peak_index: int = 0
    elevation_gain: float = 0.0
    elevation_loss: float = 0.0


def _add_curtain(
    acc: _Assembly,
    pos_a: ProjectedPoint,
    pos_b: ProjectedPoint,
    color_a: ColorSample,
    color_b: ColorSample,
) -> None:
    """Append the two triangles joining a track step to the ground plane."""
    ground_a = pos_a.grounded()
    ground_b = pos_b.grounded()
    fill_a = darken(color_a)
    fill_b = darken(color_b)

    for vertex, color in (
        (ground_a, fill_a), (ground_b, fill_b), (pos_a, fill_a),
        (pos_a, fill_a), (ground_b, fill_b), (pos_b, fill_b),
    ):
        acc.fill_positions.extend(vertex.as_tuple())
        acc.fill_colors.extend(color.as_tuple())


def _check_finite(name: str, values: list[float]) -> None:
    for i, v in enumerate(values):
        if not math.isfinite(v):
            raise ValueError(f"Non-finite value in {name} at offset {i}: {v!r}")


def build_track_geometry(
    points: list[TrackPoint], options: GeometryOptions | None = None
) -> TrackGeometry:
    """Build line, fill mesh, markers and stats for a track.

    Args:
        points: Track points in travel order
        options: Projection, coloring and segmentation settings

    Returns:
        A complete TrackGeometry.

    Raises:
        EmptyTrackError: if points is empty.
        InvalidTrackPointError: if a coordinate is NaN or infinite.
    """
    if options is None:
        options = GeometryOptions()

    bounds = extract_bounds(points, stacklevel=3)
    projected = project_track(points, bounds, options.flip_x, options.flip_z, options.scale)
    distances = cumulative_distances(points)
    segments = segment_grades(points, distances, options.segment_length_meters)
    grades = point_grades(segments, len(points))
    colorize = color_strategy(options.color_mode, bounds)
    colors = [colorize(pt, grade) for pt, grade in zip(points, grades)]

    acc = _Assembly()
    for i, (pt, pos, dist, color) in enumerate(zip(points, projected, distances, colors)):
        acc.line_positions.extend(pos.as_tuple())
        acc.line_colors.extend(color.as_tuple())

        if pt.elevation > points[acc.peak_index].elevation:
            acc.peak_index = i

        if i == 0:
            continue

        _add_curtain(acc, projected[i - 1], pos, colors[i - 1], color)

        delta = pt.elevation - points[i - 1].elevation
        if delta > 0:
            acc.elevation_gain += delta
        else:
            acc.elevation_loss -= delta

        mile = math.floor(meters_to_miles(dist.cumulative_meters))
        if mile > acc.last_mile:
            number = len(acc.milestones) + 1
            acc.milestones.append(Marker(
                kind=MarkerKind.MILESTONE,
                index=i,
                position=pos,
                label=f"Mile {number}",
                mile=number,
            ))
            acc.last_mile = mile

    last = len(points) - 1
    peak = points[acc.peak_index]
    markers = (
        [Marker(kind=MarkerKind.START, index=0, position=projected[0], label="Start")]
        + acc.milestones
        + [
            Marker(
                kind=MarkerKind.PEAK_ELEVATION,
                index=acc.peak_index,
                position=projected[acc.peak_index],
                label=f"Peak {peak.elevation:.0f} m",
            ),
            Marker(kind=MarkerKind.END, index=last, position=projected[last], label="End"),
        ]
    )

    total_distance = distances[-1].cumulative_meters
    stats = TrackStats(
        total_distance_meters=total_distance,
        peak_elevation=peak.elevation,
        peak_elevation_mile=meters_to_miles(distances[acc.peak_index].cumulative_meters),
        peak_index=acc.peak_index,
        elevation_gain=acc.elevation_gain,
        elevation_loss=acc.elevation_loss,
        milestone_count=len(acc.milestones),
    )

    for name, values in (
        ("line positions", acc.line_positions),
        ("line colors", acc.line_colors),
        ("fill positions", acc.fill_positions),
        ("fill colors", acc.fill_colors),
    ):
        _check_finite(name, values)

    logger.debug(
        "Built geometry: %d vertices, %d fill vertices, %d milestones, %.0fm",
        len(points), len(acc.fill_positions) // 3, len(acc.milestones), total_distance,
    )

    return TrackGeometry(
        line_positions=tuple(acc.line_positions),
        line_colors=tuple(acc.line_colors),
        fill_positions=tuple(acc.fill_positions),
        fill_colors=tuple(acc.fill_colors),
        markers=tuple(markers),
        stats=stats,
        grade_segments=tuple(segments),
        center=project_center(bounds, options.flip_x, options.flip_z, options.scale),
        recommended_camera_height=recommended_camera_height(bounds, options.scale),
        bounds=bounds,
        color_mode=options.color_mode,
        options=options,
    )
