"""Fixed-length grade segmentation.

The track is cut into consecutive segments of roughly equal length (measured
along the track) and each segment gets the average grade between its end
points. Segment boundaries always fall on track points, so a segment is at
least `segment_length_meters` long except for the last one.
"""

import logging

from gpx_track3d.models import METERS_PER_MILE, DistanceSample, GradeSegment, TrackPoint

logger = logging.getLogger(__name__)

# Finer segmentation: twenty segments per mile
FINE_SEGMENT_METERS = METERS_PER_MILE / 20


def segment_grades(
    points: list[TrackPoint],
    distances: list[DistanceSample],
    segment_length_meters: float = METERS_PER_MILE,
) -> list[GradeSegment]:
    """Partition the track into segments and compute their average grade (%).

    A segment closes once the distance walked since the previous boundary
    reaches segment_length_meters, or at the final point. A segment with zero
    length (only duplicate coordinates) gets a grade of 0.
    """
    if len(points) != len(distances):
        raise ValueError(
            f"Expected one distance sample per point, got {len(distances)} for {len(points)} points"
        )
    if len(points) < 2:
        return []

    segments: list[GradeSegment] = []
    start = 0
    accumulated = 0.0
    last = len(points) - 1

    for i in range(1, len(points)):
        accumulated += distances[i].cumulative_meters - distances[i - 1].cumulative_meters
        if accumulated < segment_length_meters and i != last:
            continue

        if accumulated > 0:
            grade = (points[i].elevation - points[start].elevation) / accumulated * 100
        else:
            grade = 0.0
        segments.append(GradeSegment(
            start_index=start,
            end_index=i,
            grade_percent=grade,
            length_meters=accumulated,
        ))
        start = i
        accumulated = 0.0

    logger.debug(
        "Split %d points into %d grade segments of %.1fm",
        len(points), len(segments), segment_length_meters,
    )
    return segments


class GradeCursor:
    """Looks up the segment containing a point index.

    Queries must come in non-decreasing index order; the cursor only moves
    forward, so a full pass over the track is O(n + segments).
    """

    def __init__(self, segments: list[GradeSegment]):
        self._segments = segments
        self._pos = 0
        self._last_index = -1

    def grade_at(self, index: int) -> float:
        if index < self._last_index:
            raise ValueError(f"GradeCursor moved backwards: {index} after {self._last_index}")
        self._last_index = index

        if not self._segments:
            return 0.0
        while self._pos < len(self._segments) - 1 and self._segments[self._pos].end_index < index:
            self._pos += 1
        return self._segments[self._pos].grade_percent


def point_grades(segments: list[GradeSegment], point_count: int) -> list[float]:
    """Grade (%) of the segment each point belongs to.

    Boundary points belong to the segment they close; the first point belongs
    to the first segment.
    """
    cursor = GradeCursor(segments)
    return [cursor.grade_at(i) for i in range(point_count)]
