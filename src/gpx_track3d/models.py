import math
from dataclasses import dataclass, field
from enum import Enum

METERS_PER_MILE = 1609.34


@dataclass(frozen=True)
class TrackPoint:
    lat: float  # degrees
    lon: float  # degrees
    elevation: float  # meters


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float
    min_ele: float
    max_ele: float

    @property
    def elevation_range(self) -> float:
        return self.max_ele - self.min_ele

    @property
    def is_flat(self) -> bool:
        return self.max_ele == self.min_ele

    def degenerate_axes(self) -> list[str]:
        """Names of the axes whose extent is zero."""
        axes = []
        if self.max_lat == self.min_lat:
            axes.append("latitude")
        if self.max_lon == self.min_lon:
            axes.append("longitude")
        if self.max_ele == self.min_ele:
            axes.append("elevation")
        return axes


@dataclass(frozen=True)
class ProjectedPoint:
    x: float
    y: float  # elevation above the track minimum
    z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def grounded(self) -> "ProjectedPoint":
        """The same point dropped onto the y=0 reference plane."""
        return ProjectedPoint(self.x, 0.0, self.z)


@dataclass(frozen=True)
class DistanceSample:
    point_index: int
    cumulative_meters: float


@dataclass(frozen=True)
class GradeSegment:
    start_index: int
    end_index: int  # inclusive
    grade_percent: float
    length_meters: float


@dataclass(frozen=True)
class ColorSample:
    r: float
    g: float
    b: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)


class ColorMode(str, Enum):
    ELEVATION = "elevation"
    GRADE = "grade"


class MarkerKind(str, Enum):
    START = "start"
    END = "end"
    MILESTONE = "milestone"
    PEAK_ELEVATION = "peak_elevation"


@dataclass(frozen=True)
class Marker:
    kind: MarkerKind
    index: int  # track point index the marker is attached to
    position: ProjectedPoint
    label: str
    mile: int | None = None  # milestone sequence number, 1-based


@dataclass(frozen=True)
class GeometryOptions:
    flip_x: int = 1
    flip_z: int = 1
    scale: float = 100_000.0  # scene units per degree
    color_mode: ColorMode = ColorMode.ELEVATION
    segment_length_meters: float = METERS_PER_MILE

    def __post_init__(self):
        if self.flip_x not in (1, -1):
            raise ValueError(f"flip_x must be 1 or -1, got {self.flip_x!r}")
        if self.flip_z not in (1, -1):
            raise ValueError(f"flip_z must be 1 or -1, got {self.flip_z!r}")
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ValueError(f"scale must be a positive number, got {self.scale!r}")
        if not math.isfinite(self.segment_length_meters) or self.segment_length_meters <= 0:
            raise ValueError(
                f"segment_length_meters must be a positive number, got {self.segment_length_meters!r}"
            )
        # Accept plain strings ("grade") from config files and the CLI
        object.__setattr__(self, "color_mode", ColorMode(self.color_mode))


@dataclass(frozen=True)
class TrackStats:
    total_distance_meters: float
    peak_elevation: float  # meters
    peak_elevation_mile: float  # distance from start to the peak, in miles
    peak_index: int
    elevation_gain: float  # meters
    elevation_loss: float  # meters
    milestone_count: int


@dataclass(frozen=True)
class TrackGeometry:
    """Renderable output of the geometry builder.

    Buffers are flat: positions hold x, y, z triples and colors hold r, g, b
    triples. The fill buffers hold two triangles (six vertices) per pair of
    consecutive track points.
    """
    line_positions: tuple[float, ...]
    line_colors: tuple[float, ...]
    fill_positions: tuple[float, ...]
    fill_colors: tuple[float, ...]
    markers: tuple[Marker, ...]
    stats: TrackStats
    grade_segments: tuple[GradeSegment, ...]
    center: ProjectedPoint
    recommended_camera_height: float
    bounds: Bounds
    color_mode: ColorMode
    options: GeometryOptions = field(default_factory=GeometryOptions)

    @property
    def vertex_count(self) -> int:
        return len(self.line_positions) // 3

    @property
    def fill_vertex_count(self) -> int:
        return len(self.fill_positions) // 3

    def markers_of(self, kind: MarkerKind) -> list[Marker]:
        return [m for m in self.markers if m.kind == kind]

    def to_dict(self) -> dict:
        """JSON-ready representation with a stable key order."""
        return {
            "color_mode": self.color_mode.value,
            "options": {
                "flip_x": self.options.flip_x,
                "flip_z": self.options.flip_z,
                "scale": self.options.scale,
                "segment_length_meters": self.options.segment_length_meters,
            },
            "bounds": {
                "min_lat": self.bounds.min_lat,
                "max_lat": self.bounds.max_lat,
                "min_lon": self.bounds.min_lon,
                "max_lon": self.bounds.max_lon,
                "min_ele": self.bounds.min_ele,
                "max_ele": self.bounds.max_ele,
            },
            "center": list(self.center.as_tuple()),
            "recommended_camera_height": self.recommended_camera_height,
            "line": {
                "positions": list(self.line_positions),
                "colors": list(self.line_colors),
            },
            "fill": {
                "positions": list(self.fill_positions),
                "colors": list(self.fill_colors),
            },
            "markers": [
                {
                    "kind": m.kind.value,
                    "index": m.index,
                    "position": list(m.position.as_tuple()),
                    "label": m.label,
                    "mile": m.mile,
                }
                for m in self.markers
            ],
            "grade_segments": [
                {
                    "start_index": s.start_index,
                    "end_index": s.end_index,
                    "grade_percent": s.grade_percent,
                    "length_meters": s.length_meters,
                }
                for s in self.grade_segments
            ],
            "stats": {
                "total_distance_meters": self.stats.total_distance_meters,
                "peak_elevation": self.stats.peak_elevation,
                "peak_elevation_mile": self.stats.peak_elevation_mile,
                "peak_index": self.stats.peak_index,
                "elevation_gain": self.stats.elevation_gain,
                "elevation_loss": self.stats.elevation_loss,
                "milestone_count": self.stats.milestone_count,
            },
        }
