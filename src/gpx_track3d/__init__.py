"""GPX Track3D - Build annotated 3D geometry from GPS tracks."""

import subprocess

from gpx_track3d.errors import DegenerateBoundsWarning, EmptyTrackError, InvalidTrackPointError
from gpx_track3d.geometry import build_track_geometry
from gpx_track3d.models import ColorMode, GeometryOptions, TrackGeometry, TrackPoint

__version_date__ = "2026-10-19"

__all__ = [
    "ColorMode",
    "DegenerateBoundsWarning",
    "EmptyTrackError",
    "GeometryOptions",
    "InvalidTrackPointError",
    "TrackGeometry",
    "TrackPoint",
    "build_track_geometry",
]


def get_git_hash() -> str:
    """Get the short git commit hash, or 'unknown' if not in a git repo."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            return result.stdout.strip()
    except (OSError, subprocess.SubprocessError):
        pass
    return "unknown"
