"""Static 3D preview images of track geometry."""

import io

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend for server
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection
import numpy as np

from gpx_track3d.models import MarkerKind, TrackGeometry

MARKER_COLORS = {
    MarkerKind.START: '#4CAF50',
    MarkerKind.END: '#E53935',
    MarkerKind.MILESTONE: '#333333',
    MarkerKind.PEAK_ELEVATION: '#FF9800',
}


def _to_plot_axes(positions: np.ndarray) -> np.ndarray:
    """Reorder scene (x, y-up, z) coordinates to matplotlib's (x, y, z-up)."""
    return positions[:, [0, 2, 1]]


def render_preview(
    geometry: TrackGeometry,
    size: float = 8.0,
    elevation_exaggeration: float = 1.0,
    show_labels: bool = True,
) -> bytes:
    """Render the line, fill mesh and markers to a PNG image.

    Args:
        geometry: Output of build_track_geometry
        size: Figure width and height in inches
        elevation_exaggeration: Multiplier applied to the vertical axis
        show_labels: Draw marker labels next to the marker dots

    Returns PNG image as bytes.
    """
    line = np.asarray(geometry.line_positions, dtype=float).reshape(-1, 3)
    line_colors = np.asarray(geometry.line_colors, dtype=float).reshape(-1, 3)
    fill = np.asarray(geometry.fill_positions, dtype=float).reshape(-1, 3)
    fill_colors = np.asarray(geometry.fill_colors, dtype=float).reshape(-1, 3)

    line = _to_plot_axes(line)
    line[:, 2] *= elevation_exaggeration

    fig = plt.figure(figsize=(size, size), facecolor='white')
    ax = fig.add_subplot(projection='3d')

    if len(fill):
        fill = _to_plot_axes(fill)
        fill[:, 2] *= elevation_exaggeration
        triangles = fill.reshape(-1, 3, 3)
        # One face color per triangle: average of its vertex colors
        face_colors = fill_colors.reshape(-1, 3, 3).mean(axis=1)
        mesh = Poly3DCollection(triangles, facecolors=face_colors, edgecolors='none', alpha=0.6)
        ax.add_collection3d(mesh)

    if len(line) > 1:
        segments = np.stack([line[:-1], line[1:]], axis=1)
        ax.add_collection3d(Line3DCollection(segments, colors=line_colors[1:], linewidths=2))
    else:
        ax.scatter(line[:, 0], line[:, 1], line[:, 2], color=line_colors, s=10)

    for marker in geometry.markers:
        x, z, y = marker.position.x, marker.position.z, marker.position.y * elevation_exaggeration
        color = MARKER_COLORS[marker.kind]
        ax.scatter([x], [z], [y], color=color, s=20, depthshade=False)
        if show_labels:
            ax.text(x, z, y, f" {marker.label}", fontsize=8, color=color)

    mins = line.min(axis=0)
    maxs = line.max(axis=0)
    pad = np.maximum((maxs - mins) * 0.05, 1.0)
    ax.set_xlim(mins[0] - pad[0], maxs[0] + pad[0])
    ax.set_ylim(mins[1] - pad[1], maxs[1] + pad[1])
    ax.set_zlim(0, maxs[2] + pad[2])
    ax.set_xlabel('x')
    ax.set_ylabel('z')
    ax.set_zlabel('Elevation (m)')

    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=100, facecolor='white', edgecolor='none')
    plt.close(fig)
    buf.seek(0)
    return buf.getvalue()
