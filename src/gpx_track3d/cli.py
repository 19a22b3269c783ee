import argparse
import json
import logging
import sys

from gpx_track3d import __version_date__, get_git_hash
from gpx_track3d.config import DEFAULTS, load_config, options_from_config
from gpx_track3d.errors import EmptyTrackError, InvalidTrackPointError
from gpx_track3d.formatters import format_distance, format_elevation, format_grade
from gpx_track3d.geometry import build_track_geometry
from gpx_track3d.grade import FINE_SEGMENT_METERS
from gpx_track3d.models import ColorMode, MarkerKind, TrackGeometry
from gpx_track3d.parser import parse_gpx

logger = logging.getLogger(__name__)


def _flip(value: str) -> int:
    flip = int(value)
    if flip not in (1, -1):
        raise argparse.ArgumentTypeError("must be 1 or -1")
    return flip


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str):
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        description="Build 3D line, fill mesh and markers from a GPX track."
    )
    parser.add_argument("gpx_file", help="Path to GPX file")
    parser.add_argument(
        "--color-mode",
        choices=[mode.value for mode in ColorMode],
        default=get_default("color_mode"),
        help=f"Color the track by elevation or by segment grade (default: {DEFAULTS['color_mode']})",
    )
    parser.add_argument(
        "--flip-x",
        type=_flip,
        default=get_default("flip_x"),
        help=f"Sign applied to the longitude axis, 1 or -1 (default: {DEFAULTS['flip_x']})",
    )
    parser.add_argument(
        "--flip-z",
        type=_flip,
        default=get_default("flip_z"),
        help=f"Sign applied to the latitude axis, 1 or -1 (default: {DEFAULTS['flip_z']})",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=get_default("scale"),
        help=f"Scene units per degree of latitude/longitude (default: {DEFAULTS['scale']:g})",
    )
    parser.add_argument(
        "--segment-length",
        type=float,
        default=get_default("segment_length"),
        help=f"Grade segment length in meters (default: {DEFAULTS['segment_length']}, one mile)",
    )
    parser.add_argument(
        "--fine-segments",
        action="store_true",
        help=f"Use {FINE_SEGMENT_METERS:.2f}m grade segments (1/20 mile)",
    )
    parser.add_argument(
        "--json",
        metavar="PATH",
        default=None,
        help="Write the full geometry as JSON to PATH ('-' for stdout)",
    )
    parser.add_argument(
        "--png",
        metavar="PATH",
        default=None,
        help="Write a 3D preview image to PATH",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gpx-track3d {__version_date__} ({get_git_hash()})",
    )
    return parser


def format_summary(geometry: TrackGeometry) -> str:
    stats = geometry.stats
    lines = [
        "=== GPX Track 3D ===",
        f"Points:         {geometry.vertex_count}",
        f"Distance:       {format_distance(stats.total_distance_meters)}",
        f"Peak Elevation: {format_elevation(stats.peak_elevation)} at mile {stats.peak_elevation_mile:.2f}",
        f"Elevation Gain: {format_elevation(stats.elevation_gain)}",
        f"Elevation Loss: {format_elevation(stats.elevation_loss)}",
        f"Milestones:     {stats.milestone_count}",
        f"Color Mode:     {geometry.color_mode.value}",
    ]
    if geometry.grade_segments:
        steepest = max(geometry.grade_segments, key=lambda s: abs(s.grade_percent))
        lines.append(
            f"Grade Segments: {len(geometry.grade_segments)} "
            f"(steepest {format_grade(steepest.grade_percent)})"
        )
    peak = geometry.markers_of(MarkerKind.PEAK_ELEVATION)[0]
    lines.append(f"Peak Marker:    point {peak.index}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = {
        "flip_x": args.flip_x,
        "flip_z": args.flip_z,
        "scale": args.scale,
        "color_mode": args.color_mode,
        "segment_length": FINE_SEGMENT_METERS if args.fine_segments else args.segment_length,
    }
    try:
        options = options_from_config(settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    gpx_path = args.gpx_file
    try:
        points = parse_gpx(gpx_path)
    except FileNotFoundError:
        print(f"Error: File not found: {gpx_path}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error parsing GPX file: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        geometry = build_track_geometry(points, options)
    except EmptyTrackError:
        print("Error: GPX file contains no track points.", file=sys.stderr)
        sys.exit(1)
    except InvalidTrackPointError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Stdout carries only the JSON document when it is the JSON target
    if args.json == "-":
        json.dump(geometry.to_dict(), sys.stdout)
        sys.stdout.write("\n")
    else:
        print(format_summary(geometry))
        if args.json:
            with open(args.json, "w") as f:
                json.dump(geometry.to_dict(), f)
            logger.info("Wrote geometry to %s", args.json)

    if args.png:
        from gpx_track3d.charts import render_preview

        with open(args.png, "wb") as f:
            f.write(render_preview(geometry))
        logger.info("Wrote preview to %s", args.png)
