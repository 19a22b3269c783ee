"""Per-point color encoding.

Values are normalized to [0, 1] and mapped onto a hue sweep from blue-violet
(0) to red (1) at full saturation and 50% lightness.
"""

import colorsys
from typing import Callable

from gpx_track3d.models import Bounds, ColorMode, ColorSample, TrackPoint

# Hue (as a fraction of the color wheel) used for v=0; v=1 maps to hue 0 (red)
HUE_START = 0.6

# Grade magnitude (%) that saturates the grade color scale
MAX_COLOR_GRADE = 20.0

# How far the fill mesh color is pulled toward black
FILL_DARKEN_AMOUNT = 0.8

ColorStrategy = Callable[[TrackPoint, float], ColorSample]


def _clamp01(v: float) -> float:
    return max(0.0, min(v, 1.0))


def hue_color(v: float) -> ColorSample:
    """Map a normalized value to an RGB color on the blue-to-red sweep."""
    v = _clamp01(v)
    hue = HUE_START - v * HUE_START
    # colorsys uses HLS argument order
    r, g, b = colorsys.hls_to_rgb(hue, 0.5, 1.0)
    return ColorSample(_clamp01(r), _clamp01(g), _clamp01(b))


def elevation_fraction(elevation: float, bounds: Bounds) -> float:
    """Position of an elevation within the track's range; 0 on a flat track."""
    if bounds.is_flat:
        return 0.0
    return _clamp01((elevation - bounds.min_ele) / bounds.elevation_range)


def grade_fraction(grade_percent: float) -> float:
    return min(abs(grade_percent) / MAX_COLOR_GRADE, 1.0)


def darken(color: ColorSample, amount: float = FILL_DARKEN_AMOUNT) -> ColorSample:
    """Linearly interpolate a color toward black."""
    keep = 1.0 - amount
    return ColorSample(color.r * keep, color.g * keep, color.b * keep)


def color_strategy(mode: ColorMode, bounds: Bounds) -> ColorStrategy:
    """Pick the function that colors a point, given its segment grade.

    Chosen once per build so the per-point loop does not branch on mode.
    """
    mode = ColorMode(mode)
    if mode is ColorMode.ELEVATION:
        def by_elevation(point: TrackPoint, grade: float) -> ColorSample:
            return hue_color(elevation_fraction(point.elevation, bounds))
        return by_elevation

    def by_grade(point: TrackPoint, grade: float) -> ColorSample:
        return hue_color(grade_fraction(grade))
    return by_grade
