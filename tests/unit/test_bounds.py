import math
import os
import warnings

import pytest

from gpx_track3d.bounds import extract_bounds
from gpx_track3d.errors import DegenerateBoundsWarning, EmptyTrackError, InvalidTrackPointError
from gpx_track3d.models import TrackPoint


class TestExtractBounds:
    def test_empty_track(self):
        with pytest.raises(EmptyTrackError):
            extract_bounds([])

    def test_empty_track_is_value_error(self):
        with pytest.raises(ValueError):
            extract_bounds([])

    def test_min_max(self, uphill_track_points):
        bounds = extract_bounds(uphill_track_points)
        assert bounds.min_lat == pytest.approx(37.7749)
        assert bounds.max_lat == pytest.approx(37.7767)
        assert bounds.min_lon == pytest.approx(-122.4194)
        assert bounds.max_lon == pytest.approx(-122.4172)
        assert bounds.min_ele == 10.0
        assert bounds.max_ele == 35.0
        assert bounds.elevation_range == 25.0
        assert not bounds.is_flat

    def test_unordered_points(self):
        points = [
            TrackPoint(lat=1.0, lon=5.0, elevation=50.0),
            TrackPoint(lat=-1.0, lon=7.0, elevation=20.0),
            TrackPoint(lat=0.5, lon=3.0, elevation=80.0),
        ]
        bounds = extract_bounds(points)
        assert (bounds.min_lat, bounds.max_lat) == (-1.0, 1.0)
        assert (bounds.min_lon, bounds.max_lon) == (3.0, 7.0)
        assert (bounds.min_ele, bounds.max_ele) == (20.0, 80.0)

    def test_no_warning_for_regular_track(self, uphill_track_points):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            extract_bounds(uphill_track_points)

    def test_flat_elevation_warns(self, simple_track_points):
        with pytest.warns(DegenerateBoundsWarning, match="elevation"):
            bounds = extract_bounds(simple_track_points)
        assert bounds.is_flat
        assert bounds.degenerate_axes() == ["elevation"]

    def test_warning_points_at_caller(self, simple_track_points):
        with pytest.warns(DegenerateBoundsWarning) as record:
            extract_bounds(simple_track_points)
        assert os.path.basename(record[0].filename) == os.path.basename(__file__)

    def test_single_point_is_degenerate_on_every_axis(self):
        with pytest.warns(DegenerateBoundsWarning):
            bounds = extract_bounds([TrackPoint(lat=1.0, lon=2.0, elevation=3.0)])
        assert bounds.degenerate_axes() == ["latitude", "longitude", "elevation"]

    @pytest.mark.parametrize("field", ["lat", "lon", "elevation"])
    def test_non_finite_coordinate(self, field):
        values = {"lat": 1.0, "lon": 2.0, "elevation": 3.0}
        values[field] = math.nan
        points = [TrackPoint(lat=0.0, lon=0.0, elevation=0.0), TrackPoint(**values)]
        with pytest.raises(InvalidTrackPointError) as exc_info:
            extract_bounds(points)
        assert exc_info.value.index == 1
        assert exc_info.value.field == field
