import pytest

from gpx_track3d.models import Bounds, TrackPoint
from gpx_track3d.projection import (
    MIN_CAMERA_HEIGHT,
    project_center,
    project_point,
    project_track,
    recommended_camera_height,
)


@pytest.fixture
def bounds():
    return Bounds(min_lat=45.0, max_lat=45.02, min_lon=6.0, max_lon=6.04, min_ele=100.0, max_ele=300.0)


class TestProjectPoint:
    def test_origin_corner(self, bounds):
        pt = TrackPoint(lat=45.0, lon=6.0, elevation=100.0)
        projected = project_point(pt, bounds)
        assert projected.as_tuple() == (0.0, 0.0, 0.0)

    def test_linear_scale(self, bounds):
        pt = TrackPoint(lat=45.01, lon=6.02, elevation=250.0)
        projected = project_point(pt, bounds, scale=1000.0)
        assert projected.x == pytest.approx(20.0)
        assert projected.z == pytest.approx(10.0)
        assert projected.y == pytest.approx(150.0)

    def test_flip_axes(self, bounds):
        pt = TrackPoint(lat=45.01, lon=6.02, elevation=250.0)
        plain = project_point(pt, bounds)
        flipped = project_point(pt, bounds, flip_x=-1, flip_z=-1)
        assert flipped.x == pytest.approx(-plain.x)
        assert flipped.z == pytest.approx(-plain.z)
        assert flipped.y == plain.y

    def test_elevation_not_scaled(self, bounds):
        pt = TrackPoint(lat=45.0, lon=6.0, elevation=200.0)
        assert project_point(pt, bounds, scale=5.0).y == 100.0

    def test_grounded(self, bounds):
        pt = project_point(TrackPoint(lat=45.01, lon=6.02, elevation=250.0), bounds)
        ground = pt.grounded()
        assert (ground.x, ground.y, ground.z) == (pt.x, 0.0, pt.z)


class TestProjectTrack:
    def test_preserves_order(self, bounds):
        points = [
            TrackPoint(lat=45.0, lon=6.0, elevation=100.0),
            TrackPoint(lat=45.01, lon=6.01, elevation=200.0),
            TrackPoint(lat=45.02, lon=6.04, elevation=300.0),
        ]
        projected = project_track(points, bounds)
        assert [p.y for p in projected] == [0.0, 100.0, 200.0]
        assert projected[0].x < projected[1].x < projected[2].x


class TestProjectCenter:
    def test_center_of_bounds(self, bounds):
        center = project_center(bounds, scale=1000.0)
        assert center.x == pytest.approx(20.0)
        assert center.z == pytest.approx(10.0)
        assert center.y == pytest.approx(100.0)

    def test_center_uses_same_flips(self, bounds):
        center = project_center(bounds, flip_x=-1, flip_z=1, scale=1000.0)
        assert center.x == pytest.approx(-20.0)
        assert center.z == pytest.approx(10.0)


class TestRecommendedCameraHeight:
    def test_follows_horizontal_span(self, bounds):
        # 0.04 degrees * 100000 = 4000 scene units wide
        assert recommended_camera_height(bounds) == pytest.approx(2000.0)

    def test_minimum_height(self):
        tiny = Bounds(min_lat=45.0, max_lat=45.0, min_lon=6.0, max_lon=6.0, min_ele=10.0, max_ele=10.0)
        assert recommended_camera_height(tiny) == MIN_CAMERA_HEIGHT

    def test_tall_track(self):
        tall = Bounds(min_lat=45.0, max_lat=45.0001, min_lon=6.0, max_lon=6.0001, min_ele=0.0, max_ele=900.0)
        assert recommended_camera_height(tall) == pytest.approx(1800.0)
