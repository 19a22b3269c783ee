import os

import pytest

from gpx_track3d.models import TrackPoint

SAMPLE_GPX_PATH = os.path.join(
    os.path.dirname(__file__), "functional", "data", "sample_track.gpx"
)


def make_track_points(elevations: list[float], spacing_m: float = 100.0) -> list[TrackPoint]:
    """Create track points with given elevations along a north-south line."""
    base_lat, base_lon = 45.0, 6.0
    lat_delta = spacing_m / 111195
    return [
        TrackPoint(lat=base_lat + i * lat_delta, lon=base_lon, elevation=elev)
        for i, elev in enumerate(elevations)
    ]


@pytest.fixture
def simple_track_points():
    """A short list of track points for unit testing: flat, ~140m apart."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=10.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=10.0),
    ]


@pytest.fixture
def uphill_track_points():
    """Track points going uphill."""
    return [
        TrackPoint(lat=37.7749, lon=-122.4194, elevation=10.0),
        TrackPoint(lat=37.7758, lon=-122.4183, elevation=20.0),
        TrackPoint(lat=37.7767, lon=-122.4172, elevation=35.0),
    ]


@pytest.fixture
def equator_track_points():
    """Latitude fixed at the equator, longitude increasing, flat elevation."""
    return [
        TrackPoint(lat=0.0, lon=0.0, elevation=0.0),
        TrackPoint(lat=0.0, lon=0.01, elevation=0.0),
        TrackPoint(lat=0.0, lon=0.02, elevation=0.0),
    ]


@pytest.fixture
def hilly_track_points():
    """About 5 km with a climb, a descent and a second, equal summit."""
    elevations = (
        [100.0 + i * 4 for i in range(20)]      # climb to 176m
        + [180.0] * 3                           # summit plateau
        + [176.0 - i * 4 for i in range(15)]    # descent
        + [120.0 + i * 4 for i in range(15)]    # second climb back to 176m
        + [180.0]                               # ties the first summit
    )
    return make_track_points(elevations, spacing_m=95.0)


@pytest.fixture
def track_factory():
    return make_track_points
