import math

import pytest

from wall_tracking.config import WallTrackingConfig
from wall_tracking.pid import LateralController
from wall_tracking.scan_data import RangeScan


def make_scan(default=1.0, sectors=(), range_max=10.0, range_min=0.05):
    """360 rays at 1 deg, ray i at bearing -180 + i.

    ``sectors`` is a sequence of ((start, end), value) with inclusive
    integer bearings; later entries win.
    """
    ranges = [default] * 360
    for (start, end), value in sectors:
        for bearing in range(start, end + 1):
            ranges[bearing + 180] = value
    return RangeScan(ranges, -math.pi, math.radians(1.0),
                     range_min=range_min, range_max=range_max)


def make_wall_scan(distance=1.0, sectors=(), range_max=10.0):
    """Straight wall parallel to the robot on its left, nothing elsewhere.

    Ray i at bearing b = -180 + i sees the wall at distance / sin(b) for
    0 < b < 180; every other ray has no return.
    """
    ranges = []
    for i in range(360):
        bearing = -180 + i
        if 0 < bearing < 180:
            ranges.append(distance / math.sin(math.radians(bearing)))
        else:
            ranges.append(float('inf'))
    for (start, end), value in sectors:
        for bearing in range(start, end + 1):
            ranges[bearing + 180] = value
    return RangeScan(ranges, -math.pi, math.radians(1.0),
                     range_min=0.05, range_max=range_max)


@pytest.fixture
def scan_factory():
    return make_scan


@pytest.fixture
def wall_scan_factory():
    return make_wall_scan


@pytest.fixture
def config():
    return WallTrackingConfig()


@pytest.fixture
def controller(config):
    return LateralController(config.kp, config.ki, config.kd,
                             config.distance_from_wall, config.sampling_period)
