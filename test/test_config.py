import pytest

from wall_tracking.config import WallTrackingConfig


def test_derived_angles(config):
    # atan2(-0.2, 0.6) and atan2(1.0, 0.5 + 1.0 / tan(30 deg))
    assert config.front_stop_deg == pytest.approx(-18.4349, abs=1e-3)
    assert config.front_left_wall_deg == pytest.approx(24.1312, abs=1e-3)


def test_derived_angles_follow_parameters():
    config = WallTrackingConfig(wheel_separation=1.2, distance_to_stop=0.6,
                                distance_from_wall=1.0, distance_to_skip=0.0,
                                start_deg_lateral=45)
    assert config.front_stop_deg == pytest.approx(-45.0)
    assert config.front_left_wall_deg == pytest.approx(45.0)


@pytest.mark.parametrize('kwargs', [
    {'sampling_period': 0.0},
    {'poll_interval': -1.0},
    {'max_linear_vel': -0.1},
    {'min_angular_vel': 2.0},
    {'start_deg_lateral': 180},
])
def test_invalid_config_raises(kwargs):
    with pytest.raises(ValueError):
        WallTrackingConfig(**kwargs)


def test_config_is_frozen(config):
    with pytest.raises(AttributeError):
        config.kp = 1.0
