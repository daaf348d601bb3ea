import pytest

from wall_tracking.pid import LateralController


def make_controller(**kwargs):
    params = dict(kp=0.8, ki=0.1, kd=0.005, target=1.0, sampling_period=0.1)
    params.update(kwargs)
    return LateralController(**params)


def test_correct_matches_pid_formula():
    pid = make_controller()
    # e = 0.5, I = 0.05, D = 0.5 / 0.1
    assert pid.correct(1.5) == pytest.approx(0.5 * 0.8 + 0.05 * 0.1 + 5.0 * 0.005)
    # e = -0.5, I = 0.0, D = -5.0
    assert pid.correct(0.5) == pytest.approx(-0.5 * 0.8 + 0.0 - 5.0 * 0.005)


def test_on_target_gives_zero():
    pid = make_controller()
    assert pid.correct(1.0) == 0.0
    assert pid.integral == 0.0


def test_integral_accumulates_across_calls():
    pid = make_controller(kp=0.0, kd=0.0, ki=1.0)
    for _ in range(4):
        pid.correct(2.0)
    assert pid.integral == pytest.approx(0.4)
    assert pid.correct(2.0) == pytest.approx(0.5)


def test_integral_limit_bounds_windup():
    pid = make_controller(integral_limit=0.1)
    for _ in range(10):
        pid.correct(3.0)
    assert pid.integral == pytest.approx(0.1)
    for _ in range(10):
        pid.correct(-1.0)
    assert pid.integral == pytest.approx(-0.1)


def test_reset_clears_integral():
    pid = make_controller()
    pid.correct(2.0)
    pid.reset()
    assert pid.integral == 0.0


def test_rejects_non_positive_sampling_period():
    with pytest.raises(ValueError):
        make_controller(sampling_period=0.0)
