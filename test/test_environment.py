from wall_tracking.environment import EnvironmentClassifier


def test_starts_indoor_and_closed():
    env = EnvironmentClassifier()
    assert not env.outdoor
    assert not env.open_place


def test_outdoor_follows_fix_quality():
    env = EnvironmentClassifier()
    assert env.update_outdoor(quality_unknown=False)
    assert env.outdoor
    assert not env.update_outdoor(quality_unknown=True)
    assert not env.outdoor


def test_open_place_hysteresis():
    env = EnvironmentClassifier()
    env.update_outdoor(quality_unknown=False)
    flags = [env.open_place]
    for score in (0.75, 0.5, 0.3):
        flags.append(env.update_open_place(score))
    assert flags == [False, True, True, False]


def test_open_place_needs_strong_signal_to_enter():
    env = EnvironmentClassifier()
    env.update_outdoor(quality_unknown=False)
    assert not env.update_open_place(0.69)
    assert not env.update_open_place(0.5)
    assert env.update_open_place(0.7)
    assert env.update_open_place(0.4)


def test_indoor_forces_open_place_off():
    env = EnvironmentClassifier()
    assert not env.update_open_place(1.0)

    env.update_outdoor(quality_unknown=False)
    assert env.update_open_place(1.0)
    env.update_outdoor(quality_unknown=True)
    assert not env.update_open_place(1.0)
