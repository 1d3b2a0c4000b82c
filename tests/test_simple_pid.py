import pytest

from diffdrive.simple_pid import AnglePID, DistancePID


def test_angle_output_saturates_at_default_limit():
    assert AnglePID(kp=1000.0).update(90.0, 0.0) == 1500.0
    assert AnglePID(kp=1000.0).update(-90.0, 0.0) == -1500.0


def test_angle_custom_limit():
    assert AnglePID(kp=1000.0, limit=200.0).update(90.0, 0.0) == 200.0


@pytest.mark.parametrize("target,equivalent", [(190.0, -170.0), (-200.0, 160.0), (350.0, -10.0)])
def test_angle_error_wraps(target, equivalent):
    assert AnglePID(kp=1.0).update(target, 0.0) == pytest.approx(
        AnglePID(kp=1.0).update(equivalent, 0.0)
    )


@pytest.mark.parametrize("a,b", [(30.0, 10.0), (-45.0, 60.0), (170.0, -170.0)])
def test_angle_proportional_antisymmetric(a, b):
    assert AnglePID(kp=3.0).update(a, b) == pytest.approx(-AnglePID(kp=3.0).update(b, a))


def test_angle_integral_clamped_both_ways():
    pid = AnglePID(ki=1e4)
    assert pid.update(90.0, 0.0) == 1500.0
    assert pid.integral == 1500.0
    assert pid.update(-90.0, 0.0) == -1500.0
    assert pid.integral == -1500.0


def test_angle_derivative_vanishes_for_steady_error():
    pid = AnglePID(kd=2.0)
    first = pid.update(20.0, 0.0)
    assert first > 0
    assert pid.update(20.0, 0.0) == 0.0


def test_angle_reset_matches_fresh():
    pid = AnglePID(kp=1.0, ki=0.5, kd=0.2)
    pid.update(40.0, 0.0)
    pid.update(-15.0, 5.0)
    pid.reset()
    assert pid.update(25.0, 3.0) == AnglePID(kp=1.0, ki=0.5, kd=0.2).update(25.0, 3.0)


def test_angle_set_gains_changes_response():
    pid = AnglePID(kp=1.0)
    pid.set_gains(0.0, 0.0, 0.0)
    assert pid.update(50.0, 0.0) == 0.0
    assert (pid.kp, pid.ki, pid.kd) == (0.0, 0.0, 0.0)


def test_distance_output_saturates_at_default_limit():
    assert DistancePID(kp=100.0).update(1000.0, 0.0) == 500.0
    assert DistancePID(kp=100.0).update(-1000.0, 0.0) == -500.0


def test_distance_integral_clamped_when_error_large():
    pid = DistancePID(ki=100.0)
    assert pid.update(5.0, 0.0) == 10.0
    assert pid.update(-5.0, 0.0) == -10.0


def test_distance_integral_unclamped_when_error_small():
    pid = DistancePID(ki=100.0)
    pid.update(5.0, 0.0)
    out = pid.update(0.5, 0.0)
    assert out > 10.0
    assert pid.integral == out


def test_distance_does_not_wrap_error():
    near = DistancePID(kp=1.0).update(190.0, 0.0)
    assert near == pytest.approx(190.0)
    assert near != DistancePID(kp=1.0).update(-170.0, 0.0)


def test_distance_reset_matches_fresh():
    pid = DistancePID(kp=0.4, ki=0.1, kd=0.3)
    pid.update(30.0, 0.0)
    pid.reset()
    assert pid.integral == 0.0
    assert pid.update(12.0, 0.0) == DistancePID(kp=0.4, ki=0.1, kd=0.3).update(12.0, 0.0)