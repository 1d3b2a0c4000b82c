import pytest

from diffdrive.geometry import (
    Line,
    Point,
    Pose,
    angle_add,
    angle_sub,
    distance,
    line_angle,
    line_intersection,
    wrap_angle,
)


@pytest.mark.parametrize("angle", [-179.0, -90.0, 0.0, 45.0, 180.0, -180.0])
def test_wrap_angle_keeps_in_range_values(angle):
    assert wrap_angle(angle) == angle


@pytest.mark.parametrize("angle", [181.0, 270.0, 359.0, -181.0, -270.0, -359.0])
def test_wrap_angle_brings_back_into_range(angle):
    wrapped = wrap_angle(angle)
    assert -180.0 <= wrapped <= 180.0
    assert abs(wrapped - angle) == 360.0


def test_angle_add_and_sub_agree():
    assert angle_add(170.0, 20.0) == angle_sub(170.0, -20.0)
    assert angle_add(-170.0, -20.0) == angle_sub(-170.0, 20.0)


@pytest.mark.parametrize("a", [-180.0, -33.5, 0.0, 90.0, 179.0])
def test_angle_sub_of_itself_is_zero(a):
    assert angle_sub(a, a) == 0.0


@pytest.mark.parametrize("a,b", [(170.0, -170.0), (-10.0, 170.0), (90.0, -90.5)])
def test_angle_sub_antisymmetric(a, b):
    assert angle_sub(a, b) == pytest.approx(-angle_sub(b, a))
    assert -180.0 <= angle_sub(a, b) <= 180.0


@pytest.mark.parametrize("a1,a2", [(0.0, 45.0), (30.0, -60.0), (10.0, 120.0)])
def test_lines_through_common_point_meet_there(a1, a2):
    p = Point(12.0, -7.0)
    result = line_intersection(Line(p, a1), Line(p, a2))
    assert result.x == pytest.approx(p.x)
    assert result.y == pytest.approx(p.y)


def test_parallel_lines_raise():
    with pytest.raises(ValueError):
        line_intersection(Line(Point(0, 0), 30.0), Line(Point(5, 5), 30.0))


def test_line_angle_along_x_axis():
    assert line_angle(Point(0, 0), Point(10, 0)) == 0.0


def test_line_angle_straight_up():
    assert line_angle(Point(0, 0), Point(0, 10)) == pytest.approx(90.0, abs=1e-3)


@pytest.mark.parametrize("end", [Point(3, 4), Point(-2, 7), Point(5, -1)])
def test_line_angle_reverse_is_half_turn(end):
    start = Point(1, 1)
    forward = line_angle(start, end)
    backward = line_angle(end, start)
    assert abs(angle_sub(forward, backward)) == pytest.approx(180.0, abs=1e-3)


def test_distance_pythagorean():
    assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)


def test_distance_symmetric_and_zero():
    a, b = Point(1.5, -2.0), Point(-4.0, 6.0)
    assert distance(a, b) == distance(b, a)
    assert distance(a, a) == 0.0


def test_pose_point():
    pose = Pose(10.0, 20.0, 45.0)
    assert pose.point == Point(10.0, 20.0)