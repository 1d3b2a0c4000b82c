"""Planar geometry helpers for a differential-drive chassis.

Angles are in degrees and live in the range [-180, 180]. Distances are in
millimetres.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Conversion factors used throughout the controllers.
CHANGE_TO_RADIAN = 0.017453
CHANGE_TO_ANGLE = 57.2958

MOTOR_ONE = 1
MOTOR_TWO = 2


@dataclass(frozen=True)
class Point:
    """A point in the plane, in millimetres."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Line:
    """A line given by one of its points and its heading in degrees."""

    point: Point = Point()
    angle: float = 0.0


@dataclass(frozen=True)
class Pose:
    """Position and heading of the chassis as reported by its locator."""

    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


def wrap_angle(angle: float) -> float:
    """Bring an angle that overshot the ±180 boundary back by one turn."""
    if angle > 180.0:
        angle -= 360.0
    if angle < -180.0:
        angle += 360.0
    return angle


def angle_add(angle1: float, angle2: float) -> float:
    """Sum of two headings, wrapped across the ±180 seam."""
    return wrap_angle(angle1 + angle2)


def angle_sub(minuend: float, subtrahend: float) -> float:
    """Difference of two headings, wrapped across the ±180 seam."""
    return wrap_angle(minuend - subtrahend)


def line_intersection(line1: Line, line2: Line) -> Point:
    """Intersection of two lines in point-heading form.

    Lines perpendicular to the x axis are not handled specially. Parallel
    lines have no intersection and raise ValueError.
    """
    k1 = math.tan(line1.angle * CHANGE_TO_RADIAN)
    k2 = math.tan(line2.angle * CHANGE_TO_RADIAN)
    if k1 == k2:
        raise ValueError("lines are parallel")
    x = (
        line1.point.x * k1 - line1.point.y - line2.point.x * k2 + line2.point.y
    ) / (k1 - k2)
    y = k1 * (x - line1.point.x) + line1.point.y
    return Point(x, y)


def line_angle(start: Point, end: Point) -> float:
    """Heading in degrees of the direction from start to end."""
    return math.atan2(end.y - start.y, end.x - start.x) * CHANGE_TO_ANGLE


def distance(start: Point, end: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(start.x - end.x, start.y - end.y)