"""Line and ring following driven by externally tuned PID gains.

Unlike :mod:`diffdrive.chassis`, every move here receives the current pose
and the gains it should use from the caller. The heading and cross-track
loops keep their state between calls, so the integral and derivative terms
carry over from one control cycle to the next.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from diffdrive.geometry import MOTOR_ONE, MOTOR_TWO, Pose
from diffdrive.simple_pid import AnglePID, DistancePID

_PI = 3.141593

# Proportional gain for turning on the spot: full speed over a half turn.
SPIN_KP = 55.0
# Cross-track distance (mm) within which the chassis counts as on the line.
LINE_REACHED = 35.0
# Below this magnitude the B coefficient is treated as zero.
VERTICAL_EPSILON = 0.005
# Forward speed used while driving around a ring.
CRUISE_SPEED = 1000

CLOCKWISE = 0
COUNTER_CLOCKWISE = 1


@dataclass(frozen=True)
class Gains:
    """Proportional, integral and derivative gains of one loop."""

    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0


@dataclass(frozen=True)
class LineCoefficients:
    """Coefficients of the line ``a*x + b*y + c = 0``."""

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0


def _read_pose(pose: Pose) -> tuple[int, int, int]:
    return int(pose.x), int(pose.y), int(pose.angle)


def _line_heading(line: LineCoefficients, direction: int, add: float) -> float:
    """Target heading along ``line`` in ``direction`` corrected by ``add``."""
    if -VERTICAL_EPSILON < line.b < VERTICAL_EPSILON:
        if not direction:
            return 0.0 + add
        if line.a > 0:
            return -180.0 - add
        return 180.0 + add
    slope = math.atan(-line.a / line.b) * 180.0 / _PI
    if not direction:
        return slope - 90.0 - add
    return slope + 90.0 + add


def _ring_tangent(px: int, py: int, x: float, y: float, clockwise: bool) -> float:
    if py == y:
        if px >= x:
            return 180.0 if clockwise else 0.0
        return 0.0 if clockwise else 180.0
    slope = math.atan((px - x) / (y - py)) * 180.0 / _PI
    above = py > y
    if clockwise:
        return (-90.0 if above else 90.0) + slope
    return (90.0 if above else -90.0) + slope


class GuidedChassis:
    """Two-wheel chassis whose moves take pose and gains from the caller.

    ``speeds`` holds the last commanded speed of motor one and motor two.
    """

    def __init__(self) -> None:
        self.speeds = [0.0, 0.0]
        self.angle_pid = AnglePID()
        self.distance_pid = DistancePID()

    def motor_command(self, motor: int, base: float, diff: float) -> tuple[float, float]:
        """Set one motor from a forward speed and a speed difference.

        Both values are truncated to whole speeds. Motor one gets
        ``base - diff`` and motor two ``base + diff``. Returns both speeds.
        """
        base_i = int(base)
        diff_i = int(diff)
        if motor == MOTOR_ONE:
            self.speeds[0] = float(base_i - diff_i)
        elif motor == MOTOR_TWO:
            self.speeds[1] = float(base_i + diff_i)
        else:
            raise ValueError(f"unknown motor {motor!r}")
        return (self.speeds[0], self.speeds[1])

    def _steer(self, gains: Gains, current_angle: float, angle: float) -> float:
        self.angle_pid.set_gains(gains.kp, gains.ki, gains.kd)
        return self.angle_pid.update(angle, current_angle)

    def _drive(self, base: float, diff: float) -> None:
        self.motor_command(MOTOR_ONE, base, diff)
        self.motor_command(MOTOR_TWO, base, diff)

    def minimum_turn(self, current_angle: float, angle: float) -> None:
        """Turn on the spot from ``current_angle`` towards ``angle``."""
        diff = self._steer(Gains(SPIN_KP, 0.0, 0.0), current_angle, angle)
        self._drive(0, diff)

    def forward_turn(self, gains: Gains, current_angle: float, angle: float, speed: float) -> None:
        """Turn towards ``angle`` while driving forward at ``speed``."""
        diff = self._steer(gains, current_angle, angle)
        self._drive(speed, diff)

    def back_turn(self, gains: Gains, current_angle: float, angle: float, speed: float) -> None:
        """Turn towards ``angle`` while driving backward at ``speed``."""
        diff = self._steer(gains, current_angle, angle)
        self._drive(-speed, -diff)

    def straight_line(
        self,
        distance_gains: Gains,
        angle_gains: Gains,
        pose: Pose,
        line: LineCoefficients,
        direction: int,
        speed: float,
    ) -> bool:
        """Drive along ``line``; return True once the chassis is on it.

        ``direction`` 0 drives up or right, 1 down or left. Near the line
        the chassis turns on the spot to the line's heading; further away
        it turns while driving, with a heading correction from the
        cross-track distance.
        """
        norm = math.sqrt(line.a * line.a + line.b * line.b)
        if norm == 0.0:
            raise ValueError("a and b cannot both be zero")
        x, y, heading = _read_pose(pose)
        cross = (line.a * x + line.b * y + line.c) / norm

        self.distance_pid.set_gains(distance_gains.kp, distance_gains.ki, distance_gains.kd)
        angle_add = self.distance_pid.update(cross, 0.0)

        if -LINE_REACHED < cross < LINE_REACHED:
            self.minimum_turn(heading, _line_heading(line, direction, 0.0))
            return True

        target = _line_heading(line, direction, angle_add)
        self.forward_turn(angle_gains, heading, target, speed)
        return False

    def close_round(
        self,
        distance_gains: Gains,
        angle_gains: Gains,
        pose: Pose,
        x: float,
        y: float,
        radius: float,
        clock: float,
        speed: float,
    ) -> None:
        """Drive around the circle of ``radius`` centred on (x, y).

        ``clock`` 0 drives clockwise, 1 counter-clockwise; any other value
        leaves the heading uncorrected. The ring is always driven at
        :data:`CRUISE_SPEED`; ``speed`` does not change it.
        """
        px, py, heading = _read_pose(pose)
        off_track = math.hypot(px - x, py - y) - radius

        self.angle_pid.set_gains(angle_gains.kp, angle_gains.ki, angle_gains.kd)
        self.distance_pid.set_gains(distance_gains.kp, distance_gains.ki, distance_gains.kd)

        diff = 0.0
        if clock in (CLOCKWISE, COUNTER_CLOCKWISE):
            tangent = _ring_tangent(px, py, x, y, clockwise=clock == CLOCKWISE)
            target = tangent + self.distance_pid.update(off_track, 0.0)
            diff = self.angle_pid.update(target, heading)

        self._drive(CRUISE_SPEED, diff)