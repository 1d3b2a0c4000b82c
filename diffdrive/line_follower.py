"""Closed-loop line following for a two-wheel differential chassis.

Each control cycle steers the chassis towards the midpoint between the
target point and the foot of the perpendicular from the chassis onto the
target line. The heading loop compresses large errors with a square root,
uses P control far from the target heading and PD control close to it.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from diffdrive.geometry import (
    MOTOR_ONE,
    MOTOR_TWO,
    Line,
    Point,
    angle_add,
    angle_sub,
    distance,
    line_angle,
    line_intersection,
)

# Gains of the heading loop.
P_FAR = 10
P_NEAR = 5
D_NEAR = 25
VELOCITY_RATE = 1.0
# Above this heading error (degrees) the derivative term is dropped.
PD_THRESHOLD = 10.0
# Turning proportion used by the line-following step.
STEP_TURN_GAIN = 2.0

DriveFn = Callable[[int, int], None]


def split_velocity(base: float, error: float) -> tuple[int, int]:
    """Wheel speeds for a forward speed and a turn term.

    Both inputs are truncated to whole speeds first. A positive turn term
    turns the chassis left. Returns the speeds of motor one and motor two.
    """
    base_i = int(base)
    error_i = int(error)
    return base_i - error_i, base_i + error_i


@dataclass(frozen=True)
class StepResult:
    """Outcome of one line-following cycle."""

    angle_error: float
    distance: float


class LineFollower:
    """Heading and line-following loops that command two wheel motors.

    ``drive`` is called as ``drive(motor, velocity)`` for each motor on every
    cycle. With ``hold_still`` set, the errors are still computed but both
    motors are always commanded to zero.
    """

    def __init__(self, drive: DriveFn | None = None, hold_still: bool = False) -> None:
        self.drive = drive
        self.hold_still = hold_still
        self.last_command: tuple[int, int] = (0, 0)
        self._last_error = 0.0

    def reset(self) -> None:
        """Forget the heading error of the previous cycle."""
        self._last_error = 0.0

    def _command(self, base: float, turn: float) -> None:
        left, right = split_velocity(base, turn)
        self.last_command = (left, right)
        if self.drive is not None:
            self.drive(MOTOR_ONE, left)
            self.drive(MOTOR_TWO, right)

    def angle_loop(
        self,
        present_angle: float,
        target_angle: float,
        vel_p: float,
        vel_base: float,
    ) -> float:
        """Run one heading-control cycle and return the heading error."""
        vel_base = VELOCITY_RATE * vel_base
        angle_err = angle_sub(target_angle, present_angle)
        compressed = math.copysign(math.sqrt(abs(angle_err)), angle_err)
        if angle_err <= 0.0:
            compressed = -math.sqrt(abs(angle_err))
        err_diff = angle_err - self._last_error

        if abs(angle_err) > PD_THRESHOLD:
            turn = compressed * P_FAR * vel_p
        else:
            turn = compressed * P_NEAR * vel_p + err_diff * D_NEAR

        if self.hold_still:
            vel_base = 0.0
            turn = 0.0

        self._command(vel_base, turn)
        self._last_error = angle_err
        return angle_err

    def step(self, present: Line, target: Line, speed: float) -> StepResult:
        """Steer from the present pose towards the target line and point.

        ``present`` holds the chassis position and heading; ``target`` holds
        the target point and the heading of the line through it.
        """
        perpendicular = Line(present.point, angle_add(target.angle, 90.0))
        foot = line_intersection(target, perpendicular)
        midpoint = Point(
            (foot.x + target.point.x) * 0.5,
            (foot.y + target.point.y) * 0.5,
        )
        heading = line_angle(present.point, midpoint)
        remaining = distance(present.point, target.point)
        error = self.angle_loop(present.angle, heading, STEP_TURN_GAIN, speed)
        return StepResult(error, remaining)