"""Trajectory controllers for a two-wheel chassis driven by PID loops.

The chassis reads its position and heading from a pose source and keeps the
last commanded speed of each of its two wheel motors. Higher-level moves
(driving along a line, circling a centre) are built from two small moves:
turning on the spot and turning while driving forward.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping

from diffdrive.geometry import MOTOR_ONE, MOTOR_TWO, Pose
from diffdrive.pid import PidController, PidMode

_PI = 3.1415926

# Output and integral limits of the loops.
DISTANCE_MAX_OUT = 9000.0
DISTANCE_MAX_IOUT = 1000.0
ARC_MAX_OUT = 90.0
ARC_MAX_IOUT = 10.0
ANGLE_MAX_OUT = 9000.0
ANGLE_MAX_IOUT = 20.0

# Fixed gains of the individual moves.
DISTANCE_GAINS = (55.0, 0.0, 0.0)
SPIN_GAINS = (55.0, 0.0, 0.0)
FORWARD_TURN_GAINS = (15.0, 0.0, 0.0)
LINE_ARC_GAINS = (0.08, 0.0, 0.0)

# Cross-track distance (mm) within which the chassis counts as on the line.
LINE_REACHED = 150.0
# Below this magnitude the B coefficient is treated as zero.
VERTICAL_EPSILON = 0.005

CLOCKWISE = 1
COUNTER_CLOCKWISE = 2

# Ring size -> (heading kp, distance-to-heading kp).
DEFAULT_RING_GAINS: dict[int, tuple[float, float]] = {
    0: (45.0, 0.05),
    1: (45.0, 0.05),
    2: (10.0, 0.05),
}
UNIFORM_RING_GAINS: dict[int, tuple[float, float]] = {
    0: (30.0, 0.05),
    1: (30.0, 0.05),
    2: (30.0, 0.05),
}

PoseSource = Callable[[], Pose]


class Chassis:
    """Line and ring following for a differential-drive chassis.

    ``pose_source`` is called with no arguments and returns the current
    :class:`Pose`; its coordinates and heading are read as whole numbers.
    ``ring_gains`` maps a ring size to the heading gain and the
    distance-to-heading gain used by :meth:`close_round`.
    """

    def __init__(
        self,
        pose_source: PoseSource,
        ring_gains: Mapping[int, tuple[float, float]] | None = None,
    ) -> None:
        self.pose_source = pose_source
        self.ring_gains = dict(DEFAULT_RING_GAINS if ring_gains is None else ring_gains)
        self.speeds = [0.0, 0.0]
        self.angle_gains: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self.arc_gains: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def _pose(self) -> tuple[int, int, int]:
        pose = self.pose_source()
        return int(pose.x), int(pose.y), int(pose.angle)

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
        return tuple(self.speeds)

    def motor_back(self, motor: int) -> tuple[float, float]:
        """Reverse the speed of one motor and return both speeds."""
        if motor == MOTOR_ONE:
            self.speeds[0] = -self.speeds[0]
        elif motor == MOTOR_TWO:
            self.speeds[1] = -self.speeds[1]
        else:
            raise ValueError(f"unknown motor {motor!r}")
        return tuple(self.speeds)

    def distance_pid(self, distance: float) -> float:
        """Forward speed from a distance, with a fresh positional loop."""
        pid = PidController(PidMode.POSITION, DISTANCE_GAINS, DISTANCE_MAX_OUT, DISTANCE_MAX_IOUT)
        return pid.calc(distance, 0.0)

    def distance_arc_pid(self, distance: float) -> float:
        """Heading correction from a cross-track distance."""
        pid = PidController(PidMode.POSITION, self.arc_gains, ARC_MAX_OUT, ARC_MAX_IOUT)
        return pid.calc(distance, 0.0)

    def angle_pid(self, target: float, current: float) -> float:
        """Wheel speed difference that turns from ``current`` to ``target``."""
        err = target - current
        if err > 180.0:
            err -= 360.0
        elif err < -180.0:
            err += 360.0
        pid = PidController(PidMode.POSITION, self.angle_gains, ANGLE_MAX_OUT, ANGLE_MAX_IOUT)
        return pid.calc(err, 0.0)

    def _turn(self, angle: float, speed: float, gains: tuple[float, float, float]) -> None:
        self.angle_gains = gains
        _, _, heading = self._pose()
        diff = self.angle_pid(angle, heading)
        self.motor_command(MOTOR_ONE, speed, diff)
        self.motor_command(MOTOR_TWO, speed, diff)

    def minimum_turn(self, angle: float) -> None:
        """Turn on the spot towards ``angle``."""
        self._turn(angle, 0.0, SPIN_GAINS)

    def forward_turn(self, angle: float, speed: float) -> None:
        """Turn towards ``angle`` while driving at ``speed``."""
        self._turn(angle, speed, FORWARD_TURN_GAINS)

    def straight_line(self, a: float, b: float, c: float, direction: int, speed: float) -> bool:
        """Drive along the line ``a*x + b*y + c = 0``.

        ``direction`` 0 drives up or right, 1 down or left. Returns True once
        the chassis is within reach of the line.
        """
        norm = math.sqrt(a * a + b * b)
        if norm == 0.0:
            raise ValueError("a and b cannot both be zero")
        x, y, _ = self._pose()
        cross = (a * x + b * y + c) / norm

        self.arc_gains = LINE_ARC_GAINS
        angle_add = self.distance_arc_pid(cross)

        if -LINE_REACHED < cross < LINE_REACHED:
            self.forward_turn(0.0, speed)
            return True

        if -VERTICAL_EPSILON < b < VERTICAL_EPSILON:
            if not direction:
                self.forward_turn(0.0 + angle_add, speed)
            elif a > 0:
                self.forward_turn(-180.0 - angle_add, speed)
            else:
                self.forward_turn(180.0 + angle_add, speed)
        else:
            slope_angle = math.atan(-a / b) * 180.0 / _PI
            if not direction:
                self.forward_turn(slope_angle - 90.0 - angle_add, speed)
            else:
                self.forward_turn(slope_angle + 90.0 + angle_add, speed)
        return False

    def _tangent(self, px: float, py: float, x: float, y: float, clockwise: bool) -> float:
        if py == y:
            if px >= x:
                return 180.0 if clockwise else 0.0
            return 0.0 if clockwise else 180.0
        slope = math.atan((px - x) / (y - py)) * 180.0 / _PI
        above = py > y
        if clockwise:
            return (-90.0 if above else 90.0) + slope
        return (90.0 if above else -90.0) + slope

    def close_round(
        self,
        x: float,
        y: float,
        radius: float,
        clock: float,
        forward_speed: float,
        ring: int,
    ) -> None:
        """Drive around the circle of ``radius`` centred on (x, y).

        ``clock`` 1 drives clockwise, 2 counter-clockwise; any other value
        drives straight ahead. ``ring`` selects the gains from ``ring_gains``;
        an unknown ring keeps the gains in use.
        """
        px, py, heading = self._pose()
        off_track = math.hypot(px - x, py - y) - radius

        if ring in self.ring_gains:
            angle_kp, arc_kp = self.ring_gains[ring]
            self.angle_gains = (float(angle_kp), 0.0, 0.0)
            self.arc_gains = (float(arc_kp), 0.0, 0.0)

        diff = 0.0
        if clock == CLOCKWISE:
            target = self._tangent(px, py, x, y, clockwise=True)
            target -= self.distance_arc_pid(off_track)
            diff = self.angle_pid(target, heading)
        elif clock == COUNTER_CLOCKWISE:
            target = self._tangent(px, py, x, y, clockwise=False)
            target += self.distance_arc_pid(off_track)
            diff = self.angle_pid(target, heading)

        self.motor_command(MOTOR_ONE, forward_speed, diff)
        self.motor_command(MOTOR_TWO, forward_speed, diff)