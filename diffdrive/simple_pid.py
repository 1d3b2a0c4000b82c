"""Small positional PID loops for heading and cross-track distance."""

from __future__ import annotations

ANGLE_OUTPUT_LIMIT = 1500.0
DISTANCE_OUTPUT_LIMIT = 500.0
DISTANCE_INTEGRAL_LIMIT = 10.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class AnglePID:
    """Heading PID whose output is the wheel speed difference.

    The error is wrapped across the ±180 degree seam, and both the integral
    term and the output are held within ±limit.
    """

    def __init__(
        self,
        kp: float = 0.0,
        ki: float = 0.0,
        kd: float = 0.0,
        limit: float = ANGLE_OUTPUT_LIMIT,
    ) -> None:
        self.set_gains(kp, ki, kd)
        self.limit = float(limit)
        self.reset()

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)

    def reset(self) -> None:
        self.last_error = 0.0
        self.integral = 0.0

    def update(self, target: float, current: float) -> float:
        err = target - current
        if err > 180.0:
            err -= 360.0
        elif err < -180.0:
            err += 360.0

        self.integral = _clamp(self.integral + self.ki * err, -self.limit, self.limit)
        out = self.kp * err + self.integral + self.kd * (err - self.last_error)
        self.last_error = err
        return _clamp(out, -self.limit, self.limit)


class DistancePID:
    """Cross-track distance PID whose output is a heading correction.

    The integral term is held within ±10 only while the error exceeds one
    unit; the output is held within ±limit.
    """

    def __init__(
        self,
        kp: float = 0.0,
        ki: float = 0.0,
        kd: float = 0.0,
        limit: float = DISTANCE_OUTPUT_LIMIT,
    ) -> None:
        self.set_gains(kp, ki, kd)
        self.limit = float(limit)
        self.reset()

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)

    def reset(self) -> None:
        self.last_error = 0.0
        self.integral = 0.0

    def update(self, target: float, current: float) -> float:
        err = target - current
        self.integral += self.ki * err
        if abs(err) > 1.0:
            self.integral = _clamp(
                self.integral, -DISTANCE_INTEGRAL_LIMIT, DISTANCE_INTEGRAL_LIMIT
            )
        out = self.kp * err + self.integral + self.kd * (err - self.last_error)
        self.last_error = err
        return _clamp(out, -self.limit, self.limit)