"""General PID controller with positional and incremental forms."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum


class PidMode(IntEnum):
    """How the controller forms its output."""

    POSITION = 0
    DELTA = 1


def _limit(value: float, maximum: float) -> float:
    if value > maximum:
        return maximum
    if value < -maximum:
        return -maximum
    return value


def _unpack_gains(gains: Sequence[float]) -> tuple[float, float, float]:
    values = tuple(gains)
    if len(values) != 3:
        raise ValueError("gains must hold exactly kp, ki and kd")
    kp, ki, kd = values
    return float(kp), float(ki), float(kd)


class PidController:
    """PID controller keeping three samples of error and derivative history."""

    def __init__(
        self,
        mode: PidMode | int,
        gains: Sequence[float],
        max_out: float,
        max_iout: float,
    ) -> None:
        self.mode = PidMode(mode)
        self.kp, self.ki, self.kd = _unpack_gains(gains)
        self.max_out = float(max_out)
        self.max_iout = float(max_iout)
        self.clear()

    def set_gains(self, gains: Sequence[float]) -> None:
        """Replace the gains while keeping the controller state."""
        self.kp, self.ki, self.kd = _unpack_gains(gains)

    def clear(self) -> None:
        """Forget all history and output."""
        self.errors = [0.0, 0.0, 0.0]
        self.d_buf = [0.0, 0.0, 0.0]
        self.out = 0.0
        self.p_out = 0.0
        self.i_out = 0.0
        self.d_out = 0.0
        self.feedback = 0.0
        self.set_point = 0.0

    def _step(self, ref: float, set_point: float, error: float, integrate: bool) -> float:
        self.errors = [error, self.errors[0], self.errors[1]]
        self.set_point = set_point
        self.feedback = ref
        e0, e1, e2 = self.errors

        if self.mode is PidMode.POSITION:
            self.p_out = self.kp * e0
            self.i_out += self.ki * e0
            self.d_buf = [e0 - e1, self.d_buf[0], self.d_buf[1]]
            self.d_out = self.kd * self.d_buf[0]
            self.i_out = _limit(self.i_out, self.max_iout)
            self.out = _limit(self.p_out + self.i_out + self.d_out, self.max_out)
        else:
            self.p_out = self.kp * (e0 - e1)
            self.i_out = self.ki * e0 if integrate else 0.0
            self.d_buf = [e0 - 2.0 * e1 + e2, self.d_buf[0], self.d_buf[1]]
            self.d_out = self.kd * self.d_buf[0]
            self.out = _limit(
                self.out + self.p_out + self.i_out + self.d_out, self.max_out
            )
        return self.out

    def calc(self, ref: float, set_point: float) -> float:
        """Advance one cycle with error ``ref - set_point``."""
        return self._step(ref, set_point, ref - set_point, integrate=True)

    def motor_calc(self, ref: float, set_point: float, sign: int) -> float:
        """Advance one cycle with error ``set_point - ref``.

        In incremental mode the integral term is held at zero; ``sign`` has
        no effect on the result.
        """
        return self._step(ref, set_point, set_point - ref, integrate=False)