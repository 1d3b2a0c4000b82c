"""Closed-loop motion control for two-wheel differential-drive chassis."""

__version__ = "0.1.0"
__all__ = ["geometry", "pid", "simple_pid", "line_follower", "chassis", "guided"]