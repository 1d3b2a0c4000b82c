# diffdrive

Closed-loop motion control for a two-wheel differential-drive chassis.
The package turns the robot's pose into wheel speed commands. You supply
the pose, either as a pose source or as arguments. The speeds come back
to you, either through a callback or as values kept on the controller.

## Installation

```
pip install diffdrive
```

To run the tests:

```
pip install "diffdrive[test]"
pytest
```

## Modules

### `diffdrive.geometry`

- `Point`, `Line` (a point plus a heading in degrees) and `Pose` (x, y and
  heading; `Pose.point` gives its position as a `Point`). All three are
  frozen dataclasses.
- `wrap_angle`, `angle_add` and `angle_sub`. If a result has gone one turn
  past ±180, these bring it back by 360 degrees.
- `line_intersection(line1, line2)`. Intersection of two lines in
  point-heading form. Raises `ValueError` for parallel lines.
- `line_angle(start, end)` gives the heading from one point to another.
  `distance(start, end)` gives the Euclidean distance.

### `diffdrive.pid`

`PidController(mode, gains, max_out, max_iout)` has two modes, listed in
`PidMode`:

- `PidMode.POSITION`: positional form. The integral term is clamped to
  ±`max_iout` and the output to ±`max_out`.
- `PidMode.DELTA`: incremental form. Each step adds to the previous output,
  and the output is clamped to ±`max_out`.

`calc(ref, set_point)` runs one cycle with error `ref - set_point`.
`motor_calc(ref, set_point, sign)` runs one cycle with error
`set_point - ref`. In `DELTA` mode `motor_calc` keeps its integral term at
zero, and `sign` has no effect.

Two more methods: `set_gains(gains)` replaces kp, ki and kd without
touching the controller's state, and `clear()` resets that state. `gains`
must contain exactly three values, otherwise `ValueError` is raised.

### `diffdrive.simple_pid`

Two small stateful PID loops. Each has `set_gains`, `update(target, current)`
and `reset`.

- `AnglePID`: wraps the heading error into [-180, 180]. Both its integral
  and its output are clamped to ±`limit` (default 1500).
- `DistancePID`: clamps its integral to ±10, but only while the error is
  larger than 1 in magnitude. Its output is clamped to ±`limit`
  (default 500).

### `diffdrive.line_follower`

`LineFollower(drive=None, hold_still=False)` steers toward a target line
that passes through a target point.

- `step(present, target, speed)` aims for the midpoint between the target
  point and the foot of the perpendicular from the chassis. It returns a
  `StepResult` containing the heading error and the remaining distance to
  the target point.
- `angle_loop(...)` runs the heading loop on its own. It square-root
  compresses the error. It uses P control when the error is above 10
  degrees and PD control below that.
- `drive(motor, speed)` is called for motor 1 and motor 2 on every cycle.
  The last pair is also kept in `last_command`.
- If `hold_still` is set, both motors are always commanded to zero.
- `reset()` clears the error remembered from the previous cycle.

`split_velocity(base, error)` truncates both values to integers and
returns `(base - error, base + error)`.

### `diffdrive.chassis`

`Chassis(pose_source, ring_gains=None)` reads its pose by calling
`pose_source()`. Coordinates and heading are truncated to integers.

The last speed commanded to each motor is kept in `speeds`, and the
methods below update it:

- `motor_command(motor, base, diff)`: sets one motor. Motor 1 gets
  `base - diff` and motor 2 gets `base + diff`. Any other motor number
  raises `ValueError`.
- `motor_back(motor)`: reverses the speed of one motor.
- `minimum_turn(angle)`: turns on the spot.
- `forward_turn(angle, speed)`: turns while driving.
- `straight_line(a, b, c, direction, speed)`: follows the line
  `a*x + b*y + c = 0`. Returns `True` once the chassis is within 150 mm of
  the line.
- `close_round(x, y, radius, clock, forward_speed, ring)`: follows a
  circle. `clock` is 1 for clockwise and 2 for counter-clockwise.
  `ring_gains` maps a ring size to a heading gain and a
  distance-to-heading gain. The choices are `DEFAULT_RING_GAINS` (used
  when none is given) and `UNIFORM_RING_GAINS`.
- `distance_pid`, `distance_arc_pid` and `angle_pid`: the individual loops.
  Each call builds a fresh positional controller.

### `diffdrive.guided`

`GuidedChassis` offers the same kinds of moves. The difference is that the
pose (`Pose`), the line (`LineCoefficients`) and the gains (`Gains`) are
passed in on every call. The heading and distance loops keep their state
between calls. The moves are:

- `minimum_turn`
- `forward_turn`
- `back_turn`
- `straight_line`: counts as on the line within 35 mm.
- `close_round`: `clock` is 0 for clockwise and 1 for counter-clockwise.
  It always drives at speed 1000.

## Example

```python
from diffdrive.geometry import Line, Point
from diffdrive.line_follower import LineFollower

commands = []
follower = LineFollower(drive=lambda motor, speed: commands.append((motor, speed)))

present = Line(Point(0.0, 0.0), 0.0)
target = Line(Point(1000.0, 500.0), 0.0)
result = follower.step(present, target, 300.0)
print(result.angle_error, result.distance)
print(commands)  # [(1, speed of motor 1), (2, speed of motor 2)]
```

Call `step` once per control cycle, and call `reset` before starting a new
path. Use small speeds while you are tuning gains.

## What it does not do

- It does not talk to motors, serial links or position sensors. Sending
  the speeds to a drive and reading the pose are the caller's job.
- It has no command-line program and no timing loop. You call the
  controllers at your own control rate.