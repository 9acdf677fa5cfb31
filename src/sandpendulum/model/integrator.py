"""
Pendulum Integrator
===================
The mathematical rule of movement.

Along each axis the motion is accelerated by an amount proportional to the
distance from the centre, of a magnitude that gives that axis its period, and
then drag is subtracted. The two axes never couple; the pattern comes from
their slightly different periods.
"""
from __future__ import annotations

import math

from sandpendulum.model.errors import EmptyTrajectoryError
from sandpendulum.model.parameters import SimulationParameters
from sandpendulum.model.trajectory import Point, TrajectoryStore

FOUR_PI_SQUARED = 4.0 * math.pi * math.pi


def step(trajectory: TrajectoryStore, params: SimulationParameters) -> Point:
    """
    Compute the point following the end of the trajectory.

    The caller appends the result. With a single point the previous position
    equals the current one, i.e. the pendulum starts at rest.

    Raises:
        EmptyTrajectoryError: If the trajectory has not been seeded.
    """
    n = len(trajectory)
    if n == 0:
        raise EmptyTrajectoryError("The trajectory must be seeded before stepping.")

    cx, cy = trajectory.at(n - 1)
    ox, oy = trajectory.at(n - 2) if n > 1 else (cx, cy)

    xf = params.period_x / FOUR_PI_SQUARED
    yf = params.period_x * params.period_ratio / FOUR_PI_SQUARED
    ax = (cx - ox) - cx / (xf * xf)
    ay = (cy - oy) - cy / (yf * yf)
    keep = 1.0 - params.drag / params.period_x
    return Point(cx + ax * keep, cy + ay * keep)


def advance(trajectory: TrajectoryStore, params: SimulationParameters) -> int:
    """Step and append; returns the index of the new point."""
    return trajectory.append(step(trajectory, params))
