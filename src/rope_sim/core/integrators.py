# MIT License (see LICENSE)
"""
Position Verlet integration for point masses.

Velocity is never stored: it is implicit in the difference between the
current and previous positions. With a constant acceleration a and a fixed
timestep dt the update is

    x(t+dt) = x(t) + (x(t) - x(t-dt)) + a*dt²

Positional corrections made by the relaxation solver after integration
therefore feed straight back into the implicit velocity of the next tick,
which is what keeps links from gaining energy.

Reference:
    https://en.wikipedia.org/wiki/Verlet_integration#Basic_St%C3%B6rmer%E2%80%93Verlet
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..types import Point


def verlet_step(point: Point, accel_dt2: np.ndarray) -> None:
    """
    Advance one unlocked point by a single tick.

    Args:
        point: Point to integrate (modified in-place). Locked points are
               left untouched.
        accel_dt2: Acceleration pre-multiplied by dt², as [x, y].
    """
    if point.locked:
        return
    last = point.position
    point.position = last + (last - point.last_position) + accel_dt2
    point.last_position = last


def integrate_points(points: Iterable[Point], accel: np.ndarray, dt: float) -> None:
    """Apply verlet_step with acceleration accel to every point."""
    accel_dt2 = accel * (dt * dt)
    for p in points:
        verlet_step(p, accel_dt2)
