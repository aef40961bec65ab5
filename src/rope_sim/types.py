# MIT License (see LICENSE)
"""
Core type definitions for the rope network.

Defines the two simulated entities:
- Point: a particle whose velocity is implicit in (position - last_position).
- Link: a fixed-length connection between two points, identified by the
  unordered pair of their keys.

Points are referred to by integer keys handed out by the PointArena; links
never hold Point objects directly, so copying a network is a matter of
copying points and the link mapping.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64, lerp


def link_key(a: int, b: int) -> tuple[int, int]:
    """Canonical form of an unordered key pair: smaller key first."""
    return (a, b) if a <= b else (b, a)


@dataclass
class Point:
    """
    A point mass integrated with position Verlet.

    Attributes:
        position: Current position [x, y].
        last_position: Position at the previous tick. Defaults to position
                       (zero initial velocity).
        locked: Locked points are never moved by the solver.

    Note:
        The caller must keep last_position equal to position while a point
        is locked, so interpolation and swept erasure see it at rest.
    """
    position: np.ndarray | tuple[float, float]
    last_position: np.ndarray | tuple[float, float] | None = None
    locked: bool = False

    def __post_init__(self) -> None:
        """Store positions as private float64 arrays."""
        self.position = f64(self.position)
        if self.last_position is None:
            self.last_position = self.position.copy()
        else:
            self.last_position = f64(self.last_position)

    @property
    def displacement(self) -> np.ndarray:
        """Motion over the last tick (position - last_position)."""
        return self.position - self.last_position

    def interpolate(self, t: float) -> np.ndarray:
        """Position a fraction t of the way through the current tick."""
        return lerp(self.last_position, self.position, t)

    def copy(self) -> "Point":
        return Point(self.position, self.last_position, self.locked)


@dataclass(frozen=True)
class Link:
    """
    Inextensible link between two points.

    Attributes:
        keys: Endpoint keys, canonical order (smaller first).
        rest_length: Target distance, measured when the link was created
                     and never recomputed.
    """
    keys: tuple[int, int]
    rest_length: float = field(compare=False)

    @classmethod
    def between(cls, key_a: int, a: Point, key_b: int, b: Point) -> "Link":
        """Create a link whose rest length is the current distance a-b."""
        d = a.position - b.position
        return cls(keys=link_key(key_a, key_b), rest_length=float(np.hypot(d[0], d[1])))

    def names(self, key: int) -> bool:
        """Whether key is one of the link's endpoints."""
        return key == self.keys[0] or key == self.keys[1]
