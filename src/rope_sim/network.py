# MIT License (see LICENSE)
"""
The rope network: points, links and the fixed-step solver.

The Network class is the whole engine. It manages:
- Storage of points (PointArena, stable integer keys) and links (a dict
  keyed by the canonical endpoint pair, so (a, b) and (b, a) are one link).
- The solver step (tick):
    1. Position Verlet integration of every unlocked point under gravity.
    2. relax_iters randomized relaxation passes over every link.
- Nearest-point lookup used by the editor for snapping.
- Swept erasure of points and links along a moving eraser segment.
- Interpolated sampling for rendering between the last two tick states.

Every operation is total: unknown keys are ignored by mutations and give
empty results from queries.

Structure:
    - User creates a Network.
    - User edits it with add_point() / add_link() / toggle_locked().
    - User clones it and calls tick() on the copy at a fixed rate.
"""
from __future__ import annotations
import copy
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .arena import PointArena
from .collision.sweep import link_swept, point_swept
from .constants import ERASE_RADIUS, GRAVITY, RELAX_ITERS, TICK_DURATION
from .core.integrators import integrate_points
from .core.relaxation import relax_links
from .profiler import Profiler
from .types import Link, Point, link_key
from .util import f64, norm2

logger = logging.getLogger("rope_sim")


@dataclass
class Network:
    """
    A network of point masses joined by fixed-length links.

    Attributes:
        gravity: Acceleration applied to unlocked points, px/s². Screen
                 coordinates, so the default points down (+y).
        dt: Fixed tick duration in seconds.
        relax_iters: Relaxation passes over the link set per tick.
        erase_radius: Radius used by erase_points() when none is given.
        rng: Source of the per-pass link visiting order. Pass a seeded
             generator for reproducible runs.
        profiler: Optional Profiler instance for timing statistics.
    """
    gravity: tuple[float, float] = (0.0, GRAVITY)
    dt: float = TICK_DURATION
    relax_iters: int = RELAX_ITERS
    erase_radius: float = ERASE_RADIUS
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    profiler: Profiler | None = None

    def __post_init__(self) -> None:
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if self.relax_iters < 0:
            raise ValueError(f"relax_iters must be non-negative, got {self.relax_iters}")
        if self.erase_radius < 0:
            raise ValueError(f"erase_radius must be non-negative, got {self.erase_radius}")
        self._g = f64(self.gravity)
        self._points = PointArena()
        self._links: dict[tuple[int, int], Link] = {}

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def link_count(self) -> int:
        return len(self._links)

    def point(self, key: int) -> Point | None:
        """The live point stored under key, or None."""
        return self._points.get(key)

    def keys(self) -> Iterator[int]:
        """Keys of all live points, ascending."""
        return self._points.keys()

    def links(self) -> Iterator[Link]:
        return iter(self._links.values())

    def has_link(self, key1: int, key2: int) -> bool:
        return link_key(key1, key2) in self._links

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_point(self, position: tuple[float, float] | np.ndarray) -> int:
        """
        Add an unlocked point at rest.

        Returns:
            The new point's key.
        """
        return self._points.insert(Point(position))

    def add_link(self, key1: int, key2: int) -> None:
        """
        Link two points at their current distance.

        Linking a point to itself toggles its lock instead; this is the
        editor's "click a point without dragging" gesture. Unknown keys and
        already-linked pairs are ignored.
        """
        if key1 == key2:
            self.toggle_locked(key1)
            return
        p1, p2 = self._points.get(key1), self._points.get(key2)
        if p1 is None or p2 is None:
            return
        k = link_key(key1, key2)
        if k not in self._links:
            self._links[k] = Link.between(key1, p1, key2, p2)

    def toggle_locked(self, key: int) -> None:
        point = self._points.get(key)
        if point is not None:
            point.locked = not point.locked

    def remove_point(self, key: int) -> bool:
        """
        Remove a point together with every link naming it.

        The links go first, so by the time the key is back on the arena's
        free list nothing refers to it.

        Returns:
            True if a point was removed.
        """
        if key not in self._points:
            return False
        for k in [k for k, link in self._links.items() if link.names(key)]:
            del self._links[k]
        self._points.remove(key)
        return True

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance the network by exactly one fixed interval dt."""
        with self._section("integrate"):
            integrate_points(self._points.values(), self._g, self.dt)
        with self._section("relax"):
            relax_links(self._points, list(self._links.values()), self.relax_iters, self.rng)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def nearest_point(
        self,
        position: tuple[float, float] | np.ndarray,
        radius: float,
    ) -> int | None:
        """
        Key of a point strictly within radius of position.

        Points are scanned in key order and the first hit is returned, which
        is not necessarily the closest one. Returns None when no point
        qualifies.
        """
        pos = f64(position)
        r2 = radius * radius
        for key, point in self._points.items():
            if norm2(pos - point.position) < r2:
                return key
        return None

    # ------------------------------------------------------------------
    # Swept erasure
    # ------------------------------------------------------------------

    def erase_points(
        self,
        last: tuple[float, float] | np.ndarray,
        current: tuple[float, float] | np.ndarray,
        radius: float | None = None,
    ) -> list[int]:
        """
        Remove every point the eraser touched while moving from last to current.

        Each point is tested against its own motion over the last tick, so a
        falling point is caught even if it and the eraser swapped sides.
        Removal cascades to links.

        Args:
            last: Eraser position at the start of the interval.
            current: Eraser position at the end of the interval.
            radius: Eraser radius; defaults to erase_radius.

        Returns:
            Keys of the removed points.
        """
        m0, m1 = f64(last), f64(current)
        r = self.erase_radius if radius is None else radius
        with self._section("erase_points"):
            hit = [
                key for key, p in self._points.items()
                if point_swept(m0, m1, p.last_position, p.position, r)
            ]
            for key in hit:
                self.remove_point(key)
        if hit:
            logger.debug("Erased %d point(s): %s", len(hit), hit)
        return hit

    def erase_links(
        self,
        last: tuple[float, float] | np.ndarray,
        current: tuple[float, float] | np.ndarray,
    ) -> list[tuple[int, int]]:
        """
        Remove every link the eraser crossed while moving from last to current.

        Returns:
            Keys of the removed links.
        """
        m0, m1 = f64(last), f64(current)
        with self._section("erase_links"):
            hit = []
            for k in self._links:
                a, b = self._points.get(k[0]), self._points.get(k[1])
                if link_swept(m0, m1, a.last_position, a.position, b.last_position, b.position):
                    hit.append(k)
            for k in hit:
                del self._links[k]
        if hit:
            logger.debug("Erased %d link(s): %s", len(hit), hit)
        return hit

    # ------------------------------------------------------------------
    # Interpolated sampling
    # ------------------------------------------------------------------

    def sample_positions(self, t: float) -> list[tuple[np.ndarray, bool]]:
        """
        Interpolated position and lock state of every point.

        Args:
            t: Fraction of the current tick elapsed, in [0, 1).
        """
        return [(p.interpolate(t), p.locked) for p in self._points.values()]

    def sample_link_endpoints(self, t: float) -> list[tuple[np.ndarray, np.ndarray]]:
        """Interpolated endpoint positions of every link."""
        out = []
        for a, b in self._links:
            out.append((self._points.get(a).interpolate(t), self._points.get(b).interpolate(t)))
        return out

    def sample_position(self, key: int, t: float) -> np.ndarray | None:
        """Interpolated position of one point, or None for an unknown key."""
        point = self._points.get(key)
        if point is None:
            return None
        return point.interpolate(t)

    # ------------------------------------------------------------------
    # Copying
    # ------------------------------------------------------------------

    def clone(self) -> "Network":
        """
        Independent deep copy.

        Points and the generator state are copied; links are immutable and
        shared by value. The profiler, if any, is shared so that timings of
        copies accumulate in one place.
        """
        other = Network(
            gravity=self.gravity,
            dt=self.dt,
            relax_iters=self.relax_iters,
            erase_radius=self.erase_radius,
            rng=copy.deepcopy(self.rng),
            profiler=self.profiler,
        )
        other._points = self._points.copy()
        other._links = dict(self._links)
        logger.debug("Cloned network: %d point(s), %d link(s)", other.point_count, other.link_count)
        return other
