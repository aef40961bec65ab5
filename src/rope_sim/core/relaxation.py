# MIT License (see LICENSE)
"""
Iterative relaxation of fixed-length links.

Each link is satisfied in isolation by moving its endpoints symmetrically
about their midpoint until they are exactly rest_length apart. A locked
endpoint stays put, so its partner only covers half the error in that
visit. Sweeping the full link set several times approximates simultaneous
satisfaction of every link (Gauss-Seidel style).

Sequential sweeps in a fixed order bias the result towards whichever links
are visited last, so every pass visits links in a fresh random permutation.
The permutation source is an injected numpy Generator; seed it to make a
run reproducible.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..arena import PointArena
from ..types import Link, Point
from ..util import unit


def satisfy_link(p1: Point, p2: Point, rest_length: float) -> None:
    """
    Move p1 and p2 so that |p1 - p2| == rest_length.

    Locked points are not moved. Coincident points have no defined
    direction: the offset is zero and both unlocked points snap to their
    (shared) midpoint, i.e. the link is left as it is.
    """
    if p1.locked and p2.locked:
        return
    centre = 0.5 * (p1.position + p2.position)
    offset = unit(p1.position - p2.position) * (0.5 * rest_length)
    if not p1.locked:
        p1.position = centre + offset
    if not p2.locked:
        p2.position = centre - offset


def relax_links(
    points: PointArena,
    links: Sequence[Link],
    iters: int,
    rng: np.random.Generator,
) -> None:
    """
    Run iters relaxation passes over links.

    Args:
        points: Arena holding every endpoint referenced by links.
        links: Links to satisfy. Must only name live points.
        iters: Number of passes.
        rng: Source of the per-pass visiting order.
    """
    n = len(links)
    if n == 0:
        return
    for _ in range(iters):
        for i in rng.permutation(n):
            link = links[i]
            a, b = link.keys
            satisfy_link(points.get(a), points.get(b), link.rest_length)
