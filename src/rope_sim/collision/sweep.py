# MIT License (see LICENSE)
"""
Continuous (swept) intersection tests for the eraser.

The eraser moves from one mouse position to the next during a frame while
every point may itself have moved from last_position to position. Testing
only the end states lets a fast drag skip straight over a point or a thin
link, so both tests work with the full motion over the interval t in [0, 1],
everything moving linearly in t.

Key concepts:
- Relative frame: subtracting a point's own trajectory from the eraser's
  turns "moving eraser vs moving point" into "moving eraser vs origin".
- Perp-dot crossing: the eraser lies on the line through a link exactly
  when the perp-dot of (eraser - a) and (b - a) is zero. With everything
  linear in t that is a quadratic in t.

All vector arguments are float64 arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np

from ..util import cross2, dot, lerp


def segment_origin_distance_sq(m0: np.ndarray, m1: np.ndarray) -> float:
    """
    Squared distance from the origin to the segment m0-m1.

    |m0 + t(m1 - m0)|² = a t² + 2 b t + c with a = |m1 - m0|², b = m0·(m1 - m0)
    and c = |m0|². The interior minimum sits at t = -b/a and is only used
    when it falls strictly inside (0, 1); the endpoints cover the rest.
    """
    c = dot(m0, m0)
    best = min(c, dot(m1, m1))
    diff = m1 - m0
    a = dot(diff, diff)
    if a != 0.0:
        b = dot(m0, diff)
        t = -b / a
        if 0.0 < t < 1.0:
            best = min(best, max(0.0, c - b * b / a))
    return best


def point_swept(
    eraser_start: np.ndarray,
    eraser_end: np.ndarray,
    point_start: np.ndarray,
    point_end: np.ndarray,
    radius: float,
) -> bool:
    """
    Whether a moving eraser comes strictly within radius of a moving point.

    Args:
        eraser_start: Eraser position at t=0.
        eraser_end: Eraser position at t=1.
        point_start: Point position at t=0 (its last_position).
        point_end: Point position at t=1 (its position).
        radius: Eraser radius.
    """
    m0 = eraser_start - point_start
    m1 = eraser_end - point_end
    return segment_origin_distance_sq(m0, m1) < radius * radius


def _inside_link(
    m0: np.ndarray,
    m1: np.ndarray,
    b0: np.ndarray,
    b1: np.ndarray,
    t: float,
) -> bool:
    """
    At time t, whether the eraser projects strictly between the link ends.

    Coordinates are relative to the link's first endpoint, so the link runs
    from the origin to b(t).
    """
    if not 0.0 <= t < 1.0:
        return False
    m = lerp(m0, m1, t)
    b = lerp(b0, b1, t)
    d = dot(m, b)
    return 0.0 < d < dot(b, b)


def link_crossing_time(
    eraser_start: np.ndarray,
    eraser_end: np.ndarray,
    a_start: np.ndarray,
    a_end: np.ndarray,
    b_start: np.ndarray,
    b_end: np.ndarray,
) -> float | None:
    """
    Earliest time in [0, 1) at which a moving eraser crosses a moving link.

    Works relative to endpoint a: m(t) is the eraser and b(t) the other
    endpoint. The crossing condition m(t) × b(t) = 0 expands to

        A t² + B t + C = 0
        A = (m1 - m0) × (b1 - b0)
        B = m0 × b1 + m1 × b0 + 2 (b0 × m0)
        C = m0 × b0

    Each real root is accepted only if the eraser actually lies within the
    link's extent at that time (see _inside_link). Degenerate cases:
        - A == 0: linear, single root -C/B.
        - A == B == 0: C is constant for all t. Exactly zero means the
          eraser stays on the link's line the whole interval; t = 0.5 is
          tested. Otherwise there is no crossing.

    Roots are tried in ascending order.

    Returns:
        The smallest valid crossing time, or None if the eraser never
        crosses the link during the interval.
    """
    m0 = eraser_start - a_start
    m1 = eraser_end - a_end
    b0 = b_start - a_start
    b1 = b_end - a_end

    qa = cross2(m1 - m0, b1 - b0)
    qb = cross2(m0, b1) + cross2(m1, b0) + 2.0 * cross2(b0, m0)
    qc = cross2(m0, b0)

    if qa == 0.0:
        if qb == 0.0:
            candidates = [0.5] if qc == 0.0 else []
        else:
            candidates = [-qc / qb]
    else:
        disc = qb * qb - 4.0 * qa * qc
        if disc < 0.0:
            return None
        s = float(np.sqrt(disc))
        candidates = sorted(((-qb - s) / (2.0 * qa), (-qb + s) / (2.0 * qa)))

    for t in candidates:
        if _inside_link(m0, m1, b0, b1, t):
            return t
    return None


def link_swept(
    eraser_start: np.ndarray,
    eraser_end: np.ndarray,
    a_start: np.ndarray,
    a_end: np.ndarray,
    b_start: np.ndarray,
    b_end: np.ndarray,
) -> bool:
    """Whether the moving eraser crosses the moving link a-b at all."""
    return link_crossing_time(eraser_start, eraser_end, a_start, a_end, b_start, b_end) is not None
