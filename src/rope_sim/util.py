# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

All functions operate on 2D vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Always returns a fresh array, so callers can hand in tuples, lists or
    arrays they keep using without aliasing the stored copy.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def dot(a: np.ndarray, b: np.ndarray) -> float:
    """Scalar dot product of two 2D vectors."""
    return float(a[0] * b[0] + a[1] * b[1])


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.

    Returns zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64)
    return v / n


def cross2(a: np.ndarray, b: np.ndarray) -> float:
    """
    2D cross product (perp-dot): a × b = ax*by - ay*bx.

    Zero when a and b are parallel; positive when b is counterclockwise
    from a.
    """
    return float(a[0] * b[1] - a[1] * b[0])


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Linear interpolation a + (b - a)*t, written as a*(1-t) + b*t."""
    return a * (1.0 - t) + b * t
