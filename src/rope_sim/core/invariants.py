# MIT License (see LICENSE)
"""
Rigidity diagnostics for a rope network.

Relaxation only approximates simultaneous link satisfaction, so the
residual length error is the quantity worth watching when tuning the number
of passes or the tick rate.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ..util import norm

if TYPE_CHECKING:
    from ..network import Network


def link_length_errors(network: "Network") -> dict[tuple[int, int], float]:
    """
    Absolute length error of every link.

    Returns:
        Mapping of link keys to |current_length - rest_length|.
    """
    out = {}
    for link in network.links():
        a, b = (network.point(k) for k in link.keys)
        out[link.keys] = abs(norm(a.position - b.position) - link.rest_length)
    return out


def max_relative_stretch(network: "Network") -> float:
    """
    Largest length error relative to rest length, over all links.

    Links with zero rest length are skipped. Returns 0.0 for a network
    without links.
    """
    worst = 0.0
    for link in network.links():
        if link.rest_length <= 0.0:
            continue
        a, b = (network.point(k) for k in link.keys)
        err = abs(norm(a.position - b.position) - link.rest_length) / link.rest_length
        worst = max(worst, err)
    return worst
