# MIT License (see LICENSE)
"""
Core solver components.

This subpackage provides:
    - Integrators: position Verlet for point masses.
    - Relaxation: randomized iterative satisfaction of fixed-length links.
    - Invariants: link length error diagnostics.

Typical usage:
    from rope_sim.core import integrate_points, relax_links

    integrate_points(arena.values(), np.array([0.0, 1000.0]), dt=1/32)
    relax_links(arena, links, iters=8, rng=np.random.default_rng(0))
"""
from .integrators import verlet_step, integrate_points
from .relaxation import satisfy_link, relax_links
from .invariants import link_length_errors, max_relative_stretch

__all__ = [
    # Integrators
    "verlet_step",
    "integrate_points",
    # Relaxation
    "satisfy_link",
    "relax_links",
    # Diagnostics
    "link_length_errors",
    "max_relative_stretch",
]
