# MIT License (see LICENSE)
"""
rope_sim - An interactive point-mass and stick physics sandbox.

A network of point masses joined by rigid-length links, simulated at a
fixed rate with position Verlet integration and randomized iterative link
relaxation, with swept (continuous) erasure for fast mouse drags.

Main entry points:
    - Network: Points, links, the tick solver, snapping and erasure.
    - Sandbox: Headless edit/run driver consuming input snapshots.
    - Point, Link: The stored entities.

Submodules:
    - core: Verlet integration, relaxation, rigidity diagnostics.
    - collision: Swept point and link tests used by the eraser.
    - renderer: Optional visualization adapters.

Example:
    from rope_sim import Network

    net = Network()
    a = net.add_point((100, 100))
    b = net.add_point((150, 100))
    net.toggle_locked(a)
    net.add_link(a, b)
    sim = net.clone()
    sim.tick()
"""
from .network import Network
from .types import Point, Link
from .sandbox import Sandbox, Inputs, Button
from .profiler import Profiler
from .logging_config import setup_logging

__all__ = [
    # Engine
    "Network",
    "Point",
    "Link",
    # Driver
    "Sandbox",
    "Inputs",
    "Button",
    # Tooling
    "Profiler",
    "setup_logging",
]
