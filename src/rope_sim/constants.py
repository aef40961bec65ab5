# MIT License (see LICENSE)
"""
Default simulation constants.

Positions are in screen pixels with +y pointing down, so gravity is a
positive y acceleration. These are the defaults for the Network fields of
the same meaning; tests construct networks with their own values.
"""
from __future__ import annotations

# Gravitational acceleration in px/s².
GRAVITY: float = 1000.0

# Fixed physics rate. The driver accumulates wall-clock time and ticks
# once per TICK_DURATION.
TICKS_PER_SECOND: int = 32
TICK_DURATION: float = 1.0 / TICKS_PER_SECOND

# Relaxation passes over the full link set per tick.
RELAX_ITERS: int = 8

# Eraser radius in px. The editor snaps links to points within this radius
# and refuses to create a point within twice that distance.
ERASE_RADIUS: float = 12.0
