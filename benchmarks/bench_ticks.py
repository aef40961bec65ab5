"""
Microbenchmark: time per tick vs cloth size.
Run:
  python benchmarks/bench_ticks.py
"""
import time
import numpy as np
from rope_sim import Network, Profiler
from rope_sim.core import max_relative_stretch


def run(side: int, ticks: int = 64):
    prof = Profiler()
    net = Network(rng=np.random.default_rng(12345), profiler=prof)

    # square cloth pinned along its top row
    spacing = 20.0
    keys = {}
    for iy in range(side):
        for ix in range(side):
            keys[ix, iy] = net.add_point((spacing * ix, spacing * iy))
    for ix in range(side):
        net.toggle_locked(keys[ix, 0])
    for iy in range(side):
        for ix in range(side):
            if ix + 1 < side:
                net.add_link(keys[ix, iy], keys[ix + 1, iy])
            if iy + 1 < side:
                net.add_link(keys[ix, iy], keys[ix, iy + 1])

    t0 = time.perf_counter()
    for _ in range(ticks):
        net.tick()
    t1 = time.perf_counter()

    return (t1 - t0) / ticks, max_relative_stretch(net), prof.stats.summary()


if __name__ == "__main__":
    for side in [5, 10, 20, 30]:
        per_tick, stretch, summary = run(side)
        print(f"side={side:3d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}  stretch={stretch:.4f}")
        for k in ["integrate", "relax"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
