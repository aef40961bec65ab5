# examples/hanging_rope.py
from rope_sim import Network, setup_logging
from rope_sim.core import max_relative_stretch
from rope_sim.renderer import DebugRenderer
import numpy as np

setup_logging(quiet=False)

net = Network(rng=np.random.default_rng(0))

# horizontal rope pinned at the left end, released to swing down
keys = [net.add_point((100.0 + 25.0 * i, 100.0)) for i in range(8)]
net.toggle_locked(keys[0])
for a, b in zip(keys, keys[1:]):
    net.add_link(a, b)

sim = net.clone()
for _ in range(64):
    sim.tick()

print("tip:", sim.point(keys[-1]).position)
print("max stretch:", max_relative_stretch(sim))
DebugRenderer().render_network(sim, t=0.5)
