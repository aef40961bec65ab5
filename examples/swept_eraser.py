# examples/swept_eraser.py
from rope_sim import Network

net = Network()
a = net.add_point((0.0, 0.0))
b = net.add_point((0.0, 100.0))
c = net.add_point((100.0, 100.0))
net.add_link(a, b)
net.add_link(b, c)

# A single fast drag: both mouse samples are far from everything, but the
# path between them crosses link a-b and passes over point c.
print("links erased:", net.erase_links((-500.0, 50.0), (500.0, 50.0)))
print("points erased:", net.erase_points((100.0, -500.0), (100.0, 500.0), radius=12.0))
print("left:", net.point_count, "point(s),", net.link_count, "link(s)")
