import numpy as np
import pytest
from rope_sim.network import Network
from rope_sim.arena import PointArena
from rope_sim.types import Point, Link, link_key


def test_add_point_at_rest():
    """New points are unlocked with zero initial velocity."""
    net = Network()
    k = net.add_point((10.0, 20.0))
    p = net.point(k)

    assert net.point_count == 1
    assert not p.locked
    np.testing.assert_array_equal(p.position, [10.0, 20.0])
    np.testing.assert_array_equal(p.last_position, p.position)
    assert p.last_position is not p.position


def test_add_point_copies_input_array():
    """The caller's array is not aliased by the stored point."""
    net = Network()
    pos = np.array([1.0, 2.0])
    k = net.add_point(pos)
    pos[0] = 99.0
    assert net.point(k).position[0] == 1.0


def test_arena_reuses_most_recent_slot():
    """Freed keys are handed out again, most recently freed first."""
    arena = PointArena()
    keys = [arena.insert(Point((i, 0))) for i in range(4)]
    assert keys == [0, 1, 2, 3]

    arena.remove(1)
    arena.remove(2)
    assert len(arena) == 2
    assert 1 not in arena and 2 not in arena

    assert arena.insert(Point((9, 9))) == 2
    assert arena.insert(Point((8, 8))) == 1
    assert arena.insert(Point((7, 7))) == 4
    assert list(arena.keys()) == [0, 1, 2, 3, 4]


def test_arena_unknown_keys():
    arena = PointArena()
    arena.insert(Point((0, 0)))
    assert arena.get(-1) is None
    assert arena.get(5) is None
    assert arena.get("0") is None
    assert arena.remove(5) is None
    assert len(arena) == 1


def test_link_rest_length_fixed_at_creation():
    """Rest length is the distance at creation and never recomputed."""
    net = Network()
    a = net.add_point((0.0, 0.0))
    b = net.add_point((30.0, 40.0))
    net.add_link(a, b)

    net.point(b).position = np.array([300.0, 400.0])
    (link,) = net.links()
    assert link.rest_length == pytest.approx(50.0)
    assert link.keys == (a, b)


def test_pair_dedup():
    """add_link(a, b) then add_link(b, a) leaves exactly one link."""
    net = Network()
    a = net.add_point((0.0, 0.0))
    b = net.add_point((10.0, 0.0))

    net.add_link(a, b)
    net.add_link(b, a)
    net.add_link(a, b)

    assert net.link_count == 1
    assert net.has_link(a, b) and net.has_link(b, a)


def test_link_identity_is_unordered():
    assert link_key(5, 2) == link_key(2, 5) == (2, 5)
    assert Link((2, 5), 1.0) == Link((2, 5), 7.0)


def test_self_link_toggles_lock():
    """add_link(k, k) never creates a link and flips the lock flag."""
    net = Network()
    k = net.add_point((0.0, 0.0))

    net.add_link(k, k)
    assert net.point(k).locked
    assert net.link_count == 0

    net.add_link(k, k)
    assert not net.point(k).locked
    assert net.link_count == 0


def test_invalid_keys_are_ignored():
    """Mutations with unknown keys are silent no-ops."""
    net = Network()
    a = net.add_point((0.0, 0.0))

    net.add_link(a, 7)
    net.add_link(7, 8)
    net.toggle_locked(42)
    net.add_link(42, 42)

    assert net.link_count == 0
    assert net.point_count == 1
    assert not net.remove_point(42)
    assert net.nearest_point((0.0, 0.0), 1.0) == a


def test_remove_point_cascades():
    """After remove_point(k) no surviving link names k."""
    net = Network()
    hub = net.add_point((0.0, 0.0))
    spokes = [net.add_point((10.0 * np.cos(a), 10.0 * np.sin(a))) for a in (0.0, 2.0, 4.0)]
    for s in spokes:
        net.add_link(hub, s)
    net.add_link(spokes[0], spokes[1])

    assert net.remove_point(hub)
    assert net.point(hub) is None
    assert net.link_count == 1
    assert all(not link.names(hub) for link in net.links())


def test_reused_key_has_no_stale_links():
    """A slot reused after removal starts without links."""
    net = Network()
    a = net.add_point((0.0, 0.0))
    b = net.add_point((10.0, 0.0))
    net.add_link(a, b)

    net.remove_point(b)
    c = net.add_point((50.0, 50.0))
    assert c == b
    assert not net.has_link(a, c)
    assert net.link_count == 0


def test_nearest_point_strict_radius():
    net = Network()
    k = net.add_point((100.0, 100.0))

    assert net.nearest_point((105.0, 100.0), 12.0) == k
    assert net.nearest_point((112.0, 100.0), 12.0) is None
    assert net.nearest_point((100.0, 100.0), 0.0) is None
    assert Network().nearest_point((0.0, 0.0), 100.0) is None


def test_nearest_point_double_radius_guard():
    """The editor's 2x radius check sees points the snap radius misses."""
    net = Network()
    k = net.add_point((0.0, 0.0))
    assert net.nearest_point((15.0, 0.0), 12.0) is None
    assert net.nearest_point((15.0, 0.0), 24.0) == k


def test_clone_is_independent():
    """Mutating a clone never affects its source, and vice versa."""
    src = Network(rng=np.random.default_rng(1))
    a = src.add_point((0.0, 0.0))
    b = src.add_point((0.0, 50.0))
    src.toggle_locked(a)
    src.add_link(a, b)

    sim = src.clone()
    for _ in range(5):
        sim.tick()
    sim.toggle_locked(a)
    sim.add_point((500.0, 500.0))
    sim.remove_point(b)

    assert src.point_count == 2
    assert src.link_count == 1
    assert src.point(a).locked
    np.testing.assert_array_equal(src.point(b).position, [0.0, 50.0])
    np.testing.assert_array_equal(src.point(b).last_position, [0.0, 50.0])

    src.add_point((1.0, 1.0))
    assert sim.point_count == 2


def test_clone_keeps_configuration():
    src = Network(gravity=(0.0, -9.81), dt=0.01, relax_iters=3, erase_radius=4.0)
    sim = src.clone()
    assert sim.gravity == (0.0, -9.81)
    assert sim.dt == 0.01
    assert sim.relax_iters == 3
    assert sim.erase_radius == 4.0
    assert sim.rng is not src.rng


@pytest.mark.parametrize("kwargs", [
    {"dt": 0.0},
    {"dt": -1.0},
    {"relax_iters": -1},
    {"erase_radius": -0.5},
])
def test_invalid_configuration(kwargs):
    with pytest.raises(ValueError):
        Network(**kwargs)
