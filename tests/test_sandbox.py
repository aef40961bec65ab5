import numpy as np
import pytest
from rope_sim.network import Network
from rope_sim.renderer import BufferedRenderer
from rope_sim.sandbox import (
    Button,
    CreatingLine,
    CreatingLink,
    Deleting,
    Inputs,
    Panning,
    Sandbox,
)

L, R, ALT, TOGGLE, CLEAR = (
    Button.LEFT_MOUSE,
    Button.RIGHT_MOUSE,
    Button.ALTERNATE,
    Button.TOGGLE_SIMULATING,
    Button.CLEAR,
)
FRAME = 1 / 60


def _frame(sb, inputs, pressed, mouse, dt=FRAME):
    inputs.update(pressed, mouse)
    sb.update(dt, inputs)


def _sandbox():
    return Sandbox(network_factory=lambda: Network(rng=np.random.default_rng(0)))


def test_click_creates_point_on_release():
    sb, inp = _sandbox(), Inputs()
    _frame(sb, inp, {L}, (100, 100))
    assert sb.saved.point_count == 0

    _frame(sb, inp, set(), (100, 100))
    assert sb.saved.point_count == 1
    assert sb.saved.nearest_point((100, 100), 1.0) is not None
    assert sb.action is None


def test_click_near_existing_point_is_refused():
    """No new point within twice the snap radius of an existing one."""
    sb, inp = _sandbox(), Inputs()
    sb.saved.add_point((100, 100))

    _frame(sb, inp, {L}, (115, 100))
    _frame(sb, inp, set(), (115, 100))
    assert sb.saved.point_count == 1


def test_drag_between_points_creates_link():
    sb, inp = _sandbox(), Inputs()
    a = sb.saved.add_point((100, 100))
    b = sb.saved.add_point((200, 100))

    _frame(sb, inp, {L}, (101, 100))
    assert isinstance(sb.action, CreatingLink)
    _frame(sb, inp, {L}, (150, 130))
    assert sb.action.end_key is None
    _frame(sb, inp, {L}, (199, 100))
    assert sb.action.end_key == b
    _frame(sb, inp, set(), (199, 100))

    assert sb.saved.has_link(a, b)
    assert sb.action is None


def test_click_on_point_toggles_lock():
    sb, inp = _sandbox(), Inputs()
    k = sb.saved.add_point((100, 100))

    _frame(sb, inp, {L}, (100, 100))
    _frame(sb, inp, set(), (100, 100))
    assert sb.saved.point(k).locked
    assert sb.saved.link_count == 0


def test_drag_release_in_empty_space_does_nothing():
    sb, inp = _sandbox(), Inputs()
    sb.saved.add_point((100, 100))

    _frame(sb, inp, {L}, (100, 100))
    _frame(sb, inp, set(), (400, 400))
    assert sb.saved.point_count == 1
    assert sb.saved.link_count == 0


def test_right_drag_erases_while_paused():
    sb, inp = _sandbox(), Inputs()
    a = sb.saved.add_point((0, 0))
    b = sb.saved.add_point((0, 100))
    sb.saved.add_link(a, b)

    _frame(sb, inp, {R}, (-10, 50))
    assert isinstance(sb.action, Deleting)
    _frame(sb, inp, {R}, (10, 50))
    assert sb.saved.link_count == 0
    assert sb.saved.point_count == 2

    _frame(sb, inp, {R}, (0, 105))
    assert sb.saved.point(b) is None
    _frame(sb, inp, set(), (0, 105))
    assert sb.action is None


def test_line_mode_chains_hovered_points():
    sb, inp = _sandbox(), Inputs()
    keys = [sb.saved.add_point((50 * i, 0)) for i in range(3)]

    _frame(sb, inp, {ALT}, (0, 0))
    assert isinstance(sb.action, CreatingLine)
    _frame(sb, inp, {ALT}, (0, 0))
    assert sb.action.selected[0] == keys[0]
    _frame(sb, inp, {ALT}, (50, 0))
    _frame(sb, inp, {ALT}, (100, 0))

    assert sb.saved.has_link(keys[0], keys[1])
    assert sb.saved.has_link(keys[1], keys[2])
    assert not sb.saved.has_link(keys[0], keys[2])

    _frame(sb, inp, set(), (100, 0))
    assert sb.action is None


def test_line_mode_drops_points():
    sb, inp = _sandbox(), Inputs()

    _frame(sb, inp, {ALT, L}, (300, 300))
    _frame(sb, inp, {ALT, L}, (300, 300))
    _frame(sb, inp, {ALT, L}, (400, 300))

    assert sb.saved.point_count == 2
    assert sb.saved.link_count == 1


def test_pan_while_paused():
    sb, inp = _sandbox(), Inputs()

    _frame(sb, inp, {ALT}, (50, 50))
    _frame(sb, inp, {ALT, R}, (50, 50))
    assert isinstance(sb.action, Panning)
    _frame(sb, inp, {ALT, R}, (20, 50))
    np.testing.assert_array_equal(sb.camera, [30.0, 0.0])

    # new points land in world coordinates
    _frame(sb, inp, set(), (20, 50))
    assert sb.action is None
    _frame(sb, inp, {L}, (0, 0))
    _frame(sb, inp, set(), (0, 0))
    assert sb.saved.nearest_point((30, 0), 1.0) is not None


def test_clear_discards_edits():
    sb, inp = _sandbox(), Inputs()
    sb.saved.add_point((0, 0))
    sb.camera = np.array([5.0, 5.0])

    _frame(sb, inp, {CLEAR}, (0, 0))
    assert sb.saved.point_count == 0
    np.testing.assert_array_equal(sb.camera, [0.0, 0.0])


def test_toggle_simulation_runs_a_copy():
    """Starting clones the edited network and ticks it once; stopping shows the edit again."""
    sb, inp = _sandbox(), Inputs()
    k = sb.saved.add_point((100, 100))

    _frame(sb, inp, {TOGGLE}, (0, 0), dt=0.0)
    assert sb.simulating
    assert sb.network is sb.active
    assert sb.active.point(k).position[1] > 100.0
    np.testing.assert_array_equal(sb.saved.point(k).position, [100.0, 100.0])

    # held key does not toggle again
    _frame(sb, inp, {TOGGLE}, (0, 0), dt=0.0)
    assert sb.simulating

    _frame(sb, inp, set(), (0, 0), dt=0.0)
    _frame(sb, inp, {TOGGLE}, (0, 0), dt=0.0)
    assert not sb.simulating
    assert sb.network is sb.saved


def test_fixed_step_accumulator():
    sb, inp = _sandbox(), Inputs()
    k = sb.saved.add_point((0, 0))
    _frame(sb, inp, {TOGGLE}, (0, 0), dt=0.0)
    y1 = sb.active.point(k).position[1]

    dt = sb.active.dt
    _frame(sb, inp, set(), (0, 0), dt=2.5 * dt)

    assert sb.interpolation == pytest.approx(0.5)
    # two more ticks from rest: 1 + 2 + 3 = 6 units of g dt²
    assert sb.active.point(k).position[1] == pytest.approx(6 * y1)


def test_erase_while_running():
    """The eraser path recorded at the previous tick is applied to the running copy."""
    sb, inp = _sandbox(), Inputs()
    k = sb.saved.add_point((100, 100))
    sb.saved.toggle_locked(k)
    _frame(sb, inp, {TOGGLE}, (0, 0), dt=0.0)

    dt = sb.active.dt
    _frame(sb, inp, {R}, (90, 100), dt=dt)
    assert isinstance(sb.action, Deleting)
    _frame(sb, inp, {R}, (110, 100), dt=dt)

    assert sb.active.point_count == 0
    assert sb.saved.point_count == 1


def test_render_draws_link_preview():
    sb, inp = _sandbox(), Inputs()
    a = sb.saved.add_point((100, 100))
    sb.saved.add_point((300, 100))
    sb.saved.toggle_locked(a)

    _frame(sb, inp, {L}, (100, 100))
    _frame(sb, inp, {L}, (160, 100))

    renderer = BufferedRenderer()
    sb.render(renderer)
    (frame,) = renderer.frames
    assert len(frame["points"]) == 2
    assert frame["points"][0]["locked"]
    assert frame["links"] == [[[100.0, 100.0], [160.0, 100.0]]]


def test_render_hides_short_preview():
    sb, inp = _sandbox(), Inputs()
    sb.saved.add_point((100, 100))

    _frame(sb, inp, {L}, (100, 100))
    _frame(sb, inp, {L}, (105, 100))

    renderer = BufferedRenderer()
    sb.render(renderer)
    assert renderer.frames[0]["links"] == []


def test_render_applies_camera():
    sb = _sandbox()
    sb.saved.add_point((100, 100))
    sb.camera = np.array([40.0, 10.0])

    renderer = BufferedRenderer()
    sb.render(renderer)
    assert renderer.frames[0]["points"][0]["position"] == [60.0, 90.0]
