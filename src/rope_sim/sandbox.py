# MIT License (see LICENSE)
"""
Headless interactive driver for a rope network.

The Sandbox turns per-frame input snapshots into network edits and fixed
rate ticks, without any windowing dependency. A front end polls its input
backend, feeds an Inputs snapshot to Sandbox.update() once per frame, then
calls Sandbox.render() with a RendererAdapter.

Controls (in terms of Button):
    LEFT_MOUSE              click empty space: new point (on release)
                            drag point -> point: new link
                            click a point: toggle its lock
    RIGHT_MOUSE             drag: erase links and points along the path
    ALTERNATE               line mode: hover points to chain links,
                            + LEFT_MOUSE drops new points on the way
    ALTERNATE + RIGHT_MOUSE pan the camera
    TOGGLE_SIMULATING       start/stop the simulation (edge-triggered)
    CLEAR                   discard the edited network (while paused)

Two networks are kept: `saved` is what the user edits while paused and
`active` is a clone of it that runs while simulating. Stopping the
simulation returns to the untouched edited network.
"""
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Union

import numpy as np

from .constants import ERASE_RADIUS
from .network import Network
from .util import f64, norm2

if TYPE_CHECKING:
    from .renderer.adapter import RendererAdapter

logger = logging.getLogger("rope_sim")


class Button(enum.Enum):
    LEFT_MOUSE = enum.auto()
    RIGHT_MOUSE = enum.auto()
    ALTERNATE = enum.auto()
    TOGGLE_SIMULATING = enum.auto()
    CLEAR = enum.auto()


class Inputs:
    """
    Input state for the current and the previous frame.

    Example:
        inputs = Inputs()
        inputs.update({Button.LEFT_MOUSE}, (120, 80))
        if inputs[Button.LEFT_MOUSE] and not inputs.last(Button.LEFT_MOUSE):
            ...  # just pressed
    """

    def __init__(self) -> None:
        self._current: frozenset[Button] = frozenset()
        self._last: frozenset[Button] = frozenset()
        self.mouse_position = np.zeros(2, dtype=np.float64)
        self.last_mouse = np.zeros(2, dtype=np.float64)

    def update(self, pressed: Iterable[Button], mouse: tuple[float, float] | np.ndarray) -> None:
        """Start a new frame: the current snapshot becomes the last one."""
        self._last = self._current
        self._current = frozenset(pressed)
        self.last_mouse = self.mouse_position
        self.mouse_position = f64(mouse)

    def __getitem__(self, button: Button) -> bool:
        return button in self._current

    def last(self, button: Button) -> bool:
        """Whether button was held in the previous frame."""
        return button in self._last


# =============================================================================
# Edit actions
# =============================================================================

@dataclass
class CreatingPoint:
    """Left button held over empty space; a point is placed on release."""


@dataclass
class CreatingLink:
    """
    Dragging a new link out of point `start`.

    Attributes:
        start: Key the drag started on.
        end_key: Point currently snapped to, if any.
        end_mouse: Screen mouse position when not snapped.
    """
    start: int
    end_key: int | None = None
    end_mouse: np.ndarray | None = None


@dataclass
class CreatingLine:
    """
    Line mode. `selected` is the last chained key and the screen mouse
    position, once a point has been picked up.
    """
    selected: tuple[int, np.ndarray] | None = None


@dataclass
class Deleting:
    """Right-drag erasing; `last` is the eraser position in world coordinates."""
    last: np.ndarray


@dataclass
class Panning:
    """Camera drag."""


Action = Union[CreatingPoint, CreatingLink, CreatingLine, Deleting, Panning, None]


# =============================================================================
# Sandbox
# =============================================================================

@dataclass
class Sandbox:
    """
    Edit/run controller around a pair of networks.

    Attributes:
        network_factory: Builds empty networks (initially and on clear). Its
                         networks' dt sets the tick rate.
        snap_radius: Radius for snapping the mouse to points. New points are
                     refused within twice this radius of an existing one.
        saved: Network being edited.
        active: Running copy of saved while simulating.
        accumulator: Wall-clock time not yet consumed by ticks.
        camera: World position of the screen origin.
        simulating: Whether active is running.
        action: Current edit action, None when idle.
    """
    network_factory: Callable[[], Network] = Network
    snap_radius: float = ERASE_RADIUS

    saved: Network = field(init=False)
    active: Network = field(init=False)
    accumulator: float = field(init=False, default=0.0)
    camera: np.ndarray = field(init=False)
    simulating: bool = field(init=False, default=False)
    action: Action = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.saved = self.network_factory()
        self.active = self.network_factory()
        self.camera = np.zeros(2, dtype=np.float64)

    @property
    def network(self) -> Network:
        """The network currently shown: active while simulating, else saved."""
        return self.active if self.simulating else self.saved

    @property
    def interpolation(self) -> float:
        """Fraction of the current tick elapsed, for rendering."""
        return self.accumulator / self.network.dt

    def _reset_action(self) -> None:
        # Panning survives mode switches; everything else is abandoned.
        if not isinstance(self.action, Panning):
            self.action = None

    def _pan(self, inputs: Inputs) -> None:
        if inputs[Button.ALTERNATE]:
            if inputs[Button.RIGHT_MOUSE]:
                self.camera = self.camera + (inputs.last_mouse - inputs.mouse_position)
        else:
            self.action = None

    def update(self, dt: float, inputs: Inputs) -> None:
        """
        Advance by one rendered frame.

        Args:
            dt: Wall-clock seconds since the previous frame.
            inputs: Input snapshot for this frame.
        """
        if self.simulating:
            self._update_running(dt, inputs)
        else:
            self._update_paused(inputs)

        if inputs[Button.TOGGLE_SIMULATING] and not inputs.last(Button.TOGGLE_SIMULATING):
            self.simulating = not self.simulating
            if self.simulating:
                self.accumulator = 0.0
                self.active = self.saved.clone()
                self.active.tick()
            logger.debug("Simulation %s", "started" if self.simulating else "stopped")
            self._reset_action()

    def _update_running(self, dt: float, inputs: Inputs) -> None:
        action = self.action
        if isinstance(action, Panning):
            self._pan(inputs)
        elif action is None:
            if inputs[Button.RIGHT_MOUSE] and inputs[Button.ALTERNATE]:
                self.action = Panning()
        elif isinstance(action, Deleting):
            if not inputs[Button.RIGHT_MOUSE]:
                self.action = None

        mouse = inputs.mouse_position + self.camera

        # The eraser is stamped once per tick so that its path covers the
        # same interval as each point's last_position -> position.
        self.accumulator += dt
        while self.accumulator >= self.active.dt:
            if isinstance(self.action, Deleting):
                self.active.erase_links(self.action.last, mouse)
                self.active.erase_points(self.action.last, mouse, self.snap_radius)
            if not isinstance(self.action, Panning):
                if inputs[Button.RIGHT_MOUSE]:
                    self.action = Deleting(mouse.copy())
                else:
                    self.action = None
            self.active.tick()
            self.accumulator -= self.active.dt

    def _update_paused(self, inputs: Inputs) -> None:
        r = self.snap_radius
        if inputs[Button.CLEAR]:
            self.saved = self.network_factory()
            self._reset_action()
            self.camera = np.zeros(2, dtype=np.float64)

        if isinstance(self.action, Panning):
            self._pan(inputs)

        mouse = inputs.mouse_position + self.camera
        saved = self.saved
        action = self.action

        if isinstance(action, CreatingPoint):
            if not inputs[Button.LEFT_MOUSE]:
                if saved.nearest_point(mouse, 2 * r) is None:
                    saved.add_point(mouse)
                self.action = None

        elif isinstance(action, CreatingLink):
            key2 = saved.nearest_point(mouse, r)
            if key2 is not None:
                action.end_key, action.end_mouse = key2, None
            else:
                action.end_key, action.end_mouse = None, inputs.mouse_position.copy()
            if not inputs[Button.LEFT_MOUSE]:
                if action.end_key is not None:
                    # Releasing on the start point toggles its lock.
                    saved.add_link(action.start, action.end_key)
                self.action = None

        elif isinstance(action, Deleting):
            if inputs[Button.RIGHT_MOUSE]:
                saved.erase_links(action.last, mouse)
                saved.erase_points(action.last, mouse, r)
                action.last = mouse
            else:
                self.action = None

        elif isinstance(action, CreatingLine):
            if not inputs[Button.ALTERNATE]:
                self.action = None
            elif inputs[Button.RIGHT_MOUSE]:
                self.action = Panning()
            else:
                if inputs[Button.LEFT_MOUSE] and saved.nearest_point(mouse, 2 * r) is None:
                    saved.add_point(mouse)
                key2 = saved.nearest_point(mouse, r)
                if key2 is not None:
                    if action.selected is None:
                        action.selected = (key2, inputs.mouse_position.copy())
                    elif action.selected[0] != key2:
                        saved.add_link(action.selected[0], key2)
                        action.selected = (key2, action.selected[1])
                if action.selected is not None:
                    action.selected = (action.selected[0], inputs.mouse_position.copy())

        elif action is None:
            if inputs[Button.ALTERNATE]:
                self.action = CreatingLine()
            elif inputs[Button.LEFT_MOUSE]:
                key = saved.nearest_point(mouse, r)
                if key is not None:
                    self.action = CreatingLink(start=key, end_key=key)
                else:
                    self.action = CreatingPoint()
            elif inputs[Button.RIGHT_MOUSE]:
                self.action = Deleting(mouse)

    def render(self, renderer: "RendererAdapter") -> None:
        """
        Draw the shown network plus any link being dragged out.

        Drag previews shorter than the snap radius are hidden, so a plain
        click on a point does not flash a stub.
        """
        t = self.interpolation
        network = self.network
        cam = self.camera
        r2 = self.snap_radius * self.snap_radius

        renderer.begin_frame(t)
        for a, b in network.sample_link_endpoints(t):
            renderer.draw_link(a - cam, b - cam)

        preview = None
        action = self.action
        if isinstance(action, CreatingLink):
            start = network.sample_position(action.start, t)
            if action.end_key is not None:
                end = network.sample_position(action.end_key, t)
                end = None if end is None else end - cam
            else:
                end = action.end_mouse
            if start is not None and end is not None:
                preview = (start - cam, end)
        elif isinstance(action, CreatingLine) and action.selected is not None:
            key, screen_mouse = action.selected
            start = network.sample_position(key, t)
            if start is not None:
                preview = (start - cam, screen_mouse)
        if preview is not None and norm2(preview[0] - preview[1]) >= r2:
            renderer.draw_link(*preview)

        for position, locked in network.sample_positions(t):
            renderer.draw_point(position - cam, locked)
        renderer.end_frame()
