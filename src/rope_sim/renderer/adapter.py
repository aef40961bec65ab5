# MIT License (see LICENSE)
"""
Renderer adapters for rope network visualization.

Renderers see a network only through its interpolated samples
(Network.sample_link_endpoints / sample_positions); they never touch raw
Verlet state and never mutate the network. Offsets are subtracted from every
sampled position, which is how a camera pan is applied.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import numpy as np

from ..util import f64

if TYPE_CHECKING:
    from ..network import Network


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses integrate with a graphics backend (pygame, matplotlib, a web
    canvas...). Links are drawn before points so points sit on top.

    Usage:
        renderer.render_network(network, t=0.25, offset=camera)
    """

    @abstractmethod
    def begin_frame(self, t: float) -> None:
        """
        Begin a new frame.

        Args:
            t: Interpolation parameter the frame is sampled at.
        """
        ...

    @abstractmethod
    def draw_link(self, a: np.ndarray, b: np.ndarray) -> None:
        """Draw a link between two screen positions."""
        ...

    @abstractmethod
    def draw_point(self, position: np.ndarray, locked: bool) -> None:
        """Draw a point; locked points are usually drawn in another colour."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def draw_network(
        self,
        network: "Network",
        t: float,
        offset: tuple[float, float] | np.ndarray = (0.0, 0.0),
    ) -> None:
        """Draw all links, then all points, without framing."""
        off = f64(offset)
        for a, b in network.sample_link_endpoints(t):
            self.draw_link(a - off, b - off)
        for position, locked in network.sample_positions(t):
            self.draw_point(position - off, locked)

    def render_network(
        self,
        network: "Network",
        t: float,
        offset: tuple[float, float] | np.ndarray = (0.0, 0.0),
    ) -> None:
        """Convenience method: one complete frame of a network."""
        self.begin_frame(t)
        self.draw_network(network, t, offset)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Output:
        === Frame t=0.2500 ===
        link (100.00, 100.00) -> (150.00, 100.00)
        point (100.00, 100.00) locked
        point (150.00, 100.00)
    """

    def __init__(self, output: TextIO | None = None):
        self.output = output or sys.stdout

    def begin_frame(self, t: float) -> None:
        self.output.write(f"=== Frame t={t:.4f} ===\n")

    def draw_link(self, a: np.ndarray, b: np.ndarray) -> None:
        self.output.write(f"link ({a[0]:.2f}, {a[1]:.2f}) -> ({b[0]:.2f}, {b[1]:.2f})\n")

    def draw_point(self, position: np.ndarray, locked: bool) -> None:
        line = f"point ({position[0]:.2f}, {position[1]:.2f})"
        if locked:
            line += " locked"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarking the sampling path alone."""

    def begin_frame(self, t: float) -> None:
        pass

    def draw_link(self, a: np.ndarray, b: np.ndarray) -> None:
        pass

    def draw_point(self, position: np.ndarray, locked: bool) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frames as plain lists.

    Each frame is a dict:
        {"t": float,
         "links": [[[ax, ay], [bx, by]], ...],
         "points": [{"position": [x, y], "locked": bool}, ...]}
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, t: float) -> None:
        self._current_frame = {"t": t, "links": [], "points": []}

    def draw_link(self, a: np.ndarray, b: np.ndarray) -> None:
        if self._current_frame is None:
            return
        self._current_frame["links"].append([list(map(float, a)), list(map(float, b))])

    def draw_point(self, position: np.ndarray, locked: bool) -> None:
        if self._current_frame is None:
            return
        self._current_frame["points"].append({
            "position": list(map(float, position)),
            "locked": bool(locked),
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
