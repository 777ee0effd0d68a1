# MIT License (see LICENSE)
"""
Renderer adapters for playground visualization.

This module provides an abstract base class for rendering and concrete
text/buffer implementations. The physics core has no rendering dependency;
renderers only read simulation state between ticks.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

import numpy as np

from ..effects.debris import DebrisFragment
from ..terrain.heightfield import Landscape, sample_profile
from ..types import Body, CrashDiagnostics
from ..util import to_meters

if TYPE_CHECKING:
    from ..simulation import Simulation

# Horizontal spacing (px) between ground samples handed to draw_ground.
GROUND_STEP = 6.0


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods for a graphics backend
    (pygame, matplotlib, a web canvas bridge...).

    Usage:
        renderer.render_simulation(sim)
    """

    @abstractmethod
    def begin_frame(self, time: float, world_offset: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Scene time in seconds.
            world_offset: Horizontal world scroll in pixels.
        """
        ...

    @abstractmethod
    def draw_ground(self, landscape: Landscape, screen_x: np.ndarray, ground_y: np.ndarray) -> None:
        """Draw the terrain polyline (screen x, screen y)."""
        ...

    @abstractmethod
    def draw_body(self, body: Body) -> None:
        ...

    def draw_debris(self, fragments: list[DebrisFragment]) -> None:
        """Draw crash fragments. Optional."""

    def draw_crash(self, body: Body, diagnostics: CrashDiagnostics) -> None:
        """Draw the crash overlay. Optional."""

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_simulation(self, sim: "Simulation") -> None:
        """Convenience method to draw everything the simulation exposes."""
        self.begin_frame(sim.scene_time, sim.world_offset)
        screen_x = np.arange(0.0, sim.viewport_width + GROUND_STEP, GROUND_STEP)
        world_x = sim.world_offset + (screen_x - sim.center_x)
        self.draw_ground(sim.landscape, screen_x, sample_profile(sim.landscape, world_x, sim.scene_time))
        self.draw_body(sim.body)
        self.draw_debris(sim.debris.fragments)
        if sim.body.crashed and sim.diagnostics is not None:
            self.draw_crash(sim.body, sim.diagnostics)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development and testing.

    Output:
        === Frame t=0.5000 world_x=12.3 ===
        [car] @ (480.00, 367.20) v=(4.10, 0.00) m/s ground=True crashed=False
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include ground range, velocity and debris.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float, world_offset: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} world_x={world_offset:.1f} ===\n")

    def draw_ground(self, landscape: Landscape, screen_x: np.ndarray, ground_y: np.ndarray) -> None:
        if self.verbose:
            self.output.write(
                f"{landscape.label}: ground y in [{ground_y.min():.1f}, {ground_y.max():.1f}]\n"
            )

    def draw_body(self, body: Body) -> None:
        pos = body.position
        line = f"[{body.kind.value}] @ ({pos[0]:.2f}, {pos[1]:.2f})"
        if self.verbose:
            vx, vy = to_meters(body.velocity[0]), to_meters(body.velocity[1])
            line += f" v=({vx:.2f}, {vy:.2f}) m/s ground={body.on_ground} crashed={body.crashed}"
        self.output.write(line + "\n")

    def draw_debris(self, fragments: list[DebrisFragment]) -> None:
        if self.verbose and fragments:
            self.output.write(f"debris: {len(fragments)} fragments\n")

    def draw_crash(self, body: Body, diagnostics: CrashDiagnostics) -> None:
        self.output.write(f"Crash! {diagnostics.narrative}\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarking without drawing overhead."""

    def begin_frame(self, time: float, world_offset: float) -> None:
        pass

    def draw_ground(self, landscape: Landscape, screen_x: np.ndarray, ground_y: np.ndarray) -> None:
        pass

    def draw_body(self, body: Body) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that buffers frame data for later retrieval.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            sim.step()
            renderer.render_simulation(sim)

        for frame in renderer.frames:
            print(frame["time"], frame["body"]["position"])
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float, world_offset: float) -> None:
        self._current_frame = {
            "time": time,
            "world_offset": world_offset,
            "ground": None,
            "body": None,
            "debris": [],
            "crash": None,
        }

    def draw_ground(self, landscape: Landscape, screen_x: np.ndarray, ground_y: np.ndarray) -> None:
        if self._current_frame is None:
            return
        self._current_frame["ground"] = np.column_stack([screen_x, ground_y])

    def draw_body(self, body: Body) -> None:
        if self._current_frame is None:
            return
        self._current_frame["body"] = {
            "kind": body.kind.value,
            "position": body.position.tolist(),
            "velocity": body.velocity.tolist(),
            "size": (body.width, body.height),
            "on_ground": body.on_ground,
            "crashed": body.crashed,
        }

    def draw_debris(self, fragments: list[DebrisFragment]) -> None:
        if self._current_frame is None:
            return
        self._current_frame["debris"] = [(f.x, f.y, f.life) for f in fragments]

    def draw_crash(self, body: Body, diagnostics: CrashDiagnostics) -> None:
        if self._current_frame is None:
            return
        self._current_frame["crash"] = diagnostics.reason

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
