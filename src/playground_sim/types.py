# MIT License (see LICENSE)
"""
Core type definitions for the terrain playground.

Defines the mutable records the tick function reads and writes:
- Body: kinematic state of the single controlled entity.
- ControlInput: polled keyboard state.
- ForceLedger: per-tick force bookkeeping for the diagnostics panel.
- CrashDiagnostics: the record produced once per crash event.

Coordinates are screen pixels with y pointing down, so "falling" means a
positive vertical velocity and the ground is at a larger y than the sky.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .util import f64, to_meters


class UnknownVariantError(KeyError):
    """Raised when an entity kind or landscape name is not registered."""


class EntityKind(str, Enum):
    """Closed set of controllable entities."""
    PERSON = "person"
    CAR = "car"


# =============================================================================
# Body
# =============================================================================

@dataclass
class Body:
    """
    Point-mass rectangle controlled by the player.

    The horizontal screen position is pinned to the viewport center after
    every tick; horizontal motion is expressed through the simulation's
    world offset instead.

    Attributes:
        kind: Which entity variant this body is.
        width: Full width in pixels.
        height: Full height in pixels.
        mass: Mass in kg.
        position: Center [x, y] in pixels.
        velocity: [vx, vy] in px/s.
        acceleration: [ax, ay] in px/s², rebuilt every tick.
        on_ground: True while resting on (or snapped to) the height field.
        crashed: Absorbing crash state, cleared only by respawn.
        facing: +1 when moving right (or stopped), -1 when moving left.
        air_time: Seconds since the body last left the ground.
        airborne_start_y: Ground elevation (px) recorded when the body last
            became airborne; None until a ground contact has been seen.
    """
    kind: EntityKind
    width: float
    height: float
    mass: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    acceleration: np.ndarray | tuple[float, float] = (0.0, 0.0)
    on_ground: bool = False
    crashed: bool = False
    facing: int = 1
    air_time: float = 0.0
    airborne_start_y: float | None = None

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)

    @property
    def half_height(self) -> float:
        return 0.5 * self.height

    @property
    def bottom(self) -> float:
        """Screen y of the lower edge."""
        return float(self.position[1]) + self.half_height

    @property
    def speed_mps(self) -> float:
        """Magnitude of velocity in m/s."""
        return to_meters(float(np.hypot(self.velocity[0], self.velocity[1])))

    def clear_acceleration(self) -> None:
        self.acceleration[:] = 0.0

    def stop(self) -> None:
        """Zero velocity and acceleration."""
        self.velocity[:] = 0.0
        self.acceleration[:] = 0.0


# =============================================================================
# Input and bookkeeping
# =============================================================================

@dataclass
class ControlInput:
    """
    Keyboard state polled once per tick.

    `jump_queued` is consumed and cleared by the force model on every tick,
    whether or not it produced a jump.
    """
    left: bool = False
    right: bool = False
    jump_queued: bool = False

    @property
    def steering(self) -> bool:
        return self.left or self.right

    def press(self, action: str) -> None:
        if action == "jump":
            self.jump_queued = True
        elif action in ("left", "right"):
            setattr(self, action, True)

    def release(self, action: str) -> None:
        if action == "jump":
            self.jump_queued = False
        elif action in ("left", "right"):
            setattr(self, action, False)

    def release_all(self) -> None:
        """Drop every held key (window blur, crash)."""
        self.left = False
        self.right = False
        self.jump_queued = False


@dataclass
class ForceLedger:
    """
    Horizontal forces of the last tick, in Newtons.

    Only used for display; the integrator works on accelerations.
    """
    applied: float = 0.0
    drag: float = 0.0
    friction: float = 0.0
    net: float = 0.0
    effective_friction: float = 0.0

    def clear(self) -> None:
        self.applied = 0.0
        self.drag = 0.0
        self.friction = 0.0
        self.net = 0.0


@dataclass
class CrashDiagnostics:
    """
    Everything known about a crash at the moment it was triggered.

    Speeds are m/s, distances m, times s. `thresholds` lists only the
    comparisons that actually fired, formatted in metric and imperial units.
    """
    kind: str
    reason: str
    impact_velocity: float
    horizontal_velocity: float
    total_velocity: float
    air_time: float
    drop_height: float
    severity: float
    thresholds: list[str] = field(default_factory=list)
    narrative: str = ""
    effective_friction: float = 0.0
    wind_speed: float = 0.0
    surface_slickness: float = 0.0
