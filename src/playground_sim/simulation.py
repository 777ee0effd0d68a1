# MIT License (see LICENSE)
"""
The simulation driver and per-frame tick.

The Simulation class owns every piece of mutable state (environment,
input, body, landscape, debris) and exposes one tick, step(dt). The caller
drives it once per display refresh and may read any field between ticks.

Tick order:
    1. Force model: gravity, steering/jump, wind-relative drag.
    2. Integrator: semi-implicit Euler, speed caps, world recentering,
       vertical safety clamp.
    3. Ground collision and crash classification.
    4. Ground friction.
    5. Bookkeeping: air time, force ledger, facing, crash timer, debris,
       scene time.

Structure:
    - User creates a Simulation(entity="car", landscape="farm").
    - UI writes sim.environment fields and sim.controls between ticks.
    - User calls sim.step(dt) in a loop.
"""
from __future__ import annotations
from contextlib import nullcontext
from dataclasses import dataclass, field
import logging
import math

import numpy as np

from .constants import MAX_FRAME_DT, VIEWPORT_WIDTH, VIEWPORT_HEIGHT
from .entities import EntityConfig, create_body, entity_kind, get_entity_config
from .environment import Environment
from .profiler import Profiler
from .types import Body, ControlInput, CrashDiagnostics, EntityKind, ForceLedger
from .core.forces import apply_gravity, apply_controls, apply_drag, apply_ground_friction
from .core.integrators import semi_implicit_euler_step, recenter, clamp_vertical
from .collision.crash import CrashThresholds, DEFAULT_THRESHOLDS, Surroundings
from .collision.ground import resolve_ground_collision
from .effects.debris import DebrisField
from .terrain.heightfield import Landscape, create_landscape

logger = logging.getLogger(__name__)

# Scene time (terrain animation) only runs while the body moves faster than this (m/s).
SCENE_CLOCK_SPEED = 0.1


@dataclass
class Simulation:
    """
    Terrain playground world.

    Attributes:
        entity: Which entity is controlled ("person" or "car").
        landscape_name: Registry name of the terrain ("beach", "racetrack", "farm").
        environment: Live environment parameters. A fresh one (with a
            random farm seed drawn from `seed`) is created when omitted.
        controls: Polled input state.
        thresholds: Crash limits.
        dt: Default timestep used when step() is called without one.
        viewport_width, viewport_height: Screen size in pixels.
        seed: Seed for the farm terrain and debris randomness.
        profiler: Optional Profiler instance for timing statistics.
    """
    entity: EntityKind | str = EntityKind.PERSON
    landscape_name: str = "beach"
    environment: Environment | None = None
    controls: ControlInput = field(default_factory=ControlInput)
    thresholds: CrashThresholds = DEFAULT_THRESHOLDS
    dt: float = 1 / 60
    viewport_width: float = VIEWPORT_WIDTH
    viewport_height: float = VIEWPORT_HEIGHT
    seed: int | None = None
    profiler: Profiler | None = None

    # Internal state
    world_offset: float = 0.0
    scene_time: float = 0.0
    crash_timer: float = 0.0
    diagnostics: CrashDiagnostics | None = None
    ledger: ForceLedger = field(default_factory=ForceLedger)

    def __post_init__(self) -> None:
        self.entity = entity_kind(self.entity)
        self._rng = np.random.default_rng(self.seed)
        if self.environment is None:
            self.environment = Environment()
            self.environment.farm.reseed(self._rng)
        self.debris = DebrisField(self._rng)
        self.landscape = self._make_landscape(self.landscape_name)
        self.environment.apply_landscape_defaults(self.landscape)
        self.ledger.effective_friction = self.environment.ground_friction
        self.respawn()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def center_x(self) -> float:
        """Fixed screen x of the body."""
        return 0.5 * self.viewport_width

    @property
    def world_x(self) -> float:
        """Body's horizontal position in world space."""
        return self.world_offset

    @property
    def config(self) -> EntityConfig:
        return get_entity_config(self.entity)

    def ground_elevation(self, x: float | None = None) -> float:
        """Ground y at world x (defaults to under the body) at the current scene time."""
        return self.landscape.ground_elevation(self.world_offset if x is None else x, self.scene_time)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _make_landscape(self, name: str) -> Landscape:
        return create_landscape(name, self.environment.farm, self.viewport_width, self.viewport_height)

    def respawn(self) -> Body:
        """
        Replace the body with a fresh one standing on the ground at world x = 0.

        Clears crash state, diagnostics, debris and the force ledger.
        """
        self.world_offset = 0.0
        body = create_body(self.entity)
        body.position[0] = self.center_x
        body.position[1] = self.ground_elevation(0.0) - body.half_height
        self.body = body
        self.crash_timer = 0.0
        self.diagnostics = None
        self.debris.clear()
        self.ledger.clear()
        logger.debug("Spawned %s on %s", self.entity.value, self.landscape.name)
        return body

    def set_entity(self, kind: EntityKind | str) -> None:
        self.entity = entity_kind(kind)
        self.respawn()

    def set_landscape(self, name: str) -> None:
        """Switch terrain: restart scene time, adopt its surface defaults, respawn."""
        self.landscape = self._make_landscape(name)
        self.landscape_name = name
        self.scene_time = 0.0
        self.environment.apply_landscape_defaults(self.landscape)
        self.respawn()

    def reset(self) -> None:
        """Restore landscape defaults, default gravity, calm weather; reseed the farm."""
        env = self.environment
        env.apply_landscape_defaults(self.landscape)
        env.reset()
        if self.landscape.name == "farm":
            env.farm.reset(self._rng)
        self.scene_time = 0.0
        self.respawn()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def step(self, dt: float | None = None) -> CrashDiagnostics | None:
        """
        Advance the simulation by one frame.

        Args:
            dt: Frame time in seconds, clamped to MAX_FRAME_DT. Non-positive
                or non-finite values leave the state untouched.

        Returns:
            Diagnostics of a crash triggered during this tick, else None.
        """
        dt = float(self.dt if dt is None else dt)
        if not math.isfinite(dt) or dt <= 0:
            return None
        dt = min(dt, MAX_FRAME_DT)

        body = self.body
        config = self.config
        env = self.environment
        controls = self.controls
        ledger = self.ledger
        landscape = self.landscape.frozen()

        with self._section("forces"):
            body.clear_acceleration()
            ledger.drag = 0.0
            ledger.friction = 0.0
            apply_gravity(body, env)
            apply_controls(body, config, env, controls, ledger)
            apply_drag(body, config, env, ledger)

        with self._section("integrate"):
            semi_implicit_euler_step(body, config, dt)
            self.world_offset = recenter(body, self.world_offset, self.center_x)
            clamp_vertical(body, self.viewport_height)

        with self._section("collide"):
            was_on_ground = body.on_ground
            airborne = 0.0 if was_on_ground else body.air_time + dt
            surroundings = Surroundings(
                effective_friction=env.effective_friction,
                wind_speed=env.wind_speed,
                slickness=env.slickness,
            )
            event = resolve_ground_collision(
                body, config, landscape, self.world_offset, self.scene_time,
                was_on_ground, airborne, controls, ledger,
                surroundings=surroundings,
                thresholds=self.thresholds,
                debris=self.debris,
            )

        with self._section("friction"):
            apply_ground_friction(body, config, env, controls, ledger, dt)

        body.air_time = 0.0 if body.on_ground else airborne
        ledger.net = ledger.applied + ledger.drag + ledger.friction
        body.facing = 1 if body.velocity[0] >= 0 else -1
        self._recover_non_finite(landscape)

        if event is not None:
            self.diagnostics = event
            self.crash_timer = 0.0

        with self._section("debris"):
            self.debris.update(
                landscape, env.gravity, self.world_offset, self.scene_time, self.center_x, dt
            )

        if body.crashed:
            self.crash_timer += dt
        if controls.steering or body.speed_mps > SCENE_CLOCK_SPEED:
            self.scene_time += dt
        return event

    def _recover_non_finite(self, landscape: Landscape) -> None:
        """Put a body with a corrupted position back on the ground, at rest."""
        body = self.body
        if math.isfinite(self.world_offset) and np.all(np.isfinite(body.position)):
            return
        logger.warning("Non-finite body state; resetting to ground at rest")
        if not math.isfinite(self.world_offset):
            self.world_offset = 0.0
        ground_y = landscape.ground_elevation(self.world_offset, self.scene_time)
        if not math.isfinite(ground_y):
            ground_y = self.viewport_height
        body.position[0] = self.center_x
        body.position[1] = ground_y - body.half_height
        body.stop()
