# MIT License (see LICENSE)
"""
playground_sim - Physics core of a 2D terrain playground.

A single point-mass body (a person or a car) travels over a procedurally
generated, scrolling height field under tunable gravity, friction, air
resistance, wind and surface wetness. Cars crash when they hit a steep
slope or land too hard, producing a diagnostics record and a debris burst.

Main entry points:
    - Simulation: Owns all state and advances it one frame at a time.
    - Environment: Live-tunable physical parameters.
    - EntityKind: PERSON or CAR.
    - CrashThresholds: Tuned crash limits.

Submodules:
    - core: Force model and integrator.
    - collision: Ground contact, crash classification, narratives.
    - terrain: Height field landscapes.
    - effects: Crash debris.
    - renderer: Optional visualization adapters.

Example:
    from playground_sim import Simulation

    sim = Simulation(entity="car", landscape_name="farm", seed=3)
    sim.controls.right = True
    for _ in range(120):
        sim.step(1/60)
"""
from .simulation import Simulation
from .environment import Environment, FarmParameters
from .entities import EntityConfig, ENTITIES, create_body
from .types import Body, ControlInput, CrashDiagnostics, EntityKind, ForceLedger, UnknownVariantError
from .collision.crash import CrashThresholds

__all__ = [
    # Simulation
    "Simulation",
    "Environment",
    "FarmParameters",
    # Entities
    "EntityKind",
    "EntityConfig",
    "ENTITIES",
    "create_body",
    # State records
    "Body",
    "ControlInput",
    "ForceLedger",
    "CrashDiagnostics",
    "CrashThresholds",
    "UnknownVariantError",
]
