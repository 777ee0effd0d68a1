# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Force model: Gravity, steering/jump input, wind-relative drag, ground friction.
    - Integrator: Semi-implicit Euler with speed caps and world recentering.
    - Invariants: Kinetic energy and momentum for diagnostics.

Typical usage:
    from playground_sim.core import apply_gravity, semi_implicit_euler_step

    apply_gravity(body, env)
    semi_implicit_euler_step(body, config, dt=1/60)
"""
from .forces import (
    apply_gravity,
    apply_controls,
    apply_drag,
    apply_ground_friction,
    jump_speed,
)
from .integrators import (
    semi_implicit_euler_step,
    limit_velocity,
    sanitize_velocity,
    recenter,
    clamp_vertical,
)
from .invariants import kinetic_energy, horizontal_momentum

__all__ = [
    # Forces
    "apply_gravity",
    "apply_controls",
    "apply_drag",
    "apply_ground_friction",
    "jump_speed",
    # Integrators
    "semi_implicit_euler_step",
    "limit_velocity",
    "sanitize_velocity",
    "recenter",
    "clamp_vertical",
    # Invariants
    "kinetic_energy",
    "horizontal_momentum",
]
