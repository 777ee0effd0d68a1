# MIT License (see LICENSE)
"""
Force model for the controlled body.

Each function adds to body.acceleration (px/s²) or adjusts body.velocity
in-place, and records the matching horizontal force (N) in a ForceLedger
for the diagnostics panel. Inputs are SI; the pixel conversion happens
here.

Order within a tick:
    apply_gravity -> apply_controls -> apply_drag -> (integrate, collide)
    -> apply_ground_friction

Key concepts:
- Drag is linear and relative to the wind horizontally:
      a_drag_x = -c * (v_x - v_wind),  a_drag_y = -c * v_y
- Ground friction is a Coulomb brake mu_eff * m * g that decelerates toward
  zero and never reverses the direction of motion.
"""
from __future__ import annotations
import math

from ..constants import REFERENCE_GRAVITY
from ..entities import EntityConfig
from ..environment import Environment
from ..types import Body, ControlInput, EntityKind, ForceLedger
from ..util import to_pixels, to_meters, sign

# Below this speed (m/s) with no input, a grounded body is stopped outright.
REST_SPEED = 0.02


def apply_gravity(body: Body, env: Environment) -> None:
    """Add g (m/s², downward on screen) to the vertical acceleration."""
    body.acceleration[1] += to_pixels(env.gravity)


def jump_speed(config: EntityConfig, gravity: float) -> float:
    """
    Launch speed (m/s) scaled by sqrt(g_ref / g).

    Keeps the apparent jump height constant while gravity is tuned.
    """
    if gravity <= 0:
        return config.jump_velocity
    return config.jump_velocity * math.sqrt(REFERENCE_GRAVITY / gravity)


def apply_controls(
    body: Body,
    config: EntityConfig,
    env: Environment,
    controls: ControlInput,
    ledger: ForceLedger,
) -> float:
    """
    Apply steering force and, for people, the jump impulse.

    A crashed body ignores all input. The queued jump is cleared on every
    call regardless of whether it fired.

    Returns:
        The applied horizontal input force in N.
    """
    if body.crashed:
        controls.jump_queued = False
        ledger.applied = 0.0
        return 0.0

    force_x = 0.0
    if controls.left:
        force_x -= config.move_force
    if controls.right:
        force_x += config.move_force

    body.acceleration[0] += to_pixels(force_x / config.mass)

    if body.kind is EntityKind.PERSON and controls.jump_queued and body.on_ground:
        body.velocity[1] = -to_pixels(jump_speed(config, env.gravity))
        body.on_ground = False

    controls.jump_queued = False
    ledger.applied = force_x
    return force_x


def apply_drag(body: Body, config: EntityConfig, env: Environment, ledger: ForceLedger) -> None:
    """
    Linear air drag, measured against the wind horizontally.

    Records F_drag = m * a_drag_x in the ledger.
    """
    c = env.air_resistance
    relative_vx = to_meters(body.velocity[0]) - env.wind_speed
    drag_ax = -c * relative_vx
    drag_ay = -c * to_meters(body.velocity[1])

    body.acceleration[0] += to_pixels(drag_ax)
    body.acceleration[1] += to_pixels(drag_ay)
    ledger.drag = config.mass * drag_ax


def apply_ground_friction(
    body: Body,
    config: EntityConfig,
    env: Environment,
    controls: ControlInput,
    ledger: ForceLedger,
    dt: float,
) -> None:
    """
    Decelerate a grounded body toward zero horizontal speed.

    Friction magnitude is mu_eff * m * g, reduced by the entity's
    active_friction_scale while a direction key is held. The velocity change
    is capped at the current speed so friction never flips the direction.
    Near-zero speed with no input snaps vx to exactly zero.
    """
    if not body.on_ground or body.crashed:
        ledger.friction = 0.0
        ledger.effective_friction = env.ground_friction
        return

    vx_m = to_meters(body.velocity[0])
    steering = controls.steering
    if abs(vx_m) < REST_SPEED and not steering:
        body.velocity[0] = 0.0
        ledger.friction = 0.0
        ledger.effective_friction = env.ground_friction
        return

    mu = env.effective_friction
    ledger.effective_friction = mu

    direction = sign(vx_m)
    if direction == 0:
        ledger.friction = 0.0
        return

    friction_force = mu * config.mass * max(env.gravity, 0.0)
    if steering:
        friction_force *= config.active_friction_scale

    dv = to_pixels(friction_force / config.mass * dt)
    if abs(body.velocity[0]) > dv:
        body.velocity[0] -= dv * direction
    elif not steering:
        body.velocity[0] = 0.0
    ledger.friction = -direction * friction_force
