# MIT License (see LICENSE)
"""
Height-field contact for the controlled body.

State machine:
    Airborne -> Grounded   lower edge reaches the ground (bounce or crash check)
    Grounded -> Airborne   lower edge leaves the ground (take-off recorded)
    Grounded/landing -> Crashed   cars only; absorbing until respawn

Penetration is resolved by snapping the body onto the surface. Downward
velocity on contact is reflected with the entity's restitution and snapped
to zero below a small floor so the body settles instead of micro-bouncing.
"""
from __future__ import annotations
import logging

from ..entities import EntityConfig
from ..terrain.heightfield import Landscape
from ..types import Body, ControlInput, CrashDiagnostics, ForceLedger
from ..util import sign, to_meters
from .crash import (
    CrashThresholds,
    DEFAULT_THRESHOLDS,
    DebrisSink,
    Surroundings,
    assess_landing,
    assess_slope_impact,
    can_crash,
    probe_distance,
    trigger_crash,
)

logger = logging.getLogger(__name__)


def bounce(body: Body, restitution: float, floor: float) -> None:
    """Reflect downward velocity: vy <- -e * vy, zeroed when |vy| < floor (px/s)."""
    body.velocity[1] *= -restitution
    if abs(body.velocity[1]) < floor:
        body.velocity[1] = 0.0


def drop_height(body: Body, ground_y: float) -> float:
    """Meters fallen between the take-off ground and ground_y (never negative)."""
    start = body.airborne_start_y if body.airborne_start_y is not None else ground_y
    return max(0.0, to_meters(ground_y - start))


def resolve_ground_collision(
    body: Body,
    config: EntityConfig,
    landscape: Landscape,
    world_x: float,
    scene_time: float,
    was_on_ground: bool,
    airborne_duration: float,
    controls: ControlInput,
    ledger: ForceLedger,
    surroundings: Surroundings = Surroundings(),
    thresholds: CrashThresholds = DEFAULT_THRESHOLDS,
    debris: DebrisSink | None = None,
) -> CrashDiagnostics | None:
    """
    Resolve contact with the ground at world_x and classify any crash.

    Args:
        body: Body after integration and recentering.
        config: Entity tuning (restitution).
        landscape: Height field, already frozen for this tick.
        world_x: Body's world x-coordinate (the world offset).
        scene_time: Scene time used for sampling.
        was_on_ground: Grounded state before this tick.
        airborne_duration: Air time including this tick (0 if it started grounded).
        controls, ledger: Cleared by a crash.
        surroundings: Friction/wind/slickness copied into diagnostics.
        thresholds: Crash limits.
        debris: Receives the burst request on a crash.

    Returns:
        The diagnostics of a crash triggered on this call, else None.
    """
    ground_y = landscape.ground_elevation(world_x, scene_time)

    if body.bottom < ground_y:
        body.on_ground = False
        if was_on_ground:
            body.airborne_start_y = ground_y
        return None

    body.position[1] = ground_y - body.half_height

    vx = float(body.velocity[0])
    if can_crash(body) and was_on_ground and abs(vx) > thresholds.slope_min_horizontal_speed:
        run = probe_distance(body, thresholds)
        ahead = landscape.ground_elevation(world_x + sign(vx) * run, scene_time)
        diagnostics = assess_slope_impact(body, ground_y, ahead, run, surroundings, thresholds)
        if diagnostics is not None:
            event = trigger_crash(body, controls, ledger, diagnostics, debris)
            body.on_ground = True
            body.airborne_start_y = ground_y
            return event

    event = None
    if body.velocity[1] > 0:
        if not was_on_ground and can_crash(body):
            impact = to_meters(float(body.velocity[1]))
            diagnostics = assess_landing(
                impact,
                to_meters(abs(vx)),
                airborne_duration,
                drop_height(body, ground_y),
                surroundings,
                thresholds,
            )
            if diagnostics is not None:
                event = trigger_crash(body, controls, ledger, diagnostics, debris)

        if body.crashed:
            body.velocity[1] = 0.0
        else:
            bounce(body, config.restitution, thresholds.bounce_floor)

    body.on_ground = True
    body.airborne_start_y = ground_y
    return event
