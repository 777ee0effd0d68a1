# MIT License (see LICENSE)
"""
Live equation panel and metric readouts.

Builds plain data for the UI: a list of EquationCard entries describing
the governing equations with the current numbers substituted in, and a
Readout with speed/height/force figures. A card is flagged `modified` when
the parameters it depends on differ from the defaults.

Non-finite numbers are rendered as "n/a".
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import PHYSICS_DEFAULTS, METERS_PER_SECOND_TO_KMH, KMH_TO_MPH
from .core.invariants import kinetic_energy, horizontal_momentum
from .types import EntityKind
from .util import format_or_na, to_meters

if TYPE_CHECKING:
    from .simulation import Simulation


@dataclass
class EquationCard:
    title: str
    expression: str
    details: list[str] = field(default_factory=list)
    modified: bool = False


@dataclass
class Readout:
    """Headline metrics. Speeds in m/s, km/h and mph; height in m; force in N."""
    speed: float
    speed_kmh: float
    speed_mph: float
    height_above_ground: float
    net_force: float

    def speed_text(self, imperial: bool = False) -> tuple[str, str]:
        """(primary, secondary) speed strings, e.g. ("12.0 m/s", "43.2 km/h")."""
        secondary = f"{format_or_na(self.speed_kmh, 1)} km/h"
        if imperial:
            return f"{format_or_na(self.speed_mph, 1)} mph", secondary
        return f"{format_or_na(self.speed, 1)} m/s", secondary


def build_readout(sim: "Simulation") -> Readout:
    body = sim.body
    speed = body.speed_mps
    kmh = speed * METERS_PER_SECOND_TO_KMH
    height = max(0.0, to_meters(sim.ground_elevation() - body.bottom))
    return Readout(
        speed=speed,
        speed_kmh=kmh,
        speed_mph=kmh * KMH_TO_MPH,
        height_above_ground=height,
        net_force=sim.ledger.net,
    )


def build_equations(sim: "Simulation") -> list[EquationCard]:
    """Assemble the four panel cards from the current simulation state."""
    env = sim.environment
    body = sim.body
    config = sim.config
    ledger = sim.ledger

    vx = to_meters(float(body.velocity[0]))
    vy = to_meters(float(body.velocity[1]))
    speed = body.speed_mps
    mu = ledger.effective_friction

    gravity_changed = abs(env.gravity - PHYSICS_DEFAULTS["gravity"]) > 0.05
    friction_changed = abs(mu - PHYSICS_DEFAULTS["friction"]) > 0.02
    drag_changed = abs(env.air_resistance - PHYSICS_DEFAULTS["air_resistance"]) > 0.005

    vertical = EquationCard(
        title="Vertical Motion",
        expression="a_y = -g - c_air * v_y",
        details=[
            f"m = {format_or_na(config.mass, 0)} kg",
            f"g = {format_or_na(env.gravity)} m/s^2",
            f"c_air = {format_or_na(env.air_resistance, 3)} s^-1",
            # screen y points down; the panel reports physics sign (up positive)
            f"v_y = {format_or_na(-vy)} m/s",
            f"a_y (current) = {format_or_na(-env.gravity + env.air_resistance * vy)} m/s^2",
            f"restitution e = {format_or_na(config.restitution)}",
        ],
        modified=gravity_changed or drag_changed,
    )

    horizontal = EquationCard(
        title="Horizontal Motion",
        expression="a_x = (F_input - F_drag - F_friction) / m",
        details=[
            f"F_input = {format_or_na(ledger.applied, 0)} N",
            f"F_drag ≈ {format_or_na(ledger.drag, 0)} N",
            f"F_friction ≈ {format_or_na(ledger.friction, 0)} N",
            f"μ_eff = {format_or_na(mu)} (wet surface factor)",
            f"v_x = {format_or_na(vx)} m/s",
            f"a_x (current) = {format_or_na(ledger.net / config.mass)} m/s^2",
        ],
        modified=friction_changed or drag_changed,
    )

    energy = EquationCard(
        title="Energy Snapshot",
        expression="E_k = 0.5 * m * v^2",
        details=[
            f"v = {format_or_na(speed, 1)} m/s",
            f"E_k = {format_or_na(kinetic_energy(body), 0)} J",
            f"p = {format_or_na(horizontal_momentum(body), 0)} kg*m/s",
        ],
        modified=speed > 0.5,
    )

    relations = [
        "ρ ≈ 1.225 kg/m³ at sea level",
        "F_friction = μ * N, where N = m * g",
        "Δp = F_net * Δt (impulse)",
        "W = F * d = ΔE_k",
        f"Wind speed = {format_or_na(env.wind_speed, 1)} m/s",
        f"Surface slickness = {format_or_na(env.slickness * 100, 0)}%",
    ]
    if body.crashed and body.kind is EntityKind.CAR:
        relations.insert(0, "Status: vehicle disabled after high-impact collision")
    if not body.on_ground:
        relations.append("Projectile: y(t) = y₀ + v_{y0} t - 0.5 * g * t²")
    supporting = EquationCard(
        title="Supporting Relations",
        expression="F_drag = 0.5 * ρ * C_d * A * v^2",
        details=relations,
        modified=True,
    )

    return [vertical, horizontal, energy, supporting]
