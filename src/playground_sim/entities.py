# MIT License (see LICENSE)
"""
Physics configuration for the controllable entities.

Each entity kind carries its tuning as plain data. Behavioral differences
(only people jump, only cars crash) live in the force model and the crash
classifier, not here.
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import CAR_TOP_SPEED_MPS
from .types import Body, EntityKind, UnknownVariantError
from .util import to_pixels


@dataclass(frozen=True)
class EntityConfig:
    """
    Tuning for one entity kind.

    Attributes:
        label: Display name.
        mass: Mass in kg.
        body_width: Full width in meters.
        body_height: Full height in meters.
        move_force: Horizontal force (N) applied while a direction is held.
        max_speed: Horizontal speed cap in m/s.
        max_vertical_speed: Vertical speed cap in m/s.
        jump_velocity: Launch speed in m/s at reference gravity.
        restitution: Fraction of vertical speed kept on a bounce.
        active_friction_scale: Multiplier on ground friction while steering.
    """
    label: str
    mass: float
    body_width: float
    body_height: float
    move_force: float
    max_speed: float
    max_vertical_speed: float
    jump_velocity: float = 0.0
    restitution: float = 0.0
    active_friction_scale: float = 0.45


ENTITIES: dict[EntityKind, EntityConfig] = {
    EntityKind.PERSON: EntityConfig(
        label="Person",
        mass=70.0,
        body_width=0.6,
        body_height=1.8,
        move_force=220.0,
        max_speed=8.0,
        max_vertical_speed=12.0,
        jump_velocity=6.5,
        restitution=0.18,
        active_friction_scale=0.3,
    ),
    EntityKind.CAR: EntityConfig(
        label="Car",
        mass=1200.0,
        body_width=2.6,
        body_height=1.4,
        move_force=4000.0,
        max_speed=CAR_TOP_SPEED_MPS,
        max_vertical_speed=30.0,
        jump_velocity=0.0,
        restitution=0.05,
        active_friction_scale=0.08,
    ),
}


def entity_kind(kind: EntityKind | str) -> EntityKind:
    """Normalize a kind given as enum member or string."""
    try:
        return EntityKind(kind)
    except ValueError:
        raise UnknownVariantError(f"Unknown entity kind: {kind!r}") from None


def get_entity_config(kind: EntityKind | str) -> EntityConfig:
    return ENTITIES[entity_kind(kind)]


def create_body(kind: EntityKind | str, config: EntityConfig | None = None) -> Body:
    """
    Build a neutral body for a fresh spawn.

    Velocity is zero, the body is airborne and not crashed; the caller
    places it on the ground.
    """
    kind = entity_kind(kind)
    config = config or ENTITIES[kind]
    return Body(
        kind=kind,
        width=to_pixels(config.body_width),
        height=to_pixels(config.body_height),
        mass=config.mass,
    )
