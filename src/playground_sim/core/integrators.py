# MIT License (see LICENSE)
"""
Time stepping for the controlled body.

Semi-implicit (symplectic) Euler:
    v += a * dt
    v  = clamp(v, v_max)        (sign-preserving, per axis)
    x += v * dt

After the position update the world scrolls instead of the body: the
horizontal displacement from the viewport center is folded into the world
offset and the body is re-pinned to the center.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
import logging
import math

from ..entities import EntityConfig
from ..types import Body
from ..util import to_pixels, clamp_magnitude

logger = logging.getLogger(__name__)


def limit_velocity(body: Body, config: EntityConfig) -> None:
    """Clamp |vx| to max_speed and |vy| to max_vertical_speed, keeping sign."""
    body.velocity[0] = clamp_magnitude(float(body.velocity[0]), to_pixels(config.max_speed))
    body.velocity[1] = clamp_magnitude(float(body.velocity[1]), to_pixels(config.max_vertical_speed))


def sanitize_velocity(body: Body) -> None:
    """Replace non-finite velocity components with zero."""
    for i in (0, 1):
        if not math.isfinite(body.velocity[i]):
            logger.debug("Non-finite velocity component %d reset to zero", i)
            body.velocity[i] = 0.0


def semi_implicit_euler_step(body: Body, config: EntityConfig, dt: float) -> None:
    """
    Advance velocity then position by dt using the accumulated acceleration.

    Args:
        body: Body to integrate (modified in-place).
        config: Entity tuning supplying the speed caps.
        dt: Timestep in seconds.
    """
    body.velocity += body.acceleration * dt
    sanitize_velocity(body)
    limit_velocity(body, config)
    body.position += body.velocity * dt


def recenter(body: Body, world_offset: float, center_x: float) -> float:
    """
    Fold the body's horizontal displacement into the world offset.

    Returns:
        The new world offset. body.position[0] is reset to center_x.
    """
    world_offset += float(body.position[0]) - center_x
    body.position[0] = center_x
    return world_offset


def clamp_vertical(body: Body, viewport_height: float) -> None:
    """
    Keep the body inside the viewport vertically.

    Hitting the top pins the body at half its height; sinking more than one
    body height below the bottom edge puts it back just above the bottom.
    Vertical velocity is zeroed in both cases.
    """
    half = body.half_height
    if body.position[1] < half:
        body.position[1] = half
        body.velocity[1] = 0.0
    if body.position[1] > viewport_height + body.height:
        body.position[1] = viewport_height - half
        body.velocity[1] = 0.0
