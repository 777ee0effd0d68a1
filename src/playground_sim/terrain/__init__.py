# MIT License (see LICENSE)
"""
Terrain height fields.

This subpackage provides:
    - Landscape: Abstract ground elevation function with surface defaults.
    - Beach, Racetrack, Farm: The three built-in variants.
    - create_landscape: Registry lookup by name.
    - sample_profile: Vectorised sampling for drawing and analysis.

Typical usage:
    from playground_sim.terrain import create_landscape

    farm = create_landscape("farm")
    y = farm.ground_elevation(world_x, scene_time)
"""
from .heightfield import (
    Landscape,
    Beach,
    Racetrack,
    Farm,
    LANDSCAPES,
    create_landscape,
    sample_profile,
    smooth_noise,
    pseudo_random,
)

__all__ = [
    "Landscape",
    "Beach",
    "Racetrack",
    "Farm",
    "LANDSCAPES",
    "create_landscape",
    "sample_profile",
    "smooth_noise",
    "pseudo_random",
]
