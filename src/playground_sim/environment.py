# MIT License (see LICENSE)
"""
Live-tunable environment parameters.

The UI layer writes these fields directly between ticks; the physics core
reads the current values at the start of every tick and never caches them.
All fields are non-optional with explicit defaults.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from .constants import (
    PHYSICS_DEFAULTS,
    FARM_DEFAULTS,
    MIN_EFFECTIVE_FRICTION,
    SLICKNESS_GRIP_LOSS,
)
from .util import clamp

if TYPE_CHECKING:
    from .terrain.heightfield import Landscape

FARM_SEED_RANGE = 1_000_000


def random_seed(rng: np.random.Generator | None = None) -> int:
    """Draw a terrain seed in [0, 1_000_000)."""
    rng = rng or np.random.default_rng()
    return int(rng.integers(0, FARM_SEED_RANGE))


@dataclass
class FarmParameters:
    """
    Shape of the noise-hill landscape.

    Attributes:
        height: Amplitude in pixels. <= 0 gives flat ground.
        frequency: Horizontal wavelength scale in pixels (floored at 20).
        seed: Noise seed; the same seed always yields the same hills.
    """
    height: float = FARM_DEFAULTS["height"]
    frequency: float = FARM_DEFAULTS["frequency"]
    seed: int = 0

    def reseed(self, rng: np.random.Generator | None = None) -> None:
        self.seed = random_seed(rng)

    def reset(self, rng: np.random.Generator | None = None) -> None:
        self.height = FARM_DEFAULTS["height"]
        self.frequency = FARM_DEFAULTS["frequency"]
        self.reseed(rng)


@dataclass
class Environment:
    """
    Global physical parameters.

    Attributes:
        gravity: Gravitational acceleration in m/s² (positive pulls down).
        ground_friction: Coulomb friction coefficient of the surface.
        air_resistance: Linear drag rate in 1/s.
        wind_speed: Horizontal wind in m/s (positive blows right).
        slickness: Wetness fraction in [0, 1]; reduces grip.
        farm: Parameters of the noise-hill landscape.
    """
    gravity: float = PHYSICS_DEFAULTS["gravity"]
    ground_friction: float = PHYSICS_DEFAULTS["friction"]
    air_resistance: float = PHYSICS_DEFAULTS["air_resistance"]
    wind_speed: float = 0.0
    slickness: float = 0.0
    farm: FarmParameters = field(default_factory=FarmParameters)

    @property
    def effective_friction(self) -> float:
        """
        Friction coefficient after wetness scaling.

        mu_eff = max(0.05, mu * (1 - 0.6 * slickness))
        """
        wet = 1.0 - self.slickness * SLICKNESS_GRIP_LOSS
        return max(MIN_EFFECTIVE_FRICTION, self.ground_friction * wet)

    def set_slickness_percent(self, percent: float) -> None:
        """Slider input: clamp to [0, 100] and store as a fraction."""
        self.slickness = clamp(percent, 0.0, 100.0) / 100.0

    def apply_landscape_defaults(self, landscape: "Landscape") -> None:
        """Adopt the surface friction and drag a landscape ships with."""
        self.ground_friction = landscape.base_friction
        self.air_resistance = landscape.base_drag

    def reset(self) -> None:
        """Restore default gravity and calm, dry weather."""
        self.gravity = PHYSICS_DEFAULTS["gravity"]
        self.wind_speed = 0.0
        self.slickness = 0.0
