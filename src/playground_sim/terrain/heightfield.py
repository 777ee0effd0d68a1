# MIT License (see LICENSE)
"""
Procedural height fields for the scrolling world.

Each landscape maps a world x-coordinate and the scene time to a ground
elevation in screen pixels (y-down). All variants are built from bounded
trigonometric terms, so they stay well defined for arbitrarily large x;
float64 precision loss at very large offsets only blurs the sub-pixel
detail and is accepted.

Variants:
- Beach: two drifting sine/cosine swells.
- Racetrack: a cubed-sine camber plus one Gaussian bump; static in time.
- Farm: seeded multi-layer hills driven by smoothed value noise.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import replace
import math

import numpy as np

from ..constants import VIEWPORT_WIDTH, VIEWPORT_HEIGHT
from ..environment import FarmParameters
from ..types import UnknownVariantError
from ..util import clamp, smoothstep, lerp


class Landscape(ABC):
    """
    A ground elevation function plus its surface defaults.

    Attributes:
        name: Registry key.
        label: Display name.
        base_friction: Friction coefficient applied when selected.
        base_drag: Air resistance applied when selected.
        width, height: Viewport size in pixels; elevations are relative to it.
    """

    name: str = ""
    label: str = ""
    base_friction: float = 0.8
    base_drag: float = 0.02

    def __init__(self, width: float = VIEWPORT_WIDTH, height: float = VIEWPORT_HEIGHT) -> None:
        self.width = float(width)
        self.height = float(height)

    @abstractmethod
    def ground_elevation(self, x: float, t: float) -> float:
        """
        Screen y of the ground surface at world x and scene time t.

        Args:
            x: World x-coordinate in pixels.
            t: Scene time in seconds.
        """
        ...

    def frozen(self) -> "Landscape":
        """
        Return a view whose shape cannot change until the next call.

        Stateless landscapes return themselves.
        """
        return self


class Beach(Landscape):
    name = "beach"
    label = "Sunny Beach"
    base_friction = 0.45
    base_drag = 0.04

    def ground_elevation(self, x: float, t: float) -> float:
        gentle = math.sin((x + t * 60.0) / 160.0) * 18.0
        ripples = math.cos((x - t * 45.0) / 90.0) * 6.0
        return self.height * 0.78 + gentle + ripples


class Racetrack(Landscape):
    name = "racetrack"
    label = "Race Track"
    base_friction = 0.92
    base_drag = 0.015

    def ground_elevation(self, x: float, t: float) -> float:
        base = self.height * 0.82
        camber = math.sin(x / 240.0) ** 3 * 28.0
        bump = math.exp(-(((x - self.width * 0.55) / 160.0) ** 2)) * 70.0
        return base - camber - bump


# =============================================================================
# Seeded value noise
# =============================================================================

def pseudo_random(seed: float, value: float) -> float:
    """Deterministic hash of (seed, value) into [0, 1)."""
    x = math.sin(value * 127.1 + seed * 311.7) * 43758.5453
    return x - math.floor(x)


def smooth_noise(seed: float, value: float) -> float:
    """
    1D value noise: hashed lattice values at floor(value) and floor(value)+1,
    blended with smoothstep. Continuous in `value`.
    """
    base = math.floor(value)
    n0 = pseudo_random(seed, base)
    n1 = pseudo_random(seed, base + 1)
    return lerp(n0, n1, smoothstep(value - base))


class Farm(Landscape):
    """
    Rolling hills shaped by live FarmParameters.

    The parameters object is shared with the UI layer and read on every
    sample; use frozen() to pin one snapshot for a whole tick.
    """
    name = "farm"
    label = "Hilly Farm"
    base_friction = 0.72
    base_drag = 0.03

    MIN_FREQUENCY = 20.0
    MIN_SECONDARY_FREQUENCY = 40.0
    FLAT_AMPLITUDE = 0.0001

    def __init__(
        self,
        params: FarmParameters | None = None,
        width: float = VIEWPORT_WIDTH,
        height: float = VIEWPORT_HEIGHT,
    ) -> None:
        super().__init__(width, height)
        self.params = params if params is not None else FarmParameters()

    def frozen(self) -> "Farm":
        return Farm(replace(self.params), self.width, self.height)

    def ground_elevation(self, x: float, t: float) -> float:
        baseline = self.height * 0.74
        amplitude = self.params.height
        seed = self.params.seed
        finite = all(map(math.isfinite, (amplitude, self.params.frequency, seed)))
        if not finite or amplitude <= self.FLAT_AMPLITUDE:
            return baseline

        frequency = max(self.MIN_FREQUENCY, self.params.frequency)

        offset = (x + seed * 97.31) / frequency
        amplitude_noise = smooth_noise(seed, offset * 0.65)
        phase_noise = smooth_noise(seed, offset * 1.32 + 14.7)
        layer_noise = smooth_noise(seed, offset * 1.9 + 31.4)

        primary_amp = amplitude * (0.35 + amplitude_noise * 0.65)
        primary_phase = phase_noise * math.pi * 2.0
        rolling = math.sin((x + t * 25.0) / frequency + primary_phase + seed * 0.001) * primary_amp

        secondary_amp = amplitude * 0.55 * (0.25 + layer_noise * 0.55)
        secondary_freq = max(self.MIN_SECONDARY_FREQUENCY, frequency * (0.42 + layer_noise * 0.4))
        secondary_phase = layer_noise * math.pi * 1.6 + seed * 0.0025
        layers = math.sin((x - t * 40.0) / secondary_freq + secondary_phase) * secondary_amp

        return baseline + clamp(rolling + layers, -amplitude, amplitude)


# =============================================================================
# Registry
# =============================================================================

LANDSCAPES: dict[str, type[Landscape]] = {
    Beach.name: Beach,
    Racetrack.name: Racetrack,
    Farm.name: Farm,
}


def create_landscape(
    name: str,
    farm: FarmParameters | None = None,
    width: float = VIEWPORT_WIDTH,
    height: float = VIEWPORT_HEIGHT,
) -> Landscape:
    """
    Instantiate a landscape by registry name.

    Args:
        name: "beach", "racetrack" or "farm".
        farm: Shared parameters for the farm variant (ignored otherwise).
    """
    try:
        cls = LANDSCAPES[name]
    except KeyError:
        raise UnknownVariantError(f"Unknown landscape: {name!r}") from None
    if cls is Farm:
        return Farm(farm, width, height)
    return cls(width, height)


def sample_profile(landscape: Landscape, xs, t: float) -> np.ndarray:
    """Ground elevations for an array of world x-coordinates at time t."""
    xs = np.asarray(xs, dtype=np.float64)
    snapshot = landscape.frozen()
    return np.fromiter(
        (snapshot.ground_elevation(float(x), t) for x in xs.ravel()),
        dtype=np.float64,
        count=xs.size,
    ).reshape(xs.shape)
