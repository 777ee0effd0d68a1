# MIT License (see LICENSE)
"""
Utility functions for numeric helpers and unit conversion.

Small scalar helpers shared by the force model, the crash classifier and
the terrain generators. Vectors are numpy arrays of shape (2,).
"""
from __future__ import annotations
import math

import numpy as np

from .constants import PIXELS_PER_METER


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array."""
    return np.array(x, dtype=np.float64)


def to_pixels(meters: float) -> float:
    """Meters (or m/s, m/s²) to the internal pixel scale."""
    return meters * PIXELS_PER_METER


def to_meters(pixels: float) -> float:
    """Pixels (or px/s, px/s²) back to SI."""
    return pixels / PIXELS_PER_METER


def sign(x: float) -> float:
    """Sign of x as -1.0, 0.0 or 1.0."""
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def clamp_magnitude(value: float, limit: float) -> float:
    """
    Sign-preserving clamp: |result| <= limit.

    A non-finite value collapses to zero rather than propagating.
    """
    if not math.isfinite(value):
        return 0.0
    if abs(value) > limit:
        return math.copysign(limit, value)
    return value


def finite_or_zero(value: float) -> float:
    """Replace NaN/inf with 0.0."""
    return value if math.isfinite(value) else 0.0


def format_or_na(value: float, digits: int = 2) -> str:
    """Fixed-point format, or "n/a" for non-finite values."""
    if value is None or not math.isfinite(value):
        return "n/a"
    return f"{value:.{digits}f}"


def smoothstep(t: float) -> float:
    """Hermite smoothstep on [0, 1]: 3t² - 2t³."""
    return t * t * (3.0 - 2.0 * t)


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t
