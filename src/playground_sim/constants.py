# MIT License (see LICENSE)
"""
Physical constants, unit conversions and tuned defaults.

The simulation works in screen pixels (y grows downward). Everything the
user tunes is expressed in SI units and converted with PIXELS_PER_METER at
the boundary between the environment and the integrator.
"""
from __future__ import annotations

# Screen scale: one meter of world space is drawn as 35 pixels.
PIXELS_PER_METER: float = 35.0

# ~200 km/h is a typical electronic limiter for production performance sedans.
CAR_TOP_SPEED_KMH: float = 200.0
CAR_TOP_SPEED_MPS: float = CAR_TOP_SPEED_KMH / 3.6

METERS_PER_SECOND_TO_MPH: float = 2.23694
METERS_PER_SECOND_TO_KMH: float = 3.6
KMH_TO_MPH: float = 0.621371
NEWTON_TO_LBF: float = 0.224809
METERS_TO_FEET: float = 3.28084

# ≈14 m/s corresponds to a 50 km/h delta-V, a documented severe injury threshold.
CAR_CRASH_THRESHOLD: float = 13.9

# Gravity the jump velocities were tuned against.
REFERENCE_GRAVITY: float = 9.81

PHYSICS_DEFAULTS: dict[str, float] = {
    "gravity": REFERENCE_GRAVITY,
    "friction": 0.8,
    "air_resistance": 0.02,
}

FARM_DEFAULTS: dict[str, float] = {
    "height": 40.0,
    "frequency": 180.0,
}

# Upper bound on a single frame's dt (seconds); long pauses would otherwise
# blow up the explicit integration.
MAX_FRAME_DT: float = 0.066

# Lower bound on the wetness-scaled friction coefficient.
MIN_EFFECTIVE_FRICTION: float = 0.05

# Fraction of grip lost at full slickness.
SLICKNESS_GRIP_LOSS: float = 0.6

VIEWPORT_WIDTH: float = 960.0
VIEWPORT_HEIGHT: float = 540.0
