# MIT License (see LICENSE)
"""
Crash classification for car-type bodies.

Two independent ways to wreck a car:

1. Slope impact: while driving on the ground, the terrain a short distance
   ahead rises steeper than the slope limit and the car is still fast.
2. Landing impact: on touchdown after being airborne, one or more of three
   predicates fires:
       severe_vertical: v_impact > V            and t_air > 0.12 s
       severe_total:    |v| > 1.6 V, v_impact > 4 m/s, t_air > 0.2 s
       drop_induced:    v_impact > 0.75 V, drop > 1.2 m, t_air > 0.25 s
   where V is the vertical crash threshold (13.9 m/s).

The assess_* functions are pure: they return a CrashDiagnostics record or
None. trigger_crash() applies the side effects exactly once per episode.

Severity is only used to scale the debris burst.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math
from typing import Protocol

import numpy as np

from ..constants import CAR_CRASH_THRESHOLD
from ..types import Body, ControlInput, CrashDiagnostics, EntityKind, ForceLedger
from ..util import finite_or_zero, to_meters, to_pixels
from .narrative import (
    format_speed_comparison,
    format_drop_comparison,
    format_slope_comparison,
    build_landing_narrative,
    build_slope_narrative,
)

logger = logging.getLogger(__name__)

SLOPE_REASON = "Impacted steep slope"
VERTICAL_REASON = "Hard vertical impact"
TOTAL_REASON = "High-speed landing"
DROP_REASON = "Large drop impact"
MULTIPLE_SUFFIX = " (multiple factors)"


@dataclass(frozen=True)
class CrashThresholds:
    """
    Tuned crash limits. Speeds in m/s, times in s, heights in m.

    Slope comparisons are strict: a car at exactly the minimum speed or
    exactly the limiting angle does not crash.
    """
    # Slope impact
    slope_angle_deg: float = 55.0
    slope_min_speed: float = 8.0
    probe_min_distance: float = 40.0        # px
    probe_width_factor: float = 0.8
    slope_min_horizontal_speed: float = 0.1  # px/s
    slope_normal_factor: float = 1.5
    slope_approach_factor: float = 0.6

    # Landing impact
    vertical_speed: float = CAR_CRASH_THRESHOLD
    vertical_min_air_time: float = 0.12
    combined_factor: float = 1.6
    combined_min_vertical: float = 4.0
    combined_min_air_time: float = 0.2
    drop_speed_factor: float = 0.75
    drop_min_height: float = 1.2
    drop_min_air_time: float = 0.25
    landing_total_factor: float = 0.35

    # Bounce
    bounce_floor: float = 5.0               # px/s

    @property
    def slope_angle(self) -> float:
        """Slope limit in radians."""
        return math.radians(self.slope_angle_deg)

    @property
    def combined_speed(self) -> float:
        return self.vertical_speed * self.combined_factor

    @property
    def drop_speed(self) -> float:
        return self.vertical_speed * self.drop_speed_factor


DEFAULT_THRESHOLDS = CrashThresholds()


class DebrisSink(Protocol):
    """Anything that can spawn a burst of crash fragments."""

    def burst(self, origin: np.ndarray, width: float, height: float, base_speed: float) -> None:
        ...


@dataclass(frozen=True)
class Surroundings:
    """Ambient conditions copied into diagnostics."""
    effective_friction: float = 0.0
    wind_speed: float = 0.0
    slickness: float = 0.0

    def sanitized(self) -> "Surroundings":
        """Copy with NaN/inf replaced by zero."""
        return Surroundings(
            effective_friction=finite_or_zero(self.effective_friction),
            wind_speed=finite_or_zero(self.wind_speed),
            slickness=finite_or_zero(self.slickness),
        )


def can_crash(body: Body) -> bool:
    return body.kind is EntityKind.CAR and not body.crashed


def probe_distance(body: Body, thresholds: CrashThresholds = DEFAULT_THRESHOLDS) -> float:
    """Forward look-ahead in pixels for the slope probe."""
    return max(body.width * thresholds.probe_width_factor, thresholds.probe_min_distance)


def assess_slope_impact(
    body: Body,
    ground_y: float,
    ground_ahead: float,
    run: float,
    surroundings: Surroundings = Surroundings(),
    thresholds: CrashThresholds = DEFAULT_THRESHOLDS,
) -> CrashDiagnostics | None:
    """
    Decide whether the terrain ahead is a wall the car runs into.

    Args:
        body: The grounded car.
        ground_y: Ground elevation (px) under the car.
        ground_ahead: Ground elevation (px) `run` pixels ahead in the
            direction of travel.
        run: Probe distance in pixels (> 0).

    Returns:
        Diagnostics for a slope crash, or None.
    """
    rise_px = ground_y - ground_ahead  # y-down: positive when the ground ahead is higher
    if rise_px <= 0 or run <= 0:
        return None

    slope = math.atan2(rise_px, run)
    approach = finite_or_zero(to_meters(abs(float(body.velocity[0]))))
    if not (slope > thresholds.slope_angle and approach > thresholds.slope_min_speed):
        return None

    surroundings = surroundings.sanitized()
    rise = to_meters(rise_px)
    run_m = to_meters(run)
    normal_speed = approach * math.sin(slope)
    severity = max(
        normal_speed * thresholds.slope_normal_factor,
        approach * thresholds.slope_approach_factor,
    )
    lines = [
        format_slope_comparison(math.degrees(slope), thresholds.slope_angle_deg, rise, run_m),
        format_speed_comparison("Approach speed", approach, thresholds.slope_min_speed),
    ]
    return CrashDiagnostics(
        kind="slope",
        reason=SLOPE_REASON,
        impact_velocity=normal_speed,
        horizontal_velocity=approach,
        total_velocity=approach,
        air_time=finite_or_zero(body.air_time),
        drop_height=0.0,
        severity=severity,
        thresholds=lines,
        narrative=build_slope_narrative(
            slope, approach, normal_speed, rise, run_m, thresholds,
            effective_friction=surroundings.effective_friction,
            wind_speed=surroundings.wind_speed,
            slickness=surroundings.slickness,
        ),
        effective_friction=surroundings.effective_friction,
        wind_speed=surroundings.wind_speed,
        surface_slickness=surroundings.slickness,
    )


def assess_landing(
    impact: float,
    horizontal: float,
    air_time: float,
    drop_height: float,
    surroundings: Surroundings = Surroundings(),
    thresholds: CrashThresholds = DEFAULT_THRESHOLDS,
) -> CrashDiagnostics | None:
    """
    Evaluate the three landing predicates.

    Args:
        impact: Downward speed at touchdown in m/s.
        horizontal: Horizontal speed at touchdown in m/s (magnitude).
        air_time: Seconds spent airborne.
        drop_height: Meters between take-off ground and landing ground.

    Returns:
        Diagnostics listing only the predicates that fired, or None.
    """
    impact = finite_or_zero(impact)
    horizontal = finite_or_zero(horizontal)
    air_time = finite_or_zero(air_time)
    drop_height = finite_or_zero(drop_height)
    total = math.hypot(impact, horizontal)

    severe_vertical = impact > thresholds.vertical_speed and air_time > thresholds.vertical_min_air_time
    severe_total = (
        total > thresholds.combined_speed
        and impact > thresholds.combined_min_vertical
        and air_time > thresholds.combined_min_air_time
    )
    drop_induced = (
        impact > thresholds.drop_speed
        and drop_height > thresholds.drop_min_height
        and air_time > thresholds.drop_min_air_time
    )
    if not (severe_vertical or severe_total or drop_induced):
        return None

    lines = []
    if severe_vertical:
        lines.append(format_speed_comparison("Vertical impact", impact, thresholds.vertical_speed))
    if severe_total:
        lines.append(format_speed_comparison("Combined speed", total, thresholds.combined_speed))
    if drop_induced:
        lines.append(format_drop_comparison(drop_height, impact))

    if severe_vertical:
        reason = VERTICAL_REASON
    elif severe_total:
        reason = TOTAL_REASON
    else:
        reason = DROP_REASON
    if len(lines) > 1:
        reason += MULTIPLE_SUFFIX
    surroundings = surroundings.sanitized()

    return CrashDiagnostics(
        kind="landing",
        reason=reason,
        impact_velocity=impact,
        horizontal_velocity=horizontal,
        total_velocity=total,
        air_time=air_time,
        drop_height=drop_height,
        severity=max(impact, total * thresholds.landing_total_factor),
        thresholds=lines,
        narrative=build_landing_narrative(
            reason, impact, horizontal, total, air_time, drop_height, thresholds,
            severe_total=severe_total,
            drop_induced=drop_induced,
            effective_friction=surroundings.effective_friction,
            wind_speed=surroundings.wind_speed,
            slickness=surroundings.slickness,
        ),
        effective_friction=surroundings.effective_friction,
        wind_speed=surroundings.wind_speed,
        surface_slickness=surroundings.slickness,
    )


def trigger_crash(
    body: Body,
    controls: ControlInput,
    ledger: ForceLedger,
    diagnostics: CrashDiagnostics,
    debris: DebrisSink | None = None,
) -> CrashDiagnostics | None:
    """
    Put a car into the crashed state.

    No-op (returns None) when the body is already crashed or is not a car,
    so the first trigger of an episode wins. Otherwise: sets `crashed`,
    zeroes velocity and force bookkeeping, releases held input and asks the
    debris sink for a burst scaled by the crash severity.

    Returns:
        The diagnostics that now describe the crash, or None if ignored.
    """
    if not can_crash(body):
        logger.debug("Ignoring crash trigger (%s) for %s body, crashed=%s",
                     diagnostics.reason, body.kind.value, body.crashed)
        return None

    body.crashed = True
    body.stop()
    ledger.clear()
    controls.release_all()

    if debris is not None:
        base_speed = to_pixels(max(diagnostics.severity, 0.0)) if math.isfinite(diagnostics.severity) else 0.0
        debris.burst(body.position.copy(), body.width, body.height, base_speed)

    logger.info("Car crashed: %s (severity %.1f m/s)", diagnostics.reason, diagnostics.severity)
    return diagnostics
