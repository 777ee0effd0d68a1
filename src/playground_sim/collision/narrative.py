# MIT License (see LICENSE)
"""
Human-readable crash explanations.

Every figure is given in metric with the imperial equivalent in
parentheses. Threshold lines state "measured > limit"; narratives are a
few sentences describing what happened and the ambient conditions.
"""
from __future__ import annotations
import math
from typing import TYPE_CHECKING

from ..constants import METERS_PER_SECOND_TO_MPH, METERS_TO_FEET
from ..util import finite_or_zero, format_or_na

if TYPE_CHECKING:
    from .crash import CrashThresholds

# Wind below this (m/s) is not worth mentioning.
CALM_WIND = 0.1


def mph(mps: float) -> float:
    return mps * METERS_PER_SECOND_TO_MPH


def feet(meters: float) -> float:
    return meters * METERS_TO_FEET


def speed_text(mps: float) -> str:
    """"12.0 m/s (26.8 mph)", or "n/a m/s (n/a mph)" for non-finite input."""
    return f"{format_or_na(mps, 1)} m/s ({format_or_na(mph(mps), 1)} mph)"


def length_text(meters: float) -> str:
    return f"{format_or_na(meters, 2)} m ({format_or_na(feet(meters), 2)} ft)"


def format_speed_comparison(label: str, measured: float, threshold: float) -> str:
    """e.g. "Vertical impact 15.0 m/s (33.6 mph) > 13.9 m/s (31.1 mph)"."""
    return f"{label} {speed_text(measured)} > {speed_text(threshold)}"


def format_drop_comparison(drop: float, impact: float) -> str:
    return f"Drop {length_text(drop)} with impact {speed_text(impact)}"


def format_slope_comparison(angle_deg: float, threshold_deg: float, rise: float, run: float) -> str:
    return (
        f"Slope angle {format_or_na(angle_deg, 1)}° > {format_or_na(threshold_deg, 1)}° "
        f"(rise {format_or_na(rise, 2)} m / {format_or_na(feet(rise), 2)} ft over {format_or_na(run, 2)} m)"
    )


def _surface_line(effective_friction: float, slickness: float, joiner: str) -> str | None:
    if not math.isfinite(effective_friction):
        return None
    percent = round(finite_or_zero(slickness) * 100)
    wet = f" {joiner} {percent}% slickness" if percent > 0 else ""
    return f"Surface grip was μ≈{effective_friction:.2f}{wet}."


def _wind_line(wind_speed: float) -> str | None:
    magnitude = abs(finite_or_zero(wind_speed))
    if magnitude <= CALM_WIND:
        return None
    return f"Wind was about {speed_text(magnitude)}."


def build_landing_narrative(
    reason: str,
    impact: float,
    horizontal: float,
    total: float,
    air_time: float,
    drop_height: float,
    thresholds: "CrashThresholds",
    severe_total: bool = False,
    drop_induced: bool = False,
    effective_friction: float = math.nan,
    wind_speed: float = 0.0,
    slickness: float = 0.0,
) -> str:
    """Narrative for a crash on touchdown."""
    limit = thresholds.vertical_speed
    lines = [
        f"The car touched down at {speed_text(impact)} downward "
        f"after {format_or_na(air_time, 2)} s aloft."
    ]
    if impact >= limit:
        lines.append(
            f"That exceeded the {speed_text(limit)} vertical crash limit."
        )
    lines.append(
        f"Horizontal speed at impact was {speed_text(horizontal)}, "
        f"giving a total touchdown speed of {speed_text(total)}."
    )
    if severe_total:
        combined = thresholds.combined_speed
        lines.append(
            f"That overall speed rose past the {speed_text(combined)} combined-speed limit."
        )
    if drop_induced and drop_height > 0.05:
        lines.append(
            f"It fell roughly {length_text(drop_height)} before contact."
        )

    for extra in (_surface_line(effective_friction, slickness, "with"), _wind_line(wind_speed)):
        if extra:
            lines.append(extra)

    prefix = f"{reason} - " if reason else ""
    return prefix + " ".join(lines)


def build_slope_narrative(
    slope_angle: float,
    approach_speed: float,
    normal_speed: float,
    rise: float,
    run: float,
    thresholds: "CrashThresholds",
    effective_friction: float = math.nan,
    wind_speed: float = 0.0,
    slickness: float = 0.0,
) -> str:
    """Narrative for running into a wall-like slope. `slope_angle` is in radians."""
    degrees = math.degrees(slope_angle)
    lines = [
        f"The hill rose {length_text(rise)} over {length_text(run)}, creating a "
        f"{format_or_na(degrees, 1)}° slope beyond the {format_or_na(thresholds.slope_angle_deg, 1)}° limit.",
        f"The car was still moving {speed_text(approach_speed)}, so its nose met the slope "
        f"with about {speed_text(normal_speed)} of normal velocity.",
    ]
    for extra in (_surface_line(effective_friction, slickness, "and"), _wind_line(wind_speed)):
        if extra:
            lines.append(extra)
    return "Impacted steep slope - " + " ".join(lines)
