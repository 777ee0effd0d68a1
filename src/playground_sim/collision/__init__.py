# MIT License (see LICENSE)
"""
Ground contact and crash detection.

This subpackage provides:
    - Ground: Height-field penetration resolution, bounce, airborne tracking.
    - Crash: Slope-impact and landing-impact classification, crash trigger.
    - Narrative: Threshold comparison lines and crash explanations.

Typical usage:
    from playground_sim.collision import resolve_ground_collision

    event = resolve_ground_collision(body, config, landscape, world_x, t,
                                     was_on_ground, air_time, controls, ledger)
    if event:
        print(event.narrative)
"""
from .ground import resolve_ground_collision, bounce, drop_height
from .crash import (
    CrashThresholds,
    DEFAULT_THRESHOLDS,
    DebrisSink,
    Surroundings,
    assess_landing,
    assess_slope_impact,
    probe_distance,
    trigger_crash,
)
from .narrative import (
    format_speed_comparison,
    format_drop_comparison,
    format_slope_comparison,
    build_landing_narrative,
    build_slope_narrative,
)

__all__ = [
    # Ground
    "resolve_ground_collision",
    "bounce",
    "drop_height",
    # Crash
    "CrashThresholds",
    "DEFAULT_THRESHOLDS",
    "DebrisSink",
    "Surroundings",
    "assess_landing",
    "assess_slope_impact",
    "probe_distance",
    "trigger_crash",
    # Narrative
    "format_speed_comparison",
    "format_drop_comparison",
    "format_slope_comparison",
    "build_landing_narrative",
    "build_slope_narrative",
]
