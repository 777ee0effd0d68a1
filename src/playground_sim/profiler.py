# MIT License (see LICENSE)
"""
Tick-phase timing.

The simulation wraps each phase of step() (forces, integrate, collide,
friction, debris) in a named section when a Profiler is attached. Samples
are kept per phase and summarised as count, mean, 95th percentile and max,
plus the share of a 60 Hz frame the phase costs on average.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    for _ in range(600):
        sim.step(1/60)
    for line in profiler.report():
        print(line)
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
import time

import numpy as np

logger = logging.getLogger(__name__)

FRAME_BUDGET = 1 / 60


@dataclass
class ProfileStats:
    """Timing samples (seconds) per tick phase."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def clear(self) -> None:
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-phase statistics.

        Returns:
            Dict mapping phase name to a dict with keys 'n', 'mean_ms',
            'p95_ms', 'max_ms' and 'frame_share' (mean over FRAME_BUDGET).
        """
        out = {}
        for name, times in self.samples.items():
            arr = np.asarray(times, dtype=np.float64)
            mean = float(arr.mean())
            out[name] = {
                "n": int(arr.size),
                "mean_ms": 1e3 * mean,
                "p95_ms": 1e3 * float(np.percentile(arr, 95)),
                "max_ms": 1e3 * float(arr.max()),
                "frame_share": mean / FRAME_BUDGET,
            }
        return out


class Profiler:
    """
    Times named sections of the tick.

    Args:
        slow_threshold: A single section taking longer than this (seconds)
            is logged at DEBUG. None disables the check.
    """

    def __init__(self, slow_threshold: float | None = None) -> None:
        self.stats = ProfileStats()
        self.slow_threshold = slow_threshold

    @contextmanager
    def section(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - t0
            self.stats.add(name, elapsed)
            if self.slow_threshold is not None and elapsed > self.slow_threshold:
                logger.debug("Slow %s section: %.3f ms", name, 1e3 * elapsed)

    def reset(self) -> None:
        self.stats.clear()

    def report(self) -> list[str]:
        """One formatted line per phase, slowest mean first."""
        summary = self.stats.summary()
        ordered = sorted(summary.items(), key=lambda kv: kv[1]["mean_ms"], reverse=True)
        return [
            f"{name:10s} n={s['n']:6d}  mean={s['mean_ms']:.4f} ms  "
            f"p95={s['p95_ms']:.4f} ms  max={s['max_ms']:.4f} ms  "
            f"frame={100 * s['frame_share']:.2f}%"
            for name, s in ordered
        ]
