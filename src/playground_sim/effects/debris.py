# MIT License (see LICENSE)
"""
Crash debris fragments.

A burst of small fragments is thrown up and forward when a car crashes.
Fragments fall under a reduced gravity, bounce off the terrain with heavy
damping and disappear when their lifetime runs out. Fragment x is a screen
coordinate; the ground under it is sampled at the matching world x.
"""
from __future__ import annotations
from dataclasses import dataclass
import math

import numpy as np

from ..terrain.heightfield import Landscape
from ..util import to_pixels

FRAGMENT_COUNT = 9
GRAVITY_SCALE = 0.8
AIR_DAMPING = 0.99
GROUND_RESTITUTION = 0.35
GROUND_SLIDE = 0.6
REST_SPEED = 30.0  # px/s


@dataclass
class DebrisFragment:
    x: float
    y: float
    vx: float
    vy: float
    life: float


class DebrisField:
    """
    Owns all live fragments.

    Example:
        debris = DebrisField(rng=np.random.default_rng(7))
        debris.burst(body.position, body.width, body.height, base_speed=400.0)
        debris.update(landscape, gravity=9.81, world_offset=0.0,
                      scene_time=0.0, center_x=480.0, dt=1/60)
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()
        self.fragments: list[DebrisFragment] = []

    def __len__(self) -> int:
        return len(self.fragments)

    def clear(self) -> None:
        self.fragments.clear()

    def burst(self, origin: np.ndarray, width: float, height: float, base_speed: float) -> None:
        """
        Replace any live fragments with a fresh burst.

        Angles fan out over [-60°, +48°] from the horizontal, thrown upward;
        speeds are 15–50% of base_speed (px/s).
        """
        self.fragments.clear()
        rng = self.rng
        for _ in range(FRAGMENT_COUNT):
            angle = -math.pi / 3 + rng.random() * (math.pi * 0.6)
            magnitude = base_speed * (0.15 + rng.random() * 0.35)
            self.fragments.append(DebrisFragment(
                x=float(origin[0]) + (rng.random() - 0.5) * width * 0.6,
                y=float(origin[1]) + height * 0.1,
                vx=math.cos(angle) * magnitude,
                vy=-abs(math.sin(angle)) * magnitude,
                life=1.2 + rng.random() * 0.5,
            ))

    def update(
        self,
        landscape: Landscape,
        gravity: float,
        world_offset: float,
        scene_time: float,
        center_x: float,
        dt: float,
    ) -> None:
        """Advance every fragment by dt and drop the expired ones."""
        if not self.fragments:
            return

        g = to_pixels(gravity) * GRAVITY_SCALE
        alive = []
        for frag in self.fragments:
            frag.vy += g * dt
            frag.vx *= AIR_DAMPING
            frag.x += frag.vx * dt
            frag.y += frag.vy * dt
            frag.life -= dt

            ground_y = landscape.ground_elevation(world_offset + (frag.x - center_x), scene_time)
            if frag.y >= ground_y:
                frag.y = ground_y
                frag.vy *= -GROUND_RESTITUTION
                frag.vx *= GROUND_SLIDE
                if abs(frag.vy) < REST_SPEED:
                    frag.vy = 0.0

            if frag.life > 0:
                alive.append(frag)
        self.fragments = alive
