# MIT License (see LICENSE)
"""
Mechanical quantities of the body used by the diagnostics panel.

All results are SI: the body's pixel velocity is converted first.
"""
from __future__ import annotations

from ..types import Body
from ..util import to_meters


def kinetic_energy(body: Body) -> float:
    """
    Translational kinetic energy E_k = 0.5 * m * v² in Joules.

    Bodies have no rotational state, so there is no angular term.
    """
    v = body.speed_mps
    return 0.5 * body.mass * v * v


def horizontal_momentum(body: Body) -> float:
    """p_x = m * v_x in kg·m/s."""
    return body.mass * to_meters(float(body.velocity[0]))
