# MIT License (see LICENSE)
"""
Conserved and summary quantities over a set of bodies.

Used by the stats of the multi-body animations and by the tests: with
restitution 1 and no gravity or friction, linear momentum is conserved
through a collision pass and kinetic energy is preserved.
"""
from __future__ import annotations
import numpy as np

from ..types import Body


def kinetic_energy(bodies: list[Body]) -> float:
    """
    Total translational kinetic energy.

    T = Σ 0.5·m·v²
    """
    ke = 0.0
    for b in bodies:
        if b.mass <= 0:
            continue
        ke += 0.5 * b.mass * float(np.dot(b.velocity, b.velocity))
    return ke


def linear_momentum(bodies: list[Body]) -> np.ndarray:
    """
    Total linear momentum vector.

    P = Σ m·v
    """
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        if b.mass <= 0:
            continue
        p += b.mass * b.velocity
    return p


def scalar_momentum(bodies: list[Body]) -> float:
    """
    Sum of momentum magnitudes Σ m·|v|.

    Not conserved; it is the "total momentum" figure shown in the
    collision stats panel.
    """
    return float(sum(b.mass * b.speed for b in bodies if b.mass > 0))


def mean_speed(bodies: list[Body]) -> float:
    """Average speed, 0 for an empty list."""
    if not bodies:
        return 0.0
    return float(sum(b.speed for b in bodies) / len(bodies))
