# MIT License (see LICENSE)
"""
Field evaluators for the electromagnetism animations.

Fields are summed from scratch at every query point; there is no spatial
acceleration structure. The same evaluator pushes tracer particles and
samples the arrow grid a renderer draws.

Key concepts:
- Coulomb-like field: E(p) = Σ sign·k·q/r² · r̂, sources within
  MIN_FIELD_RADIUS of p are ignored to avoid the singularity.
- Magnet field: an out-of-plane magnitude falling off as s/(1 + d/d0).
- Lorentz force in 2D with B along z: F = q(v × B) = q(vy·B, -vx·B).
"""
from __future__ import annotations
from typing import Callable, Sequence

import numpy as np

from ..constants import K_ELECTRIC, MIN_FIELD_RADIUS, MAGNET_FALLOFF
from ..types import Source
from ..util import vec_cross_z


def coulomb_field_at(
    point: np.ndarray | tuple[float, float],
    sources: Sequence[Source],
    k: float = K_ELECTRIC,
    strength: float = 1.0,
    min_radius: float = MIN_FIELD_RADIUS,
) -> np.ndarray:
    """
    Electric field at a point from a set of point charges.

    Implements E = Σ sign·k·|q|·strength / r² · (p - s)/r.

    Args:
        point: Query point [x, y].
        sources: Point charges.
        k: Coulomb-like constant.
        strength: Global multiplier (the "field strength" knob).
        min_radius: Sources closer than or at this distance are skipped.

    Returns:
        Field vector [Ex, Ey]. Linear in the set of sources.
    """
    px, py = float(point[0]), float(point[1])
    ex = 0.0
    ey = 0.0
    for s in sources:
        dx = px - s.position[0]
        dy = py - s.position[1]
        r = float(np.hypot(dx, dy))
        if r <= min_radius:
            continue
        f = s.sign * k * s.magnitude * strength / (r * r)
        ex += f * dx / r
        ey += f * dy / r
    return np.array([ex, ey], dtype=np.float64)


def magnet_field_at(
    point: np.ndarray | tuple[float, float],
    magnets: Sequence[Source],
    falloff: float = MAGNET_FALLOFF,
    min_radius: float = MIN_FIELD_RADIUS,
) -> float:
    """
    Out-of-plane magnetic field magnitude at a point.

    Each magnet contributes sign·magnitude / (1 + d/falloff) when it is
    farther than min_radius from the point.
    """
    px, py = float(point[0]), float(point[1])
    b = 0.0
    for m in magnets:
        d = float(np.hypot(px - m.position[0], py - m.position[1]))
        if d <= min_radius:
            continue
        b += m.sign * m.magnitude / (1.0 + d / falloff)
    return b


def lorentz_force(charge: float, velocity: np.ndarray, bz: float) -> np.ndarray:
    """Magnetic Lorentz force q(v × B) for B along z."""
    return charge * vec_cross_z(velocity, bz)


def sample_field_grid(
    field_fn: Callable[[np.ndarray], np.ndarray],
    width: float,
    height: float,
    spacing: float,
) -> np.ndarray:
    """
    Evaluate a vector field on a regular grid for arrow rendering.

    Grid points run from `spacing` up to (but excluding) the viewport edge
    in both axes.

    Returns:
        Array of rows [x, y, fx, fy], shape (K, 4).
    """
    rows = []
    for x in np.arange(spacing, width, spacing):
        for y in np.arange(spacing, height, spacing):
            f = field_fn(np.array([x, y], dtype=np.float64))
            rows.append((x, y, f[0], f[1]))
    if not rows:
        return np.zeros((0, 4), dtype=np.float64)
    return np.array(rows, dtype=np.float64)
