# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric guards.

Provides the small set of 2D vector operations the animations share:
normalization, squared lengths, the z-axis cross product used by the
Lorentz force, and finiteness checks used by the NaN/inf guards.
All functions operate on 2D vectors represented as numpy arrays of shape (2,).
"""
from __future__ import annotations
import os

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase so positions and velocities can be
    given as tuples or lists.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the +x axis if |v| < eps, so coincident bodies still get a
    usable collision normal.
    """
    n = norm(v)
    if n < eps:
        return np.array([1.0, 0.0], dtype=np.float64)
    return v / n


def vec_cross_z(v: np.ndarray, z: float) -> np.ndarray:
    """
    Cross product of 2D vector with z-axis scalar: (vx, vy, 0) x (0, 0, z).

    Result: (vy*z, -vx*z). Used for the magnetic part of the Lorentz force
    where the field points out of the canvas plane.
    """
    return np.array([v[1] * z, -v[0] * z], dtype=np.float64)


def is_finite_vec(v: np.ndarray) -> bool:
    """True when every component of v is a finite number."""
    return bool(np.all(np.isfinite(v)))


def env_int(name: str, default: int | None) -> int | None:
    """Read an integer from the environment, falling back to default."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)
