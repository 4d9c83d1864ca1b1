# MIT License (see LICENSE)
"""
Time stepping for the animations.

Every animation converts the wall-clock frame delta (milliseconds) into a
scaled simulation timestep and then advances its bodies with semi-implicit
(symplectic) Euler:
    v(t+dt) = v(t) + a·dt
    x(t+dt) = x(t) + v(t+dt)·dt

Velocity is updated before position and accelerations are not re-evaluated
mid-step. No higher-order scheme is used: the animations are teaching
visuals, and first-order stepping keeps each one easy to follow.

Reference:
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

import numpy as np

from ..types import Body


def scaled_dt(delta_ms: float, speed: float = 1.0, time_scale: float = 1.0) -> float:
    """
    Convert a frame delta in milliseconds into a simulation timestep.

    Args:
        delta_ms: Elapsed wall-clock time since the last frame.
        speed: User-selected speed knob of the animation.
        time_scale: Per-animation constant chosen for readable motion.

    Returns:
        dt = delta_ms / 1000 * speed * time_scale
    """
    return (delta_ms / 1000.0) * speed * time_scale


def euler_step(body: Body, accel: np.ndarray | tuple[float, float], dt: float) -> None:
    """
    Advance a body by one semi-implicit Euler step.

    Args:
        body: Body to integrate (modified in-place).
        accel: Acceleration [ax, ay] evaluated at the start of the step.
        dt: Timestep.
    """
    body.velocity += np.asarray(accel, dtype=np.float64) * dt
    body.position += body.velocity * dt


def drift(body: Body, dt: float) -> float:
    """
    Move a body along its current velocity without changing it.

    Returns:
        The distance travelled, for path-length bookkeeping.
    """
    step = body.velocity * dt
    body.position += step
    return float(np.hypot(step[0], step[1]))


def apply_damping(body: Body, factor: float) -> None:
    """Scale the velocity by a per-frame damping factor (e.g. 0.99)."""
    body.velocity *= factor


def limit_speed(body: Body, max_speed: float, factor: float) -> bool:
    """
    Soft speed limit: scale velocity by `factor` when |v| exceeds max_speed.

    Returns:
        True if the limit was applied.
    """
    if body.speed > max_speed:
        body.velocity *= factor
        return True
    return False
