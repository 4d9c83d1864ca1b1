# MIT License (see LICENSE)
"""
Domain constraints applied after integration.

Two policies are used by the animations:
- Reflecting walls: clamp the coordinate back inside the box and set the
  velocity component to -v·e.
- Periodic wrap: a tracer leaving one edge reappears at the opposite edge.
"""
from __future__ import annotations

from ..types import Body


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]."""
    return max(lo, min(hi, value))


def reflect_in_box(
    body: Body,
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
    restitution: float,
    margin: float | None = None,
) -> int:
    """
    Reflect a body off the walls of an axis-aligned box.

    A wall is hit when the body's extent (position ± margin) crosses it.
    On a hit the coordinate is clamped to [min + margin, max - margin] and
    the velocity component becomes -v·restitution.

    Args:
        body: Body to constrain (modified in-place).
        x_min, y_min, x_max, y_max: Box bounds.
        restitution: Fraction of the normal speed kept on rebound.
        margin: Distance kept from the walls. Defaults to body.radius.

    Returns:
        Number of axes on which a wall was hit (0, 1 or 2).
    """
    m = body.radius if margin is None else margin
    hits = 0
    x, y = body.position
    if x - m < x_min or x + m > x_max:
        body.velocity[0] *= -restitution
        body.position[0] = clamp(x, x_min + m, x_max - m)
        hits += 1
    if y - m < y_min or y + m > y_max:
        body.velocity[1] *= -restitution
        body.position[1] = clamp(y, y_min + m, y_max - m)
        hits += 1
    return hits


def clamp_in_box(
    body: Body,
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
    margin: float | None = None,
) -> None:
    """
    Clamp a body's position into [min + margin, max - margin] on both axes.

    Velocity is left alone. Used after pair separation, which may push a
    body that the walls already clamped back across a wall.
    """
    m = body.radius if margin is None else margin
    body.position[0] = clamp(body.position[0], x_min + m, x_max - m)
    body.position[1] = clamp(body.position[1], y_min + m, y_max - m)


def wrap_in_box(body: Body, width: float, height: float) -> bool:
    """
    Periodic boundary on [0, width] x [0, height].

    Returns:
        True if the body was wrapped.
    """
    wrapped = False
    if body.position[0] < 0:
        body.position[0] = width
        wrapped = True
    elif body.position[0] > width:
        body.position[0] = 0.0
        wrapped = True
    if body.position[1] < 0:
        body.position[1] = height
        wrapped = True
    elif body.position[1] > height:
        body.position[1] = 0.0
        wrapped = True
    return wrapped
