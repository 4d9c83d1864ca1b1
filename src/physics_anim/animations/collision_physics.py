# MIT License (see LICENSE)
"""
Bouncing balls with wall and ball-ball collisions.

Each collision type picks its own starting layout (fractions of the
viewport) and restitution rule:
    head-on    two equal balls approaching at ±80
    elastic    up to 9 random balls, restitution knob
    inelastic  up to 5 heavier balls, restitution forced to 0.3
    mixed      up to 7 balls, restitution drawn per collision in [0.5, 0.8)
    cascade    a row of up to 8 resting balls struck by the first
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field

import numpy as np

from ..constants import G_EARTH, INELASTIC_RESTITUTION, MIXED_RESTITUTION_RANGE
from ..core.boundaries import clamp_in_box, reflect_in_box
from ..core.collisions import Restitution, resolve_pairwise
from ..core.integrators import euler_step, scaled_dt
from ..core.invariants import kinetic_energy, scalar_momentum
from ..types import Body, Viewport

logger = logging.getLogger(__name__)

TIME_SCALE = 5.0
FRICTION = 0.02
WALL_EFFECT_TIME = 0.3
BALL_EFFECT_TIME = 0.5

COLLISION_TYPES = ("head-on", "elastic", "inelastic", "mixed", "cascade")

PARAMS = ("restitution", "gravity", "speed", "show_analytics")

# (fx, fy) slots as fractions of the viewport
_ELASTIC_SLOTS = (
    (0.2, 0.25), (0.8, 0.25), (0.2, 0.5), (0.8, 0.5), (0.5, 0.375),
    (0.375, 0.2), (0.625, 0.55), (0.25, 0.55), (0.75, 0.2),
)
_INELASTIC_SLOTS = ((0.25, 0.25), (0.75, 0.25), (0.25, 0.5), (0.75, 0.5), (0.5, 0.375))
_MIXED_SLOTS = (
    (0.2, 0.2), (0.8, 0.2), (0.2, 0.55), (0.8, 0.55), (0.5, 0.375),
    (0.375, 0.3), (0.625, 0.45),
)

# type -> (slots, velocity spread, radius base, radius spread, mass base, mass spread)
_RANDOM_LAYOUTS = {
    "elastic": (_ELASTIC_SLOTS, 120.0, 15.0, 10.0, 1.0, 2.0),
    "inelastic": (_INELASTIC_SLOTS, 100.0, 18.0, 8.0, 1.5, 1.5),
    "mixed": (_MIXED_SLOTS, 110.0, 12.0, 12.0, 0.8, 2.4),
}

CASCADE_MAX = 8


@dataclass
class CollisionEffect:
    """Short-lived marker where a collision happened."""
    x: float
    y: float
    kind: str
    max_time: float
    time: float = 0.0


@dataclass
class CollisionState:
    ball_count: int = 5
    restitution: float = 0.8
    gravity: float = 0.5
    speed: float = 1.0
    collision_type: str = "elastic"
    show_analytics: bool = False

    balls: list[Body] = field(default_factory=list)
    collision_count: int = 0
    effects: list[CollisionEffect] = field(default_factory=list)
    last_collision: dict | None = None


def layout_balls(state: CollisionState, viewport: Viewport, rng: np.random.Generator) -> list[Body]:
    """
    Build the starting balls for the current collision type.

    Raises:
        ValueError: If the collision type is unknown.
    """
    w, h = viewport.width, viewport.height
    kind = state.collision_type
    if kind == "head-on":
        return [
            Body(position=(w * 0.25, h * 0.5), velocity=(80.0, 0.0), radius=20.0, mass=2.0, id=0),
            Body(position=(w * 0.75, h * 0.5), velocity=(-80.0, 0.0), radius=20.0, mass=2.0, id=1),
        ]
    if kind == "cascade":
        spacing = w * 0.075
        x0 = w * 0.125
        return [
            Body(
                position=(x0 + i * spacing, h * 0.375),
                velocity=(100.0 if i == 0 else 0.0, 0.0),
                radius=15.0,
                mass=1.5,
                id=i,
            )
            for i in range(min(state.ball_count, CASCADE_MAX))
        ]
    if kind not in _RANDOM_LAYOUTS:
        raise ValueError(f"Unknown collision type: {kind!r}. Use one of {COLLISION_TYPES}")

    slots, v_spread, r0, r_spread, m0, m_spread = _RANDOM_LAYOUTS[kind]
    balls = []
    for i, (fx, fy) in enumerate(slots[: state.ball_count]):
        balls.append(Body(
            position=(w * fx, h * fy),
            velocity=((rng.random() - 0.5) * v_spread, (rng.random() - 0.5) * v_spread),
            radius=r0 + rng.random() * r_spread,
            mass=m0 + rng.random() * m_spread,
            id=i,
        ))
    return balls


def initialize(state: CollisionState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.balls = layout_balls(state, viewport, rng)
    state.collision_count = 0
    state.effects.clear()
    state.last_collision = None


def set_ball_count(state: CollisionState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.ball_count = int(count)
    state.balls = layout_balls(state, viewport, rng)
    state.collision_count = 0
    logger.debug("ball count set to %d, %d balls laid out", state.ball_count, len(state.balls))


def set_collision_type(state: CollisionState, kind: str, viewport: Viewport, rng: np.random.Generator) -> None:
    if kind not in COLLISION_TYPES:
        raise ValueError(f"Unknown collision type: {kind!r}. Use one of {COLLISION_TYPES}")
    state.collision_type = kind
    state.balls = layout_balls(state, viewport, rng)
    state.collision_count = 0
    logger.debug("collision type set to %s", kind)


def effective_restitution(state: CollisionState, rng: np.random.Generator) -> Restitution:
    """Restitution used for ball-ball impulses under the current collision type."""
    if state.collision_type == "inelastic":
        return INELASTIC_RESTITUTION
    if state.collision_type == "mixed":
        lo, hi = MIXED_RESTITUTION_RANGE
        return lambda: float(rng.uniform(lo, hi))
    return state.restitution


def step(state: CollisionState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)

    for effect in state.effects:
        effect.time += dt
    state.effects = [e for e in state.effects if e.time < e.max_time]

    gravity = np.array([0.0, state.gravity * G_EARTH])
    keep = 1.0 - FRICTION * dt
    for ball in state.balls:
        euler_step(ball, gravity, dt)
        ball.velocity *= keep
        hits = reflect_in_box(ball, 0.0, 0.0, viewport.width, viewport.height, state.restitution)
        for _ in range(hits):
            state.effects.append(CollisionEffect(
                float(ball.position[0]), float(ball.position[1]), "wall", WALL_EFFECT_TIME))

    contacts = resolve_pairwise(state.balls, effective_restitution(state, rng))
    for c in contacts:
        state.collision_count += 1
        mid = (c.a.position + c.b.position) / 2
        state.effects.append(CollisionEffect(float(mid[0]), float(mid[1]), "ball", BALL_EFFECT_TIME))
        if c.resolved:
            state.last_collision = {
                "masses": (c.a.mass, c.b.mass),
                "speeds": (c.a.speed, c.b.speed),
                "energy": kinetic_energy([c.a, c.b]),
            }
    for ball in state.balls:
        clamp_in_box(ball, 0.0, 0.0, viewport.width, viewport.height)


def bodies(state: CollisionState, viewport: Viewport) -> list[Body]:
    return state.balls


def stats(state: CollisionState, viewport: Viewport) -> dict:
    return {
        "ball_count": len(state.balls),
        "total_momentum": scalar_momentum(state.balls),
        "total_energy": kinetic_energy(state.balls),
        "collision_count": state.collision_count,
    }
