# MIT License (see LICENSE)
"""
Flow through a pipe with a constriction between x = 300 and x = 500.

By continuity the fluid speeds up inside the narrow section; particles
move at VELOCITY_RATIO times their inlet speed there and return to the
inlet speed past it. Bernoulli's equation gives the matching pressure
drop Δp = ½·ρ·(v₂² - v₁²).
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from ..core.integrators import drift
from ..types import Body, Viewport

VISUALIZATION_MODES = ("basic", "pressure", "velocity", "energy")

CONSTRICTION_START = 300.0
CONSTRICTION_END = 500.0
VELOCITY_RATIO = 1.5
PIPE_TOP = 150.0
PIPE_BOTTOM = 450.0
POSITION_SCALE = 0.1
MAX_LIFE_MS = 8000.0

PARAMS = ("pipe_width", "fluid_density", "pressure_difference")


@dataclass
class BernoulliState:
    pipe_width: float = 50.0
    fluid_density: float = 1.0
    pressure_difference: float = 1.0
    visualization_mode: str = "basic"
    max_particles: int = 80

    particles: list[Body] = field(default_factory=list)
    inlet_speeds: list[float] = field(default_factory=list)
    time: float = 0.0


def in_constriction(x: float) -> bool:
    return CONSTRICTION_START < x < CONSTRICTION_END


def _respawn(state: BernoulliState, i: int, viewport: Viewport, rng: np.random.Generator) -> None:
    p = state.particles[i]
    p.position[:] = (-50 + rng.random() * 50, 250 + rng.random() * 100)
    speed = state.pressure_difference * (1 + rng.random() * 0.3)
    p.velocity[:] = (speed, (rng.random() - 0.5) * 0.3)
    p.life = 0.0
    state.inlet_speeds[i] = speed


def spawn_particles(state: BernoulliState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particles = [Body(radius=4 + rng.random() * 3, id=i) for i in range(state.max_particles)]
    state.inlet_speeds = [0.0] * state.max_particles
    for i in range(state.max_particles):
        _respawn(state, i, viewport, rng)


def initialize(state: BernoulliState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    spawn_particles(state, viewport, rng)


def set_max_particles(state: BernoulliState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.max_particles = int(count)
    spawn_particles(state, viewport, rng)


def set_visualization_mode(state: BernoulliState, mode: str, viewport: Viewport, rng: np.random.Generator) -> None:
    if mode not in VISUALIZATION_MODES:
        raise ValueError(f"Unknown visualization mode: {mode!r}. Use one of {VISUALIZATION_MODES}")
    state.visualization_mode = mode


def step(state: BernoulliState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    for i, p in enumerate(state.particles):
        base = state.inlet_speeds[i]
        p.velocity[0] = base * VELOCITY_RATIO if in_constriction(p.position[0]) else base
        drift(p, delta_ms * POSITION_SCALE)
        p.life += delta_ms

        x, y = p.position
        if (x > viewport.width + 50 or x < -50 or y < PIPE_TOP or y > PIPE_BOTTOM
                or p.life > MAX_LIFE_MS):
            _respawn(state, i, viewport, rng)


def pressure_drop(state: BernoulliState) -> float:
    """Δp between the wide and narrow section for the nominal inlet speed."""
    v1 = state.pressure_difference
    v2 = v1 * VELOCITY_RATIO
    return 0.5 * state.fluid_density * (v2 * v2 - v1 * v1)


def bodies(state: BernoulliState, viewport: Viewport) -> list[Body]:
    return state.particles


def stats(state: BernoulliState, viewport: Viewport) -> dict:
    return {
        "pipe_width": state.pipe_width,
        "fluid_density": state.fluid_density,
        "pressure_difference": state.pressure_difference,
        "velocity_ratio": VELOCITY_RATIO,
        "pressure_drop": pressure_drop(state),
        "time": state.time,
    }
