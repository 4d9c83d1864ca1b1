# MIT License (see LICENSE)
"""
Charged particles curving in the field of bar magnets.

Each magnet adds s/(1 + d/100) to the field for d > 10 px. The field is
drawn as +y arrows but acts in the Lorentz force as the out-of-plane
component, F = q·(vy·B, -vx·B), so particles circle with a sense set by
their charge.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from ..constants import TRACER_TRAIL_LENGTH
from ..core.boundaries import wrap_in_box
from ..core.fields import lorentz_force, magnet_field_at, sample_field_grid
from ..core.integrators import drift, limit_speed, scaled_dt
from ..types import Body, Source, Viewport

TIME_SCALE = 3.0
INITIAL_SPEED_SPREAD = 80.0
MAX_SPEED = 150.0
OVERSPEED_FACTOR = 0.95
GRID_SPACING = 40.0

PARAMS = ("speed", "show_field_lines", "show_particles", "show_force_arrows")


@dataclass
class MagneticFieldsState:
    field_strength: float = 1.0
    particle_count: int = 15
    speed: float = 1.0
    show_field_lines: bool = True
    show_particles: bool = True
    show_force_arrows: bool = False

    magnets: list[Source] = field(default_factory=list)
    particles: list[Body] = field(default_factory=list)
    time: float = 0.0


def spawn_particles(state: MagneticFieldsState, viewport: Viewport, rng: np.random.Generator) -> list[Body]:
    out = []
    for i in range(state.particle_count):
        out.append(Body(
            position=(rng.random() * viewport.width, rng.random() * viewport.height),
            velocity=((rng.random() - 0.5) * INITIAL_SPEED_SPREAD, (rng.random() - 0.5) * INITIAL_SPEED_SPREAD),
            charge=1.0 if rng.random() > 0.5 else -1.0,
            radius=4.0,
            id=i,
        ))
    return out


def initialize(state: MagneticFieldsState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    state.magnets = [Source(position=(viewport.width / 2, viewport.height / 2), magnitude=state.field_strength)]
    state.particles = spawn_particles(state, viewport, rng)


def set_particle_count(state: MagneticFieldsState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_count = int(count)
    state.particles = spawn_particles(state, viewport, rng)


def set_field_strength(state: MagneticFieldsState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    """Set the strength knob; every existing magnet takes the new value."""
    state.field_strength = float(value)
    for m in state.magnets:
        m.magnitude = state.field_strength


def add_magnet(state: MagneticFieldsState, x: float, y: float) -> Source:
    magnet = Source(position=(x, y), magnitude=state.field_strength)
    state.magnets.append(magnet)
    return magnet


def clear_magnets(state: MagneticFieldsState) -> None:
    state.magnets = []


def step(state: MagneticFieldsState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)
    state.time += dt

    for p in state.particles:
        b = magnet_field_at(p.position, state.magnets)
        p.velocity += lorentz_force(p.charge, p.velocity, b) * dt
        limit_speed(p, MAX_SPEED, OVERSPEED_FACTOR)
        drift(p, dt)
        p.record_trail(TRACER_TRAIL_LENGTH)
        wrap_in_box(p, viewport.width, viewport.height)


def bodies(state: MagneticFieldsState, viewport: Viewport) -> list[Body]:
    return state.particles


def sources(state: MagneticFieldsState) -> list[Source]:
    return state.magnets


def field_samples(state: MagneticFieldsState, viewport: Viewport) -> np.ndarray:
    def arrow(p: np.ndarray) -> np.ndarray:
        return np.array([0.0, magnet_field_at(p, state.magnets)])
    return sample_field_grid(arrow, viewport.width, viewport.height, GRID_SPACING)


def stats(state: MagneticFieldsState, viewport: Viewport) -> dict:
    return {
        "magnet_count": len(state.magnets),
        "particle_count": len(state.particles),
        "field_strength": round(state.field_strength, 1),
        "time": round(state.time, 1),
    }
