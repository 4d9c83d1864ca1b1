# MIT License (see LICENSE)
"""
Test charges drifting through the field of fixed point charges.

Tracers are pushed by the Coulomb-like field (k = 500, sources within
10 px ignored), damped, soft speed-limited and wrapped at the viewport
edges. The same field is sampled on a 30 px grid for arrow rendering.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from ..constants import TRACER_TRAIL_LENGTH
from ..core.boundaries import wrap_in_box
from ..core.fields import coulomb_field_at, sample_field_grid
from ..core.integrators import apply_damping, drift, limit_speed, scaled_dt
from ..types import Body, Source, Viewport

TIME_SCALE = 20.0
FORCE_SCALE = 0.5
DAMPING = 0.95
MAX_SPEED = 100.0
OVERSPEED_FACTOR = 0.8
GRID_SPACING = 30.0

PARAMS = ("field_strength", "speed", "show_field_lines", "show_particles", "show_force_arrows", "show_analytics")

CHARGE_SIGNS = {"positive": 1, "negative": -1}


@dataclass
class ElectricFieldsState:
    field_strength: float = 1.0
    particle_count: int = 20
    speed: float = 1.0
    show_field_lines: bool = True
    show_particles: bool = True
    show_force_arrows: bool = False
    show_analytics: bool = True

    charges: list[Source] = field(default_factory=list)
    particles: list[Body] = field(default_factory=list)
    time: float = 0.0


def spawn_tracers(state: ElectricFieldsState, viewport: Viewport, rng: np.random.Generator) -> list[Body]:
    return [
        Body(position=(rng.random() * viewport.width, rng.random() * viewport.height), radius=3.0, id=i)
        for i in range(state.particle_count)
    ]


def default_charges(viewport: Viewport) -> list[Source]:
    """A positive charge at 30% and a negative one at 70% of the width."""
    return [
        Source(position=(viewport.width * 0.3, viewport.height * 0.5), sign=1),
        Source(position=(viewport.width * 0.7, viewport.height * 0.5), sign=-1),
    ]


def initialize(state: ElectricFieldsState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    state.particles = spawn_tracers(state, viewport, rng)
    state.charges = default_charges(viewport)


def set_particle_count(state: ElectricFieldsState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_count = int(count)
    state.particles = spawn_tracers(state, viewport, rng)


def add_charge(state: ElectricFieldsState, kind: str, x: float, y: float, magnitude: float = 1.0) -> Source:
    """
    Place a fixed charge.

    Args:
        kind: "positive" or "negative".
        x, y: Position in pixels.

    Raises:
        ValueError: If kind is not a known charge type.
    """
    if kind not in CHARGE_SIGNS:
        raise ValueError(f"Unknown charge type: {kind!r}. Use 'positive' or 'negative'")
    source = Source(position=(x, y), sign=CHARGE_SIGNS[kind], magnitude=magnitude)
    state.charges.append(source)
    return source


def clear_charges(state: ElectricFieldsState, viewport: Viewport) -> None:
    """Remove user charges; the default pair is put back."""
    state.charges = default_charges(viewport)


def field_at(state: ElectricFieldsState, point) -> np.ndarray:
    return coulomb_field_at(point, state.charges, strength=state.field_strength)


def step(state: ElectricFieldsState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)
    state.time += dt

    for p in state.particles:
        p.velocity += field_at(state, p.position) * dt * FORCE_SCALE
        apply_damping(p, DAMPING)
        limit_speed(p, MAX_SPEED, OVERSPEED_FACTOR)
        drift(p, dt)
        p.record_trail(TRACER_TRAIL_LENGTH)
        wrap_in_box(p, viewport.width, viewport.height)


def bodies(state: ElectricFieldsState, viewport: Viewport) -> list[Body]:
    return state.particles


def sources(state: ElectricFieldsState) -> list[Source]:
    return state.charges


def field_samples(state: ElectricFieldsState, viewport: Viewport) -> np.ndarray:
    return sample_field_grid(lambda p: field_at(state, p), viewport.width, viewport.height, GRID_SPACING)


def stats(state: ElectricFieldsState, viewport: Viewport) -> dict:
    return {
        "charge_count": len(state.charges),
        "particle_count": len(state.particles),
        "field_strength": round(state.field_strength, 1),
        "time": round(state.time, 1),
    }
