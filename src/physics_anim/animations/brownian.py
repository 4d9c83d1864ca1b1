# MIT License (see LICENSE)
"""
Brownian motion of point particles.

Every frame each particle receives a random velocity kick proportional to
the temperature, is damped by 0.99 and drifts. Walls reflect with
restitution 0.8; particles closer than twice the particle size exchange
velocities. Wall and particle collisions both count toward the mean free
path (total distance travelled / collisions).
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from ..constants import (
    PARTICLE_WALL_RESTITUTION,
    TRACER_TRAIL_LENGTH,
    VELOCITY_SAMPLE_KEEP,
    VELOCITY_SAMPLE_LIMIT,
)
from ..core.boundaries import clamp_in_box, reflect_in_box
from ..core.collisions import resolve_point_pairs
from ..core.integrators import apply_damping, drift, scaled_dt
from ..core.invariants import mean_speed
from ..types import Body, Viewport

TIME_SCALE = 2.0
KICK_SCALE = 0.1
DAMPING = 0.99
POSITION_SCALE = 50.0

PARAMS = (
    "speed", "temperature", "show_velocity_vectors",
    "show_temperature_heatmap", "show_velocity_distribution", "show_mean_free_path",
)


@dataclass
class BrownianState:
    particle_count: int = 15
    temperature: float = 1.0
    speed: float = 1.0
    particle_size: float = 4.0
    show_trails: bool = False
    show_velocity_vectors: bool = False
    show_temperature_heatmap: bool = False
    show_velocity_distribution: bool = False
    show_mean_free_path: bool = False

    particles: list[Body] = field(default_factory=list)
    time: float = 0.0
    collision_count: int = 0
    mean_free_path: float = 0.0
    velocity_data: list[float] = field(default_factory=list)


def spawn_particles(state: BrownianState, viewport: Viewport, rng: np.random.Generator) -> list[Body]:
    return [
        Body(
            position=(rng.random() * viewport.width, rng.random() * viewport.height),
            velocity=((rng.random() - 0.5) * 2, (rng.random() - 0.5) * 2),
            radius=state.particle_size,
            id=i,
        )
        for i in range(state.particle_count)
    ]


def initialize(state: BrownianState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    state.collision_count = 0
    state.mean_free_path = 0.0
    state.velocity_data = []
    state.particles = spawn_particles(state, viewport, rng)


def set_particle_count(state: BrownianState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_count = int(count)
    state.particles = spawn_particles(state, viewport, rng)


def set_particle_size(state: BrownianState, size: float, viewport: Viewport, rng: np.random.Generator) -> None:
    """Resize the existing particles; the pair threshold follows on the next step."""
    state.particle_size = float(size)
    for p in state.particles:
        p.radius = state.particle_size


def set_show_trails(state: BrownianState, show: bool, viewport: Viewport, rng: np.random.Generator) -> None:
    state.show_trails = bool(show)
    if not show:
        for p in state.particles:
            p.trail.clear()


def step(state: BrownianState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)
    kick = state.temperature * KICK_SCALE

    for p in state.particles:
        p.velocity += (rng.random(2) - 0.5) * kick
        apply_damping(p, DAMPING)
        p.distance += drift(p, dt * POSITION_SCALE)
        state.collision_count += reflect_in_box(
            p, 0.0, 0.0, viewport.width, viewport.height, PARTICLE_WALL_RESTITUTION, margin=0.0)

    contacts = resolve_point_pairs(state.particles, 2 * state.particle_size)
    state.collision_count += len(contacts)
    for p in state.particles:
        clamp_in_box(p, 0.0, 0.0, viewport.width, viewport.height, margin=0.0)

    if state.show_trails:
        for p in state.particles:
            p.record_trail(TRACER_TRAIL_LENGTH)

    if state.show_velocity_distribution:
        state.velocity_data.extend(p.speed for p in state.particles)
        if len(state.velocity_data) > VELOCITY_SAMPLE_LIMIT:
            state.velocity_data = state.velocity_data[-VELOCITY_SAMPLE_KEEP:]

    if state.show_mean_free_path and state.collision_count > 0:
        state.mean_free_path = sum(p.distance for p in state.particles) / state.collision_count


def bodies(state: BrownianState, viewport: Viewport) -> list[Body]:
    return state.particles


def stats(state: BrownianState, viewport: Viewport) -> dict:
    return {
        "particle_count": len(state.particles),
        "avg_speed": mean_speed(state.particles),
        "time": state.time,
        "collision_count": state.collision_count,
        "mean_free_path": state.mean_free_path,
        "temperature": state.temperature,
    }
