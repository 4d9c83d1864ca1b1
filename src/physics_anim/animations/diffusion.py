# MIT License (see LICENSE)
"""
Diffusion of a particle cloud from the left edge.

Particles start packed into the left 20% of the viewport and stay still
until start_diffusion() is called. Afterwards each frame adds a random
kick scaled by the diffusion rate and a push down a fixed concentration
map (high on the left, low on the right). The push fades over the first
ten seconds so the cloud can even out.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field

import numpy as np

from ..constants import DIFFUSION_WALL_RESTITUTION
from ..core.boundaries import reflect_in_box
from ..core.integrators import apply_damping, drift, scaled_dt
from ..core.invariants import mean_speed
from ..types import Body, Viewport
from ..util import is_finite_vec

logger = logging.getLogger(__name__)

TIME_SCALE = 20.0
GRID_SIZE = 15.0
START_REGION = 0.2
KICK_SCALE = 0.5
GRADIENT_PUSH = 0.1
GRADIENT_FADE_MS = 10000.0
MIN_TIME_FACTOR = 0.1
DAMPING = 0.98
POSITION_SCALE = 30.0
TRAIL_LENGTH = 20

PARAMS = (
    "speed", "diffusion_rate",
    "show_concentration", "show_concentration_profile", "show_particle_trails",
)


@dataclass
class DiffusionState:
    particle_count: int = 200
    diffusion_rate: float = 1.0
    concentration_gradient: float = 1.0
    speed: float = 1.0
    particle_size: float = 4.0
    show_concentration: bool = True
    show_concentration_profile: bool = True
    show_particle_trails: bool = False

    particles: list[Body] = field(default_factory=list)
    concentration_map: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    started: bool = False
    time: float = 0.0


def concentration_map(state: DiffusionState, viewport: Viewport) -> np.ndarray:
    """
    Concentration on a GRID_SIZE pixel grid, shape (rows, cols).

    Each column holds gradient·max(0, 1 - 1.5·x) with x the column's
    fractional position across the viewport.
    """
    cols = math.ceil(viewport.width / GRID_SIZE)
    rows = math.ceil(viewport.height / GRID_SIZE)
    x = np.arange(cols) / cols
    profile = state.concentration_gradient * np.maximum(0.0, 1.0 - 1.5 * x)
    return np.tile(profile, (rows, 1))


def _respawn(p: Body, viewport: Viewport, rng: np.random.Generator) -> None:
    p.position[:] = (rng.random() * viewport.width * START_REGION, rng.random() * viewport.height)
    p.velocity[:] = 0.0


def spawn_particles(state: DiffusionState, viewport: Viewport, rng: np.random.Generator) -> list[Body]:
    return [
        Body(
            position=(rng.random() * viewport.width * START_REGION, rng.random() * viewport.height),
            radius=state.particle_size,
            id=i,
        )
        for i in range(state.particle_count)
    ]


def initialize(state: DiffusionState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    state.started = False
    state.particles = spawn_particles(state, viewport, rng)
    state.concentration_map = concentration_map(state, viewport)


def set_particle_count(state: DiffusionState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_count = int(count)
    state.particles = spawn_particles(state, viewport, rng)


def set_particle_size(state: DiffusionState, size: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_size = float(size)
    for p in state.particles:
        p.radius = state.particle_size


def set_concentration_gradient(state: DiffusionState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.concentration_gradient = float(value)
    state.concentration_map = concentration_map(state, viewport)


def start_diffusion(state: DiffusionState) -> None:
    state.started = True


def _gradient_push(state: DiffusionState, p: Body) -> float:
    cmap = state.concentration_map
    rows, cols = cmap.shape
    gx = math.floor(p.position[0] / GRID_SIZE)
    gy = math.floor(p.position[1] / GRID_SIZE)
    if not (0 < gx < cols - 1 and 0 <= gy < rows):
        return 0.0
    diff = cmap[gy, gx] - cmap[gy, gx + 1]
    time_factor = max(MIN_TIME_FACTOR, 1.0 - state.time / GRADIENT_FADE_MS)
    return float(diff) * GRADIENT_PUSH * time_factor


def step(state: DiffusionState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    if not state.started:
        return
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)
    if state.concentration_map.size == 0:
        state.concentration_map = concentration_map(state, viewport)

    for p in state.particles:
        if not (is_finite_vec(p.position) and is_finite_vec(p.velocity)):
            logger.warning("particle %d left the finite range, respawning", p.id)
            _respawn(p, viewport, rng)
            continue

        p.velocity += (rng.random(2) - 0.5) * state.diffusion_rate * KICK_SCALE
        p.velocity[0] += _gradient_push(state, p)
        apply_damping(p, DAMPING)
        drift(p, dt * POSITION_SCALE)

        if state.show_particle_trails:
            p.record_trail(TRAIL_LENGTH)

        reflect_in_box(p, 0.0, 0.0, viewport.width, viewport.height,
                       DIFFUSION_WALL_RESTITUTION, margin=0.0)

        if not (is_finite_vec(p.position) and is_finite_vec(p.velocity)):
            logger.warning("particle %d became non-finite after update, respawning", p.id)
            _respawn(p, viewport, rng)


def bodies(state: DiffusionState, viewport: Viewport) -> list[Body]:
    return state.particles


def stats(state: DiffusionState, viewport: Viewport) -> dict:
    n = len(state.particles)
    left = sum(1 for p in state.particles if p.position[0] < viewport.width / 2)
    return {
        "particle_count": n,
        "avg_speed": mean_speed(state.particles),
        "concentration_spread": abs(left - (n - left)) / n if n else 0.0,
        "time": state.time,
    }
