# MIT License (see LICENSE)
"""
Ideal gas in a piston container.

The container spans x in [300, 500]; its floor sits at y = 400 and the
piston at y = 400 - V, so the gas column is V pixels tall. Particles move
ballistically, bounce off walls, floor and piston with restitution 0.8 and,
optionally, exchange velocities when closer than 6 px.

Every frame a kinetic pressure is estimated,
    P_calc = N / (w·V) · <|v|>² · 0.01
the selected gas law updates the target pressure (or volume), and the
piston moves by (P_calc - P)·0.1, clamped to [100, 350].
"""
from __future__ import annotations
import logging
import math
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from ..constants import (
    PARTICLE_WALL_RESTITUTION,
    PATH_HISTORY_LENGTH,
    VELOCITY_SAMPLE_KEEP,
    VELOCITY_SAMPLE_LIMIT,
)
from ..core.boundaries import clamp, reflect_in_box
from ..core.collisions import resolve_point_pairs
from ..core.integrators import drift, scaled_dt
from ..core.invariants import mean_speed
from ..types import Body, Viewport

logger = logging.getLogger(__name__)

TIME_SCALE = 2.0
POSITION_SCALE = 30.0
CONTAINER_X = 300.0
CONTAINER_WIDTH = 200.0
FLOOR_Y = 400.0
PISTON_MIN = 100.0
PISTON_MAX = 350.0
PISTON_GAIN = 0.1
PRESSURE_SCALE = 0.01
COLLISION_DISTANCE = 6.0
REFERENCE_TEMPERATURE = 300.0

GAS_LAWS = ("boyle", "charles", "gay-lussac", "combined")

PARAMS = (
    "speed", "pressure", "particle_collisions", "show_pressure_gauge",
    "show_pressure_heatmap", "show_velocity_distribution", "show_gas_law_graph",
)

INITIAL_CONDITIONS = {"pressure": 1.0, "volume": 300.0, "temperature": 300.0}


@dataclass
class GasLawsState:
    particle_count: int = 50
    temperature: float = 300.0
    volume: float = 300.0
    pressure: float = 1.0
    speed: float = 1.0
    law_type: str = "boyle"
    particle_collisions: bool = False
    show_pressure_gauge: bool = True
    show_pressure_heatmap: bool = False
    show_velocity_distribution: bool = False
    show_gas_law_graph: bool = False

    piston_y: float = FLOOR_Y - 300.0
    particles: list[Body] = field(default_factory=list)
    time: float = 0.0
    collision_count: int = 0
    velocity_data: list[float] = field(default_factory=list)
    pressure_history: deque = field(default_factory=lambda: deque(maxlen=PATH_HISTORY_LENGTH))
    volume_history: deque = field(default_factory=lambda: deque(maxlen=PATH_HISTORY_LENGTH))
    temperature_history: deque = field(default_factory=lambda: deque(maxlen=PATH_HISTORY_LENGTH))


def spawn_particles(state: GasLawsState, rng: np.random.Generator) -> list[Body]:
    spread = state.temperature * 0.1
    return [
        Body(
            position=(CONTAINER_X + rng.random() * CONTAINER_WIDTH,
                      state.piston_y + rng.random() * state.volume),
            velocity=((rng.random() - 0.5) * spread, (rng.random() - 0.5) * spread),
            id=i,
        )
        for i in range(state.particle_count)
    ]


def initialize(state: GasLawsState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.piston_y = FLOOR_Y - state.volume
    state.time = 0.0
    state.collision_count = 0
    state.velocity_data = []
    state.pressure_history.clear()
    state.volume_history.clear()
    state.temperature_history.clear()
    state.particles = spawn_particles(state, rng)


def set_particle_count(state: GasLawsState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_count = int(count)
    state.particles = spawn_particles(state, rng)


def set_temperature(state: GasLawsState, kelvin: float, viewport: Viewport, rng: np.random.Generator) -> None:
    """Set the temperature and rescale particle speeds by sqrt(T/300)."""
    state.temperature = float(kelvin)
    factor = math.sqrt(state.temperature / REFERENCE_TEMPERATURE)
    for p in state.particles:
        p.velocity *= factor


def set_volume(state: GasLawsState, volume: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.volume = float(volume)
    state.piston_y = FLOOR_Y - state.volume
    for p in state.particles:
        p.position[1] = clamp(p.position[1], state.piston_y, FLOOR_Y)


def set_law_type(state: GasLawsState, law: str, viewport: Viewport, rng: np.random.Generator) -> None:
    """Switch gas law; restores the initial P, V, T and respawns the gas."""
    if law not in GAS_LAWS:
        raise ValueError(f"Unknown gas law: {law!r}. Use one of {GAS_LAWS}")
    state.law_type = law
    state.pressure = INITIAL_CONDITIONS["pressure"]
    state.volume = INITIAL_CONDITIONS["volume"]
    state.temperature = INITIAL_CONDITIONS["temperature"]
    initialize(state, viewport, rng)
    logger.debug("gas law set to %s, state restored to initial conditions", law)


def kinetic_pressure(state: GasLawsState) -> float:
    if not state.particles or state.volume <= 0:
        return 0.0
    density = len(state.particles) / (CONTAINER_WIDTH * state.volume)
    v = mean_speed(state.particles)
    return density * v * v * PRESSURE_SCALE


def apply_gas_law(state: GasLawsState) -> None:
    """Update the target pressure (or volume) from the selected law."""
    p0 = INITIAL_CONDITIONS["pressure"]
    v0 = INITIAL_CONDITIONS["volume"]
    t0 = INITIAL_CONDITIONS["temperature"]
    law = state.law_type
    if law == "boyle":
        if state.volume != v0:
            state.pressure = p0 * v0 / state.volume
    elif law == "charles":
        if state.temperature != t0:
            state.volume = v0 / t0 * state.temperature
            state.piston_y = FLOOR_Y - state.volume
    elif law == "gay-lussac":
        if state.temperature != t0:
            state.pressure = p0 / t0 * state.temperature
    elif law == "combined":
        if state.volume != v0 or state.temperature != t0:
            state.pressure = p0 * v0 / t0 * state.temperature / state.volume
    else:
        raise ValueError(f"Unknown gas law: {law!r}. Use one of {GAS_LAWS}")


def update_piston(state: GasLawsState) -> float:
    """
    Apply the gas law and move the piston toward pressure balance.

    Returns:
        The kinetic pressure estimate used for the feedback.
    """
    calculated = kinetic_pressure(state)
    apply_gas_law(state)
    state.piston_y = clamp(state.piston_y + (calculated - state.pressure) * PISTON_GAIN,
                           PISTON_MIN, PISTON_MAX)
    state.volume = FLOOR_Y - state.piston_y
    return calculated


def step(state: GasLawsState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)

    for p in state.particles:
        drift(p, dt * POSITION_SCALE)
        state.collision_count += reflect_in_box(
            p, CONTAINER_X, state.piston_y, CONTAINER_X + CONTAINER_WIDTH, FLOOR_Y,
            PARTICLE_WALL_RESTITUTION, margin=0.0)

    if state.particle_collisions:
        state.collision_count += len(resolve_point_pairs(state.particles, COLLISION_DISTANCE))

    if state.show_velocity_distribution:
        state.velocity_data.extend(p.speed for p in state.particles)
        if len(state.velocity_data) > VELOCITY_SAMPLE_LIMIT:
            state.velocity_data = state.velocity_data[-VELOCITY_SAMPLE_KEEP:]

    pressure = update_piston(state)
    # The piston sweeps any particle it passed back into the gas column.
    for p in state.particles:
        if p.position[1] < state.piston_y:
            p.position[1] = state.piston_y
    state.pressure_history.append(pressure)
    state.volume_history.append(state.volume)
    state.temperature_history.append(state.temperature)


def bodies(state: GasLawsState, viewport: Viewport) -> list[Body]:
    return state.particles


def stats(state: GasLawsState, viewport: Viewport) -> dict:
    return {
        "particle_count": len(state.particles),
        "temperature": state.temperature,
        "pressure": kinetic_pressure(state),
        "volume": round(state.volume),
        "collision_count": state.collision_count,
        "law_type": state.law_type,
    }
