# MIT License (see LICENSE)
"""
Simple pendulum with quadratic air drag.

Equation of motion (length in pixels, 100 px = 1 m):
    θ'' = -(g·9.8)/(L/100) · sin θ  -  sign(θ')·c·θ'²

The measured period comes from positive zero crossings of θ; the last ten
periods are averaged.
"""
from __future__ import annotations
import math
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from ..constants import G_EARTH, PATH_HISTORY_LENGTH, PHASE_HISTORY_LENGTH
from ..core.integrators import scaled_dt
from ..types import Body, Viewport

TIME_SCALE = 3.0
PIVOT_HEIGHT = 0.3
PERIOD_WINDOW = 10

PARAMS = (
    "length", "gravity", "damping", "speed", "mass",
    "show_path", "show_phase_space", "show_energy",
)


@dataclass
class PendulumState:
    length: float = 120.0
    initial_angle: float = math.pi / 4
    gravity: float = 1.0
    damping: float = 0.01
    speed: float = 1.0
    mass: float = 1.0
    show_path: bool = False
    show_phase_space: bool = False
    show_energy: bool = False

    angle: float = math.pi / 4
    angular_velocity: float = 0.0
    time: float = 0.0
    max_amplitude: float = math.pi / 4
    periods: deque = field(default_factory=lambda: deque(maxlen=PERIOD_WINDOW))
    last_zero_crossing: float = 0.0
    crossing_count: int = 0
    path: deque = field(default_factory=lambda: deque(maxlen=PATH_HISTORY_LENGTH))
    phase_space: deque = field(default_factory=lambda: deque(maxlen=PHASE_HISTORY_LENGTH))
    energy_history: deque = field(default_factory=lambda: deque(maxlen=PATH_HISTORY_LENGTH))


def initialize(state: PendulumState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.angle = state.initial_angle
    state.angular_velocity = 0.0
    state.time = 0.0
    state.max_amplitude = abs(state.initial_angle)
    state.periods.clear()
    state.last_zero_crossing = 0.0
    state.crossing_count = 0
    state.path.clear()
    state.phase_space.clear()
    state.energy_history.clear()


def set_initial_angle(state: PendulumState, degrees: float, viewport: Viewport, rng: np.random.Generator) -> None:
    """Set the release angle in degrees; the bob jumps there immediately."""
    state.initial_angle = math.radians(degrees)
    state.angle = state.initial_angle


def set_show_path(state: PendulumState, show: bool, viewport: Viewport, rng: np.random.Generator) -> None:
    state.show_path = bool(show)
    if not show:
        state.path.clear()


def set_show_phase_space(state: PendulumState, show: bool, viewport: Viewport, rng: np.random.Generator) -> None:
    state.show_phase_space = bool(show)
    if not show:
        state.phase_space.clear()


def angular_acceleration(state: PendulumState) -> float:
    """Gravity torque plus quadratic drag opposing the swing."""
    w = state.angular_velocity
    gravity_term = -(state.gravity * G_EARTH) / (state.length / 100.0) * math.sin(state.angle)
    drag = -math.copysign(1.0, w) * state.damping * w * w if w != 0 else 0.0
    return gravity_term + drag


def energies(state: PendulumState) -> tuple[float, float]:
    """Kinetic and potential energy of the bob (L in pixels)."""
    L = state.length
    ke = 0.5 * state.mass * L * L * state.angular_velocity ** 2
    pe = state.mass * state.gravity * G_EARTH * L * (1.0 - math.cos(state.angle))
    return ke, pe


def bob_position(state: PendulumState, viewport: Viewport) -> tuple[float, float]:
    cx = viewport.width / 2
    cy = viewport.height * PIVOT_HEIGHT
    return cx + state.length * math.sin(state.angle), cy + state.length * math.cos(state.angle)


def step(state: PendulumState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)

    previous = state.angle
    state.angular_velocity += angular_acceleration(state) * dt
    state.angle += state.angular_velocity * dt
    state.max_amplitude = max(state.max_amplitude, abs(state.angle))

    # Positive zero crossing: swinging through vertical toward +θ.
    if previous < 0 <= state.angle and state.angular_velocity > 0:
        if state.crossing_count > 0:
            state.periods.append(state.time - state.last_zero_crossing)
        state.last_zero_crossing = state.time
        state.crossing_count += 1

    if state.show_path:
        state.path.append(bob_position(state, viewport))
    if state.show_phase_space:
        state.phase_space.append((state.angle, state.angular_velocity))
    if state.show_energy:
        ke, pe = energies(state)
        state.energy_history.append((ke, pe, ke + pe))


def bodies(state: PendulumState, viewport: Viewport) -> list[Body]:
    x, y = bob_position(state, viewport)
    v = state.angular_velocity * state.length
    return [Body(
        position=(x, y),
        velocity=(v * math.cos(state.angle), -v * math.sin(state.angle)),
        mass=state.mass,
        radius=15.0,
    )]


def stats(state: PendulumState, viewport: Viewport) -> dict:
    ke, pe = energies(state)
    w = abs(state.angular_velocity)
    return {
        "angle": math.degrees(state.angle),
        "angular_velocity": state.angular_velocity,
        "theoretical_period": 2 * math.pi * math.sqrt(state.length / (state.gravity * G_EARTH)),
        "measured_period": (sum(state.periods) / len(state.periods)) if state.periods else 0.0,
        "kinetic_energy": ke,
        "potential_energy": pe,
        "total_energy": ke + pe,
        "max_amplitude": math.degrees(state.max_amplitude),
        "air_resistance_force": state.damping * w * w,
        "damping_coefficient": state.damping,
        "time": state.time,
    }
