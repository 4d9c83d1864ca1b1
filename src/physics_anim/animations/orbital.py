# MIT License (see LICENSE)
"""
Kepler orbit traced analytically.

The body sits on the polar ellipse r(θ) = a(1 - e²) / (1 + e·cos θ) with the
focus at the centre. θ advances at the mean angular velocity ω = 2π/T,
T = 2π·sqrt(a³/M); the speed shown is ω·r.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field

import numpy as np

from ..core.boundaries import clamp
from ..core.integrators import scaled_dt
from ..types import Body, Viewport

TIME_SCALE = 2.0
ANGLE_GAIN = 100.0
PATH_STEP_DEG = 2
MAX_ECCENTRICITY = 0.99
MIN_SEMI_MAJOR_AXIS = 1.0
MIN_CENTRAL_MASS = 0.01

PARAMS = ("speed", "show_orbit_path", "show_velocity_vector", "show_kepler_info")


@dataclass
class OrbitalState:
    semi_major_axis: float = 200.0
    eccentricity: float = 0.2
    central_mass: float = 1.0
    speed: float = 1.0
    center: tuple[float, float] = (400.0, 300.0)
    show_orbit_path: bool = True
    show_velocity_vector: bool = False
    show_kepler_info: bool = False

    # derived
    semi_minor_axis: float = 0.0
    focal_distance: float = 0.0
    period: float = 0.0
    angular_velocity: float = 0.0
    orbit_path: list = field(default_factory=list)

    angle: float = 0.0
    time: float = 0.0
    position: tuple[float, float] = (0.0, 0.0)
    velocity: tuple[float, float] = (0.0, 0.0)
    total_energy: float = 0.0
    perigee: float | None = None
    apogee: float | None = None


def radius_at(state: OrbitalState, angle: float) -> float:
    e = state.eccentricity
    return state.semi_major_axis * (1 - e * e) / (1 + e * math.cos(angle))


def compute_orbit(state: OrbitalState) -> None:
    """Recompute the derived orbital elements and the sampled orbit path."""
    a = state.semi_major_axis
    e = state.eccentricity
    state.semi_minor_axis = a * math.sqrt(1 - e * e)
    state.focal_distance = a * e
    state.period = 2 * math.pi * math.sqrt(a ** 3 / state.central_mass)
    state.angular_velocity = 2 * math.pi / state.period

    cx, cy = state.center
    state.orbit_path = []
    for deg in range(0, 361, PATH_STEP_DEG):
        theta = math.radians(deg)
        r = radius_at(state, theta)
        state.orbit_path.append((cx + r * math.cos(theta), cy + r * math.sin(theta)))


def _place(state: OrbitalState) -> float:
    r = radius_at(state, state.angle)
    cx, cy = state.center
    state.position = (cx + r * math.cos(state.angle), cy + r * math.sin(state.angle))
    v = state.angular_velocity * r
    state.velocity = (-v * math.sin(state.angle), v * math.cos(state.angle))
    state.total_energy = 0.5 * v * v - state.central_mass / r
    return r


def initialize(state: OrbitalState, viewport: Viewport, rng: np.random.Generator) -> None:
    compute_orbit(state)
    state.angle = 0.0
    state.time = 0.0
    state.perigee = None
    state.apogee = None
    _place(state)


def set_eccentricity(state: OrbitalState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    """Eccentricity is clamped to [0, MAX_ECCENTRICITY]; the orbit stays a closed ellipse."""
    state.eccentricity = clamp(float(value), 0.0, MAX_ECCENTRICITY)
    compute_orbit(state)


def set_semi_major_axis(state: OrbitalState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.semi_major_axis = max(float(value), MIN_SEMI_MAJOR_AXIS)
    compute_orbit(state)


def set_central_mass(state: OrbitalState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.central_mass = max(float(value), MIN_CENTRAL_MASS)
    compute_orbit(state)


def step(state: OrbitalState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)

    state.angle = math.fmod(state.angle + state.angular_velocity * dt * ANGLE_GAIN, 2 * math.pi)
    r = _place(state)

    if state.perigee is None or r < state.perigee:
        state.perigee = r
    if state.apogee is None or r > state.apogee:
        state.apogee = r


def bodies(state: OrbitalState, viewport: Viewport) -> list[Body]:
    return [Body(position=state.position, velocity=state.velocity, mass=1.0, radius=8.0)]


def stats(state: OrbitalState, viewport: Viewport) -> dict:
    cx, cy = state.center
    x, y = state.position
    return {
        "period": state.period,
        "speed": math.hypot(*state.velocity),
        "distance": math.hypot(x - cx, y - cy),
        "eccentricity": state.eccentricity,
        "perigee": state.perigee,
        "apogee": state.apogee,
        "semi_major_axis": state.semi_major_axis,
        "total_energy": state.total_energy,
        "time": state.time,
    }
