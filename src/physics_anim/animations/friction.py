# MIT License (see LICENSE)
"""
Block sliding on an inclined plane with Coulomb friction.

Forces along the incline (mass m, angle θ, coefficient μ):
    W = m·g·9.8,  N = W·cos θ,  F∥ = W·sin θ,  F_f = μ·N

At rest the block stays put until F∥ exceeds μ·N (static friction); once
moving, kinetic friction opposes the sign of the velocity. The resulting
acceleration is amplified by (1 + 1.5·sin θ) so steep slopes read clearly.

The incline spans 75% of the viewport width starting at 12.5%, and is
lifted so its low end stays above 95% of the height.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

import numpy as np

from ..constants import G_EARTH
from ..core.integrators import scaled_dt
from ..types import Body, Viewport

TIME_SCALE = 3.0
ANGLE_GAIN = 1.5
REST_EPS = 1e-4
START_OFFSET = 0.05
SURFACE_GAP = 18.0

PARAMS = ("friction_coefficient", "object_mass", "gravity", "speed", "show_analytics")


@dataclass
class FrictionState:
    incline_angle: float = 20.0
    friction_coefficient: float = 0.3
    object_mass: float = 5.0
    initial_velocity: float = 0.0
    gravity: float = 1.0
    speed: float = 1.0
    show_analytics: bool = False

    x: float = 100.0
    y: float = 200.0
    vx: float = 0.0


@dataclass(frozen=True)
class Incline:
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    angle: float


def incline_geometry(state: FrictionState, viewport: Viewport) -> Incline:
    """Endpoints of the incline surface, lifted to fit inside the viewport."""
    theta = math.radians(state.incline_angle)
    length = viewport.width * 0.75
    start_x = viewport.width * 0.125
    start_y = viewport.height * 0.5
    end_y = start_y + length * math.sin(theta)
    lift = max(0.0, end_y - viewport.height * 0.95)
    return Incline(
        start_x=start_x,
        start_y=start_y - lift,
        end_x=start_x + length * math.cos(theta),
        end_y=end_y - lift,
        angle=theta,
    )


def object_size(state: FrictionState) -> float:
    return max(12.0, min(25.0, 12.0 + state.object_mass * 2))


def _surface_y(state: FrictionState, incline: Incline, x: float) -> float:
    return (incline.start_y + (x - incline.start_x) * math.tan(incline.angle)
            - object_size(state) - SURFACE_GAP * math.cos(incline.angle))


def forces(state: FrictionState) -> dict:
    """Weight, normal, parallel and friction force magnitudes."""
    theta = math.radians(state.incline_angle)
    weight = state.object_mass * state.gravity * G_EARTH
    normal = weight * math.cos(theta)
    return {
        "weight": weight,
        "normal": normal,
        "parallel": weight * math.sin(theta),
        "friction": state.friction_coefficient * normal,
    }


def initialize(state: FrictionState, viewport: Viewport, rng: np.random.Generator) -> None:
    incline = incline_geometry(state, viewport)
    offset = viewport.width * 0.75 * START_OFFSET
    state.x = incline.start_x + offset
    state.y = _surface_y(state, incline, state.x)
    state.vx = state.initial_velocity * math.cos(incline.angle)


def set_incline_angle(state: FrictionState, degrees: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.incline_angle = float(degrees)
    initialize(state, viewport, rng)


def set_initial_velocity(state: FrictionState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.initial_velocity = float(value)
    initialize(state, viewport, rng)


def step(state: FrictionState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    dt = scaled_dt(delta_ms, state.speed, TIME_SCALE)
    f = forces(state)

    if abs(state.vx) < REST_EPS:
        if abs(f["parallel"]) > f["friction"]:
            net = f["parallel"] - math.copysign(f["friction"], f["parallel"])
        else:
            net = 0.0
            state.vx = 0.0
    else:
        net = f["parallel"] - math.copysign(f["friction"], state.vx)

    theta = math.radians(state.incline_angle)
    accel = net / state.object_mass * (1 + math.sin(theta) * ANGLE_GAIN)
    state.vx += accel * dt
    state.x += state.vx * dt

    incline = incline_geometry(state, viewport)
    if state.x > incline.end_x:
        state.x = incline.end_x
        state.vx = 0.0
    state.y = _surface_y(state, incline, state.x)


def bodies(state: FrictionState, viewport: Viewport) -> list[Body]:
    theta = math.radians(state.incline_angle)
    return [Body(
        position=(state.x, state.y),
        velocity=(state.vx, state.vx * math.tan(theta)),
        mass=state.object_mass,
        radius=object_size(state),
    )]


def stats(state: FrictionState, viewport: Viewport) -> dict:
    f = forces(state)
    net = f["parallel"] - f["friction"]
    return {
        "friction_coefficient": state.friction_coefficient,
        "incline_angle": state.incline_angle,
        "net_force": net,
        "acceleration": net / state.object_mass,
    }
