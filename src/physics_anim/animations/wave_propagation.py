# MIT License (see LICENSE)
"""
A row of particles driven by an analytic wave.

With phase φ = 2π·x₀/λ and ωt = 2π·f·t, each particle at rest position x₀
is displaced by:
    transverse     y = A·sin(φ - ωt)
    longitudinal   x = (A/2)·sin(φ - ωt)
    interference   y = A·sin(φ - ωt) + A·sin(φ + ωt)
    standing       y = A·sin φ · cos ωt
and its velocity is the time derivative of that displacement. Wave speed
is f·λ and the displayed energy ½·A²·f².
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field, fields

import numpy as np

from ..core.integrators import scaled_dt
from ..types import Body, Viewport

WAVE_TYPES = ("transverse", "longitudinal", "interference", "standing")
PARTICLE_COUNT = 80
LONGITUDINAL_SCALE = 0.5

PARAMS = ("speed", "show_analytics")


@dataclass
class WavePropagationState:
    wave_type: str = "transverse"
    frequency: float = 1.0
    amplitude: float = 50.0
    wavelength: float = 150.0
    speed: float = 1.0
    show_analytics: bool = False

    wave_speed: float = 0.0
    energy: float = 0.0
    particles: list[Body] = field(default_factory=list)
    time: float = 0.0


def time_scale(wave_type: str) -> float:
    """Longitudinal waves run at 1x, the rest at 5x, for visibility."""
    return 1.0 if wave_type == "longitudinal" else 5.0


def compute_wave(state: WavePropagationState) -> None:
    state.wave_speed = state.frequency * state.wavelength
    state.energy = 0.5 * state.amplitude ** 2 * state.frequency ** 2


def initialize(state: WavePropagationState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    y = viewport.height / 2
    state.particles = []
    for i in range(PARTICLE_COUNT):
        x = i / PARTICLE_COUNT * viewport.width
        state.particles.append(Body(position=(x, y), origin=(x, y), radius=4.0, id=i))
    compute_wave(state)


def reset(state: WavePropagationState, viewport: Viewport, rng: np.random.Generator) -> None:
    """Restore every parameter, the wave type included, to its default."""
    defaults = WavePropagationState()
    for f in fields(state):
        setattr(state, f.name, getattr(defaults, f.name))
    initialize(state, viewport, rng)


def set_wave_type(state: WavePropagationState, wave_type: str, viewport: Viewport, rng: np.random.Generator) -> None:
    """Switch wave type; all other parameters go back to their defaults."""
    if wave_type not in WAVE_TYPES:
        raise ValueError(f"Unknown wave type: {wave_type!r}. Use one of {WAVE_TYPES}")
    reset(state, viewport, rng)
    state.wave_type = wave_type


def set_frequency(state: WavePropagationState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.frequency = float(value)
    compute_wave(state)


def set_amplitude(state: WavePropagationState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.amplitude = float(value)
    compute_wave(state)


def set_wavelength(state: WavePropagationState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.wavelength = float(value)
    compute_wave(state)


def displacement(state: WavePropagationState, x0: float) -> tuple[float, float]:
    """Displacement and its time derivative for a particle resting at x0."""
    phase = x0 / state.wavelength * 2 * math.pi
    wt = state.time * state.frequency * 2 * math.pi
    w = state.frequency * 2 * math.pi
    a = state.amplitude
    kind = state.wave_type
    if kind == "transverse":
        return a * math.sin(phase - wt), -a * w * math.cos(phase - wt)
    if kind == "longitudinal":
        a *= LONGITUDINAL_SCALE
        return a * math.sin(phase - wt), -a * w * math.cos(phase - wt)
    if kind == "interference":
        return (a * math.sin(phase - wt) + a * math.sin(phase + wt),
                -a * w * (math.cos(phase - wt) - math.cos(phase + wt)))
    if kind == "standing":
        return a * math.sin(phase) * math.cos(wt), -a * w * math.sin(phase) * math.sin(wt)
    raise ValueError(f"Unknown wave type: {kind!r}. Use one of {WAVE_TYPES}")


def step(state: WavePropagationState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += scaled_dt(delta_ms, state.speed, time_scale(state.wave_type))
    longitudinal = state.wave_type == "longitudinal"
    for p in state.particles:
        x0, y0 = p.origin
        d, v = displacement(state, x0)
        if longitudinal:
            p.position[:] = (x0 + d, y0)
            p.velocity[:] = (v, 0.0)
        else:
            p.position[:] = (x0, y0 + d)
            p.velocity[:] = (0.0, v)


def bodies(state: WavePropagationState, viewport: Viewport) -> list[Body]:
    return state.particles


def stats(state: WavePropagationState, viewport: Viewport) -> dict:
    return {
        "wave_type": state.wave_type.capitalize(),
        "frequency": round(state.frequency, 1),
        "wavelength": round(state.wavelength),
        "amplitude": round(state.amplitude),
        "wave_speed": round(state.wave_speed, 1),
        "energy": round(state.energy, 1),
        "time": round(state.time, 1),
    }
