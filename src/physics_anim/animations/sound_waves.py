# MIT License (see LICENSE)
"""
Sound pulses travelling from a source to a receiver.

Each trigger_pulse() starts a PULSE_DURATION second wave packet whose
front reaches the receiver exactly when the pulse ends, whatever the
configured wave speed. While a pulse is live the particles are spread
across the packet (at most six wavelengths wide) and oscillate
transversely, longitudinally or both; particles that fall outside the
source-receiver span are parked off-screen. With no live pulse every
particle rests at its origin.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field

import numpy as np

from ..types import Body, Source, Viewport

WAVE_TYPES = ("transverse", "longitudinal", "combined")

PULSE_DURATION = 5.0
PACKET_WAVELENGTHS = 6
WAVELENGTH_SCALE = 0.5
DISPLACEMENT_SCALE = 120.0
LONGITUDINAL_SCALE = 0.1
INDEX_PHASE = 0.2
PARKED = (-100.0, -100.0)
CLICK_RADIUS = 50.0

PARAMS = ("frequency", "amplitude", "wave_speed", "animation_speed", "show_pressure",
          "show_source_receiver", "source_active")


@dataclass
class Pulse:
    start_time: float
    duration: float = PULSE_DURATION

    def elapsed(self, now_ms: float) -> float:
        return (now_ms - self.start_time) / 1000.0

    def alive(self, now_ms: float) -> bool:
        return 0 <= self.elapsed(now_ms) <= self.duration


@dataclass
class SoundWavesState:
    frequency: float = 5.0
    amplitude: float = 50.0
    wave_speed: float = 343.0
    particle_count: int = 15
    wave_type: str = "transverse"
    animation_speed: float = 1.0
    show_pressure: bool = True
    show_source_receiver: bool = True
    source_active: bool = True
    source: tuple[float, float] | None = None
    receiver: tuple[float, float] | None = None

    particles: list[Body] = field(default_factory=list)
    pressures: list[float] = field(default_factory=list)
    pulses: list[Pulse] = field(default_factory=list)
    time: float = 0.0


def spawn_particles(state: SoundWavesState, viewport: Viewport, rng: np.random.Generator) -> None:
    spacing = viewport.width / state.particle_count if state.particle_count else 0.0
    y = viewport.height / 2
    state.particles = [
        Body(position=(i * spacing, y), origin=(i * spacing, y), radius=4 + rng.random() * 2, id=i)
        for i in range(state.particle_count)
    ]
    state.pressures = [0.0] * state.particle_count


def initialize(state: SoundWavesState, viewport: Viewport, rng: np.random.Generator) -> None:
    if state.source is None:
        state.source = (100.0, viewport.height / 2)
    if state.receiver is None:
        state.receiver = (viewport.width - 100.0, viewport.height / 2)
    state.time = 0.0
    state.pulses = []
    spawn_particles(state, viewport, rng)


def set_particle_count(state: SoundWavesState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.particle_count = int(count)
    spawn_particles(state, viewport, rng)


def set_wave_type(state: SoundWavesState, wave_type: str, viewport: Viewport, rng: np.random.Generator) -> None:
    if wave_type not in WAVE_TYPES:
        raise ValueError(f"Unknown wave type: {wave_type!r}. Use one of {WAVE_TYPES}")
    state.wave_type = wave_type


def move_source(state: SoundWavesState, x: float, y: float) -> None:
    state.source = (float(x), float(y))


def move_receiver(state: SoundWavesState, x: float, y: float) -> None:
    state.receiver = (float(x), float(y))


def _pair(name: str, value) -> tuple[float, float]:
    try:
        x, y = value
        return float(x), float(y)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an (x, y) pair, got {value!r}") from None


def set_source_position(state: SoundWavesState, position, viewport: Viewport, rng: np.random.Generator) -> None:
    move_source(state, *_pair("source position", position))


def set_receiver_position(state: SoundWavesState, position, viewport: Viewport, rng: np.random.Generator) -> None:
    move_receiver(state, *_pair("receiver position", position))


def trigger_pulse(state: SoundWavesState) -> Pulse | None:
    """Emit a pulse from the source; None when the source is switched off."""
    if not state.source_active:
        return None
    pulse = Pulse(start_time=state.time)
    state.pulses.append(pulse)
    return pulse


def handle_click(state: SoundWavesState, x: float, y: float) -> Pulse | None:
    """A click within CLICK_RADIUS of the source triggers a pulse."""
    sx, sy = state.source
    if math.hypot(x - sx, y - sy) < CLICK_RADIUS:
        return trigger_pulse(state)
    return None


def wavelength(state: SoundWavesState) -> float:
    """Displayed wavelength in pixels, scaled down from v/f."""
    return state.wave_speed / state.frequency * WAVELENGTH_SCALE


def packet_progress(state: SoundWavesState) -> float | None:
    """
    Fraction of the source-receiver distance covered by the newest live
    pulse, or None with no live pulse.
    """
    live = [p for p in state.pulses if p.alive(state.time)]
    if not live:
        return None
    pulse = live[-1]
    return min(pulse.elapsed(state.time) / pulse.duration, 1.0)


def step(state: SoundWavesState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms * state.animation_speed
    state.pulses = [p for p in state.pulses if p.elapsed(state.time) < p.duration]

    progress = packet_progress(state)
    if progress is None:
        for i, p in enumerate(state.particles):
            p.position[:] = p.origin
            p.velocity[:] = 0.0
            p.life += delta_ms
            state.pressures[i] = 0.0
        return

    sx = state.source[0]
    rx = state.receiver[0]
    span = rx - sx
    lam = wavelength(state)
    phase0 = progress * span / lam * 2 * math.pi
    start = sx + span * progress
    end = min(rx, start + PACKET_WAVELENGTHS * lam)
    amp = state.amplitude / 100.0 * DISPLACEMENT_SCALE
    rate = state.animation_speed * 0.001
    transverse = state.wave_type in ("transverse", "combined")
    longitudinal = state.wave_type in ("longitudinal", "combined")
    last = max(1, len(state.particles) - 1)

    for i, p in enumerate(state.particles):
        p.life += delta_ms
        x = min(max(start + i / last * (end - start), start), end)
        if not (sx <= x <= rx):
            p.position[:] = PARKED
            p.velocity[:] = 0.0
            state.pressures[i] = 0.0
            continue

        phase = phase0 + i * INDEX_PHASE
        p.position[:] = (x, p.origin[1])
        p.velocity[:] = 0.0
        if transverse:
            p.position[:] = (x, p.origin[1] + amp * math.sin(phase))
            p.velocity[1] = amp * 2 * math.pi * math.cos(phase) * rate
        if longitudinal:
            p.position[0] = x + amp * LONGITUDINAL_SCALE * math.sin(phase)
            p.velocity[0] = amp * LONGITUDINAL_SCALE * 2 * math.pi * math.cos(phase) * rate
            state.pressures[i] = math.sin(phase)


def bodies(state: SoundWavesState, viewport: Viewport) -> list[Body]:
    return state.particles


def sources(state: SoundWavesState) -> list[Source]:
    return [Source(position=state.source, sign=1), Source(position=state.receiver, sign=-1)]


def stats(state: SoundWavesState, viewport: Viewport) -> dict:
    return {
        "wave_type": state.wave_type,
        "frequency": state.frequency,
        "wavelength": state.wave_speed / state.frequency,
        "wave_speed": state.wave_speed,
        "amplitude": state.amplitude,
        "particle_count": state.particle_count,
        "active_pulses": len(state.pulses),
        "time": state.time,
    }
