# MIT License (see LICENSE)
"""
Flow past a porous and a solid obstacle.

Particles are advected by a kinematic flow field rather than integrated:
each frame their velocity is replaced by the local field value (free
stream, slowed inside the porous block, randomized inside the solid one,
with a slight vertical spread about the centre line), plus turbulence
when the Reynolds number says so and a push toward the pointer.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from ..core.integrators import apply_damping, drift
from ..core.invariants import mean_speed
from ..types import Body, Viewport

VISUALIZATION_MODES = ("particles", "streamlines", "velocity", "pressure")

LAMINAR_LIMIT = 2300
TURBULENT_LIMIT = 4000
POINTER_RADIUS = 40.0
POINTER_PUSH = 1.2
POINTER_JITTER = 0.2
POROUS_SLOWDOWN = 0.3
POSITION_SCALE = 0.1
MAX_LIFE_MS = 10000.0
OFFSCREEN_MARGIN = 50.0

PARAMS = ()


@dataclass(frozen=True)
class Obstacle:
    x: float
    y: float
    width: float
    height: float
    kind: str

    def contains(self, x: float, y: float) -> bool:
        return self.x < x < self.x + self.width and self.y < y < self.y + self.height


DEFAULT_OBSTACLES = (
    Obstacle(400.0, 80.0, 80.0, 100.0, "porous"),
    Obstacle(400.0, 420.0, 100.0, 120.0, "solid"),
)


@dataclass
class FluidFlowState:
    flow_rate: float = 1.0
    viscosity: float = 1.0
    reynolds_number: float = 100.0
    flow_type: str = "Laminar"
    visualization_mode: str = "particles"
    max_particles: int = 100
    pointer: tuple[float, float] | None = None

    obstacles: tuple[Obstacle, ...] = DEFAULT_OBSTACLES
    particles: list[Body] = field(default_factory=list)
    time: float = 0.0


def classify_flow(reynolds: float) -> str:
    if reynolds < LAMINAR_LIMIT:
        return "Laminar"
    if reynolds < TURBULENT_LIMIT:
        return "Transitional"
    return "Turbulent"


def update_reynolds_number(state: FluidFlowState) -> None:
    """Simplified Re = round(flow_rate·50 / viscosity)."""
    state.reynolds_number = round(state.flow_rate * 50 / state.viscosity)
    state.flow_type = classify_flow(state.reynolds_number)


def _respawn(state: FluidFlowState, p: Body, viewport: Viewport, rng: np.random.Generator) -> None:
    p.position[:] = (-50 + rng.random() * 100, 50 + rng.random() * (viewport.height - 100))
    p.velocity[:] = (state.flow_rate * (1 + rng.random() * 0.3), (rng.random() - 0.5) * 0.3)
    p.life = 0.0


def spawn_particles(state: FluidFlowState, viewport: Viewport, rng: np.random.Generator) -> list[Body]:
    out = []
    for i in range(state.max_particles):
        p = Body(radius=3 + rng.random() * 2, id=i)
        _respawn(state, p, viewport, rng)
        out.append(p)
    return out


def initialize(state: FluidFlowState, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time = 0.0
    state.particles = spawn_particles(state, viewport, rng)


def set_max_particles(state: FluidFlowState, count: int, viewport: Viewport, rng: np.random.Generator) -> None:
    state.max_particles = int(count)
    state.particles = spawn_particles(state, viewport, rng)


def set_flow_rate(state: FluidFlowState, rate: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.flow_rate = float(rate)
    update_reynolds_number(state)


def set_viscosity(state: FluidFlowState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.viscosity = float(value)
    update_reynolds_number(state)


def set_reynolds_number(state: FluidFlowState, value: float, viewport: Viewport, rng: np.random.Generator) -> None:
    """Override Re directly; the flow type follows, flow rate is untouched."""
    state.reynolds_number = value
    state.flow_type = classify_flow(value)


def set_visualization_mode(state: FluidFlowState, mode: str, viewport: Viewport, rng: np.random.Generator) -> None:
    if mode not in VISUALIZATION_MODES:
        raise ValueError(f"Unknown visualization mode: {mode!r}. Use one of {VISUALIZATION_MODES}")
    state.visualization_mode = mode


def move_pointer(state: FluidFlowState, x: float | None, y: float | None = None) -> None:
    """Move the pointer; None (or a non-positive coordinate) removes it."""
    if x is None or y is None or x <= 0 or y <= 0:
        state.pointer = None
    else:
        state.pointer = (float(x), float(y))


def set_pointer(state: FluidFlowState, position, viewport: Viewport, rng: np.random.Generator) -> None:
    """
    Parameter form of move_pointer: an (x, y) pair, or None to remove it.

    Raises:
        ValueError: If position is neither None nor an (x, y) pair.
    """
    if position is None:
        move_pointer(state, None)
        return
    try:
        x, y = position
    except (TypeError, ValueError):
        raise ValueError(f"pointer must be an (x, y) pair or None, got {position!r}") from None
    move_pointer(state, x, y)


def _pointer_force(state: FluidFlowState, x: float, y: float) -> tuple[float, float, float]:
    """Unit direction to the pointer and falloff weight, (0, 0, 0) when out of reach."""
    if state.pointer is None:
        return 0.0, 0.0, 0.0
    dx = state.pointer[0] - x
    dy = state.pointer[1] - y
    d = float(np.hypot(dx, dy))
    if not 0 < d < POINTER_RADIUS:
        return 0.0, 0.0, 0.0
    return dx / d, dy / d, (POINTER_RADIUS - d) / POINTER_RADIUS


def flow_velocity(state: FluidFlowState, x: float, y: float, viewport: Viewport,
                  rng: np.random.Generator) -> np.ndarray:
    """
    Flow field at a point, including obstacles and the pointer.

    Porous obstacles keep 30% of the stream plus a small jitter; solid ones
    replace it with a random drift. A vertical component grows linearly
    away from the centre line.
    """
    vx = state.flow_rate
    vy = 0.0
    for ob in state.obstacles:
        if not ob.contains(x, y):
            continue
        if ob.kind == "porous":
            vx = vx * POROUS_SLOWDOWN + (rng.random() - 0.5) * state.flow_rate * 0.1
            vy = vy * POROUS_SLOWDOWN + (rng.random() - 0.5) * state.flow_rate * 0.1
        else:
            vx = (rng.random() - 0.5) * state.flow_rate * 0.5
            vy = (rng.random() - 0.5) * state.flow_rate * 0.5

    cy = viewport.height / 2
    vy += (y - cy) / cy * state.flow_rate * 0.2

    ux, uy, force = _pointer_force(state, x, y)
    vx += ux * force * POINTER_PUSH
    vy += uy * force * POINTER_PUSH
    return np.array([vx, vy])


def step(state: FluidFlowState, delta_ms: float, viewport: Viewport, rng: np.random.Generator) -> None:
    state.time += delta_ms
    turbulent = state.flow_type == "Turbulent"

    for p in state.particles:
        x, y = float(p.position[0]), float(p.position[1])
        v = flow_velocity(state, x, y, viewport, rng)
        if turbulent:
            v += (rng.random() - 0.5) * 2 * state.flow_rate
        p.velocity[:] = v

        ux, uy, force = _pointer_force(state, x, y)
        if force > 0:
            p.velocity += np.array([ux, uy]) * force * POINTER_PUSH
            p.velocity += (rng.random(2) - 0.5) * force * POINTER_JITTER

        apply_damping(p, 1 - state.viscosity * 0.01)
        drift(p, delta_ms * POSITION_SCALE)
        p.life += delta_ms

        px, py = p.position
        if (px > viewport.width + OFFSCREEN_MARGIN or px < -OFFSCREEN_MARGIN
                or py < -OFFSCREEN_MARGIN or py > viewport.height + OFFSCREEN_MARGIN
                or p.life > MAX_LIFE_MS):
            _respawn(state, p, viewport, rng)


def bodies(state: FluidFlowState, viewport: Viewport) -> list[Body]:
    return state.particles


def stats(state: FluidFlowState, viewport: Viewport) -> dict:
    return {
        "flow_rate": state.flow_rate,
        "viscosity": state.viscosity,
        "reynolds_number": state.reynolds_number,
        "flow_type": state.flow_type,
        "average_velocity": mean_speed(state.particles),
        "time": state.time,
    }
