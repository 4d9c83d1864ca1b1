# MIT License (see LICENSE)
"""
Core type definitions for the teaching animations.

Defines the fundamental data structures:
- Body: a simulated point or disk (position, velocity, mass, radius, charge)
- Source: a fixed field source (charge or magnet pole)
- Viewport: the live canvas dimensions every step reads
- Snapshot: the immutable per-frame view a renderer consumes

Coordinates are canvas pixels with y growing downward. Bodies follow the
semi-implicit Euler equations of motion:
  v(t+dt) = v(t) + a(t)·dt
  x(t+dt) = x(t) + v(t+dt)·dt
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .util import f64


# =============================================================================
# Bodies and sources
# =============================================================================

@dataclass
class Body:
    """
    A simulated point particle or disk.

    Attributes:
        position: Position [x, y] in pixels.
        velocity: Velocity [vx, vy] in pixels per scaled second.
        mass: Mass in arbitrary units. Use mass <= 0 for immovable bodies.
        radius: Disk radius in pixels (0 for point particles).
        charge: Signed charge used by the magnetic animation.
        origin: Rest position for oscillating particles (waves), else None.
        trail: Bounded history of recent positions for trail rendering.
        distance: Path length travelled, used for mean-free-path estimates.
        life: Age in milliseconds, used by respawning flow particles.
        id: Index assigned when the body is created by an animation.

    Note:
        Position and velocity are converted to float64 numpy arrays on init.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    mass: float = 1.0
    radius: float = 0.0
    charge: float = 0.0
    origin: np.ndarray | tuple[float, float] | None = None
    trail: deque = field(default_factory=deque)
    distance: float = 0.0
    life: float = 0.0
    id: int = -1

    def __post_init__(self) -> None:
        """Convert position/velocity/origin to float64 arrays."""
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        if self.origin is not None:
            self.origin = f64(self.origin)

    @property
    def inv_mass(self) -> float:
        """Inverse mass (1/m). Returns 0 for immovable bodies (mass <= 0)."""
        return 0.0 if self.mass <= 0 else 1.0 / self.mass

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    def record_trail(self, max_length: int) -> None:
        """Append the current position to the trail, dropping the oldest."""
        self.trail.append((float(self.position[0]), float(self.position[1])))
        while len(self.trail) > max_length:
            self.trail.popleft()


@dataclass
class Source:
    """
    A point field source.

    Attributes:
        position: Source location [x, y] in pixels.
        sign: +1 for positive charges / north poles, -1 otherwise.
        magnitude: Source strength.
    """
    position: np.ndarray | tuple[float, float]
    sign: int = 1
    magnitude: float = 1.0

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        if self.sign not in (1, -1):
            raise ValueError(f"Source sign must be +1 or -1, got {self.sign}")


@dataclass(frozen=True)
class Viewport:
    """
    Canvas dimensions in pixels.

    Animations receive the viewport on every step rather than caching its
    size, so replacing it takes effect on the next frame.
    """
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Viewport must have positive size, got {self.width}x{self.height}")


# =============================================================================
# Snapshot
# =============================================================================

def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=np.float64)
    a.flags.writeable = False
    return a


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of one frame of simulation state.

    Built by Animation.snapshot(); arrays are copies with the writeable
    flag cleared, so a renderer cannot feed anything back into the step.

    Attributes:
        kind: Animation kind name.
        time: Accumulated animation time.
        positions: Body positions, shape (N, 2).
        velocities: Body velocities, shape (N, 2).
        radii: Body radii, shape (N,).
        charges: Body charges, shape (N,).
        source_positions: Source positions, shape (M, 2).
        source_signs: Source signs times magnitudes, shape (M,).
        field_samples: Optional grid of [x, y, fx, fy] rows for arrow plots.
        stats: Derived scalars (same mapping as Animation.stats()).
    """
    kind: str
    time: float
    positions: np.ndarray
    velocities: np.ndarray
    radii: np.ndarray
    charges: np.ndarray
    source_positions: np.ndarray
    source_signs: np.ndarray
    field_samples: np.ndarray | None = None
    stats: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        kind: str,
        time: float,
        bodies: list[Body],
        sources: list[Source],
        field_samples: np.ndarray | None = None,
        stats: dict[str, Any] | None = None,
    ) -> "Snapshot":
        positions = np.zeros((len(bodies), 2)) if not bodies else [b.position for b in bodies]
        velocities = np.zeros((len(bodies), 2)) if not bodies else [b.velocity for b in bodies]
        src_pos = np.zeros((len(sources), 2)) if not sources else [s.position for s in sources]
        return cls(
            kind=kind,
            time=float(time),
            positions=_frozen(positions),
            velocities=_frozen(velocities),
            radii=_frozen([b.radius for b in bodies]),
            charges=_frozen([b.charge for b in bodies]),
            source_positions=_frozen(src_pos),
            source_signs=_frozen([s.sign * s.magnitude for s in sources]),
            field_samples=None if field_samples is None else _frozen(field_samples),
            stats=dict(stats or {}),
        )
