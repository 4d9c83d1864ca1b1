# MIT License (see LICENSE)
"""
Constants shared by the animations.

Units are canvas pixels and seconds of scaled simulation time. The values
are tuned for readable on-screen motion rather than physical accuracy.
"""
from __future__ import annotations

# Standard gravity, multiplied by each animation's gravity knob.
G_EARTH: float = 9.8

# Simplified Coulomb constant for the electric field evaluator.
K_ELECTRIC: float = 500.0

# Sources closer than this to a query point contribute nothing to the field.
MIN_FIELD_RADIUS: float = 10.0

# Distance scale of the magnet falloff B = s / (1 + d / MAGNET_FALLOFF).
MAGNET_FALLOFF: float = 100.0

# Restitution forced in "inelastic" collision mode, regardless of the knob.
INELASTIC_RESTITUTION: float = 0.3

# Effective restitution drawn uniformly from [low, high) in "mixed" mode.
MIXED_RESTITUTION_RANGE: tuple[float, float] = (0.5, 0.8)

# Wall restitution for free particles (Brownian motion, gas container).
PARTICLE_WALL_RESTITUTION: float = 0.8

# Wall restitution for diffusing particles.
DIFFUSION_WALL_RESTITUTION: float = 0.5

# Bounded buffer lengths for trails and histories.
TRACER_TRAIL_LENGTH: int = 30
PATH_HISTORY_LENGTH: int = 100
PHASE_HISTORY_LENGTH: int = 200
VELOCITY_SAMPLE_LIMIT: int = 1000
VELOCITY_SAMPLE_KEEP: int = 500

# Speed multipliers cycled by the "speed" control.
SPEED_CYCLE: tuple[float, ...] = (0.5, 1.0, 2.0, 4.0)

# Default viewport: an 800x600 canvas.
DEFAULT_WIDTH: float = 800.0
DEFAULT_HEIGHT: float = 600.0
