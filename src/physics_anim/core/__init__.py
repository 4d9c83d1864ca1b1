# MIT License (see LICENSE)
"""
Shared numerical core of the animations.

This subpackage provides:
    - Integrators: frame-delta scaling and semi-implicit Euler.
    - Collisions: pairwise overlap tests and impulse resolution.
    - Fields: Coulomb-like and magnet field evaluators, Lorentz force.
    - Boundaries: reflecting walls and periodic wrap.
    - Invariants: kinetic energy and momentum sums.

Typical usage:
    from physics_anim.core import euler_step, resolve_pairwise

    euler_step(body, (0.0, 9.8), dt)
    resolve_pairwise(bodies, restitution=1.0)
"""
from .integrators import scaled_dt, euler_step, drift, apply_damping, limit_speed
from .collisions import (
    Contact,
    detect_contact,
    resolve_collision,
    exchange_velocities,
    resolve_pairwise,
    resolve_point_pairs,
)
from .fields import coulomb_field_at, magnet_field_at, lorentz_force, sample_field_grid
from .boundaries import clamp, reflect_in_box, wrap_in_box
from .invariants import kinetic_energy, linear_momentum, scalar_momentum, mean_speed

__all__ = [
    # Integrators
    "scaled_dt",
    "euler_step",
    "drift",
    "apply_damping",
    "limit_speed",
    # Collisions
    "Contact",
    "detect_contact",
    "resolve_collision",
    "exchange_velocities",
    "resolve_pairwise",
    "resolve_point_pairs",
    # Fields
    "coulomb_field_at",
    "magnet_field_at",
    "lorentz_force",
    "sample_field_grid",
    # Boundaries
    "clamp",
    "reflect_in_box",
    "wrap_in_box",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "scalar_momentum",
    "mean_speed",
]
