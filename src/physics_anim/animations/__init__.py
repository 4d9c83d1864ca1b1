# MIT License (see LICENSE)
"""
Animation kinds and their dispatch table.

Every kind lives in its own module as a parameter/state dataclass plus free
functions with a common shape:
    initialize(state, viewport, rng)
    step(state, delta_ms, viewport, rng)
    stats(state, viewport) -> dict
    bodies(state, viewport) -> list[Body]
Optional hooks: sources(state), field_samples(state, viewport),
reset(state, viewport, rng) and set_<param>(state, value, viewport, rng)
for parameters whose change has side effects. Plain knobs are listed in
the module's PARAMS tuple and are assigned directly. Actions with other
signatures (add_charge, move_pointer, move_source, ...) never take the
set_ prefix, since Animation.set dispatches every set_<name> it finds.

Typical usage:
    from physics_anim.animations import AnimationKind, kind_module

    module = kind_module(AnimationKind.PENDULUM)
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import ModuleType

from . import (
    bernoulli,
    brownian,
    collision_physics,
    diffusion,
    electric_fields,
    fluid_flow,
    friction,
    gas_laws,
    magnetic_fields,
    orbital,
    pendulum,
    sound_waves,
    wave_propagation,
)


class AnimationKind(str, Enum):
    PENDULUM = "pendulum"
    ORBITAL_MOTION = "orbital-motion"
    COLLISION_PHYSICS = "collision-physics"
    FRICTION_INCLINED_PLANES = "friction-inclined-planes"
    BROWNIAN_MOTION = "brownian-motion"
    DIFFUSION = "diffusion"
    GAS_LAWS = "gas-laws"
    ELECTRIC_FIELDS = "electric-fields"
    MAGNETIC_FIELDS = "magnetic-fields"
    FLUID_FLOW = "fluid-flow"
    BERNOULLI = "bernoulli"
    WAVE_PROPAGATION = "wave-propagation"
    SOUND_WAVES = "sound-waves"


@dataclass(frozen=True)
class KindSpec:
    module: ModuleType
    state_cls: type


REGISTRY: dict[AnimationKind, KindSpec] = {
    AnimationKind.PENDULUM: KindSpec(pendulum, pendulum.PendulumState),
    AnimationKind.ORBITAL_MOTION: KindSpec(orbital, orbital.OrbitalState),
    AnimationKind.COLLISION_PHYSICS: KindSpec(collision_physics, collision_physics.CollisionState),
    AnimationKind.FRICTION_INCLINED_PLANES: KindSpec(friction, friction.FrictionState),
    AnimationKind.BROWNIAN_MOTION: KindSpec(brownian, brownian.BrownianState),
    AnimationKind.DIFFUSION: KindSpec(diffusion, diffusion.DiffusionState),
    AnimationKind.GAS_LAWS: KindSpec(gas_laws, gas_laws.GasLawsState),
    AnimationKind.ELECTRIC_FIELDS: KindSpec(electric_fields, electric_fields.ElectricFieldsState),
    AnimationKind.MAGNETIC_FIELDS: KindSpec(magnetic_fields, magnetic_fields.MagneticFieldsState),
    AnimationKind.FLUID_FLOW: KindSpec(fluid_flow, fluid_flow.FluidFlowState),
    AnimationKind.BERNOULLI: KindSpec(bernoulli, bernoulli.BernoulliState),
    AnimationKind.WAVE_PROPAGATION: KindSpec(wave_propagation, wave_propagation.WavePropagationState),
    AnimationKind.SOUND_WAVES: KindSpec(sound_waves, sound_waves.SoundWavesState),
}


def parse_kind(kind: AnimationKind | str) -> AnimationKind:
    """
    Normalize a kind given as enum member or name.

    Accepts the enum value ("gas-laws"), and for convenience the member
    name in any case with "_" or "-" ("GAS_LAWS", "gas_laws").

    Raises:
        ValueError: If the name matches no kind.
    """
    if isinstance(kind, AnimationKind):
        return kind
    name = str(kind).strip()
    try:
        return AnimationKind(name)
    except ValueError:
        pass
    try:
        return AnimationKind[name.upper().replace("-", "_")]
    except KeyError:
        valid = ", ".join(k.value for k in AnimationKind)
        raise ValueError(f"Unknown animation kind: {kind!r}. Use one of: {valid}") from None


def kind_module(kind: AnimationKind | str) -> ModuleType:
    return REGISTRY[parse_kind(kind)].module


__all__ = [
    "AnimationKind",
    "KindSpec",
    "REGISTRY",
    "parse_kind",
    "kind_module",
]
