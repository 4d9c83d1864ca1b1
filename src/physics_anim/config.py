# MIT License (see LICENSE)
"""
Animation configuration.

AnimationConfig collects everything needed to build an Animation. Viewport
size and seed can be overridden from the environment:
    PHYSICS_ANIM_SEED=42 PHYSICS_ANIM_WIDTH=1024 python examples/gas_laws.py
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any

from .animation import Animation
from .animations import AnimationKind, parse_kind
from .constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, SPEED_CYCLE
from .util import env_int

logger = logging.getLogger(__name__)

ENV_SEED = "PHYSICS_ANIM_SEED"
ENV_WIDTH = "PHYSICS_ANIM_WIDTH"
ENV_HEIGHT = "PHYSICS_ANIM_HEIGHT"


@dataclass
class AnimationConfig:
    """
    Attributes:
        kind: Animation kind.
        width, height: Viewport size in pixels.
        seed: Random seed; None draws fresh entropy.
        speed_multiplier: Initial playback multiplier, one of 0.5, 1, 2, 4.
        params: Parameter overrides applied after construction, in order.
    """
    kind: AnimationKind | str
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    seed: int | None = None
    speed_multiplier: float = 1.0
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.kind = parse_kind(self.kind)
        if self.speed_multiplier not in SPEED_CYCLE:
            raise ValueError(f"speed_multiplier must be one of {SPEED_CYCLE}, got {self.speed_multiplier}")

    @classmethod
    def from_env(cls, kind: AnimationKind | str, **overrides: Any) -> "AnimationConfig":
        """
        Build a config whose seed and viewport come from the environment.

        Explicit keyword overrides win over environment values.
        """
        values: dict[str, Any] = {
            "seed": env_int(ENV_SEED, None),
            "width": env_int(ENV_WIDTH, None),
            "height": env_int(ENV_HEIGHT, None),
        }
        values = {k: v for k, v in values.items() if v is not None}
        values.update(overrides)
        return cls(kind=kind, **values)

    def build(self) -> Animation:
        """Create the Animation and apply the parameter overrides."""
        anim = Animation(self.kind, width=self.width, height=self.height, seed=self.seed)
        anim.set_many(self.params)
        while anim.speed_multiplier != self.speed_multiplier:
            anim.cycle_speed()
        logger.info("built %s animation with %d parameter override(s)", self.kind.value, len(self.params))
        return anim

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"kind": self.kind.value, "width": self.width, "height": self.height}
        if self.seed is not None:
            out["seed"] = self.seed
        if self.speed_multiplier != 1.0:
            out["speed_multiplier"] = self.speed_multiplier
        if self.params:
            out["params"] = dict(self.params)
        return out
