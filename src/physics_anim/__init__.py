# MIT License (see LICENSE)
"""
physics_anim - Interactive 2D physics teaching animations.

Thirteen self-contained simulations (pendulum, orbits, collisions, friction,
Brownian motion, diffusion, gas laws, electric and magnetic fields, fluid
flow, Bernoulli, waves, sound) share a small numerical core. Rendering is
external: each frame the controller hands out an immutable Snapshot.

Main entry points:
    - Animation: Controller for one animation kind.
    - AnimationKind: The available kinds.
    - AnimationConfig: Declarative construction, with environment overrides.
    - Snapshot: Read-only frame view for renderers.

Submodules:
    - animations: One module per kind.
    - core: Integrators, collisions, fields, boundaries, invariants.
    - io: JSON configs and frame export.
    - renderer: Renderer adapters and stats binding.

Example:
    from physics_anim import Animation

    anim = Animation("pendulum", seed=1)
    anim.handle_control("playPause")
    anim.frame(16.0)
    print(anim.stats()["angle"])
"""
import logging

from .animation import Animation
from .animations import AnimationKind
from .config import AnimationConfig
from .types import Body, Source, Viewport, Snapshot

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Controller
    "Animation",
    "AnimationKind",
    "AnimationConfig",
    # Types
    "Body",
    "Source",
    "Viewport",
    "Snapshot",
]
