# MIT License (see LICENSE)
"""
The animation controller.

Animation wraps one animation kind and owns everything the kind's free
functions need: its state dataclass, the viewport, and a seeded random
generator. It adds playback on top:
- play/pause and a speed multiplier cycling through 0.5x, 1x, 2x, 4x
- the three UI controls ("playPause", "reset", "speed")
- parameter setters by name
- stats() and snapshot() for a renderer

Structure:
    - Create Animation("pendulum", seed=1).
    - Call frame(delta_ms) from the display loop (advances only when
      playing) or update(delta_ms) to step unconditionally.
    - Hand snapshot() to a renderer adapter.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .animations import REGISTRY, AnimationKind, KindSpec, parse_kind
from .constants import DEFAULT_HEIGHT, DEFAULT_WIDTH, SPEED_CYCLE
from .profiler import Profiler
from .types import Body, Snapshot, Source, Viewport

logger = logging.getLogger(__name__)

CONTROLS = ("playPause", "reset", "speed")
DEFAULT_SPEED_INDEX = SPEED_CYCLE.index(1.0)

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def param_name(name: str) -> str:
    """Accept camelCase parameter names ("ballCount") as snake_case."""
    return _CAMEL.sub("_", name).lower()


@dataclass
class Animation:
    """
    One running animation.

    Attributes:
        kind: Which animation to run (enum member or its name).
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        seed: Seed of the random generator. With a fixed seed reset()
              always rebuilds the same state.
        profiler: Optional Profiler timing step/stats/snapshot.
        is_playing: Whether frame() advances the simulation.
        speed_multiplier: Playback speed applied by frame().
        time: Total simulated milliseconds since the last reset.
    """
    kind: AnimationKind | str
    width: float = DEFAULT_WIDTH
    height: float = DEFAULT_HEIGHT
    seed: int | None = None
    profiler: Profiler | None = None
    is_playing: bool = False
    speed_multiplier: float = 1.0
    time: float = 0.0

    state: Any = field(init=False, repr=False)
    viewport: Viewport = field(init=False)
    rng: np.random.Generator = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.kind = parse_kind(self.kind)
        self.viewport = Viewport(self.width, self.height)
        self._spec: KindSpec = REGISTRY[self.kind]
        self._speed_index = DEFAULT_SPEED_INDEX
        self.rng = np.random.default_rng(self.seed)
        self.state = self._spec.state_cls()
        self.module.initialize(self.state, self.viewport, self.rng)
        logger.debug("created %s animation (%gx%g, seed=%s)",
                     self.kind.value, self.width, self.height, self.seed)

    @property
    def module(self):
        return self._spec.module

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    def set(self, name: str, value: Any) -> None:
        """
        Set a named parameter, effective immediately.

        Parameters whose change rebuilds bodies (counts, types, angles)
        go through the kind's set_<name> hook; plain knobs are assigned.

        Raises:
            ValueError: If the kind has no such parameter, or the value is
                        rejected by the kind (unknown mode or type).
        """
        key = param_name(name)
        setter = getattr(self.module, f"set_{key}", None)
        if setter is not None:
            setter(self.state, value, self.viewport, self.rng)
        elif key in self.module.PARAMS:
            setattr(self.state, key, value)
        else:
            raise ValueError(f"Unknown parameter for {self.kind.value}: {name!r}")

    def set_many(self, params: dict[str, Any]) -> None:
        for name, value in params.items():
            self.set(name, value)

    def get(self, name: str) -> Any:
        key = param_name(name)
        if not hasattr(self.state, key):
            raise ValueError(f"Unknown parameter for {self.kind.value}: {name!r}")
        return getattr(self.state, key)

    # -------------------------------------------------------------------------
    # Stepping
    # -------------------------------------------------------------------------

    def update(self, delta_ms: float) -> None:
        """Advance the simulation by delta_ms, whether playing or not."""
        if self.profiler is not None:
            with self.profiler.section("step"):
                self.module.step(self.state, delta_ms, self.viewport, self.rng)
        else:
            self.module.step(self.state, delta_ms, self.viewport, self.rng)
        self.time += delta_ms

    def frame(self, delta_ms: float) -> bool:
        """
        Display-loop entry point.

        Returns:
            True if the simulation advanced (only while playing), scaled by
            the speed multiplier.
        """
        if not self.is_playing:
            return False
        self.update(delta_ms * self.speed_multiplier)
        return True

    def reset(self) -> None:
        """
        Rebuild the kind's state from its current parameters.

        The generator is reseeded first, so with a fixed seed two resets in
        a row produce identical snapshots.
        """
        self.rng = np.random.default_rng(self.seed)
        reset_hook = getattr(self.module, "reset", None)
        if reset_hook is not None:
            reset_hook(self.state, self.viewport, self.rng)
        else:
            self.module.initialize(self.state, self.viewport, self.rng)
        self.time = 0.0
        logger.debug("reset %s animation", self.kind.value)

    def resize(self, width: float, height: float) -> None:
        """Change the viewport; the next step sees the new bounds."""
        self.viewport = Viewport(width, height)
        self.width, self.height = width, height

    # -------------------------------------------------------------------------
    # Playback controls
    # -------------------------------------------------------------------------

    def play(self) -> None:
        self.is_playing = True

    def pause(self) -> None:
        self.is_playing = False

    def toggle_play(self) -> bool:
        self.is_playing = not self.is_playing
        return self.is_playing

    def cycle_speed(self) -> float:
        """Step to the next multiplier in 0.5x, 1x, 2x, 4x (wrapping)."""
        self._speed_index = (self._speed_index + 1) % len(SPEED_CYCLE)
        self.speed_multiplier = SPEED_CYCLE[self._speed_index]
        return self.speed_multiplier

    def handle_control(self, action: str) -> None:
        """
        Apply a UI control.

        "playPause" toggles playback, "reset" pauses, restores 1x speed and
        resets the state, "speed" cycles the multiplier.

        Raises:
            ValueError: For any other action.
        """
        if action == "playPause":
            self.toggle_play()
        elif action == "reset":
            self.is_playing = False
            self._speed_index = DEFAULT_SPEED_INDEX
            self.speed_multiplier = SPEED_CYCLE[self._speed_index]
            self.reset()
        elif action == "speed":
            self.cycle_speed()
        else:
            raise ValueError(f"Unknown control action: {action!r}. Use one of {CONTROLS}")

    # -------------------------------------------------------------------------
    # Kind-specific actions
    # -------------------------------------------------------------------------

    def _action(self, name: str):
        fn = getattr(self.module, name, None)
        if fn is None:
            raise ValueError(f"{self.kind.value} does not support {name}()")
        return fn

    def add_charge(self, kind: str, x: float, y: float) -> Source:
        return self._action("add_charge")(self.state, kind, x, y)

    def clear_charges(self) -> None:
        self._action("clear_charges")(self.state, self.viewport)

    def add_magnet(self, x: float, y: float) -> Source:
        return self._action("add_magnet")(self.state, x, y)

    def clear_magnets(self) -> None:
        self._action("clear_magnets")(self.state)

    def start_diffusion(self) -> None:
        self._action("start_diffusion")(self.state)

    def trigger_pulse(self):
        return self._action("trigger_pulse")(self.state)

    def click(self, x: float, y: float):
        return self._action("handle_click")(self.state, x, y)

    def set_pointer(self, x: float | None, y: float | None = None) -> None:
        self._action("move_pointer")(self.state, x, y)

    def set_source_position(self, x: float, y: float) -> None:
        self._action("move_source")(self.state, x, y)

    def set_receiver_position(self, x: float, y: float) -> None:
        self._action("move_receiver")(self.state, x, y)

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def bodies(self) -> list[Body]:
        return self.module.bodies(self.state, self.viewport)

    def sources(self) -> list[Source]:
        fn = getattr(self.module, "sources", None)
        return [] if fn is None else fn(self.state)

    def stats(self) -> dict[str, Any]:
        """Derived scalars for display, recomputed on every call."""
        if self.profiler is not None:
            with self.profiler.section("stats"):
                return self.module.stats(self.state, self.viewport)
        return self.module.stats(self.state, self.viewport)

    def snapshot(self, with_field: bool = True) -> Snapshot:
        """
        Immutable view of the current frame.

        Args:
            with_field: Include the sampled field grid for kinds that have one.
        """
        def build() -> Snapshot:
            sampler = getattr(self.module, "field_samples", None)
            samples = sampler(self.state, self.viewport) if (with_field and sampler) else None
            return Snapshot.build(
                kind=self.kind.value,
                time=self.time,
                bodies=self.bodies(),
                sources=self.sources(),
                field_samples=samples,
                stats=self.module.stats(self.state, self.viewport),
            )

        if self.profiler is not None:
            with self.profiler.section("snapshot"):
                return build()
        return build()
