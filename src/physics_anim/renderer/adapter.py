# MIT License (see LICENSE)
"""
Renderer adapters and stats binding.

The animations never draw. Each frame a renderer receives a read-only
Snapshot and turns it into whatever its backend needs; the simulation has
no rendering dependency. Derived stats reach a UI through bind_stats(),
which formats them into an element sink keyed by element id.
"""
from __future__ import annotations
import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any, TextIO

import numpy as np

from ..types import Snapshot

logger = logging.getLogger(__name__)


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the per-body drawing; sources and field arrows
    are optional and ignored by default.

    Usage:
        renderer = MyRenderer()
        renderer.render_snapshot(animation.snapshot())
    """

    @abstractmethod
    def begin_frame(self, snapshot: Snapshot) -> None:
        ...

    @abstractmethod
    def draw_body(self, index: int, position: np.ndarray, velocity: np.ndarray,
                  radius: float, charge: float) -> None:
        ...

    def draw_source(self, position: np.ndarray, strength: float) -> None:
        pass

    def draw_field(self, samples: np.ndarray) -> None:
        pass

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render_snapshot(self, snapshot: Snapshot) -> None:
        """Draw field arrows, then sources, then bodies."""
        self.begin_frame(snapshot)
        if snapshot.field_samples is not None:
            self.draw_field(snapshot.field_samples)
        for pos, strength in zip(snapshot.source_positions, snapshot.source_signs):
            self.draw_source(pos, float(strength))
        for i in range(len(snapshot.positions)):
            self.draw_body(i, snapshot.positions[i], snapshot.velocities[i],
                           float(snapshot.radii[i]), float(snapshot.charges[i]))
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Output:
        === pendulum t=16.0ms ===
        [0] r=15.0 @ (484.85, 264.85) v=(0.00, 0.00)
        angle=45.0 angular_velocity=-0.03 ...
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True, max_bodies: int = 20):
        self.output = output or sys.stdout
        self.verbose = verbose
        self.max_bodies = max_bodies
        self._stats: dict[str, Any] = {}

    def begin_frame(self, snapshot: Snapshot) -> None:
        self._stats = snapshot.stats
        self.output.write(f"=== {snapshot.kind} t={snapshot.time:.1f}ms ===\n")
        n = len(snapshot.positions)
        if n > self.max_bodies:
            self.output.write(f"({n} bodies, showing {self.max_bodies})\n")

    def draw_source(self, position: np.ndarray, strength: float) -> None:
        sign = "+" if strength >= 0 else "-"
        self.output.write(f"source {sign}{abs(strength):.2f} @ ({position[0]:.1f}, {position[1]:.1f})\n")

    def draw_body(self, index: int, position: np.ndarray, velocity: np.ndarray,
                  radius: float, charge: float) -> None:
        if index >= self.max_bodies:
            return
        line = f"[{index}] r={radius:.1f} @ ({position[0]:.2f}, {position[1]:.2f})"
        if self.verbose:
            line += f" v=({velocity[0]:.2f}, {velocity[1]:.2f})"
            if charge:
                line += f" q={charge:+.0f}"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        if self._stats:
            self.output.write(" ".join(f"{k}={_short(v)}" for k, v in self._stats.items()) + "\n")
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for timing the simulation alone."""

    def begin_frame(self, snapshot: Snapshot) -> None:
        pass

    def draw_body(self, index, position, velocity, radius, charge) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records frames as plain dicts, for export or batch analysis.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            anim.update(16.0)
            renderer.render_snapshot(anim.snapshot())
        save_frames(renderer.frames, "run.json")
    """

    def __init__(self, include_stats: bool = True):
        self.include_stats = include_stats
        self.frames: list[dict] = []
        self._current: dict | None = None

    def begin_frame(self, snapshot: Snapshot) -> None:
        self._current = {"kind": snapshot.kind, "time": snapshot.time, "bodies": [], "sources": []}
        if self.include_stats:
            self._current["stats"] = dict(snapshot.stats)

    def draw_source(self, position: np.ndarray, strength: float) -> None:
        if self._current is not None:
            self._current["sources"].append({"position": position.tolist(), "strength": strength})

    def draw_body(self, index, position, velocity, radius, charge) -> None:
        if self._current is None:
            return
        self._current["bodies"].append({
            "id": index,
            "position": position.tolist(),
            "velocity": velocity.tolist(),
            "radius": radius,
        })

    def end_frame(self) -> None:
        if self._current is not None:
            self.frames.append(self._current)
            self._current = None

    def clear(self) -> None:
        self.frames.clear()


def _short(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3g}"
    return str(value)


# =============================================================================
# Stats binding
# =============================================================================

def lookup_path(stats: Mapping[str, Any], path: str) -> Any:
    """Follow a dotted path through nested mappings; None if any key is missing."""
    current: Any = stats
    for key in path.split("."):
        if not isinstance(current, Mapping) or current.get(key) is None:
            return None
        current = current[key]
    return current


def _places(places: int | None, default: int) -> int:
    return default if places is None else int(places)


def format_value(value: Any, config: Mapping[str, Any]) -> str:
    """
    Render one stat for display.

    Config keys:
        format: "time" (ms shown as seconds), "angle", "percentage",
                "unit", "decimal", "boolean", "capitalize", "uppercase".
        decimal_places: Digits for decimal/angle/percentage (default 2/1/1).
        suffix: Appended by the "unit" format.
        fallback: Text used when the value is missing.
        transform: Callable applied to the value before formatting.
    """
    if value is None:
        fallback = config.get("fallback")
        return "" if fallback is None else str(fallback)

    transform: Callable[[Any], Any] | None = config.get("transform")
    if transform is not None:
        value = transform(value)

    fmt = config.get("format")
    places = config.get("decimal_places")
    if fmt == "time":
        return f"{value / 1000:.1f}s"
    if fmt == "angle":
        return f"{value:.{_places(places, 1)}f}°"
    if fmt == "percentage":
        return f"{value:.{_places(places, 1)}f}%"
    if fmt == "unit":
        return f"{value}{config.get('suffix', '')}"
    if fmt == "decimal":
        return f"{value:.{_places(places, 2)}f}"
    if fmt == "boolean":
        return "Active" if value else "Hidden"
    if fmt == "capitalize":
        s = str(value)
        return s[:1].upper() + s[1:]
    if fmt == "uppercase":
        return str(value).upper()
    return str(value)


def bind_stats(
    stats: Mapping[str, Any],
    element_mappings: Mapping[str, Mapping[str, Any]],
    sink: MutableMapping[str, str],
) -> int:
    """
    Write formatted stats into an element sink.

    Args:
        stats: Output of Animation.stats().
        element_mappings: element id -> config with a "path" into stats and
                          optional formatting keys (see format_value()).
        sink: element id -> text. Ids missing from the sink are skipped,
              the way a page without that element would ignore it.

    Returns:
        Number of elements written.
    """
    written = 0
    for element_id, config in element_mappings.items():
        if element_id not in sink:
            logger.debug("no element %r in sink, skipping", element_id)
            continue
        sink[element_id] = format_value(lookup_path(stats, config["path"]), config)
        written += 1
    return written
