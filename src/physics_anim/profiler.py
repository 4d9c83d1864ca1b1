# MIT License (see LICENSE)
"""
Frame timing for the animation controller.

An Animation given a Profiler times its "step", "stats" and "snapshot"
phases under those names. Samples are kept in seconds and reported in
milliseconds.

Example:
    profiler = Profiler()
    anim = Animation("gas-laws", profiler=profiler)
    for _ in range(600):
        anim.update(16.0)
    print(profiler.report())
"""
from __future__ import annotations
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class SectionTimes:
    """Timing samples for named sections, in seconds."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, seconds: float) -> None:
        self.samples.setdefault(name, []).append(seconds)

    def count(self, name: str) -> int:
        return len(self.samples.get(name, ()))

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics.

        Returns:
            Mapping name -> {"n", "mean_ms", "max_ms", "total_ms"}.
        """
        out = {}
        for name, times in self.samples.items():
            total = sum(times)
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * total / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out


class Profiler:
    def __init__(self) -> None:
        self.times = SectionTimes()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block, recording it even if it raises."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.times.add(name, time.perf_counter() - t0)

    def clear(self) -> None:
        self.times = SectionTimes()

    def report(self) -> str:
        """One line per section, slowest mean first."""
        rows = sorted(self.times.summary().items(), key=lambda kv: -kv[1]["mean_ms"])
        return "\n".join(
            f"{name:<10} n={s['n']:<6} mean={s['mean_ms']:.3f}ms max={s['max_ms']:.3f}ms"
            for name, s in rows
        )
