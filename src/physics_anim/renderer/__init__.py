# MIT License (see LICENSE)
"""
Rendering adapters and stats binding.

This subpackage provides:
    - RendererAdapter: Abstract base class consuming Snapshots.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for timing.
    - BufferedRenderer: Records frames for export.
    - bind_stats: Formats stats into an element sink.

Typical usage:
    from physics_anim.renderer import DebugRenderer

    DebugRenderer().render_snapshot(anim.snapshot())
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
    bind_stats,
    format_value,
    lookup_path,
)

__all__ = [
    # Renderers
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
    # Stats binding
    "bind_stats",
    "format_value",
    "lookup_path",
]
