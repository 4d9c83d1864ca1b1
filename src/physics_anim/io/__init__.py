# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - JSON configs: build an Animation from a file or a parsed dict.
    - Frame export: write frames recorded by a BufferedRenderer.

Typical usage:
    from physics_anim.io import load_animation, save_frames

    anim = load_animation("gas_laws.json")
"""
from .json_io import (
    load_animation,
    load_animation_raw,
    animation_from_json,
    config_from_json,
    apply_action,
    save_config,
    save_frames,
    frames_to_json,
)

__all__ = [
    # Loading
    "load_animation",
    "load_animation_raw",
    "animation_from_json",
    "config_from_json",
    "apply_action",
    # Saving
    "save_config",
    "save_frames",
    "frames_to_json",
]
