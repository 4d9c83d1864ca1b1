# MIT License (see LICENSE)
"""
JSON configuration loading and frame export.

Config Schema:
--------------
{
  "kind": string,                  # Required, e.g. "gas-laws"
  "width": float,                  # Default: 800
  "height": float,                 # Default: 600
  "seed": int,                     # Optional
  "speed_multiplier": float,       # 0.5, 1, 2 or 4; default 1
  "params": {                      # Optional, applied in order
    "temperature": 400,            # snake_case or camelCase names
    "lawType": "charles"
  },
  "actions": [                     # Optional, run after params
    {"type": "add_charge", "charge": "positive", "x": 200, "y": 150},
    {"type": "add_magnet", "x": 300, "y": 200},
    {"type": "start_diffusion"},
    {"type": "trigger_pulse"}
  ]
}

Frame export writes the frames recorded by a BufferedRenderer:
{"frames": [{"kind": ..., "time": ..., "bodies": [...], ...}, ...]}
"""
from __future__ import annotations
import json
import logging
from typing import Any

from ..animation import Animation
from ..config import AnimationConfig

logger = logging.getLogger(__name__)

ACTIONS = ("add_charge", "clear_charges", "add_magnet", "clear_magnets",
           "start_diffusion", "trigger_pulse", "set_pointer")


def load_animation_raw(path: str) -> dict[str, Any]:
    """Load raw JSON data from a config file without building anything."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def config_from_json(data: dict[str, Any]) -> AnimationConfig:
    """
    Parse the configuration part of a JSON document.

    Raises:
        ValueError: If "kind" is missing or unknown.
    """
    if "kind" not in data:
        raise ValueError("Animation config missing required 'kind' field.")
    seed = data.get("seed")
    return AnimationConfig(
        kind=data["kind"],
        width=float(data.get("width", 800.0)),
        height=float(data.get("height", 600.0)),
        seed=None if seed is None else int(seed),
        speed_multiplier=float(data.get("speed_multiplier", 1.0)),
        params=dict(data.get("params", {})),
    )


def apply_action(anim: Animation, action: dict[str, Any]) -> None:
    """
    Run one scripted action on an animation.

    Raises:
        ValueError: For unknown action types or actions the kind lacks.
    """
    kind = action.get("type")
    if kind == "add_charge":
        anim.add_charge(action.get("charge", "positive"), float(action["x"]), float(action["y"]))
    elif kind == "clear_charges":
        anim.clear_charges()
    elif kind == "add_magnet":
        anim.add_magnet(float(action["x"]), float(action["y"]))
    elif kind == "clear_magnets":
        anim.clear_magnets()
    elif kind == "start_diffusion":
        anim.start_diffusion()
    elif kind == "trigger_pulse":
        anim.trigger_pulse()
    elif kind == "set_pointer":
        anim.set_pointer(action.get("x"), action.get("y"))
    else:
        raise ValueError(f"Unknown action type: {kind!r}. Use one of {ACTIONS}")


def animation_from_json(data: dict[str, Any]) -> Animation:
    """Build a ready-to-run Animation from a parsed JSON document."""
    anim = config_from_json(data).build()
    for action in data.get("actions", []):
        apply_action(anim, action)
    return anim


def load_animation(path: str) -> Animation:
    """
    Load and build an Animation from a JSON config file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the config is malformed.
    """
    data = load_animation_raw(path)
    logger.info("loading %s config from %s", data.get("kind", "?"), path)
    return animation_from_json(data)


def save_config(config: AnimationConfig, path: str, indent: int = 2) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=indent)


def frames_to_json(frames: list[dict[str, Any]]) -> dict[str, Any]:
    return {"frames": [_plain(frame) for frame in frames]}


def save_frames(frames: list[dict[str, Any]], path: str, indent: int | None = None) -> None:
    """Write recorded frames to disk as JSON."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(frames_to_json(frames), f, indent=indent)


def _plain(value: Any) -> Any:
    """Convert numpy scalars/arrays and tuples nested in a frame to JSON types."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if hasattr(value, "tolist"):
        return value.tolist()
    return value
