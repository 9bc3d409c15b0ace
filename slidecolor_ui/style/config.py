from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any, Mapping

from .color import RGBA, parse_color

DEFAULT_HEIGHT_MULTIPLIER = 4.8
DEFAULT_TEXT_SIZE = 40.0
DEFAULT_ANIMATION_DURATION_S = 0.3


@dataclass(frozen=True)
class SlideColorPickerConfig:
    """Construction-time configuration for a slide color picker.

    Colors are normalized to RGBA tuples; invalid values fail here, before any
    geometry is derived from them.
    """

    radius: float
    start_color: RGBA
    end_color: RGBA
    height_multiplier: float = DEFAULT_HEIGHT_MULTIPLIER
    text_size: float = DEFAULT_TEXT_SIZE
    animation_duration_s: float = DEFAULT_ANIMATION_DURATION_S

    def __post_init__(self) -> None:
        radius = _finite_number("radius", self.radius)
        height_multiplier = _finite_number("height_multiplier", self.height_multiplier)
        text_size = _finite_number("text_size", self.text_size)
        animation_duration_s = _finite_number("animation_duration_s", self.animation_duration_s)
        if radius <= 0:
            raise ValueError("radius must be > 0")
        if height_multiplier < 1.0:
            raise ValueError("height_multiplier must be >= 1")
        if text_size <= 0:
            raise ValueError("text_size must be > 0")
        if animation_duration_s <= 0:
            raise ValueError("animation_duration_s must be > 0")
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "height_multiplier", height_multiplier)
        object.__setattr__(self, "text_size", text_size)
        object.__setattr__(self, "animation_duration_s", animation_duration_s)
        object.__setattr__(self, "start_color", parse_color(self.start_color))
        object.__setattr__(self, "end_color", parse_color(self.end_color))


def _finite_number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number")
    return float(value)


_REQUIRED_KEYS = ("radius", "start_color", "end_color")
_OPTIONAL_DEFAULTS: dict[str, Any] = {
    "height_multiplier": DEFAULT_HEIGHT_MULTIPLIER,
    "text_size": DEFAULT_TEXT_SIZE,
    "animation_duration_s": DEFAULT_ANIMATION_DURATION_S,
}


def validate_picker_config(values: Mapping[str, Any]) -> SlideColorPickerConfig:
    """Validate a raw attribute mapping (e.g. loaded from JSON) into a config.

    `radius`, `start_color` and `end_color` are required; the remaining keys
    fall back to defaults.
    """

    raw: dict[str, Any] = dict(_OPTIONAL_DEFAULTS)
    for key, value in values.items():
        if key not in raw and key not in _REQUIRED_KEYS:
            raise ValueError(f"Unknown picker attribute: {key}")
        raw[key] = value
    missing = [key for key in _REQUIRED_KEYS if key not in raw]
    if missing:
        raise ValueError(f"Missing required picker attribute(s): {', '.join(missing)}")
    for key in ("radius", "height_multiplier", "text_size", "animation_duration_s"):
        if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)):
            raise ValueError(f"Attribute `{key}` must be a number")
    for key in ("start_color", "end_color"):
        if isinstance(raw[key], list):
            raw[key] = tuple(raw[key])
    return SlideColorPickerConfig(**raw)
