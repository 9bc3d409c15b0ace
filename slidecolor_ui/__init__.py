"""Backend-agnostic slide color picker widget."""

from .component_schema import BoundingBox, ComponentBase, CoordinatePoint
from .controls.animation import AnimationDriver, FrameScheduler
from .controls.geometry import GeometryModel
from .controls.interaction import (
    PointerCancel,
    PointerDown,
    PointerEvent,
    PointerMove,
    PointerUp,
    parse_hdi_pointer_event,
)
from .controls.slide_color_picker import InteractionController, Phase, SlideColorPicker
from .style.color import RGBA, blend_colors, color_to_hex, parse_color
from .style.config import SlideColorPickerConfig, validate_picker_config

__all__ = [
    "AnimationDriver",
    "BoundingBox",
    "ComponentBase",
    "CoordinatePoint",
    "FrameScheduler",
    "GeometryModel",
    "InteractionController",
    "Phase",
    "PointerCancel",
    "PointerDown",
    "PointerEvent",
    "PointerMove",
    "PointerUp",
    "RGBA",
    "SlideColorPicker",
    "SlideColorPickerConfig",
    "blend_colors",
    "color_to_hex",
    "parse_color",
    "parse_hdi_pointer_event",
    "validate_picker_config",
]
