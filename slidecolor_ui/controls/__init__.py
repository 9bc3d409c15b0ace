"""Slide color picker control, geometry and animation contracts."""

from .animation import FAST_OUT_SLOW_IN, AnimationDriver, CubicBezierEasing, FrameScheduler
from .geometry import GeometryModel
from .interaction import (
    PointerCancel,
    PointerDown,
    PointerEvent,
    PointerMove,
    PointerUp,
    parse_hdi_pointer_event,
)
from .shape_renderer import (
    CircleCommand,
    LinearGradientFill,
    RoundRectCommand,
    ShapeRenderBatch,
    ShapeRenderer,
    SolidFill,
)
from .slide_color_picker import InteractionController, Phase, SlideColorPicker

__all__ = [
    "AnimationDriver",
    "CircleCommand",
    "CubicBezierEasing",
    "FAST_OUT_SLOW_IN",
    "FrameScheduler",
    "GeometryModel",
    "InteractionController",
    "LinearGradientFill",
    "Phase",
    "PointerCancel",
    "PointerDown",
    "PointerEvent",
    "PointerMove",
    "PointerUp",
    "RoundRectCommand",
    "ShapeRenderBatch",
    "ShapeRenderer",
    "SlideColorPicker",
    "SolidFill",
    "parse_hdi_pointer_event",
]
