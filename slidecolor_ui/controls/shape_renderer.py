from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from slidecolor_ui.style.color import RGBA


@dataclass(frozen=True)
class SolidFill:
    color: RGBA


@dataclass(frozen=True)
class LinearGradientFill:
    """Vertical gradient from `start_color` at `y0` to `end_color` at `y1`.

    Outside `[y0, y1]` the gradient repeats mirrored.
    """

    y0: float
    y1: float
    start_color: RGBA
    end_color: RGBA


Fill = Union[SolidFill, LinearGradientFill]


@dataclass(frozen=True)
class RoundRectCommand:
    component_id: str
    left: float
    top: float
    right: float
    bottom: float
    corner_radius: float
    fill: Fill


@dataclass(frozen=True)
class CircleCommand:
    component_id: str
    cx: float
    cy: float
    radius: float
    stroke: RGBA
    stroke_width: float


ShapeRenderCommand = Union[RoundRectCommand, CircleCommand]


@dataclass(frozen=True)
class ShapeRenderBatch:
    commands: tuple[ShapeRenderCommand, ...]


class ShapeRenderer(Protocol):
    """Backend-agnostic drawing interface for picker paint calls."""

    def draw_shape_batch(self, batch: ShapeRenderBatch) -> None:
        ...
