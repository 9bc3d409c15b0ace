from __future__ import annotations

from dataclasses import replace
import logging
from typing import Callable, Literal, Mapping

from slidecolor_ui.component_schema import BoundingBox, ComponentBase, CoordinatePoint
from slidecolor_ui.style.color import RGBA, WHITE
from slidecolor_ui.style.config import SlideColorPickerConfig

from .animation import AnimationDriver, FrameScheduler
from .geometry import GeometryModel, lerp
from .interaction import PointerCancel, PointerDown, PointerEvent, PointerMove, PointerUp, parse_hdi_pointer_event
from .shape_renderer import (
    CircleCommand,
    Fill,
    LinearGradientFill,
    RoundRectCommand,
    ShapeRenderBatch,
    ShapeRenderer,
    SolidFill,
)

LOGGER = logging.getLogger(__name__)

Phase = Literal["idle", "pressing", "releasing"]

KNOB_STROKE_WIDTH = 4.0

ProgressListener = Callable[[float], None]
PhaseListener = Callable[[Phase], None]


class InteractionController:
    """Pointer-driven state machine animating a picker's geometry.

    `idle` -> `pressing` on pointer-down (grow), `pressing` -> `releasing` on
    pointer-up/cancel (commit + shrink), `releasing` -> `idle` once the shrink
    run completes. A pointer-down during `releasing` restarts the grow from the
    geometry the shrink left behind.
    """

    def __init__(self, geometry: GeometryModel, driver: AnimationDriver, duration_s: float) -> None:
        if duration_s <= 0:
            raise ValueError("duration_s must be > 0")
        self._geometry = geometry
        self._driver = driver
        self._duration_s = float(duration_s)
        self._phase: Phase = "idle"
        self._committed_color = geometry.color_at(geometry.progress)
        self._progress_listeners: list[ProgressListener] = []
        self._phase_listeners: list[PhaseListener] = []

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def geometry(self) -> GeometryModel:
        return self._geometry

    @property
    def committed_color(self) -> RGBA:
        return self._committed_color

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    def add_phase_listener(self, listener: PhaseListener) -> None:
        self._phase_listeners.append(listener)

    def dispatch(self, event: PointerEvent) -> Phase:
        if isinstance(event, PointerDown):
            self._on_down()
        elif isinstance(event, PointerMove):
            self._on_move(event.y)
        elif isinstance(event, (PointerUp, PointerCancel)):
            self._on_release(event.y)
        else:
            raise TypeError(f"unsupported pointer event: {event!r}")
        return self._phase

    def _on_down(self) -> None:
        if self._phase == "pressing":
            LOGGER.debug("ignoring pointer-down while already pressing")
            return
        self._driver.cancel()
        geometry = self._geometry
        radius_from = geometry.radius
        height_from = geometry.half_track_height
        radius_to = geometry.scaled_down_radius
        height_to = geometry.expanded_height

        def grow(t: float) -> None:
            geometry.set_radius(lerp(radius_from, radius_to, t))
            geometry.set_half_track_height(lerp(height_from, height_to, t))

        self._set_phase("pressing")
        self._driver.start(self._duration_s, grow)

    def _on_move(self, y: float) -> None:
        if self._phase != "pressing":
            LOGGER.debug("ignoring pointer-move in phase %s", self._phase)
            return
        self._geometry.set_knob_center_y(y)

    def _on_release(self, y: float | None) -> None:
        if self._phase != "pressing":
            LOGGER.debug("ignoring pointer release in phase %s", self._phase)
            return
        self._driver.cancel()
        geometry = self._geometry
        position = geometry.knob_center_y if y is None else y
        self._commit(geometry.clamp_to_bounds(position))

        radius_from = geometry.radius
        height_from = geometry.half_track_height
        knob_from = geometry.knob_center_y

        def shrink(t: float) -> None:
            geometry.set_radius(lerp(radius_from, geometry.original_radius, t))
            geometry.set_half_track_height(lerp(height_from, geometry.original_radius, t))
            geometry.set_knob_center_y(lerp(knob_from, geometry.widget_center_y, t))

        self._set_phase("releasing")
        self._driver.start(self._duration_s, shrink, on_complete=self._on_shrink_complete)

    def _on_shrink_complete(self) -> None:
        if self._phase == "releasing":
            self._set_phase("idle")

    def _commit(self, clamped_y: float) -> None:
        geometry = self._geometry
        upper = geometry.upper_bound
        span = geometry.lower_bound - upper
        if span <= 0.0:
            progress = geometry.progress
        else:
            progress = (clamped_y - upper) / span
        geometry.set_progress(progress)
        self._committed_color = geometry.color_at(geometry.progress)
        LOGGER.debug("committed progress %.4f", geometry.progress)
        for listener in list(self._progress_listeners):
            listener(geometry.progress)

    def _set_phase(self, phase: Phase) -> None:
        if phase == self._phase:
            return
        LOGGER.debug("phase %s -> %s", self._phase, phase)
        self._phase = phase
        for listener in list(self._phase_listeners):
            listener(phase)


class SlideColorPicker(ComponentBase):
    """Pill-shaped slide color picker component.

    Pointer coordinates passed to `dispatch` are local to the component;
    `handle_hdi_event` accepts frame coordinates and offsets them by
    `position`.
    """

    def __init__(
        self,
        component_id: str,
        config: SlideColorPickerConfig,
        scheduler: FrameScheduler,
        *,
        position: CoordinatePoint | None = None,
        interaction_bounds_override: BoundingBox | None = None,
    ) -> None:
        super().__init__(
            component_id=component_id,
            interaction_bounds_override=interaction_bounds_override,
        )
        self.position = position or CoordinatePoint(0.0, 0.0)
        self.geometry = GeometryModel(config)
        self.driver = AnimationDriver(scheduler)
        self.controller = InteractionController(self.geometry, self.driver, config.animation_duration_s)
        self._width = 0.0
        self._height = 0.0
        self._size_established = False

    @property
    def phase(self) -> Phase:
        return self.controller.phase

    @property
    def progress(self) -> float:
        return self.geometry.progress

    @property
    def committed_color(self) -> RGBA:
        return self.controller.committed_color

    @property
    def live_color(self) -> RGBA:
        if self.controller.phase != "pressing":
            return self.controller.committed_color
        geometry = self.geometry
        span = geometry.lower_bound - geometry.upper_bound
        if span <= 0.0:
            return geometry.color_at(geometry.progress)
        return geometry.color_at((geometry.knob_center_y - geometry.upper_bound) / span)

    @property
    def preferred_size(self) -> tuple[float, float]:
        size = self.geometry.original_radius * 2.0
        return (size, size)

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self.controller.add_progress_listener(listener)

    def add_invalidate_listener(self, listener: Callable[[], None]) -> None:
        """Register a redraw request hook fired on geometry or phase changes."""

        self.geometry.add_listener(lambda _field: listener())
        self.controller.add_phase_listener(lambda _phase: listener())

    def on_size_established(self, width: float, height: float) -> None:
        if width < 0 or height < 0:
            raise ValueError("width/height must be >= 0")
        first = not self._size_established
        self._width = float(width)
        self._height = float(height)
        self._size_established = True
        self.geometry.set_widget_center(width / 2.0, height / 2.0)
        if first or self.controller.phase == "idle":
            self.geometry.set_knob_center_y(self.geometry.widget_center_y)
        else:
            self.geometry.set_knob_center_y(self.geometry.knob_center_y)

    def dispatch(self, event: PointerEvent) -> Phase:
        return self.controller.dispatch(event)

    def handle_hdi_event(self, event_type: str, payload: object) -> bool:
        """Route a normalized HDI pointer event; returns True when consumed."""

        event = parse_hdi_pointer_event(event_type, payload)
        if event is None:
            return False
        if isinstance(event, PointerDown) and not self._down_inside(payload, event.y):
            return False
        if event.y is not None:
            event = replace(event, y=event.y - self.position.y)
        self.dispatch(event)
        return True

    def _down_inside(self, payload: Mapping[str, object], y: float | None) -> bool:
        raw_x = payload.get("x")
        if y is None or raw_x is None:
            return True
        try:
            x = float(raw_x)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return True
        return self.hit_test(CoordinatePoint(x, y))

    def visual_bounds(self) -> BoundingBox:
        return BoundingBox(
            x=self.position.x,
            y=self.position.y,
            width=self._width,
            height=self._height,
        )

    def layout(self) -> ShapeRenderBatch:
        geometry = self.geometry
        ox = self.position.x
        oy = self.position.y
        cx = geometry.widget_center_x + ox
        cy = geometry.widget_center_y + oy
        r0 = geometry.original_radius
        fill: Fill
        if self.controller.phase == "pressing":
            fill = LinearGradientFill(
                y0=cy - geometry.expanded_height,
                y1=cy + geometry.expanded_height,
                start_color=geometry.start_color,
                end_color=geometry.end_color,
            )
        else:
            fill = SolidFill(self.controller.committed_color)
        track = RoundRectCommand(
            component_id=self.component_id,
            left=cx - r0,
            top=cy - geometry.half_track_height,
            right=cx + r0,
            bottom=cy + geometry.half_track_height,
            corner_radius=r0,
            fill=fill,
        )
        knob = CircleCommand(
            component_id=self.component_id,
            cx=cx,
            cy=geometry.knob_center_y + oy,
            radius=geometry.radius,
            stroke=WHITE,
            stroke_width=KNOB_STROKE_WIDTH,
        )
        return ShapeRenderBatch(commands=(track, knob))

    def render(self, renderer: ShapeRenderer) -> ShapeRenderBatch:
        batch = self.layout()
        renderer.draw_shape_batch(batch)
        return batch
