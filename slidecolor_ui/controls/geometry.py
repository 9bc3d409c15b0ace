from __future__ import annotations

from typing import Callable

from slidecolor_ui.style.color import RGBA, blend_colors
from slidecolor_ui.style.config import SlideColorPickerConfig

SCALED_DOWN_RADIUS_RATIO = 0.8

GeometryListener = Callable[[str], None]


def lerp(start: float, end: float, fraction: float) -> float:
    return start * (1.0 - fraction) + end * fraction


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class GeometryModel:
    """Mutable knob/track geometry of a slide color picker.

    Static values come from the config; `widget_center_*` follow the allocated
    size. Only `radius`, `half_track_height`, `knob_center_y` and `progress`
    are writable, each through a setter that notifies listeners when the value
    actually changes. Listeners receive the name of the field that changed.
    """

    def __init__(self, config: SlideColorPickerConfig) -> None:
        self._config = config
        self._radius = config.radius
        self._half_track_height = config.radius
        self._widget_center_x = 0.0
        self._widget_center_y = 0.0
        self._knob_center_y = 0.0
        self._progress = 0.5
        self._listeners: list[GeometryListener] = []

    @property
    def config(self) -> SlideColorPickerConfig:
        return self._config

    @property
    def original_radius(self) -> float:
        return self._config.radius

    @property
    def start_color(self) -> RGBA:
        return self._config.start_color

    @property
    def end_color(self) -> RGBA:
        return self._config.end_color

    @property
    def height_multiplier(self) -> float:
        return self._config.height_multiplier

    @property
    def text_size(self) -> float:
        return self._config.text_size

    @property
    def widget_center_x(self) -> float:
        return self._widget_center_x

    @property
    def widget_center_y(self) -> float:
        return self._widget_center_y

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def half_track_height(self) -> float:
        return self._half_track_height

    @property
    def knob_center_y(self) -> float:
        return self._knob_center_y

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def expanded_height(self) -> float:
        return self.original_radius * self.height_multiplier

    @property
    def scaled_down_radius(self) -> float:
        return self.original_radius * SCALED_DOWN_RADIUS_RATIO

    @property
    def upper_bound(self) -> float:
        return self._widget_center_y - self.expanded_height + self._radius

    @property
    def lower_bound(self) -> float:
        return self._widget_center_y + self.expanded_height - self._radius

    def clamp_to_bounds(self, y: float) -> float:
        return clamp(y, self.upper_bound, self.lower_bound)

    def color_at(self, progress: float) -> RGBA:
        return blend_colors(progress, self.start_color, self.end_color)

    def add_listener(self, listener: GeometryListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: GeometryListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_widget_center(self, center_x: float, center_y: float) -> None:
        changed = center_x != self._widget_center_x or center_y != self._widget_center_y
        self._widget_center_x = float(center_x)
        self._widget_center_y = float(center_y)
        if changed:
            knob_moved = self._reclamp_knob()
            self._notify("widget_center")
            if knob_moved:
                self._notify("knob_center_y")

    def set_radius(self, value: float) -> bool:
        value = clamp(float(value), self.scaled_down_radius, self.original_radius)
        if value == self._radius:
            return False
        self._radius = value
        # Bounds depend on the radius; listeners must see the knob inside them.
        knob_moved = self._reclamp_knob()
        self._notify("radius")
        if knob_moved:
            self._notify("knob_center_y")
        return True

    def set_half_track_height(self, value: float) -> bool:
        value = clamp(float(value), self.original_radius, self.expanded_height)
        if value == self._half_track_height:
            return False
        self._half_track_height = value
        self._notify("half_track_height")
        return True

    def set_knob_center_y(self, value: float) -> bool:
        # Bounds depend on the current radius, so clamp at write time.
        value = self.clamp_to_bounds(float(value))
        if value == self._knob_center_y:
            return False
        self._knob_center_y = value
        self._notify("knob_center_y")
        return True

    def set_progress(self, value: float) -> bool:
        value = clamp(float(value), 0.0, 1.0)
        if value == self._progress:
            return False
        self._progress = value
        self._notify("progress")
        return True

    def _reclamp_knob(self) -> bool:
        value = self.clamp_to_bounds(self._knob_center_y)
        if value == self._knob_center_y:
            return False
        self._knob_center_y = value
        return True

    def _notify(self, field_name: str) -> None:
        for listener in list(self._listeners):
            listener(field_name)
