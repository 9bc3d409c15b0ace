from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CoordinatePoint:
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("BoundingBox width/height must be >= 0")

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height


@dataclass
class ComponentBase:
    """Shared schema for SlideColor UI components.

    Visual bounds define how a component is painted. Interaction bounds default
    to visual bounds, but can be overridden without changing rendering. All
    coordinates share the host frame's top-left origin.
    """

    component_id: str
    interaction_bounds_override: BoundingBox | None = None

    def visual_bounds(self) -> BoundingBox:
        raise NotImplementedError

    def interaction_bounds(self) -> BoundingBox:
        return self.interaction_bounds_override or self.visual_bounds()

    def hit_test(self, point: CoordinatePoint) -> bool:
        return self.interaction_bounds().contains(point.x, point.y)
