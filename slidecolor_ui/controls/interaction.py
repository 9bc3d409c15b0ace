from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union


@dataclass(frozen=True)
class PointerDown:
    y: Optional[float] = None


@dataclass(frozen=True)
class PointerMove:
    y: float


@dataclass(frozen=True)
class PointerUp:
    y: Optional[float] = None


@dataclass(frozen=True)
class PointerCancel:
    y: Optional[float] = None


PointerEvent = Union[PointerDown, PointerMove, PointerUp, PointerCancel]


def _coerce_y(payload: Mapping[str, object]) -> float | None:
    raw = payload.get("y")
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def parse_hdi_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    """Parse normalized HDI pointer events into the picker's pointer variant.

    Accepts `click` events with a `phase` of `down`/`up`/`cancel` and
    `pointer_move` events. Local `y` is read from the payload; a move without a
    usable `y` is dropped.
    """

    if not isinstance(payload, Mapping):
        return None
    y = _coerce_y(payload)
    if event_type == "pointer_move":
        if y is None:
            return None
        return PointerMove(y=y)
    if event_type == "pointer_down":
        return PointerDown(y=y)
    if event_type == "pointer_up":
        return PointerUp(y=y)
    if event_type != "click":
        return None
    phase = payload.get("phase")
    if phase == "down":
        return PointerDown(y=y)
    if phase == "up":
        return PointerUp(y=y)
    if phase == "cancel":
        return PointerCancel(y=y)
    return None
