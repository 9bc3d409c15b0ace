from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from slidecolor_ui.controls.slide_color_picker import SlideColorPicker

from .frame_scheduler import CaptureStride, ManualFrameScheduler

LOGGER = logging.getLogger(__name__)

_EVENT_TYPES = {"click", "pointer_move", "pointer_down", "pointer_up"}


@dataclass(frozen=True)
class ScriptedPointerEvent:
    """One HDI-style pointer event to deliver at time `at_s` into the replay."""

    at_s: float
    event_type: str
    payload: dict[str, Any]

    def __post_init__(self) -> None:
        if self.at_s < 0:
            raise ValueError("scripted event time must be >= 0")
        if self.event_type not in _EVENT_TYPES:
            raise ValueError(f"unsupported scripted event type: {self.event_type}")


def parse_gesture_script(raw: object) -> list[ScriptedPointerEvent]:
    """Parse `[{"t": 0.0, "type": "click", "phase": "down", "y": 40}, ...]`."""

    if not isinstance(raw, list):
        raise ValueError("gesture script must be a JSON list")
    events: list[ScriptedPointerEvent] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValueError(f"gesture script entry {i} must be an object")
        try:
            at_s = float(item["t"])
            event_type = str(item["type"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"gesture script entry {i} needs numeric `t` and `type`") from exc
        payload = {k: v for k, v in item.items() if k not in ("t", "type")}
        events.append(ScriptedPointerEvent(at_s=at_s, event_type=event_type, payload=payload))
    return sorted(events, key=lambda e: e.at_s)


def load_gesture_script(path: Path) -> list[ScriptedPointerEvent]:
    return parse_gesture_script(json.loads(path.read_text(encoding="utf-8")))


class GestureCursor:
    """Delivers scripted events to a picker as frame time passes."""

    def __init__(self, picker: SlideColorPicker, events: Iterable[ScriptedPointerEvent], origin: float = 0.0) -> None:
        self._picker = picker
        self._queue = sorted(events, key=lambda e: e.at_s)
        self._origin = float(origin)
        self._index = 0

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._queue)

    def deliver_due(self, frame_time: float) -> int:
        delivered = 0
        while not self.exhausted and self._origin + self._queue[self._index].at_s <= frame_time:
            event = self._queue[self._index]
            if not self._picker.handle_hdi_event(event.event_type, event.payload):
                LOGGER.debug("scripted event %s %s not consumed", event.event_type, event.payload)
            self._index += 1
            delivered += 1
        return delivered


def replay_gesture(
    picker: SlideColorPicker,
    scheduler: ManualFrameScheduler,
    events: Iterable[ScriptedPointerEvent],
    *,
    fps: int = 60,
    capture_fps: int | None = None,
    on_frame: Callable[[float], None] | None = None,
    max_frames: int = 100_000,
) -> int:
    """Replay scripted events frame by frame until the picker settles.

    Events due at or before a frame's time are delivered before that frame's
    animation callbacks run. `on_frame` only sees the frames kept by a
    `CaptureStride` at `capture_fps`. Returns the number of frames ticked.
    """

    stride = CaptureStride(fps, capture_fps)
    dt = stride.frame_dt
    origin = scheduler.now()
    cursor = GestureCursor(picker, events, origin=origin)
    frames = 0
    while not cursor.exhausted or scheduler.pending_count() > 0:
        if frames >= max_frames:
            raise RuntimeError(f"gesture replay did not settle after {max_frames} frames")
        frame_time = origin + (frames + 1) * dt
        cursor.deliver_due(frame_time)
        scheduler.tick(frame_time)
        if on_frame is not None and stride.should_capture(frames):
            on_frame(frame_time)
        frames += 1
    return frames
