from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

LOGGER = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class ManualFrameScheduler:
    """Frame scheduler whose clock only moves when `tick`/`advance` is called.

    Callbacks requested while a frame is being delivered run on the next frame.
    """

    def __init__(self, start_time: float = 0.0) -> None:
        self._now = float(start_time)
        self._pending: dict[int, FrameCallback] = {}
        self._next_handle = 1
        self._frames_delivered = 0

    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: object) -> None:
        self._pending.pop(handle, None)  # type: ignore[arg-type]

    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def frames_delivered(self) -> int:
        return self._frames_delivered

    def tick(self, frame_time: float) -> int:
        """Deliver one frame at `frame_time`; returns the number of callbacks run."""

        if frame_time < self._now:
            raise ValueError("frame_time must not move backwards")
        self._now = float(frame_time)
        due = list(self._pending.values())
        self._pending.clear()
        ran = 0
        for callback in due:
            callback(self._now)
            ran += 1
        self._frames_delivered += 1
        return ran

    def advance(self, dt: float, frames: int = 1) -> None:
        if dt < 0:
            raise ValueError("dt must be >= 0")
        if frames <= 0:
            raise ValueError("frames must be > 0")
        for _ in range(frames):
            self.tick(self._now + dt)

    def run_until_idle(self, dt: float, max_frames: int = 10_000) -> int:
        """Advance until no callbacks are pending; returns frames delivered."""

        delivered = 0
        while self._pending:
            if delivered >= max_frames:
                raise RuntimeError(f"scheduler still busy after {max_frames} frames")
            self.tick(self._now + dt)
            delivered += 1
        return delivered


@dataclass(frozen=True)
class CaptureStride:
    """Chooses which ticked frames are handed to an output sink.

    Animation always ticks at `fps`; with a lower `capture_fps` only the
    frames where the capture clock enters a new slot are kept. Slots are
    counted by frame index rather than by timestamp.
    """

    fps: int
    capture_fps: int | None = None

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError("fps must be > 0")
        if self.capture_fps is not None and self.capture_fps <= 0:
            raise ValueError("capture_fps must be > 0 when provided")

    @property
    def frame_dt(self) -> float:
        return 1.0 / float(self.fps)

    @property
    def effective_capture_fps(self) -> int:
        if self.capture_fps is None:
            return self.fps
        return min(self.capture_fps, self.fps)

    def should_capture(self, frame_index: int) -> bool:
        if frame_index < 0:
            raise ValueError("frame_index must be >= 0")
        rate = self.effective_capture_fps
        return (frame_index * rate) // self.fps != ((frame_index - 1) * rate) // self.fps


class FrameLoop:
    """Drives a `ManualFrameScheduler` from a wall clock on the caller thread."""

    def __init__(
        self,
        scheduler: ManualFrameScheduler,
        fps: int,
        *,
        capture_fps: int | None = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._scheduler = scheduler
        self._stride = CaptureStride(fps, capture_fps)
        self._clock = clock
        self._sleep = sleep
        self._origin: float | None = None
        self._frame_index = 0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def stride(self) -> CaptureStride:
        return self._stride

    def stop(self) -> None:
        self._running = False

    def run_once(
        self,
        on_frame: Callable[[float], None] | None = None,
        before_frame: Callable[[float], None] | None = None,
    ) -> float:
        if self._origin is None:
            self._origin = self._clock() - self._scheduler.now()
        started = self._clock()
        frame_time = max(self._scheduler.now(), started - self._origin)
        if before_frame is not None:
            before_frame(frame_time)
        self._scheduler.tick(frame_time)
        if on_frame is not None and self._stride.should_capture(self._frame_index):
            on_frame(frame_time)
        self._frame_index += 1
        elapsed = max(0.0, self._clock() - started)
        sleep_for = self._stride.frame_dt - elapsed
        if sleep_for > 0:
            self._sleep(sleep_for)
        return frame_time

    def run(
        self,
        *,
        max_frames: int | None = None,
        until: Callable[[], bool] | None = None,
        on_frame: Callable[[float], None] | None = None,
        before_frame: Callable[[float], None] | None = None,
    ) -> int:
        if max_frames is not None and max_frames <= 0:
            raise ValueError("max_frames must be > 0 when provided")
        self._running = True
        frames = 0
        try:
            while self._running:
                if max_frames is not None and frames >= max_frames:
                    break
                if until is not None and until():
                    break
                self.run_once(on_frame, before_frame)
                frames += 1
        finally:
            self._running = False
        LOGGER.debug("frame loop stopped after %d frames", frames)
        return frames
