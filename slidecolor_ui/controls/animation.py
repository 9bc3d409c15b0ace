from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Hashable, Optional, Protocol

LOGGER = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Host display-refresh hook used by the animation driver."""

    def now(self) -> float:
        ...

    def request_frame(self, callback: FrameCallback) -> Hashable:
        ...

    def cancel_frame(self, handle: Hashable) -> None:
        ...


@dataclass(frozen=True)
class CubicBezierEasing:
    """CSS-style cubic bezier easing anchored at (0, 0) and (1, 1)."""

    x1: float
    y1: float
    x2: float
    y2: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.x1 <= 1.0 and 0.0 <= self.x2 <= 1.0):
            raise ValueError("bezier x control points must be in [0, 1]")

    def __call__(self, fraction: float) -> float:
        if fraction <= 0.0:
            return 0.0
        if fraction >= 1.0:
            return 1.0
        s = self._solve_curve_x(fraction)
        return _bezier(s, self.y1, self.y2)

    def _solve_curve_x(self, x: float) -> float:
        s = x
        for _ in range(8):
            err = _bezier(s, self.x1, self.x2) - x
            if abs(err) < 1e-7:
                return s
            slope = _bezier_slope(s, self.x1, self.x2)
            if abs(slope) < 1e-6:
                break
            s -= err / slope
        lo, hi = 0.0, 1.0
        s = x
        while hi - lo > 1e-7:
            if _bezier(s, self.x1, self.x2) < x:
                lo = s
            else:
                hi = s
            s = (lo + hi) * 0.5
        return s


def _bezier(s: float, p1: float, p2: float) -> float:
    inv = 1.0 - s
    return 3.0 * inv * inv * s * p1 + 3.0 * inv * s * s * p2 + s * s * s


def _bezier_slope(s: float, p1: float, p2: float) -> float:
    inv = 1.0 - s
    return 3.0 * inv * inv * p1 + 6.0 * inv * s * (p2 - p1) + 3.0 * s * s * (1.0 - p2)


FAST_OUT_SLOW_IN = CubicBezierEasing(0.4, 0.0, 0.2, 1.0)


class AnimationDriver:
    """Single-run animator producing an eased fraction over a fixed duration.

    Only one run is attached at a time. `start` cancels the previous run before
    attaching the new one, and every scheduled frame carries the token of the
    run that requested it, so frames from a replaced run are dropped.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        easing: Callable[[float], float] = FAST_OUT_SLOW_IN,
    ) -> None:
        self._scheduler = scheduler
        self._easing = easing
        self._token = 0
        self._handle: Optional[Hashable] = None
        self._duration_s = 0.0
        self._started_at: Optional[float] = None
        self._on_frame: Optional[Callable[[float], None]] = None
        self._on_complete: Optional[Callable[[], None]] = None
        self._last_value = 0.0

    @property
    def running(self) -> bool:
        return self._on_frame is not None

    @property
    def last_value(self) -> float:
        return self._last_value

    def start(
        self,
        duration_s: float,
        on_frame: Callable[[float], None],
        on_complete: Optional[Callable[[], None]] = None,
    ) -> int:
        if duration_s <= 0:
            raise ValueError("duration_s must be > 0")
        self.cancel()
        self._token += 1
        token = self._token
        self._duration_s = float(duration_s)
        self._started_at = self._scheduler.now()
        self._on_frame = on_frame
        self._on_complete = on_complete
        self._last_value = 0.0
        self._schedule(token)
        LOGGER.debug("animation run %d started (%.3fs)", token, duration_s)
        return token

    def cancel(self) -> None:
        """Stop the active run; geometry keeps its last written values."""

        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None
        if self._on_frame is not None:
            LOGGER.debug("animation run %d cancelled", self._token)
            self._token += 1
        self._on_frame = None
        self._on_complete = None
        self._started_at = None

    def _schedule(self, token: int) -> None:
        self._handle = self._scheduler.request_frame(lambda ts: self._on_tick(token, ts))

    def _on_tick(self, token: int, frame_time: float) -> None:
        if token != self._token or self._on_frame is None or self._started_at is None:
            return
        self._handle = None
        elapsed = max(0.0, frame_time - self._started_at)
        fraction = min(1.0, elapsed / self._duration_s)
        value = max(self._last_value, self._easing(fraction))
        self._last_value = value
        self._on_frame(value)
        if token != self._token:
            # The frame callback started or cancelled a run.
            return
        if fraction >= 1.0:
            on_complete = self._on_complete
            self._on_frame = None
            self._on_complete = None
            self._started_at = None
            LOGGER.debug("animation run %d completed", token)
            if on_complete is not None:
                on_complete()
            return
        self._schedule(token)
