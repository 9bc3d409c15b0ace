from __future__ import annotations

import unittest

from slidecolor_core.core.frame_scheduler import CaptureStride, FrameLoop, ManualFrameScheduler


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class CaptureStrideTests(unittest.TestCase):
    def test_rejects_invalid_fps(self) -> None:
        with self.assertRaises(ValueError):
            CaptureStride(fps=0)
        with self.assertRaises(ValueError):
            CaptureStride(fps=60, capture_fps=0)
        with self.assertRaises(ValueError):
            CaptureStride(fps=60).should_capture(-1)

    def test_capture_rate_never_exceeds_tick_rate(self) -> None:
        stride = CaptureStride(fps=60, capture_fps=240)
        self.assertEqual(stride.effective_capture_fps, 60)
        self.assertTrue(all(stride.should_capture(i) for i in range(10)))

    def test_even_divisor_keeps_every_nth_frame(self) -> None:
        stride = CaptureStride(fps=120, capture_fps=30)
        kept = [i for i in range(120) if stride.should_capture(i)]
        self.assertEqual(len(kept), 30)
        self.assertEqual(kept[:3], [0, 4, 8])

    def test_uneven_divisor_spreads_captures(self) -> None:
        stride = CaptureStride(fps=60, capture_fps=24)
        kept = [i for i in range(60) if stride.should_capture(i)]
        self.assertEqual(len(kept), 24)
        gaps = {b - a for a, b in zip(kept, kept[1:])}
        self.assertEqual(gaps, {2, 3})


class ManualFrameSchedulerTests(unittest.TestCase):
    def test_callbacks_run_once_with_frame_time(self) -> None:
        scheduler = ManualFrameScheduler()
        seen: list[float] = []
        scheduler.request_frame(seen.append)
        self.assertEqual(scheduler.tick(0.5), 1)
        self.assertEqual(scheduler.tick(1.0), 0)
        self.assertEqual(seen, [0.5])
        self.assertEqual(scheduler.frames_delivered, 2)

    def test_cancel_frame_removes_callback(self) -> None:
        scheduler = ManualFrameScheduler()
        seen: list[float] = []
        handle = scheduler.request_frame(seen.append)
        scheduler.cancel_frame(handle)
        scheduler.cancel_frame(handle)
        scheduler.advance(0.1)
        self.assertEqual(seen, [])

    def test_requests_made_during_frame_run_next_frame(self) -> None:
        scheduler = ManualFrameScheduler()
        seen: list[float] = []

        def again(ts: float) -> None:
            seen.append(ts)
            if len(seen) < 3:
                scheduler.request_frame(again)

        scheduler.request_frame(again)
        frames = scheduler.run_until_idle(0.25)
        self.assertEqual(frames, 3)
        self.assertEqual(seen, [0.25, 0.5, 0.75])

    def test_rejects_backwards_time_and_runaway_loops(self) -> None:
        scheduler = ManualFrameScheduler(start_time=1.0)
        with self.assertRaises(ValueError):
            scheduler.tick(0.5)

        def forever(ts: float) -> None:
            scheduler.request_frame(forever)

        scheduler.request_frame(forever)
        with self.assertRaises(RuntimeError):
            scheduler.run_until_idle(0.1, max_frames=5)


class FrameLoopTests(unittest.TestCase):
    def test_run_paces_frames_and_captures_at_rate(self) -> None:
        clock = _FakeClock()
        scheduler = ManualFrameScheduler()
        loop = FrameLoop(
            scheduler,
            60,
            capture_fps=30,
            clock=clock,
            sleep=clock.sleep,
        )
        captured: list[float] = []
        before: list[float] = []

        frames = loop.run(max_frames=4, on_frame=captured.append, before_frame=before.append)

        self.assertEqual(frames, 4)
        self.assertEqual(scheduler.frames_delivered, 4)
        self.assertEqual(len(before), 4)
        self.assertEqual(len(captured), 2)
        self.assertEqual(len(clock.sleeps), 4)
        self.assertFalse(loop.running)

    def test_run_stops_when_until_is_true(self) -> None:
        clock = _FakeClock()
        scheduler = ManualFrameScheduler()
        loop = FrameLoop(scheduler, 60, clock=clock, sleep=clock.sleep)
        ticks: list[float] = []
        scheduler.request_frame(ticks.append)

        frames = loop.run(until=lambda: scheduler.pending_count() == 0)

        self.assertEqual(frames, 1)
        self.assertEqual(len(ticks), 1)


if __name__ == "__main__":
    unittest.main()
