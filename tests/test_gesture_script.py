from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from slidecolor_core.core.frame_scheduler import ManualFrameScheduler
from slidecolor_core.core.gesture_script import (
    GestureCursor,
    ScriptedPointerEvent,
    load_gesture_script,
    parse_gesture_script,
    replay_gesture,
)
from slidecolor_ui.controls.slide_color_picker import SlideColorPicker
from slidecolor_ui.style.config import SlideColorPickerConfig

DRAG_TO_BOTTOM = [
    {"t": 0.0, "type": "click", "phase": "down", "x": 40.0, "y": 120.0},
    {"t": 0.1, "type": "pointer_move", "x": 40.0, "y": 1000.0},
    {"t": 0.2, "type": "click", "phase": "up", "x": 40.0, "y": 1000.0},
]


def _picker() -> tuple[SlideColorPicker, ManualFrameScheduler]:
    scheduler = ManualFrameScheduler()
    picker = SlideColorPicker(
        "picker",
        SlideColorPickerConfig(radius=20.0, start_color="#FF0000", end_color="#0000FF"),  # type: ignore[arg-type]
        scheduler,
    )
    picker.on_size_established(80, 240)
    return picker, scheduler


class GestureScriptParseTests(unittest.TestCase):
    def test_parse_sorts_and_splits_payload(self) -> None:
        events = parse_gesture_script(list(reversed(DRAG_TO_BOTTOM)))
        self.assertEqual([e.at_s for e in events], [0.0, 0.1, 0.2])
        self.assertEqual(events[0].event_type, "click")
        self.assertEqual(events[0].payload, {"phase": "down", "x": 40.0, "y": 120.0})

    def test_parse_rejects_malformed_scripts(self) -> None:
        with self.assertRaisesRegex(ValueError, "JSON list"):
            parse_gesture_script({"t": 0})
        with self.assertRaisesRegex(ValueError, "entry 0"):
            parse_gesture_script([{"type": "click"}])
        with self.assertRaisesRegex(ValueError, "unsupported"):
            parse_gesture_script([{"t": 0, "type": "wheel"}])
        with self.assertRaises(ValueError):
            ScriptedPointerEvent(at_s=-1.0, event_type="click", payload={})

    def test_load_reads_json_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "gesture.json"
            path.write_text(json.dumps(DRAG_TO_BOTTOM), encoding="utf-8")
            events = load_gesture_script(path)
        self.assertEqual(len(events), 3)


class GestureReplayTests(unittest.TestCase):
    def test_replay_drag_to_bottom_settles_on_end_color(self) -> None:
        picker, scheduler = _picker()
        frame_times: list[float] = []

        frames = replay_gesture(
            picker,
            scheduler,
            parse_gesture_script(DRAG_TO_BOTTOM),
            fps=60,
            on_frame=frame_times.append,
        )

        self.assertEqual(frames, len(frame_times))
        self.assertGreater(frames, 12)
        self.assertEqual(picker.phase, "idle")
        self.assertEqual(picker.progress, 1.0)
        self.assertEqual(picker.committed_color, (0, 0, 255, 255))
        self.assertEqual(picker.geometry.radius, picker.geometry.original_radius)
        self.assertEqual(scheduler.pending_count(), 0)

    def test_replay_hands_only_captured_frames_to_callback(self) -> None:
        picker, scheduler = _picker()
        captured: list[float] = []

        frames = replay_gesture(
            picker,
            scheduler,
            parse_gesture_script(DRAG_TO_BOTTOM),
            fps=60,
            capture_fps=20,
            on_frame=captured.append,
        )

        self.assertEqual(len(captured), (frames + 2) // 3)
        self.assertAlmostEqual(captured[1] - captured[0], 3.0 / 60.0)

    def test_cursor_delivers_only_due_events(self) -> None:
        picker, _ = _picker()
        cursor = GestureCursor(picker, parse_gesture_script(DRAG_TO_BOTTOM))
        self.assertEqual(cursor.deliver_due(0.05), 1)
        self.assertEqual(picker.phase, "pressing")
        self.assertEqual(cursor.deliver_due(0.05), 0)
        self.assertEqual(cursor.deliver_due(1.0), 2)
        self.assertTrue(cursor.exhausted)
        self.assertEqual(picker.phase, "releasing")

    def test_replay_rejects_invalid_fps(self) -> None:
        picker, scheduler = _picker()
        with self.assertRaises(ValueError):
            replay_gesture(picker, scheduler, [], fps=0)


if __name__ == "__main__":
    unittest.main()
