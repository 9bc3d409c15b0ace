from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import sys
import tempfile
import unittest
from unittest import mock

from main import main

CONFIG = {"radius": 4, "start_color": "#FF0000", "end_color": "#0000FF"}
SCRIPT = [
    {"t": 0.0, "type": "click", "phase": "down", "x": 8.0, "y": 27.0},
    {"t": 0.1, "type": "pointer_move", "x": 8.0, "y": 1000.0},
    {"t": 0.2, "type": "click", "phase": "up", "x": 8.0, "y": 1000.0},
]


class SlideColorCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.config_path = self.root / "config.json"
        self.script_path = self.root / "gesture.json"
        self.config_path.write_text(json.dumps(CONFIG), encoding="utf-8")
        self.script_path.write_text(json.dumps(SCRIPT), encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        code = 0
        with mock.patch.object(sys, "argv", ["slidecolor", *argv]):
            with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
                try:
                    main()
                except SystemExit as exc:
                    code = int(exc.code or 0)
        return code, stdout.getvalue(), stderr.getvalue()

    def _render_args(self, *extra: str) -> list[str]:
        return [
            "render-gesture",
            str(self.script_path),
            "--config",
            str(self.config_path),
            "--out",
            str(self.root / "frames"),
            *extra,
        ]

    def test_render_gesture_writes_captured_frames(self) -> None:
        code, out, _ = self._run(*self._render_args("--fps", "30", "--capture-fps", "10"))
        self.assertEqual(code, 0)
        summary = json.loads(out.strip().splitlines()[-1])
        self.assertEqual(summary["phase"], "idle")
        self.assertEqual(summary["progress"], 1.0)
        self.assertEqual(summary["committed_color"], "#0000FF")
        self.assertGreater(summary["frames_written"], 0)
        self.assertEqual(len(list((self.root / "frames").glob("frame_*.png"))), summary["frames_written"])

    def test_non_positive_frame_options_exit_with_usage_error(self) -> None:
        cases = (
            (("--fps", "0"), "--fps"),
            (("--capture-fps", "0"), "--capture-fps"),
            (("--width", "0"), "frame size"),
            (("--height", "-3"), "frame size"),
        )
        for extra, message in cases:
            with self.subTest(extra=extra):
                code, _, err = self._run(*self._render_args(*extra))
                self.assertEqual(code, 2)
                self.assertIn(message, err)
                self.assertNotIn("Traceback", err)

    def test_non_finite_config_is_a_usage_error(self) -> None:
        self.config_path.write_text(
            '{"radius": NaN, "start_color": "#FF0000", "end_color": "#0000FF"}', encoding="utf-8"
        )
        code, _, err = self._run("inspect-config", str(self.config_path))
        self.assertEqual(code, 2)
        self.assertIn("finite", err)

    def test_inspect_config_prints_derived_geometry(self) -> None:
        code, out, _ = self._run("inspect-config", str(self.config_path))
        self.assertEqual(code, 0)
        described = json.loads(out)
        self.assertEqual(described["scaled_down_radius"], 3.2)
        self.assertEqual(described["preferred_size"], [8.0, 8.0])


if __name__ == "__main__":
    unittest.main()
