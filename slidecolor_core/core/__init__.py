from .frame_scheduler import CaptureStride, FrameLoop, ManualFrameScheduler
from .gesture_script import GestureCursor, ScriptedPointerEvent, load_gesture_script, parse_gesture_script, replay_gesture
from .ui_frame_renderer import MatrixShapeRenderer, save_frame_png

__all__ = [
    "CaptureStride",
    "FrameLoop",
    "GestureCursor",
    "ManualFrameScheduler",
    "MatrixShapeRenderer",
    "ScriptedPointerEvent",
    "load_gesture_script",
    "parse_gesture_script",
    "replay_gesture",
    "save_frame_png",
]
