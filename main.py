from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from slidecolor_core.core import (
    FrameLoop,
    GestureCursor,
    ManualFrameScheduler,
    MatrixShapeRenderer,
    load_gesture_script,
    replay_gesture,
    save_frame_png,
)
from slidecolor_ui.controls.geometry import GeometryModel
from slidecolor_ui.controls.slide_color_picker import SlideColorPicker
from slidecolor_ui.style.color import color_to_hex
from slidecolor_ui.style.config import SlideColorPickerConfig, validate_picker_config

LOGGER = logging.getLogger("slidecolor")


def main() -> None:
    parser = argparse.ArgumentParser(prog="slidecolor")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render-gesture", help="Replay a gesture script and write PNG frames.")
    render.add_argument("script", type=Path)
    render.add_argument("--config", type=Path, required=True, help="JSON picker attributes.")
    render.add_argument("--out", type=Path, required=True, help="Output directory for frame PNGs.")
    render.add_argument("--fps", type=int, default=60)
    render.add_argument("--capture-fps", type=int, default=None)
    render.add_argument("--width", type=int, default=None, help="Default: 4x radius.")
    render.add_argument("--height", type=int, default=None, help="Default: expanded track height + 4x radius.")
    render.add_argument("--realtime", action="store_true", help="Pace frames against the wall clock.")

    inspect = sub.add_parser("inspect-config", help="Validate picker attributes and print derived geometry.")
    inspect.add_argument("config", type=Path)
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "inspect-config":
        config = _load_config(parser, args.config)
        print(json.dumps(_describe_config(config), indent=2))
        return

    if args.command == "render-gesture":
        config = _load_config(parser, args.config)
        try:
            events = load_gesture_script(args.script)
        except (OSError, ValueError) as exc:
            parser.error(f"invalid gesture script `{args.script}`: {exc}")
        if args.fps <= 0:
            parser.error("--fps must be > 0")
        if args.capture_fps is not None and args.capture_fps <= 0:
            parser.error("--capture-fps must be > 0")
        try:
            width, height = _resolve_dimensions(config, args.width, args.height)
        except ValueError as exc:
            parser.error(str(exc))
        scheduler = ManualFrameScheduler()
        picker = SlideColorPicker("slide_color_picker", config, scheduler)
        picker.on_size_established(width, height)
        renderer = MatrixShapeRenderer()
        written: list[Path] = []

        def capture(frame_time: float) -> None:
            renderer.begin_frame(width, height, clear_color=(0, 0, 0, 255))
            picker.render(renderer)
            frame = renderer.end_frame()
            written.append(save_frame_png(frame, args.out / f"frame_{len(written):05d}.png"))

        if args.realtime:
            cursor = GestureCursor(picker, events, origin=scheduler.now())
            FrameLoop(scheduler, args.fps, capture_fps=args.capture_fps).run(
                until=lambda: cursor.exhausted and scheduler.pending_count() == 0,
                on_frame=capture,
                before_frame=cursor.deliver_due,
            )
        else:
            replay_gesture(
                picker,
                scheduler,
                events,
                fps=args.fps,
                capture_fps=args.capture_fps,
                on_frame=capture,
            )
        LOGGER.info("wrote %d frames to %s", len(written), args.out)
        print(
            json.dumps(
                {
                    "frames_written": len(written),
                    "progress": picker.progress,
                    "committed_color": color_to_hex(picker.committed_color),
                    "phase": picker.phase,
                }
            )
        )
        return


def _load_config(parser: argparse.ArgumentParser, path: Path) -> SlideColorPickerConfig:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        parser.error(f"cannot read config `{path}`: {exc}")
    if not isinstance(raw, dict):
        parser.error(f"config `{path}` must be a JSON object")
    try:
        return validate_picker_config(raw)
    except ValueError as exc:
        parser.error(f"invalid config `{path}`: {exc}")


def _resolve_dimensions(config: SlideColorPickerConfig, width: int | None, height: int | None) -> tuple[int, int]:
    resolved_w = width if width is not None else int(round(config.radius * 4))
    resolved_h = height if height is not None else int(round(config.radius * (2 * config.height_multiplier + 4)))
    if resolved_w <= 0 or resolved_h <= 0:
        raise ValueError(f"frame size must be positive, got {resolved_w}x{resolved_h}")
    return resolved_w, resolved_h


def _describe_config(config: SlideColorPickerConfig) -> dict[str, object]:
    geometry = GeometryModel(config)
    return {
        "radius": geometry.original_radius,
        "scaled_down_radius": geometry.scaled_down_radius,
        "expanded_height": geometry.expanded_height,
        "height_multiplier": config.height_multiplier,
        "text_size": config.text_size,
        "animation_duration_s": config.animation_duration_s,
        "start_color": color_to_hex(config.start_color),
        "end_color": color_to_hex(config.end_color),
        "preferred_size": [config.radius * 2, config.radius * 2],
    }


if __name__ == "__main__":
    main()
