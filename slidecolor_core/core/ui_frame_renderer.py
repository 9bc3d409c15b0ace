from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import torch
from PIL import Image

from slidecolor_ui.controls.shape_renderer import (
    CircleCommand,
    Fill,
    LinearGradientFill,
    RoundRectCommand,
    ShapeRenderBatch,
    SolidFill,
)
from slidecolor_ui.style.color import RGBA

_GAMMA = 2.2


@dataclass
class MatrixShapeRenderer:
    """Torch-first shape-to-matrix renderer producing `(H, W, 4)` uint8 frames."""

    _frame: torch.Tensor | None = None
    _grid_x: torch.Tensor | None = None
    _grid_y: torch.Tensor | None = None

    def begin_frame(self, width: int, height: int, clear_color: RGBA = (0, 0, 0, 255)) -> None:
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError("frame dimensions must be > 0")
        self._frame = torch.zeros((height, width, 4), dtype=torch.uint8)
        self._frame[:, :] = torch.tensor(clear_color, dtype=torch.uint8)
        # Pixel centers.
        self._grid_x = (torch.arange(width, dtype=torch.float32) + 0.5).unsqueeze(0).expand(height, width)
        self._grid_y = (torch.arange(height, dtype=torch.float32) + 0.5).unsqueeze(1).expand(height, width)

    def draw_shape_batch(self, batch: ShapeRenderBatch) -> None:
        if self._frame is None:
            raise RuntimeError("begin_frame must be called before draw_shape_batch")
        for command in batch.commands:
            if isinstance(command, RoundRectCommand):
                self._draw_round_rect(command)
            elif isinstance(command, CircleCommand):
                self._draw_circle_stroke(command)
            else:
                raise TypeError(f"unsupported shape command: {command!r}")

    def end_frame(self) -> torch.Tensor:
        if self._frame is None:
            raise RuntimeError("begin_frame must be called before end_frame")
        out = self._frame.clone()
        self._frame = None
        self._grid_x = None
        self._grid_y = None
        return out

    def _draw_round_rect(self, command: RoundRectCommand) -> None:
        assert self._grid_x is not None and self._grid_y is not None
        half_w = max(0.0, (command.right - command.left) * 0.5)
        half_h = max(0.0, (command.bottom - command.top) * 0.5)
        if half_w <= 0.0 or half_h <= 0.0:
            return
        corner = min(max(0.0, command.corner_radius), half_w, half_h)
        cx = (command.left + command.right) * 0.5
        cy = (command.top + command.bottom) * 0.5
        qx = (self._grid_x - cx).abs() - (half_w - corner)
        qy = (self._grid_y - cy).abs() - (half_h - corner)
        outside = torch.sqrt(qx.clamp(min=0.0) ** 2 + qy.clamp(min=0.0) ** 2)
        inside = torch.maximum(qx, qy).clamp(max=0.0)
        mask = (outside + inside - corner) <= 0.0
        self._fill_mask(mask, command.fill)

    def _draw_circle_stroke(self, command: CircleCommand) -> None:
        assert self._grid_x is not None and self._grid_y is not None
        if command.radius <= 0.0 or command.stroke_width <= 0.0:
            return
        dist = torch.sqrt((self._grid_x - command.cx) ** 2 + (self._grid_y - command.cy) ** 2)
        half = command.stroke_width * 0.5
        mask = (dist >= command.radius - half) & (dist <= command.radius + half)
        self._fill_mask(mask, SolidFill(command.stroke))

    def _fill_mask(self, mask: torch.Tensor, fill: Fill) -> None:
        assert self._frame is not None and self._grid_y is not None
        if not bool(mask.any()):
            return
        height, width = mask.shape
        if isinstance(fill, SolidFill):
            rgb = torch.tensor(fill.color[:3], dtype=torch.float32).view(1, 1, 3).expand(height, width, 3)
            alpha = torch.full((height, width), fill.color[3] / 255.0, dtype=torch.float32)
        else:
            rows = gradient_rows(fill, height)
            rgb = rows[:, :3].view(height, 1, 3).expand(height, width, 3)
            alpha = (rows[:, 3] / 255.0).view(height, 1).expand(height, width)
        alpha = torch.where(mask, alpha, torch.zeros_like(alpha)).unsqueeze(-1)
        dst = self._frame[:, :, :3].to(torch.float32)
        out = torch.clamp(rgb * alpha + dst * (1.0 - alpha), 0, 255).round().to(torch.uint8)
        self._frame[:, :, :3] = out
        self._frame[:, :, 3] = torch.where(mask, torch.full_like(self._frame[:, :, 3], 255), self._frame[:, :, 3])


def gradient_rows(fill: LinearGradientFill, height: int) -> torch.Tensor:
    """Evaluate a vertical mirrored gradient at each pixel row center.

    Returns a float `(height, 4)` tensor of already-rounded RGBA values using
    the same linear-light blend as `blend_colors`.
    """

    ys = torch.arange(height, dtype=torch.float64) + 0.5
    span = fill.y1 - fill.y0
    if span == 0:
        u = torch.zeros_like(ys)
    else:
        u = torch.remainder((ys - fill.y0) / span, 2.0)
        u = torch.where(u > 1.0, 2.0 - u, u)
    u = u.unsqueeze(1)
    start = torch.tensor(fill.start_color, dtype=torch.float64).unsqueeze(0)
    end = torch.tensor(fill.end_color, dtype=torch.float64).unsqueeze(0)
    start_lin = (start[:, :3] / 255.0) ** _GAMMA
    end_lin = (end[:, :3] / 255.0) ** _GAMMA
    mixed = start_lin * (1.0 - u) + end_lin * u
    rgb = torch.round((mixed ** (1.0 / _GAMMA)) * 255.0)
    alpha = torch.round(start[:, 3:] * (1.0 - u) + end[:, 3:] * u)
    return torch.cat([rgb, alpha], dim=1).to(torch.float32)


def save_frame_png(frame: torch.Tensor, path: Path) -> Path:
    if frame.ndim != 3 or frame.shape[2] != 4:
        raise ValueError(f"invalid frame shape: {tuple(frame.shape)}")
    if frame.dtype != torch.uint8:
        raise ValueError(f"invalid frame dtype: {frame.dtype}")
    pixels = np.ascontiguousarray(frame.detach().cpu().numpy())
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(pixels).save(path)
    return path
