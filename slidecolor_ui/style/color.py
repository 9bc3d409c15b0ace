from __future__ import annotations

import re
from typing import Union

RGBA = tuple[int, int, int, int]
ColorLike = Union[str, RGBA, tuple[int, int, int]]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")
_GAMMA = 2.2

WHITE: RGBA = (255, 255, 255, 255)


def parse_color(value: ColorLike) -> RGBA:
    """Normalize `#RRGGBB`, `#RRGGBBAA` or an RGB(A) tuple to an 8-bit RGBA tuple."""

    if isinstance(value, str):
        raw = value.strip()
        if not _HEX_COLOR.match(raw):
            raise ValueError(f"color must be #RRGGBB or #RRGGBBAA, got `{value}`")
        r = int(raw[1:3], 16)
        g = int(raw[3:5], 16)
        b = int(raw[5:7], 16)
        a = int(raw[7:9], 16) if len(raw) == 9 else 255
        return (r, g, b, a)
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = [int(c) for c in value]
        if len(channels) == 3:
            channels.append(255)
        for c in channels:
            if c < 0 or c > 255:
                raise ValueError(f"color channels must be in [0, 255], got {tuple(value)}")
        return (channels[0], channels[1], channels[2], channels[3])
    raise ValueError(f"unsupported color value: {value!r}")


def color_to_hex(color: RGBA) -> str:
    r, g, b, a = color
    if a == 255:
        return f"#{r:02X}{g:02X}{b:02X}"
    return f"#{r:02X}{g:02X}{b:02X}{a:02X}"


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def blend_colors(fraction: float, start: RGBA, end: RGBA) -> RGBA:
    """Blend two colors the way an ARGB animation evaluator does.

    Alpha is interpolated directly; RGB channels are decoded to linear light
    with a 2.2 gamma, interpolated, then re-encoded and rounded to 8 bits.
    """

    t = clamp_unit(fraction)
    if t == 0.0:
        return start
    if t == 1.0:
        return end
    out = []
    for s, e in zip(start[:3], end[:3]):
        s_lin = (s / 255.0) ** _GAMMA
        e_lin = (e / 255.0) ** _GAMMA
        mixed = s_lin + t * (e_lin - s_lin)
        out.append(int(round((mixed ** (1.0 / _GAMMA)) * 255.0)))
    alpha = start[3] + t * (end[3] - start[3])
    return (out[0], out[1], out[2], int(round(alpha)))
