from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from polyview.raster.canvas import RGBA, draw_pixel


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    dash: Sequence[float] | None = None,
) -> None:
    """Stroke the path through (xs[i], ys[i]); a dash pattern runs on across vertices."""
    if xs.size < 2:
        return
    dasher = _Dasher(dash) if dash else None
    for i in range(xs.size - 1):
        _draw_segment(
            dst,
            float(xs[i]),
            float(ys[i]),
            float(xs[i + 1]),
            float(ys[i + 1]),
            color=color,
            width=width,
            dasher=dasher,
        )


def draw_rect_outline(
    dst: np.ndarray,
    x: int,
    y: int,
    width: int,
    height: int,
    color: RGBA,
    dash: Sequence[float] | None = None,
) -> None:
    xs = np.asarray([x, x + width, x + width, x, x], dtype=np.float64)
    ys = np.asarray([y, y, y + height, y + height, y], dtype=np.float64)
    draw_polyline(dst, xs, ys, color, width=1, dash=dash)


class _Dasher:
    def __init__(self, pattern: Sequence[float]) -> None:
        if any(v < 0 for v in pattern) or sum(pattern) <= 0:
            raise ValueError("dash pattern must be non-negative with a positive total")
        self._pattern = [float(v) for v in pattern]
        self._total = sum(self._pattern)
        self._offset = 0.0

    def advance(self, distance: float) -> None:
        self._offset = (self._offset + distance) % self._total

    def is_on(self) -> bool:
        pos = self._offset
        for i, length in enumerate(self._pattern):
            if pos < length:
                return i % 2 == 0
            pos -= length
        return len(self._pattern) % 2 == 1


def _draw_segment(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    color: RGBA,
    width: int,
    dasher: _Dasher | None,
) -> None:
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        return
    length = math.hypot(x1 - x0, y1 - y0)
    margin = float(max(1, width))
    clipped = _clip_segment(x0, y0, x1, y1, -margin, -margin, dst.shape[1] - 1 + margin, dst.shape[0] - 1 + margin)
    if clipped is None:
        if dasher is not None:
            dasher.advance(length)
        return
    t0, t1 = clipped
    if dasher is not None:
        dasher.advance(length * t0)

    ix0 = int(round(x0 + (x1 - x0) * t0))
    iy0 = int(round(y0 + (y1 - y0) * t0))
    ix1 = int(round(x0 + (x1 - x0) * t1))
    iy1 = int(round(y0 + (y1 - y0) * t1))
    steps = max(abs(ix1 - ix0), abs(iy1 - iy0))
    step_len = (length * (t1 - t0)) / steps if steps else 0.0

    dx = abs(ix1 - ix0)
    sx = 1 if ix0 < ix1 else -1
    dy = -abs(iy1 - iy0)
    sy = 1 if iy0 < iy1 else -1
    err = dx + dy
    while True:
        if dasher is None or dasher.is_on():
            _draw_square_brush(dst, ix0, iy0, color=color, width=width)
        if ix0 == ix1 and iy0 == iy1:
            break
        if dasher is not None:
            dasher.advance(step_len)
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            ix0 += sx
        if e2 <= dx:
            err += dx
            iy0 += sy

    if dasher is not None:
        dasher.advance(length * (1.0 - t1))


def _clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
) -> tuple[float, float] | None:
    dx = x1 - x0
    dy = y1 - y0
    t0 = 0.0
    t1 = 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0.0:
            if q < 0.0:
                return None
            continue
        r = q / p
        if p < 0.0:
            if r > t1:
                return None
            t0 = max(t0, r)
        else:
            if r < t0:
                return None
            t1 = min(t1, r)
    return (t0, t1)


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    if width <= 1:
        draw_pixel(dst, x, y, color)
        return
    lo = -((width - 1) // 2)
    hi = width // 2
    for yy in range(y + lo, y + hi + 1):
        for xx in range(x + lo, x + hi + 1):
            draw_pixel(dst, xx, yy, color)
