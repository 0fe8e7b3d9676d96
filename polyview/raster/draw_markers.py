from __future__ import annotations

import numpy as np

from polyview.raster.canvas import RGBA, draw_hline


def draw_diamonds(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, colors: list[RGBA], radius: int = 5) -> None:
    for x, y, color in zip(xs.tolist(), ys.tolist(), colors, strict=True):
        _draw_diamond(dst, int(round(x)), int(round(y)), color=color, radius=radius)


def _draw_diamond(dst: np.ndarray, cx: int, cy: int, color: RGBA, radius: int) -> None:
    if cx + radius < 0 or cy + radius < 0 or cx - radius >= dst.shape[1] or cy - radius >= dst.shape[0]:
        return
    for dy in range(-radius, radius + 1):
        half = radius - abs(dy)
        draw_hline(dst, cx - half, cx + half, cy + dy, color)
