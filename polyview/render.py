from __future__ import annotations

import logging

import numpy as np

from polyview.config import ViewerConfig
from polyview.geometry import Point
from polyview.raster import draw_diamonds, draw_polyline, draw_rect_outline, draw_text, new_canvas
from polyview.raster.canvas import RGBA
from polyview.state import Dragging, LayerVisibility
from polyview.viewport import CanvasSizeLike, ViewportModel

LOGGER = logging.getLogger(__name__)

GRAPH_DASH = (20.0, 5.0, 10.0, 5.0, 5.0)
GUIDE_DASH = (8.0, 1.0)
DRAG_RECT_DASH = (6.0, 6.0)
GUIDE_FRACTIONS = (0.9, 0.5, 0.1)
AXIS_WIDTH = 2


def format_point_label(point: Point) -> str:
    return f"({point.x:.2f}, {point.y:.2f})"


class GraphRenderer:
    """Draws the viewer layers into an RGBA frame of shape (height, width, 4)."""

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self._config = config or ViewerConfig()

    def render(
        self,
        model: ViewportModel,
        visibility: LayerVisibility | None = None,
        canvas_size: CanvasSizeLike | None = None,
    ) -> np.ndarray | None:
        size = model.canvas_size(canvas_size)
        if not size.is_renderable:
            LOGGER.debug("canvas %sx%s not renderable yet", size.width, size.height)
            return None
        layers = visibility or LayerVisibility()
        canvas = new_canvas(size.width, size.height, color=self._config.background)
        state = model.state
        if not state.has_data or state.window is None:
            return canvas

        if layers.axis:
            self._draw_axis(canvas, model, size)
        if layers.horizontal_guides:
            self._draw_guides(canvas, model, size)
        projected = model.project(size)
        assert projected is not None
        px, py = projected
        draw_polyline(canvas, px, py, self._config.line_color, width=1, dash=GRAPH_DASH)
        if layers.markers:
            draw_diamonds(canvas, px, py, self._marker_colors(model), radius=self._config.marker_radius)

        drag_rect = state.drag.rect if isinstance(state.drag, Dragging) else None
        if drag_rect is not None:
            draw_rect_outline(
                canvas,
                drag_rect.x,
                drag_rect.y,
                drag_rect.width,
                drag_rect.height,
                self._config.line_color,
                dash=DRAG_RECT_DASH,
            )
        if state.highlight is not None:
            self._draw_highlight_label(canvas, model, state.highlight, size)
        return canvas

    def _draw_axis(self, canvas: np.ndarray, model: ViewportModel, size: CanvasSizeLike) -> None:
        window = model.current_window()
        assert window is not None
        self._stroke_data_line(canvas, model, size, Point(window.min_x, 0.0), Point(window.max_x, 0.0), width=AXIS_WIDTH)
        self._stroke_data_line(canvas, model, size, Point(0.0, window.min_y), Point(0.0, window.max_y), width=AXIS_WIDTH)

    def _draw_guides(self, canvas: np.ndarray, model: ViewportModel, size: CanvasSizeLike) -> None:
        window = model.current_window()
        assert window is not None
        for fraction in GUIDE_FRACTIONS:
            y = window.min_y + fraction * window.height
            self._stroke_data_line(
                canvas,
                model,
                size,
                Point(window.min_x, y),
                Point(window.max_x, y),
                color=self._config.guide_color,
                dash=GUIDE_DASH,
            )

    def _stroke_data_line(
        self,
        canvas: np.ndarray,
        model: ViewportModel,
        size: CanvasSizeLike,
        start: Point,
        end: Point,
        *,
        width: int = 1,
        color: RGBA | None = None,
        dash: tuple[float, ...] | None = None,
    ) -> None:
        a = model.forward_transform(start, size)
        b = model.forward_transform(end, size)
        if a is None or b is None:
            return
        xs = np.asarray([a.x, b.x], dtype=np.float64)
        ys = np.asarray([a.y, b.y], dtype=np.float64)
        draw_polyline(canvas, xs, ys, color or self._config.line_color, width=width, dash=dash)

    def _marker_colors(self, model: ViewportModel) -> list[RGBA]:
        window = model.current_window()
        assert window is not None
        mid = (window.max_y + window.min_y) / 2.0
        high = model.state.ys > mid
        return [self._config.marker_high_color if h else self._config.marker_low_color for h in high.tolist()]

    def _draw_highlight_label(self, canvas: np.ndarray, model: ViewportModel, point: Point, size: CanvasSizeLike) -> None:
        anchor = model.forward_transform(point, size)
        if anchor is None:
            return
        dx, dy = self._config.label_offset_px
        draw_text(
            canvas,
            int(anchor.x) + dx,
            int(anchor.y) + dy,
            format_point_label(point),
            self._config.line_color,
            font_size_px=self._config.label_font_px,
        )
