from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from polyview.adapters.normalize import normalize_points
from polyview.config import ViewerConfig
from polyview.geometry import CanvasSize, Point, ScreenPoint, ScreenRect
from polyview.interaction import InteractionController, PointerEvent
from polyview.loader import read_point_file
from polyview.render import GraphRenderer
from polyview.state import LayerVisibility, ViewState
from polyview.viewport import DataWindow, ViewportModel

LOGGER = logging.getLogger(__name__)


class PlotSession:
    """Headless stand-in for the plot widget: one dataset, one canvas, one event stream."""

    def __init__(self, config: ViewerConfig | None = None, canvas_size: tuple[int, int] | None = None) -> None:
        self.config = config or ViewerConfig()
        if canvas_size is None:
            canvas_size = (self.config.canvas_width, self.config.canvas_height)
        self._canvas_size = CanvasSize.coerce(canvas_size)
        self.visibility = LayerVisibility()
        self.state = ViewState()
        self.model = ViewportModel(self.state, self.config, canvas_size_provider=lambda: self._canvas_size)
        self.controller = InteractionController(self.model, tolerance_px=self.config.hit_tolerance_px)
        self.renderer = GraphRenderer(self.config)

    @property
    def canvas_size(self) -> CanvasSize:
        return self._canvas_size

    def set_canvas_size(self, width: int, height: int) -> bool:
        size = CanvasSize(int(width), int(height))
        if size == self._canvas_size:
            return False
        self._canvas_size = size
        return True

    def load(self, data: Any) -> DataWindow | None:
        points = normalize_points(data)
        self.controller.reset()
        return self.model.load(points)

    def load_file(self, path: str | Path) -> DataWindow | None:
        points = read_point_file(path)
        self.controller.reset()
        return self.model.load(points)

    def set_show_axis(self, show: bool) -> bool:
        self.visibility.axis = bool(show)
        return True

    def set_show_markers(self, show: bool) -> bool:
        self.visibility.markers = bool(show)
        return True

    def set_show_horizontal_guides(self, show: bool) -> bool:
        self.visibility.horizontal_guides = bool(show)
        return True

    def handle_event(self, event: PointerEvent) -> bool:
        return self.controller.handle_event(event)

    def handle_hdi(self, event_type: str, payload: object) -> bool:
        event = PointerEvent.from_hdi(event_type, payload)
        if event is None:
            LOGGER.debug("ignoring input event %r", event_type)
            return False
        return self.controller.handle_event(event)

    def current_window(self) -> DataWindow | None:
        return self.model.current_window()

    def forward_transform(self, point: Point) -> ScreenPoint | None:
        return self.model.forward_transform(point)

    def current_drag_rect(self) -> ScreenRect | None:
        return self.controller.current_drag_rect()

    def current_highlight(self) -> Point | None:
        return self.controller.current_highlight()

    def render(self) -> np.ndarray | None:
        return self.renderer.render(self.model, self.visibility)

    def save_png(self, path: str | Path) -> Path | None:
        frame = self.render()
        if frame is None:
            LOGGER.warning("canvas %sx%s is not renderable; nothing written", self._canvas_size.width, self._canvas_size.height)
            return None
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        Image.fromarray(frame).save(out)
        return out
