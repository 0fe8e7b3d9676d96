from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Sequence

import numpy as np

from polyview.config import PaddingRatios, ViewerConfig
from polyview.errors import EmptyDatasetError
from polyview.geometry import CanvasSize, Point, ScreenPoint, ScreenRect
from polyview.state import ViewState

LOGGER = logging.getLogger(__name__)

CanvasSizeLike = CanvasSize | tuple[int, int]


@dataclass(frozen=True)
class DataWindow:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.max_x, self.min_y, self.max_y)


@dataclass(frozen=True)
class ScaleFactors:
    scale_x: float
    scale_y: float


def compute_initial_bounds(
    points: Sequence[Point],
    padding: PaddingRatios = PaddingRatios(),
    *,
    min_span: float = 1.0,
) -> DataWindow:
    if len(points) == 0:
        raise EmptyDatasetError("cannot compute bounds of an empty dataset")
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    return _bounds_from_arrays(xs, ys, padding, min_span=min_span)


def _bounds_from_arrays(xs: np.ndarray, ys: np.ndarray, padding: PaddingRatios, *, min_span: float) -> DataWindow:
    raw_min_x = float(np.min(xs))
    raw_max_x = float(np.max(xs))
    raw_min_y = float(np.min(ys))
    raw_max_y = float(np.max(ys))

    min_x, max_x, min_y, max_y = raw_min_x, raw_max_x, raw_min_y, raw_max_y
    # Every margin derives from the x extent, y included.
    if max_x != 0.0:
        max_x += max_x * padding.right
        min_x -= max_x * padding.left
        max_y += max_x * padding.top
        min_y -= max_x * padding.bottom

    if not max_x > min_x:
        LOGGER.debug("degenerate x extent [%r, %r]; substituting span", min_x, max_x)
        min_x, max_x = _fallback_span(raw_min_x, raw_max_x, min_span)
    if not max_y > min_y:
        LOGGER.debug("degenerate y extent [%r, %r]; substituting span", min_y, max_y)
        min_y, max_y = _fallback_span(raw_min_y, raw_max_y, min_span)
    return DataWindow(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def _fallback_span(raw_min: float, raw_max: float, min_span: float) -> tuple[float, float]:
    if raw_max > raw_min:
        return (raw_min, raw_max)
    half = min_span * 0.5
    return (raw_min - half, raw_min + half)


def build_scale(window: DataWindow, canvas_size: CanvasSize) -> ScaleFactors | None:
    if not canvas_size.is_renderable:
        return None
    return ScaleFactors(
        scale_x=canvas_size.width / window.width,
        scale_y=canvas_size.height / window.height,
    )


def _is_usable_window(window: DataWindow, canvas_size: CanvasSize) -> bool:
    # Scale must stay positive and finite at this resolution.
    if not (window.width > 0 and window.height > 0):
        return False
    scale = build_scale(window, canvas_size)
    return scale is None or (math.isfinite(scale.scale_x) and math.isfinite(scale.scale_y))


class ViewportModel:
    """Owns the data window and the data-space to screen-space mapping."""

    def __init__(
        self,
        state: ViewState | None = None,
        config: ViewerConfig | None = None,
        canvas_size_provider: Callable[[], CanvasSizeLike] | None = None,
    ) -> None:
        self._state = state if state is not None else ViewState()
        self._config = config or ViewerConfig()
        default_size = CanvasSize(self._config.canvas_width, self._config.canvas_height)
        self._canvas_size_provider = canvas_size_provider or (lambda: default_size)

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def points(self) -> tuple[Point, ...]:
        return self._state.points

    def current_window(self) -> DataWindow | None:
        return self._state.window

    def canvas_size(self, canvas_size: CanvasSizeLike | None = None) -> CanvasSize:
        if canvas_size is not None:
            return CanvasSize.coerce(canvas_size)
        return CanvasSize.coerce(self._canvas_size_provider())

    def load(self, points: Sequence[Point]) -> DataWindow | None:
        dataset = tuple(points)
        self._state.points = dataset
        self._state.xs = np.fromiter((p.x for p in dataset), dtype=np.float64, count=len(dataset))
        self._state.ys = np.fromiter((p.y for p in dataset), dtype=np.float64, count=len(dataset))
        if not dataset:
            self._state.window = None
            LOGGER.info("loaded empty dataset; display cleared")
            return None
        self._state.window = self._initial_window()
        LOGGER.info("loaded %d points; window=%s", len(dataset), self._state.window.as_tuple())
        return self._state.window

    def reset_to_initial(self) -> DataWindow:
        window = self._initial_window()
        self._state.window = window
        LOGGER.debug("window reset to %s", window.as_tuple())
        return window

    def zoom_to_screen_rect(self, rect: ScreenRect, canvas_size: CanvasSizeLike | None = None) -> DataWindow:
        window = self._require_window()
        if not rect.has_area:
            return window
        size = self.canvas_size(canvas_size)
        scale = build_scale(window, size)
        if scale is None:
            return window
        zoomed = DataWindow(
            min_x=window.min_x + rect.x / scale.scale_x,
            max_x=window.min_x + (rect.x + rect.width) / scale.scale_x,
            min_y=window.max_y - (rect.y + rect.height) / scale.scale_y,
            max_y=window.max_y - rect.y / scale.scale_y,
        )
        if not _is_usable_window(zoomed, size):
            LOGGER.debug("zoom rect %s below float resolution; window kept", rect.as_tuple())
            return window
        self._state.window = zoomed
        LOGGER.debug("zoomed to %s via rect %s", zoomed.as_tuple(), rect.as_tuple())
        return zoomed

    def scale_factors(self, canvas_size: CanvasSizeLike | None = None) -> ScaleFactors | None:
        return build_scale(self._require_window(), self.canvas_size(canvas_size))

    def forward_transform(self, point: Point, canvas_size: CanvasSizeLike | None = None) -> ScreenPoint | None:
        window = self._require_window()
        scale = build_scale(window, self.canvas_size(canvas_size))
        if scale is None:
            return None
        return ScreenPoint(
            x=(point.x - window.min_x) * scale.scale_x,
            y=(window.max_y - point.y) * scale.scale_y,
        )

    def inverse_transform(self, screen_point: ScreenPoint, canvas_size: CanvasSizeLike | None = None) -> Point | None:
        window = self._require_window()
        scale = build_scale(window, self.canvas_size(canvas_size))
        if scale is None:
            return None
        return Point(
            x=window.min_x + screen_point.x / scale.scale_x,
            y=window.max_y - screen_point.y / scale.scale_y,
        )

    def project(self, canvas_size: CanvasSizeLike | None = None) -> tuple[np.ndarray, np.ndarray] | None:
        window = self._require_window()
        scale = build_scale(window, self.canvas_size(canvas_size))
        if scale is None:
            return None
        px = (self._state.xs - window.min_x) * scale.scale_x
        py = (window.max_y - self._state.ys) * scale.scale_y
        return px, py

    def _initial_window(self) -> DataWindow:
        if not self._state.has_data:
            raise EmptyDatasetError("no dataset loaded")
        return _bounds_from_arrays(
            self._state.xs,
            self._state.ys,
            self._config.padding,
            min_span=self._config.min_span,
        )

    def _require_window(self) -> DataWindow:
        window = self._state.window
        if window is None:
            raise EmptyDatasetError("no dataset loaded")
        return window
