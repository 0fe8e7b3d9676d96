from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal

import numpy as np

from polyview.geometry import Point, ScreenRect
from polyview.state import IDLE, Dragging, ViewState
from polyview.viewport import CanvasSizeLike, ViewportModel

LOGGER = logging.getLogger(__name__)

PointerKind = Literal["press", "move", "release"]
PointerButton = Literal["primary", "secondary"]

_HDI_BUTTONS: dict[int, PointerButton] = {0: "primary", 1: "secondary"}
_HDI_PHASES: dict[str, PointerKind] = {"down": "press", "up": "release"}


@dataclass(frozen=True)
class PointerEvent:
    kind: PointerKind
    position: tuple[int, int]
    button: PointerButton | None = None

    @classmethod
    def press(cls, x: int, y: int, button: PointerButton = "primary") -> "PointerEvent":
        return cls(kind="press", position=(int(x), int(y)), button=button)

    @classmethod
    def move(cls, x: int, y: int) -> "PointerEvent":
        return cls(kind="move", position=(int(x), int(y)))

    @classmethod
    def release(cls, x: int, y: int, button: PointerButton = "primary") -> "PointerEvent":
        return cls(kind="release", position=(int(x), int(y)), button=button)

    @classmethod
    def from_hdi(cls, event_type: str, payload: object) -> "PointerEvent | None":
        """Translate a ``click``/``pointer_move`` input payload; other events map to ``None``."""
        if not isinstance(payload, dict):
            return None
        try:
            position = (int(round(float(payload["x"]))), int(round(float(payload["y"]))))
        except (KeyError, TypeError, ValueError):
            return None
        if event_type == "pointer_move":
            return cls(kind="move", position=position)
        if event_type != "click":
            return None
        try:
            button = _HDI_BUTTONS.get(int(payload.get("button", -1)))
        except (TypeError, ValueError):
            return None
        kind = _HDI_PHASES.get(str(payload.get("phase", "")))
        if button is None or kind is None:
            return None
        return cls(kind=kind, position=position, button=button)


def hit_test(
    pointer: tuple[float, float],
    model: ViewportModel,
    canvas_size: CanvasSizeLike | None = None,
    *,
    tolerance_px: float = 5.0,
) -> Point | None:
    if not model.state.has_data or model.current_window() is None:
        return None
    projected = model.project(canvas_size)
    if projected is None:
        return None
    px, py = projected
    hits = np.flatnonzero((np.abs(px - pointer[0]) < tolerance_px) & (np.abs(py - pointer[1]) < tolerance_px))
    if hits.size == 0:
        return None
    # Sequential-scan semantics: lowest index wins, not the closest.
    return model.points[int(hits[0])]


class InteractionController:
    """Turns pointer events into zoom/reset calls and hover highlights."""

    def __init__(self, model: ViewportModel, *, tolerance_px: float = 5.0) -> None:
        if not tolerance_px > 0:
            raise ValueError("tolerance_px must be > 0")
        self._model = model
        self._state: ViewState = model.state
        self._tolerance_px = float(tolerance_px)

    def current_drag_rect(self) -> ScreenRect | None:
        drag = self._state.drag
        if isinstance(drag, Dragging):
            return drag.rect
        return None

    def current_highlight(self) -> Point | None:
        return self._state.highlight

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._state.drag, Dragging)

    def reset(self) -> None:
        self._state.drag = IDLE
        self._state.highlight = None

    def update_highlight(self, pointer: tuple[float, float], canvas_size: CanvasSizeLike | None = None) -> Point | None:
        hit = hit_test(pointer, self._model, canvas_size, tolerance_px=self._tolerance_px)
        self._state.highlight = hit
        return hit

    def handle_event(self, event: PointerEvent, canvas_size: CanvasSizeLike | None = None) -> bool:
        """Apply one pointer event; returns True when the view needs a re-render."""
        if event.kind == "press":
            return self._on_press(event)
        if event.kind == "move":
            return self._on_move(event, canvas_size)
        if event.kind == "release":
            return self._on_release(canvas_size)
        LOGGER.warning("ignoring pointer event of unknown kind: %r", event.kind)
        return False

    def _on_press(self, event: PointerEvent) -> bool:
        if event.button == "secondary":
            if not self._state.has_data:
                return False
            self._model.reset_to_initial()
            return True
        if event.button == "primary":
            self._state.drag = Dragging(start=event.position)
        return False

    def _on_move(self, event: PointerEvent, canvas_size: CanvasSizeLike | None) -> bool:
        drag = self._state.drag
        if isinstance(drag, Dragging):
            self._state.drag = Dragging(start=drag.start, rect=ScreenRect.from_corners(drag.start, event.position))
            return True
        previous = self._state.highlight
        current = self.update_highlight(event.position, canvas_size)
        if current != previous:
            LOGGER.debug("highlight changed: %r -> %r", previous, current)
            return True
        return False

    def _on_release(self, canvas_size: CanvasSizeLike | None) -> bool:
        changed = self._state.highlight is not None
        self._state.highlight = None
        drag = self._state.drag
        if not isinstance(drag, Dragging):
            return changed
        self._state.drag = IDLE
        if drag.rect is not None and drag.rect.has_area and self._state.window is not None:
            self._model.zoom_to_screen_rect(drag.rect, canvas_size)
        return True
