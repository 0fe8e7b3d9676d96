from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

import numpy as np

from polyview.geometry import Point, ScreenRect

if TYPE_CHECKING:
    from polyview.viewport import DataWindow


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    start: tuple[int, int]
    rect: ScreenRect | None = None


DragState = Union[Idle, Dragging]

IDLE = Idle()


@dataclass
class LayerVisibility:
    axis: bool = True
    markers: bool = True
    horizontal_guides: bool = True


@dataclass
class ViewState:
    """Mutable view shared by the viewport model and the interaction controller.

    The model writes ``points``/``xs``/``ys``/``window``; the controller writes
    ``drag`` and ``highlight``.
    """

    points: tuple[Point, ...] = ()
    xs: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))
    ys: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))
    window: "DataWindow | None" = None
    drag: DragState = IDLE
    highlight: Point | None = None

    @property
    def has_data(self) -> bool:
        return len(self.points) > 0
