from polyview.config import PaddingRatios, ViewerConfig
from polyview.errors import ConfigError, EmptyDatasetError, MalformedDatasetError, PointFileError, ViewerError
from polyview.geometry import CanvasSize, Point, ScreenPoint, ScreenRect
from polyview.interaction import InteractionController, PointerEvent, hit_test
from polyview.loader import read_point_file, write_point_file
from polyview.render import GraphRenderer
from polyview.session import PlotSession
from polyview.state import Dragging, Idle, LayerVisibility, ViewState
from polyview.viewport import DataWindow, ScaleFactors, ViewportModel, compute_initial_bounds

__all__ = [
    "CanvasSize",
    "ConfigError",
    "DataWindow",
    "Dragging",
    "EmptyDatasetError",
    "GraphRenderer",
    "Idle",
    "InteractionController",
    "LayerVisibility",
    "MalformedDatasetError",
    "PaddingRatios",
    "PlotSession",
    "Point",
    "PointFileError",
    "PointerEvent",
    "ScaleFactors",
    "ScreenPoint",
    "ScreenRect",
    "ViewState",
    "ViewerConfig",
    "ViewerError",
    "ViewportModel",
    "compute_initial_bounds",
    "hit_test",
    "read_point_file",
    "write_point_file",
]
