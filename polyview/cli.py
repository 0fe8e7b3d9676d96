from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Sequence

from polyview.config import ViewerConfig
from polyview.errors import ViewerError
from polyview.interaction import PointerEvent
from polyview.session import PlotSession

LOGGER = logging.getLogger("polyview")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="polyview")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with a [viewer] table.")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a point file to PNG, optionally replaying pointer events.")
    render.add_argument("point_file", type=Path)
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--width", type=int, default=None, help="Canvas width. Default: config/env, else 800.")
    render.add_argument("--height", type=int, default=None, help="Canvas height. Default: config/env, else 600.")
    render.add_argument(
        "--events",
        type=Path,
        default=None,
        help='JSON list of {"kind": "press|move|release", "x": int, "y": int, "button": "primary|secondary"}.',
    )
    render.add_argument("--hide-axis", action="store_true")
    render.add_argument("--hide-markers", action="store_true")
    render.add_argument("--hide-guides", action="store_true")

    info = sub.add_parser("info", help="Print point count and initial window of a point file.")
    info.add_argument("point_file", type=Path)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        config = _load_config(args.config)
        if args.command == "render":
            return _run_render(args, config)
        if args.command == "info":
            return _run_info(args, config)
    except FileNotFoundError as exc:
        LOGGER.error("file not found: %s", exc)
        return 1
    except ViewerError as exc:
        LOGGER.error("error loading data: %s", exc)
        return 1
    raise RuntimeError(f"unsupported command: {args.command}")


def load_events(path: Path) -> list[PointerEvent]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ViewerError(f"invalid events JSON in {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise ViewerError("events file must contain a JSON list")
    events: list[PointerEvent] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ViewerError(f"event {i} must be an object")
        kind = item.get("kind")
        if kind not in ("press", "move", "release"):
            raise ViewerError(f"event {i} has unsupported kind: {kind!r}")
        button = item.get("button", "primary" if kind != "move" else None)
        if button not in ("primary", "secondary", None):
            raise ViewerError(f"event {i} has unsupported button: {button!r}")
        try:
            position = (int(item["x"]), int(item["y"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ViewerError(f"event {i} needs integer x and y") from exc
        events.append(PointerEvent(kind=kind, position=position, button=button))
    return events


def _load_config(path: Path | None) -> ViewerConfig:
    config = ViewerConfig.from_toml(path) if path is not None else ViewerConfig()
    return config.with_env_overrides()


def _run_render(args: argparse.Namespace, config: ViewerConfig) -> int:
    width = args.width if args.width is not None else config.canvas_width
    height = args.height if args.height is not None else config.canvas_height
    if width <= 0 or height <= 0:
        raise ViewerError("width and height must be > 0")
    session = PlotSession(config, canvas_size=(width, height))
    session.load_file(args.point_file)
    session.set_show_axis(not args.hide_axis)
    session.set_show_markers(not args.hide_markers)
    session.set_show_horizontal_guides(not args.hide_guides)
    if args.events is not None:
        redraws = sum(1 for event in load_events(args.events) if session.handle_event(event))
        LOGGER.info("replayed events; %d requested a redraw", redraws)
    out = session.save_png(args.out)
    window = session.current_window()
    print(f"wrote {out} window={window.as_tuple() if window is not None else None}")
    return 0


def _run_info(args: argparse.Namespace, config: ViewerConfig) -> int:
    session = PlotSession(config)
    window = session.load_file(args.point_file)
    scale = session.model.scale_factors() if window is not None else None
    summary = {
        "points": len(session.state.points),
        "window": None if window is None else dict(zip(("min_x", "max_x", "min_y", "max_y"), window.as_tuple())),
        "canvas": [session.canvas_size.width, session.canvas_size.height],
        "scale": None if scale is None else [scale.scale_x, scale.scale_y],
    }
    print(json.dumps(summary, indent=2, sort_keys=True))
    return 0
