from __future__ import annotations

from dataclasses import dataclass, fields, replace
import math
import os
from pathlib import Path
import tomllib
from typing import Any, Mapping

from polyview.errors import ConfigError


RGBA = tuple[int, int, int, int]

ENV_WIDTH = "POLYVIEW_WIDTH"
ENV_HEIGHT = "POLYVIEW_HEIGHT"
ENV_HIT_TOLERANCE = "POLYVIEW_HIT_TOLERANCE_PX"


@dataclass(frozen=True)
class PaddingRatios:
    right: float = 0.25
    left: float = 0.25
    top: float = 0.20
    bottom: float = 0.10


@dataclass(frozen=True)
class ViewerConfig:
    canvas_width: int = 800
    canvas_height: int = 600
    padding: PaddingRatios = PaddingRatios()
    min_span: float = 1.0
    hit_tolerance_px: float = 5.0
    marker_radius: int = 5
    label_offset_px: tuple[int, int] = (5, -5)
    label_font_px: float = 12.0
    background: RGBA = (255, 255, 255, 255)
    line_color: RGBA = (0, 0, 0, 255)
    guide_color: RGBA = (255, 0, 0, 255)
    marker_high_color: RGBA = (0, 0, 255, 255)
    marker_low_color: RGBA = (255, 0, 0, 255)

    def __post_init__(self) -> None:
        if self.canvas_width < 0 or self.canvas_height < 0:
            raise ConfigError("canvas width/height must be >= 0")
        if not (math.isfinite(self.min_span) and self.min_span > 0):
            raise ConfigError("min_span must be a finite number > 0")
        if not (math.isfinite(self.hit_tolerance_px) and self.hit_tolerance_px > 0):
            raise ConfigError("hit_tolerance_px must be a finite number > 0")
        if self.marker_radius < 0:
            raise ConfigError("marker_radius must be >= 0")

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ViewerConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"unknown viewer settings: {', '.join(unknown)}")
        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            if key == "padding":
                kwargs[key] = _coerce_padding(value)
            elif key in {"canvas_width", "canvas_height", "marker_radius"}:
                kwargs[key] = _coerce_int(value, key)
            elif key in {"min_span", "hit_tolerance_px", "label_font_px"}:
                kwargs[key] = _coerce_float(value, key)
            elif key == "label_offset_px":
                kwargs[key] = _coerce_pair(value, key)
            else:
                kwargs[key] = _coerce_rgba(value, key)
        return cls(**kwargs)

    @classmethod
    def from_toml(cls, path: str | Path) -> "ViewerConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"viewer config not found: {config_path}")
        with config_path.open("rb") as f:
            try:
                raw = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"invalid TOML in {config_path}: {exc}") from exc
        section = raw.get("viewer", {})
        if not isinstance(section, dict):
            raise ConfigError("`viewer` must be a table")
        return cls.from_mapping(section)

    def with_env_overrides(self, environ: Mapping[str, str] | None = None) -> "ViewerConfig":
        env = os.environ if environ is None else environ
        changes: dict[str, Any] = {}
        width = env.get(ENV_WIDTH, "").strip()
        if width:
            changes["canvas_width"] = _coerce_int(width, ENV_WIDTH)
        height = env.get(ENV_HEIGHT, "").strip()
        if height:
            changes["canvas_height"] = _coerce_int(height, ENV_HEIGHT)
        tolerance = env.get(ENV_HIT_TOLERANCE, "").strip()
        if tolerance:
            changes["hit_tolerance_px"] = _coerce_float(tolerance, ENV_HIT_TOLERANCE)
        if not changes:
            return self
        return replace(self, **changes)


def _coerce_padding(value: Any) -> PaddingRatios:
    if not isinstance(value, Mapping):
        raise ConfigError("`padding` must be a table")
    known = {f.name for f in fields(PaddingRatios)}
    unknown = sorted(set(value) - known)
    if unknown:
        raise ConfigError(f"unknown padding keys: {', '.join(unknown)}")
    return PaddingRatios(**{k: _coerce_float(v, f"padding.{k}") for k, v in value.items()})


def _coerce_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"`{name}` must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"`{name}` must be an integer") from exc


def _coerce_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"`{name}` must be a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"`{name}` must be a number") from exc


def _coerce_pair(value: Any, name: str) -> tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"`{name}` must be a list of 2 integers")
    return (_coerce_int(value[0], name), _coerce_int(value[1], name))


def _coerce_rgba(value: Any, name: str) -> RGBA:
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise ConfigError(f"`{name}` must be a list of 3 or 4 integers")
    channels = [_coerce_int(v, name) for v in value]
    if any(c < 0 or c > 255 for c in channels):
        raise ConfigError(f"`{name}` channels must be in 0..255")
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])
