from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from polyview.adapters.normalize import normalize_points, points_to_array
from polyview.errors import PointFileError
from polyview.geometry import Point

LOGGER = logging.getLogger(__name__)

# Sequential big-endian IEEE doubles: x0, y0, x1, y1, ...
POINT_DTYPE = np.dtype(">f8")
PAIR_BYTES = 2 * POINT_DTYPE.itemsize


def read_point_file(path: str | Path) -> tuple[Point, ...]:
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"point file not found: {file_path}")
    raw = file_path.read_bytes()
    return decode_points(raw, source=str(file_path))


def decode_points(raw: bytes, *, source: str = "<bytes>") -> tuple[Point, ...]:
    count = len(raw) // PAIR_BYTES
    if count == 0:
        raise PointFileError(f"{source}: file is empty or contains no complete point pairs")
    trailing = len(raw) - count * PAIR_BYTES
    if trailing:
        LOGGER.warning("%s: ignoring %d trailing bytes after %d point pairs", source, trailing, count)
    values = np.frombuffer(raw, dtype=POINT_DTYPE, count=count * 2).astype(np.float64)
    try:
        points = normalize_points(values.reshape(count, 2))
    except ValueError as exc:
        raise PointFileError(f"{source}: error reading point coordinates: {exc}") from exc
    LOGGER.info("%s: read %d points", source, len(points))
    return points


def encode_points(points: Sequence[Point]) -> bytes:
    return points_to_array(points).astype(POINT_DTYPE).tobytes()


def write_point_file(path: str | Path, points: Sequence[Point]) -> Path:
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_bytes(encode_points(points))
    return file_path
