from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from polyview.errors import MalformedDatasetError
from polyview.geometry import Point


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_points(data: Any) -> tuple[Point, ...]:
    """Coerce pairs, ``(n, 2)`` arrays, two-column frames or tensors into points.

    Zero rows is valid and yields an empty tuple; non-finite values are rejected.
    """
    arr = _coerce_xy_array(data)
    if arr.shape[0] == 0:
        return ()
    finite = np.isfinite(arr).all(axis=1)
    if not np.all(finite):
        bad = int(np.flatnonzero(~finite)[0])
        raise MalformedDatasetError(f"point at index {bad} is not finite: {tuple(arr[bad].tolist())!r}")
    return tuple(Point(x=float(x), y=float(y)) for x, y in arr.tolist())


def points_to_array(points: Sequence[Point]) -> np.ndarray:
    out = np.empty((len(points), 2), dtype=np.float64)
    for i, p in enumerate(points):
        out[i, 0] = p.x
        out[i, 1] = p.y
    return out


def _coerce_xy_array(value: Any) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return _check_shape(tensor.to(torch.float64).numpy())

    if pd is not None and isinstance(value, pd.DataFrame):
        if value.shape[1] != 2:
            raise MalformedDatasetError(f"DataFrame input must have exactly 2 columns, got {value.shape[1]}")
        return _check_shape(_coerce_ndarray(value.to_numpy()))

    if isinstance(value, np.ndarray):
        return _check_shape(_coerce_ndarray(value))

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        rows: list[tuple[Any, Any]] = []
        for i, item in enumerate(value):
            if isinstance(item, Point):
                rows.append((item.x, item.y))
                continue
            if not isinstance(item, (Sequence, np.ndarray)) or isinstance(item, (str, bytes, bytearray)) or len(item) != 2:
                raise MalformedDatasetError(f"point at index {i} is not an (x, y) pair: {item!r}")
            rows.append((item[0], item[1]))
        if not rows:
            return np.empty((0, 2), dtype=np.float64)
        return _coerce_ndarray(np.asarray(rows, dtype=object))

    raise MalformedDatasetError(f"unsupported point input type: {type(value)!r}")


def _check_shape(arr: np.ndarray) -> np.ndarray:
    if arr.ndim == 1 and arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise MalformedDatasetError(f"point array must have shape (n, 2), got {arr.shape}")
    return arr


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape, dtype=np.float64)
    flat_out = out.reshape(-1)
    for i, raw in enumerate(arr.reshape(-1).tolist()):
        if isinstance(raw, Decimal):
            flat_out[i] = float(raw)
            continue
        if raw is None or isinstance(raw, (str, bytes)):
            raise MalformedDatasetError(f"non-numeric coordinate at flat index {i}: {raw!r}")
        try:
            flat_out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise MalformedDatasetError(f"non-numeric coordinate at flat index {i}: {raw!r}") from exc
    return out
