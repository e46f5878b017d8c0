from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from tikz_export.errors import SceneGeometryError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def as_vector(value: Any, *, label: str) -> np.ndarray:
    arr = coerce_numeric(value, label=label)
    if arr.ndim != 1:
        raise SceneGeometryError(f"{label} must be 1-D")
    return arr


def as_positions(value: Any, *, rows: tuple[int, ...], label: str) -> np.ndarray:
    """Return coordinate rows (one row per axis, one column per vertex).

    DataFrames are read column-wise, so a frame with columns ``x, y`` yields
    two rows.
    """
    if pd is not None and isinstance(value, pd.DataFrame):
        arr = _coerce_ndarray(value.to_numpy().T, label=label)
    else:
        arr = coerce_numeric(value, label=label)
    if arr.ndim != 2 or arr.shape[0] not in rows:
        expected = " or ".join(str(r) for r in rows)
        raise SceneGeometryError(f"{label} must have shape ({expected}, n), got {arr.shape}")
    return arr


def as_grid(value: Any, *, label: str) -> np.ndarray:
    arr = coerce_numeric(value, label=label)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise SceneGeometryError(f"{label} must have shape (rows, cols, 3), got {arr.shape}")
    return arr


def coerce_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, (pd.Series, pd.DataFrame)):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise SceneGeometryError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    flat = arr.reshape(-1)
    out = np.empty(flat.shape[0], dtype=np.float64)
    for i, raw in enumerate(flat.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise SceneGeometryError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out.reshape(arr.shape)
