from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
import logging
from typing import Any

import numpy as np

from luvatrix_chart.config import freeze


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

LOGGER = logging.getLogger(__name__)

_RESERVED_KEYS = frozenset({"label", "data", "hidden", "stack", "x_axis_id", "y_axis_id", "type"})


@dataclass(frozen=True)
class Dataset:
    """One normalised data series.

    ``y`` always holds float64 values with NaN for missing points. ``x`` is only
    set for point data (``{"x": .., "y": ..}`` mappings or pairs); index-based
    series leave it ``None`` and are placed by category.
    """

    y: np.ndarray
    x: np.ndarray | None = None
    label: str = ""
    hidden: bool = False
    stack: str | None = None
    x_axis_id: str | None = None
    y_axis_id: str | None = None
    type: str | None = None
    options: Mapping[str, Any] = field(default_factory=lambda: freeze({}))

    def __len__(self) -> int:
        return int(self.y.shape[0])

    @property
    def finite_mask(self) -> np.ndarray:
        mask = np.isfinite(self.y)
        if self.x is not None:
            mask &= np.isfinite(self.x)
        return mask


@dataclass(frozen=True)
class ChartData:
    labels: tuple[Any, ...] = ()
    datasets: tuple[Dataset, ...] = ()

    def visible(self) -> list[tuple[int, Dataset]]:
        return [(i, ds) for i, ds in enumerate(self.datasets) if not ds.hidden]


def normalize_chart_data(data: Mapping[str, Any] | None) -> ChartData:
    if not data:
        return ChartData()
    labels = data.get("labels") or ()
    if pd is not None and isinstance(labels, pd.Index):
        labels = labels.tolist()
    raw_sets = data.get("datasets") or ()
    datasets = tuple(normalize_dataset(raw, index=i) for i, raw in enumerate(raw_sets))
    return ChartData(labels=tuple(_freeze_label(label) for label in labels), datasets=datasets)


def normalize_dataset(raw: Mapping[str, Any] | Dataset, *, index: int = 0) -> Dataset:
    if isinstance(raw, Dataset):
        return raw
    if not isinstance(raw, Mapping):
        raise TypeError(f"dataset must be a mapping, got {type(raw)!r}")
    x, y = coerce_points(raw.get("data"))
    options = {k: v for k, v in raw.items() if k not in _RESERVED_KEYS}
    stack = raw.get("stack")
    return Dataset(
        y=y,
        x=x,
        label=str(raw.get("label", f"Dataset {index + 1}")),
        hidden=bool(raw.get("hidden", False)),
        stack=None if stack is None else str(stack),
        x_axis_id=raw.get("x_axis_id"),
        y_axis_id=raw.get("y_axis_id"),
        type=raw.get("type"),
        options=freeze(options),
    )


def coerce_points(value: Any) -> tuple[np.ndarray | None, np.ndarray]:
    """Split raw dataset values into ``(x, y)`` float arrays.

    Unparseable entries become NaN; data problems never raise.
    """
    if value is None:
        return None, np.empty(0, dtype=np.float64)

    if pd is not None and isinstance(value, pd.DataFrame):
        if "x" in value.columns and "y" in value.columns:
            return _coerce_1d_numeric(value["x"]), _coerce_1d_numeric(value["y"])
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if not numeric_cols:
            return None, np.full(len(value), np.nan, dtype=np.float64)
        return None, _coerce_1d_numeric(value[numeric_cols[0]])

    if isinstance(value, np.ndarray) and value.ndim == 2 and value.shape[1] == 2:
        arr = _coerce_ndarray(value.reshape(-1)).reshape(-1, 2)
        return arr[:, 0].copy(), arr[:, 1].copy()

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)) and value:
        first = next((v for v in value if v is not None), None)
        if isinstance(first, Mapping):
            xs = [item.get("x") if isinstance(item, Mapping) else None for item in value]
            ys = [item.get("y") if isinstance(item, Mapping) else None for item in value]
            return _coerce_1d_numeric(xs), _coerce_1d_numeric(ys)
        if isinstance(first, (list, tuple)) and len(first) == 2:
            xs = [item[0] if isinstance(item, (list, tuple)) and len(item) == 2 else None for item in value]
            ys = [item[1] if isinstance(item, (list, tuple)) and len(item) == 2 else None for item in value]
            return _coerce_1d_numeric(xs), _coerce_1d_numeric(ys)

    return None, _coerce_1d_numeric(value)


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except Exception:
        return False


def _coerce_1d_numeric(value: Any) -> np.ndarray:
    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy())

    if isinstance(value, np.ndarray):
        return _coerce_ndarray(value.reshape(-1))

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object))

    LOGGER.debug("unsupported dataset input type %r; treating as empty", type(value))
    return np.empty(0, dtype=np.float64)


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None or isinstance(raw, bool):
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError):
            out[i] = np.nan
    return out


def _freeze_label(label: Any) -> Any:
    if isinstance(label, list):
        return tuple(label)
    return label
