from __future__ import annotations

from typing import Any, Sequence

from luvatrix_chart.ticks.base import Tick


def category_label_value(label: Any) -> str | tuple[str, ...]:
    if isinstance(label, (list, tuple)):
        return tuple(str(line) for line in label)
    return "" if label is None else str(label)


def resolve_category_index(labels: Sequence[Any], bound: Any, default: int) -> int:
    if bound is None or not labels:
        return default
    values = [category_label_value(label) for label in labels]
    key = category_label_value(bound) if isinstance(bound, (str, list, tuple)) else None
    if key is not None:
        return values.index(key) if key in values else default
    try:
        idx = int(bound)
    except (TypeError, ValueError):
        return default
    return max(0, min(len(labels) - 1, idx))


def generate_category_ticks(labels: Sequence[Any], min_index: int | None = None, max_index: int | None = None) -> list[Tick]:
    if not labels:
        return []
    lo = 0 if min_index is None else max(0, min(len(labels) - 1, int(min_index)))
    hi = len(labels) - 1 if max_index is None else max(0, min(len(labels) - 1, int(max_index)))
    if lo > hi:
        lo, hi = hi, lo
    return [Tick(value=category_label_value(label)) for label in labels[lo : hi + 1]]
