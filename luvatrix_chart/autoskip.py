"""Tick label auto-skip.

Skipped ticks keep their position (grid lines still need them) and only lose
their label. The first and last tick always keep theirs.
"""

from __future__ import annotations

from dataclasses import replace
import math
from typing import Sequence

from luvatrix_chart.ticks.base import Tick


def auto_skip(
    ticks: Sequence[Tick],
    axis_length: float,
    tick_size: float,
    *,
    major_enabled: bool = False,
    max_ticks_limit: float | None = None,
) -> list[Tick]:
    n = len(ticks)
    if n < 2:
        return list(ticks)
    if max_ticks_limit:
        ticks_limit = float(max_ticks_limit)
    else:
        if axis_length <= 0 or tick_size <= 0 or not math.isfinite(tick_size):
            return list(ticks)
        ticks_limit = axis_length / tick_size
    if ticks_limit <= 0:
        ticks_limit = 1.0

    hidden = [False] * n
    major_indices = [i for i, t in enumerate(ticks) if t.major] if major_enabled else []
    num_majors = len(major_indices)

    if num_majors > ticks_limit:
        spacing = float(math.ceil(num_majors / ticks_limit))
        _skip_majors(hidden, major_indices, int(spacing))
    else:
        spacing = calculate_spacing(major_indices, n, ticks_limit)
        if num_majors > 0:
            first = major_indices[0]
            last = major_indices[-1]
            for a, b in zip(major_indices, major_indices[1:]):
                _skip(hidden, spacing, a, b)
            avg_major_spacing = (last - first) / (num_majors - 1) if num_majors > 1 else None
            _skip(hidden, spacing, 0 if avg_major_spacing is None else first - avg_major_spacing, first)
            _skip(hidden, spacing, last, n if avg_major_spacing is None else last + avg_major_spacing)
        else:
            _skip(hidden, spacing)

    min_gap = max(1.0, math.ceil(spacing)) / 2.0
    _restore(hidden, 0, step=1, min_gap=min_gap)
    _restore(hidden, n - 1, step=-1, min_gap=min_gap)
    return [t if not hidden[i] else replace(t, label=None) for i, t in enumerate(ticks)]


def calculate_spacing(major_indices: Sequence[int], num_ticks: int, ticks_limit: float) -> float:
    spacing = (num_ticks - 1) / ticks_limit
    even = even_spacing(major_indices)
    if not even:
        return max(spacing, 1.0)
    factors = factorize(even)
    for factor in factors[:-1]:
        if factor > spacing:
            return float(factor)
    return max(spacing, 1.0)


def even_spacing(indices: Sequence[int]) -> int | None:
    if len(indices) < 2:
        return None
    diff = indices[1] - indices[0]
    for a, b in zip(indices, indices[1:]):
        if b - a != diff:
            return None
    return diff


def factorize(value: int) -> list[int]:
    """Sorted divisors of ``value`` without ``value`` itself."""
    result: list[int] = []
    root = math.isqrt(value)
    for i in range(1, root + 1):
        if value % i == 0:
            result.append(i)
            if i != value // i:
                result.append(value // i)
    result.sort()
    return result[:-1]


def tick_footprint(widest: float, highest: float, rotation_deg: float, *, horizontal: bool, padding: float = 0.0) -> float:
    """Length one label occupies along the axis at ``rotation_deg``."""
    rot = math.radians(rotation_deg)
    cos = abs(math.cos(rot))
    sin = abs(math.sin(rot))
    w = widest + padding
    h = highest + padding
    if horizontal:
        return w / cos if h * cos > w * sin else h / sin
    return h / cos if h * sin < w * cos else w / sin


def _skip_majors(hidden: list[bool], major_indices: Sequence[int], spacing: int) -> None:
    keep = set(major_indices[:: max(1, spacing)])
    for i in range(len(hidden)):
        if i not in keep:
            hidden[i] = True


def _skip(hidden: list[bool], spacing: float, major_start: float | None = None, major_end: float | None = None) -> None:
    start = 0.0 if major_start is None else float(major_start)
    end = min(len(hidden), len(hidden) if major_end is None else int(math.ceil(major_end)))
    spacing = float(math.ceil(spacing))
    if major_end is not None:
        length = float(major_end) - start
        segments = math.floor(length / spacing)
        spacing = length / segments if segments > 0 else math.inf

    count = 0
    next_index: float = start
    while next_index < 0:
        count += 1
        if math.isinf(spacing):
            return
        next_index = _round(start + count * spacing)

    for i in range(max(int(math.ceil(start)), 0), end):
        if i == next_index:
            count += 1
            next_index = math.inf if math.isinf(spacing) else _round(start + count * spacing)
        else:
            hidden[i] = True


def _restore(hidden: list[bool], idx: int, *, step: int, min_gap: float) -> None:
    if not hidden[idx]:
        return
    hidden[idx] = False
    n = len(hidden)
    j = idx + step
    while 0 < j < n - 1:
        if not hidden[j]:
            if abs(j - idx) < min_gap:
                hidden[j] = True
            return
        j += step


def _round(value: float) -> float:
    return float(math.floor(value + 0.5))
