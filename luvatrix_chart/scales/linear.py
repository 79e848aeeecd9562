from __future__ import annotations

import logging
import math
from typing import Any, Sequence

import numpy as np

from luvatrix_chart.config import get_option
from luvatrix_chart.data import Dataset
from luvatrix_chart.scales.base import Scale, ScaleKind
from luvatrix_chart.ticks.base import DataRange, Tick, TickGenerationOptions
from luvatrix_chart.ticks.linear import generate_linear_ticks, widen_degenerate_range

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TICKS = 11
HORIZONTAL_TICK_SPACING_PX = 40.0


def scan_value_limits(
    series: Sequence[tuple[int, Dataset, np.ndarray]],
    *,
    stacked: bool | None = None,
) -> DataRange:
    """Data range over ``(dataset_index, dataset, values)`` triples.

    With stacking (``stacked=True``, or any dataset declaring a ``stack`` when
    ``stacked`` is unset) positive and negative values are summed per index
    within each stack group; otherwise raw finite values are scanned. Returns a
    NaN range when no finite value exists.
    """
    has_stacks = stacked if stacked is not None else any(ds.stack is not None for _, ds, _ in series)
    chunks: list[np.ndarray] = []
    if has_stacks:
        groups: dict[tuple[Any, ...], list[np.ndarray]] = {}
        for idx, ds, values in series:
            key = (ds.type, idx if stacked is None and ds.stack is None else "", ds.stack)
            size = values.shape[0]
            group = groups.setdefault(key, [np.zeros(0), np.zeros(0), np.zeros(0, dtype=bool)])
            if group[0].shape[0] < size:
                grow = size - group[0].shape[0]
                group[0] = np.concatenate((group[0], np.zeros(grow)))
                group[1] = np.concatenate((group[1], np.zeros(grow)))
                group[2] = np.concatenate((group[2], np.zeros(grow, dtype=bool)))
            finite = np.isfinite(values)
            group[0][:size] += np.where(finite & (values >= 0), values, 0.0)
            group[1][:size] += np.where(finite & (values < 0), values, 0.0)
            group[2][:size] |= finite
        for positive, negative, seen in groups.values():
            chunks.append(positive[seen])
            chunks.append(negative[seen])
    else:
        for _, _, values in series:
            chunks.append(values[np.isfinite(values)])

    merged = np.concatenate(chunks) if chunks else np.zeros(0)
    if merged.size == 0:
        return DataRange(math.nan, math.nan)
    positive = merged[merged > 0]
    min_not_zero = float(np.min(positive)) if positive.size else None
    return DataRange(float(np.min(merged)), float(np.max(merged)), min_not_zero)


class LinearScale(Scale):
    kind = ScaleKind.LINEAR

    def compute_data_limits(self) -> DataRange:
        series = [(idx, ds, self.dataset_values(ds)) for idx, ds in self.bound_datasets()]
        raw = scan_value_limits(series, stacked=self.options.get("stacked"))
        if not math.isfinite(raw.min) or not math.isfinite(raw.max):
            LOGGER.debug("scale %r has no finite data; falling back to [0, 1]", self.id)
            raw = DataRange(0.0, 1.0, raw.min_not_zero)
        return self.handle_tick_range_options(raw)

    def handle_tick_range_options(self, raw: DataRange) -> DataRange:
        lo, hi = raw.min, raw.max
        begin_at_zero = bool(self.options.get("begin_at_zero", False))
        if begin_at_zero:
            if lo < 0 and hi < 0:
                hi = 0.0
            elif lo > 0 and hi > 0:
                lo = 0.0

        user_min = finite_or_none(self.options.get("min"))
        user_max = finite_or_none(self.options.get("max"))
        suggested_min = finite_or_none(self.options.get("suggested_min"))
        suggested_max = finite_or_none(self.options.get("suggested_max"))
        set_min = user_min is not None or suggested_min is not None
        set_max = user_max is not None or suggested_max is not None

        if user_min is not None:
            lo = user_min
        elif suggested_min is not None:
            lo = min(lo, suggested_min)
        if user_max is not None:
            hi = user_max
        elif suggested_max is not None:
            hi = max(hi, suggested_max)

        if set_min != set_max and lo >= hi:
            if set_min:
                hi = lo + 1.0
            else:
                lo = hi - 1.0

        if lo == hi:
            value = lo
            lo, hi = widen_degenerate_range(lo, hi)
            if begin_at_zero and value == 0:
                lo = 0.0
        return DataRange(lo, hi, raw.min_not_zero)

    def compute_tick_limit(self) -> int:
        if self.is_horizontal():
            return int(math.ceil(self.max_width / HORIZONTAL_TICK_SPACING_PX))
        return int(math.ceil(self.max_height / self.measurer.line_height(self.tick_font)))

    def get_tick_limit(self) -> int:
        limit_option = get_option(self.options, "ticks.max_ticks_limit")
        cap = int(limit_option) if limit_option else DEFAULT_MAX_TICKS
        step = finite_or_none(get_option(self.options, "ticks.step_size"))
        if step is not None and step > 0:
            max_ticks = int(math.ceil(self.limits.max / step - math.floor(self.limits.min / step))) + 1
        else:
            max_ticks = self.compute_tick_limit()
        max_ticks = min(max_ticks, cap) if max_ticks else cap
        return max(2, max_ticks)

    def tick_generation_options(self) -> TickGenerationOptions:
        precision = get_option(self.options, "ticks.precision")
        return TickGenerationOptions(
            max_ticks=self.get_tick_limit(),
            step_size=finite_or_none(get_option(self.options, "ticks.step_size")),
            precision=None if precision is None else int(precision),
            min=finite_or_none(self.options.get("min")),
            max=finite_or_none(self.options.get("max")),
        )

    def generate_ticks(self) -> list[Tick]:
        values = generate_linear_ticks(self.tick_generation_options(), self.limits)
        self.min = min(values)
        self.max = max(values)
        return [Tick(value=v) for v in values]

    def configure_value_range(self) -> None:
        self._start_value = float(self.min)
        self._value_range = float(self.max) - float(self.min)

    def value_to_decimal(self, value: Any, index: int | None = None) -> float:
        v = finite_or_none(value)
        if v is None or not self._value_range:
            return 0.0
        return (v - self._start_value) / self._value_range

    def decimal_to_value(self, decimal: float) -> float:
        return self._start_value + decimal * self._value_range


def finite_or_none(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None
