from __future__ import annotations

import logging
import math
from typing import Any

from luvatrix_chart.config import get_option
from luvatrix_chart.scales.base import Scale, ScaleKind
from luvatrix_chart.scales.linear import DEFAULT_MAX_TICKS, finite_or_none, scan_value_limits
from luvatrix_chart.ticks.base import DataRange, Tick, TickGenerationOptions
from luvatrix_chart.ticks.logarithmic import generate_logarithmic_ticks, log_range

LOGGER = logging.getLogger(__name__)


class LogarithmicScale(Scale):
    """Log10 axis over the strictly positive domain."""

    kind = ScaleKind.LOGARITHMIC

    def compute_data_limits(self) -> DataRange:
        series = [(idx, ds, self.dataset_values(ds)) for idx, ds in self.bound_datasets()]
        raw = scan_value_limits(series, stacked=self.options.get("stacked"))
        lo = finite_or_none(self.options.get("min"))
        hi = finite_or_none(self.options.get("max"))
        rng = DataRange(
            min=lo if lo is not None else raw.min,
            max=hi if hi is not None else raw.max,
            min_not_zero=raw.min_not_zero,
        )
        repaired = log_range(rng)
        if repaired.min != rng.min or repaired.max != rng.max:
            LOGGER.debug("scale %r log range [%r, %r] repaired to [%g, %g]", self.id, rng.min, rng.max, repaired.min, repaired.max)
        return repaired

    def generate_ticks(self) -> list[Tick]:
        limit_option = get_option(self.options, "ticks.max_ticks_limit")
        options = TickGenerationOptions(
            max_ticks=int(limit_option) if limit_option else DEFAULT_MAX_TICKS,
            min=finite_or_none(self.options.get("min")),
            max=finite_or_none(self.options.get("max")),
        )
        ticks = generate_logarithmic_ticks(options, self.limits)
        values = [float(t.value) for t in ticks]
        self.min = min(values)
        self.max = max(values)
        return ticks

    def configure_value_range(self) -> None:
        self._start_value = math.log10(float(self.min))
        self._value_range = math.log10(float(self.max)) - self._start_value

    def value_to_decimal(self, value: Any, index: int | None = None) -> float:
        v = finite_or_none(value)
        if v is None or v <= 0 or not self._value_range:
            return 0.0
        return (math.log10(v) - self._start_value) / self._value_range

    def decimal_to_value(self, decimal: float) -> float:
        return 10.0 ** (self._start_value + decimal * self._value_range)

    def get_base_value(self) -> float:
        return float(self.min)
