from __future__ import annotations

from typing import Any

from luvatrix_chart.scales.base import Scale, ScaleKind
from luvatrix_chart.ticks.base import DataRange, Tick
from luvatrix_chart.ticks.category import category_label_value, generate_category_ticks, resolve_category_index


class CategoryScale(Scale):
    """Index axis over ``data.labels``; vertical instances run top-to-bottom."""

    kind = ScaleKind.CATEGORY

    @property
    def labels(self) -> tuple[Any, ...]:
        return self.data.labels

    def compute_data_limits(self) -> DataRange:
        labels = self.labels
        last = max(len(labels) - 1, 0)
        min_index = resolve_category_index(labels, self.options.get("min"), 0)
        max_index = resolve_category_index(labels, self.options.get("max"), last)
        if min_index > max_index:
            min_index, max_index = max_index, min_index
        return DataRange(float(min_index), float(max_index))

    def generate_ticks(self) -> list[Tick]:
        self.min_index = int(self.limits.min)
        self.max_index = int(self.limits.max)
        ticks = generate_category_ticks(self.labels, self.min_index, self.max_index)
        self.min = self.min_index
        self.max = self.max_index
        return ticks

    def top_to_bottom(self) -> bool:
        return True

    def configure_value_range(self) -> None:
        offset = 0.5 if self.offset and self.all_ticks else 0.0
        self._start_value = self.min_index - offset
        self._value_range = max(len(self.all_ticks) - (0 if offset else 1), 1)

    def value_to_decimal(self, value: Any, index: int | None = None) -> float:
        position = self._index_of(value, index)
        return (position - self._start_value) / self._value_range

    def decimal_to_value(self, decimal: float) -> int:
        index = self._start_value + decimal * self._value_range
        return int(round(index))

    def get_label_for_index(self, index: int) -> Any:
        labels = self.labels
        return labels[index] if 0 <= index < len(labels) else None

    def get_base_value(self) -> float:
        return float(self.min_index)

    def _index_of(self, value: Any, index: int | None) -> float:
        if index is not None and self._is_tick_index(value, index):
            return float(self.min_index + index)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        if value is not None:
            key = category_label_value(value)
            for i, label in enumerate(self.labels):
                if category_label_value(label) == key:
                    return float(i)
        if index is not None:
            return float(index)
        return float(self.min_index)

    def _is_tick_index(self, value: Any, index: int) -> bool:
        return 0 <= index < len(self.all_ticks) and self.all_ticks[index].value == value
