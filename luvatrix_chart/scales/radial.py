from __future__ import annotations

import math
from typing import Any

import numpy as np

from luvatrix_chart.config import get_option
from luvatrix_chart.data import Dataset
from luvatrix_chart.geometry import Edge, Padding, Size
from luvatrix_chart.scales.base import ScaleKind, ScaleState
from luvatrix_chart.scales.linear import DEFAULT_MAX_TICKS, LinearScale
from luvatrix_chart.text import FontSpec, LabelSize, end_pass, measure_label, pass_start


# Gap between the outer ring and the point labels.
POINT_LABEL_GAP = 5.0


class RadialLinearScale(LinearScale):
    """Linear value axis laid out as concentric rings inside the chart area.

    Pixel mapping works in distance from the centre: ``get_pixel_for_value``
    returns a radius in ``[0, drawing_area]``.
    """

    kind = ScaleKind.RADIAL_LINEAR

    def __init__(self, scale_id: str, options: Any, **kwargs: Any) -> None:
        super().__init__(scale_id, options, **kwargs)
        self.position = Edge.CHART_AREA
        self.axis = "r"
        self.drawing_area = 0.0
        self.x_center = 0.0
        self.y_center = 0.0
        self.point_label_sizes: list[LabelSize] = []
        self._local_center = (0.0, 0.0)

    def _apply_options(self, options: Any) -> None:
        super()._apply_options(options)
        self.point_label_font = FontSpec.from_options(get_option(options, "point_labels.font"), self.base_font)
        self.start_angle = float(options.get("start_angle", 0.0) or 0.0)

    def is_horizontal(self) -> bool:
        return False

    def bound_datasets(self) -> list[tuple[int, Dataset]]:
        return self.data.visible()

    def dataset_values(self, ds: Dataset) -> np.ndarray:
        return ds.y

    @property
    def value_count(self) -> int:
        counts = [len(self.data.labels)] + [len(ds) for ds in self.data.datasets]
        return max(counts)

    def backdrop_height(self) -> float:
        if not get_option(self.options, "ticks.display", True):
            return 0.0
        padding = float(get_option(self.options, "ticks.backdrop_padding", 2.0) or 0.0)
        return self.tick_font.size + 2.0 * padding

    def compute_tick_limit(self) -> int:
        per_tick = 1.5 * self.tick_font.size
        if per_tick <= 0:
            return DEFAULT_MAX_TICKS
        return int(math.ceil(self.drawing_area / per_tick))

    def measure(self, max_width: float, max_height: float, margins: Padding | None = None) -> Size:
        self.max_width = max(0.0, float(max_width))
        self.max_height = max(0.0, float(max_height))
        self.margins = Padding()
        self.width = self.max_width
        self.height = self.max_height
        self.padding_top = self.backdrop_height() / 2.0
        self.drawing_area = max(0.0, min(self.height - self.padding_top, self.width) / 2.0)
        self._local_center = (math.floor(self.width / 2.0), math.floor((self.height - self.padding_top) / 2.0))
        if self.state is ScaleState.UNCONFIGURED:
            self.determine_data_limits()
        self.build_ticks()
        self.fit()
        return Size(self.width, self.height)

    def fit(self) -> Size:
        self._require(ScaleState.TICKS_BUILT, "fit")
        self.point_label_sizes = []
        if self.display and get_option(self.options, "point_labels.display", True) and self.value_count:
            self._fit_with_point_labels()
        else:
            self._set_center_point(0.0, 0.0, 0.0, 0.0)
        self.ticks = list(self.all_ticks)
        self.length = self.drawing_area
        self.state = ScaleState.FITTED
        return Size(self.width, self.height)

    def configure(self) -> None:
        self._require(ScaleState.FITTED, "configure")
        self.x_center = self.left + self._local_center[0]
        self.y_center = self.top + self.padding_top + self._local_center[1]
        self.start_pixel = 0.0
        self.end_pixel = self.drawing_area
        self.length = self.drawing_area
        self.reversed = self.reverse
        self.configure_value_range()
        self.state = ScaleState.PIXEL_CONFIGURED

    def get_padding(self) -> Padding:
        return Padding()

    def get_index_angle(self, index: int) -> float:
        count = self.value_count or 1
        angle = (index * (360.0 / count) + self.start_angle) % 360.0
        if angle < 0:
            angle += 360.0
        return math.radians(angle)

    def get_distance_from_center_for_value(self, value: Any) -> float:
        if value is None:
            return math.nan
        return self.get_pixel_for_value(value)

    def get_value_for_distance_from_center(self, distance: float) -> float:
        return self.get_value_for_pixel(distance)

    def get_point_position(self, index: int, distance: float) -> tuple[float, float]:
        angle = self.get_index_angle(index) - math.pi / 2.0
        return (math.cos(angle) * distance + self.x_center, math.sin(angle) * distance + self.y_center)

    def get_point_position_for_value(self, index: int, value: Any) -> tuple[float, float]:
        return self.get_point_position(index, self.get_distance_from_center_for_value(value))

    def get_base_position(self, index: int = 0) -> tuple[float, float]:
        return self.get_point_position_for_value(index, self.get_base_value())

    def _fit_with_point_labels(self) -> None:
        limits = {"l": 0.0, "r": self.width, "t": 0.0, "b": self.height - self.padding_top}
        angles: dict[str, float] = {}
        labels = self.data.labels
        cx, cy = self._local_center
        start = pass_start(self.measurer)
        for i in range(self.value_count):
            label = labels[i] if i < len(labels) else ""
            size = measure_label(label if label is not None else "", self.point_label_font, self.measurer)
            self.point_label_sizes.append(size)
            radians = self.get_index_angle(i)
            distance = self.drawing_area + POINT_LABEL_GAP
            x = math.cos(radians - math.pi / 2.0) * distance + cx
            y = math.sin(radians - math.pi / 2.0) * distance + cy
            degrees = round(math.degrees(radians), 9) % 360.0
            h_start, h_end = _label_limits(degrees, x, size.width, 0.0, 180.0)
            v_start, v_end = _label_limits(degrees, y, size.height, 90.0, 270.0)
            if h_start < limits["l"]:
                limits["l"], angles["l"] = h_start, radians
            if h_end > limits["r"]:
                limits["r"], angles["r"] = h_end, radians
            if v_start < limits["t"]:
                limits["t"], angles["t"] = v_start, radians
            if v_end > limits["b"]:
                limits["b"], angles["b"] = v_end, radians
        end_pass(self.measurer, start)
        self._set_reductions(self.drawing_area, limits, angles)

    def _set_reductions(self, largest_radius: float, limits: dict[str, float], angles: dict[str, float]) -> None:
        left = _safe_ratio(limits["l"], math.sin(angles["l"])) if "l" in angles else 0.0
        right = _safe_ratio(max(limits["r"] - self.width, 0.0), math.sin(angles["r"])) if "r" in angles else 0.0
        top = _safe_ratio(-limits["t"], math.cos(angles["t"])) if "t" in angles else 0.0
        bottom = (
            _safe_ratio(-max(limits["b"] - (self.height - self.padding_top), 0.0), math.cos(angles["b"]))
            if "b" in angles
            else 0.0
        )
        self.drawing_area = max(
            0.0,
            min(
                math.floor(largest_radius - (left + right) / 2.0),
                math.floor(largest_radius - (top + bottom) / 2.0),
            ),
        )
        self._set_center_point(left, right, top, bottom)

    def _set_center_point(self, left: float, right: float, top: float, bottom: float) -> None:
        max_right = self.width - right - self.drawing_area
        max_left = left + self.drawing_area
        max_top = top + self.drawing_area
        max_bottom = self.height - self.padding_top - bottom - self.drawing_area
        self._local_center = (math.floor((max_left + max_right) / 2.0), math.floor((max_top + max_bottom) / 2.0))


def _label_limits(angle: float, pos: float, size: float, lo: float, hi: float) -> tuple[float, float]:
    if angle == lo or angle == hi:
        return pos - size / 2.0, pos + size / 2.0
    if angle < lo or angle > hi:
        return pos - size, pos
    return pos, pos + size


def _safe_ratio(num: float, den: float) -> float:
    if abs(den) < 1e-12:
        return 0.0
    out = num / den
    return out if math.isfinite(out) else 0.0
