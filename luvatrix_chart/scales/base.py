"""Scale container shared by every axis kind.

A scale walks ``UNCONFIGURED -> LIMITS_DETERMINED -> TICKS_BUILT -> FITTED ->
PIXEL_CONFIGURED``. ``measure`` (the layout entry point) runs the pipeline up
to ``FITTED``; ``place`` freezes the pixel range. Changing data or options
through :meth:`Scale.invalidate` sends the scale back to ``UNCONFIGURED``.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, IntEnum
import logging
import math
from typing import Any, ClassVar, Mapping, Sequence

import numpy as np

from luvatrix_chart.autoskip import auto_skip, tick_footprint
from luvatrix_chart.config import get_option
from luvatrix_chart.data import ChartData, Dataset
from luvatrix_chart.errors import ScaleStateError, UnknownScaleTypeError
from luvatrix_chart.geometry import Edge, Padding, Rect, Size
from luvatrix_chart.layout.box import LayoutBox
from luvatrix_chart.text import FontSpec, LabelSizes, TextMeasurer, compute_label_sizes
from luvatrix_chart.ticks.base import DataRange, Tick
from luvatrix_chart.ticks.formatters import TickFormatter, get_tick_formatter

LOGGER = logging.getLogger(__name__)

# Rotation search slack in px, applied to both label width and height.
LABEL_SLACK = 6.0
# Extra space kept beside the first/last horizontal label.
EDGE_LABEL_GAP = 3.0


class ScaleKind(str, Enum):
    LINEAR = "linear"
    LOGARITHMIC = "logarithmic"
    CATEGORY = "category"
    RADIAL_LINEAR = "radialLinear"

    @classmethod
    def parse(cls, value: "ScaleKind | str") -> "ScaleKind":
        if isinstance(value, ScaleKind):
            return value
        for kind in cls:
            if kind.value == value or kind.name.lower() == str(value).lower():
                return kind
        raise UnknownScaleTypeError(value)


class ScaleState(IntEnum):
    UNCONFIGURED = 0
    LIMITS_DETERMINED = 1
    TICKS_BUILT = 2
    FITTED = 3
    PIXEL_CONFIGURED = 4


class Scale(LayoutBox):
    kind: ClassVar[ScaleKind]

    def __init__(
        self,
        scale_id: str,
        options: Mapping[str, Any],
        *,
        measurer: TextMeasurer,
        data: ChartData | None = None,
        base_font: FontSpec | None = None,
    ) -> None:
        super().__init__(
            position=options.get("position", Edge.LEFT),
            weight=float(options.get("weight", 0.0) or 0.0),
            full_width=False,
        )
        self.id = scale_id
        self.measurer = measurer
        self.data = data or ChartData()
        self.base_font = base_font or FontSpec()
        self.axis = str(options.get("axis") or _axis_from_id(scale_id, self.position))
        self.is_default_axis = True
        self.chart_size: Size | None = None
        self._apply_options(options)

        self.state = ScaleState.UNCONFIGURED
        self.limits = DataRange(0.0, 1.0)
        self.min: Any = 0.0
        self.max: Any = 1.0
        self.all_ticks: list[Tick] = []
        self.ticks: list[Tick] = []
        self.label_sizes: LabelSizes | None = None
        self.label_rotation = 0.0
        self.max_width = 0.0
        self.max_height = 0.0
        self.margins = Padding()
        self.padding_left = 0.0
        self.padding_top = 0.0
        self.padding_right = 0.0
        self.padding_bottom = 0.0
        self.start_pixel = 0.0
        self.end_pixel = 0.0
        self.length = 0.0
        self.reversed = False

    def _apply_options(self, options: Mapping[str, Any]) -> None:
        self.options = options
        self.display = bool(options.get("display", True))
        self.offset = bool(options.get("offset", False))
        self.reverse = bool(options.get("reverse", False))
        self.formatter: TickFormatter = get_tick_formatter(get_option(options, "ticks.callback"))
        self.tick_font = FontSpec.from_options(get_option(options, "ticks.font"), self.base_font)
        self.major_font = FontSpec.from_options(get_option(options, "ticks.major.font"), self.tick_font)

    # lifecycle

    def invalidate(self, *, data: ChartData | None = None, options: Mapping[str, Any] | None = None) -> None:
        if options is not None:
            self._apply_options(options)
            self.position = Edge.parse(options.get("position", self.position))
            self.weight = float(options.get("weight", self.weight) or 0.0)
        if data is not None:
            self.data = data
        self.state = ScaleState.UNCONFIGURED

    def measure(self, max_width: float, max_height: float, margins: Padding | None = None) -> Size:
        self.max_width = max(0.0, float(max_width))
        self.max_height = max(0.0, float(max_height))
        self.margins = Padding.coerce(margins)
        if self.state is ScaleState.UNCONFIGURED:
            self.determine_data_limits()
        self.build_ticks()
        self.fit()
        return Size(self.width, self.height)

    def determine_data_limits(self) -> DataRange:
        self.limits = self.compute_data_limits()
        self.min, self.max = self.limits.min, self.limits.max
        self.state = ScaleState.LIMITS_DETERMINED
        return self.limits

    def build_ticks(self) -> list[Tick]:
        self._require(ScaleState.LIMITS_DETERMINED, "build_ticks")
        ticks = self.generate_ticks()
        self.all_ticks = self.convert_ticks_to_labels(ticks)
        self.ticks = list(self.all_ticks)
        self.state = ScaleState.TICKS_BUILT
        return self.ticks

    def convert_ticks_to_labels(self, ticks: Sequence[Tick]) -> list[Tick]:
        values = [t.value for t in ticks]
        out: list[Tick] = []
        for idx, tick in enumerate(ticks):
            label = self.formatter(tick.value, idx, values)
            if isinstance(label, list):
                label = tuple(str(line) for line in label)
            out.append(replace(tick, label=label))
        return out

    def fit(self) -> Size:
        self._require(ScaleState.TICKS_BUILT, "fit")
        horizontal = self.is_horizontal()
        thickness = self._chrome_thickness() if self.display else 0.0
        if horizontal:
            width, height = self.max_width, thickness
        else:
            width, height = thickness, self.max_height

        self.padding_left = self.padding_top = self.padding_right = self.padding_bottom = 0.0
        self.label_rotation = float(get_option(self.options, "ticks.min_rotation", 0.0) or 0.0)
        self.label_sizes = None
        tick_padding = float(get_option(self.options, "ticks.padding", 0.0) or 0.0)

        if self.display and get_option(self.options, "ticks.display", True) and self.all_ticks:
            sizes = self.measure_labels()
            self.calculate_tick_rotation(sizes)
            first, last, widest, highest = sizes.first, sizes.last, sizes.widest, sizes.highest
            if horizontal:
                rot = math.radians(self.label_rotation)
                cos, sin = math.cos(rot), math.sin(rot)
                label_height = sin * widest.width + cos * highest.height
                height = min(self.max_height, height + label_height + tick_padding)
                if self.label_rotation != 0:
                    if self.position is Edge.BOTTOM:
                        pad_left = cos * first.width + sin * first.offset
                        pad_right = sin * (last.height - last.offset)
                    else:
                        pad_left = sin * (first.height - first.offset)
                        pad_right = cos * last.width + sin * last.offset
                else:
                    pad_left = first.width / 2.0
                    pad_right = last.width / 2.0
                edge_offset = self._edge_tick_offset(self.max_width)
                self.padding_left = max(pad_left - edge_offset, 0.0) + EDGE_LABEL_GAP
                self.padding_right = max(pad_right - edge_offset, 0.0) + EDGE_LABEL_GAP
            else:
                label_width = 0.0 if get_option(self.options, "ticks.mirror", False) else widest.width + tick_padding
                width = min(self.max_width, width + label_width)
                top_label, bottom_label = (first, last) if self.top_to_bottom() else (last, first)
                self.padding_top = top_label.height / 2.0
                self.padding_bottom = bottom_label.height / 2.0

        self._handle_margins()
        chart = self._chart_size()
        if horizontal:
            self.width = max(0.0, chart.width - self.margins.left - self.margins.right)
            self.height = height
            self.length = self.width
        else:
            self.width = width
            self.height = max(0.0, chart.height - self.margins.top - self.margins.bottom)
            self.length = self.height

        self.ticks = self._skip_ticks()
        self.state = ScaleState.FITTED
        return Size(self.width, self.height)

    def configure(self) -> None:
        self._require(ScaleState.FITTED, "configure")
        if self.is_horizontal():
            self.start_pixel, self.end_pixel = self.left, self.right
            self.reversed = self.reverse
        else:
            self.start_pixel, self.end_pixel = self.top, self.bottom
            self.reversed = self.reverse if self.top_to_bottom() else not self.reverse
        self.length = self.end_pixel - self.start_pixel
        self.configure_value_range()
        self.state = ScaleState.PIXEL_CONFIGURED

    def place(self, rect: Rect) -> None:
        super().place(rect)
        if self.state >= ScaleState.FITTED:
            self.configure()

    def get_padding(self) -> Padding:
        return Padding(
            left=self.padding_left,
            top=self.padding_top,
            right=self.padding_right,
            bottom=self.padding_bottom,
        )

    # variant hooks

    def compute_data_limits(self) -> DataRange:
        raise NotImplementedError

    def generate_ticks(self) -> list[Tick]:
        raise NotImplementedError

    def configure_value_range(self) -> None:
        return

    def value_to_decimal(self, value: Any, index: int | None = None) -> float:
        raise NotImplementedError

    def decimal_to_value(self, decimal: float) -> Any:
        raise NotImplementedError

    def top_to_bottom(self) -> bool:
        """Whether a vertical instance of this scale grows downward."""
        return False

    # labels

    def measure_labels(self) -> LabelSizes:
        labels = [t.label for t in self.all_ticks]
        majors = [t.major for t in self.all_ticks]
        self.label_sizes = compute_label_sizes(
            labels,
            self.tick_font,
            self.measurer,
            major_flags=majors,
            major_font=self.major_font if get_option(self.options, "ticks.major.enabled", False) else None,
        )
        return self.label_sizes

    def calculate_tick_rotation(self, sizes: LabelSizes) -> float:
        min_rotation = float(get_option(self.options, "ticks.min_rotation", 0.0) or 0.0)
        max_rotation = float(get_option(self.options, "ticks.max_rotation", 50.0) or 0.0)
        num_ticks = len(self.all_ticks)
        rotation = min_rotation
        if min_rotation >= max_rotation or num_ticks <= 1 or not self.is_horizontal():
            self.label_rotation = rotation
            return rotation

        max_label_width = sizes.widest.width
        max_label_height = sizes.highest.height - sizes.highest.offset
        chart_width = self._chart_size().width
        max_width = min(self.max_width, chart_width - max_label_width)
        tick_width = self.max_width / num_ticks if self.offset else max_width / (num_ticks - 1)
        if max_label_width + LABEL_SLACK > tick_width:
            tick_width = max_width / (num_ticks - (0.5 if self.offset else 1.0))
            max_height = self.max_height - self._chrome_thickness()
            diagonal = math.hypot(max_label_width, max_label_height)
            if tick_width > 0 and diagonal > 0:
                rotation = math.degrees(
                    min(
                        math.asin(min((sizes.highest.height + LABEL_SLACK) / tick_width, 1.0)),
                        math.asin(max(-1.0, min(max_height / diagonal, 1.0))) - math.asin(max_label_height / diagonal),
                    )
                )
            else:
                rotation = max_rotation
            rotation = max(min_rotation, min(max_rotation, rotation))
        self.label_rotation = rotation
        return rotation

    def tick_size(self) -> float:
        sizes = self.label_sizes
        if sizes is None:
            return 0.0
        padding = float(get_option(self.options, "ticks.auto_skip_padding", 0.0) or 0.0)
        return tick_footprint(
            sizes.widest.width,
            sizes.highest.height,
            self.label_rotation,
            horizontal=self.is_horizontal(),
            padding=padding,
        )

    def _skip_ticks(self) -> list[Tick]:
        if not get_option(self.options, "ticks.display", True) or not get_option(self.options, "ticks.auto_skip", True):
            return list(self.all_ticks)
        return auto_skip(
            self.all_ticks,
            self.length,
            self.tick_size(),
            major_enabled=bool(get_option(self.options, "ticks.major.enabled", False)),
            max_ticks_limit=get_option(self.options, "ticks.max_ticks_limit"),
        )

    # pixel mapping

    def get_pixel_for_decimal(self, decimal: float) -> float:
        self._require_configured()
        if self.reversed:
            decimal = 1.0 - decimal
        return self.start_pixel + decimal * self.length

    def get_decimal_for_pixel(self, pixel: float) -> float:
        self._require_configured()
        decimal = (pixel - self.start_pixel) / self.length if self.length else 0.0
        return 1.0 - decimal if self.reversed else decimal

    def get_pixel_for_value(self, value: Any, index: int | None = None) -> float:
        self._require_configured()
        return self.get_pixel_for_decimal(self.value_to_decimal(value, index))

    def get_value_for_pixel(self, pixel: float) -> Any:
        self._require_configured()
        return self.decimal_to_value(self.get_decimal_for_pixel(pixel))

    def get_pixel_for_tick(self, index: int) -> float:
        ticks = self.all_ticks
        if index < 0 or index >= len(ticks):
            raise IndexError(f"tick index out of range: {index}")
        return self.get_pixel_for_value(ticks[index].value, index)

    def get_base_value(self) -> float:
        lo, hi = float(self.min), float(self.max)
        if lo < 0 and hi < 0:
            return hi
        if lo > 0 and hi > 0:
            return lo
        return 0.0

    def get_base_pixel(self) -> float:
        return self.get_pixel_for_value(self.get_base_value())

    # data helpers

    def bound_datasets(self) -> list[tuple[int, Dataset]]:
        out: list[tuple[int, Dataset]] = []
        for idx, ds in self.data.visible():
            axis_id = ds.x_axis_id if self.axis == "x" else ds.y_axis_id if self.axis == "y" else None
            if axis_id == self.id or (axis_id is None and self.is_default_axis):
                out.append((idx, ds))
        return out

    def dataset_values(self, ds: Dataset) -> np.ndarray:
        if self.axis == "x":
            if ds.x is not None:
                return ds.x
            return np.arange(len(ds), dtype=np.float64)
        return ds.y

    # internals

    def _chrome_thickness(self) -> float:
        thickness = 0.0
        if get_option(self.options, "grid_lines.draw_ticks", True):
            thickness += float(get_option(self.options, "grid_lines.tick_mark_length", 10.0) or 0.0)
        if get_option(self.options, "scale_label.display", False):
            font = FontSpec.from_options(get_option(self.options, "scale_label.font"), self.base_font)
            padding = float(get_option(self.options, "scale_label.padding", 4.0) or 0.0)
            thickness += self.measurer.line_height(font) + 2.0 * padding
        return thickness

    def _edge_tick_offset(self, length: float) -> float:
        if not self.offset or not self.all_ticks:
            return 0.0
        return length / len(self.all_ticks) / 2.0

    def _handle_margins(self) -> None:
        self.margins = self.margins.merge_max(self.get_padding())

    def _chart_size(self) -> Size:
        if self.chart_size is not None:
            return self.chart_size
        return Size(
            width=self.max_width + self.margins.left + self.margins.right,
            height=self.max_height + self.margins.top + self.margins.bottom,
        )

    def _require(self, state: ScaleState, operation: str) -> None:
        if self.state < state:
            raise ScaleStateError(f"{operation} requires state {state.name}, scale {self.id!r} is {self.state.name}")

    def _require_configured(self) -> None:
        self._require(ScaleState.PIXEL_CONFIGURED, "pixel mapping")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, position={self.position.value!r}, state={self.state.name})"


def _axis_from_id(scale_id: str, position: Edge) -> str:
    head = scale_id[:1].lower()
    if head in ("x", "y", "r"):
        return head
    if position is Edge.CHART_AREA:
        return "r"
    return "x" if position.is_horizontal else "y"
