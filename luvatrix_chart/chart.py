"""Chart facade: configuration in, laid-out scales and animated element views out.

Drawing is left to the host. After :meth:`Chart.update` every element's
``view`` holds pixel geometry the host can paint on each frame; the animation
scheduler moves those views toward the latest targets.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Mapping, Sequence

from luvatrix_chart.animation.colors import ColorMixer
from luvatrix_chart.animation.easing import get_easing
from luvatrix_chart.animation.element import Element
from luvatrix_chart.animation.frames import FrameScheduler
from luvatrix_chart.animation.scheduler import AnimationScheduler, AnimationTask, Clock
from luvatrix_chart.config import FrozenConfig, get_option, load_config_file, resolve_config
from luvatrix_chart.data import ChartData, Dataset, normalize_chart_data
from luvatrix_chart.defaults import CHART_TYPE_DEFAULTS, DEFAULTS, SCALE_DEFAULTS
from luvatrix_chart.errors import ChartConfigError, ChartError
from luvatrix_chart.geometry import ChartArea, Size
from luvatrix_chart.layout.box import LayoutBox
from luvatrix_chart.layout.engine import LayoutEngine
from luvatrix_chart.layout.legend import Legend
from luvatrix_chart.layout.title import Title
from luvatrix_chart.scales import CategoryScale, RadialLinearScale, Scale, ScaleKind, create_scale
from luvatrix_chart.text import FontSpec, PillowTextMeasurer, TextMeasureCache, TextMeasurer

LOGGER = logging.getLogger(__name__)


class Chart:
    def __init__(
        self,
        config: Mapping[str, Any],
        *,
        measurer: TextMeasurer | None = None,
        frame_scheduler: FrameScheduler | None = None,
        clock: Clock | None = None,
        mixer: ColorMixer | None = None,
        scheduler: AnimationScheduler | None = None,
    ) -> None:
        chart_type = str(config.get("type", "line"))
        if chart_type not in CHART_TYPE_DEFAULTS:
            raise ChartConfigError(f"unknown chart type: {chart_type!r}")
        self.type = chart_type
        self._instance_options: Mapping[str, Any] = config.get("options") or {}
        self.data: ChartData = normalize_chart_data(config.get("data"))
        if measurer is None:
            measurer = PillowTextMeasurer()
        self.measurer: TextMeasurer = measurer.measurer if isinstance(measurer, TextMeasureCache) else measurer
        self.scheduler = scheduler or AnimationScheduler(frame_scheduler, clock)
        self.mixer = mixer

        self.animating = False
        self.destroyed = False
        self.width = 0.0
        self.height = 0.0
        self.chart_area: ChartArea | None = None
        self.last_progress = 1.0
        self.elements: list[list[Element]] = []
        self._configure()

    @classmethod
    def from_config_file(cls, path: str | Path, **kwargs: Any) -> "Chart":
        return cls(load_config_file(path), **kwargs)

    # configuration

    def _configure(self) -> None:
        self.options: FrozenConfig = resolve_config(
            DEFAULTS,
            CHART_TYPE_DEFAULTS[self.type],
            self._instance_options,
            context={"type": self.type, "dataset_count": len(self.data.datasets)},
        )
        self.font = FontSpec.from_options(self.options.get("font"))
        self.easing = get_easing(get_option(self.options, "animation.easing"))
        duration = float(get_option(self.options, "animation.duration", 0) or 0)
        if duration < 0:
            raise ChartConfigError("animation.duration must be >= 0")
        self.layout = LayoutEngine(
            padding=get_option(self.options, "layout.padding", 0),
            max_rounds=int(get_option(self.options, "layout.max_rounds", 3)),
        )
        self.scales: dict[str, Scale] = {}
        seen_axes: set[str] = set()
        for scale_id, raw in (self.options.get("scales") or {}).items():
            if raw is None:
                continue
            kind = ScaleKind.parse(raw.get("type", "linear"))
            scale_options = resolve_config(SCALE_DEFAULTS["common"], SCALE_DEFAULTS[kind.value], raw)
            scale = create_scale(
                scale_id, scale_options, measurer=TextMeasureCache(self.measurer), data=self.data, base_font=self.font
            )
            scale.is_default_axis = scale.axis not in seen_axes
            seen_axes.add(scale.axis)
            self.scales[scale_id] = scale
        self.title = Title.from_options(self.options.get("title") or {}, measurer=self.measurer, base_font=self.font)
        self.legend = Legend.from_options(
            self.options.get("legend") or {},
            [ds.label for ds in self.data.datasets],
            measurer=TextMeasureCache(self.measurer),
            base_font=self.font,
        )

    @property
    def boxes(self) -> list[LayoutBox]:
        return [self.title, self.legend, *self.scales.values()]

    @property
    def text_caches(self) -> list[TextMeasureCache]:
        """Per-box measurement caches; each box collects its own between passes."""
        return [box.measurer for box in self.boxes if isinstance(getattr(box, "measurer", None), TextMeasureCache)]

    def set_data(self, data: Mapping[str, Any] | ChartData) -> None:
        self.data = data if isinstance(data, ChartData) else normalize_chart_data(data)
        for scale in self.scales.values():
            scale.invalidate(data=self.data)
        self.legend.items = [ds.label for ds in self.data.datasets]

    def set_options(self, options: Mapping[str, Any]) -> None:
        self._instance_options = options
        self._configure()

    def get_scale(self, scale_id: str) -> Scale:
        try:
            return self.scales[scale_id]
        except KeyError:
            raise KeyError(f"unknown scale id: {scale_id!r}") from None

    # update / render

    def update(self, width: float, height: float) -> ChartArea:
        if self.destroyed:
            raise ChartError("chart has been destroyed")
        if width < 0 or height < 0:
            raise ValueError("chart width/height must be >= 0")
        self.width = float(width)
        self.height = float(height)
        size = Size(self.width, self.height)
        for scale in self.scales.values():
            scale.chart_size = size
        self.chart_area = self.layout.update(self.boxes, self.width, self.height)
        self._update_elements()
        self._start_animation()
        return self.chart_area

    def render(self, progress: float = 1.0) -> None:
        self.last_progress = progress
        for row in self.elements:
            for element in row:
                element.transition(progress)

    def destroy(self) -> None:
        if self.destroyed:
            return
        self.scheduler.cancel_animation(self)
        self.destroyed = True
        self.elements = []
        for cache in self.text_caches:
            cache.clear()

    def _start_animation(self) -> None:
        duration = float(get_option(self.options, "animation.duration", 0) or 0)
        if duration <= 0:
            self.scheduler.cancel_animation(self)
            self.render(1.0)
            return
        for row in self.elements:
            for element in row:
                element.pivot()
        task = AnimationTask(
            duration=duration,
            easing=self.easing,
            frame_ms=float(get_option(self.options, "animation.frame_ms")),
            render=self.render,
            on_progress=get_option(self.options, "animation.on_progress"),
            on_complete=get_option(self.options, "animation.on_complete"),
        )
        self.scheduler.add_animation(self, task)

    # element models

    def _update_elements(self) -> None:
        rows: list[list[Element]] = []
        stack_bases: dict[tuple[Any, ...], dict[int, list[float]]] = {}
        bar_slots = self._bar_slots()
        for ds_index, ds in enumerate(self.data.datasets):
            previous = self.elements[ds_index] if ds_index < len(self.elements) else []
            row: list[Element] = []
            for i in range(len(ds)):
                if ds.hidden:
                    model = {"skip": True}
                elif self.type == "radar":
                    model = self._radar_point_model(ds, i)
                elif self.type == "bar":
                    model = self._bar_model(ds_index, ds, i, stack_bases, bar_slots)
                else:
                    model = self._point_model(ds, i)
                element = previous[i] if i < len(previous) else Element(dataset_index=ds_index, index=i, mixer=self.mixer)
                element.model = model
                row.append(element)
            rows.append(row)
        self.elements = rows

    def _axis_scales(self, ds: Dataset) -> tuple[Scale, Scale]:
        x_scale = self._scale_for(ds.x_axis_id, "x")
        y_scale = self._scale_for(ds.y_axis_id, "y")
        return x_scale, y_scale

    def _scale_for(self, scale_id: str | None, axis: str) -> Scale:
        if scale_id is not None:
            return self.get_scale(scale_id)
        for scale in self.scales.values():
            if scale.axis == axis and scale.is_default_axis:
                return scale
        raise ChartConfigError(f"no {axis} scale configured for chart type {self.type!r}")

    def _style(self, ds: Dataset, element: str, key: str, index: int) -> Any:
        value = ds.options.get(key)
        if value is None:
            return get_option(self.options, f"elements.{element}.{key}")
        if isinstance(value, tuple) and value and not _is_color_tuple(value):
            return value[index % len(value)]
        return value

    def _point_model(self, ds: Dataset, i: int) -> dict[str, Any]:
        x_scale, y_scale = self._axis_scales(ds)
        y_value = float(ds.y[i])
        if isinstance(x_scale, CategoryScale):
            x = x_scale.get_pixel_for_value(None, index=i)
            x_value = float(i)
        else:
            x_value = float(ds.x[i]) if ds.x is not None else float(i)
            x = x_scale.get_pixel_for_value(x_value)
        skip = not (math.isfinite(y_value) and math.isfinite(x_value))
        return {
            "x": x,
            "y": y_scale.get_pixel_for_value(y_value) if math.isfinite(y_value) else math.nan,
            "radius": float(self._style(ds, "point", "radius", i)),
            "background_color": self._style(ds, "point", "background_color", i),
            "skip": skip,
        }

    def _radar_point_model(self, ds: Dataset, i: int) -> dict[str, Any]:
        scale = next((s for s in self.scales.values() if isinstance(s, RadialLinearScale)), None)
        if scale is None:
            raise ChartConfigError("radar charts need a radialLinear scale")
        value = float(ds.y[i])
        skip = not math.isfinite(value)
        x, y = scale.get_point_position_for_value(i, scale.get_base_value() if skip else value)
        return {
            "x": x,
            "y": y,
            "radius": float(self._style(ds, "point", "radius", i)),
            "background_color": self._style(ds, "point", "background_color", i),
            "skip": skip,
        }

    def _bar_slots(self) -> dict[int, tuple[int, int]]:
        """Map dataset index to ``(slot, slot_count)`` within each category."""
        keys: list[Any] = []
        slots: dict[int, tuple[int, int]] = {}
        order: dict[int, Any] = {}
        for idx, ds in self.data.visible():
            y_scale = self._scale_for(ds.y_axis_id, "y")
            stacked = bool(y_scale.options.get("stacked")) or ds.stack is not None
            key = ("stack", ds.stack) if stacked else ("dataset", idx)
            if key not in keys:
                keys.append(key)
            order[idx] = key
        for idx, key in order.items():
            slots[idx] = (keys.index(key), len(keys))
        return slots

    def _bar_model(
        self,
        ds_index: int,
        ds: Dataset,
        i: int,
        stack_bases: dict[tuple[Any, ...], dict[int, list[float]]],
        bar_slots: dict[int, tuple[int, int]],
    ) -> dict[str, Any]:
        x_scale, y_scale = self._axis_scales(ds)
        slot, slot_count = bar_slots.get(ds_index, (0, 1))
        value = float(ds.y[i])
        skip = not math.isfinite(value)

        if isinstance(x_scale, CategoryScale):
            center = x_scale.get_pixel_for_value(None, index=i)
            ticks = max(len(x_scale.all_ticks), 1)
        else:
            center = x_scale.get_pixel_for_value(float(ds.x[i]) if ds.x is not None else float(i))
            ticks = max(len(ds), 1)
        category_width = abs(x_scale.length) / ticks
        size = category_width * float(get_option(self.options, "elements.bar.category_percentage", 0.8))
        slot_width = size / slot_count
        x = center - size / 2.0 + slot_width * (slot + 0.5)
        width = slot_width * float(get_option(self.options, "elements.bar.bar_percentage", 0.9))

        stacked = bool(y_scale.options.get("stacked")) or ds.stack is not None
        base_value = y_scale.get_base_value()
        top_value = value
        if stacked and not skip:
            key = (y_scale.id, ds.stack)
            sums = stack_bases.setdefault(key, {}).setdefault(i, [0.0, 0.0])
            sign = 0 if value >= 0 else 1
            base_value = sums[sign]
            top_value = base_value + value
            sums[sign] = top_value
        return {
            "x": x,
            "y": y_scale.get_pixel_for_value(top_value) if not skip else y_scale.get_pixel_for_value(base_value),
            "base": y_scale.get_pixel_for_value(base_value),
            "width": width,
            "background_color": self._style(ds, "bar", "background_color", i),
            "skip": skip,
        }


def _is_color_tuple(value: Sequence[Any]) -> bool:
    return len(value) in (3, 4) and all(isinstance(c, int) and not isinstance(c, bool) for c in value)
