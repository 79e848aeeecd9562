from __future__ import annotations

from typing import Any, Mapping

from luvatrix_chart.data import ChartData
from luvatrix_chart.errors import UnknownScaleTypeError
from luvatrix_chart.scales.base import Scale, ScaleKind, ScaleState
from luvatrix_chart.scales.category import CategoryScale
from luvatrix_chart.scales.linear import LinearScale, scan_value_limits
from luvatrix_chart.scales.logarithmic import LogarithmicScale
from luvatrix_chart.scales.radial import RadialLinearScale
from luvatrix_chart.text import FontSpec, TextMeasurer

SCALE_TYPES: dict[ScaleKind, type[Scale]] = {
    ScaleKind.LINEAR: LinearScale,
    ScaleKind.LOGARITHMIC: LogarithmicScale,
    ScaleKind.CATEGORY: CategoryScale,
    ScaleKind.RADIAL_LINEAR: RadialLinearScale,
}


def create_scale(
    scale_id: str,
    options: Mapping[str, Any],
    *,
    measurer: TextMeasurer,
    data: ChartData | None = None,
    base_font: FontSpec | None = None,
) -> Scale:
    """Build the scale named by ``options["type"]``; unknown types raise at configuration time."""
    raw_type = options.get("type")
    if raw_type is None:
        raise UnknownScaleTypeError(raw_type)
    kind = ScaleKind.parse(raw_type)
    cls = SCALE_TYPES.get(kind)
    if cls is None:
        raise UnknownScaleTypeError(raw_type)
    return cls(scale_id, options, measurer=measurer, data=data, base_font=base_font)


__all__ = [
    "CategoryScale",
    "LinearScale",
    "LogarithmicScale",
    "RadialLinearScale",
    "SCALE_TYPES",
    "Scale",
    "ScaleKind",
    "ScaleState",
    "create_scale",
    "scan_value_limits",
]
