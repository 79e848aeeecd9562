from luvatrix_chart.animation import AnimationScheduler, AnimationTask, Element, ManualFrameScheduler, get_easing
from luvatrix_chart.autoskip import auto_skip
from luvatrix_chart.chart import Chart
from luvatrix_chart.config import Scriptable, get_option, load_config_file, resolve_config
from luvatrix_chart.data import ChartData, Dataset, normalize_chart_data
from luvatrix_chart.errors import (
    ChartConfigError,
    ChartError,
    ScaleStateError,
    UnknownEasingError,
    UnknownScaleTypeError,
    UnknownTickFormatterError,
)
from luvatrix_chart.geometry import ChartArea, Edge, Padding, Rect, Size
from luvatrix_chart.layout import LayoutBox, LayoutEngine, Legend, Title
from luvatrix_chart.scales import (
    CategoryScale,
    LinearScale,
    LogarithmicScale,
    RadialLinearScale,
    Scale,
    ScaleKind,
    ScaleState,
    create_scale,
)
from luvatrix_chart.text import FontSpec, MonospaceTextMeasurer, PillowTextMeasurer, TextMeasureCache

__all__ = [
    "AnimationScheduler",
    "AnimationTask",
    "CategoryScale",
    "Chart",
    "ChartArea",
    "ChartConfigError",
    "ChartData",
    "ChartError",
    "Dataset",
    "Edge",
    "Element",
    "FontSpec",
    "LayoutBox",
    "LayoutEngine",
    "Legend",
    "LinearScale",
    "LogarithmicScale",
    "ManualFrameScheduler",
    "MonospaceTextMeasurer",
    "Padding",
    "PillowTextMeasurer",
    "RadialLinearScale",
    "Rect",
    "Scale",
    "ScaleKind",
    "ScaleState",
    "ScaleStateError",
    "Scriptable",
    "Size",
    "TextMeasureCache",
    "Title",
    "UnknownEasingError",
    "UnknownScaleTypeError",
    "UnknownTickFormatterError",
    "auto_skip",
    "create_scale",
    "get_easing",
    "get_option",
    "load_config_file",
    "normalize_chart_data",
    "resolve_config",
]
