from luvatrix_chart.ticks.base import DataRange, Tick, TickGenerationOptions
from luvatrix_chart.ticks.category import generate_category_ticks, resolve_category_index
from luvatrix_chart.ticks.formatters import (
    TICK_FORMATTERS,
    format_abbreviated,
    format_linear,
    format_logarithmic,
    format_tick,
    format_values,
    get_tick_formatter,
    register_tick_formatter,
)
from luvatrix_chart.ticks.linear import decimal_places, generate_linear_ticks, nice_number
from luvatrix_chart.ticks.logarithmic import generate_logarithmic_ticks, log_range

__all__ = [
    "DataRange",
    "TICK_FORMATTERS",
    "Tick",
    "TickGenerationOptions",
    "decimal_places",
    "format_abbreviated",
    "format_linear",
    "format_logarithmic",
    "format_tick",
    "format_values",
    "generate_category_ticks",
    "generate_linear_ticks",
    "generate_logarithmic_ticks",
    "get_tick_formatter",
    "log_range",
    "nice_number",
    "register_tick_formatter",
    "resolve_category_index",
]
