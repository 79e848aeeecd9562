from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math
from typing import Any, Callable, Sequence

from luvatrix_chart.errors import UnknownTickFormatterError
from luvatrix_chart.ticks.linear import decimal_places


TickFormatter = Callable[[Any, int, Sequence[Any]], "str | tuple[str, ...] | None"]

_UNITS = ((1e9, "B"), (1e6, "M"), (1e3, "k"))


def format_values(value: Any, index: int, values: Sequence[Any]) -> str | tuple[str, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_linear(value: Any, index: int, values: Sequence[Any]) -> str:
    numeric = [float(v) for v in values]
    if len(numeric) > 3:
        # Pinned min/max can make the first gap irregular.
        step = abs(numeric[2] - numeric[1])
    elif len(numeric) > 1:
        step = abs(numeric[1] - numeric[0])
    else:
        step = None
    return format_tick(float(value), step=step)


def format_logarithmic(value: Any, index: int, values: Sequence[Any]) -> str:
    v = float(value)
    if v == 0:
        return "0"
    if not math.isfinite(v) or v < 0:
        return str(v)
    remain = round(v / 10.0 ** math.floor(math.log10(v)), 9)
    if remain in (1.0, 2.0, 5.0) or index == 0 or index == len(values) - 1:
        return f"{v:g}"
    return ""


def format_abbreviated(value: Any, index: int = 0, values: Sequence[Any] = ()) -> str:
    """Abbreviate with B/M/k units: 7841319402 -> "7.8B", 1259 -> "1.2k", 725.019 -> "725"."""
    if isinstance(value, str):
        text = value.strip()
        if text and text[-1] in "BMk" and _is_number(text[:-1]):
            return text
        if text == "N/A":
            return text
        if not _is_number(text):
            return "N/A"
        value = float(text)
    v = float(value)
    if math.isnan(v):
        return "N/A"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    sign = "-" if v < 0 else ""
    mag = abs(v)
    for threshold, unit in _UNITS:
        if mag < threshold:
            continue
        mantissa = math.floor(mag / threshold * 10.0) / 10.0
        if unit == "k" and mag < 1e4 and mantissa.is_integer():
            break
        return f"{sign}{_trim(f'{mantissa:.1f}')}{unit}"
    if mag >= 100:
        decimals = 0
    elif mag >= 10:
        decimals = 1
    else:
        decimals = 2
    out = _trim(f"{mag:.{decimals}f}")
    return "0" if out == "0" else f"{sign}{out}"


def format_tick(value: float, *, step: float | None = None) -> str:
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = decimal_places(step) if step is not None and step > 0 else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and 0 < abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


TICK_FORMATTERS: dict[str, TickFormatter] = {
    "values": format_values,
    "linear": format_linear,
    "logarithmic": format_logarithmic,
    "abbreviated": format_abbreviated,
}


def register_tick_formatter(name: str, formatter: TickFormatter) -> None:
    if not name:
        raise ValueError("formatter name must be non-empty")
    TICK_FORMATTERS[name] = formatter


def get_tick_formatter(value: str | TickFormatter | None) -> TickFormatter:
    if value is None:
        return format_values
    if callable(value):
        return value
    formatter = TICK_FORMATTERS.get(str(value))
    if formatter is None:
        raise UnknownTickFormatterError(value)
    return formatter


def _trim(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _is_number(text: str) -> bool:
    try:
        float(text)
    except ValueError:
        return False
    return True
