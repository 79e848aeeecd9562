from __future__ import annotations

from decimal import Decimal
import logging
import math

import numpy as np

from luvatrix_chart.ticks.base import DataRange, TickGenerationOptions

LOGGER = logging.getLogger(__name__)

MIN_SPACING = 1e-14


def generate_linear_ticks(options: TickGenerationOptions, data_range: DataRange) -> list[float]:
    rng = data_range.normalized()
    rmin, rmax = widen_degenerate_range(rng.min, rng.max)

    step_size = options.step_size
    unit = step_size or 1.0
    max_spaces = options.max_ticks - 1
    spacing = nice_number((rmax - rmin) / max_spaces / unit) * unit

    # Below this spacing float math can no longer place intermediate ticks.
    if spacing < MIN_SPACING and options.min is None and options.max is None:
        LOGGER.debug("tick spacing %.3e below precision floor; using bounds only", spacing)
        return [rmin, rmax]

    num_spaces = math.ceil((rmax - rmin) / spacing)
    if num_spaces > max_spaces:
        spacing = nice_number(num_spaces * spacing / max_spaces / unit) * unit

    if step_size or options.precision is None:
        factor = 10.0 ** decimal_places(spacing)
    else:
        factor = 10.0 ** options.precision
        spacing = math.ceil(spacing * factor) / factor

    nice_min = math.floor(rmin / spacing) * spacing
    nice_max = math.ceil(rmax / spacing) * spacing

    if step_size:
        if options.min is not None and almost_whole(options.min / spacing, spacing / 1000.0):
            nice_min = float(options.min)
        if options.max is not None and almost_whole(options.max / spacing, spacing / 1000.0):
            nice_max = float(options.max)

    spaces = (nice_max - nice_min) / spacing
    if almost_equals(spaces, round_half_up(spaces), spacing / 1000.0):
        count = int(round_half_up(spaces))
    else:
        count = int(math.ceil(spaces))

    nice_min = round_half_up(nice_min * factor) / factor
    nice_max = round_half_up(nice_max * factor) / factor

    inner = np.floor((nice_min + np.arange(1, max(count, 1), dtype=np.float64) * spacing) * factor + 0.5) / factor
    values = np.concatenate(
        (
            np.asarray([nice_min if options.min is None else float(options.min)], dtype=np.float64),
            inner,
            np.asarray([nice_max if options.max is None else float(options.max)], dtype=np.float64),
        )
    )
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    values[np.isclose(values, 0.0, rtol=0.0, atol=spacing * 1e-9)] = 0.0
    return [float(v) for v in values]


def widen_degenerate_range(vmin: float, vmax: float) -> tuple[float, float]:
    if vmin != vmax:
        return vmin, vmax
    delta = max(1.0, abs(vmin) * 0.05)
    return vmin - delta, vmax + delta


def nice_number(value: float, *, round_result: bool = False) -> float:
    """Snap ``value`` to {1, 2, 5, 10} x 10^k (ceiling, or nearest with ``round_result``)."""
    if value <= 0 or not math.isfinite(value):
        return 1.0
    exp = math.floor(math.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10.0**exp))


def decimal_places(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 0
    d = Decimal(repr(float(step))).normalize()
    exp = d.as_tuple().exponent
    if not isinstance(exp, int):
        return 0
    return min(12, max(0, -exp))


def almost_whole(value: float, epsilon: float) -> bool:
    rounded = round_half_up(value)
    return rounded - epsilon <= value <= rounded + epsilon


def almost_equals(a: float, b: float, epsilon: float) -> bool:
    return abs(a - b) < epsilon


def round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))
