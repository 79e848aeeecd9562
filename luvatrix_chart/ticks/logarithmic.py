"""Logarithmic tick generation.

Ticks are produced in log10 space over the strictly positive domain. Decade
steps go through significands 1..9; every value coming back from ``10 ** x`` is
snapped onto the nearest ``s * 10^k`` grid point when it lies within 0.5% of
it, which absorbs the log10/pow round-trip error (``10 ** log10(300)`` is not
exactly 300).
"""

from __future__ import annotations

import logging
import math

from luvatrix_chart.ticks.base import DataRange, Tick, TickGenerationOptions

LOGGER = logging.getLogger(__name__)

DEFAULT_LOG_MIN = 1.0
DEFAULT_LOG_MAX = 10.0
SNAP_TOLERANCE = 0.005
NICE_SIGNIFICANDS = (1, 2, 5)


def log_range(data_range: DataRange) -> DataRange:
    """Widen/repair a raw data range so it is usable on a log axis."""
    lo = data_range.min if _positive(data_range.min) else None
    hi = data_range.max if _positive(data_range.max) else None
    min_not_zero = data_range.min_not_zero if _positive(data_range.min_not_zero) else None

    if lo is not None and hi is not None and lo > hi:
        lo, hi = hi, lo
    if lo is not None and hi is not None and lo == hi:
        lo = 10.0 ** (math.floor(math.log10(lo)) - 1)
        hi = 10.0 ** (math.floor(math.log10(hi)) + 1)
    if hi is None:
        if lo is None:
            lo, hi = DEFAULT_LOG_MIN, DEFAULT_LOG_MAX
        else:
            hi = 10.0 ** (math.floor(math.log10(lo)) + 1)
    elif lo is None:
        if min_not_zero is not None and min_not_zero < hi:
            # Data touches zero: anchor on the decade of the smallest positive value.
            lo = 10.0 ** math.floor(math.log10(min_not_zero))
        else:
            lo = 10.0 ** (math.floor(math.log10(hi)) - 1)

    if min_not_zero is None:
        if lo > 0:
            min_not_zero = lo
        elif hi < 1:
            min_not_zero = 10.0 ** math.floor(math.log10(hi))
        else:
            min_not_zero = DEFAULT_LOG_MIN
    return DataRange(min=float(lo), max=float(hi), min_not_zero=float(min_not_zero))


def first_tick_value(value: float) -> float:
    exp = math.floor(math.log10(value))
    significand = math.floor(value / 10.0**exp)
    return snap_to_nice(significand * 10.0**exp)


def snap_to_nice(value: float, tolerance: float = SNAP_TOLERANCE) -> float:
    """Return the nearest ``s * 10^k`` (s in 1..10) within ``tolerance``; widen the window one decade each way."""
    if not _positive(value):
        return value
    exp = math.floor(math.log10(value))
    for window in (0, 1):
        best: float | None = None
        best_dev = tolerance
        for k in range(exp - window, exp + window + 1):
            base = 10.0**k
            for s in range(1, 11):
                candidate = _round_sig(s * base)
                dev = abs(candidate - value) / candidate
                if dev <= best_dev:
                    best = candidate
                    best_dev = dev
        if best is not None:
            return best
    return value


def generate_logarithmic_ticks(options: TickGenerationOptions, data_range: DataRange) -> list[Tick]:
    rng = log_range(data_range)
    lower = float(options.min) if _positive(options.min) else rng.min
    upper = float(options.max) if _positive(options.max) else rng.max
    if lower >= upper:
        lower, upper = rng.min, rng.max
    if lower <= 0:
        lower = 10.0 ** math.floor(math.log10(rng.min_not_zero or DEFAULT_LOG_MIN))

    tick_val = first_tick_value(lower)
    exp = math.floor(math.log10(tick_val))
    significand = int(round(tick_val / 10.0**exp))
    if significand >= 10:
        significand = 1
        exp += 1
    end_exp = math.floor(math.log10(upper))
    end_significand = math.ceil(upper / 10.0**end_exp - 1e-9)

    values: list[float] = []
    while exp < end_exp or (exp == end_exp and significand < end_significand):
        values.append(snap_to_nice(significand * 10.0**exp))
        significand += 1
        if significand == 10:
            significand = 1
            exp += 1
        if len(values) > 10_000:
            LOGGER.warning("logarithmic tick generation hit the safety bound for range [%g, %g]", lower, upper)
            break
    last = float(options.max) if _positive(options.max) else snap_to_nice(significand * 10.0**exp)
    if not values or last > values[-1]:
        values.append(last)
    if _positive(options.min) and values[0] != float(options.min):
        values[0] = float(options.min)

    ticks = [Tick(value=v, major=is_major(v)) for v in values]
    return thin_log_ticks(ticks, options.max_ticks)


def thin_log_ticks(ticks: list[Tick], max_ticks: int) -> list[Tick]:
    if len(ticks) <= max_ticks:
        return ticks
    for allowed in (NICE_SIGNIFICANDS, (1,)):
        kept = [
            t
            for i, t in enumerate(ticks)
            if i == 0 or i == len(ticks) - 1 or _significand(float(t.value)) in allowed
        ]
        if len(kept) <= max_ticks or allowed == (1,):
            return kept
    return ticks


def is_major(value: float) -> bool:
    return _significand(value) == 1


def _significand(value: float) -> int:
    if not _positive(value):
        return 0
    exp = math.floor(math.log10(value))
    return int(round(value / 10.0**exp))


def _round_sig(value: float, digits: int = 12) -> float:
    return float(f"{value:.{digits}g}")


def _positive(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value) and value > 0
