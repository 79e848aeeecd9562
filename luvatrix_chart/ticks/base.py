from __future__ import annotations

from dataclasses import dataclass
import math
import numbers

TickLabel = str | tuple[str, ...] | None


@dataclass(frozen=True)
class Tick:
    value: float | str | tuple[str, ...]
    label: TickLabel = None
    major: bool = False

    @property
    def skipped(self) -> bool:
        return self.label is None


@dataclass(frozen=True)
class DataRange:
    min: float
    max: float
    min_not_zero: float | None = None

    def normalized(self, default: tuple[float, float] = (0.0, 1.0)) -> "DataRange":
        lo, hi = self.min, self.max
        if not _finite(lo) or not _finite(hi):
            lo, hi = default
        if lo > hi:
            lo, hi = hi, lo
        min_not_zero = self.min_not_zero if _finite(self.min_not_zero) else None
        return DataRange(min=float(lo), max=float(hi), min_not_zero=min_not_zero)


@dataclass(frozen=True)
class TickGenerationOptions:
    max_ticks: int = 11
    step_size: float | None = None
    precision: int | None = None
    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        if self.max_ticks < 2:
            object.__setattr__(self, "max_ticks", 2)
        if self.step_size is not None and (not _finite(self.step_size) or self.step_size <= 0):
            object.__setattr__(self, "step_size", None)
        if self.precision is not None and self.precision < 0:
            object.__setattr__(self, "precision", None)


def _finite(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(float(value))
