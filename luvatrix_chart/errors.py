from __future__ import annotations


class ChartError(Exception):
    """Base class for luvatrix_chart errors."""


class ChartConfigError(ChartError, ValueError):
    """Raised at configuration time for options the chart cannot honour."""


class UnknownScaleTypeError(ChartConfigError):
    def __init__(self, scale_type: object) -> None:
        super().__init__(f"unknown scale type: {scale_type!r}")
        self.scale_type = scale_type


class UnknownTickFormatterError(ChartConfigError):
    def __init__(self, name: object) -> None:
        super().__init__(f"unknown tick formatter: {name!r}")
        self.name = name


class UnknownEasingError(ChartConfigError):
    def __init__(self, name: object) -> None:
        super().__init__(f"unknown easing function: {name!r}")
        self.name = name


class ScaleStateError(ChartError, RuntimeError):
    """Raised when a scale operation runs before the lifecycle step it needs."""
