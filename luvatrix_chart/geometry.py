from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Edge(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CHART_AREA = "chartArea"

    @classmethod
    def parse(cls, value: "Edge | str") -> "Edge":
        if isinstance(value, Edge):
            return value
        raw = str(value).strip()
        for edge in cls:
            if edge.value == raw or edge.value.lower() == raw.lower() or edge.name.lower() == raw.lower():
                return edge
        raise ValueError(f"unknown edge: {value!r}")

    @property
    def is_horizontal(self) -> bool:
        return self in (Edge.TOP, Edge.BOTTOM)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Padding:
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.left + self.right

    @property
    def height(self) -> float:
        return self.top + self.bottom

    @classmethod
    def coerce(cls, value: "Padding | float | int | Mapping[str, Any] | None") -> "Padding":
        if value is None:
            return cls()
        if isinstance(value, Padding):
            return value
        if isinstance(value, (int, float)):
            v = float(value)
            return cls(left=v, top=v, right=v, bottom=v)
        return cls(
            left=float(value.get("left", 0.0)),
            top=float(value.get("top", 0.0)),
            right=float(value.get("right", 0.0)),
            bottom=float(value.get("bottom", 0.0)),
        )

    def merge_max(self, other: "Padding") -> "Padding":
        return Padding(
            left=max(self.left, other.left),
            top=max(self.top, other.top),
            right=max(self.right, other.right),
            bottom=max(self.bottom, other.bottom),
        )


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class ChartArea(Rect):
    """Region left for plotting once every chrome box is placed."""

    def __post_init__(self) -> None:
        if self.right < self.left or self.bottom < self.top:
            raise ValueError("ChartArea width/height must be >= 0")

    @property
    def center(self) -> tuple[float, float]:
        return ((self.left + self.right) / 2.0, (self.top + self.bottom) / 2.0)
