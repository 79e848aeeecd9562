from __future__ import annotations

from abc import ABC, abstractmethod

from luvatrix_chart.geometry import Edge, Padding, Rect, Size


class LayoutBox(ABC):
    """A chrome participant (axis, legend, title) placed on one chart edge."""

    def __init__(self, *, position: Edge | str = Edge.TOP, weight: float = 0.0, full_width: bool = False) -> None:
        self.position = Edge.parse(position)
        self.weight = float(weight)
        self.full_width = bool(full_width)
        self.left = 0.0
        self.top = 0.0
        self.right = 0.0
        self.bottom = 0.0
        self.width = 0.0
        self.height = 0.0

    def is_horizontal(self) -> bool:
        return self.position.is_horizontal

    @abstractmethod
    def measure(self, max_width: float, max_height: float, margins: Padding | None = None) -> Size:
        """Size the box within the given bounds; sets ``width``/``height``."""
        raise NotImplementedError

    def place(self, rect: Rect) -> None:
        self.left = rect.left
        self.top = rect.top
        self.right = rect.right
        self.bottom = rect.bottom
        self.width = rect.width
        self.height = rect.height

    def get_padding(self) -> Padding:
        """Overhang the box needs beyond its own edge (e.g. the first/last tick label)."""
        return Padding()

    @property
    def rect(self) -> Rect:
        return Rect(left=self.left, top=self.top, right=self.right, bottom=self.bottom)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self.position.value!r}, weight={self.weight:g})"
