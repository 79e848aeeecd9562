from __future__ import annotations

from typing import Any, Mapping, Sequence

from luvatrix_chart.geometry import Edge, Padding, Size
from luvatrix_chart.layout.box import LayoutBox
from luvatrix_chart.text import FontSpec, TextMeasurer


class Title(LayoutBox):
    """Chart title; one or more lines, rotated when docked left/right."""

    def __init__(
        self,
        text: str | Sequence[str] = "",
        *,
        measurer: TextMeasurer,
        font: FontSpec | None = None,
        display: bool = True,
        padding: float = 10.0,
        position: Edge | str = Edge.TOP,
        weight: float = 2000.0,
        full_width: bool = True,
    ) -> None:
        super().__init__(position=position, weight=weight, full_width=full_width)
        if padding < 0:
            raise ValueError("padding must be >= 0")
        self.text = text
        self.measurer = measurer
        self.font = font or FontSpec(style="bold")
        self.display = bool(display)
        self.padding = float(padding)

    @classmethod
    def from_options(cls, options: Mapping[str, Any], *, measurer: TextMeasurer, base_font: FontSpec) -> "Title":
        return cls(
            options.get("text", ""),
            measurer=measurer,
            font=FontSpec.from_options(options.get("font"), base_font),
            display=bool(options.get("display", True)),
            padding=float(options.get("padding", 10.0)),
            position=options.get("position", Edge.TOP),
            weight=float(options.get("weight", 2000.0)),
            full_width=bool(options.get("full_width", True)),
        )

    @property
    def lines(self) -> list[str]:
        if isinstance(self.text, str):
            return [self.text] if self.text else []
        return [str(line) for line in self.text]

    def measure(self, max_width: float, max_height: float, margins: Padding | None = None) -> Size:
        lines = self.lines
        if not self.display or not lines:
            self.width = self.height = 0.0
            return Size(0.0, 0.0)
        thickness = len(lines) * self.measurer.line_height(self.font) + self.padding * 2.0
        if self.is_horizontal():
            self.width = max_width
            self.height = min(thickness, max_height)
        else:
            self.width = min(thickness, max_width)
            self.height = max_height
        return Size(self.width, self.height)
