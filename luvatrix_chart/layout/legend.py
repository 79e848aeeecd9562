from __future__ import annotations

from typing import Any, Mapping, Sequence

from luvatrix_chart.geometry import Edge, Padding, Size
from luvatrix_chart.layout.box import LayoutBox
from luvatrix_chart.text import FontSpec, TextMeasurer, end_pass, pass_start


class Legend(LayoutBox):
    """Sizes legend entries into wrapped rows (top/bottom) or columns (left/right).

    Each entry is a ``box_width`` swatch, half a font size of gap, then the text.
    Drawing the entries is left to the host.
    """

    def __init__(
        self,
        items: Sequence[str] = (),
        *,
        measurer: TextMeasurer,
        font: FontSpec | None = None,
        display: bool = True,
        box_width: float = 40.0,
        padding: float = 10.0,
        position: Edge | str = Edge.TOP,
        weight: float = 1000.0,
        full_width: bool = True,
    ) -> None:
        super().__init__(position=position, weight=weight, full_width=full_width)
        if box_width < 0:
            raise ValueError("box_width must be >= 0")
        if padding < 0:
            raise ValueError("padding must be >= 0")
        self.items = list(items)
        self.measurer = measurer
        self.font = font or FontSpec()
        self.display = bool(display)
        self.box_width = float(box_width)
        self.padding = float(padding)
        self.line_widths: list[float] = []
        self.column_widths: list[float] = []

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], items: Sequence[str], *, measurer: TextMeasurer, base_font: FontSpec
    ) -> "Legend":
        labels = options.get("labels") or {}
        return cls(
            items,
            measurer=measurer,
            font=FontSpec.from_options(labels.get("font"), base_font),
            display=bool(options.get("display", True)),
            box_width=float(labels.get("box_width", 40.0)),
            padding=float(labels.get("padding", 10.0)),
            position=options.get("position", Edge.TOP),
            weight=float(options.get("weight", 1000.0)),
            full_width=bool(options.get("full_width", True)),
        )

    def item_width(self, text: str) -> float:
        return self.box_width + self.font.size / 2.0 + self.measurer.measure_text_width(text, self.font)

    def measure(self, max_width: float, max_height: float, margins: Padding | None = None) -> Size:
        self.line_widths = []
        self.column_widths = []
        if not self.display:
            self.width = self.height = 0.0
            return Size(0.0, 0.0)

        start = pass_start(self.measurer)
        font_size = self.font.size
        if self.is_horizontal():
            width = max_width
            height = 10.0
            if self.items:
                line_widths = [0.0]
                total_height = 0.0
                for i, text in enumerate(self.items):
                    w = self.item_width(text)
                    if i == 0 or line_widths[-1] + w + 2 * self.padding > width:
                        total_height += font_size + self.padding
                        if i > 0:
                            line_widths.append(0.0)
                    line_widths[-1] += w + self.padding
                height += total_height
                self.line_widths = line_widths
            height = min(height, max_height)
        else:
            width = 10.0
            height = max_height
            if self.items:
                total_width = self.padding
                col_width = 0.0
                col_height = 0.0
                for i, text in enumerate(self.items):
                    w = self.item_width(text)
                    if i > 0 and col_height + font_size + 2 * self.padding > height:
                        total_width += col_width + self.padding
                        self.column_widths.append(col_width)
                        col_width = 0.0
                        col_height = 0.0
                    col_width = max(col_width, w)
                    col_height += font_size + self.padding
                total_width += col_width
                self.column_widths.append(col_width)
                width += total_width
            width = min(width, max_width)
        end_pass(self.measurer, start)

        self.width = width
        self.height = height
        return Size(width, height)
