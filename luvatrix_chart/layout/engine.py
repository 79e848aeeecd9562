"""Box layout around the chart area.

The engine fits vertical boxes first, then horizontal boxes against the
narrower area, and re-fits the vertical side once when a full-width
horizontal box changed size. Within a pass, boxes fitted before a change of
their own dimension are fitted again. Every extra pass spends one round of a
fixed budget; when the budget is gone the engine keeps the geometry it has.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

from luvatrix_chart.geometry import ChartArea, Edge, Padding, Rect
from luvatrix_chart.layout.box import LayoutBox

LOGGER = logging.getLogger(__name__)


@dataclass
class _BoxLayout:
    box: LayoutBox
    index: int
    horizontal: bool
    max_width: float = 0.0
    max_height: float = 0.0
    size: float = 0.0


@dataclass
class _AreaState:
    outer_width: float
    outer_height: float
    padding: Padding
    left: float
    top: float
    right: float
    bottom: float
    w: float
    h: float
    x: float
    y: float
    max_padding: dict[str, float] = field(default_factory=dict)

    def inset(self, edge: str) -> float:
        return getattr(self, edge)

    def add_inset(self, edge: str, delta: float) -> None:
        setattr(self, edge, getattr(self, edge) + delta)

    def combined(self, a: str, b: str) -> float:
        return max(self.max_padding[a], self.inset(a)) + max(self.max_padding[b], self.inset(b))


class LayoutEngine:
    def __init__(self, padding: Padding | float | None = None, *, max_rounds: int = 3) -> None:
        if max_rounds < 0:
            raise ValueError("max_rounds must be >= 0")
        self.padding = Padding.coerce(padding)
        self.max_rounds = int(max_rounds)
        self.last_fit_counts: dict[str, int] = {}
        self._rounds_left = 0

    def update(self, boxes: Sequence[LayoutBox], outer_width: float, outer_height: float) -> ChartArea:
        outer_width = max(0.0, float(outer_width))
        outer_height = max(0.0, float(outer_height))
        pad = self.padding
        available_width = max(0.0, outer_width - pad.width)
        available_height = max(0.0, outer_height - pad.height)

        by_edge: dict[Edge, list[_BoxLayout]] = {edge: [] for edge in Edge}
        for idx, box in enumerate(boxes):
            by_edge[box.position].append(_BoxLayout(box=box, index=idx, horizontal=box.is_horizontal()))
        left = _sort_by_weight(by_edge[Edge.LEFT], reverse=True)
        top = _sort_by_weight(by_edge[Edge.TOP], reverse=True)
        right = _sort_by_weight(by_edge[Edge.RIGHT])
        bottom = _sort_by_weight(by_edge[Edge.BOTTOM])
        vertical = left + right
        horizontal = top + bottom

        v_box_max_width = available_width / 2.0 / max(1, len(vertical))
        h_box_max_height = available_height / 2.0
        # Boxes that are not full width are measured against the current area.
        for layout in vertical:
            layout.max_width = v_box_max_width
            layout.max_height = available_height if layout.box.full_width else 0.0
        for layout in horizontal:
            layout.max_width = available_width if layout.box.full_width else 0.0
            layout.max_height = h_box_max_height

        area = _AreaState(
            outer_width=outer_width,
            outer_height=outer_height,
            padding=pad,
            left=pad.left,
            top=pad.top,
            right=pad.right,
            bottom=pad.bottom,
            w=available_width,
            h=available_height,
            x=pad.left,
            y=pad.top,
            max_padding={"left": pad.left, "top": pad.top, "right": pad.right, "bottom": pad.bottom},
        )

        self.last_fit_counts = {"vertical": 0, "horizontal": 0, "refits": 0, "measure_calls": 0}
        self._rounds_left = self.max_rounds

        self._fit_boxes(vertical, area, "vertical")
        if self._fit_boxes(horizontal, area, "horizontal") and vertical:
            if self._spend_round("vertical re-fit"):
                self._fit_boxes(vertical, area, "vertical")

        _handle_max_padding(area)
        _place_boxes(left + top, area)
        area.x += area.w
        area.y += area.h
        _place_boxes(right + bottom, area)

        chart_area = ChartArea(
            left=area.left,
            top=area.top,
            right=area.left + max(0.0, area.w),
            bottom=area.top + max(0.0, area.h),
        )
        for layout in by_edge[Edge.CHART_AREA]:
            box = layout.box
            box.measure(chart_area.width, chart_area.height, Padding())
            box.place(chart_area)
        return chart_area

    def _fit_boxes(self, layouts: list[_BoxLayout], area: _AreaState, kind: str) -> bool:
        """Fit ``layouts`` in order; return True when the other dimension changed."""
        if not layouts:
            return False
        self.last_fit_counts[kind] = self.last_fit_counts.get(kind, 0) + 1
        refit: list[_BoxLayout] = []
        needs_refit = False
        changed_other = False
        for layout in layouts:
            box = layout.box
            box.measure(layout.max_width or area.w, layout.max_height or area.h, _margins(layout.horizontal, area))
            self.last_fit_counts["measure_calls"] += 1
            same, other = _update_dims(area, layout)
            needs_refit = needs_refit or (same and bool(refit))
            changed_other = changed_other or other
            if not box.full_width:
                refit.append(layout)
        if needs_refit and self._spend_round(f"{kind} re-fit"):
            self.last_fit_counts["refits"] += 1
            return self._fit_boxes(refit, area, kind) or changed_other
        return changed_other

    def _spend_round(self, what: str) -> bool:
        if self._rounds_left <= 0:
            LOGGER.warning("layout round cap (%d) reached before %s; keeping last geometry", self.max_rounds, what)
            return False
        self._rounds_left -= 1
        return True


def _sort_by_weight(layouts: list[_BoxLayout], *, reverse: bool = False) -> list[_BoxLayout]:
    if reverse:
        return sorted(layouts, key=lambda item: (-item.box.weight, item.index))
    return sorted(layouts, key=lambda item: (item.box.weight, item.index))


def _update_dims(area: _AreaState, layout: _BoxLayout) -> tuple[bool, bool]:
    """Apply a freshly measured box to the area; return ``(same_changed, other_changed)``."""
    box = layout.box
    edge = box.position.value
    area.add_inset(edge, -layout.size)
    old_size = layout.size
    layout.size = box.height if layout.horizontal else box.width
    area.add_inset(edge, layout.size)

    box_padding = box.get_padding()
    for side in ("left", "top", "right", "bottom"):
        area.max_padding[side] = max(area.max_padding[side], getattr(box_padding, side))

    new_w = max(0.0, area.outer_width - area.combined("left", "right"))
    new_h = max(0.0, area.outer_height - area.combined("top", "bottom"))
    width_changed = new_w != area.w
    height_changed = new_h != area.h
    area.w = new_w
    area.h = new_h
    if layout.horizontal:
        # Only a full-width box spans the vertical columns and feeds back into them.
        other = box.full_width and (layout.size != old_size or width_changed)
        return width_changed, other
    return height_changed, width_changed


def _margins(horizontal: bool, area: _AreaState) -> Padding:
    mp = area.max_padding
    if horizontal:
        return Padding(left=max(area.left, mp["left"]), right=max(area.right, mp["right"]))
    return Padding(top=max(area.top, mp["top"]), bottom=max(area.bottom, mp["bottom"]))


def _handle_max_padding(area: _AreaState) -> None:
    def take(edge: str) -> float:
        change = max(area.max_padding[edge] - area.inset(edge), 0.0)
        area.add_inset(edge, change)
        return change

    area.y += take("top")
    area.x += take("left")
    take("right")
    take("bottom")


def _place_boxes(layouts: list[_BoxLayout], area: _AreaState) -> None:
    pad = area.padding
    x, y = area.x, area.y
    for layout in layouts:
        box = layout.box
        if layout.horizontal:
            height = box.height
            if box.full_width:
                rect = Rect(left=pad.left, top=y, right=max(pad.left, area.outer_width - pad.right), bottom=y + height)
            else:
                rect = Rect(left=area.left, top=y, right=area.left + area.w, bottom=y + height)
            box.place(rect)
            y = rect.bottom
        else:
            width = box.width
            if box.full_width:
                rect = Rect(left=x, top=pad.top, right=x + width, bottom=max(pad.top, area.outer_height - pad.bottom))
            else:
                rect = Rect(left=x, top=area.top, right=x + width, bottom=area.top + area.h)
            box.place(rect)
            x = rect.right
    area.x = x
    area.y = y
