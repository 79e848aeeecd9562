from __future__ import annotations

import unittest

from luvatrix_chart.geometry import ChartArea, Edge, Padding, Size
from luvatrix_chart.layout import LayoutBox, LayoutEngine, Legend, Title
from luvatrix_chart.text import FontSpec, MonospaceTextMeasurer


class _FixedBox(LayoutBox):
    """Box with a fixed thickness and an optional overhang."""

    def __init__(self, thickness: float, *, overhang: Padding | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.thickness = thickness
        self.overhang = overhang or Padding()
        self.measure_calls: list[tuple[float, float]] = []

    def measure(self, max_width: float, max_height: float, margins: Padding | None = None) -> Size:
        self.measure_calls.append((max_width, max_height))
        if self.is_horizontal():
            self.width, self.height = max_width, min(self.thickness, max_height)
        else:
            self.width, self.height = min(self.thickness, max_width), max_height
        return Size(self.width, self.height)

    def get_padding(self) -> Padding:
        return self.overhang


class LayoutEngineTests(unittest.TestCase):
    def test_boxes_dock_around_chart_area(self) -> None:
        left = _FixedBox(50.0, position=Edge.LEFT)
        title = _FixedBox(30.0, position=Edge.TOP, full_width=True, weight=2000)
        bottom = _FixedBox(20.0, position=Edge.BOTTOM)
        engine = LayoutEngine()
        area = engine.update([left, title, bottom], 400.0, 300.0)

        self.assertEqual(area, ChartArea(left=50.0, top=30.0, right=400.0, bottom=280.0))
        self.assertEqual((left.left, left.top, left.right, left.bottom), (0.0, 30.0, 50.0, 280.0))
        self.assertEqual((title.left, title.top, title.right, title.bottom), (0.0, 0.0, 400.0, 30.0))
        self.assertEqual((bottom.left, bottom.top, bottom.right, bottom.bottom), (50.0, 280.0, 400.0, 300.0))

    def test_full_width_height_change_refits_vertical_boxes(self) -> None:
        left = _FixedBox(50.0, position=Edge.LEFT)
        title = _FixedBox(30.0, position=Edge.TOP, full_width=True)
        engine = LayoutEngine()
        engine.update([left, title], 400.0, 300.0)
        self.assertEqual(engine.last_fit_counts["vertical"], 2)
        self.assertEqual(engine.last_fit_counts["horizontal"], 1)
        self.assertEqual(left.measure_calls, [(200.0, 300.0), (200.0, 270.0)])

    def test_boxes_that_are_not_full_width_measure_against_current_area(self) -> None:
        left = _FixedBox(100.0, position=Edge.LEFT)
        bottom = _FixedBox(20.0, position=Edge.BOTTOM)
        LayoutEngine().update([left, bottom], 400.0, 300.0)
        self.assertEqual(bottom.measure_calls, [(300.0, 150.0)])
        self.assertEqual(bottom.right - bottom.left, 300.0)

    def test_overhang_without_full_width_box_needs_no_second_vertical_pass(self) -> None:
        left = _FixedBox(50.0, position=Edge.LEFT)
        bottom = _FixedBox(20.0, position=Edge.BOTTOM, overhang=Padding(left=80.0))
        engine = LayoutEngine()
        area = engine.update([left, bottom], 400.0, 300.0)
        self.assertEqual(engine.last_fit_counts["vertical"], 1)
        self.assertEqual(engine.last_fit_counts["horizontal"], 1)
        self.assertEqual(len(left.measure_calls), 1)
        self.assertEqual(area.left, 80.0)
        self.assertEqual(area.right, 400.0)

    def test_height_change_inside_vertical_pass_refits_earlier_boxes(self) -> None:
        first = _FixedBox(40.0, position=Edge.LEFT)
        second = _FixedBox(40.0, position=Edge.RIGHT, overhang=Padding(top=10.0, bottom=10.0))
        engine = LayoutEngine()
        area = engine.update([first, second], 400.0, 300.0)
        self.assertEqual(engine.last_fit_counts["refits"], 1)
        self.assertEqual(engine.last_fit_counts["vertical"], 2)
        self.assertEqual(area, ChartArea(left=40.0, top=10.0, right=360.0, bottom=290.0))

    def test_round_cap_keeps_geometry_and_warns(self) -> None:
        left = _FixedBox(50.0, position=Edge.LEFT)
        title = _FixedBox(30.0, position=Edge.TOP, full_width=True)
        engine = LayoutEngine(max_rounds=0)
        with self.assertLogs("luvatrix_chart.layout.engine", level="WARNING") as logs:
            area = engine.update([left, title], 400.0, 300.0)
        self.assertIn("round cap", logs.output[0])
        self.assertEqual(engine.last_fit_counts["vertical"], 1)
        self.assertEqual(area.left, 50.0)
        self.assertEqual(area.top, 30.0)

    def test_weights_order_boxes_on_the_same_edge(self) -> None:
        inner = _FixedBox(20.0, position=Edge.TOP, weight=0)
        outer = _FixedBox(30.0, position=Edge.TOP, weight=10)
        LayoutEngine().update([inner, outer], 200.0, 200.0)
        self.assertEqual(outer.top, 0.0)
        self.assertEqual(inner.top, 30.0)

    def test_chart_area_never_goes_negative(self) -> None:
        boxes = [
            _FixedBox(500.0, position=Edge.LEFT),
            _FixedBox(500.0, position=Edge.RIGHT),
            _FixedBox(500.0, position=Edge.TOP),
            _FixedBox(500.0, position=Edge.BOTTOM),
        ]
        for width, height in ((0.0, 0.0), (50.0, 40.0), (10.0, 900.0)):
            area = LayoutEngine(padding=5).update(boxes, width, height)
            self.assertGreaterEqual(area.width, 0.0)
            self.assertGreaterEqual(area.height, 0.0)

    def test_padding_insets_chart_area(self) -> None:
        area = LayoutEngine(padding=Padding(left=5, top=6, right=7, bottom=8)).update([], 100.0, 100.0)
        self.assertEqual(area, ChartArea(left=5.0, top=6.0, right=93.0, bottom=92.0))

    def test_chart_area_boxes_receive_final_area(self) -> None:
        overlay = _FixedBox(0.0, position=Edge.CHART_AREA)
        left = _FixedBox(25.0, position=Edge.LEFT)
        area = LayoutEngine().update([overlay, left], 200.0, 100.0)
        self.assertEqual(
            (overlay.left, overlay.top, overlay.right, overlay.bottom),
            (area.left, area.top, area.right, area.bottom),
        )
        self.assertEqual(overlay.measure_calls, [(175.0, 100.0)])

    def test_negative_round_budget_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            LayoutEngine(max_rounds=-1)


class TitleLegendTests(unittest.TestCase):
    def setUp(self) -> None:
        self.measurer = MonospaceTextMeasurer()

    def test_title_thickness_counts_lines_and_padding(self) -> None:
        title = Title(["Revenue", "2024"], measurer=self.measurer, font=FontSpec(size=10.0))
        size = title.measure(300.0, 200.0)
        self.assertAlmostEqual(size.height, 2 * 12.0 + 20.0)
        self.assertEqual(size.width, 300.0)

    def test_hidden_or_empty_title_takes_no_space(self) -> None:
        self.assertEqual(Title("", measurer=self.measurer).measure(300.0, 200.0), Size(0.0, 0.0))
        self.assertEqual(Title("x", measurer=self.measurer, display=False).measure(300.0, 200.0), Size(0.0, 0.0))

    def test_side_title_is_measured_across(self) -> None:
        title = Title("Revenue", measurer=self.measurer, font=FontSpec(size=10.0), position="left")
        size = title.measure(100.0, 200.0)
        self.assertAlmostEqual(size.width, 32.0)
        self.assertEqual(size.height, 200.0)

    def test_legend_wraps_rows_when_narrow(self) -> None:
        legend = Legend(["Alpha", "Beta"], measurer=self.measurer)
        wide = legend.measure(400.0, 200.0)
        self.assertAlmostEqual(wide.height, 32.0)
        self.assertEqual(len(legend.line_widths), 1)
        narrow = legend.measure(150.0, 200.0)
        self.assertAlmostEqual(narrow.height, 54.0)
        self.assertEqual(len(legend.line_widths), 2)

    def test_legend_rejects_negative_padding(self) -> None:
        with self.assertRaises(ValueError):
            Legend(["a"], measurer=self.measurer, padding=-1)


if __name__ == "__main__":
    unittest.main()
