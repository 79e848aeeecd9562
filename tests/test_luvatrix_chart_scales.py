from __future__ import annotations

import math
import unittest

from luvatrix_chart.config import resolve_config
from luvatrix_chart.data import normalize_chart_data
from luvatrix_chart.defaults import SCALE_DEFAULTS
from luvatrix_chart.errors import ChartConfigError, ScaleStateError, UnknownScaleTypeError
from luvatrix_chart.geometry import Edge, Padding, Rect
from luvatrix_chart.layout import LayoutEngine
from luvatrix_chart.scales import (
    CategoryScale,
    LinearScale,
    LogarithmicScale,
    RadialLinearScale,
    ScaleKind,
    ScaleState,
    create_scale,
)
from luvatrix_chart.text import MonospaceTextMeasurer

MEASURER = MonospaceTextMeasurer()


def _scale(kind: str, scale_id: str, data: dict, **options):
    resolved = resolve_config(SCALE_DEFAULTS["common"], SCALE_DEFAULTS[kind], {"type": kind}, options)
    return create_scale(scale_id, resolved, measurer=MEASURER, data=normalize_chart_data(data))


def _configure_vertical(scale, height: float = 300.0):
    scale.measure(100.0, height, Padding())
    scale.place(Rect(left=0.0, top=0.0, right=scale.width, bottom=height))
    return scale


def _configure_horizontal(scale, width: float = 400.0):
    scale.measure(width, 100.0, Padding())
    scale.place(Rect(left=0.0, top=0.0, right=width, bottom=scale.height))
    return scale


class ScaleFactoryTests(unittest.TestCase):
    def test_factory_builds_each_kind(self) -> None:
        data = {"labels": ["a"], "datasets": [{"data": [1]}]}
        self.assertIsInstance(_scale("linear", "y", data), LinearScale)
        self.assertIsInstance(_scale("logarithmic", "y", data), LogarithmicScale)
        self.assertIsInstance(_scale("category", "x", data, position="bottom"), CategoryScale)
        self.assertIsInstance(_scale("radialLinear", "r", data), RadialLinearScale)

    def test_unknown_scale_type_raises(self) -> None:
        with self.assertRaises(UnknownScaleTypeError):
            create_scale("x", {"type": "time"}, measurer=MEASURER)
        with self.assertRaises(ChartConfigError):
            create_scale("x", {}, measurer=MEASURER)

    def test_kind_parse_accepts_names(self) -> None:
        self.assertIs(ScaleKind.parse("radialLinear"), ScaleKind.RADIAL_LINEAR)
        self.assertIs(ScaleKind.parse("LOGARITHMIC"), ScaleKind.LOGARITHMIC)


class LinearScaleTests(unittest.TestCase):
    def test_vertical_pixels_grow_downward_from_max(self) -> None:
        scale = _configure_vertical(_scale("linear", "y", {"datasets": [{"data": [0, 50, 100]}]}))
        self.assertIs(scale.state, ScaleState.PIXEL_CONFIGURED)
        self.assertAlmostEqual(scale.get_pixel_for_value(100), 0.0)
        self.assertAlmostEqual(scale.get_pixel_for_value(0), 300.0)
        self.assertAlmostEqual(scale.get_pixel_for_value(50), 150.0)
        self.assertAlmostEqual(scale.get_value_for_pixel(75.0), 75.0)

    def test_pixel_mapping_round_trips(self) -> None:
        scale = _configure_vertical(_scale("linear", "y", {"datasets": [{"data": [-3, 42, 97]}]}))
        for value in (-3.0, 0.0, 12.5, 33.0, 96.9):
            self.assertAlmostEqual(scale.get_value_for_pixel(scale.get_pixel_for_value(value)), value, places=6)

    def test_reverse_flips_direction(self) -> None:
        scale = _configure_vertical(_scale("linear", "y", {"datasets": [{"data": [0, 100]}]}, reverse=True))
        self.assertAlmostEqual(scale.get_pixel_for_value(0), 0.0)
        self.assertAlmostEqual(scale.get_pixel_for_value(100), 300.0)

    def test_ticks_cover_data_and_stay_ascending(self) -> None:
        scale = _configure_vertical(_scale("linear", "y", {"datasets": [{"data": [0, 100]}]}))
        values = [t.value for t in scale.all_ticks]
        self.assertEqual(values, [float(v) for v in range(0, 101, 10)])
        self.assertEqual(scale.all_ticks[-1].label, "100")

    def test_stacked_limits_sum_by_sign(self) -> None:
        data = {"datasets": [{"data": [1, 2]}, {"data": [3, -4]}]}
        limits = _scale("linear", "y", data, stacked=True).determine_data_limits()
        self.assertEqual((limits.min, limits.max), (-4.0, 4.0))

    def test_stack_groups_are_separate(self) -> None:
        data = {"datasets": [{"data": [1, 2], "stack": "a"}, {"data": [3, 4], "stack": "b"}]}
        limits = _scale("linear", "y", data).determine_data_limits()
        self.assertEqual((limits.min, limits.max), (0.0, 4.0))

    def test_begin_at_zero_and_suggested_max(self) -> None:
        data = {"datasets": [{"data": [5, 10]}]}
        limits = _scale("linear", "y", data, begin_at_zero=True, suggested_max=50).determine_data_limits()
        self.assertEqual((limits.min, limits.max), (0.0, 50.0))

    def test_explicit_min_wins_over_data(self) -> None:
        limits = _scale("linear", "y", {"datasets": [{"data": [5, 10]}]}, min=7).determine_data_limits()
        self.assertEqual((limits.min, limits.max), (7.0, 10.0))

    def test_single_value_is_widened(self) -> None:
        limits = _scale("linear", "y", {"datasets": [{"data": [3, 3, 3]}]}).determine_data_limits()
        self.assertEqual((limits.min, limits.max), (2.0, 4.0))
        zero = _scale("linear", "y", {"datasets": [{"data": [0, 0]}]}, begin_at_zero=True).determine_data_limits()
        self.assertEqual((zero.min, zero.max), (0.0, 1.0))

    def test_no_finite_data_uses_unit_range(self) -> None:
        limits = _scale("linear", "y", {"datasets": [{"data": [None, "x"]}]}).determine_data_limits()
        self.assertEqual((limits.min, limits.max), (0.0, 1.0))

    def test_hidden_datasets_are_ignored(self) -> None:
        data = {"datasets": [{"data": [1, 2]}, {"data": [500], "hidden": True}]}
        limits = _scale("linear", "y", data).determine_data_limits()
        self.assertEqual(limits.max, 2.0)


class ScaleStateTests(unittest.TestCase):
    def test_pixel_mapping_before_configure_raises(self) -> None:
        scale = _scale("linear", "y", {"datasets": [{"data": [1, 2]}]})
        with self.assertRaises(ScaleStateError):
            scale.get_pixel_for_value(1.0)
        with self.assertRaises(ScaleStateError):
            scale.build_ticks()

    def test_fitted_scale_is_not_yet_pixel_configured(self) -> None:
        scale = _scale("linear", "y", {"datasets": [{"data": [1, 2]}]})
        scale.measure(100.0, 300.0, Padding())
        self.assertIs(scale.state, ScaleState.FITTED)
        with self.assertRaises(ScaleStateError):
            scale.get_value_for_pixel(10.0)

    def test_invalidate_resets_to_unconfigured(self) -> None:
        scale = _configure_vertical(_scale("linear", "y", {"datasets": [{"data": [1, 2]}]}))
        scale.invalidate(data=normalize_chart_data({"datasets": [{"data": [10, 20]}]}))
        self.assertIs(scale.state, ScaleState.UNCONFIGURED)
        with self.assertRaises(ScaleStateError):
            scale.get_pixel_for_value(15.0)
        _configure_vertical(scale)
        self.assertGreaterEqual(scale.max, 20.0)


class LogarithmicScaleTests(unittest.TestCase):
    def test_zero_in_data_never_produces_zero_tick(self) -> None:
        scale = _configure_vertical(_scale("logarithmic", "y", {"datasets": [{"data": [0, 1, 1000]}]}))
        values = [t.value for t in scale.all_ticks]
        self.assertTrue(all(v > 0 for v in values))
        self.assertEqual((scale.min, scale.max), (1.0, 1000.0))

    def test_decades_are_evenly_spaced(self) -> None:
        scale = _configure_vertical(_scale("logarithmic", "y", {"datasets": [{"data": [1, 1000]}]}))
        self.assertAlmostEqual(scale.get_pixel_for_value(1), 300.0)
        self.assertAlmostEqual(scale.get_pixel_for_value(10), 200.0)
        self.assertAlmostEqual(scale.get_pixel_for_value(1000), 0.0)
        self.assertAlmostEqual(scale.get_value_for_pixel(100.0), 100.0)

    def test_non_positive_value_maps_to_start(self) -> None:
        scale = _configure_vertical(_scale("logarithmic", "y", {"datasets": [{"data": [1, 1000]}]}))
        self.assertAlmostEqual(scale.get_pixel_for_value(0), 300.0)


class CategoryScaleTests(unittest.TestCase):
    DATA = {"labels": ["a", "b", "c", "d"], "datasets": [{"data": [1, 2, 3, 4]}]}

    def test_horizontal_labels_run_left_to_right(self) -> None:
        scale = _configure_horizontal(_scale("category", "x", self.DATA, position="bottom"))
        self.assertAlmostEqual(scale.get_pixel_for_value("a"), 0.0)
        self.assertAlmostEqual(scale.get_pixel_for_value("d"), 400.0)
        self.assertEqual(scale.get_value_for_pixel(140.0), 1)

    def test_vertical_labels_run_top_to_bottom(self) -> None:
        scale = _configure_vertical(_scale("category", "y", self.DATA, position="left"))
        self.assertLess(scale.get_pixel_for_value("a"), scale.get_pixel_for_value("d"))
        self.assertAlmostEqual(scale.get_pixel_for_value("a"), 0.0)

    def test_offset_centres_labels_in_their_band(self) -> None:
        scale = _configure_horizontal(_scale("category", "x", self.DATA, position="bottom", offset=True))
        self.assertAlmostEqual(scale.get_pixel_for_value(None, index=0), 50.0)
        self.assertAlmostEqual(scale.get_pixel_for_tick(3), 350.0)
        self.assertEqual(scale.get_value_for_pixel(149.0), 1)

    def test_min_max_slice_labels(self) -> None:
        scale = _configure_horizontal(_scale("category", "x", self.DATA, position="bottom", min="b", max="c"))
        self.assertEqual([t.value for t in scale.all_ticks], ["b", "c"])
        self.assertAlmostEqual(scale.get_pixel_for_value("b"), 0.0)
        self.assertAlmostEqual(scale.get_pixel_for_value("c"), 400.0)

    def test_label_lookup_by_index(self) -> None:
        scale = _scale("category", "x", self.DATA, position="bottom")
        self.assertEqual(scale.get_label_for_index(2), "c")
        self.assertIsNone(scale.get_label_for_index(9))


class RadialLinearScaleTests(unittest.TestCase):
    DATA = {"labels": ["a", "b", "c", "d", "e"], "datasets": [{"data": [1, 2, 3, 4, 5]}]}

    def _laid_out(self) -> RadialLinearScale:
        scale = _scale("radialLinear", "r", self.DATA, position="left")
        LayoutEngine().update([scale], 300.0, 300.0)
        return scale

    def test_radial_scale_sits_in_chart_area(self) -> None:
        scale = self._laid_out()
        self.assertIs(scale.position, Edge.CHART_AREA)
        self.assertEqual(scale.axis, "r")
        self.assertIs(scale.state, ScaleState.PIXEL_CONFIGURED)
        self.assertGreater(scale.drawing_area, 0.0)
        self.assertLessEqual(scale.drawing_area, 150.0)

    def test_distance_runs_from_centre_to_drawing_area(self) -> None:
        scale = self._laid_out()
        self.assertAlmostEqual(scale.get_distance_from_center_for_value(scale.min), 0.0)
        self.assertAlmostEqual(scale.get_distance_from_center_for_value(scale.max), scale.drawing_area)
        self.assertAlmostEqual(scale.get_value_for_distance_from_center(scale.get_distance_from_center_for_value(3)), 3.0)
        self.assertTrue(math.isnan(scale.get_distance_from_center_for_value(None)))

    def test_first_spoke_points_up(self) -> None:
        scale = self._laid_out()
        x, y = scale.get_point_position_for_value(0, scale.max)
        self.assertAlmostEqual(x, scale.x_center)
        self.assertAlmostEqual(y, scale.y_center - scale.drawing_area)
        self.assertAlmostEqual(scale.get_index_angle(1), math.radians(72.0))


class PixelRoundTripTests(unittest.TestCase):
    def assertRelativelyClose(self, actual: float, expected: float, tolerance: float = 1e-6) -> None:
        self.assertLessEqual(abs(actual - expected), tolerance * max(abs(expected), 1.0))

    def test_reversed_linear_round_trips(self) -> None:
        scale = _configure_vertical(_scale("linear", "y", {"datasets": [{"data": [-20, 80]}]}, reverse=True))
        for value in (scale.min, -7.25, 0.0, 33.3, scale.max):
            self.assertRelativelyClose(scale.get_value_for_pixel(scale.get_pixel_for_value(value)), value)
        horizontal = _configure_horizontal(
            _scale("linear", "x", {"datasets": [{"data": [0, 10]}]}, position="bottom", reverse=True)
        )
        self.assertAlmostEqual(horizontal.get_value_for_pixel(horizontal.get_pixel_for_value(2.5)), 2.5)

    def test_logarithmic_round_trips_across_decades(self) -> None:
        scale = _configure_vertical(_scale("logarithmic", "y", {"datasets": [{"data": [1, 100000]}]}))
        for value in (1.0, 3.7, 42.0, 999.0, 12345.6, 100000.0):
            back = scale.get_value_for_pixel(scale.get_pixel_for_value(value))
            self.assertLessEqual(abs(back - value) / value, 1e-6)

    def test_category_round_trips_with_and_without_offset(self) -> None:
        data = CategoryScaleTests.DATA
        labels = data["labels"]
        for offset in (False, True):
            with self.subTest(offset=offset, axis="x"):
                scale = _configure_horizontal(_scale("category", "x", data, position="bottom", offset=offset))
                for index, label in enumerate(labels):
                    self.assertEqual(scale.get_value_for_pixel(scale.get_pixel_for_value(label)), index)
            with self.subTest(offset=offset, axis="y"):
                scale = _configure_vertical(_scale("category", "y", data, position="left", offset=offset))
                for index, label in enumerate(labels):
                    self.assertEqual(scale.get_value_for_pixel(scale.get_pixel_for_value(label)), index)

    def test_radial_distance_round_trips(self) -> None:
        scale = _scale("radialLinear", "r", RadialLinearScaleTests.DATA, position="left")
        LayoutEngine().update([scale], 300.0, 300.0)
        midpoint = (scale.min + scale.max) / 2.0
        for value in (scale.min, 1.5, midpoint, 4.2, scale.max):
            distance = scale.get_distance_from_center_for_value(value)
            self.assertRelativelyClose(scale.get_value_for_distance_from_center(distance), value)
            self.assertRelativelyClose(scale.get_value_for_pixel(scale.get_pixel_for_value(value)), value)


if __name__ == "__main__":
    unittest.main()
