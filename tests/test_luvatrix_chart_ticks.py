from __future__ import annotations

import math
import unittest

from luvatrix_chart.autoskip import auto_skip, factorize, tick_footprint
from luvatrix_chart.errors import ChartConfigError, UnknownTickFormatterError
from luvatrix_chart.ticks import (
    DataRange,
    Tick,
    TickGenerationOptions,
    format_abbreviated,
    format_linear,
    format_logarithmic,
    format_values,
    generate_category_ticks,
    generate_linear_ticks,
    generate_logarithmic_ticks,
    get_tick_formatter,
    log_range,
    nice_number,
    register_tick_formatter,
    resolve_category_index,
)
from luvatrix_chart.ticks.formatters import TICK_FORMATTERS
from luvatrix_chart.ticks.linear import widen_degenerate_range


class LinearTickTests(unittest.TestCase):
    def test_zero_to_hundred_uses_steps_of_ten(self) -> None:
        ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=11), DataRange(0.0, 100.0))
        self.assertEqual(ticks, [float(v) for v in range(0, 101, 10)])

    def test_range_is_resolved_when_rounded_bounds_overflow_budget(self) -> None:
        ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=6), DataRange(-5.0, 95.0))
        self.assertEqual(ticks, [-20.0, 0.0, 20.0, 40.0, 60.0, 80.0, 100.0])

    def test_ticks_are_ascending_and_cover_data(self) -> None:
        for lo, hi in ((0.3, 7.9), (-1234.0, 87.0), (0.001, 0.0042), (5e5, 5.5e5)):
            ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=8), DataRange(lo, hi))
            self.assertEqual(ticks, sorted(ticks))
            self.assertLessEqual(ticks[0], lo)
            self.assertGreaterEqual(ticks[-1], hi)

    def test_spacing_below_precision_floor_returns_bounds(self) -> None:
        ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=11), DataRange(1.0, 1.0 + 1e-15))
        self.assertEqual(len(ticks), 2)

    def test_non_finite_range_falls_back_to_unit_interval(self) -> None:
        ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=11), DataRange(math.nan, math.nan))
        self.assertEqual(ticks[0], 0.0)
        self.assertEqual(ticks[-1], 1.0)
        self.assertEqual(len(ticks), 11)

    def test_degenerate_range_is_widened(self) -> None:
        self.assertEqual(widen_degenerate_range(5.0, 5.0), (4.0, 6.0))
        self.assertEqual(widen_degenerate_range(0.0, 0.0), (-1.0, 1.0))
        self.assertEqual(widen_degenerate_range(1000.0, 1000.0), (950.0, 1050.0))

    def test_explicit_step_size_is_respected(self) -> None:
        ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=5, step_size=25.0), DataRange(0.0, 100.0))
        self.assertEqual(ticks, [0.0, 25.0, 50.0, 75.0, 100.0])

    def test_pinned_bounds_replace_the_extremes(self) -> None:
        ticks = generate_linear_ticks(TickGenerationOptions(max_ticks=11, min=-3.0, max=97.0), DataRange(-3.0, 97.0))
        self.assertEqual(ticks[0], -3.0)
        self.assertEqual(ticks[-1], 97.0)

    def test_nice_number_snaps_to_1_2_5(self) -> None:
        self.assertEqual(nice_number(0.7), 1.0)
        self.assertEqual(nice_number(13.0), 20.0)
        self.assertEqual(nice_number(420.0), 500.0)
        self.assertEqual(nice_number(0.0), 1.0)


class LogarithmicTickTests(unittest.TestCase):
    def test_zero_in_data_anchors_on_smallest_positive_value(self) -> None:
        ticks = generate_logarithmic_ticks(TickGenerationOptions(max_ticks=11), DataRange(0.0, 1000.0, 1.0))
        values = [t.value for t in ticks]
        self.assertEqual(values, [1.0, 2.0, 5.0, 10.0, 20.0, 50.0, 100.0, 200.0, 500.0, 1000.0])
        self.assertTrue(all(v > 0 for v in values))

    def test_major_flags_mark_decades(self) -> None:
        ticks = generate_logarithmic_ticks(TickGenerationOptions(max_ticks=11), DataRange(0.0, 1000.0, 1.0))
        majors = [t.value for t in ticks if t.major]
        self.assertEqual(majors, [1.0, 10.0, 100.0, 1000.0])

    def test_log_range_repairs_non_positive_input(self) -> None:
        rng = log_range(DataRange(-5.0, -1.0))
        self.assertEqual((rng.min, rng.max), (1.0, 10.0))
        equal = log_range(DataRange(50.0, 50.0))
        self.assertEqual((equal.min, equal.max), (1.0, 100.0))

    def test_log_range_fills_a_missing_bound_from_the_other(self) -> None:
        touches_zero = log_range(DataRange(0.0, 500.0, 3.0))
        self.assertEqual((touches_zero.min, touches_zero.max, touches_zero.min_not_zero), (1.0, 500.0, 3.0))
        no_positive_min = log_range(DataRange(0.0, 500.0))
        self.assertEqual((no_positive_min.min, no_positive_min.max), (10.0, 500.0))
        self.assertEqual(no_positive_min.min_not_zero, 10.0)
        no_positive_max = log_range(DataRange(20.0, -1.0))
        self.assertEqual((no_positive_max.min, no_positive_max.max), (20.0, 100.0))

    def test_ticks_without_smallest_positive_value_stay_positive(self) -> None:
        ticks = generate_logarithmic_ticks(TickGenerationOptions(max_ticks=11), DataRange(0.0, 500.0))
        self.assertEqual(ticks[0].value, 10.0)
        self.assertTrue(all(float(t.value) > 0 for t in ticks))


class CategoryTickTests(unittest.TestCase):
    def test_slice_by_index_bounds(self) -> None:
        ticks = generate_category_ticks(["a", "b", "c", "d"], 1, 2)
        self.assertEqual([t.value for t in ticks], ["b", "c"])

    def test_bounds_resolve_by_label_or_index(self) -> None:
        labels = ["jan", "feb", "mar"]
        self.assertEqual(resolve_category_index(labels, "mar", 0), 2)
        self.assertEqual(resolve_category_index(labels, "dec", 0), 0)
        self.assertEqual(resolve_category_index(labels, 7, 0), 2)

    def test_multiline_labels_become_tuples(self) -> None:
        ticks = generate_category_ticks([["Q1", "2024"], "Q2"])
        self.assertEqual(ticks[0].value, ("Q1", "2024"))


class FormatterTests(unittest.TestCase):
    def test_linear_formatter_uses_step_decimals(self) -> None:
        values = [0.0, 0.5, 1.0, 1.5]
        self.assertEqual([format_linear(v, i, values) for i, v in enumerate(values)], ["0", "0.5", "1", "1.5"])

    def test_values_formatter_drops_integral_fraction(self) -> None:
        self.assertEqual(format_values(3.0, 0, []), "3")
        self.assertEqual(format_values("jan", 0, []), "jan")

    def test_logarithmic_formatter_keeps_nice_significands(self) -> None:
        values = [100.0, 200.0, 300.0, 400.0, 1000.0]
        self.assertEqual(format_logarithmic(200.0, 1, values), "200")
        self.assertEqual(format_logarithmic(300.0, 2, values), "")
        self.assertEqual(format_logarithmic(1000.0, 4, values), "1000")

    def test_abbreviated_formatter(self) -> None:
        self.assertEqual(format_abbreviated(7841319402), "7.8B")
        self.assertEqual(format_abbreviated(1259), "1.2k")
        self.assertEqual(format_abbreviated(725.019), "725")
        self.assertEqual(format_abbreviated("abc"), "N/A")
        self.assertEqual(format_abbreviated(-2_500_000), "-2.5M")

    def test_unknown_formatter_name_raises(self) -> None:
        with self.assertRaises(UnknownTickFormatterError):
            get_tick_formatter("roman")
        with self.assertRaises(ChartConfigError):
            get_tick_formatter("roman")

    def test_registered_formatter_is_resolvable(self) -> None:
        def upper(value, index, values):
            return str(value).upper()

        register_tick_formatter("upper", upper)
        try:
            self.assertIs(get_tick_formatter("upper"), upper)
        finally:
            TICK_FORMATTERS.pop("upper", None)


def _labelled(n: int) -> list[Tick]:
    return [Tick(value=float(i), label=str(i)) for i in range(n)]


class AutoSkipTests(unittest.TestCase):
    def test_fifty_ticks_on_short_axis_keep_eight_labels(self) -> None:
        out = auto_skip(_labelled(50), axis_length=300.0, tick_size=40.0)
        shown = [i for i, t in enumerate(out) if not t.skipped]
        self.assertEqual(shown, [0, 7, 14, 21, 28, 35, 42, 49])
        self.assertEqual(len(out), 50)

    def test_first_and_last_labels_survive(self) -> None:
        out = auto_skip(_labelled(20), axis_length=100.0, tick_size=30.0)
        shown = [i for i, t in enumerate(out) if not t.skipped]
        self.assertEqual(shown, [0, 6, 12, 19])

    def test_extremes_always_labelled(self) -> None:
        for n in range(2, 60, 7):
            for length in (50.0, 120.0, 333.0):
                out = auto_skip(_labelled(n), axis_length=length, tick_size=25.0)
                self.assertFalse(out[0].skipped)
                self.assertFalse(out[-1].skipped)

    def test_roomy_axis_keeps_everything(self) -> None:
        out = auto_skip(_labelled(5), axis_length=1000.0, tick_size=20.0)
        self.assertTrue(all(not t.skipped for t in out))

    def test_max_ticks_limit_overrides_geometry(self) -> None:
        out = auto_skip(_labelled(11), axis_length=1000.0, tick_size=1.0, max_ticks_limit=5)
        shown = [i for i, t in enumerate(out) if not t.skipped]
        self.assertEqual(shown, [0, 2, 4, 6, 8, 10])

    def test_factorize_excludes_value(self) -> None:
        self.assertEqual(factorize(12), [1, 2, 3, 4, 6])

    def test_footprint_for_unrotated_horizontal_label_is_width(self) -> None:
        self.assertAlmostEqual(tick_footprint(30.0, 12.0, 0.0, horizontal=True), 30.0)
        self.assertAlmostEqual(tick_footprint(30.0, 12.0, 0.0, horizontal=False), 12.0)


if __name__ == "__main__":
    unittest.main()
