from __future__ import annotations

import unittest

from clmm_yield.domain.services.leverage import (
    RANGE_PRESETS,
    calculate_estimated_rate,
    calculate_leverage,
    calculate_range_rate,
    derive_base_rate,
    price_range_from_percent,
)


class LeverageTests(unittest.TestCase):
    def test_plus_minus_ten_percent_is_about_ten_times(self):
        self.assertAlmostEqual(calculate_leverage(1.0, 0.9, 1.1), 9.987, places=2)

    def test_plus_minus_one_percent_is_about_hundred_times(self):
        self.assertAlmostEqual(calculate_leverage(1.0, 0.99, 1.01), 100.0, delta=0.1)

    def test_leverage_is_scale_invariant(self):
        self.assertAlmostEqual(
            calculate_leverage(2000.0, 1800.0, 2200.0),
            calculate_leverage(1.0, 0.9, 1.1),
            places=9,
        )

    def test_narrower_range_has_higher_leverage(self):
        self.assertGreater(calculate_leverage(1.0, 0.95, 1.05), calculate_leverage(1.0, 0.9, 1.1))

    def test_very_wide_range_is_floored_at_one(self):
        self.assertEqual(calculate_leverage(1.0, 0.01, 101.0), 1.0)

    def test_out_of_range_uses_range_width_only(self):
        expected = 1.0 / ((1.1 / 0.9) ** 0.5 - 1.0)
        self.assertAlmostEqual(calculate_leverage(2.0, 0.9, 1.1), expected, places=9)
        self.assertAlmostEqual(calculate_leverage(0.5, 0.9, 1.1), expected, places=9)

    def test_degenerate_inputs_return_one(self):
        self.assertEqual(calculate_leverage(0.0, 0.9, 1.1), 1.0)
        self.assertEqual(calculate_leverage(1.0, 0.0, 1.1), 1.0)
        self.assertEqual(calculate_leverage(1.0, 1.1, 0.9), 1.0)
        self.assertEqual(calculate_leverage(1.0, 1.0, 1.0), 1.0)
        self.assertEqual(calculate_leverage(1.0, None, 1.1), 1.0)


class RangeRateTests(unittest.TestCase):
    def test_reported_rate_is_calibrated_to_baseline_leverage(self):
        self.assertEqual(derive_base_rate(200.0), 10.0)
        self.assertEqual(derive_base_rate(0.0), 0.0)
        self.assertEqual(derive_base_rate(-5.0), 0.0)

    def test_estimated_rate_scales_base_by_leverage(self):
        self.assertEqual(calculate_estimated_rate(10.0, 5.0), 50.0)
        self.assertEqual(calculate_estimated_rate(10.0, 0.0), 10.0)
        self.assertEqual(calculate_estimated_rate(0.0, 5.0), 0.0)

    def test_range_rate_for_ten_percent_range(self):
        rate = calculate_range_rate(200.0, 1.0, 0.9, 1.1)

        self.assertEqual(rate.base_rate_pct, 10.0)
        self.assertAlmostEqual(rate.estimated_rate_pct, 100.0, delta=0.5)
        self.assertTrue(rate.is_concentrated)

    def test_full_range_is_not_concentrated(self):
        rate = calculate_range_rate(200.0, 1.0, 0.01, 101.0)

        self.assertEqual(rate.leverage, 1.0)
        self.assertEqual(rate.estimated_rate_pct, 10.0)
        self.assertFalse(rate.is_concentrated)


class PercentRangeTests(unittest.TestCase):
    def test_percent_offsets_resolve_to_prices(self):
        low, high = price_range_from_percent(100.0, -10, 10)
        self.assertAlmostEqual(low, 90.0, places=9)
        self.assertAlmostEqual(high, 110.0, places=9)

    def test_non_positive_price_returns_zeros(self):
        self.assertEqual(price_range_from_percent(0.0, -10, 10), (0.0, 0.0))

    def test_presets_cover_expected_labels(self):
        self.assertEqual([preset.label for preset in RANGE_PRESETS], ["±10%", "±1%", "-50%/+100%", "Full"])
        low, high = price_range_from_percent(1.0, RANGE_PRESETS[-1].lower_pct, RANGE_PRESETS[-1].upper_pct)
        self.assertAlmostEqual(low, 0.01, places=9)
        self.assertAlmostEqual(high, 101.0, places=9)


if __name__ == "__main__":
    unittest.main()
