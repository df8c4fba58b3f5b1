# tests/test_calendar_and_reference.py

"""Tests for calendar helpers, reference rates and regression."""

import unittest
from datetime import datetime

from basketcheck.engine.calendar_utils import (
    add_months,
    add_years,
    month_grid,
    month_label,
    start_of_month,
)
from basketcheck.engine.reference_inflation import (
    ANNUAL_RATES,
    annual_rate_for_year,
    cumulative_rate,
    monthly_rate_for_year,
)
from basketcheck.engine.regression import linear_regression


class TestCalendarUtils(unittest.TestCase):
    """Calendar month arithmetic."""

    def test_add_months_clamps_day(self) -> None:
        """31 March minus a month lands on the last day of February."""
        self.assertEqual(
            add_months(datetime(2026, 3, 31, 9, 15), -1),
            datetime(2026, 2, 28, 9, 15),
        )
        self.assertEqual(
            add_months(datetime(2024, 3, 31), -1),
            datetime(2024, 2, 29),
        )

    def test_add_months_crosses_year(self) -> None:
        """Stepping past December rolls the year."""
        self.assertEqual(
            add_months(datetime(2025, 12, 15), 1), datetime(2026, 1, 15),
        )

    def test_add_years_leap_day(self) -> None:
        """29 February plus one year becomes 28 February."""
        self.assertEqual(
            add_years(datetime(2024, 2, 29), 1), datetime(2025, 2, 28),
        )

    def test_start_of_month(self) -> None:
        """Time and day are reset."""
        self.assertEqual(
            start_of_month(datetime(2026, 5, 17, 23, 59)),
            datetime(2026, 5, 1),
        )

    def test_month_grid_inclusive(self) -> None:
        """Grid runs from the earliest month through the current month."""
        grid = month_grid(datetime(2025, 11, 20), datetime(2026, 2, 3))
        self.assertEqual(grid, [
            datetime(2025, 11, 1),
            datetime(2025, 12, 1),
            datetime(2026, 1, 1),
            datetime(2026, 2, 1),
        ])

    def test_month_grid_single_month(self) -> None:
        """Same month gives a single entry."""
        grid = month_grid(datetime(2026, 2, 10), datetime(2026, 2, 11))
        self.assertEqual(grid, [datetime(2026, 2, 1)])

    def test_month_label(self) -> None:
        """Labels look like ``Mar 26``."""
        self.assertEqual(month_label(datetime(2026, 3, 9)), "Mar 26")


class TestReferenceInflation(unittest.TestCase):
    """Static reference rate table."""

    def test_known_year(self) -> None:
        """Table years return their rate."""
        self.assertEqual(annual_rate_for_year(2022), 8.0)
        self.assertAlmostEqual(monthly_rate_for_year(2022), 8.0 / 12)

    def test_unknown_year_uses_default(self) -> None:
        """Years off the table fall back to 2.5%."""
        self.assertEqual(annual_rate_for_year(1999), 2.5)
        self.assertAlmostEqual(monthly_rate_for_year(2042), 2.5 / 12)

    def test_table_covers_2018_to_2030(self) -> None:
        """Every year in the documented range is present."""
        self.assertEqual(sorted(ANNUAL_RATES), list(range(2018, 2031)))

    def test_cumulative_rate_excludes_start_month(self) -> None:
        """January to April of one year sums three months."""
        total = cumulative_rate(datetime(2026, 1, 10), datetime(2026, 4, 2))
        self.assertAlmostEqual(total, 3 * monthly_rate_for_year(2026))

    def test_cumulative_rate_across_years(self) -> None:
        """November 2025 to February 2026 mixes both years' rates."""
        total = cumulative_rate(datetime(2025, 11, 1), datetime(2026, 2, 1))
        expected = monthly_rate_for_year(2025) + 2 * monthly_rate_for_year(2026)
        self.assertAlmostEqual(total, expected)

    def test_cumulative_rate_same_month_zero(self) -> None:
        """No months elapse within the start month."""
        self.assertEqual(
            cumulative_rate(datetime(2026, 3, 1), datetime(2026, 3, 30)), 0.0,
        )

    def test_cumulative_rate_reversed_years_zero(self) -> None:
        """An end before the start year yields zero."""
        self.assertEqual(
            cumulative_rate(datetime(2027, 1, 1), datetime(2026, 6, 1)), 0.0,
        )


class TestLinearRegression(unittest.TestCase):
    """Least-squares line fitting."""

    def test_perfect_line(self) -> None:
        """Points on y = 2x + 1 recover slope and intercept."""
        result = linear_regression([(0, 1), (1, 3), (2, 5), (3, 7)])
        self.assertAlmostEqual(result.slope, 2.0)
        self.assertAlmostEqual(result.intercept, 1.0)

    def test_empty(self) -> None:
        """No points gives a zero line."""
        self.assertEqual(linear_regression([]), (0.0, 0.0))

    def test_single_point(self) -> None:
        """One point gives a flat line through it."""
        self.assertEqual(linear_regression([(4.0, 7.5)]), (0.0, 7.5))

    def test_vertical_points(self) -> None:
        """Equal x values give zero slope and the mean of y."""
        result = linear_regression([(2, 1), (2, 3), (2, 8)])
        self.assertEqual(result.slope, 0.0)
        self.assertAlmostEqual(result.intercept, 4.0)

    def test_noisy_fit(self) -> None:
        """A noisy upward trend has a positive slope."""
        result = linear_regression([(0, 0.0), (1, 1.5), (2, 1.8), (3, 3.1)])
        self.assertAlmostEqual(result.slope, 0.96)
        self.assertAlmostEqual(result.intercept, 0.16)


if __name__ == "__main__":
    unittest.main()
