# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from basketcheck.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.DATA_DIR, Path)
        self.assertIsInstance(Settings.DB_PATH, Path)
        self.assertIsInstance(Settings.EXPORTS_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_db_lives_in_data_dir(self) -> None:
        """The database file sits inside the data directory."""
        self.assertEqual(Settings.DB_PATH.parent, Settings.DATA_DIR)

    def test_catalog_defaults(self) -> None:
        """Products default to the General category and piece unit."""
        self.assertEqual(Settings.DEFAULT_CATEGORY, "General")
        self.assertEqual(Settings.DEFAULT_UNIT, "piece")
        self.assertEqual(Settings.DEFAULT_CURRENCY, "USD")

    def test_default_reference_rate(self) -> None:
        """Years off the table use 2.5% a year."""
        self.assertEqual(Settings.DEFAULT_REFERENCE_RATE, 2.5)

    def test_forecast_months_positive(self) -> None:
        """FORECAST_MONTHS must be >= 1."""
        self.assertGreaterEqual(Settings.FORECAST_MONTHS, 1)

    def test_default_currency_has_symbol(self) -> None:
        """The default currency is in the symbol table."""
        self.assertIn(Settings.DEFAULT_CURRENCY, Settings.CURRENCY_SYMBOLS)

    def test_sample_products_well_formed(self) -> None:
        """Every sample product has a name, category, unit and price."""
        names = [s[0] for s in Settings.SAMPLE_PRODUCTS]
        self.assertEqual(len(names), len(set(names)))
        for name, category, unit, price in Settings.SAMPLE_PRODUCTS:
            with self.subTest(name=name):
                self.assertTrue(category)
                self.assertTrue(unit)
                self.assertGreater(price, 0)


if __name__ == "__main__":
    unittest.main()
