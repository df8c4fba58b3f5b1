# tests/test_models.py

"""Tests for the basket dataclasses."""

import unittest
from datetime import datetime

from basketcheck.models.analytics import CPIDataPoint, RegressionResult
from basketcheck.models.price_record import PriceRecord
from basketcheck.models.product import Product
from basketcheck.models.user_settings import UserSettings


class TestProductModel(unittest.TestCase):
    """Product dataclass unit tests."""

    def test_defaults(self) -> None:
        """Optional fields default to expected values."""
        product = Product(name="Bread")
        self.assertEqual(product.category, "General")
        self.assertEqual(product.unit, "piece")
        self.assertIsNone(product.photo_data)
        self.assertIsInstance(product.created_at, datetime)
        self.assertTrue(product.id)

    def test_blank_category_becomes_general(self) -> None:
        """Empty or whitespace categories are normalised."""
        self.assertEqual(Product(name="X", category="").category, "General")
        self.assertEqual(Product(name="X", category="  ").category, "General")

    def test_ids_are_unique(self) -> None:
        """Each product gets its own identity."""
        self.assertNotEqual(Product(name="A").id, Product(name="A").id)

    def test_explicit_id_kept(self) -> None:
        """A stored id is preserved."""
        self.assertEqual(Product(name="A", id="abc").id, "abc")


class TestPriceRecordModel(unittest.TestCase):
    """PriceRecord dataclass unit tests."""

    def test_fields(self) -> None:
        """All fields are stored correctly."""
        at = datetime(2026, 1, 2, 3, 4)
        record = PriceRecord(
            product_id="p1", price=2.5, date=at, product_name="Milk",
        )
        self.assertEqual(record.product_id, "p1")
        self.assertEqual(record.price, 2.5)
        self.assertEqual(record.date, at)
        self.assertEqual(record.product_name, "Milk")
        self.assertTrue(record.id)


class TestAnalyticsModels(unittest.TestCase):
    """Engine result types."""

    def test_cpi_point_is_immutable(self) -> None:
        """Result points are frozen."""
        point = CPIDataPoint(datetime(2026, 1, 1), 1.0, 0.2, "Jan 26")
        with self.assertRaises(AttributeError):
            point.personal_cpi = 2.0  # type: ignore[misc]

    def test_regression_unpacks(self) -> None:
        """RegressionResult behaves like a (slope, intercept) tuple."""
        slope, intercept = RegressionResult(1.5, -2.0)
        self.assertEqual((slope, intercept), (1.5, -2.0))


class TestUserSettings(unittest.TestCase):
    """Currency symbols."""

    def test_known_symbols(self) -> None:
        """Known codes map to symbols."""
        for code, symbol in (("GBP", "£"), ("INR", "₹"), ("CAD", "C$")):
            with self.subTest(code=code):
                self.assertEqual(UserSettings(currency=code).currency_symbol, symbol)

    def test_unknown_code_falls_back(self) -> None:
        """Unmapped currencies display their code."""
        self.assertEqual(UserSettings(currency="SEK").currency_symbol, "SEK")


if __name__ == "__main__":
    unittest.main()
