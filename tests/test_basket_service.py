# tests/test_basket_service.py

"""Tests for the basket service over injected repositories."""

import unittest
from datetime import datetime, timedelta
from pathlib import Path

from basketcheck.models.price_record import PriceRecord
from basketcheck.models.product import Product
from basketcheck.services.basket_service import BasketService
from basketcheck.storage.basket_store import BasketStore
from basketcheck.storage.repository import InMemoryRepository

NOW = datetime(2026, 3, 15, 12, 0)


class TestBasketServiceInMemory(unittest.TestCase):
    """Service behaviour with an in-memory repository."""

    def setUp(self) -> None:
        self.bread = Product(name="Bread", category="Bakery")
        self.milk = Product(name="Milk", category="Dairy")
        self.repo = InMemoryRepository(
            products=[self.bread, self.milk],
            records=[
                PriceRecord(self.bread.id, 3.0, datetime(2026, 1, 5)),
                PriceRecord(self.milk.id, 1.0, datetime(2026, 1, 6)),
                PriceRecord(self.bread.id, 3.3, NOW - timedelta(days=3)),
                PriceRecord(self.milk.id, 1.2, NOW - timedelta(days=2)),
            ],
        )
        self.service = BasketService(self.repo, now=NOW)

    def test_basket_costs(self) -> None:
        """Current and previous month costs come from the engine."""
        self.assertAlmostEqual(self.service.current_basket_cost(), 4.5)
        self.assertAlmostEqual(self.service.previous_month_basket_cost(), 4.0)
        self.assertAlmostEqual(self.service.basket_change_amount(), 0.5)
        self.assertAlmostEqual(self.service.basket_change_percent(), 12.5)

    def test_change_percent_without_previous(self) -> None:
        """No basket last month means 0% change."""
        service = BasketService(
            InMemoryRepository(
                products=[self.bread],
                records=[PriceRecord(self.bread.id, 3.0, NOW)],
            ),
            now=NOW,
        )
        self.assertEqual(service.basket_change_percent(), 0.0)

    def test_budget_percent(self) -> None:
        """Budget share is None without a budget."""
        self.assertAlmostEqual(self.service.basket_as_budget_percent(9.0), 50.0)
        self.assertIsNone(self.service.basket_as_budget_percent(0.0))

    def test_sees_repository_changes(self) -> None:
        """Every call reads a fresh snapshot."""
        before = self.service.current_basket_cost()
        self.repo.records.append(
            PriceRecord(self.milk.id, 2.0, NOW - timedelta(hours=1)),
        )
        self.assertAlmostEqual(
            self.service.current_basket_cost(), before + 0.8,
        )

    def test_forecast_uses_given_rate(self) -> None:
        """An explicit rate overrides the estimated trend."""
        points = self.service.forecast(2, monthly_growth_percent=10.0)
        self.assertEqual(len(points), 3)
        self.assertAlmostEqual(points[2].projected_cost, 4.5 * 1.21)

    def test_forecast_defaults_to_trend(self) -> None:
        """Without a rate the estimated CPI trend is used."""
        # CPI is 0% in February and 12.5% in March
        self.assertAlmostEqual(
            self.service.estimated_monthly_growth_rate(), 12.5,
        )
        points = self.service.forecast(3)
        self.assertEqual(len(points), 4)
        self.assertAlmostEqual(points[-1].projected_cost, 4.5 * 1.125 ** 3)

    def test_anomalies_and_categories(self) -> None:
        """Both analyses see the same cutoff."""
        names = {a.product_name for a in self.service.anomalies()}
        self.assertEqual(names, {"Bread", "Milk"})
        categories = [c.category for c in self.service.category_inflation()]
        self.assertEqual(categories, ["Dairy", "Bakery"])

    def test_categories_sorted(self) -> None:
        """Distinct categories in alphabetical order."""
        self.assertEqual(self.service.categories(), ["Bakery", "Dairy"])

    def test_price_history(self) -> None:
        """History is filtered to the product."""
        history = self.service.price_history(self.bread.id)
        self.assertEqual([h.price for h in history], [3.0, 3.3])

    def test_summary(self) -> None:
        """The summary gathers headline figures."""
        summary = self.service.summary()
        self.assertEqual(summary.product_count, 2)
        self.assertEqual(summary.record_count, 4)
        self.assertAlmostEqual(summary.current_cost, 4.5)
        self.assertAlmostEqual(summary.change_percent, 12.5)
        self.assertEqual(len(summary.cpi), 2)
        self.assertIsNone(summary.year_over_year)


class TestBasketServiceWithStore(unittest.TestCase):
    """The SQLite store satisfies the repository interface."""

    def setUp(self) -> None:
        self.store = BasketStore(db_path=Path(":memory:"))

    def tearDown(self) -> None:
        self.store.close()

    def test_sample_basket_has_positive_inflation(self) -> None:
        """Sample prices only rise, so CPI ends above zero."""
        self.store.load_sample_data(now=NOW)
        service = BasketService(self.store, now=NOW)
        series = service.monthly_cpi()
        self.assertEqual(len(series), 6)
        self.assertGreater(series[-1].personal_cpi, 0)
        self.assertGreater(service.average_annual_inflation(), 0)
        self.assertGreater(service.estimated_monthly_growth_rate(), 0)
        power = service.purchasing_power(self.store.get_settings().salary)
        self.assertEqual(len(power), 7)
        self.assertGreater(power[0].baskets_affordable, power[-1].baskets_affordable)


if __name__ == "__main__":
    unittest.main()
