# basketcheck/services/basket_service.py

"""Reads basket snapshots from a repository and runs the engine on them."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from basketcheck.config.settings import Settings
from basketcheck.engine import inflation_engine as engine
from basketcheck.models.analytics import (
    CategoryInflationItem,
    CPIDataPoint,
    ForecastPoint,
    PriceAnomaly,
    PriceHistoryPoint,
    PurchasingPowerPoint,
    YearOverYear,
)
from basketcheck.models.price_record import PriceRecord
from basketcheck.models.product import Product
from basketcheck.storage.repository import BasketRepository

logger = logging.getLogger("basketcheck.service")


@dataclass
class BasketSummary:
    """Headline figures for the basket at one moment."""

    current_cost: float
    previous_month_cost: float
    change_amount: float
    change_percent: float
    average_annual_inflation: float
    monthly_growth_rate: float
    product_count: int
    record_count: int
    cpi: list[CPIDataPoint] = field(default_factory=list)
    year_over_year: YearOverYear | None = None


class BasketService:
    """Entry point for callers that want analytics over stored data.

    Each call takes a fresh snapshot from the repository; nothing is
    cached between calls.
    """

    def __init__(
        self,
        repository: BasketRepository,
        now: datetime | None = None,
    ) -> None:
        self.repository = repository
        self._fixed_now = now

    @property
    def now(self) -> datetime:
        return self._fixed_now or datetime.now()

    def _snapshot(self) -> tuple[list[Product], list[PriceRecord]]:
        return (
            self.repository.list_products(),
            self.repository.list_price_records(),
        )

    # ── Basket cost ──────────────────────────────────────

    def current_basket_cost(self) -> float:
        products, records = self._snapshot()
        return engine.current_basket_cost(products, records, now=self.now)

    def previous_month_basket_cost(self) -> float:
        products, records = self._snapshot()
        return engine.previous_month_basket_cost(
            products, records, now=self.now,
        )

    def basket_change_amount(self) -> float:
        return self.current_basket_cost() - self.previous_month_basket_cost()

    def basket_change_percent(self) -> float:
        """Month-over-month change; 0 when last month had no basket."""
        previous = self.previous_month_basket_cost()
        if previous <= 0:
            return 0.0
        return (self.current_basket_cost() - previous) / previous * 100

    def basket_as_budget_percent(self, budget: float) -> float | None:
        current = self.current_basket_cost()
        if budget <= 0 or current <= 0:
            return None
        return current / budget * 100

    # ── Series ───────────────────────────────────────────

    def monthly_cpi(self) -> list[CPIDataPoint]:
        products, records = self._snapshot()
        return engine.monthly_cpi(products, records, now=self.now)

    def average_annual_inflation(self) -> float:
        return engine.average_annual_inflation(self.monthly_cpi())

    def estimated_monthly_growth_rate(self) -> float:
        products, records = self._snapshot()
        return engine.estimated_monthly_growth_rate(
            products, records, now=self.now,
        )

    def forecast(
        self,
        months: int = Settings.FORECAST_MONTHS,
        monthly_growth_percent: float | None = None,
    ) -> list[ForecastPoint]:
        """Project the current basket forward.

        Uses the estimated monthly growth rate unless a rate is given.
        """
        rate = (
            self.estimated_monthly_growth_rate()
            if monthly_growth_percent is None
            else monthly_growth_percent
        )
        return engine.forecast(
            self.current_basket_cost(), rate, months, now=self.now,
        )

    def purchasing_power(self, salary: float) -> list[PurchasingPowerPoint]:
        products, records = self._snapshot()
        return engine.purchasing_power_history(
            salary, products, records, now=self.now,
        )

    def anomalies(self) -> list[PriceAnomaly]:
        products, records = self._snapshot()
        return engine.detect_anomalies(products, records, now=self.now)

    def category_inflation(self) -> list[CategoryInflationItem]:
        products, records = self._snapshot()
        return engine.category_inflation(products, records, now=self.now)

    def year_over_year(self) -> YearOverYear | None:
        products, records = self._snapshot()
        return engine.year_over_year(products, records, now=self.now)

    def price_history(self, product_id: str) -> list[PriceHistoryPoint]:
        return engine.price_history(
            product_id, self.repository.list_price_records(),
        )

    def categories(self) -> list[str]:
        """Distinct non-empty categories, sorted."""
        return sorted({
            p.category for p in self.repository.list_products()
            if p.category
        })

    # ── Summary ──────────────────────────────────────────

    def summary(self) -> BasketSummary:
        """Compute every headline figure from one snapshot."""
        products, records = self._snapshot()
        now = self.now

        current = engine.current_basket_cost(products, records, now=now)
        previous = engine.previous_month_basket_cost(
            products, records, now=now,
        )
        change_percent = (
            (current - previous) / previous * 100 if previous > 0 else 0.0
        )
        cpi = engine.monthly_cpi(products, records, now=now)

        summary = BasketSummary(
            current_cost=current,
            previous_month_cost=previous,
            change_amount=current - previous,
            change_percent=change_percent,
            average_annual_inflation=engine.average_annual_inflation(cpi),
            monthly_growth_rate=engine.estimated_monthly_growth_rate(
                products, records, now=now,
            ),
            product_count=len(products),
            record_count=len(records),
            cpi=cpi,
            year_over_year=engine.year_over_year(products, records, now=now),
        )
        logger.debug(
            "Summary: %d products, %d records, cost %.2f",
            summary.product_count, summary.record_count, current,
        )
        return summary
