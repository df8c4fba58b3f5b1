# basketcheck/models/analytics.py

"""Result types produced by the inflation engine."""

from dataclasses import dataclass
from datetime import datetime
from typing import NamedTuple


@dataclass(frozen=True)
class CPIDataPoint:
    """Personal and reference CPI for one calendar month."""

    date: datetime
    personal_cpi: float
    reference_cpi: float
    month_label: str


@dataclass(frozen=True)
class ForecastPoint:
    """Projected basket cost for a future month."""

    date: datetime
    projected_cost: float
    month_label: str


@dataclass(frozen=True)
class PurchasingPowerPoint:
    """How many baskets one salary buys in a given month."""

    date: datetime
    baskets_affordable: float
    month_label: str


@dataclass(frozen=True)
class PriceAnomaly:
    """A product whose price moved across the one-month cutoff."""

    product_name: str
    previous_price: float
    current_price: float
    change_percent: float


@dataclass(frozen=True)
class CategoryInflationItem:
    """Cost change for one product category across the cutoff."""

    category: str
    change_percent: float
    previous_cost: float
    current_cost: float


@dataclass(frozen=True)
class YearOverYear:
    """Basket cost today versus one calendar year ago."""

    current_cost: float
    year_ago_cost: float
    change_percent: float
    year_ago_label: str


@dataclass(frozen=True)
class PriceHistoryPoint:
    date: datetime
    price: float
    month_label: str


class RegressionResult(NamedTuple):
    """Ordinary least-squares fit ``y = slope * x + intercept``."""

    slope: float
    intercept: float
