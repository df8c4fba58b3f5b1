# basketcheck/engine/inflation_engine.py

"""Personal inflation analytics over product and price-record snapshots.

Every function here is pure: it reads the collections it is given,
never mutates them and keeps no state between calls. Insufficient data
is reported as an empty list, ``0.0`` or ``None``, never as an exception.

Functions that depend on the current moment take an optional ``now``
keyword; when omitted, :func:`datetime.now` is used.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime

from basketcheck.config.settings import Settings
from basketcheck.engine.calendar_utils import (
    add_months,
    add_years,
    month_grid,
    month_label,
)
from basketcheck.engine.reference_inflation import monthly_rate_for_year
from basketcheck.engine.regression import linear_regression
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

logger = logging.getLogger("basketcheck.engine")


def _latest_where(
    records: Iterable[PriceRecord],
    product_id: str,
    accept: Callable[[datetime], bool],
) -> PriceRecord | None:
    """Latest record for *product_id* whose date passes *accept*."""
    return max(
        (r for r in records if r.product_id == product_id and accept(r.date)),
        key=lambda r: r.date,
        default=None,
    )


def _change_percent(current: float, previous: float) -> float:
    return (current - previous) / previous * 100


def _records_grid(
    records: Sequence[PriceRecord], now: datetime,
) -> list[datetime]:
    earliest = min(r.date for r in records)
    return month_grid(earliest, now)


# ── Basket cost ──────────────────────────────────────────


def basket_cost_at(
    date: datetime,
    products: Sequence[Product],
    records: Sequence[PriceRecord],
) -> float:
    """Sum each product's latest price on or before *date*.

    Products with no record by then contribute nothing.
    """
    total = 0.0
    for product in products:
        latest = _latest_where(records, product.id, lambda d: d <= date)
        if latest is not None:
            total += latest.price
    return total


def current_basket_cost(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> float:
    """Basket cost as of now."""
    return basket_cost_at(now or datetime.now(), products, records)


def previous_month_basket_cost(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> float:
    """Basket cost as of one calendar month ago."""
    cutoff = add_months(now or datetime.now(), -1)
    return basket_cost_at(cutoff, products, records)


# ── Monthly CPI ──────────────────────────────────────────


def monthly_cpi(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> list[CPIDataPoint]:
    """Build the personal CPI series against a fixed baseline month.

    The baseline is the basket cost at the end of the first month that
    has a record. Each later month is expressed as the percentage change
    of its end-of-month basket cost from that baseline; months whose
    basket is still empty are skipped. The reference CPI accumulates
    the reference monthly rate for each emitted month only.
    """
    if not records:
        return []

    now = now or datetime.now()
    months = _records_grid(records, now)
    if len(months) < 2:
        logger.debug("CPI needs two calendar months, have %d", len(months))
        return []

    base_cost = basket_cost_at(add_months(months[0], 1), products, records)
    if base_cost <= 0:
        logger.debug("CPI baseline cost is zero, no series")
        return []

    reference_cumulative = 0.0
    series: list[CPIDataPoint] = []
    for month in months[1:]:
        cost = basket_cost_at(add_months(month, 1), products, records)
        if cost <= 0:
            continue

        reference_cumulative += monthly_rate_for_year(month.year)
        series.append(CPIDataPoint(
            date=month,
            personal_cpi=_change_percent(cost, base_cost),
            reference_cpi=reference_cumulative,
            month_label=month_label(month),
        ))

    return series


def average_annual_inflation(cpi_series: Sequence[CPIDataPoint]) -> float:
    """Annualise the cumulative personal CPI linearly (no compounding)."""
    if not cpi_series:
        return 0.0
    return cpi_series[-1].personal_cpi / len(cpi_series) * 12


def estimated_monthly_growth_rate(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> float:
    """Slope of the personal CPI series, in percent per month."""
    series = monthly_cpi(products, records, now=now)
    if len(series) < 2:
        return 0.0
    points = [
        (float(idx), point.personal_cpi)
        for idx, point in enumerate(series)
    ]
    return linear_regression(points).slope


# ── Forecast ─────────────────────────────────────────────


def forecast(
    current_cost: float,
    monthly_growth_percent: float,
    months: int,
    *,
    now: datetime | None = None,
) -> list[ForecastPoint]:
    """Compound *current_cost* monthly for months ``0..months`` inclusive."""
    now = now or datetime.now()
    rate = monthly_growth_percent / 100.0

    points: list[ForecastPoint] = []
    for m in range(months + 1):
        date = add_months(now, m)
        points.append(ForecastPoint(
            date=date,
            projected_cost=current_cost * (1 + rate) ** m,
            month_label=month_label(date),
        ))
    return points


# ── Purchasing power ─────────────────────────────────────


def purchasing_power_history(
    salary: float,
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> list[PurchasingPowerPoint]:
    """Baskets one *salary* buys at the end of each tracked month."""
    if salary <= 0 or not records:
        return []

    now = now or datetime.now()
    points: list[PurchasingPowerPoint] = []
    for month in _records_grid(records, now):
        cost = basket_cost_at(add_months(month, 1), products, records)
        if cost <= 0:
            continue
        points.append(PurchasingPowerPoint(
            date=month,
            baskets_affordable=salary / cost,
            month_label=month_label(month),
        ))
    return points


# ── Anomalies & categories ───────────────────────────────


def detect_anomalies(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> list[PriceAnomaly]:
    """Compare each product's price either side of a one-month cutoff.

    A product is reported only when it has a record on both sides;
    unlike basket cost, a missing side is never treated as zero.
    """
    cutoff = add_months(now or datetime.now(), -1)

    anomalies: list[PriceAnomaly] = []
    for product in products:
        recent = _latest_where(records, product.id, lambda d: d > cutoff)
        older = _latest_where(records, product.id, lambda d: d <= cutoff)
        if recent is None or older is None or older.price <= 0:
            continue
        anomalies.append(PriceAnomaly(
            product_name=product.name,
            previous_price=older.price,
            current_price=recent.price,
            change_percent=_change_percent(recent.price, older.price),
        ))

    anomalies.sort(key=lambda a: abs(a.change_percent), reverse=True)
    return anomalies


def category_inflation(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> list[CategoryInflationItem]:
    """Per-category cost change across the one-month cutoff.

    Categories with no cost before the cutoff are left out.
    """
    cutoff = add_months(now or datetime.now(), -1)

    by_category: dict[str, list[Product]] = {}
    for product in products:
        by_category.setdefault(product.category, []).append(product)

    items: list[CategoryInflationItem] = []
    for category, members in by_category.items():
        current_cost = 0.0
        previous_cost = 0.0
        for product in members:
            recent = _latest_where(records, product.id, lambda d: d > cutoff)
            older = _latest_where(records, product.id, lambda d: d <= cutoff)
            if recent is not None:
                current_cost += recent.price
            if older is not None:
                previous_cost += older.price

        if previous_cost <= 0:
            continue
        items.append(CategoryInflationItem(
            category=category,
            change_percent=_change_percent(current_cost, previous_cost),
            previous_cost=previous_cost,
            current_cost=current_cost,
        ))

    items.sort(key=lambda i: abs(i.change_percent), reverse=True)
    return items


# ── Year over year ───────────────────────────────────────


def year_over_year(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    *,
    now: datetime | None = None,
) -> YearOverYear | None:
    """Basket cost now versus one calendar year ago, if tracked then."""
    now = now or datetime.now()
    year_ago = add_years(now, -1)

    current_cost = basket_cost_at(now, products, records)
    year_ago_cost = basket_cost_at(year_ago, products, records)
    if year_ago_cost <= 0:
        return None

    return YearOverYear(
        current_cost=current_cost,
        year_ago_cost=year_ago_cost,
        change_percent=_change_percent(current_cost, year_ago_cost),
        year_ago_label=year_ago.strftime(Settings.YEAR_LABEL_FORMAT),
    )


# ── Per-product history ──────────────────────────────────


def price_history(
    product_id: str, records: Sequence[PriceRecord],
) -> list[PriceHistoryPoint]:
    """All prices logged for one product, oldest first."""
    ordered = sorted(
        (r for r in records if r.product_id == product_id),
        key=lambda r: r.date,
    )
    return [
        PriceHistoryPoint(
            date=r.date, price=r.price, month_label=month_label(r.date),
        )
        for r in ordered
    ]
