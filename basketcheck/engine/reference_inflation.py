# basketcheck/engine/reference_inflation.py

"""Static reference inflation rates used as a comparison baseline.

The figures are approximate average annual CPI rates for educational
comparison only. They are generalised values, not tied to any country or
statistics office, and are never derived from user data.
"""

from datetime import datetime

from basketcheck.config.settings import Settings

ANNUAL_RATES: dict[int, float] = {
    2018: 2.4,
    2019: 1.8,
    2020: 1.2,
    2021: 4.7,
    2022: 8.0,
    2023: 4.1,
    2024: 2.9,
    2025: 2.5,
    2026: 2.3,
    2027: 2.2,
    2028: 2.1,
    2029: 2.0,
    2030: 2.0,
}


def annual_rate_for_year(year: int) -> float:
    """Return the annual reference rate, falling back to the default."""
    return ANNUAL_RATES.get(year, Settings.DEFAULT_REFERENCE_RATE)


def monthly_rate_for_year(year: int) -> float:
    """Return the reference rate spread evenly over twelve months."""
    return annual_rate_for_year(year) / 12.0


def cumulative_rate(start: datetime, end: datetime) -> float:
    """Sum monthly reference rates from the month after *start* to *end*.

    The start month itself is excluded, the end month included. Returns
    ``0.0`` when *end* falls in an earlier year than *start*.
    """
    if start.year > end.year:
        return 0.0

    cumulative = 0.0
    for year in range(start.year, end.year + 1):
        rate = monthly_rate_for_year(year)
        first = start.month + 1 if year == start.year else 1
        last = end.month if year == end.year else 12
        if first > last:
            continue
        cumulative += rate * (last - first + 1)
    return cumulative
