# basketcheck/engine/calendar_utils.py

"""Calendar month arithmetic shared by the engine and the store."""

from datetime import datetime

import pandas as pd

from basketcheck.config.settings import Settings


def add_months(moment: datetime, months: int) -> datetime:
    """Step *moment* by whole calendar months.

    Day-of-month is clamped when the target month is shorter, so
    31 March minus one month is 28 (or 29) February.
    """
    shifted = pd.Timestamp(moment) + pd.DateOffset(months=months)
    return shifted.to_pydatetime()


def add_years(moment: datetime, years: int) -> datetime:
    """Step *moment* by whole calendar years (29 Feb clamps to 28 Feb)."""
    shifted = pd.Timestamp(moment) + pd.DateOffset(years=years)
    return shifted.to_pydatetime()


def start_of_month(moment: datetime) -> datetime:
    """Midnight on the first day of *moment*'s month."""
    return datetime(moment.year, moment.month, 1)


def month_grid(earliest: datetime, now: datetime) -> list[datetime]:
    """List every month start from *earliest*'s month through *now*."""
    months: list[datetime] = []
    current = start_of_month(earliest)
    while current <= now:
        months.append(current)
        current = add_months(current, 1)
    return months


def month_label(moment: datetime) -> str:
    """Short label such as ``"Mar 26"``."""
    return moment.strftime(Settings.MONTH_LABEL_FORMAT)
