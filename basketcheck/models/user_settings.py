# basketcheck/models/user_settings.py

"""Persisted per-user preferences."""

from dataclasses import dataclass

from basketcheck.config.settings import Settings


@dataclass
class UserSettings:
    """Currency, income and reminder preferences for the single user."""

    currency: str = Settings.DEFAULT_CURRENCY
    salary: float = 0.0
    budget: float = 0.0
    reminder_day: int = 1
    reminder_enabled: bool = False

    @property
    def currency_symbol(self) -> str:
        """Display symbol for the currency, or the code itself."""
        return Settings.CURRENCY_SYMBOLS.get(self.currency, self.currency)
