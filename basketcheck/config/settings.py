# basketcheck/config/settings.py

"""Central configuration for the BasketCheck inflation tracker."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the BasketCheck inflation tracker."""

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(
        os.getenv("BASKETCHECK_DATA_DIR", str(BASE_DIR / "data"))
    )
    DB_PATH: Path = DATA_DIR / "basketcheck.db"
    EXPORTS_DIR: Path = DATA_DIR / "exports"
    LOGS_DIR: Path = BASE_DIR / "logs"
    LOG_KEEP_RUNS: int = 20  # Older run_*.log files are deleted

    # --- Catalog defaults ---
    DEFAULT_CATEGORY: str = "General"
    DEFAULT_UNIT: str = "piece"
    DEFAULT_CURRENCY: str = "USD"

    # --- Analytics ---
    DEFAULT_REFERENCE_RATE: float = 2.5  # Annual % for years off the table
    FORECAST_MONTHS: int = 12            # Default forecast horizon
    MONTH_LABEL_FORMAT: str = "%b %y"    # e.g. "Mar 26"
    YEAR_LABEL_FORMAT: str = "%b %Y"     # e.g. "Mar 2025"

    CURRENCY_SYMBOLS: dict[str, str] = {
        "USD": "$",
        "EUR": "€",
        "GBP": "£",
        "JPY": "¥",
        "RUB": "₽",
        "CAD": "C$",
        "AUD": "A$",
        "CHF": "Fr",
        "CNY": "¥",
        "INR": "₹",
        "BRL": "R$",
        "KRW": "₩",
    }

    # --- Sample basket (name, category, unit, base price) ---
    SAMPLE_PRODUCTS: list[tuple[str, str, str, float]] = [
        ("White Bread", "Bakery", "loaf", 3.49),
        ("Whole Milk", "Dairy", "gallon", 4.29),
        ("Gasoline", "Transport", "gallon", 3.59),
        ("Rice", "Groceries", "kg", 2.99),
        ("Eggs", "Dairy", "dozen", 3.89),
        ("Ground Coffee", "Beverages", "pack", 9.99),
    ]
    SAMPLE_SALARY: float = 5000.0
