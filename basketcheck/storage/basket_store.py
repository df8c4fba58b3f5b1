# basketcheck/storage/basket_store.py

"""SQLite-backed store for basket products, price records and settings."""

import logging
import math
import random
import sqlite3
from collections.abc import Iterable
from dataclasses import asdict, fields
from datetime import datetime
from pathlib import Path

from basketcheck.config.settings import Settings
from basketcheck.engine.calendar_utils import add_months, start_of_month
from basketcheck.models.price_record import PriceRecord
from basketcheck.models.product import Product
from basketcheck.models.user_settings import UserSettings

logger = logging.getLogger("basketcheck.store")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS products (
    id         TEXT    PRIMARY KEY,
    name       TEXT    NOT NULL,
    category   TEXT    NOT NULL DEFAULT 'General',
    unit       TEXT    NOT NULL DEFAULT 'piece',
    photo_data BLOB,
    created_at TEXT    NOT NULL
);

CREATE TABLE IF NOT EXISTS price_records (
    id         TEXT    PRIMARY KEY,
    product_id TEXT    NOT NULL
               REFERENCES products(id) ON DELETE CASCADE,
    price      REAL    NOT NULL,
    date       TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_records_product_date
    ON price_records(product_id, date);

CREATE TABLE IF NOT EXISTS user_settings (
    id               INTEGER PRIMARY KEY CHECK (id = 1),
    currency         TEXT    NOT NULL,
    salary           REAL    NOT NULL DEFAULT 0,
    budget           REAL    NOT NULL DEFAULT 0,
    reminder_day     INTEGER NOT NULL DEFAULT 1,
    reminder_enabled INTEGER NOT NULL DEFAULT 0
);
"""

_SETTINGS_FIELDS: frozenset[str] = frozenset(
    f.name for f in fields(UserSettings)
)


class StoreError(Exception):
    """Base class for basket store failures."""


class ProductNotFoundError(StoreError):
    """No product exists with the requested id."""


class InvalidPriceError(StoreError):
    """A price must be finite and strictly positive."""


class InvalidProductError(StoreError):
    """A product needs a non-empty name."""


def is_valid_price(price: float) -> bool:
    return math.isfinite(price) and price > 0


def _as_naive_local(date: datetime) -> datetime:
    """Stored dates are naive local time; aware ones are converted."""
    if date.tzinfo is None:
        return date
    return date.astimezone().replace(tzinfo=None)


def _row_to_product(row: sqlite3.Row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        category=row["category"],
        unit=row["unit"],
        photo_data=row["photo_data"],
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class BasketStore:
    """SQLite store for the tracked basket.

    Satisfies :class:`~basketcheck.storage.repository.BasketRepository`
    so it can be handed straight to the service layer.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        path = db_path or Settings.DB_PATH
        if str(path) != ":memory:":
            path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.executescript(_SCHEMA)
        self._ensure_settings_row()
        logger.debug("BasketStore opened at %s", path)

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

    # ── Products ─────────────────────────────────────────

    def add_product(
        self,
        name: str,
        category: str = "",
        unit: str = Settings.DEFAULT_UNIT,
        photo_data: bytes | None = None,
    ) -> Product:
        """Create a product. An empty category becomes ``General``."""
        if not name.strip():
            raise InvalidProductError("Product name must not be empty")

        product = Product(
            name=name.strip(),
            category=category.strip(),
            unit=unit.strip() or Settings.DEFAULT_UNIT,
            photo_data=photo_data,
        )
        self._conn.execute(
            "INSERT INTO products "
            "(id, name, category, unit, photo_data, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                product.id,
                product.name,
                product.category,
                product.unit,
                product.photo_data,
                product.created_at.isoformat(),
            ),
        )
        self._conn.commit()
        logger.info(
            "Added product %s (%s)", product.name, product.category,
        )
        return product

    def update_product(
        self, product_id: str, name: str, category: str, unit: str,
    ) -> None:
        """Rename or recategorise an existing product."""
        if not name.strip():
            raise InvalidProductError("Product name must not be empty")
        cur = self._conn.execute(
            "UPDATE products SET name = ?, category = ?, unit = ? "
            "WHERE id = ?",
            (
                name.strip(),
                category.strip() or Settings.DEFAULT_CATEGORY,
                unit.strip() or Settings.DEFAULT_UNIT,
                product_id,
            ),
        )
        if cur.rowcount == 0:
            self._conn.rollback()
            raise ProductNotFoundError(product_id)
        self._conn.commit()

    def delete_product(self, product_id: str) -> None:
        """Delete a product together with its price records."""
        cur = self._conn.execute(
            "DELETE FROM products WHERE id = ?", (product_id,),
        )
        if cur.rowcount == 0:
            self._conn.rollback()
            raise ProductNotFoundError(product_id)
        self._conn.commit()
        logger.info("Deleted product %s", product_id)

    def get_product(self, product_id: str) -> Product:
        row = self._conn.execute(
            "SELECT * FROM products WHERE id = ?", (product_id,),
        ).fetchone()
        if row is None:
            raise ProductNotFoundError(product_id)
        return _row_to_product(row)

    def list_products(self) -> list[Product]:
        """All products, ordered by name."""
        rows = self._conn.execute(
            "SELECT * FROM products ORDER BY name ASC",
        ).fetchall()
        return [_row_to_product(r) for r in rows]

    def has_product(self, name: str) -> bool:
        """Case-insensitive check for a product name."""
        row = self._conn.execute(
            "SELECT 1 FROM products WHERE lower(name) = lower(?)",
            (name.strip(),),
        ).fetchone()
        return row is not None

    # ── Price records ────────────────────────────────────

    def log_price(
        self,
        product_id: str,
        price: float,
        date: datetime | None = None,
    ) -> PriceRecord:
        """Record one price observation for an existing product."""
        if not is_valid_price(price):
            raise InvalidPriceError(
                f"Price must be a positive number, got {price}"
            )
        product = self.get_product(product_id)
        record = PriceRecord(
            product_id=product.id,
            price=price,
            date=_as_naive_local(date or datetime.now()),
            product_name=product.name,
        )
        self._insert_record(record)
        self._conn.commit()
        logger.info(
            "Logged %.2f for %s at %s",
            price, product.name, record.date.isoformat(),
        )
        return record

    def log_prices(
        self,
        entries: Iterable[tuple[str, float]],
        date: datetime | None = None,
    ) -> int:
        """Record several ``(product_id, price)`` pairs at one date.

        Entries with a non-finite or non-positive price, or an unknown
        product, are skipped. Returns the number of records inserted.
        """
        at = _as_naive_local(date or datetime.now())
        known = {p.id: p.name for p in self.list_products()}
        count = 0
        for product_id, price in entries:
            if not is_valid_price(price) or product_id not in known:
                logger.debug(
                    "Skipped price entry (product=%s, price=%s)",
                    product_id, price,
                )
                continue
            self._insert_record(PriceRecord(
                product_id=product_id,
                price=price,
                date=at,
                product_name=known[product_id],
            ))
            count += 1
        self._conn.commit()
        if count:
            logger.info("Logged %d prices at %s", count, at.isoformat())
        return count

    def list_price_records(self) -> list[PriceRecord]:
        """All price records, newest first."""
        rows = self._conn.execute(
            "SELECT r.id, r.product_id, r.price, r.date, p.name "
            "FROM price_records r "
            "JOIN products p ON p.id = r.product_id "
            "ORDER BY r.date DESC",
        ).fetchall()
        return [
            PriceRecord(
                id=r[0],
                product_id=r[1],
                price=r[2],
                date=datetime.fromisoformat(r[3]),
                product_name=r[4],
            )
            for r in rows
        ]

    def latest_price(self, product_id: str) -> float | None:
        """Most recently dated price for a product, if any."""
        row = self._conn.execute(
            "SELECT price FROM price_records WHERE product_id = ? "
            "ORDER BY date DESC LIMIT 1",
            (product_id,),
        ).fetchone()
        return row[0] if row else None

    def has_multiple_months_of_data(self) -> bool:
        """True when records span at least two calendar months."""
        row = self._conn.execute(
            "SELECT COUNT(DISTINCT substr(date, 1, 7)) FROM price_records",
        ).fetchone()
        return row[0] >= 2

    def copy_current_prices_to_last_month(
        self, now: datetime | None = None,
    ) -> int:
        """Back-date every product's latest price to last month's 1st.

        Gives a single month of data a baseline so the CPI series can
        be drawn (at 0% change). Returns the number of records added.
        """
        target = start_of_month(add_months(now or datetime.now(), -1))
        entries: list[tuple[str, float]] = []
        for product in self.list_products():
            price = self.latest_price(product.id)
            if price is not None and price > 0:
                entries.append((product.id, price))
        if not entries:
            return 0
        return self.log_prices(entries, date=target)

    def _insert_record(self, record: PriceRecord) -> None:
        self._conn.execute(
            "INSERT INTO price_records (id, product_id, price, date) "
            "VALUES (?, ?, ?, ?)",
            (
                record.id,
                record.product_id,
                record.price,
                record.date.isoformat(),
            ),
        )

    # ── Settings ─────────────────────────────────────────

    def _ensure_settings_row(self) -> None:
        self._conn.execute(
            "INSERT OR IGNORE INTO user_settings (id, currency) "
            "VALUES (1, ?)",
            (Settings.DEFAULT_CURRENCY,),
        )
        self._conn.commit()

    def get_settings(self) -> UserSettings:
        row = self._conn.execute(
            "SELECT currency, salary, budget, reminder_day, "
            "       reminder_enabled "
            "FROM user_settings WHERE id = 1",
        ).fetchone()
        return UserSettings(
            currency=row[0],
            salary=row[1],
            budget=row[2],
            reminder_day=row[3],
            reminder_enabled=bool(row[4]),
        )

    def update_settings(self, **changes: object) -> UserSettings:
        """Update one or more settings fields and return the result."""
        unknown = set(changes) - _SETTINGS_FIELDS
        if unknown:
            raise StoreError(
                f"Unknown settings field(s): {', '.join(sorted(unknown))}"
            )
        for name in ("salary", "budget"):
            if name in changes:
                value = float(changes[name])  # type: ignore[arg-type]
                if not math.isfinite(value) or value < 0:
                    raise StoreError(f"{name} must be zero or more, got {value}")
        if "currency" in changes:
            code = str(changes["currency"]).strip().upper()
            if not code:
                raise StoreError("Currency code cannot be empty")
            changes["currency"] = code

        current = asdict(self.get_settings())
        current.update(changes)
        self._conn.execute(
            "UPDATE user_settings SET currency = ?, salary = ?, "
            "budget = ?, reminder_day = ?, reminder_enabled = ? "
            "WHERE id = 1",
            (
                current["currency"],
                float(current["salary"]),
                float(current["budget"]),
                int(current["reminder_day"]),
                int(bool(current["reminder_enabled"])),
            ),
        )
        self._conn.commit()
        return self.get_settings()

    # ── Bulk operations ──────────────────────────────────

    def load_sample_data(
        self,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> int:
        """Seed a demo basket with seven months of rising prices.

        Products that already exist by name are left alone. Returns the
        number of price records inserted.
        """
        now = now or datetime.now()
        rng = rng or random.Random()

        seeded: list[tuple[Product, float]] = []
        for name, category, unit, base_price in Settings.SAMPLE_PRODUCTS:
            if self.has_product(name):
                continue
            seeded.append(
                (self.add_product(name, category, unit), base_price)
            )
        if not seeded:
            return 0

        count = 0
        for offset in range(-6, 1):
            at = add_months(now, offset)
            for product, base_price in seeded:
                growth = 1.0 + (offset + 6) * rng.uniform(0.008, 0.022)
                self._insert_record(PriceRecord(
                    product_id=product.id,
                    price=round(base_price * growth, 2),
                    date=at,
                ))
                count += 1
        self._conn.commit()

        self.update_settings(salary=Settings.SAMPLE_SALARY)
        logger.info(
            "Loaded sample data: %d products, %d records",
            len(seeded), count,
        )
        return count

    def reset_all(self) -> None:
        """Delete every record, product and preference."""
        self._conn.execute("DELETE FROM price_records")
        self._conn.execute("DELETE FROM products")
        self._conn.execute("DELETE FROM user_settings")
        self._conn.commit()
        self._ensure_settings_row()
        logger.warning("All basket data has been reset")


