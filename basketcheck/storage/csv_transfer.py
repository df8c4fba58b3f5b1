# basketcheck/storage/csv_transfer.py

"""CSV backup and restore of the basket price history."""

import csv
import io
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from basketcheck.config.settings import Settings
from basketcheck.models.price_record import PriceRecord
from basketcheck.models.product import Product
from basketcheck.storage.basket_store import BasketStore, is_valid_price

logger = logging.getLogger("basketcheck.csv")

CSV_HEADER: list[str] = [
    "product_id", "name", "category", "unit", "date", "price",
]


@dataclass
class ImportResult:
    """Outcome of a CSV import: rows stored plus per-row problems."""

    imported: int = 0
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )


def export_to_csv(
    products: Sequence[Product], records: Sequence[PriceRecord],
) -> str:
    """Serialise every price record with its product, oldest first.

    Dates are written as Unix timestamps. Records pointing at a
    product that is not in *products* are left out.
    """
    by_id = {p.id: p for p in products}
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for record in sorted(records, key=lambda r: r.date):
        product = by_id.get(record.product_id)
        if product is None:
            continue
        writer.writerow([
            record.product_id,
            product.name,
            product.category,
            product.unit,
            record.date.timestamp(),
            record.price,
        ])
    return buffer.getvalue().rstrip("\n")


def write_csv_export(
    products: Sequence[Product],
    records: Sequence[PriceRecord],
    directory: Path | None = None,
) -> Path:
    """Write a dated ``BasketCheck_YYYY-MM-DD.csv`` backup file."""
    out_dir = directory or Settings.EXPORTS_DIR
    out_dir.mkdir(parents=True, exist_ok=True)
    filepath = out_dir / f"BasketCheck_{datetime.now():%Y-%m-%d}.csv"

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        f.write(export_to_csv(products, records))
        f.write("\n")

    logger.info(
        "Exported %d price records to %s", len(records), filepath,
    )
    return filepath


def import_from_csv(content: str, store: BasketStore) -> ImportResult:
    """Load rows produced by :func:`export_to_csv` into *store*.

    Products are matched by case-insensitive name and created when
    missing. Blank lines are ignored. Bad rows are reported in
    ``errors``, numbered by file line with the header as row 1, and
    skipped.
    """
    reader = csv.reader(io.StringIO(content))
    rows = [
        (reader.line_num, row)
        for row in reader
        if any(cell.strip() for cell in row)
    ]
    if len(rows) <= 1:
        return ImportResult(errors=["Empty or invalid file"])

    product_ids = {p.name.lower(): p.id for p in store.list_products()}
    result = ImportResult()

    for idx, row in rows[1:]:
        if len(row) < 6:
            result.errors.append(f"Row {idx}: expected 6 columns")
            continue

        name = row[1].strip()
        category = row[2].strip()
        unit = row[3].strip()
        try:
            date = datetime.fromtimestamp(float(row[4]))
            price = float(row[5])
        except (ValueError, OverflowError, OSError):
            result.errors.append(f"Row {idx}: invalid date or price")
            continue
        if not is_valid_price(price):
            result.errors.append(f"Row {idx}: invalid date or price")
            continue
        if not name:
            result.errors.append(f"Row {idx}: missing product name")
            continue

        product_id = product_ids.get(name.lower())
        if product_id is None:
            product = store.add_product(
                name,
                category or Settings.DEFAULT_CATEGORY,
                unit or Settings.DEFAULT_UNIT,
            )
            product_id = product.id
            product_ids[name.lower()] = product_id

        store.log_price(product_id, price, date)
        result.imported += 1

    logger.info(
        "CSV import finished: %d imported, %d errors",
        result.imported, len(result.errors),
    )
    return result
