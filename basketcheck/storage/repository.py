# basketcheck/storage/repository.py

"""Repository interface the service layer reads snapshots from."""

from dataclasses import dataclass, field
from typing import Protocol

from basketcheck.models.price_record import PriceRecord
from basketcheck.models.product import Product


class BasketRepository(Protocol):
    """Anything that can hand out product and price-record snapshots."""

    def list_products(self) -> list[Product]: ...

    def list_price_records(self) -> list[PriceRecord]: ...


@dataclass
class InMemoryRepository:
    """Holds products and records in plain lists."""

    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    records: list[PriceRecord] = field(
        default_factory=lambda: list[PriceRecord]()
    )

    def list_products(self) -> list[Product]:
        return list(self.products)

    def list_price_records(self) -> list[PriceRecord]:
        return list(self.records)
