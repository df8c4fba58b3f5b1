# basketcheck/models/price_record.py

"""Price observation model for basket price history."""

from dataclasses import dataclass, field
from datetime import datetime

from basketcheck.models.product import new_id


@dataclass
class PriceRecord:
    """A single price observation for a product at a point in time."""

    product_id: str
    price: float
    date: datetime = field(default_factory=datetime.now)
    product_name: str = ""
    id: str = field(default_factory=new_id)
