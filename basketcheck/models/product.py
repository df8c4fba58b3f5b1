# basketcheck/models/product.py

"""Product data model for the tracked basket."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from basketcheck.config.settings import Settings


def new_id() -> str:
    """Return a fresh opaque identifier."""
    return uuid.uuid4().hex


@dataclass
class Product:
    """A tracked basket item such as a loaf of bread or a litre of milk."""

    name: str
    category: str = Settings.DEFAULT_CATEGORY
    unit: str = Settings.DEFAULT_UNIT
    photo_data: bytes | None = None
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=new_id)

    def __post_init__(self) -> None:
        if not self.category.strip():
            self.category = Settings.DEFAULT_CATEGORY
