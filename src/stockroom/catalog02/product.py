# src/stockroom/catalog02/product.py

"""
Product Model
=============

Immutable inventory row held by the InventoryStore.

Products are replaced as a whole (dataclasses.replace), never
patched field by field. Numeric fields are expected to be coerced
at the ingestion boundary (see utils.coercion); construction only
verifies the invariants.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, Optional

import pandas as pd


DEFAULT_CATEGORY = "General"
UNCATEGORIZED = "Uncategorized"

PRODUCT_COLUMNS = [
    "id",
    "name",
    "category",
    "supplier",
    "cost",
    "rrp",
    "stock",
    "sales_last_month",
    "sales_historical",
]


class InvalidProductError(ValueError):
    """Raised when a product violates the catalog invariants."""
    pass


@dataclass(frozen=True)
class Product:
    """Inventory item. ``id`` is assigned by the InventoryStore."""
    name: str
    category: str = DEFAULT_CATEGORY
    supplier: str = ""
    cost: float = 0.0               # supplier cost price
    rrp: float = 0.0                # VAT-inclusive selling price
    stock: int = 0                  # units on hand
    sales_last_month: int = 0       # trailing 30-day unit sales
    sales_historical: int = 0       # informational only
    id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidProductError("Product name cannot be empty.")

        for field_name in ("cost", "rrp", "stock", "sales_last_month", "sales_historical"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidProductError(
                    f"{field_name} must be numeric, got {type(value).__name__}."
                )
            if value < 0:
                raise InvalidProductError(
                    f"{field_name} cannot be negative ({value}) for '{self.name}'."
                )

    @property
    def category_key(self) -> str:
        """Category label used for grouping; empty or missing becomes "Uncategorized"."""
        return self.category or UNCATEGORIZED


def products_to_frame(products: Iterable[Product]) -> pd.DataFrame:
    """
    Build a DataFrame snapshot of ``products`` with PRODUCT_COLUMNS.

    An empty input yields an empty frame that still carries the columns.
    """

    records = [asdict(p) for p in products]

    return pd.DataFrame.from_records(records, columns=PRODUCT_COLUMNS)
