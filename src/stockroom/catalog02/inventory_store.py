# src/stockroom/catalog02/inventory_store.py

"""
Inventory Store
===============

Session-scoped owner of the product list.

Responsibilities:
-----------------
- Assign session-unique product ids
- Add, bulk-add, replace and remove products
- Hand out immutable snapshots for calculation passes

Design Principles:
------------------
- In memory only, nothing survives the session
- Snapshots are tuples of frozen Products (copy-on-read)
- Full-field replacement only
"""

import itertools
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from stockroom.catalog02.product import Product


logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Owned, mutable product collection.

    Calculation code never receives the store itself, only
    ``snapshot()``, so a pass always sees one consistent list.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):

        self._products: Dict[int, Product] = {}
        self._ids = itertools.count(1)

        if products:
            self.extend(products)

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    def _next_id(self) -> int:
        candidate = next(self._ids)
        while candidate in self._products:
            candidate = next(self._ids)
        return candidate

    def _admit(self, product: Product) -> Product:

        if not isinstance(product, Product):
            raise TypeError("InventoryStore only accepts Product instances.")

        if product.id is None or product.id in self._products:
            product = replace(product, id=self._next_id())

        self._products[product.id] = product

        return product

    # =========================================================
    # PUBLIC METHODS
    # =========================================================

    def snapshot(self) -> Tuple[Product, ...]:
        return tuple(self._products.values())

    def get(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def add(self, product: Product) -> Product:

        stored = self._admit(product)
        logger.debug(f"Product '{stored.name}' added with id {stored.id}.")

        return stored

    def extend(self, products: Iterable[Product]) -> List[Product]:

        stored = [self._admit(p) for p in products]
        logger.info(f"{len(stored)} products added to inventory.")

        return stored

    def replace_all(self, products: Iterable[Product]) -> List[Product]:

        self._products = {}

        return self.extend(products)

    def update(self, product: Product) -> Product:
        """Replace every field of an existing product."""

        if product.id not in self._products:
            raise KeyError(f"Product id {product.id!r} not found.")

        self._products[product.id] = product

        return product

    def remove(self, product_id: int) -> bool:

        if product_id in self._products:
            removed = self._products.pop(product_id)
            logger.info(f"Product '{removed.name}' (id {product_id}) removed.")
            return True

        logger.warning(
            f"Attempted to remove non-existing product id {product_id}."
        )
        return False

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self):
        return iter(self.snapshot())
