# src/stockroom/ingestion01/manual_entry.py

"""
Manual Product Entry
====================

Builds a Product from the add-item form, where every field
arrives as free text.

Rules:
------
- name is required
- empty category becomes "General"
- numeric fields are coerced to non-negative values (0 on failure)
"""

from typing import Any, Mapping

from stockroom.catalog02.product import Product, InvalidProductError, DEFAULT_CATEGORY
from stockroom.utils.coercion import parse_non_negative_number, parse_non_negative_int


def build_product_from_form(fields: Mapping[str, Any]) -> Product:
    """
    Create a Product from raw form fields.

    Parameters
    ----------
    fields : Mapping[str, Any]
        Keys: name, category, supplier, cost, rrp, stock,
        sales_last_month, sales_historical. Missing keys are blank.

    Returns
    -------
    Product
        Product without an id (the store assigns one).

    Raises
    ------
    InvalidProductError
        If the name is missing or blank.
    """

    name = str(fields.get("name") or "").strip()

    if not name:
        raise InvalidProductError("A product name is required.")

    return Product(
        name=name,
        category=str(fields.get("category") or "").strip() or DEFAULT_CATEGORY,
        supplier=str(fields.get("supplier") or "").strip(),
        cost=parse_non_negative_number(fields.get("cost")),
        rrp=parse_non_negative_number(fields.get("rrp")),
        stock=parse_non_negative_int(fields.get("stock")),
        sales_last_month=parse_non_negative_int(fields.get("sales_last_month")),
        sales_historical=parse_non_negative_int(fields.get("sales_historical")),
    )
