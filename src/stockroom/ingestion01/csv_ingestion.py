# src/stockroom/ingestion01/csv_ingestion.py

"""
CSV ingestion module for the Stock Room planner.

Responsibilities
----------------
- Turn the stock room import format into Product rows
- Coerce every numeric column through utils.coercion
- Skip the header and malformed rows without failing the import

Import Format
-------------
name, category, supplier, cost, rrp, stock, sales_last_month

- First line is a header and is always skipped
- Blank lines and rows with fewer than 2 columns are skipped
- Quoted fields (as written by csv_export) are unquoted
- Imported rows always start with sales_historical = 0
"""

from pathlib import Path
from typing import List
import csv
import logging

from stockroom.catalog02.product import Product, DEFAULT_CATEGORY
from stockroom.utils.coercion import parse_non_negative_number, parse_non_negative_int


logger = logging.getLogger(__name__)


UNKNOWN_ITEM_NAME = "Unknown Item"


def _column(cols: List[str], index: int) -> str:
    return cols[index].strip() if len(cols) > index else ""


def parse_inventory_csv(content: str) -> List[Product]:
    """
    Parse import text into Products (ids unassigned).

    Parameters
    ----------
    content : str
        Full CSV text including the header line.

    Returns
    -------
    List[Product]
        One Product per usable row, in file order.
    """

    if not isinstance(content, str):
        raise TypeError("CSV content must be a string.")

    lines = content.splitlines()[1:]
    products = []
    skipped = 0

    for cols in csv.reader(lines):

        if not cols or not any(c.strip() for c in cols):
            continue

        if len(cols) < 2:
            skipped += 1
            continue

        products.append(
            Product(
                name=_column(cols, 0) or UNKNOWN_ITEM_NAME,
                category=_column(cols, 1) or DEFAULT_CATEGORY,
                supplier=_column(cols, 2),
                cost=parse_non_negative_number(_column(cols, 3)),
                rrp=parse_non_negative_number(_column(cols, 4)),
                stock=parse_non_negative_int(_column(cols, 5)),
                sales_last_month=parse_non_negative_int(_column(cols, 6)),
                sales_historical=0,
            )
        )

    if skipped:
        logger.warning(f"[CSV INGESTION] Skipped {skipped} malformed rows.")

    logger.info(f"[CSV INGESTION] Parsed {len(products)} products.")

    return products


def read_inventory_csv(file_path: str, encoding: str = "utf-8") -> List[Product]:
    """
    Read and parse an import file from disk.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    """

    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(
            f"[CSV INGESTION] Inventory file not found: {path}"
        )

    logger.info(f"[CSV INGESTION] Reading inventory from {path}")

    return parse_inventory_csv(path.read_text(encoding=encoding))
