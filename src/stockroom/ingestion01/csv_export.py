# src/stockroom/ingestion01/csv_export.py

"""
CSV export in the stock room format.

Text columns are quoted, numeric columns are written bare, so the
file re-imports through csv_ingestion without loss.
"""

from pathlib import Path
from typing import Iterable
import csv
import io
import logging

from stockroom.catalog02.product import Product
from stockroom.utils.helpers import ensure_directory


logger = logging.getLogger(__name__)


EXPORT_HEADER = (
    "Product Name,Category,Supplier,Cost Price,Selling Price,Current Stock,Sales (30d)"
)


def export_inventory_csv(products: Iterable[Product]) -> str:
    buffer = io.StringIO()
    buffer.write(EXPORT_HEADER + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")

    for p in products:
        writer.writerow([
            p.name,
            p.category,
            p.supplier,
            p.cost,
            p.rrp,
            p.stock,
            p.sales_last_month,
        ])

    return buffer.getvalue()


def write_inventory_csv(products: Iterable[Product], file_path: str) -> str:
    path = Path(file_path)
    ensure_directory(str(path.parent))

    path.write_text(export_inventory_csv(products), encoding="utf-8")
    logger.info(f"[CSV EXPORT] Inventory exported to {path}")

    return str(path)
