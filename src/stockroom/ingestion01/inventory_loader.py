# src/stockroom/ingestion01/inventory_loader.py

"""
Inventory Loader
================

Config-driven entry point used by the planning pipeline and the
advice CLI.

Source resolution:
------------------
1. paths.data.raw / ingestion.inventory_file, when it exists
2. Built-in sample inventory, when ingestion.use_sample_when_missing
3. Otherwise FileNotFoundError
"""

from pathlib import Path
from typing import Dict
import logging

from stockroom.catalog02.inventory_store import InventoryStore
from stockroom.catalog02.sample_data import sample_inventory
from stockroom.ingestion01.csv_ingestion import read_inventory_csv


logger = logging.getLogger(__name__)


def load_inventory_store(config: Dict) -> InventoryStore:
    """
    Build a fresh InventoryStore from the configured source.
    """

    ingestion_cfg = config["ingestion"]
    raw_dir = Path(config["paths"]["data"]["raw"])
    file_path = raw_dir / ingestion_cfg["inventory_file"]

    if file_path.exists():
        products = read_inventory_csv(str(file_path), ingestion_cfg["encoding"])
        logger.info(f"Loaded {len(products)} products from {file_path}")
        return InventoryStore(products)

    if ingestion_cfg["use_sample_when_missing"]:
        logger.warning(
            f"Inventory file not found at {file_path}. Using sample inventory."
        )
        return InventoryStore(sample_inventory())

    raise FileNotFoundError(
        f"Inventory file not found: {file_path}"
    )
