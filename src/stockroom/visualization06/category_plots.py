# src/stockroom/visualization06/category_plots.py

"""
Category Visualization Module
=============================

Plots:
------
1. Stock value per category (at cost)
2. Target stock value per category (benchmark weeks of cover)

Design Principles:
------------------
- Pure visualization only
- No business logic
- Config-driven output location
"""

import os
from typing import Dict

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from stockroom.utils.helpers import ensure_directory, validate_dataframe_not_empty


REQUIRED_COLUMNS = ["category", "stock_value", "target_stock_value"]


def plot_category_stock_vs_target(
    categories: pd.DataFrame,
    config: Dict,
    logger,
    filename: str = "category_stock_vs_target.png",
) -> str:
    """
    Save a grouped bar chart of stock value against target stock value.

    Parameters
    ----------
    categories : pd.DataFrame
        Output of plan_categories() or aggregate_by_category().
    config : Dict
        Project configuration dictionary.
    logger : logging.Logger
        Logger instance.

    Returns
    -------
    str
        Path of the saved image.
    """

    validate_dataframe_not_empty(categories, "categories")

    missing = [c for c in REQUIRED_COLUMNS if c not in categories.columns]
    if missing:
        raise ValueError(f"categories dataframe is missing columns: {missing}")

    output_dir = config["paths"]["output"]["plots"]
    ensure_directory(output_dir)

    positions = np.arange(len(categories))
    width = 0.4

    fig, ax = plt.subplots(figsize=(12, 6))

    ax.bar(
        positions - width / 2,
        categories["stock_value"],
        width,
        label="Stock Value (cost)"
    )

    ax.bar(
        positions + width / 2,
        categories["target_stock_value"],
        width,
        label="Target Stock Value"
    )

    ax.set_xticks(positions)
    ax.set_xticklabels(categories["category"], rotation=30, ha="right")
    ax.set_title("Stock vs Target by Category")
    ax.set_ylabel("£ at cost")
    ax.legend()
    fig.tight_layout()

    output_path = os.path.join(output_dir, filename)

    fig.savefig(output_path)
    plt.close(fig)

    logger.info(f"Category visualization saved: {output_path}")

    return output_path
