# src/stockroom/metrics03/aggregation.py

"""
Category Aggregator
===================

Groups a product snapshot by category and produces one row per
category present in the snapshot.

Output Columns:
---------------
category
product_count
sales_value            sum(sales_last_month * rrp)
stock_value            sum(stock * cost)
sales_units            sum(sales_last_month)
stock_units            sum(stock)
average_margin         unweighted mean of item margin %
weighted_average_cost  sales-weighted cost (plain mean when nothing sold)
weekly_sales_value     sum(sales_last_month * cost) / WEEKS_PER_MONTH
target_weeks_cover     benchmark weeks for the category
target_stock_value     weekly_sales_value * target_weeks_cover

Notes:
------
- Empty or missing categories are grouped as "Uncategorized". Labels are
  not trimmed, so " " is a group of its own.
- Rows follow first appearance of each category in the snapshot.
- average_margin is a simple mean across items, not sales-weighted.
"""

from typing import Iterable

import pandas as pd

from stockroom.catalog02.product import Product
from stockroom.metrics03.benchmarks import target_weeks_cover
from stockroom.metrics03.unit_economics import margin_percent, VAT_DIVISOR


WEEKS_PER_MONTH = 4

CATEGORY_COLUMNS = [
    "category",
    "product_count",
    "sales_value",
    "stock_value",
    "sales_units",
    "stock_units",
    "average_margin",
    "weighted_average_cost",
    "weekly_sales_value",
    "target_weeks_cover",
    "target_stock_value",
]


def aggregate_by_category(
    products: Iterable[Product],
    vat_divisor: float = VAT_DIVISOR,
    weeks_per_month: float = WEEKS_PER_MONTH,
) -> pd.DataFrame:
    """
    Aggregate products into per-category totals.

    Parameters
    ----------
    products : Iterable[Product]
        Product snapshot.
    vat_divisor : float
        Passed to margin_percent.
    weeks_per_month : float
        Weeks represented by sales_last_month.

    Returns
    -------
    pd.DataFrame
        CATEGORY_COLUMNS, one row per category.
    """

    products = tuple(products)

    if not products:
        return pd.DataFrame(columns=CATEGORY_COLUMNS)

    # --------------------------------------------------
    # Item-level contributions
    # --------------------------------------------------

    items = pd.DataFrame({
        "category": [p.category_key for p in products],
        "sales_value": [p.sales_last_month * p.rrp for p in products],
        "stock_value": [p.stock * p.cost for p in products],
        "sales_units": [p.sales_last_month for p in products],
        "stock_units": [p.stock for p in products],
        "margin_pct": [margin_percent(p.cost, p.rrp, vat_divisor) for p in products],
        "cost": [p.cost for p in products],
        "sales_cost": [p.sales_last_month * p.cost for p in products],
    })

    # --------------------------------------------------
    # Group (first-appearance order)
    # --------------------------------------------------

    grouped = (
        items
        .groupby("category", sort=False)
        .agg(
            product_count=("stock_units", "size"),
            sales_value=("sales_value", "sum"),
            stock_value=("stock_value", "sum"),
            sales_units=("sales_units", "sum"),
            stock_units=("stock_units", "sum"),
            average_margin=("margin_pct", "mean"),
            mean_cost=("cost", "mean"),
            sales_cost=("sales_cost", "sum"),
        )
        .reset_index()
    )

    # --------------------------------------------------
    # Derived metrics
    # --------------------------------------------------

    grouped["weighted_average_cost"] = (
        grouped["sales_cost"]
        .div(grouped["sales_units"].where(grouped["sales_units"] > 0))
        .fillna(grouped["mean_cost"])
    )

    grouped["weekly_sales_value"] = grouped["sales_cost"] / weeks_per_month

    grouped["target_weeks_cover"] = grouped["category"].map(target_weeks_cover).astype(int)

    grouped["target_stock_value"] = (
        grouped["weekly_sales_value"] * grouped["target_weeks_cover"]
    )

    return grouped[CATEGORY_COLUMNS]
