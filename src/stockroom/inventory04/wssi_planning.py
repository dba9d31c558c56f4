# src/stockroom/inventory04/wssi_planning.py

"""
Open-to-Buy / WSSI Planning Module
==================================

Turns a product snapshot into a forward Weekly Sales, Stock and
Intake view, per item and per category, plus the whole-shop
buying budget.

Currency view (inventory valued at cost):
-----------------------------------------
weekly_sales_value            = sales_last_month / 4 * cost
current_cover_weeks           = stock_value / weekly_sales_value  (inf when no sales)
target_stock_value            = weekly_sales_value * target_weeks_cover
forecast_sales_value          = weekly_sales_value * forecast_weeks
projected_closing_stock_value = max(0, stock_value - forecast_sales_value)
intake_requirement            = max(0, target_stock_value - projected_closing_stock_value)

Unit view:
----------
Same formulas on stock units and sales_last_month / 4, with
intake_requirement_units rounded up to whole units.

Cover status:
-------------
cover > target * 1.5 -> overstocked
cover < target * 0.8 -> understocked
otherwise            -> on target

Infinite cover (no recent sales) is math.inf. Display strings cap
at "52+" for any cover at or above 52 weeks.

Every function here is pure: same snapshot in, same numbers out.
"""

import math
from typing import Dict, Iterable

import pandas as pd

from stockroom.catalog02.product import Product
from stockroom.metrics03.aggregation import aggregate_by_category, CATEGORY_COLUMNS, WEEKS_PER_MONTH
from stockroom.metrics03.benchmarks import target_weeks_cover
from stockroom.metrics03.unit_economics import margin_percent, VAT_DIVISOR


FORECAST_WEEKS = 4
COVER_DISPLAY_CAP_WEEKS = 52
OVERSTOCK_FACTOR = 1.5
UNDERSTOCK_FACTOR = 0.8

INFINITE_COVER = math.inf

OVERSTOCKED = "overstocked"
UNDERSTOCKED = "understocked"
ON_TARGET = "on target"

ITEM_PLAN_COLUMNS = [
    "id",
    "name",
    "category",
    "supplier",
    "cost",
    "rrp",
    "stock",
    "sales_last_month",
    "margin_pct",
    "stock_value",
    "weekly_sales_value",
    "weekly_sales_units",
    "target_weeks_cover",
    "current_cover_weeks",
    "target_stock_value",
    "forecast_sales_value",
    "projected_closing_stock_value",
    "intake_requirement",
    "current_cover_weeks_units",
    "target_stock_units",
    "forecast_sales_units",
    "projected_closing_stock_units",
    "intake_requirement_units",
    "cover_status",
    "cover_display",
]

CATEGORY_PLAN_COLUMNS = [c for c in CATEGORY_COLUMNS if c != "target_stock_value"] + [
    "weekly_sales_units",
    "current_cover_weeks",
    "target_stock_value",
    "forecast_sales_value",
    "projected_closing_stock_value",
    "intake_requirement",
    "current_cover_weeks_units",
    "target_stock_units",
    "forecast_sales_units",
    "projected_closing_stock_units",
    "intake_requirement_units",
    "cover_status",
    "cover_display",
]


# ==========================================================
# Scalar Building Blocks
# ==========================================================

def cover_weeks(stock_amount: float, weekly_rate: float) -> float:
    """Weeks the stock lasts at ``weekly_rate``; inf when nothing sells."""

    if weekly_rate <= 0:
        return INFINITE_COVER

    return stock_amount / weekly_rate


def classify_cover_status(
    current_cover: float,
    target_weeks: float,
    overstock_factor: float = OVERSTOCK_FACTOR,
    understock_factor: float = UNDERSTOCK_FACTOR,
) -> str:

    if current_cover > target_weeks * overstock_factor:
        return OVERSTOCKED

    if current_cover < target_weeks * understock_factor:
        return UNDERSTOCKED

    return ON_TARGET


def format_cover_weeks(weeks: float, cap: float = COVER_DISPLAY_CAP_WEEKS) -> str:
    """
    Display string for a cover value.

    >>> format_cover_weeks(math.inf)
    '52+'
    >>> format_cover_weeks(6.25)
    '6.2'
    """

    if weeks >= cap:
        return f"{cap:g}+"

    return f"{weeks:.1f}"


def _ceil_units(value: float) -> int:
    # Round first so float noise (22.500000001) does not add a unit
    return int(math.ceil(round(value, 6)))


def compute_wssi(
    stock_value: float,
    weekly_sales_value: float,
    target_weeks: float,
    forecast_weeks: float = FORECAST_WEEKS,
) -> Dict[str, float]:
    """
    Currency WSSI projection for one item or category.

    Parameters
    ----------
    stock_value : float
        Current stock at cost.
    weekly_sales_value : float
        Weekly sales at cost.
    target_weeks : float
        Benchmark weeks of cover.
    forecast_weeks : float
        Projection horizon.

    Returns
    -------
    Dict[str, float]
        current_cover_weeks, target_stock_value, forecast_sales_value,
        projected_closing_stock_value, intake_requirement
    """

    target_stock_value = weekly_sales_value * target_weeks
    forecast_sales_value = weekly_sales_value * forecast_weeks
    projected_closing = max(0.0, stock_value - forecast_sales_value)

    return {
        "current_cover_weeks": cover_weeks(stock_value, weekly_sales_value),
        "target_stock_value": target_stock_value,
        "forecast_sales_value": forecast_sales_value,
        "projected_closing_stock_value": projected_closing,
        "intake_requirement": max(0.0, target_stock_value - projected_closing),
    }


def compute_wssi_units(
    stock_units: float,
    weekly_sales_units: float,
    target_weeks: float,
    forecast_weeks: float = FORECAST_WEEKS,
) -> Dict[str, float]:
    """
    Unit WSSI projection; the intake is rounded up to whole units.
    """

    target_stock_units = weekly_sales_units * target_weeks
    forecast_sales_units = weekly_sales_units * forecast_weeks
    projected_closing = max(0.0, stock_units - forecast_sales_units)

    return {
        "current_cover_weeks_units": cover_weeks(stock_units, weekly_sales_units),
        "target_stock_units": target_stock_units,
        "forecast_sales_units": forecast_sales_units,
        "projected_closing_stock_units": projected_closing,
        "intake_requirement_units": _ceil_units(
            max(0.0, target_stock_units - projected_closing)
        ),
    }


# ==========================================================
# Item Plan
# ==========================================================

def plan_product(
    product: Product,
    weeks_per_month: float = WEEKS_PER_MONTH,
    forecast_weeks: float = FORECAST_WEEKS,
    vat_divisor: float = VAT_DIVISOR,
    overstock_factor: float = OVERSTOCK_FACTOR,
    understock_factor: float = UNDERSTOCK_FACTOR,
    cover_cap: float = COVER_DISPLAY_CAP_WEEKS,
) -> Dict:
    """
    Full WSSI row for a single product (ITEM_PLAN_COLUMNS).
    """

    weekly_sales_units = product.sales_last_month / weeks_per_month
    weekly_sales_value = weekly_sales_units * product.cost
    stock_value = product.stock * product.cost
    target_weeks = target_weeks_cover(product.category)

    row = {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "supplier": product.supplier,
        "cost": product.cost,
        "rrp": product.rrp,
        "stock": product.stock,
        "sales_last_month": product.sales_last_month,
        "margin_pct": margin_percent(product.cost, product.rrp, vat_divisor),
        "stock_value": stock_value,
        "weekly_sales_value": weekly_sales_value,
        "weekly_sales_units": weekly_sales_units,
        "target_weeks_cover": target_weeks,
    }

    row.update(compute_wssi(stock_value, weekly_sales_value, target_weeks, forecast_weeks))
    row.update(compute_wssi_units(product.stock, weekly_sales_units, target_weeks, forecast_weeks))

    row["cover_status"] = classify_cover_status(
        row["current_cover_weeks"], target_weeks, overstock_factor, understock_factor
    )
    row["cover_display"] = format_cover_weeks(row["current_cover_weeks"], cover_cap)

    return row


def plan_products(products: Iterable[Product], **planning_kwargs) -> pd.DataFrame:
    """
    WSSI rows for every product in the snapshot, in snapshot order.

    Keyword arguments are forwarded to plan_product.
    """

    rows = [plan_product(p, **planning_kwargs) for p in products]

    return pd.DataFrame(rows, columns=ITEM_PLAN_COLUMNS)


# ==========================================================
# Category Plan
# ==========================================================

def plan_categories(
    products: Iterable[Product],
    weeks_per_month: float = WEEKS_PER_MONTH,
    forecast_weeks: float = FORECAST_WEEKS,
    vat_divisor: float = VAT_DIVISOR,
    overstock_factor: float = OVERSTOCK_FACTOR,
    understock_factor: float = UNDERSTOCK_FACTOR,
    cover_cap: float = COVER_DISPLAY_CAP_WEEKS,
) -> pd.DataFrame:
    """
    Category aggregates extended with the WSSI projection.

    Uses category-level weekly sales value and the category benchmark.
    Columns follow CATEGORY_PLAN_COLUMNS, also when there are no products.
    """

    categories = aggregate_by_category(
        products,
        vat_divisor=vat_divisor,
        weeks_per_month=weeks_per_month,
    )

    if categories.empty:
        return pd.DataFrame(columns=CATEGORY_PLAN_COLUMNS)

    rows = []

    for cat in categories.itertuples(index=False):

        weekly_sales_units = cat.sales_units / weeks_per_month

        row = {"weekly_sales_units": weekly_sales_units}
        row.update(compute_wssi(
            cat.stock_value, cat.weekly_sales_value, cat.target_weeks_cover, forecast_weeks
        ))
        row.update(compute_wssi_units(
            cat.stock_units, weekly_sales_units, cat.target_weeks_cover, forecast_weeks
        ))
        row["cover_status"] = classify_cover_status(
            row["current_cover_weeks"], cat.target_weeks_cover,
            overstock_factor, understock_factor
        )
        row["cover_display"] = format_cover_weeks(row["current_cover_weeks"], cover_cap)

        rows.append(row)

    projection = pd.DataFrame(rows, index=categories.index)

    planned = pd.concat(
        [categories.drop(columns=["target_stock_value"]), projection],
        axis=1,
    )

    return planned[CATEGORY_PLAN_COLUMNS]


# ==========================================================
# Whole-Shop Figures
# ==========================================================

def buying_budget(
    products: Iterable[Product],
    weeks_per_month: float = WEEKS_PER_MONTH,
    forecast_weeks: float = FORECAST_WEEKS,
) -> Dict[str, float]:
    """
    Whole-shop buying budget.

    Returns
    -------
    Dict[str, float]
        target_stock_value   sum of item target stock values
        current_stock_value  sum of stock * cost
        budget               max(0, target - current)
        open_to_buy          sum of item intake requirements
    """

    products = tuple(products)

    target_total = 0.0
    current_total = 0.0
    intake_total = 0.0

    for p in products:
        weekly_sales_value = p.sales_last_month / weeks_per_month * p.cost
        stock_value = p.stock * p.cost
        wssi = compute_wssi(
            stock_value, weekly_sales_value, target_weeks_cover(p.category), forecast_weeks
        )

        target_total += wssi["target_stock_value"]
        current_total += stock_value
        intake_total += wssi["intake_requirement"]

    return {
        "target_stock_value": target_total,
        "current_stock_value": current_total,
        "budget": max(0.0, target_total - current_total),
        "open_to_buy": intake_total,
    }


def summarize_shop(
    products: Iterable[Product],
    weeks_per_month: float = WEEKS_PER_MONTH,
    vat_divisor: float = VAT_DIVISOR,
) -> Dict[str, float]:
    """
    Headline shop figures.

    weeks_cover is unit based: total stock / (total sales / weeks_per_month).
    """

    products = tuple(products)

    total_stock_units = sum(p.stock for p in products)
    total_sales_units = sum(p.sales_last_month for p in products)
    margins = [margin_percent(p.cost, p.rrp, vat_divisor) for p in products]

    return {
        "product_count": len(products),
        "total_stock_value": sum(p.stock * p.cost for p in products),
        "total_sales_value": sum(p.sales_last_month * p.rrp for p in products),
        "total_stock_units": total_stock_units,
        "total_sales_units": total_sales_units,
        "weeks_cover": cover_weeks(total_stock_units, total_sales_units / weeks_per_month),
        "average_margin_pct": sum(margins) / len(margins) if margins else 0.0,
    }
