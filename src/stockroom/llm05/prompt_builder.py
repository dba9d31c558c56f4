# src/stockroom/llm05/prompt_builder.py

"""
Prompt Builder
==============

Serializes computed figures into prompts and JSON-safe context
objects for the advice client.

Responsibilities:
-----------------
- Shop health check prompt
- Action-item coaching prompt / supplier email prompt
- Product marketing copy prompt
- Plain, rounded context dictionaries (no live objects)

This module does NOT compute metrics. It only formats them.
"""

import json
from typing import Any, Dict, List, Tuple

import pandas as pd

from stockroom.catalog02.product import Product
from stockroom.inventory04.action_items import ActionItem, MARGIN_REVIEW
from stockroom.inventory04.wssi_planning import format_cover_weeks, COVER_DISPLAY_CAP_WEEKS
from stockroom.metrics03.unit_economics import margin_percent


TARGET_MARGIN_PCT = 50


def _money(value: float) -> float:
    return round(float(value), 2)


# =========================================================
# CONTEXT OBJECTS
# =========================================================

def category_breakdown(
    categories: pd.DataFrame,
    cap: float = COVER_DISPLAY_CAP_WEEKS,
) -> List[Dict[str, Any]]:
    """
    Plain records for the category table.

    Works on aggregate_by_category or plan_categories output; cover
    is rendered with the display cap.
    """

    records = []

    for cat in categories.to_dict("records"):

        record = {
            "name": cat["category"],
            "sales_value": _money(cat["sales_value"]),
            "stock_value": _money(cat["stock_value"]),
            "target_stock_value": _money(cat["target_stock_value"]),
            "average_margin": _money(cat["average_margin"]),
        }

        if "current_cover_weeks" in cat:
            record["weeks_cover"] = format_cover_weeks(cat["current_cover_weeks"], cap)
            record["status"] = cat["cover_status"]

        records.append(record)

    return records


def build_shop_context(
    summary: Dict[str, float],
    categories: pd.DataFrame,
    budget: Dict[str, float],
    max_categories: int = 50,
    cap: float = COVER_DISPLAY_CAP_WEEKS,
) -> Dict[str, Any]:

    return {
        "shop": {
            "product_count": int(summary["product_count"]),
            "cash_in_stock": _money(summary["total_stock_value"]),
            "sales_30d": _money(summary["total_sales_value"]),
            "weeks_of_stock": format_cover_weeks(summary["weeks_cover"], cap),
            "average_margin_pct": _money(summary["average_margin_pct"]),
        },
        "budget": {key: _money(value) for key, value in budget.items()},
        "categories": category_breakdown(categories, cap)[:max_categories],
    }


def build_product_context(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "supplier": product.supplier,
        "cost": _money(product.cost),
        "rrp": _money(product.rrp),
        "stock": product.stock,
        "sales_last_month": product.sales_last_month,
        "sales_hist": product.sales_historical,
    }


# =========================================================
# PROMPTS
# =========================================================

def build_health_check_prompt(
    summary: Dict[str, float],
    breakdown: List[Dict[str, Any]],
    cap: float = COVER_DISPLAY_CAP_WEEKS,
) -> str:

    weeks_text = format_cover_weeks(summary["weeks_cover"], cap)

    return (
        "Act as a friendly retail mentor. Look at my shop's data below.\n"
        "Give me a \"Shop Health Check\".\n"
        "1. Start with something positive.\n"
        "2. Point out one area where I might be tying up too much cash (Overstock).\n"
        "3. Point out one opportunity to make more money (Margin or Best Sellers).\n"
        "\n"
        "Data:\n"
        f"- Cash tied up in Stock: £{summary['total_stock_value']:.2f}\n"
        f"- Recent Sales: £{summary['total_sales_value']:.2f}\n"
        f"- Weeks of Stock: {weeks_text} (Ideal is 10-12)\n"
        "\n"
        f"Category Breakdown: {json.dumps(breakdown)}"
    )


def build_action_prompt(action: ActionItem) -> Tuple[str, str]:
    """
    Prompt for an action item.

    Returns
    -------
    Tuple[str, str]
        (title, prompt). Margin-review items produce a supplier email draft.
    """

    p = action.product

    if action.kind == MARGIN_REVIEW:
        margin = margin_percent(p.cost, p.rrp)
        prompt = (
            f"Write a polite but firm email to my supplier for {p.supplier}.\n"
            f"Context: I buy {p.name} from them at £{p.cost}. I sell it at £{p.rrp}.\n"
            f"The margin is too low ({margin:.0f}%).\n"
            f"Goal: Negotiate a better cost price so I can achieve a "
            f"{TARGET_MARGIN_PCT}% margin without raising the RRP."
        )
        return "Draft Supplier Email", prompt

    prompt = (
        f"I have a situation in my shop: \"{action.title}\".\n"
        f"Context: {action.description}\n"
        f"Product Info: Cost £{p.cost}, Price £{p.rrp}, Stock {p.stock}.\n"
        "Act as a helpful retail coach. Give me 3 simple steps to handle this. "
        "Keep it positive."
    )
    return action.title, prompt


def build_marketing_prompt(product: Product) -> str:
    return (
        "Write creative marketing copy for this product:\n"
        f"Product: {product.name}\n"
        f"Category: {product.category}\n"
        "\n"
        "Please provide two outputs:\n"
        "1. **Instagram Caption:** Engaging, friendly, with 3-5 relevant hashtags. "
        "British English.\n"
        "2. **Shelf Talker:** A 1-sentence catchy description to place next to the "
        "price tag in the shop."
    )
