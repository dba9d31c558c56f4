# src/stockroom/inventory04/action_items.py

"""
Weekly Focus: Action-Item Classifier
====================================

Scans the product snapshot and raises independent action items.

Triggers (all evaluated for every product):
-------------------------------------------
clearance      stock > 20 and sales_last_month < 3          severity high
restock        stock < 10 and sales_last_month > 10         severity medium
margin_review  margin % < 40 and sales_last_month > 5       severity low

A product can raise zero, one or several items.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import pandas as pd

from stockroom.catalog02.product import Product
from stockroom.metrics03.unit_economics import margin_percent, VAT_DIVISOR


CLEARANCE = "clearance"
RESTOCK = "restock"
MARGIN_REVIEW = "margin_review"

DEFAULT_THRESHOLDS = {
    "clearance_min_stock": 20,
    "clearance_max_sales": 3,
    "restock_max_stock": 10,
    "restock_min_sales": 10,
    "margin_review_max_margin_pct": 40,
    "margin_review_min_sales": 5,
}


@dataclass(frozen=True)
class ActionItem:
    action_id: str
    kind: str
    severity: str
    title: str
    description: str
    product: Product


def _clearance(product: Product) -> ActionItem:
    return ActionItem(
        action_id=f"slow-{product.id}",
        kind=CLEARANCE,
        severity="high",
        title=f"Clearance Opportunity: {product.name}",
        description=(
            f"This item is taking up space. You have {product.stock} units but only "
            f"sold {product.sales_last_month} recently. Let's turn this back into cash."
        ),
        product=product,
    )


def _restock(product: Product) -> ActionItem:
    return ActionItem(
        action_id=f"reorder-{product.id}",
        kind=RESTOCK,
        severity="medium",
        title=f"Restock Alert: {product.name}",
        description=(
            f"This is a winner! Selling fast with only {product.stock} left. "
            "Don't run out of best sellers."
        ),
        product=product,
    )


def _margin_review(product: Product, margin: float) -> ActionItem:
    return ActionItem(
        action_id=f"margin-{product.id}",
        kind=MARGIN_REVIEW,
        severity="low",
        title=f"Profit Check: {product.name}",
        description=(
            f"You're only making {margin:.0f}% margin on this. Can we increase the "
            "price slightly or ask the supplier for a deal?"
        ),
        product=product,
    )


def classify_actions(
    products: Iterable[Product],
    thresholds: Optional[Dict[str, float]] = None,
    vat_divisor: float = VAT_DIVISOR,
) -> List[ActionItem]:
    """
    Build the action list for a product snapshot.

    Parameters
    ----------
    products : Iterable[Product]
        Product snapshot.
    thresholds : Dict[str, float], optional
        Overrides for DEFAULT_THRESHOLDS keys.
    vat_divisor : float
        Passed to margin_percent.

    Returns
    -------
    List[ActionItem]
        Items grouped by product in snapshot order; within a product
        clearance, restock, margin_review.
    """

    limits = dict(DEFAULT_THRESHOLDS)
    if thresholds:
        unknown = set(thresholds) - limits.keys()
        if unknown:
            raise ValueError(f"Unknown action thresholds: {sorted(unknown)}")
        limits.update(thresholds)

    actions = []

    for p in products:

        if (
            p.stock > limits["clearance_min_stock"]
            and p.sales_last_month < limits["clearance_max_sales"]
        ):
            actions.append(_clearance(p))

        if (
            p.stock < limits["restock_max_stock"]
            and p.sales_last_month > limits["restock_min_sales"]
        ):
            actions.append(_restock(p))

        margin = margin_percent(p.cost, p.rrp, vat_divisor)
        if (
            margin < limits["margin_review_max_margin_pct"]
            and p.sales_last_month > limits["margin_review_min_sales"]
        ):
            actions.append(_margin_review(p, margin))

    return actions


def actions_to_frame(actions: Iterable[ActionItem]) -> pd.DataFrame:
    """Flat table of action items for reports."""

    return pd.DataFrame(
        [
            {
                "action_id": a.action_id,
                "kind": a.kind,
                "severity": a.severity,
                "product_id": a.product.id,
                "product_name": a.product.name,
                "title": a.title,
                "description": a.description,
            }
            for a in actions
        ],
        columns=[
            "action_id", "kind", "severity", "product_id",
            "product_name", "title", "description",
        ],
    )
