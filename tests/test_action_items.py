"""
Tests for the weekly focus action-item classifier.
"""

import pytest

from stockroom.catalog02.product import Product
from stockroom.inventory04.action_items import (
    CLEARANCE,
    MARGIN_REVIEW,
    RESTOCK,
    actions_to_frame,
    classify_actions,
)


def make(**overrides):
    fields = dict(id=1, name="Widget", category="Gifts", supplier="Supplier Ltd",
                  cost=1.0, rrp=10.0, stock=15, sales_last_month=5)
    fields.update(overrides)
    return Product(**fields)


class TestClassifyActions:
    def test_sample_inventory(self, sample_products):
        actions = classify_actions(sample_products)
        assert [a.action_id for a in actions] == ["reorder-3", "slow-4"]

    def test_clearance_only(self):
        # 20% margin, but too few sales for a margin review
        actions = classify_actions([make(stock=25, sales_last_month=1, cost=1, rrp=1.5)])
        assert len(actions) == 1
        assert actions[0].kind == CLEARANCE
        assert actions[0].severity == "high"
        assert actions[0].title == "Clearance Opportunity: Widget"

    def test_restock_and_margin_review_in_order(self):
        actions = classify_actions([make(stock=5, sales_last_month=20, cost=10, rrp=15)])
        assert [a.kind for a in actions] == [RESTOCK, MARGIN_REVIEW]
        assert [a.severity for a in actions] == ["medium", "low"]
        assert "20% margin" in actions[1].description

    def test_thresholds_are_strict(self):
        assert classify_actions([make(stock=20, sales_last_month=0)]) == []
        assert classify_actions([make(stock=10, sales_last_month=11)]) == []

    def test_healthy_product_raises_nothing(self):
        assert classify_actions([make()]) == []

    def test_threshold_override(self):
        actions = classify_actions([make(stock=15, sales_last_month=0)],
                                   thresholds={"clearance_min_stock": 10})
        assert [a.action_id for a in actions] == ["slow-1"]

    def test_unknown_threshold_rejected(self):
        with pytest.raises(ValueError):
            classify_actions([make()], thresholds={"bogus": 1})

    def test_empty_snapshot(self):
        assert classify_actions([]) == []


class TestActionsToFrame:
    def test_columns(self, sample_products):
        frame = actions_to_frame(classify_actions(sample_products))
        assert list(frame["product_name"]) == ["Linen Shirt - White", "Oak Picture Frame"]
        assert list(frame["kind"]) == [RESTOCK, CLEARANCE]

    def test_empty(self):
        frame = actions_to_frame([])
        assert frame.empty
        assert "action_id" in frame.columns
