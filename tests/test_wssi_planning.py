"""
Tests for the WSSI / open-to-buy planning module.
"""

import math

import pandas as pd
import pytest

from stockroom.catalog02.product import Product
from stockroom.metrics03.aggregation import CATEGORY_COLUMNS
from stockroom.inventory04.wssi_planning import (
    CATEGORY_PLAN_COLUMNS,
    ITEM_PLAN_COLUMNS,
    ON_TARGET,
    OVERSTOCKED,
    UNDERSTOCKED,
    buying_budget,
    classify_cover_status,
    compute_wssi,
    compute_wssi_units,
    cover_weeks,
    format_cover_weeks,
    plan_categories,
    plan_product,
    plan_products,
    summarize_shop,
)


class TestScalarHelpers:
    def test_cover_weeks(self):
        assert cover_weeks(382.5, 8.5) == pytest.approx(45.0)

    def test_cover_weeks_without_sales_is_infinite(self):
        assert math.isinf(cover_weeks(100, 0))

    @pytest.mark.parametrize("cover, expected", [
        (15.0, ON_TARGET),
        (15.01, OVERSTOCKED),
        (8.0, ON_TARGET),
        (7.99, UNDERSTOCKED),
        (math.inf, OVERSTOCKED),
    ])
    def test_classify_cover_status(self, cover, expected):
        assert classify_cover_status(cover, 10) == expected

    @pytest.mark.parametrize("weeks, expected", [
        (math.inf, "52+"),
        (52, "52+"),
        (80.4, "52+"),
        (45.0, "45.0"),
        (6.3, "6.3"),
        (0, "0.0"),
    ])
    def test_format_cover_weeks(self, weeks, expected):
        assert format_cover_weeks(weeks) == expected

    def test_format_cover_weeks_custom_cap(self):
        assert format_cover_weeks(30, cap=26) == "26+"


class TestComputeWssi:
    def test_currency_projection(self):
        wssi = compute_wssi(382.5, 8.5, 9, 4)
        assert wssi["current_cover_weeks"] == pytest.approx(45.0)
        assert wssi["target_stock_value"] == pytest.approx(76.5)
        assert wssi["forecast_sales_value"] == pytest.approx(34.0)
        assert wssi["projected_closing_stock_value"] == pytest.approx(348.5)
        assert wssi["intake_requirement"] == 0

    def test_closing_stock_never_negative(self):
        wssi = compute_wssi(120.0, 56.25, 9, 4)
        assert wssi["projected_closing_stock_value"] == 0
        assert wssi["intake_requirement"] == pytest.approx(506.25)

    def test_unit_intake_rounds_up(self):
        wssi = compute_wssi_units(8, 3.75, 9, 4)
        assert wssi["target_stock_units"] == pytest.approx(33.75)
        assert wssi["projected_closing_stock_units"] == 0
        assert wssi["intake_requirement_units"] == 34
        assert isinstance(wssi["intake_requirement_units"], int)

    def test_unit_intake_ignores_float_noise(self):
        wssi = compute_wssi_units(0, 2.0000000000001, 9, 4)
        assert wssi["intake_requirement_units"] == 18


class TestPlanProduct:
    def test_vase_end_to_end(self, vase):
        row = plan_product(vase)
        assert row["margin_pct"] == pytest.approx(57.5)
        assert row["weekly_sales_value"] == pytest.approx(8.5)
        assert row["target_weeks_cover"] == 9
        assert row["target_stock_value"] == pytest.approx(76.5)
        assert row["forecast_sales_value"] == pytest.approx(34.0)
        assert row["projected_closing_stock_value"] == pytest.approx(348.5)
        assert row["intake_requirement"] == 0
        assert row["intake_requirement_units"] == 0
        assert row["cover_status"] == OVERSTOCKED
        assert row["cover_display"] == "45.0"

    def test_fast_seller_is_understocked(self, sample_products):
        shirt = sample_products[2]
        row = plan_product(shirt)
        assert row["cover_status"] == UNDERSTOCKED
        assert row["intake_requirement"] == pytest.approx(506.25)
        assert row["intake_requirement_units"] == 34

    def test_no_sales_shows_capped_cover(self):
        row = plan_product(Product(id=9, name="Dust Collector", category="Gifts",
                                   cost=5, rrp=10, stock=30))
        assert math.isinf(row["current_cover_weeks"])
        assert row["cover_display"] == "52+"
        assert row["cover_status"] == OVERSTOCKED
        assert row["intake_requirement"] == 0

    def test_plan_products_frame(self, sample_products):
        items = plan_products(sample_products)
        assert list(items.columns) == ITEM_PLAN_COLUMNS
        assert list(items["id"]) == [1, 2, 3, 4, 5]
        assert (items["intake_requirement"] >= 0).all()
        assert (items["intake_requirement_units"] >= 0).all()

    def test_plan_products_empty(self):
        items = plan_products([])
        assert items.empty
        assert list(items.columns) == ITEM_PLAN_COLUMNS

    def test_planning_is_idempotent(self, sample_products):
        pd.testing.assert_frame_equal(
            plan_products(sample_products), plan_products(sample_products)
        )
        pd.testing.assert_frame_equal(
            plan_categories(sample_products), plan_categories(sample_products)
        )


class TestPlanCategories:
    def test_category_projection(self, sample_products):
        categories = plan_categories(sample_products).set_index("category")

        home = categories.loc["Homeware"]
        assert home["target_stock_value"] == pytest.approx(103.5)
        assert home["projected_closing_stock_value"] == pytest.approx(696.5)
        assert home["intake_requirement"] == 0
        assert home["cover_status"] == OVERSTOCKED
        assert home["cover_display"] == "52+"

        gifts = categories.loc["Gifts"]
        assert gifts["cover_status"] == UNDERSTOCKED
        assert gifts["intake_requirement"] == pytest.approx(459.0)
        assert gifts["intake_requirement_units"] == 254

    def test_keeps_aggregate_columns(self, sample_products):
        categories = plan_categories(sample_products)
        for column in CATEGORY_COLUMNS:
            assert column in categories.columns
        assert list(categories.columns).count("target_stock_value") == 1

    def test_column_order(self, sample_products):
        assert list(plan_categories(sample_products).columns) == CATEGORY_PLAN_COLUMNS

    def test_empty_snapshot(self):
        categories = plan_categories([])
        assert categories.empty
        assert list(categories.columns) == CATEGORY_PLAN_COLUMNS
        assert categories[["cover_status", "intake_requirement_units"]].empty


class TestShopFigures:
    def test_buying_budget(self, sample_products):
        budget = buying_budget(sample_products)
        assert budget["target_stock_value"] == pytest.approx(1068.75)
        assert budget["current_stock_value"] == pytest.approx(972.0)
        assert budget["budget"] == pytest.approx(96.75)
        assert budget["open_to_buy"] == pytest.approx(933.75)

    def test_budget_floors_at_zero(self, vase):
        budget = buying_budget([vase])
        assert budget["budget"] == 0
        assert budget["open_to_buy"] == 0

    def test_summarize_shop(self, sample_products):
        summary = summarize_shop(sample_products)
        assert summary["product_count"] == 5
        assert summary["total_stock_value"] == pytest.approx(972.0)
        assert summary["total_sales_value"] == pytest.approx(1619.0)
        assert summary["total_stock_units"] == 275
        assert summary["total_sales_units"] == 149
        assert summary["weeks_cover"] == pytest.approx(275 / (149 / 4))

    def test_summarize_empty_shop(self):
        summary = summarize_shop([])
        assert summary["product_count"] == 0
        assert summary["total_stock_value"] == 0
        assert math.isinf(summary["weeks_cover"])
        assert summary["average_margin_pct"] == 0.0
        assert buying_budget([]) == {
            "target_stock_value": 0.0,
            "current_stock_value": 0.0,
            "budget": 0.0,
            "open_to_buy": 0.0,
        }
