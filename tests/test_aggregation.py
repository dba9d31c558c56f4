"""
Tests for per-category aggregation.
"""

import pytest

from stockroom.catalog02.product import Product
from stockroom.metrics03.aggregation import aggregate_by_category, CATEGORY_COLUMNS


@pytest.fixture
def categories(sample_products):
    return aggregate_by_category(sample_products).set_index("category")


class TestAggregateByCategory:
    def test_first_appearance_order(self, sample_products):
        result = aggregate_by_category(sample_products)
        assert list(result["category"]) == ["Homeware", "Gifts", "Clothing"]
        assert list(result.columns) == CATEGORY_COLUMNS

    def test_homeware_totals(self, categories):
        home = categories.loc["Homeware"]
        assert home["product_count"] == 2
        assert home["sales_value"] == pytest.approx(132.0)
        assert home["stock_value"] == pytest.approx(742.5)
        assert home["sales_units"] == 6
        assert home["stock_units"] == 105
        assert home["average_margin"] == pytest.approx(58.75)
        assert home["weighted_average_cost"] == pytest.approx(46 / 6)
        assert home["weekly_sales_value"] == pytest.approx(11.5)
        assert home["target_weeks_cover"] == 9
        assert home["target_stock_value"] == pytest.approx(103.5)

    def test_gifts_weekly_sales_value_at_cost(self, categories):
        gifts = categories.loc["Gifts"]
        assert gifts["sales_value"] == pytest.approx(812.0)
        assert gifts["weekly_sales_value"] == pytest.approx(51.0)
        assert gifts["target_stock_value"] == pytest.approx(459.0)

    def test_empty_category_grouped_as_uncategorized(self):
        products = [
            Product(id=1, name="Mystery", category="", cost=2, rrp=6, stock=3, sales_last_month=4),
            Product(id=2, name="Other", category=None, cost=4, rrp=6, stock=1, sales_last_month=0),
        ]
        result = aggregate_by_category(products)
        assert list(result["category"]) == ["Uncategorized"]
        assert result.iloc[0]["product_count"] == 2
        assert result.iloc[0]["target_weeks_cover"] == 10

    def test_whitespace_category_is_its_own_group(self):
        products = [
            Product(id=1, name="Mystery", category=" ", cost=2, rrp=6, stock=3, sales_last_month=4),
            Product(id=2, name="Other", category="", cost=4, rrp=6, stock=1, sales_last_month=0),
        ]
        result = aggregate_by_category(products)
        assert list(result["category"]) == [" ", "Uncategorized"]
        assert list(result["target_weeks_cover"]) == [10, 10]

    def test_weighted_cost_falls_back_to_mean_without_sales(self):
        products = [
            Product(id=1, name="A", category="Books", cost=2, rrp=5, stock=10),
            Product(id=2, name="B", category="Books", cost=4, rrp=8, stock=10),
        ]
        result = aggregate_by_category(products)
        assert result.iloc[0]["weighted_average_cost"] == pytest.approx(3.0)
        assert result.iloc[0]["weekly_sales_value"] == 0

    def test_empty_snapshot(self):
        result = aggregate_by_category([])
        assert result.empty
        assert list(result.columns) == CATEGORY_COLUMNS
