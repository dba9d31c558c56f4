"""
Tests for margin and benchmark lookups.
"""

import pytest

from stockroom.metrics03.benchmarks import target_weeks_cover, DEFAULT_WEEKS_COVER
from stockroom.metrics03.unit_economics import ex_vat_price, margin_percent


class TestMarginPercent:
    def test_vase_margin(self):
        assert margin_percent(8.50, 24.00) == pytest.approx(57.5)

    def test_ex_vat_price(self):
        assert ex_vat_price(12.00) == pytest.approx(10.0)

    def test_zero_price_has_zero_margin(self):
        assert margin_percent(5.0, 0.0) == 0.0

    def test_loss_making_item_is_negative(self):
        # ex-VAT 10.00 against a 12.00 cost
        assert margin_percent(12.0, 12.0) == pytest.approx(-20.0)

    def test_custom_vat_divisor(self):
        assert margin_percent(5.0, 10.0, vat_divisor=1.0) == pytest.approx(50.0)


class TestTargetWeeksCover:
    @pytest.mark.parametrize("category, expected", [
        ("Fine Jewellery", 33),
        ("Ladies Fashion", 9),
        ("Shoes", 9),
        ("Garden Furniture", 12),
        ("Homeware", 9),
        ("Gifts", 9),
        ("Health & Beauty", 6),
        ("Sport & Outdoor", 8),
        ("Board Games", 9),
        ("Books", 6),
        ("Electricals", 5),
        ("Houseplants", 6),
    ])
    def test_keyword_rules(self, category, expected):
        assert target_weeks_cover(category) == expected

    def test_lookup_is_case_insensitive(self):
        assert target_weeks_cover("WATCHES") == 33

    def test_first_matching_rule_wins(self):
        # "fashion" precedes "jewel" in rule order
        assert target_weeks_cover("Fashion Jewellery") == 9

    @pytest.mark.parametrize("category", ["", "   ", None, "Miscellaneous"])
    def test_default_when_no_match(self, category):
        assert target_weeks_cover(category) == DEFAULT_WEEKS_COVER == 10
