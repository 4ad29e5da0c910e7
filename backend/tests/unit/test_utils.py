"""Tests for ticker, parameter parsing and display formatting helpers."""

from decimal import Decimal

import pytest

from utils.formatting import format_money, format_percent, round_money
from utils.query_params import parse_category_ids
from utils.ticker import is_valid_ticker, normalize_ticker


class TestNormalizeTicker:
    def test_upper_and_strip(self):
        assert normalize_ticker("  eth ") == "ETH"

    def test_already_normal(self):
        assert normalize_ticker("BTC") == "BTC"


class TestIsValidTicker:
    def test_valid(self):
        assert is_valid_ticker("PONKE")

    def test_empty(self):
        assert not is_valid_ticker("")

    def test_too_long(self):
        assert is_valid_ticker("A" * 10)
        assert not is_valid_ticker("A" * 11)


class TestParseCategoryIds:
    def test_none_and_empty(self):
        assert parse_category_ids(None) == []
        assert parse_category_ids("") == []

    def test_keeps_order(self):
        assert parse_category_ids("7,2, 5") == [7, 2, 5]

    def test_skips_blank_entries(self):
        assert parse_category_ids("3,,4,") == [3, 4]

    def test_duplicates_kept(self):
        """Duplicates are left for the store to reject."""
        assert parse_category_ids("2,2") == [2, 2]

    @pytest.mark.parametrize("raw", ["abc", "1,x", "0", "-1"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError, match="Invalid category ID"):
            parse_category_ids(raw)


class TestFormatting:
    def test_round_money_half_up(self):
        assert round_money(Decimal("1071.885")) == Decimal("1071.89")
        assert round_money(Decimal("-0.005")) == Decimal("-0.01")

    def test_format_money(self):
        assert format_money(Decimal("0.071399")) == "$0.071399"
        assert format_money(Decimal("11845.33")) == "$11845.33"

    def test_format_money_uses_configured_symbol(self, monkeypatch):
        monkeypatch.setattr("utils.formatting.settings.CURRENCY_SYMBOL", "€")
        assert format_money(Decimal("2")) == "€2"

    def test_no_scientific_notation(self):
        assert format_money(Decimal("1E-8")) == "$0.00000001"

    def test_format_percent(self):
        assert format_percent(Decimal("611.4835")) == "611.4835%"
        assert format_percent(Decimal("-33.65")) == "-33.65%"

    def test_none_is_blank(self):
        assert format_money(None) == ""
        assert format_percent(None) == ""
