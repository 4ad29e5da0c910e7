"""Unit tests for ReportingService."""

from decimal import Decimal

import pytest

from services.catalog_service import CatalogService
from services.holdings_service import HoldingsService
from services.reporting_service import Performer, ReportingService
from tests.fixtures import make_coin


@pytest.fixture
def reporting():
    return ReportingService()


class TestListCoinsWithCategories:
    def test_one_row_per_coin(self, seeded, reporting):
        rows = reporting.list_coins_with_categories(seeded)
        assert [r.ticker for r in rows] == ["BTC", "ETH", "FET", "ONDO", "PONKE", "USDT"]

    def test_categories_collapsed_into_label(self, seeded, reporting):
        rows = {r.ticker: r for r in reporting.list_coins_with_categories(seeded)}

        assert rows["BTC"].category == "Layer 1, Proof Of Work"
        assert rows["ETH"].category == "Layer 1, Proof of Stake"
        assert rows["FET"].category == "AI"
        assert rows["BTC"].return_since_launch == Decimal("4296881400")

    def test_label_follows_reclassification(self, seeded, reporting):
        CatalogService.update_coin(
            seeded, "ONDO", "Ondo", Decimal("0.22"), Decimal("0.937"),
            Decimal("0.08"), Decimal("1.48"), [7, 8],
        )
        rows = {r.ticker: r for r in reporting.list_coins_with_categories(seeded)}
        assert rows["ONDO"].category == "Decentralized Finance, Real World Assets"
        assert rows["ONDO"].return_since_launch == Decimal("325.9091")

    def test_uncategorized_coin_included(self, db, reporting):
        make_coin(db, "LONE")
        rows = reporting.list_coins_with_categories(db)
        assert len(rows) == 1
        assert rows[0].category == ""

    def test_empty_catalog(self, db, reporting):
        assert reporting.list_coins_with_categories(db) == []

    def test_display_labels(self, db, btc, reporting):
        display = reporting.list_coins_with_categories(db)[0].to_display()
        assert list(display) == [
            "Category", "Ticker", "Coin", "Launch Price", "Current Price",
            "All Time Low", "All Time High", "Return Since Launch",
        ]
        assert display["Coin"] == "Bitcoin"
        assert display["Launch Price"].startswith("$0.002")
        assert display["Return Since Launch"].endswith("%")


class TestGetFullPortfolio:
    def test_one_row_per_position(self, seeded, reporting):
        rows = reporting.get_full_portfolio(seeded)
        assert [r.ticker for r in rows] == ["ETH", "FET", "ONDO", "PONKE", "USDT"]

    def test_value_and_roi(self, seeded, reporting):
        rows = {r.ticker: r for r in reporting.get_full_portfolio(seeded)}

        eth = rows["ETH"]
        assert eth.category == "Layer 1, Proof of Stake"
        assert eth.coin_name == "Ethereum"
        assert eth.value == Decimal("1071.89")
        assert eth.roi == Decimal("74.7251")
        assert eth.notes == "Safer bet"

        assert rows["FET"].roi == Decimal("-33.6538")
        assert rows["PONKE"].value == Decimal("3302.00")
        assert rows["USDT"].roi == Decimal("0")

    def test_follows_price_changes(self, seeded, reporting):
        CatalogService.update_coin(
            seeded, "FET", "Artificial Superintelligence Alliance", Decimal("0.34"),
            Decimal("4.16"), Decimal("0.00817"), Decimal("4.16"), [1],
        )
        fet = {r.ticker: r for r in reporting.get_full_portfolio(seeded)}["FET"]
        assert fet.roi == Decimal("100")
        assert fet.value == Decimal("1485.12")

    def test_empty_portfolio(self, db, btc, reporting):
        assert reporting.get_full_portfolio(db) == []

    def test_display_labels(self, db, eth_holding, reporting):
        display = reporting.get_full_portfolio(db)[0].to_display()
        assert display["Ticker"] == "ETH"
        assert display["Value"] == "$1071.89"
        assert display["Return On Investment"] == "74.7251%"
        assert display["Notes"] == "Safer bet"


class TestTotals:
    def test_seeded_totals(self, seeded, reporting):
        totals = reporting.get_totals(seeded)

        assert totals.total_invested == Decimal("3678.28")
        assert totals.total_gains == Decimal("4488.77")
        assert totals.total_value == Decimal("11845.33")

    def test_single_value_accessors(self, seeded, reporting):
        assert reporting.total_amount_invested(seeded) == Decimal("3678.28")
        assert reporting.total_gains(seeded) == Decimal("4488.77")
        assert reporting.total_portfolio_value(seeded) == Decimal("11845.33")

    def test_single_position(self, db, eth_holding, reporting):
        totals = reporting.get_totals(db)
        assert totals.total_invested == Decimal("613.47")
        assert totals.total_gains == Decimal("458.42")
        assert totals.total_value == Decimal("1685.36")

    def test_empty_portfolio_totals_are_zero(self, db, reporting):
        totals = reporting.get_totals(db)
        assert totals.total_invested == Decimal("0.00")
        assert totals.total_gains == Decimal("0.00")
        assert totals.total_value == Decimal("0.00")

    def test_display(self, db, eth_holding, reporting):
        assert reporting.get_totals(db).to_display() == {
            "Total Investments": "$613.47",
            "Total Gains": "$458.42",
            "Total Value": "$1685.36",
        }


class TestPerformers:
    def test_best_and_worst(self, seeded, reporting):
        assert reporting.best_performing(seeded) == Performer("PONKE", Decimal("1816.98"))
        assert reporting.worst_performing(seeded) == Performer("FET", Decimal("-33.65"))

    def test_single_position_is_both(self, db, eth_holding, reporting):
        assert reporting.best_performing(db).ticker == "ETH"
        assert reporting.worst_performing(db).ticker == "ETH"
        assert reporting.best_performing(db).roi == Decimal("74.73")

    def test_ties_go_to_lowest_ticker(self, db, reporting):
        for ticker in ("BBB", "AAA"):
            make_coin(db, ticker, "1", "3")
            HoldingsService.add_holding(db, ticker, Decimal("1.5"), Decimal("1"))

        assert reporting.best_performing(db).ticker == "AAA"
        assert reporting.worst_performing(db).ticker == "AAA"

    def test_empty_portfolio(self, db, reporting):
        assert reporting.best_performing(db) is None
        assert reporting.worst_performing(db) is None
