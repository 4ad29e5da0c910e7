"""Read-side views over the catalog and the portfolio.

Everything here is recomputed from the current rows on each call; the only
stored derived value it reads is the coin's return since launch.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Category, Coin, CoinCategory, Holding
from models.category import CATEGORY_SEPARATOR
from models.utils import percent_return
from utils.formatting import format_money, format_percent, round_money

logger = logging.getLogger(__name__)

PERFORMER_PLACES = Decimal("0.01")
ZERO = Decimal("0")


@dataclass
class CoinCatalogRow:
    """A catalog coin with its categories collapsed into one label."""

    category: str
    ticker: str
    name: str
    launch_price: Decimal
    current_price: Decimal
    all_time_low: Decimal
    all_time_high: Decimal
    return_since_launch: Optional[Decimal]

    def to_display(self) -> dict[str, str]:
        return {
            "Category": self.category,
            "Ticker": self.ticker,
            "Coin": self.name,
            "Launch Price": format_money(self.launch_price),
            "Current Price": format_money(self.current_price),
            "All Time Low": format_money(self.all_time_low),
            "All Time High": format_money(self.all_time_high),
            "Return Since Launch": format_percent(self.return_since_launch),
        }


@dataclass
class PortfolioRow:
    """A single position with its live value and ROI."""

    category: str
    ticker: str
    coin_name: str
    holdings: Decimal
    entry_price: Decimal
    current_price: Decimal
    value: Decimal
    roi: Optional[Decimal]
    notes: Optional[str]

    def to_display(self) -> dict[str, str]:
        return {
            "Category": self.category,
            "Ticker": self.ticker,
            "Coin Name": self.coin_name,
            "Holdings": format(self.holdings, "f"),
            "Entry Price": format_money(self.entry_price),
            "Current Price": format_money(self.current_price),
            "Value": format_money(self.value),
            "Return On Investment": format_percent(self.roi),
            "Notes": self.notes or "",
        }


@dataclass
class PortfolioTotals:
    """Aggregate figures over every position.

    ``total_value`` is current value plus cost basis, not current value
    alone.
    """

    total_invested: Decimal
    total_gains: Decimal
    total_value: Decimal

    def to_display(self) -> dict[str, str]:
        return {
            "Total Investments": format_money(self.total_invested),
            "Total Gains": format_money(self.total_gains),
            "Total Value": format_money(self.total_value),
        }


@dataclass
class Performer:
    """The best or worst position by ROI."""

    ticker: str
    roi: Decimal


def _category_label(raw: Optional[str]) -> str:
    """Normalize an aggregated category string to a sorted, stable label."""
    if not raw:
        return ""
    return CATEGORY_SEPARATOR.join(sorted(raw.split(CATEGORY_SEPARATOR)))


class ReportingService:
    """Derived views: catalog listing, full portfolio, totals, performers."""

    def list_coins_with_categories(self, db: Session) -> list[CoinCatalogRow]:
        """One row per catalog coin, ordered by ticker.

        Coins without any category are included with an empty label.
        """
        label = func.aggregate_strings(Category.name, CATEGORY_SEPARATOR)
        rows = (
            db.query(
                label.label("category"),
                Coin.ticker,
                Coin.name,
                Coin.launch_price,
                Coin.current_price,
                Coin.all_time_low,
                Coin.all_time_high,
                Coin.return_since_launch,
            )
            .outerjoin(CoinCategory, CoinCategory.ticker == Coin.ticker)
            .outerjoin(Category, Category.id == CoinCategory.category_id)
            .group_by(
                Coin.ticker,
                Coin.name,
                Coin.launch_price,
                Coin.current_price,
                Coin.all_time_low,
                Coin.all_time_high,
                Coin.return_since_launch,
            )
            .order_by(Coin.ticker)
            .all()
        )
        return [
            CoinCatalogRow(
                category=_category_label(r.category),
                ticker=r.ticker,
                name=r.name,
                launch_price=r.launch_price,
                current_price=r.current_price,
                all_time_low=r.all_time_low,
                all_time_high=r.all_time_high,
                return_since_launch=r.return_since_launch,
            )
            for r in rows
        ]

    def get_full_portfolio(self, db: Session) -> list[PortfolioRow]:
        """One row per position, ordered by ticker.

        Grouping covers every non-aggregated column so a coin in several
        categories still yields a single row.
        """
        label = func.aggregate_strings(Category.name, CATEGORY_SEPARATOR)
        rows = (
            db.query(
                label.label("category"),
                Coin.ticker,
                Coin.name,
                Holding.holdings,
                Holding.entry_price,
                Coin.current_price,
                Holding.notes,
            )
            .select_from(Holding)
            .join(Coin, Coin.ticker == Holding.ticker)
            .outerjoin(CoinCategory, CoinCategory.ticker == Coin.ticker)
            .outerjoin(Category, Category.id == CoinCategory.category_id)
            .group_by(
                Coin.ticker,
                Coin.name,
                Holding.holdings,
                Holding.entry_price,
                Coin.current_price,
                Holding.notes,
            )
            .order_by(Coin.ticker)
            .all()
        )
        return [
            PortfolioRow(
                category=_category_label(r.category),
                ticker=r.ticker,
                coin_name=r.name,
                holdings=r.holdings,
                entry_price=r.entry_price,
                current_price=r.current_price,
                value=round_money(r.holdings * r.current_price),
                roi=percent_return(r.current_price, r.entry_price),
                notes=r.notes,
            )
            for r in rows
        ]

    def get_totals(self, db: Session) -> PortfolioTotals:
        """Invested capital, gains and total value in one pass.

        Each sum is rounded to cents before being combined.
        """
        rows = self._position_prices(db)
        invested = round_money(sum((h * e for h, e, _ in rows), ZERO))
        current = round_money(sum((h * c for h, _, c in rows), ZERO))
        totals = PortfolioTotals(
            total_invested=invested,
            total_gains=current - invested,
            # Kept as current value + cost basis to match the established figure
            total_value=current + invested,
        )
        logger.debug(
            "Totals over %d positions: invested=%s gains=%s value=%s",
            len(rows), totals.total_invested, totals.total_gains, totals.total_value,
        )
        return totals

    def total_amount_invested(self, db: Session) -> Decimal:
        """Sum of holdings x entry price."""
        return self.get_totals(db).total_invested

    def total_gains(self, db: Session) -> Decimal:
        """Sum of holdings x current price minus sum of holdings x entry price."""
        return self.get_totals(db).total_gains

    def total_portfolio_value(self, db: Session) -> Decimal:
        """Sum of holdings x current price plus sum of holdings x entry price."""
        return self.get_totals(db).total_value

    def best_performing(self, db: Session) -> Optional[Performer]:
        """Position with the highest ROI; ties go to the lowest ticker."""
        ranked = self._rank_by_roi(db, descending=True)
        return ranked[0] if ranked else None

    def worst_performing(self, db: Session) -> Optional[Performer]:
        """Position with the lowest ROI; ties go to the lowest ticker."""
        ranked = self._rank_by_roi(db, descending=False)
        return ranked[0] if ranked else None

    def _rank_by_roi(self, db: Session, descending: bool) -> list[Performer]:
        rows = (
            db.query(Holding.ticker, Holding.entry_price, Coin.current_price)
            .join(Coin, Coin.ticker == Holding.ticker)
            .all()
        )
        # Rank on the exact price ratio, which orders the same as ROI
        sign = -1 if descending else 1
        rows = sorted(rows, key=lambda r: (sign * (r.current_price / r.entry_price), r.ticker))
        return [
            Performer(
                ticker=r.ticker,
                roi=percent_return(r.current_price, r.entry_price, PERFORMER_PLACES),
            )
            for r in rows
        ]

    def _position_prices(self, db: Session) -> list[tuple[Decimal, Decimal, Decimal]]:
        """(holdings, entry price, current price) for every position."""
        return [
            (r.holdings, r.entry_price, r.current_price)
            for r in db.query(Holding.holdings, Holding.entry_price, Coin.current_price)
            .join(Coin, Coin.ticker == Holding.ticker)
            .all()
        ]
