"""Holding model - one portfolio position per catalog coin."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from database import Base
from models.coin import TICKER_MAX_LENGTH
from models.utils import to_decimal


class Holding(Base):
    """A position in a single coin.

    ROI is not stored; the reporting layer derives it from the coin's
    current price on every read.
    """

    __tablename__ = "portfolio"
    __table_args__ = (
        CheckConstraint("holdings >= 0", name="ck_portfolio_holdings_non_negative"),
        CheckConstraint("entry_price > 0", name="ck_portfolio_entry_price_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticker = Column(
        String(TICKER_MAX_LENGTH), ForeignKey("coin.ticker"), nullable=False, unique=True
    )
    holdings = Column(Numeric(20, 8), nullable=False, default=Decimal("0"))
    entry_price = Column(Numeric(20, 8), nullable=False)
    notes = Column(String(255), nullable=True)

    # Relationships
    coin = relationship("Coin")

    @property
    def net_amount(self) -> Decimal:
        """Cost basis of the position (holdings x entry price)."""
        return to_decimal(self.holdings or 0) * to_decimal(self.entry_price)
