"""CoinCategory model - links coins to categories."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from database import Base
from models.coin import TICKER_MAX_LENGTH


class CoinCategory(Base):
    """One classification link between a coin and a category."""

    __tablename__ = "coin_category"
    __table_args__ = (
        UniqueConstraint("ticker", "category_id", name="uix_coin_category"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticker = Column(
        String(TICKER_MAX_LENGTH), ForeignKey("coin.ticker"), nullable=False, index=True
    )
    category_id = Column(Integer, ForeignKey("category.id"), nullable=False)

    # Relationships
    coin = relationship("Coin")
    category = relationship("Category")
