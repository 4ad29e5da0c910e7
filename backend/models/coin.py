"""Coin model - the catalog of tradable coins."""

from sqlalchemy import CheckConstraint, Column, Numeric, String, event
from sqlalchemy.orm import relationship

from database import Base
from models.utils import percent_return

TICKER_MAX_LENGTH = 10


class Coin(Base):
    """A coin in the catalog, identified by its ticker.

    ``return_since_launch`` is derived from the two prices and persisted
    with the row; it is recomputed on every insert and update.
    """

    __tablename__ = "coin"
    __table_args__ = (
        CheckConstraint("launch_price > 0", name="ck_coin_launch_price_positive"),
    )

    ticker = Column(String(TICKER_MAX_LENGTH), primary_key=True)
    name = Column(String(50), nullable=False)
    launch_price = Column(Numeric(20, 8), nullable=False)
    current_price = Column(Numeric(20, 8), nullable=False)
    all_time_low = Column(Numeric(20, 8), nullable=False)
    all_time_high = Column(Numeric(20, 8), nullable=False)
    return_since_launch = Column(Numeric(24, 4), nullable=True)

    # Read-only view of the classification links, ordered by category id
    categories = relationship(
        "Category",
        secondary="coin_category",
        order_by="Category.id",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Coin {self.ticker}>"


@event.listens_for(Coin, "before_insert")
@event.listens_for(Coin, "before_update")
def _refresh_return_since_launch(mapper, connection, target: Coin) -> None:
    target.return_since_launch = percent_return(
        target.current_price, target.launch_price
    )
