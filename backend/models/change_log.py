"""Change-capture log models and the flush hooks that populate them.

Every insert, update and delete of a Coin or Holding row appends one row
to ``coin_log`` / ``portfolio_log``. The hooks write through the flushing
connection, so a log row commits or rolls back together with the change
that produced it. Names and amounts are copied, not referenced, so the log
stays readable after the coin or holding is gone.
"""

from enum import Enum

from sqlalchemy import Column, DateTime, Integer, Numeric, String, event, select

from database import Base
from models.coin import Coin
from models.holding import Holding
from models.utils import to_decimal, utc_now


class ChangeEvent(str, Enum):
    """Kind of mutation recorded in a log row."""

    ADDED = "ADDED"
    UPDATED = "UPDATED"
    REMOVED = "REMOVED"


class CoinLog(Base):
    """An audit entry for a catalog change."""

    __tablename__ = "coin_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False, default=utc_now)
    coin_name = Column(String(50), nullable=False)
    event_kind = Column(String(10), nullable=False)  # ChangeEvent value


class PortfolioLog(Base):
    """An audit entry for a holdings change.

    ``net_amount`` is the cost basis (quantity x entry price) at the time
    of the change.
    """

    __tablename__ = "portfolio_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False, default=utc_now)
    coin_name = Column(String(50), nullable=False)
    quantity = Column(Numeric(20, 8), nullable=False)
    net_amount = Column(Numeric(28, 8), nullable=False)
    event_kind = Column(String(10), nullable=False)


def _log_coin(connection, target: Coin, kind: ChangeEvent) -> None:
    connection.execute(
        CoinLog.__table__.insert().values(
            timestamp=utc_now(),
            coin_name=target.name,
            event_kind=kind.value,
        )
    )


def _log_holding(connection, target: Holding, kind: ChangeEvent) -> None:
    # The name comes from the catalog row, which must still exist here:
    # removal deletes holdings before their coin.
    coin_name = connection.execute(
        select(Coin.__table__.c.name).where(Coin.__table__.c.ticker == target.ticker)
    ).scalar_one()
    quantity = to_decimal(target.holdings or 0)
    connection.execute(
        PortfolioLog.__table__.insert().values(
            timestamp=utc_now(),
            coin_name=coin_name,
            quantity=quantity,
            net_amount=quantity * to_decimal(target.entry_price),
            event_kind=kind.value,
        )
    )


@event.listens_for(Coin, "after_insert")
def _coin_inserted(mapper, connection, target):
    _log_coin(connection, target, ChangeEvent.ADDED)


@event.listens_for(Coin, "after_update")
def _coin_updated(mapper, connection, target):
    _log_coin(connection, target, ChangeEvent.UPDATED)


@event.listens_for(Coin, "before_delete")
def _coin_deleted(mapper, connection, target):
    _log_coin(connection, target, ChangeEvent.REMOVED)


@event.listens_for(Holding, "after_insert")
def _holding_inserted(mapper, connection, target):
    _log_holding(connection, target, ChangeEvent.ADDED)


@event.listens_for(Holding, "after_update")
def _holding_updated(mapper, connection, target):
    _log_holding(connection, target, ChangeEvent.UPDATED)


@event.listens_for(Holding, "before_delete")
def _holding_deleted(mapper, connection, target):
    _log_holding(connection, target, ChangeEvent.REMOVED)
