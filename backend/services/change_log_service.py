"""Service for reading the change-capture logs.

The logs are written by the flush hooks in :mod:`models.change_log`;
nothing in this service writes to them.
"""

from typing import Optional

from sqlalchemy.orm import Session

from models import CoinLog, PortfolioLog


class ChangeLogService:
    """Read access to the catalog and holdings audit trails."""

    @staticmethod
    def list_coin_log(db: Session, limit: Optional[int] = None) -> list[CoinLog]:
        """Catalog log entries, oldest first."""
        query = db.query(CoinLog).order_by(CoinLog.id)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def list_portfolio_log(
        db: Session, limit: Optional[int] = None
    ) -> list[PortfolioLog]:
        """Holdings log entries, oldest first."""
        query = db.query(PortfolioLog).order_by(PortfolioLog.id)
        if limit is not None:
            query = query.limit(limit)
        return query.all()
