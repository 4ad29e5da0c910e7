"""SQLAlchemy ORM models."""

from .category import Category
from .coin import Coin
from .coin_category import CoinCategory
from .holding import Holding
from .change_log import ChangeEvent, CoinLog, PortfolioLog

__all__ = ["Category", "ChangeEvent", "Coin", "CoinCategory", "CoinLog", "Holding", "PortfolioLog"]
