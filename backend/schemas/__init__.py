"""Pydantic schemas for serializing store records."""

from .catalog import CategoryResponse, CoinResponse, HoldingResponse
from .change_log import CoinLogResponse, PortfolioLogResponse

__all__ = [
    "CategoryResponse",
    "CoinLogResponse",
    "CoinResponse",
    "HoldingResponse",
    "PortfolioLogResponse",
]
