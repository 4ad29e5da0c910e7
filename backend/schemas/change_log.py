"""Pydantic schemas for change-capture log entries."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class CoinLogResponse(BaseModel):
    """Schema for a catalog log entry."""

    id: int
    timestamp: datetime
    coin_name: str
    event_kind: str

    model_config = ConfigDict(from_attributes=True)


class PortfolioLogResponse(BaseModel):
    """Schema for a holdings log entry."""

    id: int
    timestamp: datetime
    coin_name: str
    quantity: Decimal
    net_amount: Decimal
    event_kind: str

    model_config = ConfigDict(from_attributes=True)
