"""Pydantic schemas for catalog and holdings records."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """Schema for a Category record."""

    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CoinResponse(BaseModel):
    """Schema for a catalog Coin with its categories."""

    ticker: str
    name: str
    launch_price: Decimal
    current_price: Decimal
    all_time_low: Decimal
    all_time_high: Decimal
    return_since_launch: Decimal | None = None
    categories: list[CategoryResponse] = []

    model_config = ConfigDict(from_attributes=True)


class HoldingResponse(BaseModel):
    """Schema for a portfolio Holding."""

    id: int
    ticker: str
    holdings: Decimal
    entry_price: Decimal
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True)
