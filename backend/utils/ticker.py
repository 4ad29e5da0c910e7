"""Utility functions for handling ticker symbols."""

from models.coin import TICKER_MAX_LENGTH


def normalize_ticker(ticker: str) -> str:
    """Canonical form of a ticker: stripped and upper-cased.

    Tickers compare case-insensitively ("eth" and "ETH" are the same coin),
    so every service normalizes before touching the store.
    """
    return ticker.strip().upper()


def is_valid_ticker(ticker: str) -> bool:
    """Check that a normalized ticker fits the catalog key column."""
    return 0 < len(ticker) <= TICKER_MAX_LENGTH
