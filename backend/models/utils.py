"""Shared utilities for ORM models."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

RETURN_PLACES = Decimal("0.0001")


def utc_now() -> datetime:
    """Current wall-clock time in UTC."""
    return datetime.now(timezone.utc)


def to_decimal(value) -> Decimal | None:
    """Coerce a numeric column value to Decimal, passing None through."""
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percent_return(current, base, places: Decimal = RETURN_PLACES) -> Decimal | None:
    """Return ``(current / base * 100) - 100`` rounded to ``places``.

    Used for both the coin's return since launch (base = launch price) and
    a holding's ROI (base = entry price). Returns None when either price is
    missing or the base is not positive.
    """
    current = to_decimal(current)
    base = to_decimal(base)
    if current is None or base is None or base <= 0:
        return None
    return ((current / base * 100) - 100).quantize(places, rounding=ROUND_HALF_UP)
