"""Display formatting for monetary values and returns."""

from decimal import ROUND_HALF_UP, Decimal

from config import settings

CENTS = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round a monetary amount to two decimals, halves away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_money(value: Decimal | None) -> str:
    """Prefix a monetary value with the configured currency symbol.

    Values are shown as stored (no thousands separator), e.g. ``$0.071399``.
    """
    if value is None:
        return ""
    return f"{settings.CURRENCY_SYMBOL}{_plain(value)}"


def format_percent(value: Decimal | None) -> str:
    """Suffix a percentage with ``%``, e.g. ``611.4835%``."""
    if value is None:
        return ""
    return f"{_plain(value)}%"


def _plain(value: Decimal) -> str:
    # Avoid scientific notation for very small or very large values
    return format(value, "f")
