"""Numeric helper functions for entry calculations.

This module provides the coercion and formatting primitives shared by the
aggregator, the invoice builder and the document writers:
- Lenient conversion of form values to Decimal (blank/unparseable -> 0)
- Half-up rounding to cents
- Display formatting for hours, miles, rates and currency
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Parse a form value into a Decimal.

    Blank strings and None mean "not provided" and return None. Values that
    cannot be parsed, or that are not finite numbers, also return None.

    Args:
        value: Raw value (str, int, float, Decimal or None)

    Returns:
        Parsed Decimal, or None if the value is absent or unparseable

    Example:
        >>> parse_decimal("8.5")
        Decimal('8.5')
        >>> parse_decimal("") is None
        True
        >>> parse_decimal("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    text = str(value).strip()
    if not text:
        return None

    try:
        result = Decimal(text)
    except (InvalidOperation, ValueError):
        return None

    return result if result.is_finite() else None


def to_decimal(value: Any) -> Decimal:
    """Coerce a value to Decimal, treating absent or unparseable values as zero.

    Args:
        value: Raw value

    Returns:
        The parsed Decimal, or Decimal("0")

    Example:
        >>> to_decimal("2.5")
        Decimal('2.5')
        >>> to_decimal(None)
        Decimal('0')
    """
    parsed = parse_decimal(value)
    return parsed if parsed is not None else ZERO


def round_money(value: Decimal) -> Decimal:
    """Round a currency amount half-up to cents.

    Example:
        >>> round_money(Decimal("0.725"))
        Decimal('0.73')
    """
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_currency(value: Decimal, places: int = 2) -> str:
    """Format a currency amount, e.g. ``$1,234.50``.

    Negative amounts are rendered as ``-$12.00``.
    """
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{places}f}"


def format_hours(value: Decimal) -> str:
    """Format an hour quantity with two decimals, e.g. ``8.00``."""
    return f"{value:.2f}"


def format_miles(value: Decimal) -> str:
    """Format a distance with one decimal, e.g. ``20.0 mi``."""
    return f"{value:.1f} mi"
