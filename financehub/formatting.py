"""
Display formatting.

Amounts stay exact Decimals everywhere else; rounding happens here,
half-up to cents, only when a number is turned into text.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from financehub.aggregation.totals import as_decimal
from financehub.config import get_settings


def format_currency(amount: Any, symbol: Optional[str] = None, decimals: int = 2) -> str:
    """
    Format an amount as currency: "$1,234.50", "-$20.00".

    The sign goes before the symbol.
    """
    if symbol is None:
        symbol = get_settings().dashboard.currency_symbol

    quantum = Decimal(1).scaleb(-decimals)
    value = as_decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.{decimals}f}"


def format_percentage(value: Optional[Any], decimals: int = 1) -> str:
    """Format a percentage; None (undefined ratio) renders as "n/a"."""
    if value is None:
        return "n/a"
    quantum = Decimal(1).scaleb(-decimals)
    rounded = as_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.{decimals}f}%"
