"""
Display formatting for signal values.

Fixed-decimal rendering rounds ties away from zero on the exact binary
value, so 0.125 renders as "0.13" and 2.5 as "3".
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal

NOT_AVAILABLE = "N/A"

# Wide enough to quantize any finite float
_CONTEXT = Context(prec=400)


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return math.isnan(value)
    except TypeError:
        return True


def to_fixed(value: float, digits: int = 2) -> str:
    """
    Render a number with a fixed number of decimals.

    Args:
        value: Number to render
        digits: Decimal places

    Returns:
        Rendered string ("NaN", "Infinity" and "-Infinity" for non-finite input)
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT):f}"


def format_percentage(value) -> str:
    """Two-decimal percentage string, or 'N/A' for missing values."""
    if _is_missing(value):
        return NOT_AVAILABLE
    return f"{to_fixed(value, 2)}%"


def format_price(value) -> str:
    return to_fixed(value, 2)


def format_average_volume(value) -> str:
    """Whole-number volume average, or 'N/A' while the window is filling."""
    if _is_missing(value):
        return NOT_AVAILABLE
    return to_fixed(value, 0)


def format_rsi(value) -> str:
    if _is_missing(value):
        return NOT_AVAILABLE
    return to_fixed(value, 2)


def display_symbol(symbol: str) -> str:
    """Ticker without its exchange suffix, e.g. 'RELIANCE.NS' -> 'RELIANCE'."""
    return symbol.split(".")[0]
