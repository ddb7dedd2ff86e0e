"""
Price target estimation from signals, with optional pivot levels.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from stockscreen.pattern import SignalKind

BREAKOUT_TARGET_MULTIPLIERS = (1.02, 1.05, 1.1)
BREAKDOWN_TARGET_MULTIPLIERS = (0.98, 0.95, 0.9)


@dataclass(frozen=True)
class PivotLevels:
    """Pivot point with three resistance and three support levels."""

    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float

    @classmethod
    def from_mapping(cls, data: Mapping) -> "PivotLevels":
        return cls(**{name: float(data[name]) for name in ("pivot", "r1", "r2", "r3", "s1", "s2", "s3")})


def calculate_pivot_points(high: float, low: float, close: float) -> PivotLevels:
    """
    Standard floor pivot points from one bar.

    Args:
        high: Bar high
        low: Bar low
        close: Bar close

    Returns:
        PivotLevels
    """
    pivot = (high + low + close) / 3
    return PivotLevels(
        pivot=pivot,
        r1=(2 * pivot) - low,
        r2=pivot + (high - low),
        r3=high + 2 * (pivot - low),
        s1=(2 * pivot) - high,
        s2=pivot - (high - low),
        s3=low - 2 * (high - pivot),
    )


def calculate_next_targets(
    current_price: float,
    signal: SignalKind | str,
    pivot_data: PivotLevels | Mapping | None = None,
) -> list[float]:
    """
    Estimate the next price targets for a signal.

    Without pivot data, breakout-family signals target +2%/+5%/+10% and
    breakdown-family signals -2%/-5%/-10%. With pivot data, breakouts
    target the resistance levels above the price and breakdowns the
    support levels below it.

    Args:
        current_price: Price at the signal
        signal: Signal kind
        pivot_data: Optional pivot levels

    Returns:
        List of targets (empty for unknown signal kinds)
    """
    try:
        kind = SignalKind(signal)
    except ValueError:
        return []

    if pivot_data is None:
        if kind.is_breakout:
            return [current_price * m for m in BREAKOUT_TARGET_MULTIPLIERS]
        return [current_price * m for m in BREAKDOWN_TARGET_MULTIPLIERS]

    if not isinstance(pivot_data, PivotLevels):
        pivot_data = PivotLevels.from_mapping(pivot_data)

    if kind.is_breakout:
        return [t for t in (pivot_data.r1, pivot_data.r2, pivot_data.r3) if t > current_price]
    return [t for t in (pivot_data.s1, pivot_data.s2, pivot_data.s3) if t < current_price]
