"""
Momentum indicators: RSI.
Optimized with Numba JIT compilation for hot loops.
"""

import pandas as pd
import numpy as np
from numba import njit
from stockscreen.base import BaseIndicator, ensure_numpy_array
from stockscreen.trend import _window_sum


@njit
def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    # RS saturates at 100 when there are no losses in the window
    if avg_loss == 0:
        rs = 100.0
    else:
        rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


@njit
def _calculate_rsi_numba(data: np.ndarray, period: int) -> np.ndarray:
    """
    Numba-optimized RSI with a slice-based Wilder step.

    The previous averages are recomputed from the raw gain/loss window at
    every step rather than carried forward, so rounding matches a
    recompute-per-bar reference exactly.

    Args:
        data: Price array
        period: Lookback period

    Returns:
        RSI array, NaN before index `period`
    """
    n = len(data)
    result = np.empty(n)
    result[:] = np.nan

    if n < 2:
        return result

    # Calculate price changes
    m = n - 1
    gains = np.empty(m)
    losses = np.empty(m)
    for i in range(m):
        change = data[i + 1] - data[i]
        if np.isnan(change):
            # Any window touching a missing close stays missing
            gains[i] = np.nan
            losses[i] = np.nan
            continue
        gains[i] = change if change > 0 else 0.0
        losses[i] = -change if change < 0 else 0.0

    if m < period:
        return result

    # First RSI value uses plain averages
    avg_gain = _window_sum(gains, 0, period) / period
    avg_loss = _window_sum(losses, 0, period) / period
    result[period] = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(period, m):
        prev_avg_gain = _window_sum(gains, i - period + 1, i) / period
        prev_avg_loss = _window_sum(losses, i - period + 1, i) / period
        avg_gain = (prev_avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (prev_avg_loss * (period - 1) + losses[i]) / period
        # Output is shifted by one to align with the undifferenced series
        result[i + 1] = _rsi_from_averages(avg_gain, avg_loss)

    return result


class RSI(BaseIndicator):
    """Relative Strength Index - Numba optimized."""

    def __init__(self):
        super().__init__("RSI")

    def calculate(self, df: pd.DataFrame, period: int = 14) -> pd.Series:
        """
        Calculate RSI.

        Args:
            df: DataFrame with 'close' column
            period: Lookback period (default 14)

        Returns:
            RSI series (0-100)
        """
        self.validate_dataframe(df, ["close"])
        self.validate_period(period)

        data = ensure_numpy_array(df["close"])
        result = _calculate_rsi_numba(data, period)

        return pd.Series(result, index=df.index, name=f"RSI_{period}")


# Convenience functions
def calculate_rsi(df: pd.DataFrame, period: int = 14) -> pd.Series:
    """Calculate RSI - convenience function."""
    return RSI().calculate(df, period)
