"""
Volatility indicators: ATR, BBands, SuperTrend.
Optimized with Numba for the windowed and stateful loops.
"""

from enum import IntEnum

import pandas as pd
import numpy as np
from numba import njit
from stockscreen.base import BaseIndicator, ensure_numpy_array
from stockscreen.trend import _calculate_sma_numba


class TrendDirection(IntEnum):
    """SuperTrend direction as stored in the direction series."""

    UP = 1
    DOWN = -1


@njit
def _calculate_true_range_numba(high: np.ndarray, low: np.ndarray, close: np.ndarray) -> np.ndarray:
    """
    Numba-optimized True Range.

    Args:
        high: High prices
        low: Low prices
        close: Close prices

    Returns:
        True range array, high-low on the first bar
    """
    n = len(close)
    tr = np.empty(n)

    for i in range(n):
        if i == 0:
            tr[i] = high[i] - low[i]
        elif np.isnan(high[i]) or np.isnan(low[i]) or np.isnan(close[i - 1]):
            tr[i] = np.nan
        else:
            hl = high[i] - low[i]
            hc = abs(high[i] - close[i - 1])
            lc = abs(low[i] - close[i - 1])
            tr[i] = max(hl, hc, lc)

    return tr


@njit
def _calculate_atr_numba(
    high: np.ndarray, low: np.ndarray, close: np.ndarray, period: int
) -> np.ndarray:
    """ATR as the simple average of the true range."""
    tr = _calculate_true_range_numba(high, low, close)
    return _calculate_sma_numba(tr, period)


@njit
def _calculate_bbands_numba(
    data: np.ndarray, period: int, std_dev: float
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Numba-optimized Bollinger Bands using the population standard deviation.

    Args:
        data: Price array
        period: Lookback period
        std_dev: Band width in standard deviations

    Returns:
        Tuple of (upper, middle, lower) arrays
    """
    n = len(data)
    middle = _calculate_sma_numba(data, period)
    upper = np.empty(n)
    lower = np.empty(n)
    upper[:] = np.nan
    lower[:] = np.nan

    for i in range(period - 1, n):
        mean = middle[i]
        variance = 0.0
        for j in range(i - period + 1, i + 1):
            diff = data[j] - mean
            variance += diff * diff
        variance = variance / period
        deviation = np.sqrt(variance)

        upper[i] = mean + std_dev * deviation
        lower[i] = mean - std_dev * deviation

    return upper, middle, lower


@njit
def _calculate_supertrend_numba(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    period: int,
    multiplier: float,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Numba-optimized SuperTrend.

    Direction is 1.0 while the trend line rides the upper band and -1.0
    while it rides the lower band. Bar period-1 is treated as previously
    on the upper band. A bar with a missing close or band is missing, and
    so is every later bar, since the state it would continue is gone.

    Args:
        high: High prices
        low: Low prices
        close: Close prices
        period: ATR lookback period
        multiplier: ATR multiplier for the bands

    Returns:
        Tuple of (supertrend, direction, final_upper, final_lower) arrays
    """
    n = len(close)
    supertrend = np.empty(n)
    direction = np.empty(n)
    upper = np.empty(n)
    lower = np.empty(n)
    supertrend[:] = np.nan
    direction[:] = np.nan
    upper[:] = np.nan
    lower[:] = np.nan

    atr = _calculate_atr_numba(high, low, close, period)

    for i in range(max(period - 1, 0), n):
        hl2 = (high[i] + low[i]) / 2.0
        basic_upper = hl2 + multiplier * atr[i]
        basic_lower = hl2 - multiplier * atr[i]

        # Missing inputs leave the whole bar missing
        if np.isnan(close[i]) or np.isnan(basic_upper) or np.isnan(basic_lower):
            continue

        # Final bands only tighten unless the previous close broke through
        if (
            i == 0
            or np.isnan(upper[i - 1])
            or basic_upper < upper[i - 1]
            or close[i - 1] > upper[i - 1]
        ):
            final_upper = basic_upper
        else:
            final_upper = upper[i - 1]

        if (
            i == 0
            or np.isnan(lower[i - 1])
            or basic_lower > lower[i - 1]
            or close[i - 1] < lower[i - 1]
        ):
            final_lower = basic_lower
        else:
            final_lower = lower[i - 1]

        upper[i] = final_upper
        lower[i] = final_lower

        if i == 0:
            supertrend[i] = final_upper
            direction[i] = 1.0
            continue

        # A missing previous level only seeds on the first bar; after a gap
        # no branch matches and the missing state is carried
        first_bar = i == period - 1
        on_upper = first_bar or supertrend[i - 1] == upper[i - 1]
        on_lower = supertrend[i - 1] == lower[i - 1]

        if on_upper and close[i] <= final_upper:
            supertrend[i] = final_upper
            direction[i] = 1.0
        elif on_upper and close[i] > final_upper:
            supertrend[i] = final_lower
            direction[i] = -1.0
        elif on_lower and close[i] >= final_lower:
            supertrend[i] = final_lower
            direction[i] = -1.0
        elif on_lower and close[i] < final_lower:
            supertrend[i] = final_upper
            direction[i] = 1.0
        else:
            supertrend[i] = supertrend[i - 1]
            direction[i] = direction[i - 1]

    return supertrend, direction, upper, lower


class ATR(BaseIndicator):
    """Average True Range - Numba optimized."""

    def __init__(self):
        super().__init__("ATR")

    def calculate(self, df: pd.DataFrame, period: int = 14) -> pd.Series:
        """
        Calculate Average True Range.

        Args:
            df: DataFrame with 'high', 'low', 'close' columns
            period: Lookback period

        Returns:
            ATR series
        """
        required_cols = ["high", "low", "close"]
        self.validate_dataframe(df, required_cols)
        self.validate_period(period)

        high = ensure_numpy_array(df["high"])
        low = ensure_numpy_array(df["low"])
        close = ensure_numpy_array(df["close"])

        result = _calculate_atr_numba(high, low, close, period)

        return pd.Series(result, index=df.index, name=f"ATR_{period}")


class BBands(BaseIndicator):
    """Bollinger Bands - Numba optimized."""

    def __init__(self):
        super().__init__("BBands")

    def calculate(
        self,
        df: pd.DataFrame,
        period: int = 20,
        std_dev: float = 2.0,
    ) -> tuple[pd.Series, pd.Series, pd.Series]:
        """
        Calculate Bollinger Bands.

        Args:
            df: DataFrame with 'close' column
            period: Lookback period
            std_dev: Standard deviations for both bands

        Returns:
            Tuple of (upper, middle, lower) bands
        """
        self.validate_dataframe(df, ["close"])
        self.validate_period(period)

        data = ensure_numpy_array(df["close"])
        upper, middle, lower = _calculate_bbands_numba(data, period, float(std_dev))

        return (
            pd.Series(upper, index=df.index, name=f"BBands_upper_{period}"),
            pd.Series(middle, index=df.index, name=f"BBands_middle_{period}"),
            pd.Series(lower, index=df.index, name=f"BBands_lower_{period}"),
        )


class SuperTrend(BaseIndicator):
    """SuperTrend trend-following band - Numba optimized."""

    def __init__(self):
        super().__init__("SuperTrend")

    def calculate(
        self, df: pd.DataFrame, period: int = 10, multiplier: float = 3.0
    ) -> tuple[pd.Series, pd.Series]:
        """
        Calculate SuperTrend level and direction.

        Args:
            df: DataFrame with 'high', 'low', 'close' columns
            period: ATR lookback period
            multiplier: ATR multiplier

        Returns:
            Tuple of (SuperTrend, direction); direction holds TrendDirection values
        """
        required_cols = ["high", "low", "close"]
        self.validate_dataframe(df, required_cols)
        self.validate_period(period)

        high = ensure_numpy_array(df["high"])
        low = ensure_numpy_array(df["low"])
        close = ensure_numpy_array(df["close"])

        supertrend, direction, _, _ = _calculate_supertrend_numba(
            high, low, close, period, float(multiplier)
        )

        return (
            pd.Series(supertrend, index=df.index, name="SuperTrend"),
            pd.Series(direction, index=df.index, name="SuperTrend_direction"),
        )

    def calculate_bands(
        self, df: pd.DataFrame, period: int = 10, multiplier: float = 3.0
    ) -> tuple[pd.Series, pd.Series]:
        """Final (upper, lower) bands the SuperTrend level switches between."""
        required_cols = ["high", "low", "close"]
        self.validate_dataframe(df, required_cols)
        self.validate_period(period)

        _, _, upper, lower = _calculate_supertrend_numba(
            ensure_numpy_array(df["high"]),
            ensure_numpy_array(df["low"]),
            ensure_numpy_array(df["close"]),
            period,
            float(multiplier),
        )

        return (
            pd.Series(upper, index=df.index, name="SuperTrend_upper"),
            pd.Series(lower, index=df.index, name="SuperTrend_lower"),
        )


# Convenience functions
def calculate_atr(df: pd.DataFrame, period: int = 14) -> pd.Series:
    """Calculate ATR - convenience function."""
    return ATR().calculate(df, period)


def calculate_bbands(
    df: pd.DataFrame, period: int = 20, std_dev: float = 2.0
) -> tuple[pd.Series, pd.Series, pd.Series]:
    """Calculate Bollinger Bands - convenience function."""
    return BBands().calculate(df, period, std_dev)


def calculate_supertrend(
    df: pd.DataFrame, period: int = 10, multiplier: float = 3.0
) -> tuple[pd.Series, pd.Series]:
    """Calculate SuperTrend - convenience function."""
    return SuperTrend().calculate(df, period, multiplier)
