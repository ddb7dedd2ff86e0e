"""
Trend indicators: SMA, EMA, SMMA, DEMA, VWAP.
Numba JIT kernels for the sequential recurrences.
"""

import pandas as pd
import numpy as np
from numba import njit
from stockscreen.base import BaseIndicator, ensure_numpy_array


@njit
def _window_sum(data: np.ndarray, start: int, stop: int) -> float:
    """Left-to-right sum of data[start:stop], starting from 0.0."""
    total = 0.0
    for j in range(start, stop):
        total += data[j]
    return total


@njit
def _calculate_sma_numba(data: np.ndarray, period: int) -> np.ndarray:
    """
    Numba-optimized SMA over the trailing window.

    Args:
        data: Value array
        period: Lookback period

    Returns:
        SMA array, NaN before index period-1
    """
    n = len(data)
    result = np.empty(n)
    result[:] = np.nan

    for i in range(period - 1, n):
        result[i] = _window_sum(data, i - period + 1, i + 1) / period

    return result


@njit
def _calculate_ema_numba(data: np.ndarray, period: int) -> np.ndarray:
    """
    Numba-optimized EMA seeded with the first non-missing value.

    Missing inputs produce missing outputs and leave the running EMA untouched.

    Args:
        data: Value array, may contain NaN
        period: Lookback period

    Returns:
        EMA array
    """
    n = len(data)
    result = np.empty(n)
    result[:] = np.nan

    multiplier = 2.0 / (period + 1.0)
    ema = 0.0
    seeded = False

    for i in range(n):
        if np.isnan(data[i]):
            continue

        if not seeded:
            ema = data[i]
            seeded = True
        else:
            ema = (data[i] - ema) * multiplier + ema
        result[i] = ema

    return result


@njit
def _calculate_smma_numba(data: np.ndarray, period: int) -> np.ndarray:
    """
    Numba-optimized Smoothed Moving Average (Wilder smoothing).

    Args:
        data: Value array
        period: Lookback period

    Returns:
        SMMA array
    """
    n = len(data)
    result = np.empty(n)
    result[:] = np.nan

    if n < period:
        return result

    # Seed with the SMA of the first window
    smma = _window_sum(data, 0, period) / period
    result[period - 1] = smma

    for i in range(period, n):
        smma = (smma * (period - 1) + data[i]) / period
        result[i] = smma

    return result


@njit
def _calculate_dema_numba(data: np.ndarray, period: int) -> np.ndarray:
    """
    Numba-optimized Double EMA.

    EMA2 runs over the compacted (NaN-free) EMA1 values and is consumed
    in order as EMA1 becomes valid.

    Args:
        data: Value array
        period: Lookback period

    Returns:
        DEMA array
    """
    n = len(data)
    result = np.empty(n)
    result[:] = np.nan

    ema1 = _calculate_ema_numba(data, period)
    ema2 = _calculate_ema_numba(ema1[~np.isnan(ema1)], period)

    ema2_index = 0
    for i in range(n):
        if np.isnan(ema1[i]) or ema2_index >= len(ema2):
            continue
        result[i] = 2.0 * ema1[i] - ema2[ema2_index]
        ema2_index += 1

    return result


class SMA(BaseIndicator):
    """Simple Moving Average - Numba optimized."""

    def __init__(self):
        super().__init__("SMA")

    def calculate(self, df: pd.DataFrame, period: int = 50) -> pd.Series:
        """
        Calculate Simple Moving Average.

        Args:
            df: DataFrame with 'close' column
            period: Lookback period

        Returns:
            SMA series
        """
        self.validate_dataframe(df, ["close"])
        self.validate_period(period)

        data = ensure_numpy_array(df["close"])
        result = _calculate_sma_numba(data, period)

        return pd.Series(result, index=df.index, name=f"SMA_{period}")


class EMA(BaseIndicator):
    """Exponential Moving Average seeded with the first value."""

    def __init__(self):
        super().__init__("EMA")

    def calculate(self, df: pd.DataFrame, period: int = 50) -> pd.Series:
        """
        Calculate Exponential Moving Average.

        Args:
            df: DataFrame with 'close' column
            period: Lookback period

        Returns:
            EMA series
        """
        self.validate_dataframe(df, ["close"])
        self.validate_period(period)

        data = ensure_numpy_array(df["close"])
        result = _calculate_ema_numba(data, period)

        return pd.Series(result, index=df.index, name=f"EMA_{period}")


class SMMA(BaseIndicator):
    """Smoothed Moving Average - Numba optimized."""

    def __init__(self):
        super().__init__("SMMA")

    def calculate(self, df: pd.DataFrame, period: int = 7) -> pd.Series:
        """
        Calculate Smoothed Moving Average.

        Args:
            df: DataFrame with 'close' column
            period: Lookback period

        Returns:
            SMMA series
        """
        self.validate_dataframe(df, ["close"])
        self.validate_period(period)

        data = ensure_numpy_array(df["close"])
        result = _calculate_smma_numba(data, period)

        return pd.Series(result, index=df.index, name=f"SMMA_{period}")


class DEMA(BaseIndicator):
    """Double Exponential Moving Average."""

    def __init__(self):
        super().__init__("DEMA")

    def calculate(self, df: pd.DataFrame, period: int = 10) -> pd.Series:
        """
        Calculate Double Exponential Moving Average.

        Args:
            df: DataFrame with 'close' column
            period: Lookback period

        Returns:
            DEMA series
        """
        self.validate_dataframe(df, ["close"])
        self.validate_period(period)

        data = ensure_numpy_array(df["close"])
        result = _calculate_dema_numba(data, period)

        return pd.Series(result, index=df.index, name=f"DEMA_{period}")


class VWAP(BaseIndicator):
    """Volume Weighted Average Price - vectorized implementation."""

    def __init__(self):
        super().__init__("VWAP")

    def calculate(self, df: pd.DataFrame) -> pd.Series:
        """
        Calculate cumulative Volume Weighted Average Price.

        Accumulates from the first row (no session reset). Where cumulative
        volume is zero the close price is used.

        Args:
            df: DataFrame with 'high', 'low', 'close', 'volume' columns

        Returns:
            VWAP series
        """
        required_cols = ["high", "low", "close", "volume"]
        self.validate_dataframe(df, required_cols)

        high = ensure_numpy_array(df["high"])
        low = ensure_numpy_array(df["low"])
        close = ensure_numpy_array(df["close"])
        volume = ensure_numpy_array(df["volume"])

        # Typical price = (high + low + close) / 3
        typical_price = (high + low + close) / 3

        cumulative_tpv = np.cumsum(typical_price * volume)
        cumulative_volume = np.cumsum(volume)

        with np.errstate(divide="ignore", invalid="ignore"):
            vwap = np.where(cumulative_volume == 0, close, cumulative_tpv / cumulative_volume)

        return pd.Series(vwap, index=df.index, name="VWAP")


# Convenience functions
def calculate_sma(df: pd.DataFrame, period: int = 50) -> pd.Series:
    """Calculate SMA - convenience function."""
    return SMA().calculate(df, period)


def calculate_ema(df: pd.DataFrame, period: int = 50) -> pd.Series:
    """Calculate EMA - convenience function."""
    return EMA().calculate(df, period)


def calculate_smma(df: pd.DataFrame, period: int = 7) -> pd.Series:
    """Calculate SMMA - convenience function."""
    return SMMA().calculate(df, period)


def calculate_dema(df: pd.DataFrame, period: int = 10) -> pd.Series:
    """Calculate DEMA - convenience function."""
    return DEMA().calculate(df, period)


def calculate_vwap(df: pd.DataFrame) -> pd.Series:
    """Calculate VWAP - convenience function."""
    return VWAP().calculate(df)
