"""
IndicatorCalculator - computes every indicator the pattern detector needs.
All indicators run over the same frame and are joined by row position.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from stockscreen.base import ensure_numpy_array
from stockscreen.momentum import RSI
from stockscreen.trend import DEMA, SMMA, VWAP
from stockscreen.volatility import BBands, SuperTrend
from stockscreen.volume import VolumeAverage, calculate_volume_change


@dataclass(frozen=True)
class IndicatorConfig:
    """Configuration for indicator calculations."""

    # Moving averages used for the ordering check
    smma_period: int = 7
    dema_period: int = 10

    # Momentum
    rsi_period: int = 14

    # SuperTrend
    supertrend_period: int = 10
    supertrend_multiplier: float = 3.0

    # Bollinger Bands
    bbands_period: int = 20
    bbands_std_dev: float = 2.0

    # Volume
    volume_avg_window: int = 30

    @property
    def smma_column(self) -> str:
        return f"SMMA_{self.smma_period}"

    @property
    def dema_column(self) -> str:
        return f"DEMA_{self.dema_period}"

    @property
    def rsi_column(self) -> str:
        return f"RSI_{self.rsi_period}"

    @property
    def bbands_middle_column(self) -> str:
        return f"BBands_middle_{self.bbands_period}"

    @property
    def volume_avg_column(self) -> str:
        return f"VOL_AVG_{self.volume_avg_window}"


def calculate_pct_change(close: pd.Series) -> pd.Series:
    """
    Bar-over-bar percentage price change, 0 on the first bar.

    Args:
        close: Close price series

    Returns:
        Percentage change series
    """
    data = ensure_numpy_array(close)
    change = np.zeros(len(data))

    with np.errstate(divide="ignore", invalid="ignore"):
        change[1:] = (data[1:] - data[:-1]) / data[:-1] * 100

    return pd.Series(change, index=close.index, name="pct_change")


class IndicatorCalculator:
    """
    Orchestrates calculation of the screening indicators.

    Each indicator is independent of the others; only the pattern
    detector needs them all materialized.
    """

    def __init__(self, config: IndicatorConfig | None = None):
        """
        Initialize calculator with configuration.

        Args:
            config: Indicator configuration (uses defaults if None)
        """
        self.config = config or IndicatorConfig()

    def calculate_all(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Calculate all configured indicators and add them to a copy of df.

        Args:
            df: DataFrame with high, low, close, volume columns

        Returns:
            DataFrame with indicator columns added
        """
        result_df = df.copy()

        result_df = self._add_trend_indicators(result_df)
        result_df = self._add_momentum_indicators(result_df)
        result_df = self._add_volatility_indicators(result_df)
        result_df = self._add_volume_indicators(result_df)

        result_df["pct_change"] = calculate_pct_change(result_df["close"])

        return result_df

    def _add_trend_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add VWAP and the moving averages."""
        df["VWAP"] = VWAP().calculate(df)
        df[self.config.smma_column] = SMMA().calculate(df, self.config.smma_period)
        df[self.config.dema_column] = DEMA().calculate(df, self.config.dema_period)
        return df

    def _add_momentum_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add RSI."""
        df[self.config.rsi_column] = RSI().calculate(df, self.config.rsi_period)
        return df

    def _add_volatility_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add SuperTrend and Bollinger Bands."""
        supertrend, direction = SuperTrend().calculate(
            df,
            self.config.supertrend_period,
            self.config.supertrend_multiplier,
        )
        df["SuperTrend"] = supertrend
        df["SuperTrend_direction"] = direction

        period = self.config.bbands_period
        upper, middle, lower = BBands().calculate(df, period, self.config.bbands_std_dev)
        df[f"BBands_upper_{period}"] = upper
        df[f"BBands_middle_{period}"] = middle
        df[f"BBands_lower_{period}"] = lower

        return df

    def _add_volume_indicators(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add the volume average and volume deviation."""
        volume_avg = VolumeAverage().calculate(df, self.config.volume_avg_window)
        df[self.config.volume_avg_column] = volume_avg
        df["vol_change"] = calculate_volume_change(df["volume"], volume_avg)
        return df


def calculate_all_indicators(
    df: pd.DataFrame,
    config: IndicatorConfig | None = None,
) -> pd.DataFrame:
    """
    Convenience function to calculate all indicators.

    Args:
        df: DataFrame with OHLCV data
        config: Optional indicator configuration

    Returns:
        DataFrame with all indicators
    """
    calculator = IndicatorCalculator(config)
    return calculator.calculate_all(df)
