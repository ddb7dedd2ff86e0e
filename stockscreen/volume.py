"""
Volume indicators: rolling volume average and deviation from it.
"""

import pandas as pd
import numpy as np
from stockscreen.base import BaseIndicator, ensure_numpy_array
from stockscreen.trend import _calculate_sma_numba


class VolumeAverage(BaseIndicator):
    """Simple average of volume over a trailing window."""

    def __init__(self):
        super().__init__("VolumeAverage")

    def calculate(self, df: pd.DataFrame, window: int = 30) -> pd.Series:
        """
        Calculate the trailing volume average.

        Args:
            df: DataFrame with 'volume' column
            window: Lookback window

        Returns:
            Volume average series, NaN before index window-1
        """
        self.validate_dataframe(df, ["volume"])
        self.validate_period(window)

        volume = ensure_numpy_array(df["volume"])
        result = _calculate_sma_numba(volume, window)

        return pd.Series(result, index=df.index, name=f"VOL_AVG_{window}")


def calculate_volume_change(volume: pd.Series, volume_avg: pd.Series) -> pd.Series:
    """
    Percentage deviation of volume from its average.

    Rows where the average is missing or zero get 0.

    Args:
        volume: Volume series
        volume_avg: Aligned volume average series

    Returns:
        Volume change series (percentage)
    """
    vol = ensure_numpy_array(volume)
    avg = ensure_numpy_array(volume_avg)

    valid = ~np.isnan(avg) & (avg != 0)
    change = np.zeros(len(vol))
    change[valid] = (vol[valid] - avg[valid]) / avg[valid] * 100

    return pd.Series(change, index=volume.index, name="vol_change")


# Convenience functions
def calculate_volume_average(df: pd.DataFrame, window: int = 30) -> pd.Series:
    """Calculate volume average - convenience function."""
    return VolumeAverage().calculate(df, window)
