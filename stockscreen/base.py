"""
Base indicator class with input validation.
"""

from abc import ABC, abstractmethod

import numpy as np
import pandas as pd


class BaseIndicator(ABC):
    """
    Abstract base class for all technical indicators.
    Provides validation and a standardized interface.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def calculate(self, df: pd.DataFrame, **kwargs) -> pd.Series | tuple:
        """
        Calculate the indicator.

        Args:
            df: DataFrame with OHLCV data
            **kwargs: Indicator-specific parameters

        Returns:
            pd.Series or tuple of pd.Series, aligned to df.index
        """
        pass

    def validate_dataframe(self, df: pd.DataFrame, required_columns: list[str]) -> None:
        """
        Validate DataFrame has required columns.

        An empty DataFrame is valid: every indicator returns an empty series for it.

        Args:
            df: Input DataFrame
            required_columns: List of required column names

        Raises:
            TypeError: If df is not a DataFrame
            ValueError: If required columns are missing
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError(f"Expected pd.DataFrame, got {type(df)}")

        missing = [col for col in required_columns if col not in df.columns]
        if missing:
            raise ValueError(f"{self.name}: Missing required columns: {missing}. Available: {list(df.columns)}")

    def validate_period(self, period: int, min_period: int = 1) -> None:
        """
        Validate period parameter.

        Args:
            period: Period value to validate
            min_period: Minimum allowed period

        Raises:
            TypeError: If period is not an int
            ValueError: If period is below min_period
        """
        if not isinstance(period, (int, np.integer)) or isinstance(period, bool):
            raise TypeError(f"{self.name}: Period must be int, got {type(period)}")

        if period < min_period:
            raise ValueError(f"{self.name}: Period must be >= {min_period}, got {period}")


def ensure_numpy_array(data: pd.Series | np.ndarray | list) -> np.ndarray:
    """
    Convert input to a float64 numpy array.

    None and pd.NA become NaN, integer volumes become floats.

    Args:
        data: pandas Series, numpy array or list

    Returns:
        numpy float64 array
    """
    if isinstance(data, pd.Series):
        return data.to_numpy(dtype=np.float64, na_value=np.nan)
    return np.asarray(data, dtype=np.float64)
