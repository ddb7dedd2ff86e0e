"""
Pytest configuration and shared fixtures for indicator and screener tests.
"""

import numpy as np
import pandas as pd
import pytest

SPIKE_INDEX = 35
REVERSAL_INDEX = 36


@pytest.fixture
def sample_ohlcv_data():
    """Generate synthetic OHLCV data for testing."""
    np.random.seed(42)
    n = 500

    dates = pd.date_range(start="2023-01-01", periods=n, freq="D")
    close = 100 + np.cumsum(np.random.randn(n) * 2)
    high = close + np.random.uniform(0.5, 3, n)
    low = close - np.random.uniform(0.5, 3, n)
    open_ = low + (high - low) * np.random.uniform(0.2, 0.8, n)
    volume = np.random.uniform(1e6, 1e7, n)

    df = pd.DataFrame(
        {
            "open": open_,
            "high": high,
            "low": low,
            "close": close,
            "volume": volume,
        },
        index=dates,
    )

    return df


@pytest.fixture
def random_walk_df():
    """40-bar random walk with a plain RangeIndex, for missing-value tests."""
    rng = np.random.default_rng(7)
    n = 40

    close = 100 + np.cumsum(rng.normal(0, 1, n))
    high = close + rng.uniform(0.5, 2, n)
    low = close - rng.uniform(0.5, 2, n)
    volume = rng.uniform(1e6, 2e6, n)

    return pd.DataFrame({"high": high, "low": low, "close": close, "volume": volume})


@pytest.fixture
def spike_bars():
    """
    40 daily bars: flat at 100 with a 99-101 range and 1M volume, a jump to
    120 on 3M volume at bar 35, then straight back to 100 on bar 36.

    The jump closes above the SuperTrend upper band (106) and flips the
    direction from 1 to -1 with bbm < smma < dema, giving a Breakdown;
    the drop closes below the lower band and flips it back (ST Breakout).
    """
    dates = pd.date_range(start="2024-01-01", periods=40, freq="D").strftime("%Y-%m-%d")
    bars = []
    for i, date in enumerate(dates):
        if i == SPIKE_INDEX:
            bars.append({"date": date, "open": 100.0, "high": 121.0, "low": 119.0, "close": 120.0, "volume": 3_000_000})
        else:
            bars.append({"date": date, "open": 100.0, "high": 101.0, "low": 99.0, "close": 100.0, "volume": 1_000_000})
    return bars


@pytest.fixture
def spike_df(spike_bars):
    """spike_bars as a DataFrame."""
    return pd.DataFrame(spike_bars)


@pytest.fixture
def tolerance_params():
    """
    Tolerance parameters for validation against reference implementations.

    SMA and the population-deviation Bollinger Bands compute the same
    quantities as ta-lib, so the tolerances are tight.
    """
    return {
        "sma": 1e-8,
        "bbands": 1e-6,
        "vwap": 1e-10,
    }


def assert_series_close(
    actual: pd.Series,
    expected: pd.Series,
    tolerance: float,
    name: str,
):
    """
    Assert two series are close within tolerance.

    Args:
        actual: Series from implementation being tested
        expected: Series from reference implementation
        tolerance: Maximum allowed difference
        name: Indicator name for error messages
    """
    # Align indices
    actual = actual.reindex(expected.index)

    # Find valid comparison points (both non-NaN)
    valid_mask = ~(actual.isna() | expected.isna())
    valid_count = valid_mask.sum()

    if valid_count == 0:
        pytest.fail(f"{name}: No valid comparison points found")

    actual_valid = actual[valid_mask]
    expected_valid = expected[valid_mask]

    diff = np.abs(actual_valid - expected_valid)
    max_diff = diff.max()
    mean_diff = diff.mean()

    assert max_diff < tolerance, (
        f"{name}: Max difference {max_diff:.2e} exceeds tolerance {tolerance:.2e}\n"
        f"Mean difference: {mean_diff:.2e}\n"
        f"Valid points: {valid_count}/{len(actual)}"
    )
