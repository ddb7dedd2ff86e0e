"""
Test volume indicators for accuracy and correctness.
"""

import numpy as np
import pandas as pd
import pytest

from stockscreen.volume import VolumeAverage, calculate_volume_change


class TestVolumeAverage:
    """Test the trailing volume average."""

    def test_volume_average_window(self, sample_ohlcv_data):
        avg = VolumeAverage().calculate(sample_ohlcv_data, window=30)

        assert len(avg) == len(sample_ohlcv_data)
        assert avg.iloc[:29].isna().all()
        assert avg.iloc[29] == pytest.approx(sample_ohlcv_data["volume"].iloc[:30].mean())

    def test_integer_volume(self):
        df = pd.DataFrame({"volume": [100, 200, 300, 400]})
        avg = VolumeAverage().calculate(df, window=2)

        np.testing.assert_allclose(avg.values[1:], [150.0, 250.0, 350.0])


class TestVolumeChange:
    """Test percentage deviation from the volume average."""

    def test_volume_change(self):
        volume = pd.Series([100.0, 300.0, 50.0])
        avg = pd.Series([np.nan, 200.0, 100.0])
        change = calculate_volume_change(volume, avg)

        np.testing.assert_allclose(change.values, [0.0, 50.0, -50.0])

    def test_zero_average(self):
        """A zero average yields 0 instead of a division error."""
        change = calculate_volume_change(pd.Series([0.0, 10.0]), pd.Series([0.0, 0.0]))
        assert (change == 0).all()
