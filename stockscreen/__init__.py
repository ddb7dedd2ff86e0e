"""
Technical analysis screen: indicator series and breakout/breakdown signals
over OHLCV history.

Numba JIT kernels for every sequential indicator, pandas for frame plumbing.
"""

from stockscreen.base import BaseIndicator
from stockscreen.calculator import IndicatorCalculator, IndicatorConfig, calculate_all_indicators
from stockscreen.formatting import format_percentage
from stockscreen.momentum import RSI, calculate_rsi
from stockscreen.pattern import (
    PatternDetector,
    PatternSignal,
    SignalKind,
    detect_breakout_patterns,
    detect_trend_changes,
)
from stockscreen.screener import AnalysisResult, FormattedSignal, analyze_stock
from stockscreen.targets import PivotLevels, calculate_next_targets, calculate_pivot_points
from stockscreen.trend import (
    DEMA,
    EMA,
    SMA,
    SMMA,
    VWAP,
    calculate_dema,
    calculate_ema,
    calculate_sma,
    calculate_smma,
    calculate_vwap,
)
from stockscreen.volatility import (
    ATR,
    BBands,
    SuperTrend,
    TrendDirection,
    calculate_atr,
    calculate_bbands,
    calculate_supertrend,
)
from stockscreen.volume import VolumeAverage, calculate_volume_average

__all__ = [
    "BaseIndicator",
    "IndicatorCalculator",
    "IndicatorConfig",
    "SMA",
    "EMA",
    "SMMA",
    "DEMA",
    "VWAP",
    "RSI",
    "ATR",
    "BBands",
    "SuperTrend",
    "TrendDirection",
    "VolumeAverage",
    "PatternDetector",
    "PatternSignal",
    "SignalKind",
    "PivotLevels",
    "AnalysisResult",
    "FormattedSignal",
    "calculate_sma",
    "calculate_ema",
    "calculate_smma",
    "calculate_dema",
    "calculate_vwap",
    "calculate_rsi",
    "calculate_atr",
    "calculate_bbands",
    "calculate_supertrend",
    "calculate_volume_average",
    "calculate_all_indicators",
    "detect_trend_changes",
    "detect_breakout_patterns",
    "calculate_next_targets",
    "calculate_pivot_points",
    "format_percentage",
    "analyze_stock",
]
