"""
Stock screen entry point: OHLCV bars in, formatted breakout/breakdown signals out.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from stockscreen.calculator import IndicatorConfig
from stockscreen.formatting import (
    display_symbol,
    format_average_volume,
    format_percentage,
    format_price,
    format_rsi,
)
from stockscreen.pattern import PatternDetector, PatternSignal
from stockscreen.targets import PivotLevels, calculate_next_targets

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["high", "low", "close", "volume"]


@dataclass(frozen=True)
class FormattedSignal:
    """Display-ready signal record."""

    symbol: str
    date: Any
    close: str
    vwap: str
    pct_change: str
    volume: Any
    vol_change: str
    average_volume: str
    next_targets: list[float]
    signal: str
    rsi: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "date": self.date,
            "close": self.close,
            "vwap": self.vwap,
            "pctChange": self.pct_change,
            "volume": self.volume,
            "volChange": self.vol_change,
            "averageVolume": self.average_volume,
            "nextTargets": list(self.next_targets),
            "signal": self.signal,
            "rsi": self.rsi,
        }


@dataclass
class AnalysisResult:
    """Outcome of one analyze_stock call. Check `success` before using `signals`."""

    success: bool
    signals: list[FormattedSignal] = field(default_factory=list)
    total_signals: int = 0
    error: str | None = None

    def to_dict(self) -> dict:
        result = {
            "success": self.success,
            "signals": [s.to_dict() for s in self.signals],
            "totalSignals": self.total_signals,
        }
        if self.error is not None:
            result["error"] = self.error
        return result


def format_signal(
    signal: PatternSignal,
    symbol: str,
    pivot_data: PivotLevels | Mapping | None = None,
) -> FormattedSignal:
    """
    Render a detected signal for display.

    Args:
        signal: Detected signal
        symbol: Ticker as supplied by the caller
        pivot_data: Optional pivot levels for target estimation

    Returns:
        FormattedSignal
    """
    return FormattedSignal(
        symbol=display_symbol(symbol),
        date=signal.date,
        close=format_price(signal.close),
        vwap=format_price(signal.vwap),
        pct_change=format_percentage(signal.pct_change),
        volume=signal.volume,
        vol_change=format_percentage(signal.vol_change),
        average_volume=format_average_volume(signal.average_volume),
        next_targets=calculate_next_targets(signal.close, signal.signal, pivot_data),
        signal=signal.signal.value,
        rsi=format_rsi(signal.rsi),
    )


def bars_to_frame(bars: Sequence[Mapping] | pd.DataFrame) -> pd.DataFrame:
    """
    Build the OHLCV frame for a list of bar mappings.

    Args:
        bars: Sequence of {date, open?, high, low, close, volume} mappings, or a DataFrame

    Returns:
        DataFrame with one row per bar, in the given order. A DataFrame
        passes through unchanged; without a 'date' column its index is the date.
    """
    if isinstance(bars, pd.DataFrame):
        return bars
    if len(bars) == 0:
        return pd.DataFrame(columns=["date", *REQUIRED_COLUMNS])
    return pd.DataFrame([dict(bar) for bar in bars])


def analyze_stock(
    bars: Sequence[Mapping] | pd.DataFrame,
    symbol: str,
    pivot_data: PivotLevels | Mapping | None = None,
    config: IndicatorConfig | None = None,
) -> AnalysisResult:
    """
    Run the full screen over a bar history.

    Never raises: any failure is reported as success=False with the error
    message and no signals.

    Args:
        bars: Chronological OHLCV bars, oldest first
        symbol: Ticker symbol; anything after the first '.' is dropped for display
        pivot_data: Optional pivot levels; when given, targets come from r1-r3/s1-s3
        config: Optional indicator configuration

    Returns:
        AnalysisResult
    """
    try:
        df = bars_to_frame(bars)

        signals = PatternDetector(config).detect(df)
        formatted = [format_signal(s, symbol, pivot_data) for s in signals]

        logger.debug(f"{symbol}: {len(formatted)} signals from {len(df)} bars")
        return AnalysisResult(success=True, signals=formatted, total_signals=len(formatted))

    except Exception as e:
        logger.error(f"error in technical analysis for {symbol}: {e}", exc_info=True)
        return AnalysisResult(success=False, signals=[], error=str(e))
