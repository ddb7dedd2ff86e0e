"""
Pattern detection: SuperTrend reversals confirmed by moving-average ordering.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd

from stockscreen.calculator import IndicatorCalculator, IndicatorConfig

logger = logging.getLogger(__name__)

GREEN_TO_RED = "green_to_red"
RED_TO_GREEN = "red_to_green"
NO_CHANGE = "no_change"


class SignalKind(str, Enum):
    """Signal categories emitted by the detector."""

    BREAKOUT = "Breakout"
    BREAKDOWN = "Breakdown"
    ST_BREAKOUT = "ST Breakout"
    ST_BREAKDOWN = "ST Breakdown"

    @property
    def is_breakout(self) -> bool:
        return self in (SignalKind.BREAKOUT, SignalKind.ST_BREAKOUT)

    @property
    def is_breakdown(self) -> bool:
        return self in (SignalKind.BREAKDOWN, SignalKind.ST_BREAKDOWN)


@dataclass(frozen=True)
class PatternSignal:
    """Indicator snapshot at a bar that produced a signal."""

    index: int
    date: Any
    close: float
    vwap: float
    pct_change: float
    volume: Any
    vol_change: float
    average_volume: float
    signal: SignalKind
    rsi: float
    supertrend: float
    bbm: float
    smma: float
    dema: float


def detect_trend_changes(direction: pd.Series) -> pd.Series:
    """
    Classify each SuperTrend direction transition.

    Args:
        direction: SuperTrend direction series (1, -1 or NaN)

    Returns:
        Series of 'green_to_red', 'red_to_green' or 'no_change';
        the first row is always 'no_change'
    """
    current = direction
    previous = direction.shift(1)

    changes = np.select(
        [
            (previous == 1) & (current == -1),
            (previous == -1) & (current == 1),
        ],
        [GREEN_TO_RED, RED_TO_GREEN],
        default=NO_CHANGE,
    )

    return pd.Series(changes, index=direction.index, name="trend_change")


def classify_signal(trend_change: str, bbm: float, smma: float, dema: float) -> SignalKind | None:
    """
    Combine a trend-change event with the band/average ordering.

    Bearish ordering is bbm < smma < dema, bullish is bbm > smma > dema.
    """
    is_bearish = bbm < smma < dema
    is_bullish = bbm > smma > dema
    is_breakout = trend_change == RED_TO_GREEN
    is_breakdown = trend_change == GREEN_TO_RED

    if is_breakout and is_bullish:
        return SignalKind.BREAKOUT
    if is_breakdown and is_bearish:
        return SignalKind.BREAKDOWN
    if is_breakout:
        return SignalKind.ST_BREAKOUT
    if is_breakdown:
        return SignalKind.ST_BREAKDOWN
    return None


class PatternDetector:
    """
    Detects breakout/breakdown signals over an OHLCV frame.

    Every call recomputes all indicators over the full frame; the detector
    keeps no state between calls.
    """

    def __init__(self, config: IndicatorConfig | None = None):
        self.config = config or IndicatorConfig()
        self.calculator = IndicatorCalculator(self.config)

    def prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        """Indicator frame with the trend_change column added."""
        result_df = self.calculator.calculate_all(df)
        result_df["trend_change"] = detect_trend_changes(result_df["SuperTrend_direction"])
        return result_df

    def detect(self, df: pd.DataFrame) -> list[PatternSignal]:
        """
        Detect signals bar by bar.

        Args:
            df: DataFrame with high, low, close, volume and optionally date columns

        Returns:
            Signals in chronological order
        """
        frame = self.prepare(df)
        config = self.config

        dates = frame["date"].to_numpy() if "date" in frame.columns else frame.index.to_numpy()
        volume = frame["volume"].to_numpy()
        close = frame["close"].to_numpy(dtype=np.float64)
        vwap = frame["VWAP"].to_numpy()
        pct_change = frame["pct_change"].to_numpy()
        vol_change = frame["vol_change"].to_numpy()
        volume_avg = frame[config.volume_avg_column].to_numpy()
        rsi = frame[config.rsi_column].to_numpy()
        supertrend = frame["SuperTrend"].to_numpy()
        bbm = frame[config.bbands_middle_column].to_numpy()
        smma = frame[config.smma_column].to_numpy()
        dema = frame[config.dema_column].to_numpy()
        trend_changes = frame["trend_change"].to_numpy()

        signals = []
        for i in range(1, len(frame)):
            if np.isnan(bbm[i]) or np.isnan(smma[i]) or np.isnan(dema[i]):
                continue

            kind = classify_signal(trend_changes[i], bbm[i], smma[i], dema[i])
            if kind is None:
                continue

            signals.append(
                PatternSignal(
                    index=i,
                    date=_to_python(dates[i]),
                    close=float(close[i]),
                    vwap=float(vwap[i]),
                    pct_change=float(pct_change[i]),
                    volume=_to_python(volume[i]),
                    vol_change=float(vol_change[i]),
                    average_volume=float(volume_avg[i]),
                    signal=kind,
                    rsi=float(rsi[i]),
                    supertrend=float(supertrend[i]),
                    bbm=float(bbm[i]),
                    smma=float(smma[i]),
                    dema=float(dema[i]),
                )
            )

        logger.debug(f"detected {len(signals)} signals over {len(frame)} bars")
        return signals


def _to_python(value: Any) -> Any:
    """Unwrap numpy scalars so signals hold plain Python values."""
    if isinstance(value, np.datetime64):
        return pd.Timestamp(value)
    if isinstance(value, np.generic):
        return value.item()
    return value


def detect_breakout_patterns(
    df: pd.DataFrame,
    config: IndicatorConfig | None = None,
) -> list[PatternSignal]:
    """Detect breakout patterns - convenience function."""
    return PatternDetector(config).detect(df)
