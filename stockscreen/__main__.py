#!/usr/bin/env python3
"""
Screen a bar history from the command line.

Usage:
    uv run python -m stockscreen bars.json RELIANCE.NS
    uv run python -m stockscreen bars.csv AAPL --pivots
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

from stockscreen.screener import analyze_stock
from stockscreen.targets import calculate_pivot_points

logger = logging.getLogger(__name__)


def load_bars(path: Path) -> pd.DataFrame:
    """Load bars from a JSON array of records or a CSV file."""
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path)
    else:
        with open(path, encoding="utf-8") as f:
            df = pd.DataFrame(json.load(f))

    df.columns = [str(col).lower() for col in df.columns]
    return df


def main(argv: list[str] | None = None) -> int:
    """main entry point"""
    parser = argparse.ArgumentParser(description="Detect breakout/breakdown signals in OHLCV history")
    parser.add_argument("bars", type=Path, help="JSON array of bars or CSV file, oldest first")
    parser.add_argument("symbol", help="Ticker symbol, exchange suffix allowed (e.g. RELIANCE.NS)")
    parser.add_argument("--pivots", action="store_true", help="Use pivot levels from the last bar for targets")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        df = load_bars(args.bars)
    except (OSError, ValueError) as e:
        logger.error(f"could not load bars from {args.bars}: {e}")
        return 1

    pivot_data = None
    if args.pivots and len(df) > 0:
        last = df.iloc[-1]
        try:
            pivot_data = calculate_pivot_points(float(last["high"]), float(last["low"]), float(last["close"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"could not derive pivot levels from the last bar: {e}")
            return 1

    result = analyze_stock(df, args.symbol, pivot_data=pivot_data)
    print(json.dumps(result.to_dict(), indent=args.indent, default=str))

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
