"""CLI for backtesting the confluence strategy against historical daily candles.

Usage:
    python scripts/backtest.py --csv data/BHP.AX.csv
    python scripts/backtest.py --csv data/AAPL.csv --threshold 0.02 --record-trades
    python scripts/backtest.py --csv data/AAPL.csv --indicators 10
    python scripts/backtest.py --csv data/AAPL.csv --json
"""

import argparse
import json
import logging
import sys

from confluence.config import settings
from confluence.services.backtest.engine import BacktestEngine
from confluence.services.backtest.result import StrategyResult
from confluence.services.data.csv_feed import load_candles_csv
from confluence.services.strategy.indicators import indicator_frame


def format_report(result: StrategyResult, source: str, bars: int, threshold: float) -> str:
    """Format backtest results as a readable console report."""
    lines = []
    sep = "=" * 60

    lines.append(sep)
    lines.append("  Confluence Backtest Report (RSI + MACD + SMA)")
    lines.append(sep)
    lines.append(f"  Source:      {source} ({bars} bars)")
    lines.append(f"  Win above:   {threshold * 100:.2f}% return")
    lines.append("-" * 60)

    lines.append("  TRADES")
    lines.append(f"  Total:                  {result.trade_count}")
    lines.append(f"  Success Rate:           {result.success_rate:.1f}%")

    ret_sign = "+" if result.avg_return_pct >= 0 else ""
    lines.append(f"  Avg Return / Trade:     {ret_sign}{result.avg_return_pct:.2f}%")

    if result.trade_details:
        lines.append("")
        lines.append("  RECENT TRADES (last 10)")
        lines.append(f"  {'Entry':>10} {'Exit':>10} {'Return':>8} {'Bars':>5} {'Reason':<12}")
        for t in result.trade_details[-10:]:
            lines.append(
                f"  {t.entry_price:>10,.2f} "
                f"{t.exit_price:>10,.2f} "
                f"{t.return_fraction * 100:>+7.2f}% "
                f"{t.exit_index - t.entry_index:>5} "
                f"{t.exit_reason:<12}"
            )

    lines.append(sep)
    return "\n".join(lines)


def run_backtest(args: argparse.Namespace) -> None:
    """Load candles, run the engine and print results."""
    try:
        candles = load_candles_csv(args.csv)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    threshold = settings.profit_threshold if args.threshold is None else args.threshold
    engine = BacktestEngine(
        profit_threshold=threshold,
        record_trades=args.record_trades or None,
    )
    result = engine.run(candles)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_report(result, args.csv, len(candles), threshold))

    if args.indicators and not args.json:
        frame = indicator_frame(
            [c.close for c in candles],
            rsi_period=settings.rsi_period,
            sma_period=settings.sma_period,
        )
        print(frame.tail(args.indicators).round(4).to_string())


def main() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(
        description="Confluence backtesting: RSI + MACD + SMA strategy on daily candles"
    )
    parser.add_argument(
        "--csv", required=True,
        help="CSV file with a header row and at least a 'close' column",
    )
    parser.add_argument(
        "--threshold", type=float, default=None,
        help=f"Return fraction a trade must exceed to count as a win (default: {settings.profit_threshold})",
    )
    parser.add_argument(
        "--record-trades", action="store_true",
        help="Include per-trade details in the output",
    )
    parser.add_argument(
        "--indicators", type=int, default=0, metavar="N",
        help="Also print the last N bars of RSI/MACD/SMA values (ignored with --json)",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Output result as JSON instead of formatted report",
    )
    args = parser.parse_args()

    run_backtest(args)


if __name__ == "__main__":
    main()
