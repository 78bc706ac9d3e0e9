"""Compute summary statistics from backtest broker state."""

from confluence.services.backtest.broker import BacktestBroker
from confluence.services.backtest.result import StrategyResult


def compute_metrics(broker: BacktestBroker) -> StrategyResult:
    """Reduce the broker's counters into a StrategyResult.

    Both percentages are 0 when no trade was closed.
    """
    return StrategyResult(
        success_rate=_success_rate(broker.wins, broker.trades),
        avg_return_pct=_avg_return_pct(broker.total_return, broker.trades),
        trade_count=broker.trades,
        trade_details=list(broker.closed_trades),
    )


def _success_rate(wins: int, trades: int) -> float:
    """Share of trades above the profit threshold, in percent."""
    return wins / trades * 100 if trades > 0 else 0.0


def _avg_return_pct(total_return: float, trades: int) -> float:
    """Mean per-trade return, in percent (signed)."""
    return (total_return / trades) * 100 if trades > 0 else 0.0
