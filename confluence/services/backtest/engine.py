"""Sequential backtesting engine for the confluence strategy."""

import logging
from collections.abc import Sequence

from confluence.config import settings
from confluence.models.candle import Candle
from confluence.services.backtest.broker import BacktestBroker
from confluence.services.backtest.metrics import compute_metrics
from confluence.services.backtest.result import StrategyResult
from confluence.services.strategy.confluence import WARMUP_BARS, ConfluenceStrategy

logger = logging.getLogger(__name__)


class BacktestEngine:
    """Walk-forward backtesting engine.

    Scans bars from WARMUP_BARS to the last one in order. At each bar the
    strategy sees only closes up to (and including) that bar, and the
    broker either opens (when flat) or closes (when long) the position.
    A position still open after the last bar is force-closed at its close.

    Short or empty input is not an error: it yields zero trades.
    """

    def __init__(
        self,
        profit_threshold: float | None = None,
        strategy: ConfluenceStrategy | None = None,
        record_trades: bool | None = None,
    ) -> None:
        self._profit_threshold = (
            settings.profit_threshold if profit_threshold is None else profit_threshold
        )
        self._strategy = strategy or ConfluenceStrategy(
            rsi_period=settings.rsi_period,
            rsi_oversold=settings.rsi_oversold,
            rsi_exit=settings.rsi_exit,
            sma_period=settings.sma_period,
        )
        self._record_trades = (
            settings.record_trades if record_trades is None else record_trades
        )

    def run(self, candles: Sequence[Candle]) -> StrategyResult:
        """Execute the backtest over ``candles`` (oldest first)."""
        closes = [float(c.close) for c in candles]
        broker = BacktestBroker(
            profit_threshold=self._profit_threshold,
            record_trades=self._record_trades,
        )

        logger.info(
            "Starting backtest: %s, %d bars, profit threshold %.4f",
            self._strategy.name, len(closes), self._profit_threshold,
        )

        for i in range(WARMUP_BARS, len(closes)):
            price = closes[i]
            snap = self._strategy.snapshot(closes, i)

            if not broker.has_position and self._strategy.should_enter(price, snap):
                broker.open_position(price, i)
            elif broker.has_position and self._strategy.should_exit(price, snap):
                broker.close_position(price, i)

        # Force-close any open position at last bar
        if broker.has_position:
            broker.force_close(closes[-1], len(closes) - 1)

        result = compute_metrics(broker)

        logger.info(
            "Backtest complete: %s, trades=%d, success_rate=%.1f%%, avg_return=%.2f%%",
            self._strategy.name, result.trade_count,
            result.success_rate, result.avg_return_pct,
        )
        return result


def run_strategy(candles: Sequence[Candle], profit_threshold: float) -> StrategyResult:
    """Backtest ``candles`` with the default rule thresholds, ignoring settings."""
    engine = BacktestEngine(
        profit_threshold=profit_threshold,
        strategy=ConfluenceStrategy(),
        record_trades=False,
    )
    return engine.run(candles)
