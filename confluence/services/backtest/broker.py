"""Simulated broker for backtesting. Owns the single long position and trade counters.

Rules:
- At most one position at a time, long only
- Opening while long and closing while flat are ignored
- Every close (signal or forced) is counted the same way
"""

import logging
from enum import Enum

from confluence.services.backtest.result import ClosedTrade

logger = logging.getLogger(__name__)


class PositionState(str, Enum):
    """Whether the broker currently holds the asset."""

    FLAT = "flat"
    LONG = "long"


class _Position:
    """Internal position tracker during backtest."""

    __slots__ = ("entry_price", "entry_index")

    def __init__(self, entry_price: float, entry_index: int) -> None:
        self.entry_price = entry_price
        self.entry_index = entry_index


class BacktestBroker:
    """Tracks the open position and folds each closed trade into running totals.

    Args:
        profit_threshold: A trade counts as a win when its return fraction
            is strictly greater than this.
        record_trades: Keep a ClosedTrade for every round trip.
    """

    def __init__(self, profit_threshold: float, record_trades: bool = False) -> None:
        self.profit_threshold = profit_threshold
        self._record_trades = record_trades
        self._position: _Position | None = None
        self.trades: int = 0
        self.wins: int = 0
        self.total_return: float = 0.0
        self.closed_trades: list[ClosedTrade] = []

    @property
    def state(self) -> PositionState:
        return PositionState.FLAT if self._position is None else PositionState.LONG

    @property
    def has_position(self) -> bool:
        return self._position is not None

    @property
    def entry_price(self) -> float | None:
        return self._position.entry_price if self._position is not None else None

    def open_position(self, price: float, bar_index: int) -> None:
        """Go long at ``price``. No-op if a position is already open."""
        if self._position is not None:
            return

        self._position = _Position(entry_price=price, entry_index=bar_index)
        logger.debug("Opened long at bar %d @ %.4f", bar_index, price)

    def close_position(self, price: float, bar_index: int, reason: str = "signal") -> None:
        """Close the current position and record the trade."""
        if self._position is None:
            return

        pos = self._position
        ret = (price - pos.entry_price) / pos.entry_price

        self.total_return += ret
        self.trades += 1
        if ret > self.profit_threshold:
            self.wins += 1

        if self._record_trades:
            self.closed_trades.append(
                ClosedTrade(
                    entry_index=pos.entry_index,
                    exit_index=bar_index,
                    entry_price=pos.entry_price,
                    exit_price=price,
                    return_fraction=ret,
                    exit_reason=reason,
                )
            )

        logger.debug(
            "Closed long at bar %d @ %.4f (%s): entry %.4f, return %.4f%%",
            bar_index, price, reason, pos.entry_price, ret * 100,
        )
        self._position = None

    def force_close(self, price: float, bar_index: int) -> None:
        """Force-close any open position (used at end of backtest)."""
        if self._position is not None:
            self.close_position(price, bar_index, "backtest_end")
