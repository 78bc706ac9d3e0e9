"""Backtesting engine for the confluence strategy.

Sequential single-position simulator; indicators are recomputed per bar
from the closes seen so far.
"""

from confluence.services.backtest.engine import BacktestEngine, run_strategy
from confluence.services.backtest.result import ClosedTrade, StrategyResult

__all__ = ["BacktestEngine", "ClosedTrade", "StrategyResult", "run_strategy"]
