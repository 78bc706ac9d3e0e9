"""RSI + MACD + SMA confluence strategy for daily bars.

Entry (BUY): RSI < rsi_oversold AND MACD > 0 AND close > SMA.
Exit (SELL): RSI > rsi_exit OR close < SMA.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from confluence.services.strategy.indicators import MACD_SLOW, macd, rsi, sma

# First bar the scan evaluates: the slow EMA needs MACD_SLOW closes before it
WARMUP_BARS = MACD_SLOW


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicator values for one bar."""

    rsi: float
    macd: float
    sma: float


class ConfluenceStrategy:
    """Rule thresholds plus per-bar evaluation. Holds no position state."""

    def __init__(
        self,
        rsi_period: int = 14,
        rsi_oversold: float = 30.0,
        rsi_exit: float = 60.0,
        sma_period: int = 20,
    ) -> None:
        self._rsi_period = rsi_period
        self._rsi_oversold = rsi_oversold
        self._rsi_exit = rsi_exit
        self._sma_period = sma_period

    @property
    def name(self) -> str:
        return "confluence"

    def snapshot(self, closes: Sequence[float], index: int) -> IndicatorSnapshot:
        return IndicatorSnapshot(
            rsi=rsi(closes, index, self._rsi_period),
            macd=macd(closes, index),
            sma=sma(closes, index, self._sma_period),
        )

    def should_enter(self, price: float, snap: IndicatorSnapshot) -> bool:
        return snap.rsi < self._rsi_oversold and snap.macd > 0 and price > snap.sma

    def should_exit(self, price: float, snap: IndicatorSnapshot) -> bool:
        return snap.rsi > self._rsi_exit or price < snap.sma
