"""Technical indicators evaluated at a single bar index.

Every function reads only ``closes[: index + 1]`` and recomputes its
window from scratch, so results never depend on call order.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

# Neutral RSI returned while the lookback window is incomplete
NEUTRAL_RSI = 50.0

MACD_FAST = 12
MACD_SLOW = 26


def rsi(closes: Sequence[float], index: int, period: int = 14) -> float:
    """Relative Strength Index (0-100) over the trailing ``period`` changes.

    Gains and losses are plain sums of one-bar changes (no smoothing).

    Args:
        closes: Close prices, oldest first.
        index: Bar to evaluate.
        period: Number of one-bar changes in the window.

    Returns:
        50.0 with insufficient history, 100.0 when the window has no losses.
    """
    if index < period:
        return NEUTRAL_RSI

    gain = 0.0
    loss = 0.0
    for i in range(index - period + 1, index + 1):
        change = closes[i] - closes[i - 1]
        if change > 0:
            gain += change
        else:
            loss -= change

    if loss == 0:
        return 100.0

    rs = gain / loss
    return 100 - (100 / (1 + rs))


def ema(closes: Sequence[float], index: int, length: int) -> float:
    """Exponential Moving Average over the window ending at ``index``.

    The average is seeded with the oldest close of the window on every
    call instead of being carried from the start of the series. Callers
    must guarantee ``index - length + 1 >= 0``; it is not checked.
    """
    k = 2.0 / (length + 1)
    value = closes[index - length + 1]
    for i in range(index - length + 2, index + 1):
        value = closes[i] * k + value * (1 - k)
    return value


def macd(
    closes: Sequence[float],
    index: int,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
) -> float:
    """MACD line: fast EMA minus slow EMA. Needs ``index >= slow - 1``."""
    return ema(closes, index, fast) - ema(closes, index, slow)


def sma(closes: Sequence[float], index: int, period: int) -> float:
    """Simple Moving Average of the trailing ``period`` closes.

    Falls back to the close at ``index`` while ``index < period``.
    """
    if index < period:
        return closes[index]

    total = 0.0
    for i in range(index - period + 1, index + 1):
        total += closes[i]
    return total / period


def indicator_frame(
    closes: Sequence[float],
    rsi_period: int = 14,
    sma_period: int = 20,
) -> pd.DataFrame:
    """Per-bar RSI, MACD and SMA as a DataFrame, for inspection.

    MACD is NaN until the slow EMA window is complete.

    Returns:
        DataFrame indexed by bar number with columns close, rsi, macd, sma.
    """
    prices = [float(c) for c in closes]
    n = len(prices)
    return pd.DataFrame(
        {
            "close": prices,
            "rsi": [rsi(prices, i, rsi_period) for i in range(n)],
            "macd": [
                macd(prices, i) if i >= MACD_SLOW - 1 else np.nan
                for i in range(n)
            ],
            "sma": [sma(prices, i, sma_period) for i in range(n)],
        },
        index=pd.RangeIndex(n, name="bar"),
    )
