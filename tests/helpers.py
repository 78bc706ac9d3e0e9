"""Synthetic price generators shared by the test modules."""

import numpy as np

from confluence.models.candle import Candle


def make_candles(closes: list[float]) -> list[Candle]:
    """Wrap close prices in Candles."""
    return [Candle(close=float(c)) for c in closes]


def dip_rally_cycle(base: float = 100.0, rally: float = 30.0) -> list[float]:
    """One 46-bar cycle that produces exactly one entry and one exit.

    Bars 0-29 flat at ``base``, bar 30 jumps to ``base + 100``, bars 31-44
    drift down by 1 (RSI 0, MACD > 0, close above SMA20 on bar 44),
    bar 45 rallies by ``rally``.
    """
    plateau = [base] * 30
    decline = [base + 100 - k for k in range(15)]
    return plateau + decline + [decline[-1] + rally]


def random_walk(n: int = 300, start: float = 100.0, noise: float = 2.0, seed: int = 42) -> list[float]:
    """Positive random-walk closes, reproducible by seed."""
    rng = np.random.RandomState(seed)
    closes = []
    price = start
    for _ in range(n):
        price += rng.randn() * noise
        price = max(1.0, price)
        closes.append(price)
    return closes
