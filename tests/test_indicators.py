"""Tests for the per-bar indicator functions."""

import numpy as np
import pandas as pd
import pytest

from confluence.services.strategy.indicators import (
    NEUTRAL_RSI,
    ema,
    indicator_frame,
    macd,
    rsi,
    sma,
)
from tests.helpers import random_walk


class TestRSI:
    def test_neutral_with_insufficient_history(self):
        closes = [100.0, 90.0, 80.0, 70.0, 60.0]
        for index in range(4):
            assert rsi(closes, index, period=4) == NEUTRAL_RSI
        assert rsi(random_walk(40), 13) == 50.0

    def test_rising_window_saturates_at_100(self):
        closes = [float(i) for i in range(30)]
        assert rsi(closes, 29) == 100.0

    def test_flat_window_is_100(self):
        """No losses at all, even with no gains."""
        assert rsi([100.0] * 20, 19) == 100.0

    def test_falling_window_is_zero(self):
        closes = [float(100 - i) for i in range(30)]
        assert rsi(closes, 29) == 0.0

    def test_known_value(self):
        # Changes +1, -0.5 → RS = 2 → RSI = 100 - 100/3
        closes = [10.0, 11.0, 10.5]
        assert rsi(closes, 2, period=2) == pytest.approx(66.6666667)

    def test_uses_simple_sums_not_smoothing(self):
        # Window of 3 changes: +2, -1, -1 → RS = 1 → RSI 50
        closes = [50.0, 0.0, 2.0, 1.0, 0.0]
        assert rsi(closes, 4, period=3) == pytest.approx(50.0)

    def test_bounds_on_random_walk(self, walk_closes):
        for index in range(len(walk_closes)):
            value = rsi(walk_closes, index)
            assert 0.0 <= value <= 100.0

    def test_no_lookahead(self, walk_closes):
        before = rsi(walk_closes, 100)
        altered = walk_closes[:101] + [x * 3 for x in walk_closes[101:]]
        assert rsi(altered, 100) == before


class TestEMA:
    def test_length_one_is_the_close(self):
        closes = [1.0, 5.0, 3.0]
        assert ema(closes, 2, 1) == 3.0

    def test_known_value(self):
        # k = 0.5, seed 1 → 1.5 → 2.25
        assert ema([1.0, 2.0, 3.0], 2, 3) == pytest.approx(2.25)

    def test_reseeds_at_window_start(self):
        """Only the last ``length`` closes matter, unlike a series-long EMA."""
        closes = random_walk(60, seed=7)
        value = ema(closes, 40, 12)

        # Manual fold seeded at the oldest bar of the window
        k = 2 / 13
        expected = closes[29]
        for price in closes[30:41]:
            expected = price * k + expected * (1 - k)
        assert value == pytest.approx(expected)

        continuous = pd.Series(closes).ewm(span=12, adjust=False).mean().iloc[40]
        assert value != pytest.approx(continuous, abs=1e-9)

    def test_ignores_bars_before_window(self):
        closes = random_walk(40, seed=3)
        changed = [0.0] * 10 + closes[10:]
        assert ema(changed, 39, 26) == ema(closes, 39, 26)


class TestMACD:
    def test_is_fast_minus_slow(self, walk_closes):
        for index in (25, 60, 299):
            expected = ema(walk_closes, index, 12) - ema(walk_closes, index, 26)
            assert macd(walk_closes, index) == pytest.approx(expected)

    def test_constant_series_is_zero(self):
        assert macd([100.0] * 50, 49) == pytest.approx(0.0, abs=1e-9)

    def test_positive_after_jump(self):
        closes = [100.0] * 30 + [150.0] * 5
        assert macd(closes, 34) > 0

    def test_no_lookahead(self, walk_closes):
        before = macd(walk_closes, 100)
        altered = walk_closes[:101] + [x * 3 for x in walk_closes[101:]]
        assert macd(altered, 100) == before


class TestSMA:
    def test_falls_back_to_close(self):
        closes = [3.0, 7.0, 11.0]
        for index in range(3):
            assert sma(closes, index, 5) == closes[index]

    def test_index_equal_to_period_uses_window(self):
        closes = [1.0, 2.0, 3.0, 4.0]
        # index 3, period 3 → mean of closes[1:4]
        assert sma(closes, 3, 3) == pytest.approx(3.0)

    def test_matches_trailing_mean(self, walk_closes):
        for index in (20, 57, 299):
            expected = np.mean(walk_closes[index - 19 : index + 1])
            assert sma(walk_closes, index, 20) == pytest.approx(expected)

    def test_no_lookahead(self, walk_closes):
        before = sma(walk_closes, 100, 20)
        altered = walk_closes[:101] + [x * 3 for x in walk_closes[101:]]
        assert sma(altered, 100, 20) == before


class TestIndicatorFrame:
    def test_columns_and_values(self, walk_closes):
        df = indicator_frame(walk_closes)

        assert list(df.columns) == ["close", "rsi", "macd", "sma"]
        assert len(df) == len(walk_closes)
        assert df["rsi"].iloc[100] == rsi(walk_closes, 100)
        assert df["sma"].iloc[100] == sma(walk_closes, 100, 20)
        assert df["macd"].iloc[100] == macd(walk_closes, 100)

    def test_macd_nan_before_slow_window(self, walk_closes):
        df = indicator_frame(walk_closes)
        assert df["macd"].iloc[:25].isna().all()
        assert not pd.isna(df["macd"].iloc[25])

    def test_empty_series(self):
        df = indicator_frame([])
        assert df.empty
