"""Confluence: RSI + MACD + SMA strategy backtester."""
