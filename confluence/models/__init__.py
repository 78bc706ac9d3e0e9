"""Value objects consumed by the backtester."""

from confluence.models.candle import Candle

__all__ = ["Candle"]
