"""Daily price candle."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Candle:
    """One trading period. Only ``close`` is read by the strategy."""

    close: float
    timestamp: datetime | None = None
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: float | None = None
