"""Backtest result data structures. Returns are fractions unless suffixed _pct."""

from dataclasses import dataclass, field


@dataclass
class ClosedTrade:
    """A completed round-trip trade (entry + exit)."""

    entry_index: int
    exit_index: int
    entry_price: float
    exit_price: float
    return_fraction: float
    exit_reason: str  # "signal", "backtest_end"


@dataclass
class StrategyResult:
    """Summary statistics of one backtest run."""

    success_rate: float
    avg_return_pct: float
    trade_count: int

    # Only filled when trade recording is enabled
    trade_details: list[ClosedTrade] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to a JSON-safe dict."""
        return {
            "success_rate": self.success_rate,
            "avg_return_pct": self.avg_return_pct,
            "trade_count": self.trade_count,
            "trade_details": [
                {
                    "entry_index": t.entry_index,
                    "exit_index": t.exit_index,
                    "entry_price": t.entry_price,
                    "exit_price": t.exit_price,
                    "return_pct": t.return_fraction * 100,
                    "exit_reason": t.exit_reason,
                }
                for t in self.trade_details
            ],
        }
