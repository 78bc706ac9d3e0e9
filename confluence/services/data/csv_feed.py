"""Historical daily candles from CSV files.

Expects a header row. Column names are matched case-insensitively;
``close`` is required, ``date``/``timestamp``/``open``/``high``/``low``/``volume``
are optional.
"""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from confluence.models.candle import Candle

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMNS = ("timestamp", "date", "datetime", "time")
PRICE_COLUMNS = ("open", "high", "low", "volume")


def candles_from_frame(df: pd.DataFrame) -> list[Candle]:
    """Convert an OHLCV DataFrame into chronologically ordered candles.

    Rows without a close are dropped. When a timestamp column exists the
    rows are sorted by it; otherwise file order is kept.
    """
    df = df.rename(columns=lambda c: str(c).strip().lower())
    duplicated = df.columns[df.columns.duplicated()].unique()
    if len(duplicated) > 0:
        raise ValueError(
            f"Duplicate columns in candle data (case-insensitive): {', '.join(duplicated)}"
        )
    if "close" not in df.columns:
        raise ValueError(
            f"No 'close' column in candle data (columns: {', '.join(df.columns)})"
        )

    df = df.copy()
    df["close"] = pd.to_numeric(df["close"], errors="coerce")
    df = df.dropna(subset=["close"])

    ts_col = next((c for c in TIMESTAMP_COLUMNS if c in df.columns), None)
    if ts_col is not None:
        df[ts_col] = pd.to_datetime(df[ts_col])
        df = df.sort_values(ts_col, kind="stable")

    present = [c for c in PRICE_COLUMNS if c in df.columns]
    for col in present:
        df[col] = pd.to_numeric(df[col], errors="coerce")

    candles = []
    for row in df.itertuples(index=False):
        values = row._asdict()
        candles.append(
            Candle(
                close=float(values["close"]),
                timestamp=_optional_datetime(values[ts_col]) if ts_col is not None else None,
                **{c: _optional_float(values[c]) for c in present},
            )
        )
    return candles


def load_candles_csv(path: str | Path) -> list[Candle]:
    """Load candles from a CSV file. Raises FileNotFoundError or ValueError."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Candle file not found: {path}")

    df = pd.read_csv(path)
    candles = candles_from_frame(df)

    logger.info("Loaded %d candles from %s", len(candles), path)
    return candles


def _optional_float(value: object) -> float | None:
    return None if pd.isna(value) else float(value)


def _optional_datetime(value: pd.Timestamp) -> datetime | None:
    return None if pd.isna(value) else value.to_pydatetime()
