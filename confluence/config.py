"""Application configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """All config from environment (or .env). Defaults reproduce the reference strategy."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Win threshold as a return fraction (0.01 = 1%)
    profit_threshold: float = Field(default=0.01)

    # Strategy rules
    rsi_period: int = Field(default=14, ge=1)
    rsi_oversold: float = Field(default=30.0, ge=0.0, le=100.0)
    rsi_exit: float = Field(default=60.0, ge=0.0, le=100.0)
    sma_period: int = Field(default=20, ge=1)

    # Keep a ClosedTrade per round trip in the result
    record_trades: bool = Field(default=False)

    # App
    log_level: str = Field(default="INFO")


settings = Settings()
