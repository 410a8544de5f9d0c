"""Configuration models for the analysis engine and snapshot source."""

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

ENV_PREFIX = "CRYPTO_WATCH_"


def _env_overrides(model: type, prefix: str) -> Dict[str, Any]:
    """Collect ``<prefix><FIELD>`` environment variables for a model's fields."""
    overrides = {}
    for name in model.model_fields:
        value = os.getenv(f"{prefix}{name.upper()}")
        if value is not None and value != "":
            overrides[name] = value
    return overrides


class AnalysisConfig(BaseModel):
    """Thresholds and ratios used by the analysis pipeline."""

    # Signal thresholds
    whale_price_change: float = Field(default=3.0, description="Min % change for whale activity (exclusive)")
    whale_quote_volume: float = Field(default=1_000_000, description="Min quote volume for whale activity (exclusive)")
    panic_price_change: float = Field(default=-3.0, description="Max % change for panic sell (exclusive)")

    # Volatility thresholds and score ratios
    volatility_medium_threshold: float = Field(default=2.0, description="|%| at which volatility is medium")
    volatility_high_threshold: float = Field(default=5.0, description="|%| at which volatility is high")
    volatility_high_scale: float = Field(default=10.0, description="|%| that maps to a score of 100")
    volatility_medium_weight: float = Field(default=70.0, description="Score at the top of the medium band")
    volatility_low_weight: float = Field(default=30.0, description="Score at the top of the low band")

    quote_currency: str = Field(default="USDT", description="Quote currency suffix stripped from symbols")
    top_gainers_limit: int = Field(default=5, description="Number of top gainers to report")

    model_config = ConfigDict(frozen=True)

    @field_validator('top_gainers_limit')
    @classmethod
    def validate_limit(cls, v):
        if v < 0:
            raise ValueError("top_gainers_limit must be non-negative")
        return v

    @field_validator('volatility_medium_threshold')
    @classmethod
    def validate_medium_threshold(cls, v):
        if v < 0:
            raise ValueError("volatility_medium_threshold must be non-negative")
        return v

    @field_validator('volatility_high_threshold')
    @classmethod
    def validate_high_threshold(cls, v, info: ValidationInfo):
        medium = info.data.get('volatility_medium_threshold')
        if medium is not None and v <= medium:
            raise ValueError("volatility_high_threshold must be greater than volatility_medium_threshold")
        return v

    @field_validator('volatility_high_scale', 'volatility_medium_weight', 'volatility_low_weight')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Volatility scale and weights must be positive")
        return v

    @field_validator('panic_price_change')
    @classmethod
    def validate_panic(cls, v):
        if v > 0:
            raise ValueError("panic_price_change must not be positive")
        return v

    @field_validator('quote_currency')
    @classmethod
    def validate_quote(cls, v):
        if not v:
            raise ValueError("quote_currency must not be empty")
        return v.upper()

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> "AnalysisConfig":
        """Build config from ``CRYPTO_WATCH_*`` environment variables."""
        load_dotenv()
        values = _env_overrides(cls, ENV_PREFIX)
        if overrides:
            values.update(overrides)
        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        """Copy of the active configuration."""
        return self.model_dump()


class SourceConfig(BaseModel):
    """Settings for the ticker snapshot source and polling loop."""

    api_url: str = Field(default="https://api.binance.com/api/v3/ticker/24hr", description="24hr ticker endpoint")
    poll_interval: float = Field(default=5.0, description="Seconds between polls")
    request_timeout: float = Field(default=10.0, description="HTTP timeout in seconds")
    max_symbols: int = Field(default=100, description="Keep the N symbols with highest quote volume")
    quote_currency: str = Field(default="USDT", description="Only symbols ending with this are kept")

    model_config = ConfigDict(frozen=True)

    @field_validator('poll_interval', 'request_timeout')
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Intervals and timeouts must be positive")
        return v

    @field_validator('max_symbols')
    @classmethod
    def validate_max_symbols(cls, v):
        if v < 1:
            raise ValueError("max_symbols must be at least 1")
        return v

    @classmethod
    def from_env(cls, overrides: Optional[Dict[str, Any]] = None) -> "SourceConfig":
        load_dotenv()
        values = _env_overrides(cls, ENV_PREFIX)
        if overrides:
            values.update(overrides)
        return cls(**values)
