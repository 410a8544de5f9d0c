"""Core data models for the analysis engine."""

import math
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import SignalPriority, SignalType, VolatilityLevel

Numeric = Union[str, float, int, None]


def parse_number(value: Any) -> float:
    """Parse a numeric-as-text field, returning NaN when it cannot be parsed."""
    if value is None or isinstance(value, bool):
        return math.nan
    # float() also accepts digit separators, which exchanges never send
    if isinstance(value, str) and "_" in value:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


class RawTicker(BaseModel):
    """24h ticker record as delivered by the snapshot source."""

    symbol: str = Field(default="", description="Trading symbol, e.g. BTCUSDT")
    lastPrice: Numeric = Field(default=None, description="Last traded price")
    priceChange: Numeric = Field(default=None, description="Absolute 24h price change")
    priceChangePercent: Numeric = Field(default=None, description="24h price change %")
    volume: Numeric = Field(default=None, description="24h base asset volume")
    quoteVolume: Numeric = Field(default=None, description="24h quote asset volume")
    highPrice: Numeric = Field(default=None, description="24h high")
    lowPrice: Numeric = Field(default=None, description="24h low")

    model_config = ConfigDict(extra="allow", frozen=True)

    @field_validator("symbol", mode="before")
    @classmethod
    def validate_symbol(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator(
        'lastPrice', 'priceChange', 'priceChangePercent', 'volume',
        'quoteVolume', 'highPrice', 'lowPrice',
        mode="before",
    )
    @classmethod
    def validate_numeric(cls, v):
        # Anything that is not text or a number is kept as its text form so
        # that parsing later degrades it to NaN instead of failing here.
        if isinstance(v, bool):
            return str(v)
        if v is None or isinstance(v, (str, int, float)):
            return v
        return str(v)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawTicker":
        """Build a RawTicker from an exchange payload."""
        return cls(**{str(k): v for k, v in data.items()})


class VolatilityResult(BaseModel):
    """Volatility score for a single ticker."""

    score: int = Field(ge=0, le=100, description="Volatility score (0-100)")
    level: VolatilityLevel = Field(description="Volatility level")

    model_config = ConfigDict(frozen=True)


class SignalResult(BaseModel):
    """Market signal for a single ticker."""

    type: SignalType = Field(description="Signal type")
    message: str = Field(description="Human readable signal description")
    priority: SignalPriority = Field(description="Signal priority")

    model_config = ConfigDict(frozen=True)

    @property
    def is_active(self) -> bool:
        return self.type != SignalType.NEUTRAL


class EnrichedTicker(BaseModel):
    """Ticker with parsed numeric fields, volatility and signal."""

    symbol: str = Field(description="Trading symbol")
    base_asset: str = Field(description="Symbol without the quote currency suffix")

    # Parsed numeric fields, NaN when the source value was malformed
    price: float = Field(description="Last traded price")
    price_change: float = Field(description="Absolute 24h price change")
    price_change_percent: float = Field(description="24h price change %")
    volume: float = Field(description="24h base asset volume")
    quote_volume: float = Field(description="24h quote asset volume")
    high_price: float = Field(description="24h high")
    low_price: float = Field(description="24h low")

    volatility: VolatilityResult = Field(description="Volatility classification")
    signal: SignalResult = Field(description="Signal classification")
    raw: RawTicker = Field(description="Source record")

    model_config = ConfigDict(frozen=True)

    @property
    def has_malformed_fields(self) -> bool:
        return any(
            math.isnan(v) for v in (
                self.price, self.price_change, self.price_change_percent,
                self.volume, self.quote_volume, self.high_price, self.low_price,
            )
        )


class PipelineState(BaseModel):
    """Enriched tickers from the most recently processed snapshot."""

    previous: Dict[str, EnrichedTicker] = Field(
        default_factory=dict, description="Previous snapshot keyed by symbol"
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_tickers(cls, tickers: List[EnrichedTicker]) -> "PipelineState":
        return cls(previous={t.symbol: t for t in tickers})

    @property
    def is_empty(self) -> bool:
        return not self.previous

    def tickers(self) -> List[EnrichedTicker]:
        return list(self.previous.values())


class AnalysisResult(BaseModel):
    """The three data products of one processed snapshot."""

    analyzed: List[EnrichedTicker] = Field(default_factory=list, description="All analyzed tickers")
    top_gainers: List[EnrichedTicker] = Field(default_factory=list, description="Ranked gainers")
    new_signals: List[EnrichedTicker] = Field(default_factory=list, description="New or changed signals")

    model_config = ConfigDict(frozen=True)


class SnapshotSummary(BaseModel):
    """Counts describing one analyzed snapshot."""

    total: int = Field(default=0, description="Number of analyzed tickers")
    whale: int = Field(default=0, description="WHALE_ACTIVITY count")
    panic: int = Field(default=0, description="PANIC_SELL count")
    neutral: int = Field(default=0, description="NEUTRAL count")
    gainers: int = Field(default=0, description="Tickers with positive change")
    losers: int = Field(default=0, description="Tickers with negative change")
    new_signals: int = Field(default=0, description="New or changed signals")
    malformed: int = Field(default=0, description="Tickers with unparseable fields")
    top_gainer: Optional[str] = Field(default=None, description="Best performing symbol")
