"""Per-ticker analysis: parsing, volatility and signal classification."""

from typing import Any, Iterable, List, Mapping, Optional, Union
import logging

from ..core.config import AnalysisConfig
from ..core.models import EnrichedTicker, RawTicker, parse_number
from .signals import SignalClassifier
from .volatility import VolatilityScorer

logger = logging.getLogger(__name__)

TickerInput = Union[RawTicker, Mapping[str, Any]]


def strip_quote_currency(symbol: str, quote_currency: str) -> str:
    """Remove the quote currency suffix from a symbol, if present."""
    if quote_currency and symbol.endswith(quote_currency) and len(symbol) > len(quote_currency):
        return symbol[: -len(quote_currency)]
    return symbol


class TickerAnalyzer:
    """Turns raw ticker records into enriched tickers."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """Initialize ticker analyzer."""
        self.config = config or AnalysisConfig()
        self.volatility_scorer = VolatilityScorer(self.config)
        self.signal_classifier = SignalClassifier(self.config)

    def analyze(self, ticker: TickerInput) -> EnrichedTicker:
        """Analyze a single ticker. Malformed numeric fields become NaN."""
        if isinstance(ticker, RawTicker):
            raw = ticker
        elif isinstance(ticker, Mapping):
            raw = RawTicker.from_mapping(ticker)
        else:
            logger.warning(f"Unsupported ticker record {type(ticker).__name__}, analyzing as empty")
            raw = RawTicker()

        price_change_percent = parse_number(raw.priceChangePercent)
        quote_volume = parse_number(raw.quoteVolume)

        enriched = EnrichedTicker(
            symbol=raw.symbol,
            base_asset=strip_quote_currency(raw.symbol, self.config.quote_currency),
            price=parse_number(raw.lastPrice),
            price_change=parse_number(raw.priceChange),
            price_change_percent=price_change_percent,
            volume=parse_number(raw.volume),
            quote_volume=quote_volume,
            high_price=parse_number(raw.highPrice),
            low_price=parse_number(raw.lowPrice),
            volatility=self.volatility_scorer.score(price_change_percent),
            signal=self.signal_classifier.classify(price_change_percent, quote_volume),
            raw=raw,
        )

        if enriched.has_malformed_fields:
            logger.debug(f"{raw.symbol or '<no symbol>'}: malformed numeric fields parsed as NaN")
        return enriched

    def analyze_many(self, tickers: Iterable[TickerInput]) -> List[EnrichedTicker]:
        """Analyze tickers, preserving input order."""
        return [self.analyze(t) for t in tickers]
