"""Threshold-based market signal classification."""

import math
from typing import List, Optional, Sequence
import logging

from ..core.config import AnalysisConfig
from ..core.enums import SignalPriority, SignalType
from ..core.models import EnrichedTicker, SignalResult

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnalysisConfig()

WHALE_SIGNAL = SignalResult(
    type=SignalType.WHALE_ACTIVITY,
    message="WHALE ACTIVITY - Strong Buy Signal",
    priority=SignalPriority.HIGH,
)
PANIC_SIGNAL = SignalResult(
    type=SignalType.PANIC_SELL,
    message="PANIC SELL - Market Downturn",
    priority=SignalPriority.HIGH,
)
NEUTRAL_SIGNAL = SignalResult(
    type=SignalType.NEUTRAL,
    message="Normal Market Activity",
    priority=SignalPriority.LOW,
)


def _is_number(value: Optional[float]) -> bool:
    return value is not None and not math.isnan(value)


def classify_signal(
    price_change_percent: float,
    quote_volume: float,
    config: Optional[AnalysisConfig] = None,
) -> SignalResult:
    """
    Classify a ticker as whale activity, panic sell or neutral.

    Rules are evaluated in order and the first match wins. All comparisons
    are strict, and a NaN operand never satisfies a threshold.
    """
    config = config or _DEFAULT_CONFIG
    change_ok = _is_number(price_change_percent)

    if (
        change_ok
        and _is_number(quote_volume)
        and price_change_percent > config.whale_price_change
        and quote_volume > config.whale_quote_volume
    ):
        return WHALE_SIGNAL

    if change_ok and price_change_percent < config.panic_price_change:
        return PANIC_SIGNAL

    return NEUTRAL_SIGNAL


def active_signals(tickers: Sequence[EnrichedTicker]) -> List[EnrichedTicker]:
    """Return every ticker whose signal is not NEUTRAL, in input order."""
    return [t for t in tickers if t.signal.type != SignalType.NEUTRAL]


class SignalClassifier:
    """Classifies signals with a fixed configuration."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or _DEFAULT_CONFIG

    def classify(self, price_change_percent: float, quote_volume: float) -> SignalResult:
        return classify_signal(price_change_percent, quote_volume, self.config)
