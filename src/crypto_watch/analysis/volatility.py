"""Volatility scoring from 24h price change."""

import math
from typing import Optional
import logging

from ..core.config import AnalysisConfig
from ..core.enums import VolatilityLevel
from ..core.models import VolatilityResult

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = AnalysisConfig()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_volatility(
    price_change_percent: float,
    config: Optional[AnalysisConfig] = None,
) -> VolatilityResult:
    """
    Map a 24h price change percentage to a bounded score and level.

    Non-numeric input (NaN) always scores 0 with a ``low`` level.
    """
    config = config or _DEFAULT_CONFIG

    if price_change_percent is None or math.isnan(price_change_percent):
        return VolatilityResult(score=0, level=VolatilityLevel.LOW)

    abs_change = abs(price_change_percent)

    if abs_change >= config.volatility_high_threshold:
        # min() before rounding so that +inf saturates instead of overflowing
        score = _round_half_up(min(100.0, abs_change / config.volatility_high_scale * 100))
        level = VolatilityLevel.HIGH
    elif abs_change >= config.volatility_medium_threshold:
        score = _round_half_up(
            abs_change / config.volatility_high_threshold * config.volatility_medium_weight
        )
        level = VolatilityLevel.MEDIUM
    else:
        score = _round_half_up(
            abs_change / config.volatility_medium_threshold * config.volatility_low_weight
        )
        level = VolatilityLevel.LOW

    return VolatilityResult(score=min(100, max(0, score)), level=level)


class VolatilityScorer:
    """Scores volatility with a fixed configuration."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or _DEFAULT_CONFIG

    def score(self, price_change_percent: float) -> VolatilityResult:
        return score_volatility(price_change_percent, self.config)
