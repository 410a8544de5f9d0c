"""Top gainers ranking."""

from typing import List, Optional, Sequence
import logging

from ..core.models import EnrichedTicker

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def rank_top_gainers(tickers: Sequence[EnrichedTicker], limit: int = DEFAULT_LIMIT) -> List[EnrichedTicker]:
    """
    Return up to *limit* tickers with a positive change, best first.

    The sort is stable, so ties keep their input order. NaN changes are
    never positive and are therefore excluded.
    """
    if limit < 0:
        raise ValueError("limit must be non-negative")

    gainers = [t for t in tickers if t.price_change_percent > 0]
    gainers.sort(key=lambda t: t.price_change_percent, reverse=True)
    return gainers[:limit]


class Ranker:
    """Ranks gainers with a default limit fixed at construction."""

    def __init__(self, limit: int = DEFAULT_LIMIT):
        if limit < 0:
            raise ValueError("limit must be non-negative")
        self.limit = limit

    def rank(self, tickers: Sequence[EnrichedTicker], limit: Optional[int] = None) -> List[EnrichedTicker]:
        return rank_top_gainers(tickers, self.limit if limit is None else limit)
