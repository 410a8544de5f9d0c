"""Tabular views and summaries of analyzed snapshots."""

from typing import Sequence
import logging

import numpy as np
import pandas as pd

from ..core.enums import SignalType
from ..core.models import AnalysisResult, EnrichedTicker, SnapshotSummary

logger = logging.getLogger(__name__)

SNAPSHOT_COLUMNS = [
    'symbol', 'base_asset', 'price', 'price_change_percent', 'quote_volume',
    'high_price', 'low_price', 'volatility_score', 'volatility_level', 'signal',
]


def snapshot_frame(tickers: Sequence[EnrichedTicker]) -> pd.DataFrame:
    """One row per ticker, in snapshot order."""
    rows = [
        {
            'symbol': t.symbol,
            'base_asset': t.base_asset,
            'price': t.price,
            'price_change_percent': t.price_change_percent,
            'quote_volume': t.quote_volume,
            'high_price': t.high_price,
            'low_price': t.low_price,
            'volatility_score': t.volatility.score,
            'volatility_level': t.volatility.level.value,
            'signal': t.signal.type.value,
        }
        for t in tickers
    ]
    return pd.DataFrame(rows, columns=SNAPSHOT_COLUMNS)


def summarize(result: AnalysisResult) -> SnapshotSummary:
    """Count signals, gainers and losers in an analyzed snapshot."""
    if not result.analyzed:
        return SnapshotSummary()

    df = snapshot_frame(result.analyzed)
    signals = df['signal'].value_counts()
    # NaN changes count as neither gainers nor losers
    changes = df['price_change_percent'].to_numpy(dtype=float)

    return SnapshotSummary(
        total=len(df),
        whale=int(signals.get(SignalType.WHALE_ACTIVITY.value, 0)),
        panic=int(signals.get(SignalType.PANIC_SELL.value, 0)),
        neutral=int(signals.get(SignalType.NEUTRAL.value, 0)),
        gainers=int(np.sum(changes > 0)),
        losers=int(np.sum(changes < 0)),
        new_signals=len(result.new_signals),
        malformed=sum(1 for t in result.analyzed if t.has_malformed_fields),
        top_gainer=result.top_gainers[0].symbol if result.top_gainers else None,
    )
