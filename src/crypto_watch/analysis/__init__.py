"""Ticker analysis: scoring, classification, ranking and signal diffing."""

from .volatility import VolatilityScorer, score_volatility
from .signals import SignalClassifier, classify_signal, active_signals
from .analyzer import TickerAnalyzer, strip_quote_currency
from .ranker import Ranker, rank_top_gainers
from .diff import SignalDiffEngine
from .pipeline import AnalysisPipeline
from .processor import AsyncSnapshotProcessor
from .report import snapshot_frame, summarize

__all__ = [
    "VolatilityScorer",
    "score_volatility",
    "SignalClassifier",
    "classify_signal",
    "active_signals",
    "TickerAnalyzer",
    "strip_quote_currency",
    "Ranker",
    "rank_top_gainers",
    "SignalDiffEngine",
    "AnalysisPipeline",
    "AsyncSnapshotProcessor",
    "snapshot_frame",
    "summarize",
]
