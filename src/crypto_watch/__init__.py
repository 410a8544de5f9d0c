"""
Crypto Watch analysis engine

Classifies 24h ticker snapshots by volatility and market signal, ranks the
top gainers and reports signals that are new since the previous snapshot.
"""

__version__ = "0.1.0"
__author__ = "Crypto Watch Team"

from .core.models import RawTicker, EnrichedTicker, VolatilityResult, SignalResult, AnalysisResult
from .core.enums import SignalType, SignalPriority, VolatilityLevel
from .core.config import AnalysisConfig
from .analysis.pipeline import AnalysisPipeline

__all__ = [
    "RawTicker",
    "EnrichedTicker",
    "VolatilityResult",
    "SignalResult",
    "AnalysisResult",
    "SignalType",
    "SignalPriority",
    "VolatilityLevel",
    "AnalysisConfig",
    "AnalysisPipeline",
]
