"""Core models, enums and configuration."""

from .models import (
    RawTicker, VolatilityResult, SignalResult, EnrichedTicker,
    PipelineState, AnalysisResult, SnapshotSummary, parse_number
)
from .enums import SignalType, SignalPriority, VolatilityLevel
from .config import AnalysisConfig, SourceConfig

__all__ = [
    "RawTicker",
    "VolatilityResult",
    "SignalResult",
    "EnrichedTicker",
    "PipelineState",
    "AnalysisResult",
    "SnapshotSummary",
    "parse_number",
    "SignalType",
    "SignalPriority",
    "VolatilityLevel",
    "AnalysisConfig",
    "SourceConfig",
]
