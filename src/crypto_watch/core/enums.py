"""Core enumerations for the analysis engine."""

from enum import Enum


class SignalType(str, Enum):
    """Market signal types."""
    WHALE_ACTIVITY = "WHALE_ACTIVITY"
    PANIC_SELL = "PANIC_SELL"
    NEUTRAL = "NEUTRAL"


class SignalPriority(str, Enum):
    """Signal priorities."""
    HIGH = "high"
    LOW = "low"


class VolatilityLevel(str, Enum):
    """Volatility levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
