"""Ticker snapshot sources."""

from .connector import SnapshotSource, BinanceTickerSource, SnapshotFetchError, select_snapshot

__all__ = [
    "SnapshotSource",
    "BinanceTickerSource",
    "SnapshotFetchError",
    "select_snapshot",
]
