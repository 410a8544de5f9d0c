"""Pytest configuration and fixtures."""

import pytest

from crypto_watch.core.config import AnalysisConfig
from crypto_watch.analysis.pipeline import AnalysisPipeline


def make_raw_ticker(
    symbol="BTCUSDT",
    pct="1.0",
    quote_volume="5000000",
    last="100.0",
    volume="1000",
    high="105.0",
    low="95.0",
):
    """Build a Binance style 24hr ticker payload."""
    return {
        "symbol": symbol,
        "lastPrice": last,
        "priceChange": "1.0",
        "priceChangePercent": pct,
        "volume": volume,
        "quoteVolume": quote_volume,
        "highPrice": high,
        "lowPrice": low,
    }


@pytest.fixture
def config():
    return AnalysisConfig()


@pytest.fixture
def pipeline(config):
    return AnalysisPipeline(config)


@pytest.fixture
def sample_snapshot():
    """Mixed snapshot: two whales, one panic, gainers and losers."""
    return [
        make_raw_ticker("BTCUSDT", pct="4.5", quote_volume="900000000"),
        make_raw_ticker("ETHUSDT", pct="-4.2", quote_volume="500000000"),
        make_raw_ticker("SOLUSDT", pct="7.1", quote_volume="80000000"),
        make_raw_ticker("XRPUSDT", pct="1.2", quote_volume="60000000"),
        make_raw_ticker("DOGEUSDT", pct="-0.5", quote_volume="40000000"),
        make_raw_ticker("PEPEUSDT", pct="3.5", quote_volume="900000"),
    ]
