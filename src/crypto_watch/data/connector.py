"""Ticker snapshot sources."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import asyncio
import logging
import math

import aiohttp

from ..core.config import SourceConfig
from ..core.models import parse_number

logger = logging.getLogger(__name__)


class SnapshotFetchError(Exception):
    """Raised when a ticker snapshot cannot be retrieved."""


class SnapshotSource(ABC):
    """Abstract base class for ticker snapshot sources."""

    @abstractmethod
    async def fetch_snapshot(self) -> List[Dict[str, Any]]:
        """Fetch one ordered snapshot of raw ticker records."""
        pass

    @abstractmethod
    async def close(self):
        """Release any held resources."""
        pass


def select_snapshot(tickers: List[Dict[str, Any]], quote_currency: str, max_symbols: int) -> List[Dict[str, Any]]:
    """Keep quote-currency pairs, sorted by quote volume, limited to *max_symbols*."""
    pairs = [
        t for t in tickers
        if isinstance(t, dict) and str(t.get('symbol', '')).endswith(quote_currency)
    ]

    def _volume(ticker: Dict[str, Any]) -> float:
        volume = parse_number(ticker.get('quoteVolume'))
        return float("-inf") if math.isnan(volume) else volume

    pairs.sort(key=_volume, reverse=True)
    return pairs[:max_symbols]


class BinanceTickerSource(SnapshotSource):
    """Reads the public Binance 24hr ticker endpoint."""

    def __init__(self, config: Optional[SourceConfig] = None, session: Optional[aiohttp.ClientSession] = None):
        """Initialize Binance ticker source."""
        self.config = config or SourceConfig()
        self._session = session
        self._owns_session = session is None
        logger.info(f"Initialized ticker source for {self.config.api_url}")

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def fetch_snapshot(self) -> List[Dict[str, Any]]:
        """Fetch all tickers and keep the most traded quote-currency pairs."""
        session = await self._get_session()
        try:
            async with session.get(self.config.api_url) as response:
                if response.status != 200:
                    raise SnapshotFetchError(f"HTTP error! status: {response.status}")
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error fetching tickers: {e}")
            raise SnapshotFetchError(str(e)) from e

        if not isinstance(data, list):
            raise SnapshotFetchError(f"Unexpected ticker payload: {type(data).__name__}")

        snapshot = select_snapshot(data, self.config.quote_currency, self.config.max_symbols)
        logger.debug(f"Fetched {len(data)} tickers, kept {len(snapshot)} {self.config.quote_currency} pairs")
        return snapshot

    async def close(self):
        """Close the HTTP session if this source created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.info("Closed ticker source session")
