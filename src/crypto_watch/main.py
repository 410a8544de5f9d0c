"""Command line watcher that polls tickers and logs analysis results."""

import asyncio
import logging
import signal
import sys
from typing import Dict, List, Optional

from dotenv import load_dotenv

from .core.config import AnalysisConfig, SourceConfig
from .core.models import AnalysisResult, EnrichedTicker
from .analysis.pipeline import AnalysisPipeline
from .analysis.processor import AsyncSnapshotProcessor
from .analysis.report import summarize
from .data.connector import BinanceTickerSource, SnapshotFetchError, SnapshotSource

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO, log_file: Optional[str] = 'crypto_watch.log'):
    """Configure root logging for the command line entry point."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


class WatchRunner:
    """Polls a snapshot source and feeds the analysis pipeline."""

    def __init__(
        self,
        analysis_config: Optional[AnalysisConfig] = None,
        source_config: Optional[SourceConfig] = None,
        source: Optional[SnapshotSource] = None,
    ):
        """Initialize watch runner."""
        self.source_config = source_config or SourceConfig()
        self.pipeline = AnalysisPipeline(analysis_config)
        self.processor = AsyncSnapshotProcessor(self.pipeline)
        self.source = source or BinanceTickerSource(self.source_config)
        self._running = False
        self._stop_event: Optional[asyncio.Event] = None
        self._failed_polls = 0

        self.pipeline.on_top_gainers(self._log_top_gainers)
        self.pipeline.on_new_signals(self._log_new_signals)

        logger.info("Watch runner initialized")

    @staticmethod
    def _log_top_gainers(tickers: List[EnrichedTicker]):
        if tickers:
            ranked = ", ".join(f"{t.base_asset} {t.price_change_percent:+.2f}%" for t in tickers)
            logger.info(f"Top gainers: {ranked}")

    @staticmethod
    def _log_new_signals(tickers: List[EnrichedTicker]):
        for t in tickers:
            logger.info(f"{t.symbol}: {t.signal.message} ({t.price_change_percent:+.2f}%)")

    async def poll_once(self) -> Optional[AnalysisResult]:
        """Fetch and analyze one snapshot. Fetch failures are logged and skipped."""
        try:
            snapshot = await self.source.fetch_snapshot()
        except SnapshotFetchError as e:
            self._failed_polls += 1
            logger.error(f"Snapshot fetch failed ({self._failed_polls}): {e}")
            return None

        self._failed_polls = 0
        result = await self.processor.submit(snapshot)
        if result is not None:
            summary = summarize(result)
            logger.info(
                f"Analyzed {summary.total} tickers: {summary.whale} whale, "
                f"{summary.panic} panic, {summary.new_signals} new signals"
            )
        return result

    async def start(self):
        """Poll until :meth:`stop` is called."""
        logger.info("Starting crypto watch...")
        self._running = True
        self._stop_event = asyncio.Event()

        while self._running:
            await self.poll_once()
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.source_config.poll_interval)
            except asyncio.TimeoutError:
                pass

    async def stop(self):
        """Stop polling and close the source."""
        logger.info("Stopping crypto watch...")
        self._running = False
        if self._stop_event is not None:
            self._stop_event.set()
        await self.source.close()
        logger.info("Crypto watch stopped")

    def get_status(self) -> Dict:
        """Get runner status."""
        return {
            'running': self._running,
            'snapshots_processed': self.pipeline.snapshots_processed,
            'snapshots_dropped': self.processor.dropped_count,
            'failed_polls': self._failed_polls,
            'tracked_symbols': len(self.pipeline.state.previous),
        }


async def main():
    """Main entry point."""
    load_dotenv()
    configure_logging()

    runner = WatchRunner(AnalysisConfig.from_env(), SourceConfig.from_env())

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda: asyncio.ensure_future(runner.stop()))
        except NotImplementedError:
            # Signal handlers are unavailable on some platforms (Windows)
            pass

    try:
        await runner.start()
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise
    finally:
        await runner.stop()


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
