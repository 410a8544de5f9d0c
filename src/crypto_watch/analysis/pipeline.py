"""Snapshot analysis pipeline."""

import threading
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import logging

from ..core.config import AnalysisConfig
from ..core.models import AnalysisResult, EnrichedTicker, PipelineState
from .analyzer import TickerAnalyzer
from .diff import SignalDiffEngine
from .ranker import Ranker

logger = logging.getLogger(__name__)

TickerListener = Callable[[List[EnrichedTicker]], Any]


class AnalysisPipeline:
    """
    Analyzes ticker snapshots and tracks signal changes between them.

    Each call to :meth:`process` analyzes every record, diffs the signals
    against the previous snapshot, ranks the top gainers and then swaps the
    retained state for the current snapshot. Listeners are notified after
    the swap:

    - ``on_analyzed``: every snapshot, with all analyzed tickers
    - ``on_top_gainers``: every snapshot, with the ranked gainers
    - ``on_new_signals``: only when at least one signal is new or changed
    """

    def __init__(
        self,
        config: Optional[Union[AnalysisConfig, Dict]] = None,
        state: Optional[PipelineState] = None,
        analyzer: Optional[TickerAnalyzer] = None,
        diff_engine: Optional[SignalDiffEngine] = None,
        ranker: Optional[Ranker] = None,
    ):
        """Initialize analysis pipeline."""
        if config is None:
            config = AnalysisConfig()
        elif not isinstance(config, AnalysisConfig):
            config = AnalysisConfig(**config)
        self.config = config

        self.analyzer = analyzer or TickerAnalyzer(config)
        self.diff_engine = diff_engine or SignalDiffEngine()
        self.ranker = ranker or Ranker(config.top_gainers_limit)

        self._state = state or PipelineState()
        self._lock = threading.Lock()
        self._snapshots_processed = 0

        self._analyzed_listeners: List[TickerListener] = []
        self._top_gainers_listeners: List[TickerListener] = []
        self._new_signals_listeners: List[TickerListener] = []

        logger.info("Analysis pipeline initialized")

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def on_analyzed(self, listener: TickerListener) -> TickerListener:
        self._analyzed_listeners.append(listener)
        return listener

    def on_top_gainers(self, listener: TickerListener) -> TickerListener:
        self._top_gainers_listeners.append(listener)
        return listener

    def on_new_signals(self, listener: TickerListener) -> TickerListener:
        self._new_signals_listeners.append(listener)
        return listener

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def snapshots_processed(self) -> int:
        return self._snapshots_processed

    def reset(self) -> None:
        """Forget the previous snapshot; the next one reports all active signals."""
        with self._lock:
            self._state = PipelineState()
        logger.info("Pipeline state reset")

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process(self, snapshot: Optional[Iterable[Any]]) -> AnalysisResult:
        """Analyze one snapshot and notify listeners."""
        records = self._validate_snapshot(snapshot)

        with self._lock:
            current = self.analyzer.analyze_many(records)
            new_signals = self.diff_engine.diff(self._state.previous, current)
            top_gainers = self.ranker.rank(current)
            self._state = PipelineState.from_tickers(current)
            self._snapshots_processed += 1

        malformed = sum(1 for t in current if t.has_malformed_fields)
        if malformed:
            logger.warning(f"{malformed}/{len(current)} tickers had malformed numeric fields")
        logger.debug(
            f"Processed snapshot #{self._snapshots_processed}: {len(current)} tickers, "
            f"{len(top_gainers)} gainers, {len(new_signals)} new signals"
        )

        result = AnalysisResult(analyzed=current, top_gainers=top_gainers, new_signals=new_signals)
        self._notify(self._analyzed_listeners, result.analyzed, "analyzed")
        self._notify(self._top_gainers_listeners, result.top_gainers, "top_gainers")
        if result.new_signals:
            self._notify(self._new_signals_listeners, result.new_signals, "new_signals")
        return result

    @staticmethod
    def _validate_snapshot(snapshot: Optional[Iterable[Any]]) -> List[Any]:
        if snapshot is None:
            return []
        if isinstance(snapshot, (str, bytes, Mapping)) or not isinstance(snapshot, Sequence):
            raise TypeError(f"Snapshot must be a sequence of tickers, got {type(snapshot).__name__}")
        return list(snapshot)

    @staticmethod
    def _notify(listeners: List[TickerListener], tickers: List[EnrichedTicker], channel: str) -> None:
        for listener in listeners:
            try:
                listener(list(tickers))
            except Exception as e:
                name = getattr(listener, "__name__", listener.__class__.__name__)
                logger.error(f"Error in {channel} listener {name}: {e}")
