"""Serialized snapshot processing for asynchronous hosts."""

import asyncio
from typing import Any, List, Optional
import logging

from ..core.models import AnalysisResult
from .pipeline import AnalysisPipeline

logger = logging.getLogger(__name__)


class AsyncSnapshotProcessor:
    """
    Feeds snapshots from async sources into a pipeline one at a time.

    Analysis runs in a worker thread so the event loop stays responsive.
    While a snapshot is in flight, at most one newer snapshot waits behind
    it; a later submission replaces the waiting one, which resolves to
    ``None`` without being analyzed.
    """

    def __init__(self, pipeline: AnalysisPipeline):
        self.pipeline = pipeline
        self._lock = asyncio.Lock()
        self._waiting: Optional[asyncio.Future] = None
        self._dropped = 0

    @property
    def dropped_count(self) -> int:
        return self._dropped

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _supersede_waiting(self) -> None:
        if self._waiting is not None and not self._waiting.done():
            self._waiting.set_result(False)
            self._dropped += 1
            logger.warning(f"Snapshot superseded while waiting (dropped: {self._dropped})")

    async def submit(self, snapshot: Optional[List[Any]]) -> Optional[AnalysisResult]:
        """Process *snapshot*, or return None if a newer one superseded it."""
        ticket = None
        if self._lock.locked():
            self._supersede_waiting()
            ticket = asyncio.get_running_loop().create_future()
            self._waiting = ticket

        async with self._lock:
            if ticket is not None:
                if ticket.done():
                    return None
                ticket.set_result(True)
                if self._waiting is ticket:
                    self._waiting = None
            return await asyncio.to_thread(self.pipeline.process, snapshot)
