"""Unit tests for serialized async snapshot processing."""

import asyncio
import threading

import pytest

from crypto_watch.analysis.pipeline import AnalysisPipeline
from crypto_watch.analysis.processor import AsyncSnapshotProcessor


def _make_ticker(symbol, pct):
    return {"symbol": symbol, "priceChangePercent": pct, "quoteVolume": "5000000"}


class BlockingPipeline(AnalysisPipeline):
    """Pipeline that holds each snapshot until released and records the order."""

    def __init__(self):
        super().__init__()
        self.order = []
        self.started = threading.Event()
        self.release = threading.Event()

    def process(self, snapshot):
        self.started.set()
        self.release.wait(timeout=5)
        self.order.append(snapshot[0]["symbol"] if snapshot else None)
        return super().process(snapshot)


async def _start_in_flight(processor, pipeline, symbol):
    task = asyncio.ensure_future(processor.submit([_make_ticker(symbol, "1.0")]))
    assert await asyncio.to_thread(pipeline.started.wait, 5)
    return task


class TestAsyncSnapshotProcessor:
    @pytest.mark.asyncio
    async def test_single_submission(self):
        processor = AsyncSnapshotProcessor(AnalysisPipeline())
        result = await processor.submit([_make_ticker("AUSDT", "5.0")])
        assert len(result.new_signals) == 1
        assert processor.dropped_count == 0

    @pytest.mark.asyncio
    async def test_sequential_submissions(self):
        processor = AsyncSnapshotProcessor(AnalysisPipeline())
        await processor.submit([_make_ticker("AUSDT", "5.0")])
        result = await processor.submit([_make_ticker("AUSDT", "5.0")])
        assert result.new_signals == []

    @pytest.mark.asyncio
    async def test_busy_while_snapshot_in_flight(self):
        pipeline = BlockingPipeline()
        processor = AsyncSnapshotProcessor(pipeline)

        first = await _start_in_flight(processor, pipeline, "AUSDT")
        assert processor.busy

        pipeline.release.set()
        await first
        assert not processor.busy

    @pytest.mark.asyncio
    async def test_waiting_snapshot_superseded(self):
        pipeline = BlockingPipeline()
        processor = AsyncSnapshotProcessor(pipeline)

        first = await _start_in_flight(processor, pipeline, "AUSDT")
        second = asyncio.ensure_future(processor.submit([_make_ticker("BUSDT", "1.0")]))
        await asyncio.sleep(0)
        third = asyncio.ensure_future(processor.submit([_make_ticker("CUSDT", "1.0")]))
        await asyncio.sleep(0)
        pipeline.release.set()

        first_result, second_result, third_result = await asyncio.gather(first, second, third)

        assert first_result is not None
        assert second_result is None
        assert third_result is not None
        assert pipeline.order == ["AUSDT", "CUSDT"]
        assert processor.dropped_count == 1

    @pytest.mark.asyncio
    async def test_burst_keeps_only_latest_waiting(self):
        pipeline = BlockingPipeline()
        processor = AsyncSnapshotProcessor(pipeline)

        first = await _start_in_flight(processor, pipeline, "C0USDT")
        burst = []
        for i in range(1, 5):
            burst.append(asyncio.ensure_future(processor.submit([_make_ticker(f"C{i}USDT", "1.0")])))
            await asyncio.sleep(0)
        pipeline.release.set()

        results = await asyncio.gather(first, *burst)

        assert [r is not None for r in results] == [True, False, False, False, True]
        assert pipeline.order == ["C0USDT", "C4USDT"]
        assert processor.dropped_count == 3

    @pytest.mark.asyncio
    async def test_invalid_snapshot_releases_lock(self):
        processor = AsyncSnapshotProcessor(AnalysisPipeline())
        with pytest.raises(TypeError):
            await processor.submit("not a snapshot")
        assert not processor.busy
