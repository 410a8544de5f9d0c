"""Unit tests for signal diffing."""

from crypto_watch.analysis.analyzer import TickerAnalyzer
from crypto_watch.analysis.diff import SignalDiffEngine
from crypto_watch.core.enums import SignalType
from crypto_watch.core.models import PipelineState

WHALE = ("5.0", "2000000")
PANIC = ("-5.0", "2000000")
NEUTRAL = ("0.5", "2000000")


def _snapshot(**signals):
    analyzer = TickerAnalyzer()
    return analyzer.analyze_many([
        {"symbol": symbol, "priceChangePercent": pct, "quoteVolume": volume}
        for symbol, (pct, volume) in signals.items()
    ])


class TestSignalDiffEngine:
    def setup_method(self):
        self.engine = SignalDiffEngine()

    def test_first_snapshot_reports_all_active(self):
        current = _snapshot(AUSDT=WHALE, BUSDT=NEUTRAL, CUSDT=PANIC)
        new = self.engine.diff([], current)
        assert [t.symbol for t in new] == ["AUSDT", "CUSDT"]

    def test_first_snapshot_all_active(self):
        current = _snapshot(AUSDT=WHALE, BUSDT=PANIC, CUSDT=WHALE)
        assert self.engine.diff([], current) == current

    def test_unchanged_signal_not_reported(self):
        previous = _snapshot(XUSDT=WHALE)
        current = _snapshot(XUSDT=WHALE)
        assert self.engine.diff(previous, current) == []

    def test_changed_signal_reported(self):
        previous = _snapshot(XUSDT=WHALE)
        current = _snapshot(XUSDT=PANIC)
        new = self.engine.diff(previous, current)
        assert [t.symbol for t in new] == ["XUSDT"]
        assert new[0].signal.type == SignalType.PANIC_SELL

    def test_panic_to_whale_reported(self):
        previous = _snapshot(XUSDT=PANIC)
        current = _snapshot(XUSDT=WHALE)
        assert len(self.engine.diff(previous, current)) == 1

    def test_neutral_to_active_reported(self):
        previous = _snapshot(XUSDT=NEUTRAL, YUSDT=WHALE)
        current = _snapshot(XUSDT=WHALE, YUSDT=WHALE)
        assert [t.symbol for t in self.engine.diff(previous, current)] == ["XUSDT"]

    def test_new_symbol_reported(self):
        previous = _snapshot(XUSDT=WHALE)
        current = _snapshot(XUSDT=WHALE, NEWUSDT=PANIC)
        assert [t.symbol for t in self.engine.diff(previous, current)] == ["NEWUSDT"]

    def test_transition_to_neutral_not_reported(self):
        previous = _snapshot(XUSDT=WHALE)
        current = _snapshot(XUSDT=NEUTRAL)
        assert self.engine.diff(previous, current) == []

    def test_vanished_symbol_not_reported(self):
        previous = _snapshot(XUSDT=WHALE, YUSDT=PANIC)
        current = _snapshot(YUSDT=PANIC)
        assert self.engine.diff(previous, current) == []

    def test_all_neutral_previous_treated_as_existing(self):
        # A non-empty previous snapshot is compared even if it has no active signals
        previous = _snapshot(XUSDT=NEUTRAL)
        current = _snapshot(YUSDT=WHALE, XUSDT=NEUTRAL)
        assert [t.symbol for t in self.engine.diff(previous, current)] == ["YUSDT"]

    def test_output_follows_current_order(self):
        previous = _snapshot(AUSDT=NEUTRAL)
        current = _snapshot(ZUSDT=PANIC, AUSDT=WHALE, MUSDT=WHALE)
        assert [t.symbol for t in self.engine.diff(previous, current)] == ["ZUSDT", "AUSDT", "MUSDT"]

    def test_accepts_state_mapping(self):
        state = PipelineState.from_tickers(_snapshot(XUSDT=WHALE))
        current = _snapshot(XUSDT=WHALE, YUSDT=PANIC)
        assert [t.symbol for t in self.engine.diff(state.previous, current)] == ["YUSDT"]

    def test_empty_current(self):
        assert self.engine.diff(_snapshot(XUSDT=WHALE), []) == []
        assert self.engine.diff([], []) == []

    def test_inputs_not_mutated(self):
        previous = _snapshot(XUSDT=WHALE)
        current = _snapshot(XUSDT=PANIC)
        self.engine.diff(previous, current)
        assert len(previous) == 1
        assert previous[0].signal.type == SignalType.WHALE_ACTIVITY
