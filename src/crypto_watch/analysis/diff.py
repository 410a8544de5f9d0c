"""Detection of new or changed signals between two snapshots."""

from typing import Dict, List, Mapping, Sequence, Union
import logging

from ..core.enums import SignalType
from ..core.models import EnrichedTicker
from .signals import active_signals

logger = logging.getLogger(__name__)

PreviousSet = Union[Sequence[EnrichedTicker], Mapping[str, EnrichedTicker]]


class SignalDiffEngine:
    """
    Compares the current snapshot with the previous one.

    A non-neutral signal is reported when the symbol had no active signal
    before or when its signal type changed. Transitions to NEUTRAL and
    symbols that disappear from the snapshot are never reported. When there
    is no previous snapshot, every active signal is reported.
    """

    def diff(self, previous: PreviousSet, current: Sequence[EnrichedTicker]) -> List[EnrichedTicker]:
        """Return new or changed signals in *current* order."""
        previous_tickers = list(previous.values()) if isinstance(previous, Mapping) else list(previous or [])

        if not previous_tickers:
            new_signals = active_signals(current)
            logger.debug(f"No previous snapshot, reporting {len(new_signals)} active signals")
            return new_signals

        previous_signals: Dict[str, SignalType] = {
            t.symbol: t.signal.type
            for t in previous_tickers
            if t.signal.type != SignalType.NEUTRAL
        }

        new_signals = []
        for ticker in current:
            if ticker.signal.type == SignalType.NEUTRAL:
                continue
            if previous_signals.get(ticker.symbol) != ticker.signal.type:
                new_signals.append(ticker)

        logger.debug(
            f"Signal diff: {len(previous_signals)} previous active, {len(new_signals)} new or changed"
        )
        return new_signals
