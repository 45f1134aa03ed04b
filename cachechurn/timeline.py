"""Aggregation and chronological ordering of events."""

import logging
from typing import Iterable, List, Sequence, Tuple

from .models import Event

logger = logging.getLogger(__name__)


class EventAggregator:
    """Accumulates event batches from many sources in arrival order."""

    def __init__(self, progress_interval: int = 10000):
        self._events: List[Event] = []
        self.progress_interval = progress_interval

    def __len__(self) -> int:
        return len(self._events)

    def add(self, batch: Iterable[Event]) -> int:
        """Append a batch, keeping its order. Returns the number added."""
        before = len(self._events)
        self._events.extend(batch)
        after = len(self._events)
        # Log once per interval boundary crossed by this batch.
        if after // self.progress_interval > before // self.progress_interval:
            logger.info("Processed %d records", after)
        return after - before

    def drain(self) -> List[Event]:
        """Hand off the accumulated events, leaving the aggregator empty."""
        events, self._events = self._events, []
        return events


def sort_events(events: Sequence[Event]) -> Tuple[Event, ...]:
    """Order events newest first; equal timestamps keep their input order."""
    return tuple(sorted(events, key=lambda event: event.timestamp, reverse=True))
