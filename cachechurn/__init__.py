"""cachechurn - Block cache eviction and miss correlation."""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .correlation import (
    SHORT_THRESHOLD_S,
    EvictionIndex,
    build_eviction_index,
    correlate,
    tally_outcomes,
)
from .errors import CacheChurnError, NumericOverflow, TimeArithmeticInvalid
from .extraction import extract_events
from .models import BlockKey, CorrelationResult, DeltaStats, Event, OutcomeTally
from .stats import summarize_deltas
from .timeline import EventAggregator, sort_events

__all__ = [
    "Analysis",
    "BlockKey",
    "CacheChurnError",
    "Event",
    "NumericOverflow",
    "TimeArithmeticInvalid",
    "analyze",
    "analyze_events",
]

__version__ = "0.1.0"


@dataclass(frozen=True)
class Analysis:
    """Everything derived from one set of log blocks."""

    events: Tuple[Event, ...]
    eviction_index: EvictionIndex
    results: Tuple[CorrelationResult, ...]
    tally: OutcomeTally
    stats: DeltaStats


def analyze_events(
    events: List[Event], short_threshold_s: float = SHORT_THRESHOLD_S
) -> Analysis:
    """Sort, index and correlate an aggregated event list."""
    ordered = sort_events(events)
    index = build_eviction_index(ordered)
    results = tuple(correlate(ordered, index, short_threshold_s))
    return Analysis(
        events=ordered,
        eviction_index=index,
        results=results,
        tally=tally_outcomes(results),
        stats=summarize_deltas(results),
    )


def analyze(
    blocks: Iterable[str],
    short_threshold_s: float = SHORT_THRESHOLD_S,
    progress_interval: int = 10000,
) -> Analysis:
    """Run the full pipeline over raw text blocks."""
    aggregator = EventAggregator(progress_interval)
    for block in blocks:
        aggregator.add(extract_events(block))
    return analyze_events(aggregator.drain(), short_threshold_s)
