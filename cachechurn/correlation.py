"""Eviction index construction and miss correlation."""

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Sequence

from .errors import TimeArithmeticInvalid
from .models import (
    NANOS_PER_SECOND,
    BlockKey,
    Bucket,
    CorrelationResult,
    Event,
    EventKind,
    Outcome,
    OutcomeTally,
)

SHORT_THRESHOLD_S = 10.0

EvictionIndex = Mapping[BlockKey, int]


def build_eviction_index(events: Sequence[Event]) -> EvictionIndex:
    """Map each evicted block to its eviction timestamp.

    Expects ``events`` newest first. Every eviction overwrites the entry for
    its key, so the value left for a block evicted several times is its
    earliest eviction.
    """
    index: Dict[BlockKey, int] = {}
    for event in events:
        if event.kind == EventKind.EVICTED:
            index[event.key] = event.timestamp
    return MappingProxyType(index)


def elapsed(later: int, earlier: int) -> int:
    """Non-negative nanoseconds from ``earlier`` to ``later``."""
    if later < earlier:
        raise TimeArithmeticInvalid(
            f"timestamp {later} precedes {earlier}, duration would be negative"
        )
    return later - earlier


def classify_miss(
    event: Event,
    index: EvictionIndex,
    short_threshold_s: float = SHORT_THRESHOLD_S,
) -> CorrelationResult:
    """Correlate one miss with the indexed eviction of its block."""
    evicted_at = index.get(event.key)
    if evicted_at is None:
        return CorrelationResult(event, Outcome.UNMATCHED)
    if evicted_at > event.timestamp:
        delta = elapsed(evicted_at, event.timestamp)
        return CorrelationResult(event, Outcome.INVERTED, delta)
    delta = elapsed(event.timestamp, evicted_at)
    if delta / NANOS_PER_SECOND < short_threshold_s:
        bucket = Bucket.SHORT
    else:
        bucket = Bucket.LONG
    return CorrelationResult(event, Outcome.RESOLVED, delta, bucket)


def correlate(
    events: Sequence[Event],
    index: EvictionIndex,
    short_threshold_s: float = SHORT_THRESHOLD_S,
) -> List[CorrelationResult]:
    """Classify every miss in ``events`` against a complete eviction index."""
    return [
        classify_miss(event, index, short_threshold_s)
        for event in events
        if event.kind == EventKind.MISSED
    ]


def tally_outcomes(results: Iterable[CorrelationResult]) -> OutcomeTally:
    """Count long, short and unmatched misses. Inverted misses are not counted."""
    long = short = none = 0
    for result in results:
        if result.outcome == Outcome.UNMATCHED:
            none += 1
        elif result.bucket == Bucket.SHORT:
            short += 1
        elif result.bucket == Bucket.LONG:
            long += 1
    return OutcomeTally(long=long, short=short, none=none)
