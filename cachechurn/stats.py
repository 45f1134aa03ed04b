"""Latency statistics over resolved misses."""

from typing import Iterable

import numpy as np

from .models import NANOS_PER_SECOND, CorrelationResult, DeltaStats, Outcome


def resolved_deltas(results: Iterable[CorrelationResult]) -> np.ndarray:
    """Resolved miss deltas in seconds."""
    deltas = [r.delta for r in results if r.outcome == Outcome.RESOLVED]
    return np.asarray(deltas, dtype=np.float64) / NANOS_PER_SECOND


def summarize_deltas(results: Iterable[CorrelationResult]) -> DeltaStats:
    """Summarize resolved deltas; all zeros when nothing resolved."""
    deltas = resolved_deltas(results)
    if deltas.size == 0:
        return DeltaStats(0, 0.0, 0.0, 0.0, 0.0, 0.0)
    p50, p90, p99 = np.percentile(deltas, [50, 90, 99])
    return DeltaStats(
        count=int(deltas.size),
        min_s=float(deltas.min()),
        median_s=float(p50),
        p90_s=float(p90),
        p99_s=float(p99),
        max_s=float(deltas.max()),
    )
