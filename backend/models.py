"""Data models for the cachechurn API."""

from typing import Optional

from pydantic import BaseModel, Field

from cachechurn.models import Bucket, EventKind, Outcome


class AnalyzeRequest(BaseModel):
    """Raw log blocks to analyze."""

    blocks: list[str] = Field(default_factory=list)
    short_threshold_s: float = Field(default=10.0, gt=0.0)


class EventRecord(BaseModel):
    """Single event in the sorted stream."""

    sst_id: int
    block_idx: int
    timestamp_ns: int
    kind: EventKind
    line: str


class CorrelationRecord(BaseModel):
    """Correlation of one miss with its block's eviction."""

    sst_id: int
    block_idx: int
    miss_time_ns: int
    evicted_time_ns: Optional[int] = None
    outcome: Outcome
    delta_ns: Optional[int] = None
    bucket: Optional[Bucket] = None
    line: str


class TallyRecord(BaseModel):
    """Outcome counters."""

    long: int
    short: int
    none: int


class DeltaStatsRecord(BaseModel):
    """Resolved delta summary in seconds."""

    count: int
    min_s: float
    median_s: float
    p90_s: float
    p99_s: float
    max_s: float


class AnalyzeResponse(BaseModel):
    """Full analysis of the submitted blocks."""

    events: list[EventRecord]
    correlations: list[CorrelationRecord]
    tally: TallyRecord
    stats: DeltaStatsRecord
