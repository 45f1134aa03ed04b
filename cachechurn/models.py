"""Data models for cachechurn."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

NANOS_PER_SECOND = 1_000_000_000


class EventKind(str, Enum):
    """Block cache event markers."""

    EVICTED = "Evicted"
    MISSED = "Missed"


class Outcome(str, Enum):
    """How a miss relates to the recorded eviction of its block."""

    INVERTED = "inverted"
    RESOLVED = "resolved"
    UNMATCHED = "unmatched"


class Bucket(str, Enum):
    """Latency class of a resolved miss."""

    SHORT = "short"
    LONG = "long"


class BlockKey(NamedTuple):
    """Identity of a cached data block."""

    sst_id: int
    block_idx: int

    def __str__(self) -> str:
        return f"Data {{ sst: {self.sst_id}, blk: {self.block_idx} }}"


@dataclass(frozen=True)
class Event:
    """Single eviction or miss of a block.

    ``timestamp`` is in nanoseconds since the Unix epoch.
    """

    key: BlockKey
    timestamp: int
    kind: EventKind


@dataclass(frozen=True)
class CorrelationResult:
    """Outcome of matching one miss against the eviction index."""

    event: Event
    outcome: Outcome
    delta: Optional[int] = None
    bucket: Optional[Bucket] = None

    @property
    def signed_delta(self) -> Optional[int]:
        """Delta in nanoseconds, negative when the eviction follows the miss."""
        if self.delta is None:
            return None
        return -self.delta if self.outcome == Outcome.INVERTED else self.delta


@dataclass(frozen=True)
class OutcomeTally:
    """Counters over all correlation results."""

    long: int = 0
    short: int = 0
    none: int = 0

    def __str__(self) -> str:
        return f"long: {self.long}, short: {self.short}, none: {self.none}"


@dataclass(frozen=True)
class DeltaStats:
    """Summary of resolved miss latencies, in seconds."""

    count: int
    min_s: float
    median_s: float
    p90_s: float
    p99_s: float
    max_s: float


class AnalyzerConfig(BaseModel):
    """Configuration for a directory analysis run."""

    directory: str
    events_path: str = "out.txt"
    duration_path: str = "duration.txt"
    short_threshold_s: float = Field(default=10.0, gt=0.0)
    progress_interval: int = Field(default=10000, ge=1)
