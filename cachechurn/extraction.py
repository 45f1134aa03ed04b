"""Event extraction from block cache log text."""

import re
from typing import Iterator, List, Optional

from .errors import NumericOverflow
from .models import NANOS_PER_SECOND, BlockKey, Event, EventKind

EVICTED_MARKER = "========== EVICTED DATA BLOCKS =========="
MISSED_MARKER = "========== MISSED DATA BLOCKS =========="

EVENT_PATTERN = re.compile(
    r"SstableBlockIndex \{ sst_id: (\d+), block_idx: (\d+) \}, "
    r"SystemTime \{ tv_sec: (\d+), tv_nsec: (\d+) \}"
)

U64_MAX = 2**64 - 1
U32_MAX = 2**32 - 1


def detect_kind(text: str) -> Optional[EventKind]:
    """Return the section kind marked in text, if any."""
    if EVICTED_MARKER in text:
        return EventKind.EVICTED
    if MISSED_MARKER in text:
        return EventKind.MISSED
    return None


def _parse_uint(field: str, digits: str, limit: int, source: str) -> int:
    value = int(digits)
    if value > limit:
        raise NumericOverflow(field, digits, source)
    return value


def iter_events(text: str) -> Iterator[Event]:
    """Yield events for every event line in a marked text block.

    Blocks without a marker and lines that do not match are skipped.
    Raises NumericOverflow when a captured number exceeds its width.
    """
    kind = detect_kind(text)
    if kind is None:
        return
    for match in EVENT_PATTERN.finditer(text):
        line = match.group(0)
        sst_id = _parse_uint("sst_id", match.group(1), U64_MAX, line)
        block_idx = _parse_uint("block_idx", match.group(2), U64_MAX, line)
        tv_sec = _parse_uint("tv_sec", match.group(3), U64_MAX, line)
        tv_nsec = _parse_uint("tv_nsec", match.group(4), U32_MAX, line)
        yield Event(
            key=BlockKey(sst_id, block_idx),
            timestamp=tv_sec * NANOS_PER_SECOND + tv_nsec,
            kind=kind,
        )


def extract_events(text: str) -> List[Event]:
    """Extract all events from a text block."""
    return list(iter_events(text))
