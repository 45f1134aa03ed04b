"""Shared pytest fixtures for cachechurn tests."""

import pytest

from cachechurn.extraction import EVICTED_MARKER, MISSED_MARKER
from cachechurn.models import NANOS_PER_SECOND, BlockKey, Event, EventKind


@pytest.fixture
def event_line():
    """Format a single event line as it appears in a cache dump."""

    def _create(sst_id: int, block_idx: int, tv_sec: int, tv_nsec: int = 0) -> str:
        return (
            f"SstableBlockIndex {{ sst_id: {sst_id}, block_idx: {block_idx} }}, "
            f"SystemTime {{ tv_sec: {tv_sec}, tv_nsec: {tv_nsec} }}"
        )

    return _create


@pytest.fixture
def evicted_block(event_line):
    """Create an evicted section from (sst_id, block_idx, tv_sec[, tv_nsec])."""

    def _create(*entries) -> str:
        lines = [EVICTED_MARKER] + [event_line(*entry) for entry in entries]
        return "\n".join(lines)

    return _create


@pytest.fixture
def missed_block(event_line):
    """Create a missed section from (sst_id, block_idx, tv_sec[, tv_nsec])."""

    def _create(*entries) -> str:
        lines = [MISSED_MARKER] + [event_line(*entry) for entry in entries]
        return "\n".join(lines)

    return _create


@pytest.fixture
def make_event():
    """Build an Event at a time given in seconds."""

    def _create(kind: EventKind, sst_id: int, block_idx: int, seconds: float) -> Event:
        return Event(
            key=BlockKey(sst_id, block_idx),
            timestamp=int(seconds * NANOS_PER_SECOND),
            kind=kind,
        )

    return _create
