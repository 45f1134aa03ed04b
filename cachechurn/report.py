"""Text rendering of events and correlation results."""

import logging
from datetime import datetime
from typing import Iterable, Iterator, Sequence

from .errors import NumericOverflow
from .models import (
    NANOS_PER_SECOND,
    Bucket,
    CorrelationResult,
    Event,
    Outcome,
    OutcomeTally,
)

logger = logging.getLogger(__name__)

SHORT_MARKER = "!!!!!!!!!!"
WRITE_BUFFER_SIZE = 64 * 1024


def format_fraction(nanos: int) -> str:
    """Sub-second part with a leading dot, using 0, 3, 6 or 9 digits."""
    if nanos == 0:
        return ""
    if nanos % 1_000_000 == 0:
        return f".{nanos // 1_000_000:03d}"
    if nanos % 1_000 == 0:
        return f".{nanos // 1_000:06d}"
    return f".{nanos:09d}"


def format_timestamp(timestamp: int) -> str:
    """Render epoch nanoseconds as local time with sub-second precision."""
    seconds, nanos = divmod(timestamp, NANOS_PER_SECOND)
    try:
        moment = datetime.fromtimestamp(seconds)
    except (OverflowError, OSError, ValueError):
        raise NumericOverflow("tv_sec", str(seconds)) from None
    return moment.strftime("%Y-%m-%d %H:%M:%S") + format_fraction(nanos)


def format_duration(nanos: int) -> str:
    """Render a duration the way ``5s``, ``1.5ms`` or ``7ns`` read."""
    seconds, rest = divmod(nanos, NANOS_PER_SECOND)
    if seconds:
        whole, frac, width, unit = seconds, rest, 9, "s"
    elif rest >= 1_000_000:
        whole, frac = divmod(rest, 1_000_000)
        width, unit = 6, "ms"
    elif rest >= 1_000:
        whole, frac = divmod(rest, 1_000)
        width, unit = 3, "µs"
    else:
        return f"{rest}ns"
    text = str(whole)
    if frac:
        text += "." + f"{frac:0{width}d}".rstrip("0")
    return text + unit


def format_event(event: Event) -> str:
    return f"{event.key}, {format_timestamp(event.timestamp)}, {event.kind.value}"


def format_correlation(result: CorrelationResult) -> str:
    """One duration report line for a correlated miss."""
    key = result.event.key
    miss = format_timestamp(result.event.timestamp)
    if result.outcome == Outcome.UNMATCHED:
        return f"{key}, miss time: {miss}, No evicted time found"
    delta = format_duration(result.delta)
    if result.outcome == Outcome.INVERTED:
        return f"{key}, delta: -{delta}, miss time: {miss}"
    suffix = SHORT_MARKER if result.bucket == Bucket.SHORT else ""
    return f"{key}, delta: {delta}, miss time: {miss} {suffix}"


def duration_lines(
    results: Iterable[CorrelationResult], tally: OutcomeTally
) -> Iterator[str]:
    for result in results:
        yield format_correlation(result)
    yield str(tally)


def write_events_report(
    path: str, events: Sequence[Event], progress_interval: int = 10000
) -> None:
    """Write one line per event, in the given order."""
    with open(path, "w", encoding="utf-8", buffering=WRITE_BUFFER_SIZE) as f:
        for row, event in enumerate(events):
            f.write(format_event(event) + "\n")
            if row % progress_interval == 0:
                logger.info("Written %d records", row)


def write_duration_report(
    path: str, results: Iterable[CorrelationResult], tally: OutcomeTally
) -> None:
    """Write the per-miss delta lines followed by the tally line."""
    with open(path, "w", encoding="utf-8") as f:
        for line in duration_lines(results, tally):
            f.write(line + "\n")
