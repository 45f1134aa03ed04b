"""FastAPI server for cachechurn."""

from dataclasses import asdict

from fastapi import FastAPI, HTTPException

from cachechurn import Analysis, CacheChurnError, __version__, analyze
from cachechurn.models import CorrelationResult, Event
from cachechurn.report import format_correlation, format_event

from .models import (
    AnalyzeRequest,
    AnalyzeResponse,
    CorrelationRecord,
    DeltaStatsRecord,
    EventRecord,
    TallyRecord,
)

app = FastAPI(
    title="cachechurn",
    description="Block cache eviction and miss correlation",
    version=__version__,
)


def _event_record(event: Event) -> EventRecord:
    return EventRecord(
        sst_id=event.key.sst_id,
        block_idx=event.key.block_idx,
        timestamp_ns=event.timestamp,
        kind=event.kind,
        line=format_event(event),
    )


def _correlation_record(
    result: CorrelationResult, analysis: Analysis
) -> CorrelationRecord:
    event = result.event
    return CorrelationRecord(
        sst_id=event.key.sst_id,
        block_idx=event.key.block_idx,
        miss_time_ns=event.timestamp,
        evicted_time_ns=analysis.eviction_index.get(event.key),
        outcome=result.outcome,
        delta_ns=result.signed_delta,
        bucket=result.bucket,
        line=format_correlation(result),
    )


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/api/analyze", response_model=AnalyzeResponse)
def analyze_blocks(request: AnalyzeRequest):
    """
    Extract events from the submitted blocks and correlate misses.

    Returns the sorted events, one correlation per miss, and the tally.
    """
    try:
        analysis = analyze(request.blocks, request.short_threshold_s)
        events = [_event_record(e) for e in analysis.events]
        correlations = [_correlation_record(r, analysis) for r in analysis.results]
    except CacheChurnError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return AnalyzeResponse(
        events=events,
        correlations=correlations,
        tally=TallyRecord(**asdict(analysis.tally)),
        stats=DeltaStatsRecord(**asdict(analysis.stats)),
    )


def main():
    """Run the server."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8765)


if __name__ == "__main__":
    main()
