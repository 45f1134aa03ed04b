"""Command line entry point for analyzing a directory of cache log dumps."""

import argparse
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from . import Analysis, analyze_events
from .errors import CacheChurnError
from .extraction import extract_events
from .models import AnalyzerConfig
from .report import write_duration_report, write_events_report
from .sources import find_csv_files, read_blocks
from .timeline import EventAggregator

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cachechurn",
        description="Correlate block cache misses with prior evictions.",
    )
    parser.add_argument("dir", help="Directory containing CSV log dumps")
    parser.add_argument("-o", "--out", default="out.txt", help="Events report")
    parser.add_argument(
        "-d", "--duration", default="duration.txt", help="Duration report"
    )
    parser.add_argument(
        "--short-threshold",
        type=float,
        default=10.0,
        help="Seconds below which a re-request counts as short",
    )
    parser.add_argument(
        "--progress-interval",
        type=int,
        default=10000,
        help="Log progress every N records",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run(config: AnalyzerConfig) -> Analysis:
    """Analyze every CSV file in the configured directory and write reports."""
    aggregator = EventAggregator(config.progress_interval)
    for path in find_csv_files(config.directory):
        logger.debug("Reading %s", path)
        for block in read_blocks(path):
            aggregator.add(extract_events(block))

    logger.info("Sorting...")
    analysis = analyze_events(aggregator.drain(), config.short_threshold_s)

    write_events_report(config.events_path, analysis.events, config.progress_interval)
    write_duration_report(config.duration_path, analysis.results, analysis.tally)

    stats = analysis.stats
    if stats.count:
        logger.info(
            "Resolved deltas (s): min %.3f, p50 %.3f, p90 %.3f, p99 %.3f, max %.3f",
            stats.min_s,
            stats.median_s,
            stats.p90_s,
            stats.p99_s,
            stats.max_s,
        )
    logger.info("%s", analysis.tally)
    logger.info("Done. Total records: %d", len(analysis.events))
    return analysis


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    try:
        config = AnalyzerConfig(
            directory=args.dir,
            events_path=args.out,
            duration_path=args.duration,
            short_threshold_s=args.short_threshold,
            progress_interval=args.progress_interval,
        )
    except ValidationError as e:
        parser.error(str(e))

    try:
        run(config)
    except CacheChurnError as e:
        logger.error("Analysis failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
