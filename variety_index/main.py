"""
Command-line driver: read an already-cleaned employment panel from CSV,
compute the regional variety indexes and print a summary.

Nothing is written to disk; callers that need the table should use
:func:`variety_index.pipeline.run_pipeline` directly.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import DEFAULT_SEP, DEFAULT_YEAR_RANGE, LOG_FORMAT, LOG_LEVEL
from .pipeline import run_pipeline


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_panel(source: str | Path, sep: str = DEFAULT_SEP) -> pd.DataFrame:
    """Load a cleaned panel CSV."""
    return pd.read_csv(source, sep=sep)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute Related, Unrelated and Total Variety per year and region."
    )
    parser.add_argument(
        "--source",
        required=True,
        help="Path or URL to a cleaned panel CSV with year, region, industry, employment.",
    )
    parser.add_argument(
        "--sep",
        default=DEFAULT_SEP,
        help=f"Delimiter used in the panel file (default: '{DEFAULT_SEP}').",
    )
    parser.add_argument(
        "--year-min",
        type=int,
        default=DEFAULT_YEAR_RANGE[0],
        help="Lower bound year to keep (default: all years).",
    )
    parser.add_argument(
        "--year-max",
        type=int,
        default=DEFAULT_YEAR_RANGE[1],
        help="Upper bound year to keep (default: all years).",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help=f"Logging level (default: {LOG_LEVEL}, env VARIETY_LOG_LEVEL).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> pd.DataFrame:
    args = parse_args(argv)
    configure_logging(args.log_level.upper())

    panel = load_panel(args.source, sep=args.sep)
    indexes = run_pipeline(panel, year_min=args.year_min, year_max=args.year_max)

    print("\n--- VARIETY INDEXES COMPLETE ---")
    if indexes.empty:
        print("No region-years in the selected range.")
        return indexes
    print(
        f"Years: {indexes['year'].min()}–{indexes['year'].max()} | "
        f"Regions: {indexes['region'].nunique()} | Rows: {len(indexes)}"
    )
    print("\nHead:")
    print(indexes.head(8))
    return indexes


if __name__ == "__main__":
    main()
