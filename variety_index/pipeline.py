"""Core pipeline: compute variety indexes from a cleaned employment panel.

The primary entry point is :func:`run_pipeline`, which takes the panel as
a DataFrame and returns one row per (year, region) with Related,
Unrelated and Total Variety.  :func:`compute_variety_indexes` does the
same for a sequence of :class:`~variety_index.panel.EmploymentRecord`.

Steps:

1. Validate the panel and restrict it to the requested years.
2. Attach 1-digit and 2-digit taxonomy codes.
3. Compute employment shares per (year, region).
4. Compute the three measures over the share table.
5. Join them into the output table.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd

from .assembler import VarietyIndexRecord, assemble_indexes, to_records
from .config import GROUP_KEY, MEASURE_COLUMNS, OUTPUT_COLUMNS, REGION, YEAR
from .panel import EmploymentRecord, prepare_panel, records_to_frame
from .shares import compute_shares
from .taxonomy import attach_codes
from .variety import compute_measures

# Module‑level logger
logger = logging.getLogger(__name__)


def run_pipeline(
    panel: pd.DataFrame,
    *,
    year_min: Optional[int] = None,
    year_max: Optional[int] = None,
) -> pd.DataFrame:
    """Run the full variety index computation.

    Parameters
    ----------
    panel : pd.DataFrame
        Cleaned employment panel with ``year``, ``region``, ``industry``
        and ``employment`` columns.
    year_min, year_max : Optional[int], optional
        Inclusive bounds on the years to include.

    Returns
    -------
    pd.DataFrame
        Columns ``year``, ``region``, ``related_variety``,
        ``unrelated_variety`` and ``total_variety`` sorted by
        ``(year, region)``.  Empty if no rows fall in the year range.
    """
    prepared = prepare_panel(panel, year_min=year_min, year_max=year_max)
    if prepared.empty:
        logger.warning(
            "No panel rows remain for years %s–%s; returning an empty table.",
            year_min,
            year_max,
        )
        return pd.DataFrame(columns=OUTPUT_COLUMNS).astype(
            {YEAR: int, REGION: str, **{m: float for m in MEASURE_COLUMNS}}
        )

    n_groups = prepared[GROUP_KEY].drop_duplicates().shape[0]
    logger.info(
        "Computing variety indexes for %d region-years (%d–%d, %d rows)",
        n_groups,
        prepared[YEAR].min(),
        prepared[YEAR].max(),
        len(prepared),
    )

    shares = compute_shares(attach_codes(prepared))
    measures = compute_measures(shares)
    indexes = assemble_indexes(measures)

    logger.info("Variety indexes complete: %d rows", len(indexes))
    return indexes


def compute_variety_indexes(
    records: Iterable[EmploymentRecord],
    *,
    year_min: Optional[int] = None,
    year_max: Optional[int] = None,
) -> List[VarietyIndexRecord]:
    """Record-level wrapper around :func:`run_pipeline`."""
    panel = records_to_frame(records)
    return to_records(run_pipeline(panel, year_min=year_min, year_max=year_max))
