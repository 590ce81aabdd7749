"""Join the per-group measures into one index row per (year, region).

The three measures are always computed over the same share table, so
their key sets are identical.  The join checks this instead of assuming
it: a key missing from any measure raises :class:`MissingMeasureError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from .config import (
    GROUP_KEY,
    MEASURE_COLUMNS,
    OUTPUT_COLUMNS,
    REGION,
    RELATED_VARIETY,
    TOTAL_VARIETY,
    UNRELATED_VARIETY,
    YEAR,
)
from .errors import MissingMeasureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VarietyIndexRecord:
    """Variety indexes of one (year, region) group."""

    year: int
    region: str
    related_variety: float
    unrelated_variety: float
    total_variety: float


def _check_key_sets(measures: Dict[str, pd.Series]) -> None:
    missing_names = [name for name in MEASURE_COLUMNS if name not in measures]
    if missing_names:
        raise MissingMeasureError(f"Measures not computed: {missing_names}")

    all_keys = set()
    for series in measures.values():
        all_keys |= set(series.index)
    for name in MEASURE_COLUMNS:
        absent = all_keys - set(measures[name].index)
        if absent:
            raise MissingMeasureError(
                f"{name} is missing for {len(absent)} (year, region) keys: "
                f"{sorted(absent)[:10]}"
            )


def assemble_indexes(measures: Dict[str, pd.Series]) -> pd.DataFrame:
    """
    Combine the measure series into the output table.

    Parameters
    ----------
    measures : Dict[str, pd.Series]
        Mapping of measure name to a Series indexed by ``(year, region)``,
        as returned by :func:`variety_index.variety.compute_measures`.

    Returns
    -------
    pd.DataFrame
        Columns ``year``, ``region``, ``related_variety``,
        ``unrelated_variety``, ``total_variety``; one row per group,
        sorted by ``(year, region)``.
    """
    _check_key_sets(measures)

    combined = pd.concat(
        [measures[name].rename(name) for name in MEASURE_COLUMNS],
        axis=1,
        join="outer",
    )
    if combined.isna().any().any():
        raise MissingMeasureError("Measure values are missing after the join.")

    combined.index = combined.index.set_names(GROUP_KEY)
    out = combined.reset_index().sort_values(GROUP_KEY, ignore_index=True)
    logger.debug("Assembled %d index rows", len(out))
    return out[OUTPUT_COLUMNS]


def to_records(df: pd.DataFrame) -> List[VarietyIndexRecord]:
    """Convert the output table to :class:`VarietyIndexRecord` objects."""
    return [
        VarietyIndexRecord(
            year=int(row[YEAR]),
            region=str(row[REGION]),
            related_variety=float(row[RELATED_VARIETY]),
            unrelated_variety=float(row[UNRELATED_VARIETY]),
            total_variety=float(row[TOTAL_VARIETY]),
        )
        for row in df[OUTPUT_COLUMNS].to_dict(orient="records")
    ]
