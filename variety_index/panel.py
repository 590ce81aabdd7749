"""Input boundary for the cleaned employment panel.

The panel arrives already cleaned: one employment count per
(year, region, industry) with positive values only.  This module does not
clean anything; it checks that the guarantees hold before the variety
computation relies on them, and converts between record objects and the
DataFrame form the rest of the package works on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import pandas as pd

from .config import (
    CODE_2DIGIT_LEN,
    EMPLOYMENT,
    INDUSTRY,
    PANEL_COLUMNS,
    REGION,
    YEAR,
)
from .errors import DegenerateIndustryLabelError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmploymentRecord:
    """Employment attributed to one (year, region, industry) triple."""

    year: int
    region: str
    industry: str
    employment: float


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def records_to_frame(records: Iterable[EmploymentRecord]) -> pd.DataFrame:
    """Build a panel DataFrame from employment records."""
    rows = [
        {
            YEAR: rec.year,
            REGION: rec.region,
            INDUSTRY: rec.industry,
            EMPLOYMENT: rec.employment,
        }
        for rec in records
    ]
    return pd.DataFrame(rows, columns=PANEL_COLUMNS)


def frame_to_records(df: pd.DataFrame) -> List[EmploymentRecord]:
    ensure_columns(df, PANEL_COLUMNS)
    return [
        EmploymentRecord(
            year=int(year),
            region=str(region),
            industry=str(industry),
            employment=float(employment),
        )
        for year, region, industry, employment in df[PANEL_COLUMNS].itertuples(
            index=False, name=None
        )
    ]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def ensure_columns(df: pd.DataFrame, required: List[str]) -> None:
    """Raise an error if the DataFrame lacks any of the required columns."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise KeyError(f"Missing expected columns: {missing}")


def filter_years(
    df: pd.DataFrame,
    year_min: Optional[int],
    year_max: Optional[int],
    *,
    year_col: str = YEAR,
) -> pd.DataFrame:
    """Return a DataFrame filtered to the inclusive year range.

    Parameters
    ----------
    df : pd.DataFrame
        Input data containing a column with year values.
    year_min : Optional[int]
        Lower bound (inclusive); ``None`` leaves the lower bound unbounded.
    year_max : Optional[int]
        Upper bound (inclusive); ``None`` leaves the upper bound unbounded.
    year_col : str
        Name of the column in ``df`` holding year values.

    Returns
    -------
    pd.DataFrame
        A new DataFrame containing only rows where ``year_col`` lies
        between ``year_min`` and ``year_max``.
    """
    if year_min is not None and year_max is not None and year_min > year_max:
        raise ValueError(f"year_min {year_min} is greater than year_max {year_max}.")
    if year_min is None and year_max is None:
        return df.copy()
    mask = pd.Series(True, index=df.index, dtype=bool)
    if year_min is not None:
        mask &= df[year_col] >= year_min
    if year_max is not None:
        mask &= df[year_col] <= year_max
    return df.loc[mask].copy()


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_panel(df: pd.DataFrame) -> None:
    """Check the cleaned-panel guarantees, raising on the first violation.

    Raises
    ------
    KeyError
        If a panel column is missing.
    ValueError
        On missing values, non-positive employment or empty region names.
    DegenerateIndustryLabelError
        On empty industry labels.
    """
    ensure_columns(df, PANEL_COLUMNS)

    null_counts = df[PANEL_COLUMNS].isna().sum()
    null_counts = null_counts[null_counts > 0]
    if not null_counts.empty:
        raise ValueError(f"Panel contains missing values: {null_counts.to_dict()}")

    employment = pd.to_numeric(df[EMPLOYMENT], errors="raise")
    non_positive = int((employment <= 0).sum())
    if non_positive:
        raise ValueError(
            f"Panel contains {non_positive} rows with non-positive employment."
        )

    regions = df[REGION].astype(str).str.strip()
    if (regions == "").any():
        raise ValueError("Panel contains empty region names.")

    labels = df[INDUSTRY].astype(str).str.strip()
    lengths = labels.str.len()
    if (lengths == 0).any():
        raise DegenerateIndustryLabelError(
            f"Panel contains {int((lengths == 0).sum())} empty industry labels."
        )
    short = labels[lengths < CODE_2DIGIT_LEN].unique()
    if len(short):
        logger.warning(
            "Industry labels shorter than %d characters use the full label as "
            "their 2-digit code: %s",
            CODE_2DIGIT_LEN,
            list(short)[:10],
        )


def consolidate_duplicates(df: pd.DataFrame) -> pd.DataFrame:
    """Sum repeated (year, region, industry) rows into a single row."""
    grouped = df.groupby([YEAR, REGION, INDUSTRY], as_index=False, sort=True)[
        EMPLOYMENT
    ].sum()
    merged = len(df) - len(grouped)
    if merged:
        logger.warning(
            "Summed %d duplicate (year, region, industry) rows into existing rows.",
            merged,
        )
    return grouped


def prepare_panel(
    df: pd.DataFrame,
    *,
    year_min: Optional[int] = None,
    year_max: Optional[int] = None,
) -> pd.DataFrame:
    """Validate the panel and return a typed, deduplicated copy.

    Parameters
    ----------
    df : pd.DataFrame
        Cleaned panel with ``year``, ``region``, ``industry`` and
        ``employment`` columns.  Extra columns are ignored.
    year_min, year_max : Optional[int], optional
        Inclusive bounds on the years to keep.

    Returns
    -------
    pd.DataFrame
        Panel restricted to the panel columns, with integer years, trimmed
        string labels and float employment, one row per
        (year, region, industry).
    """
    validate_panel(df)

    panel = df[PANEL_COLUMNS].copy()
    panel[YEAR] = panel[YEAR].astype(int)
    panel[REGION] = panel[REGION].astype(str).str.strip()
    panel[INDUSTRY] = panel[INDUSTRY].astype(str).str.strip()
    panel[EMPLOYMENT] = panel[EMPLOYMENT].astype(float)

    panel = filter_years(panel, year_min, year_max, year_col=YEAR)
    logger.debug("Panel rows after year filter: %d", len(panel))
    return consolidate_duplicates(panel)
