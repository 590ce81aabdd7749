"""Employment shares within each (year, region) group."""

from __future__ import annotations

import logging

import pandas as pd

from .config import (
    EMPLOYMENT,
    EMPLOYMENT_SHARE,
    GROUP_KEY,
    SHARE_TOLERANCE,
    TOTAL_EMPLOYMENT,
)
from .errors import MalformedGroupError

logger = logging.getLogger(__name__)


def group_totals(df: pd.DataFrame) -> pd.DataFrame:
    """Total employment and member count per (year, region)."""
    if df.empty:
        raise MalformedGroupError("Cannot compute group totals of an empty panel.")
    totals = df.groupby(GROUP_KEY, as_index=False, sort=True, observed=True).agg(
        **{TOTAL_EMPLOYMENT: (EMPLOYMENT, "sum"), "n_members": (EMPLOYMENT, "size")}
    )
    bad = totals[(totals[TOTAL_EMPLOYMENT] <= 0) | (totals["n_members"] == 0)]
    if not bad.empty:
        keys = list(bad[GROUP_KEY].itertuples(index=False, name=None))
        raise MalformedGroupError(
            f"Groups with zero total employment or no members: {keys[:10]}"
        )
    return totals


def compute_shares(df: pd.DataFrame) -> pd.DataFrame:
    """Annotate each record with its share of group employment.

    Parameters
    ----------
    df : pd.DataFrame
        Panel with ``year``, ``region`` and ``employment`` columns, plus any
        derived taxonomy columns.

    Returns
    -------
    pd.DataFrame
        Copy of ``df`` with ``total_employment`` and ``employment_share``
        columns added.  Shares sum to 1 within every (year, region).

    Raises
    ------
    MalformedGroupError
        If the panel is empty, has missing or negative employment, or a
        group has zero total employment.
    """
    employment = df[EMPLOYMENT]
    if employment.isna().any() or (employment < 0).any():
        raise MalformedGroupError(
            f"Panel has {int(employment.isna().sum())} missing and "
            f"{int((employment < 0).sum())} negative employment values."
        )
    totals = group_totals(df)
    out = df.merge(
        totals[[*GROUP_KEY, TOTAL_EMPLOYMENT]],
        on=GROUP_KEY,
        how="left",
        validate="many_to_one",
    )
    out[EMPLOYMENT_SHARE] = out[EMPLOYMENT] / out[TOTAL_EMPLOYMENT]
    check_shares(out)
    logger.debug("Computed shares for %d groups", len(totals))
    return out


def check_shares(df: pd.DataFrame, tolerance: float = SHARE_TOLERANCE) -> None:
    """Raise if any share is missing or a group's shares do not sum to 1."""
    n_missing = int(df[EMPLOYMENT_SHARE].isna().sum())
    if n_missing:
        raise MalformedGroupError(f"{n_missing} employment shares are missing.")
    sums = df.groupby(GROUP_KEY, sort=True, observed=True)[EMPLOYMENT_SHARE].sum()
    off = sums[(sums - 1.0).abs() > tolerance]
    if not off.empty:
        raise MalformedGroupError(
            f"Employment shares do not sum to 1 for groups: {off.to_dict()}"
        )
