"""Entropy-based variety measures per (year, region).

All three measures read the same share table (output of
:func:`variety_index.shares.compute_shares` on a panel carrying taxonomy
codes) and are computed independently of each other:

* **Related Variety**: entropy of industries within each 2-digit group,
  weighted by the group's share of regional employment.
* **Unrelated Variety**: entropy of employment across 1-digit groups.
* **Total Variety**: entropy of employment across individual industries.

Entropies use base-2 logarithms.  Zero-probability terms contribute 0 and
``log2(0)`` is never evaluated.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable

import numpy as np
import pandas as pd

from .config import (
    CODE_1DIGIT,
    CODE_2DIGIT,
    EMPLOYMENT_SHARE,
    GROUP_KEY,
    INDUSTRY,
    RELATED_VARIETY,
    TOTAL_VARIETY,
    UNRELATED_VARIETY,
)
from .errors import MalformedGroupError
from .panel import ensure_columns

logger = logging.getLogger(__name__)

# Within-group share column used by the related variety decomposition
GROUP_SHARE: str = "group_share"
WITHIN_ENTROPY: str = "within_entropy"


# ---------------------------------------------------------------------------
# Entropy primitives
# ---------------------------------------------------------------------------


def _as_probabilities(values: Iterable[float]) -> np.ndarray:
    p = np.asarray(list(values), dtype=float)
    if p.size == 0:
        raise MalformedGroupError("Cannot compute entropy of an empty distribution.")
    if np.isnan(p).any() or (p < 0).any():
        raise MalformedGroupError(f"Distribution has NaN or negative terms: {p.tolist()}")
    return p


def shannon_entropy(probabilities: Iterable[float]) -> float:
    """Base-2 Shannon entropy ``-sum(p * log2(p))``.

    Zero terms are skipped; NaN or negative terms raise.  Rounding noise
    that would push the result below zero is clamped to 0.
    """
    p = _as_probabilities(probabilities)
    p = p[p > 0]
    entropy = -np.sum(p * np.log2(p))
    return float(entropy) if entropy > 0 else 0.0


def within_group_entropy(member_shares: Iterable[float]) -> float:
    """Entropy of members inside one 2-digit group.

    Member shares are renormalised by the group's total share before the
    entropy is taken.  A group with a single member has entropy 0.
    """
    shares = _as_probabilities(member_shares)
    if shares.size == 1:
        return 0.0
    group_share = shares.sum()
    if group_share <= 0:
        raise MalformedGroupError("2-digit group has zero total share.")
    return shannon_entropy(shares / group_share)


def _require_groups(df: pd.DataFrame, columns: list) -> None:
    ensure_columns(df, columns)
    if df.empty:
        raise MalformedGroupError("Share table has no (year, region) groups.")
    n_missing = int(df[EMPLOYMENT_SHARE].isna().sum())
    if n_missing:
        raise MalformedGroupError(f"Share table has {n_missing} missing shares.")


# ---------------------------------------------------------------------------
# Measures
# ---------------------------------------------------------------------------


def related_variety(shares: pd.DataFrame) -> pd.Series:
    """Related Variety per (year, region).

    Parameters
    ----------
    shares : pd.DataFrame
        Share table with ``year``, ``region``, ``industry``,
        ``code_2digit`` and ``employment_share`` columns.  Rows of the
        same industry are summed into one member.

    Returns
    -------
    pd.Series
        ``related_variety`` indexed by ``(year, region)``.
    """
    _require_groups(shares, [*GROUP_KEY, CODE_2DIGIT, INDUSTRY, EMPLOYMENT_SHARE])
    # one member per industry, even if an industry spans several rows
    industry_shares = shares.groupby(
        [*GROUP_KEY, CODE_2DIGIT, INDUSTRY], sort=True, observed=True
    )[EMPLOYMENT_SHARE].sum()
    per_group = industry_shares.groupby(
        level=[*GROUP_KEY, CODE_2DIGIT], sort=True
    ).agg(
        **{GROUP_SHARE: "sum", WITHIN_ENTROPY: within_group_entropy}
    )
    weighted = per_group[GROUP_SHARE] * per_group[WITHIN_ENTROPY]
    return weighted.groupby(level=GROUP_KEY, sort=True).sum().rename(RELATED_VARIETY)


def unrelated_variety(shares: pd.DataFrame) -> pd.Series:
    """Unrelated Variety per (year, region): entropy across 1-digit groups."""
    _require_groups(shares, [*GROUP_KEY, CODE_1DIGIT, EMPLOYMENT_SHARE])
    sector_shares = shares.groupby(
        [*GROUP_KEY, CODE_1DIGIT], sort=True, observed=True
    )[EMPLOYMENT_SHARE].sum()
    return (
        sector_shares.groupby(level=GROUP_KEY, sort=True)
        .agg(shannon_entropy)
        .rename(UNRELATED_VARIETY)
    )


def total_variety(shares: pd.DataFrame) -> pd.Series:
    """Total Variety per (year, region): entropy across all industries."""
    _require_groups(shares, [*GROUP_KEY, INDUSTRY, EMPLOYMENT_SHARE])
    industry_shares = shares.groupby(
        [*GROUP_KEY, INDUSTRY], sort=True, observed=True
    )[EMPLOYMENT_SHARE].sum()
    return (
        industry_shares.groupby(level=GROUP_KEY, sort=True)
        .agg(shannon_entropy)
        .rename(TOTAL_VARIETY)
    )


def compute_measures(shares: pd.DataFrame) -> Dict[str, pd.Series]:
    """Run the three measures over the same share table."""
    measures = {
        RELATED_VARIETY: related_variety(shares),
        UNRELATED_VARIETY: unrelated_variety(shares),
        TOTAL_VARIETY: total_variety(shares),
    }
    logger.debug(
        "Computed measures: %s",
        {name: len(series) for name, series in measures.items()},
    )
    return measures
