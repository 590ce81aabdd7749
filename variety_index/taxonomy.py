"""Industry taxonomy levels derived by truncating the industry label.

Only two fixed levels exist: the 1-digit sector and the 2-digit division.
Both are plain projections of the label's leading characters.  A label
with a single character has no second digit; its 2-digit code is the
whole label, so it forms a 2-digit group of its own.
"""

from __future__ import annotations

from typing import Tuple

import pandas as pd

from .config import CODE_1DIGIT, CODE_1DIGIT_LEN, CODE_2DIGIT, CODE_2DIGIT_LEN, INDUSTRY
from .errors import DegenerateIndustryLabelError


def _prefix(industry: str, length: int) -> str:
    label = str(industry).strip()
    if not label:
        raise DegenerateIndustryLabelError(
            f"Cannot derive a taxonomy code from empty label {industry!r}."
        )
    return label[:length]


def code_1digit(industry: str) -> str:
    """Return the 1-digit sector code of an industry label."""
    return _prefix(industry, CODE_1DIGIT_LEN)


def code_2digit(industry: str) -> str:
    """Return the 2-digit division code; the whole label if it is shorter."""
    return _prefix(industry, CODE_2DIGIT_LEN)


def resolve_codes(industry: str) -> Tuple[str, str]:
    """Return ``(code_1digit, code_2digit)`` for an industry label."""
    return code_1digit(industry), code_2digit(industry)


def attach_codes(df: pd.DataFrame, *, industry_col: str = INDUSTRY) -> pd.DataFrame:
    """
    Add ``code_1digit`` and ``code_2digit`` columns to a panel.

    Uses the same truncation rule as :func:`resolve_codes`, vectorised over
    the industry column.  The input frame is not modified.
    """
    df = df.copy()
    labels = df[industry_col].astype(str).str.strip()
    if (labels.str.len() == 0).any():
        raise DegenerateIndustryLabelError(
            "Cannot derive taxonomy codes from empty industry labels."
        )
    df[CODE_1DIGIT] = labels.str[:CODE_1DIGIT_LEN]
    df[CODE_2DIGIT] = labels.str[:CODE_2DIGIT_LEN]
    return df
