"""
Configuration constants for the regional variety index pipeline.
"""

import os
from typing import List, Optional, Tuple

# ======================================================
#  PANEL COLUMNS
# ======================================================
YEAR: str = "year"
REGION: str = "region"
INDUSTRY: str = "industry"
EMPLOYMENT: str = "employment"

PANEL_COLUMNS: List[str] = [YEAR, REGION, INDUSTRY, EMPLOYMENT]
GROUP_KEY: List[str] = [YEAR, REGION]

# ======================================================
#  DERIVED COLUMNS
# ======================================================
CODE_1DIGIT: str = "code_1digit"
CODE_2DIGIT: str = "code_2digit"
TOTAL_EMPLOYMENT: str = "total_employment"
EMPLOYMENT_SHARE: str = "employment_share"

# ======================================================
#  OUTPUT MEASURES
# ======================================================
RELATED_VARIETY: str = "related_variety"
UNRELATED_VARIETY: str = "unrelated_variety"
TOTAL_VARIETY: str = "total_variety"

MEASURE_COLUMNS: List[str] = [RELATED_VARIETY, UNRELATED_VARIETY, TOTAL_VARIETY]
OUTPUT_COLUMNS: List[str] = [*GROUP_KEY, *MEASURE_COLUMNS]

# ======================================================
#  TAXONOMY / NUMERICS
# ======================================================
CODE_1DIGIT_LEN: int = 1
CODE_2DIGIT_LEN: int = 2

SHARE_TOLERANCE: float = 1e-9

DEFAULT_YEAR_RANGE: Tuple[Optional[int], Optional[int]] = (None, None)
DEFAULT_SEP: str = ","

# ======================================================
#  LOGGING
# ======================================================
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL: str = os.getenv("VARIETY_LOG_LEVEL", "INFO").upper()
