"""Shared panel fixtures."""

import pandas as pd
import pytest


@pytest.fixture
def two_industry_panel():
    """Region A, 2020: two industries under 1-digit sector 1, own 2-digit codes."""
    return pd.DataFrame(
        {
            "year": [2020, 2020],
            "region": ["A", "A"],
            "industry": ["11 Crops", "12 Animal"],
            "employment": [60.0, 40.0],
        }
    )


@pytest.fixture
def concentrated_vs_even_panel():
    """Two regions with equal totals: one single industry, one split four ways."""
    return pd.DataFrame(
        {
            "year": [2021] * 5,
            "region": ["Mono", "Even", "Even", "Even", "Even"],
            "industry": ["11 Crops", "111 Wheat", "112 Barley", "113 Oats", "114 Rye"],
            "employment": [100.0, 25.0, 25.0, 25.0, 25.0],
        }
    )


@pytest.fixture
def mixed_panel():
    """Several years and regions with nested 1-digit and 2-digit groups."""
    rows = [
        (2019, "North", "111 Wheat", 120.0),
        (2019, "North", "112 Barley", 30.0),
        (2019, "North", "21 Mining", 50.0),
        (2019, "North", "451 Retail food", 75.0),
        (2019, "North", "452 Retail other", 25.0),
        (2019, "South", "31 Food mfg", 10.0),
        (2019, "South", "32 Textiles", 10.0),
        (2019, "South", "61 Telecom", 80.0),
        (2020, "North", "111 Wheat", 100.0),
        (2020, "North", "21 Mining", 100.0),
        (2020, "South", "31 Food mfg", 5.0),
        (2020, "South", "311 Bakeries", 15.0),
        (2020, "South", "61 Telecom", 40.0),
        (2020, "South", "62 Software", 40.0),
        (2020, "South", "9 Other", 1.0),
    ]
    return pd.DataFrame(rows, columns=["year", "region", "industry", "employment"])
