from math import log2

import pandas as pd
import pytest

from variety_index.errors import MalformedGroupError
from variety_index.shares import compute_shares
from variety_index.taxonomy import attach_codes
from variety_index.variety import (
    compute_measures,
    related_variety,
    shannon_entropy,
    total_variety,
    unrelated_variety,
    within_group_entropy,
)


def _shares(panel):
    return compute_shares(attach_codes(panel))


def _h(*probs):
    return -sum(p * log2(p) for p in probs)


# ---------------------------------------------------------------------------
# Entropy primitives
# ---------------------------------------------------------------------------


def test_shannon_entropy_uniform():
    assert shannon_entropy([0.25] * 4) == pytest.approx(2.0)


def test_shannon_entropy_skips_zero_terms():
    assert shannon_entropy([0.5, 0.5, 0.0]) == pytest.approx(1.0)


def test_shannon_entropy_concentrated_is_zero():
    assert shannon_entropy([1.0]) == 0.0


def test_shannon_entropy_empty_raises():
    with pytest.raises(MalformedGroupError):
        shannon_entropy([])


def test_within_group_entropy_singleton_is_zero():
    assert within_group_entropy([0.37]) == 0.0


def test_within_group_entropy_renormalises():
    # members 0.3 and 0.1 of a 0.4 group -> within shares 0.75 / 0.25
    assert within_group_entropy([0.3, 0.1]) == pytest.approx(_h(0.75, 0.25))


def test_within_group_entropy_empty_raises():
    with pytest.raises(MalformedGroupError):
        within_group_entropy([])


# ---------------------------------------------------------------------------
# Measures
# ---------------------------------------------------------------------------


def test_two_industry_scenario(two_industry_panel):
    measures = compute_measures(_shares(two_industry_panel))
    key = (2020, "A")
    assert measures["total_variety"][key] == pytest.approx(_h(0.6, 0.4))
    assert measures["total_variety"][key] == pytest.approx(0.9710, abs=1e-4)
    assert measures["unrelated_variety"][key] == pytest.approx(0.0, abs=1e-12)
    assert measures["related_variety"][key] == pytest.approx(0.0, abs=1e-12)


def test_concentrated_vs_even_regions(concentrated_vs_even_panel):
    shares = _shares(concentrated_vs_even_panel)
    total = total_variety(shares)
    related = related_variety(shares)
    unrelated = unrelated_variety(shares)

    assert total[(2021, "Mono")] == pytest.approx(0.0, abs=1e-12)
    assert related[(2021, "Mono")] == pytest.approx(0.0, abs=1e-12)
    assert unrelated[(2021, "Mono")] == pytest.approx(0.0, abs=1e-12)

    assert total[(2021, "Even")] == pytest.approx(2.0)
    assert related[(2021, "Even")] == pytest.approx(2.0)
    assert unrelated[(2021, "Even")] == pytest.approx(0.0, abs=1e-12)


def test_related_variety_weights_within_entropy(mixed_panel):
    related = related_variety(_shares(mixed_panel))
    # 2019 North: "11" = {0.4, 0.1}, "21" singleton, "45" = {0.25, 1/12}
    expected = 0.5 * _h(0.8, 0.2) + (1 / 3) * _h(0.75, 0.25)
    assert related[(2019, "North")] == pytest.approx(expected)


def test_unrelated_variety_over_sectors(mixed_panel):
    unrelated = unrelated_variety(_shares(mixed_panel))
    assert unrelated[(2019, "North")] == pytest.approx(_h(0.5, 1 / 6, 1 / 3))
    assert unrelated[(2020, "North")] == pytest.approx(1.0)


def test_single_industry_group_is_zero_everywhere():
    panel = pd.DataFrame(
        {"year": [2018], "region": ["X"], "industry": ["7 Finance"], "employment": [3.0]}
    )
    measures = compute_measures(_shares(panel))
    for series in measures.values():
        assert series[(2018, "X")] == 0.0


def test_uniform_shares_give_log2_n():
    industries = ["11 a", "23 b", "35 c", "47 d", "59 e"]
    panel = pd.DataFrame(
        {
            "year": [2022] * 5,
            "region": ["U"] * 5,
            "industry": industries,
            "employment": [7.0] * 5,
        }
    )
    total = total_variety(_shares(panel))
    assert total[(2022, "U")] == pytest.approx(log2(5))


def test_measures_respect_upper_bounds(mixed_panel):
    shares = _shares(mixed_panel)
    measures = compute_measures(shares)
    counts = shares.groupby(["year", "region"]).agg(
        n_industries=("industry", "nunique"), n_sectors=("code_1digit", "nunique")
    )
    for key, row in counts.iterrows():
        total = measures["total_variety"][key]
        related = measures["related_variety"][key]
        unrelated = measures["unrelated_variety"][key]
        assert 0.0 <= total <= log2(row["n_industries"]) + 1e-12
        assert 0.0 <= unrelated <= log2(row["n_sectors"]) + 1e-12
        assert 0.0 <= related <= total + 1e-12
        assert unrelated <= total + 1e-12


def test_measures_share_identical_keys(mixed_panel):
    measures = compute_measures(_shares(mixed_panel))
    keys = [list(series.index) for series in measures.values()]
    assert keys[0] == keys[1] == keys[2]
    assert keys[0] == [(2019, "North"), (2019, "South"), (2020, "North"), (2020, "South")]


def test_empty_share_table_raises():
    empty = pd.DataFrame(
        columns=["year", "region", "industry", "code_1digit", "code_2digit", "employment_share"]
    )
    with pytest.raises(MalformedGroupError):
        related_variety(empty)
    with pytest.raises(MalformedGroupError):
        total_variety(empty)


def test_missing_taxonomy_column_raises(two_industry_panel):
    shares = compute_shares(two_industry_panel)
    with pytest.raises(KeyError):
        related_variety(shares)


def test_industry_split_across_rows_is_one_member():
    panel = pd.DataFrame(
        {
            "year": [2020, 2020],
            "region": ["A", "A"],
            "industry": ["11 Crops", "11 Crops"],
            "employment": [50.0, 50.0],
        }
    )
    measures = compute_measures(_shares(panel))
    assert measures["related_variety"][(2020, "A")] == 0.0
    assert measures["total_variety"][(2020, "A")] == 0.0


def test_split_rows_match_consolidated_rows(mixed_panel):
    split = pd.concat([mixed_panel, mixed_panel], ignore_index=True)
    split["employment"] = split["employment"] / 2
    from_split = related_variety(_shares(split))
    from_whole = related_variety(_shares(mixed_panel))
    pd.testing.assert_series_equal(from_split, from_whole)
    assert (from_split <= total_variety(_shares(split)) + 1e-12).all()


@pytest.mark.parametrize("probs", [[float("nan")], [float("nan"), 0.5], [1.2, -0.2]])
def test_shannon_entropy_rejects_nan_and_negative(probs):
    with pytest.raises(MalformedGroupError):
        shannon_entropy(probs)


def test_within_group_entropy_rejects_nan_singleton():
    with pytest.raises(MalformedGroupError):
        within_group_entropy([float("nan")])


def test_measures_reject_missing_shares(two_industry_panel):
    shares = _shares(two_industry_panel)
    shares.loc[0, "employment_share"] = float("nan")
    with pytest.raises(MalformedGroupError):
        total_variety(shares)
    with pytest.raises(MalformedGroupError):
        related_variety(shares)
