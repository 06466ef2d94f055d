"""Tests for risk_report/scoring/recommendations.py."""

from __future__ import annotations

import pytest

from risk_report.scoring.recommendations import (
    AGGRESSIVE_THRESHOLD,
    MODERATE_THRESHOLD,
    RECOMMENDATIONS,
    categorize,
    generate_recommendations,
)
from risk_report.taxonomy.risk_taxonomy import RiskCategory


def test_score_20_gets_conservative_list() -> None:
    recs = generate_recommendations(20)
    assert recs[0] == (
        "Consider a portfolio focused on capital preservation with high-quality "
        "bonds and dividend stocks"
    )
    assert recs == RECOMMENDATIONS[RiskCategory.CONSERVATIVE]


@pytest.mark.parametrize(
    "score, category",
    [
        (34, RiskCategory.CONSERVATIVE),
        (35, RiskCategory.MODERATE),
        (64, RiskCategory.MODERATE),
        (65, RiskCategory.AGGRESSIVE),
    ],
)
def test_band_edges(score: int, category: RiskCategory) -> None:
    assert generate_recommendations(score) == RECOMMENDATIONS[category]


def test_every_category_has_four_distinct_items() -> None:
    for category in RiskCategory:
        recs = RECOMMENDATIONS[category]
        assert len(recs) == 4
        assert len(set(recs)) == 4


def test_same_score_same_list() -> None:
    assert generate_recommendations(50) is generate_recommendations(50)


def test_categorize_uses_band_thresholds() -> None:
    assert categorize(MODERATE_THRESHOLD - 1) is RiskCategory.CONSERVATIVE
    assert categorize(MODERATE_THRESHOLD) is RiskCategory.MODERATE
    assert categorize(AGGRESSIVE_THRESHOLD) is RiskCategory.AGGRESSIVE
