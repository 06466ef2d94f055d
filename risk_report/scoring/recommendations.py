"""
Score bands and the advisory strings attached to them.

Category thresholds (lower bound inclusive)
-------------------------------------------
    score <  35        -> Conservative
    35 <= score < 65   -> Moderate
    score >= 65        -> Aggressive

The recommendation list is a function of the score alone, never of
individual answers.
"""

from __future__ import annotations

from risk_report.taxonomy.risk_taxonomy import RiskCategory

MODERATE_THRESHOLD   = 35
AGGRESSIVE_THRESHOLD = 65

RECOMMENDATIONS: dict[RiskCategory, tuple[str, ...]] = {
    RiskCategory.CONSERVATIVE: (
        "Consider a portfolio focused on capital preservation with high-quality "
        "bonds and dividend stocks",
        "Maintain a larger emergency fund for financial security",
        "Look into Principal Protection Accounts to ensure safety of principal",
        "Focus on stable, income-producing investments",
    ),
    RiskCategory.MODERATE: (
        "Consider a balanced portfolio with a mix of stocks and bonds",
        "Diversify across multiple asset classes including Principal Protection Accounts",
        "Look into index funds for steady market exposure",
        "Maintain a moderate emergency fund while pursuing growth opportunities",
    ),
    RiskCategory.AGGRESSIVE: (
        "Consider a growth-oriented portfolio with higher allocation to stocks",
        "Look into emerging markets and small-cap investments for higher potential returns",
        "Consider Principal Protection Accounts to help offset downside risk",
        "Be prepared for higher volatility while pursuing long-term growth",
    ),
}


def categorize(score: int) -> RiskCategory:
    """Map a normalized score to its ``RiskCategory``."""
    if score < MODERATE_THRESHOLD:
        return RiskCategory.CONSERVATIVE
    if score < AGGRESSIVE_THRESHOLD:
        return RiskCategory.MODERATE
    return RiskCategory.AGGRESSIVE


def generate_recommendations(score: int) -> tuple[str, ...]:
    """Return the four advisory strings for ``score``'s band, in fixed order."""
    return RECOMMENDATIONS[categorize(score)]
