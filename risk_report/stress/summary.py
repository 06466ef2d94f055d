"""
Executive-summary content for a stress test.

``build_stress_summary()`` collects the category-specific narrative lists,
the worst-case figure and the historical comparisons into one
``StressSummary`` that both the PDF and the plain-text report render.
"""

from __future__ import annotations

from dataclasses import dataclass

from risk_report.models.assessment import Assessment, AssetAllocation, StressScenario
from risk_report.stress.allocation import allocate
from risk_report.stress.projector import (
    DEFAULT_PORTFOLIO_VALUE,
    project_stress_scenarios,
    round_half_up,
    worst_case_impact,
)
from risk_report.taxonomy.risk_taxonomy import RiskCategory

KEY_VULNERABILITIES: dict[RiskCategory, tuple[str, ...]] = {
    RiskCategory.CONSERVATIVE: (
        "High sensitivity to interest rate increases",
        "Inflation erosion of fixed-income returns",
        "Limited growth potential in low-rate environment",
    ),
    RiskCategory.MODERATE: (
        "Moderate equity market exposure",
        "Balanced but not optimized for extreme scenarios",
        "Interest rate sensitivity in bond allocation",
    ),
    RiskCategory.AGGRESSIVE: (
        "High equity market correlation risk",
        "Significant drawdown potential in market crashes",
        "Extended recovery periods during downturns",
    ),
}

MITIGATION_STRATEGIES: dict[RiskCategory, tuple[str, ...]] = {
    RiskCategory.CONSERVATIVE: (
        "Incorporate TIPS for inflation protection",
        "Consider floating-rate instruments",
        "Add modest equity allocation for growth",
    ),
    RiskCategory.MODERATE: (
        "Implement systematic rebalancing",
        "Add alternative investments for diversification",
        "Consider tactical hedging strategies",
    ),
    RiskCategory.AGGRESSIVE: (
        "Implement downside protection strategies",
        "Diversify across global markets",
        "Consider volatility-based hedging",
    ),
}

HEDGING_STRATEGIES: dict[str, tuple[str, ...]] = {
    "Interest Rate Protection": (
        "Floating rate bonds",
        "Treasury Inflation-Protected Securities (TIPS)",
        "Short-duration bond funds",
    ),
    "Market Downside Protection": (
        "Put options on major indices",
        "Inverse ETFs for hedging",
        "Volatility-based instruments",
    ),
    "Diversification Enhancement": (
        "International exposure",
        "Commodity allocations",
        "Real estate investment trusts",
    ),
}

ACTION_ITEMS: tuple[str, ...] = (
    "Review and potentially adjust asset allocation based on stress test results",
    "Implement recommended hedging strategies appropriate for your risk level",
    "Establish or review emergency fund adequacy (6-12 months expenses)",
    "Consider professional portfolio stress testing on a quarterly basis",
    "Develop a written investment policy statement including stress scenarios",
)

RECOVERY_PROJECTION = "24-48 months"


@dataclass(frozen=True)
class HistoricalEvent:
    """A past market crisis replayed against the model allocation.

    Attributes:
        name:             Event label.
        market_decline:   Broad market drawdown in percent.
        recovery_months:  Months the market took to recover.
        portfolio_impact: Projected impact on this allocation in percent.
    """

    name:             str
    market_decline:   float
    recovery_months:  int
    portfolio_impact: float


# (name, market decline %, recovery months, equity-scaled loss rate)
_HISTORICAL_EVENTS: tuple[tuple[str, float, int, float], ...] = (
    ("2008 Financial Crisis", -37.0, 49, -22.0),
    ("2020 COVID Crash",      -34.0,  5, -20.0),
)


def historical_context(allocation: AssetAllocation) -> list[HistoricalEvent]:
    """Replay the reference crises; impact scales with stock weight only."""
    return [
        HistoricalEvent(
            name=name,
            market_decline=decline,
            recovery_months=months,
            portfolio_impact=round_half_up(rate * allocation.stocks / 100),
        )
        for name, decline, months, rate in _HISTORICAL_EVENTS
    ]


@dataclass(frozen=True)
class StressSummary:
    """Everything the executive summary needs for one assessment."""

    assessment:          Assessment
    allocation:          AssetAllocation
    scenarios:           list[StressScenario]
    worst_case_pct:      float
    worst_case_amount:   float
    key_vulnerabilities: tuple[str, ...]
    mitigations:         tuple[str, ...]
    historical:          list[HistoricalEvent]
    portfolio_value:     float


def build_stress_summary(
    assessment: Assessment,
    portfolio_value: float = DEFAULT_PORTFOLIO_VALUE,
) -> StressSummary:
    """Project scenarios for ``assessment`` and assemble the summary."""
    category = assessment.risk_level
    allocation = allocate(category)
    scenarios = project_stress_scenarios(category, allocation)
    worst = worst_case_impact(scenarios)
    return StressSummary(
        assessment=assessment,
        allocation=allocation,
        scenarios=scenarios,
        worst_case_pct=worst,
        worst_case_amount=portfolio_value * worst / 100,
        key_vulnerabilities=KEY_VULNERABILITIES[category],
        mitigations=MITIGATION_STRATEGIES[category],
        historical=historical_context(allocation),
        portfolio_value=portfolio_value,
    )
