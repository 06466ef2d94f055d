"""
Stress-scenario projection: derives nine named adverse scenarios from a
risk category and its model allocation.

Impact formulas (percent of portfolio, rounded half-up to 2 decimals)
---------------------------------------------------------------------
    multiplier   = {Conservative: 0.6, Moderate: 0.8, Aggressive: 1.0}

    rate / macro : impact = base_rate * multiplier
    market crash : impact = base_rate * (allocation.stocks / 100) * multiplier

Crash exposure therefore scales linearly with equity weight; rate and macro
impacts ignore the allocation entirely.

Scenario order is fixed: three interest-rate shocks, three market crashes,
three economic scenarios.  Vulnerability tiers and recovery bands are static
per scenario (tiers may depend on category, never on the impact number).

Everything here is a pure function of its inputs: no randomness, no clock.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from risk_report.models.assessment import Assessment, AssetAllocation, StressScenario
from risk_report.stress.allocation import allocate
from risk_report.taxonomy.risk_taxonomy import (
    ImpactSeverity,
    RiskCategory,
    ScenarioGroup,
    Vulnerability,
)

BASE_MULTIPLIERS: dict[RiskCategory, float] = {
    RiskCategory.CONSERVATIVE: 0.6,
    RiskCategory.MODERATE:     0.8,
    RiskCategory.AGGRESSIVE:   1.0,
}

DEFAULT_PORTFOLIO_VALUE = 100_000.0


@dataclass(frozen=True)
class ScenarioDefinition:
    """Static description of one stress scenario.

    Attributes:
        name:              Display name.
        short_name:        Compact label for tables and bar charts.
        description:       One-line explanation.
        group:             Scenario family; crashes are scaled by stock weight.
        base_rate:         Unscaled impact in percent (negative).
        recovery_time:     Literal recovery band.
        vulnerable_assets: Asset classes hit hardest.
        hedging:           Typical hedge.
        default_tier:      Vulnerability when no category override applies.
        tier_overrides:    Category -> vulnerability exceptions.
    """

    name:              str
    short_name:        str
    description:       str
    group:             ScenarioGroup
    base_rate:         float
    recovery_time:     str
    vulnerable_assets: str
    hedging:           str
    default_tier:      Vulnerability
    tier_overrides:    dict[RiskCategory, Vulnerability] = field(default_factory=dict)

    def vulnerability_for(self, category: RiskCategory) -> Vulnerability:
        return self.tier_overrides.get(category, self.default_tier)


SCENARIO_DEFINITIONS: tuple[ScenarioDefinition, ...] = (
    # ── Interest rate shocks ──────────────────────────────────────────────────
    ScenarioDefinition(
        name="Interest Rate Shock (+100bp)",
        short_name="Interest +100bp",
        description="Sudden 1% interest rate increase",
        group=ScenarioGroup.INTEREST_RATE,
        base_rate=-3.5,
        recovery_time="6-12 months",
        vulnerable_assets="Bonds",
        hedging="Shorter Duration",
        default_tier=Vulnerability.LOW,
        tier_overrides={RiskCategory.CONSERVATIVE: Vulnerability.MEDIUM},
    ),
    ScenarioDefinition(
        name="Interest Rate Shock (+200bp)",
        short_name="Interest +200bp",
        description="Sudden 2% interest rate increase",
        group=ScenarioGroup.INTEREST_RATE,
        base_rate=-7.2,
        recovery_time="12-18 months",
        vulnerable_assets="Bonds, REITs",
        hedging="Floaters, Swaps",
        default_tier=Vulnerability.MEDIUM,
        tier_overrides={RiskCategory.CONSERVATIVE: Vulnerability.HIGH},
    ),
    ScenarioDefinition(
        name="Interest Rate Shock (+300bp)",
        short_name="Interest +300bp",
        description="Sudden 3% interest rate increase",
        group=ScenarioGroup.INTEREST_RATE,
        base_rate=-11.8,
        recovery_time="18-24 months",
        vulnerable_assets="Bonds, Utilities",
        hedging="Treasury Futures",
        default_tier=Vulnerability.HIGH,
    ),
    # ── Market crashes ────────────────────────────────────────────────────────
    ScenarioDefinition(
        name="Market Crash (-20%)",
        short_name="Market -20%",
        description="Moderate equity market decline",
        group=ScenarioGroup.MARKET_CRASH,
        base_rate=-12.0,
        recovery_time="12-18 months",
        vulnerable_assets="Stocks",
        hedging="Put Options",
        default_tier=Vulnerability.MEDIUM,
        tier_overrides={RiskCategory.AGGRESSIVE: Vulnerability.HIGH},
    ),
    ScenarioDefinition(
        name="Market Crash (-30%)",
        short_name="Market -30%",
        description="Severe equity market decline",
        group=ScenarioGroup.MARKET_CRASH,
        base_rate=-18.0,
        recovery_time="24-36 months",
        vulnerable_assets="Equities, High Beta",
        hedging="Inverse ETF",
        default_tier=Vulnerability.HIGH,
    ),
    ScenarioDefinition(
        name="Market Crash (-40%)",
        short_name="Market -40%",
        description="Extreme equity market decline (2008-style)",
        group=ScenarioGroup.MARKET_CRASH,
        base_rate=-24.0,
        recovery_time="36-48 months",
        vulnerable_assets="Equities, Growth",
        hedging="Gold, Cash",
        default_tier=Vulnerability.HIGH,
    ),
    # ── Economic scenarios ────────────────────────────────────────────────────
    ScenarioDefinition(
        name="High Inflation (>6%)",
        short_name="High Inflation",
        description="Sustained high inflation environment",
        group=ScenarioGroup.ECONOMIC,
        base_rate=-8.5,
        recovery_time="24-36 months",
        vulnerable_assets="Cash, Bonds",
        hedging="TIPS, Commodities",
        default_tier=Vulnerability.MEDIUM,
        tier_overrides={RiskCategory.CONSERVATIVE: Vulnerability.HIGH},
    ),
    ScenarioDefinition(
        name="Recession Scenario",
        short_name="Recession",
        description="2 quarters negative GDP growth",
        group=ScenarioGroup.ECONOMIC,
        base_rate=-15.0,
        recovery_time="18-30 months",
        vulnerable_assets="Cyclicals",
        hedging="Defensive Sectors",
        default_tier=Vulnerability.HIGH,
    ),
    ScenarioDefinition(
        name="Currency Crisis",
        short_name="Currency Crisis",
        description="Major currency devaluation event",
        group=ScenarioGroup.ECONOMIC,
        base_rate=-6.8,
        recovery_time="12-24 months",
        vulnerable_assets="Foreign Bonds",
        hedging="USD Hedging",
        default_tier=Vulnerability.MEDIUM,
    ),
)


def base_multiplier(category: RiskCategory) -> float:
    """Severity multiplier for ``category``."""
    match category:
        case RiskCategory.CONSERVATIVE | RiskCategory.MODERATE | RiskCategory.AGGRESSIVE:
            return BASE_MULTIPLIERS[category]
        case _:
            raise ValueError(f"Unknown risk category: {category!r}")


def scenario_impact(
    definition: ScenarioDefinition,
    multiplier: float,
    allocation: AssetAllocation,
) -> float:
    """Projected impact in percent for one scenario definition."""
    match definition.group:
        case ScenarioGroup.MARKET_CRASH:
            raw = definition.base_rate * (allocation.stocks / 100) * multiplier
        case ScenarioGroup.INTEREST_RATE | ScenarioGroup.ECONOMIC:
            raw = definition.base_rate * multiplier
        case _:
            raise ValueError(f"Unknown scenario group: {definition.group!r}")
    return round_half_up(raw)


def project_stress_scenarios(
    category: RiskCategory,
    allocation: AssetAllocation,
) -> list[StressScenario]:
    """Project all nine stress scenarios, in display order.

    Args:
        category:   Risk category; selects the multiplier and tier overrides.
        allocation: Portfolio split; only ``stocks`` affects the result.

    Returns:
        Nine ``StressScenario`` objects, rate shocks first.
    """
    multiplier = base_multiplier(category)
    return [
        StressScenario(
            name=d.name,
            short_name=d.short_name,
            description=d.description,
            group=d.group,
            impact=scenario_impact(d, multiplier, allocation),
            recovery_time=d.recovery_time,
            vulnerability=d.vulnerability_for(category),
            vulnerable_assets=d.vulnerable_assets,
            hedging=d.hedging,
        )
        for d in SCENARIO_DEFINITIONS
    ]


def project_for_assessment(assessment: Assessment) -> list[StressScenario]:
    """Project scenarios for an assessment using its category's model allocation."""
    return project_stress_scenarios(
        assessment.risk_level, allocate(assessment.risk_level)
    )


def worst_case_impact(scenarios: list[StressScenario]) -> float:
    """Most negative impact across ``scenarios`` (0.0 when empty)."""
    return min((s.impact for s in scenarios), default=0.0)


def portfolio_impact(
    scenario: StressScenario,
    portfolio_value: float = DEFAULT_PORTFOLIO_VALUE,
) -> float:
    """Signed dollar change for ``scenario`` on a ``portfolio_value`` portfolio."""
    return portfolio_value * scenario.impact / 100


def impact_severity(impact: float) -> ImpactSeverity:
    """Display band for a signed impact percentage."""
    if impact > -5:
        return ImpactSeverity.LOW
    if impact > -15:
        return ImpactSeverity.MODERATE
    return ImpactSeverity.SEVERE


# ── Helper ────────────────────────────────────────────────────────────────────

def round_half_up(value: float) -> float:
    """Round to two decimals with halves going up (towards +inf)."""
    return math.floor(value * 100 + 0.5) / 100
