"""
Risk taxonomy for questionnaire-driven risk assessments.

Four closed vocabularies describe every assessment and stress projection:
  - ``RiskCategory``   — the coarse investor classification from the score.
  - ``Vulnerability``  — qualitative tier attached to each stress scenario.
  - ``ScenarioGroup``  — which family a stress scenario belongs to.
  - ``ImpactSeverity`` — display band for a signed impact percentage.

Usage example::

    from risk_report.taxonomy.risk_taxonomy import RiskCategory

    category = RiskCategory.MODERATE

This module has NO imports from any other ``risk_report`` package.
"""

from enum import StrEnum


class RiskCategory(StrEnum):
    """Investor risk classification derived from the normalized score."""

    CONSERVATIVE = "Conservative"
    """Score below 35; capital preservation comes first."""

    MODERATE = "Moderate"
    """Score 35–64; balanced growth and stability."""

    AGGRESSIVE = "Aggressive"
    """Score 65 and above; long-term growth, tolerates drawdowns."""


class Vulnerability(StrEnum):
    """How exposed a portfolio is to a given stress scenario."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ScenarioGroup(StrEnum):
    """Family of a stress scenario; also fixes the display order."""

    INTEREST_RATE = "interest_rate"
    """Parallel rate shocks; hit fixed income hardest."""

    MARKET_CRASH = "market_crash"
    """Equity drawdowns; exposure scales with stock weight."""

    ECONOMIC = "economic"
    """Macro events: inflation, recession, currency crisis."""


class ImpactSeverity(StrEnum):
    """Display band for a projected impact percentage."""

    LOW = "low"
    """Impact above -5%."""

    MODERATE = "moderate"
    """Impact between -15% (exclusive) and -5% (inclusive)."""

    SEVERE = "severe"
    """Impact at or below -15%."""
