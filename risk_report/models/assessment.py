"""
Assessment and stress-projection output models.

``Assessment`` is the scored result of one questionnaire: a normalized
0–100 score, the ``RiskCategory`` it falls in, and the advisory strings for
that band.

``AssetAllocation`` is the model portfolio split for a category.

``StressScenario`` is one projected adverse event with its signed impact.

All three are frozen; they are produced once per report and never edited.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from risk_report.taxonomy.risk_taxonomy import RiskCategory, ScenarioGroup, Vulnerability


class Assessment(BaseModel):
    """Scored questionnaire result.

    Attributes:
        score: Normalized score, integer in ``[0, 100]``.
        risk_level: Category derived from ``score``.
        recommendations: Ordered advisory strings for the score band.
    """

    model_config = ConfigDict(frozen=True)

    score: int
    risk_level: RiskCategory
    recommendations: tuple[str, ...] = ()

    @field_validator("score")
    @classmethod
    def validate_score_range(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError(f"score must be in [0, 100], got {v}.")
        return v


class AssetAllocation(BaseModel):
    """Target asset-class percentages for a model portfolio.

    Attributes:
        stocks: Equity weight in percent.
        bonds: Fixed-income weight in percent.
        alternatives: Alternatives weight in percent.
        cash: Cash weight in percent.
    """

    model_config = ConfigDict(frozen=True)

    stocks: int
    bonds: int
    alternatives: int
    cash: int

    @model_validator(mode="after")
    def validate_percentages(self) -> "AssetAllocation":
        parts = self.as_dict()
        negative = [name for name, pct in parts.items() if pct < 0]
        if negative:
            raise ValueError(f"Allocation percentages must be non-negative: {negative}.")
        total = sum(parts.values())
        if total != 100:
            raise ValueError(f"Allocation percentages must sum to 100, got {total}.")
        return self

    def as_dict(self) -> dict[str, int]:
        """Return ``{asset_class: percent}`` in display order."""
        return {
            "stocks":       self.stocks,
            "bonds":        self.bonds,
            "alternatives": self.alternatives,
            "cash":         self.cash,
        }


class StressScenario(BaseModel):
    """A projected adverse market event.

    Attributes:
        name: Display name, e.g. ``"Market Crash (-20%)"``.
        short_name: Compact label for tables and charts.
        description: One-line explanation of the event.
        group: Scenario family.
        impact: Signed portfolio impact in percent (<= 0, two decimals).
        recovery_time: Recovery band, free text (e.g. ``"12-18 months"``).
        vulnerability: Qualitative exposure tier.
        vulnerable_assets: Asset classes hit hardest.
        hedging: Typical hedge for this scenario.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    short_name: str
    description: str
    group: ScenarioGroup
    impact: float
    recovery_time: str
    vulnerability: Vulnerability
    vulnerable_assets: str = ""
    hedging: str = ""

    @field_validator("impact")
    @classmethod
    def validate_impact_not_positive(cls, v: float) -> float:
        if v > 0:
            raise ValueError(f"impact must be zero or negative, got {v}.")
        return v
