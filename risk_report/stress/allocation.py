"""
Model asset allocation per risk category.

One fixed row per category, no blending between categories:

    Category      Stocks  Bonds  Alternatives  Cash
    Conservative      30     50            10    10
    Moderate          60     30             8     2
    Aggressive        80     15             5     0
"""

from __future__ import annotations

from risk_report.models.assessment import AssetAllocation
from risk_report.taxonomy.risk_taxonomy import RiskCategory

ALLOCATION_TABLE: dict[RiskCategory, AssetAllocation] = {
    RiskCategory.CONSERVATIVE: AssetAllocation(stocks=30, bonds=50, alternatives=10, cash=10),
    RiskCategory.MODERATE:     AssetAllocation(stocks=60, bonds=30, alternatives=8,  cash=2),
    RiskCategory.AGGRESSIVE:   AssetAllocation(stocks=80, bonds=15, alternatives=5,  cash=0),
}

# Exposure notes printed under each allocation bar and beside each text line.
ASSET_CLASS_RISKS: dict[str, tuple[str, ...]] = {
    "stocks": (
        "Market volatility risk",
        "Economic downturn sensitivity",
        "Sector concentration risk",
    ),
    "bonds": (
        "Interest rate sensitivity",
        "Credit risk exposure",
        "Inflation erosion risk",
    ),
    "alternatives": (
        "Liquidity constraints",
        "Correlation breakdown risk",
        "Complexity and transparency",
    ),
    "cash": (
        "Purchasing power erosion",
    ),
}


def allocate(category: RiskCategory) -> AssetAllocation:
    """Return the model allocation for ``category``."""
    match category:
        case RiskCategory.CONSERVATIVE | RiskCategory.MODERATE | RiskCategory.AGGRESSIVE:
            return ALLOCATION_TABLE[category]
        case _:
            raise ValueError(f"Unknown risk category: {category!r}")


def allocation_amounts(
    allocation: AssetAllocation,
    portfolio_value: float,
) -> dict[str, float]:
    """Dollar amount held in each asset class of a ``portfolio_value`` portfolio."""
    return {
        asset: portfolio_value * pct / 100
        for asset, pct in allocation.as_dict().items()
    }
