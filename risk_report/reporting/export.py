"""
Flat-file export helpers.

All functions write to disk and return the written ``Path``.  ``export_to_csv``
and ``export_to_json`` accept generic ``list[dict]`` / ``dict`` data to stay
decoupled from specific report shapes.

``flatten_scenarios_for_export()`` is the adapter for stress projections: one
flat row per scenario with the dollar figures precomputed, so the CSV loads
in a spreadsheet without formulas.

``write_text_report()`` persists the plain-text fallback report.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from risk_report.models.assessment import Assessment, StressScenario
from risk_report.stress.projector import DEFAULT_PORTFOLIO_VALUE, portfolio_impact


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(data: dict | list, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def flatten_scenarios_for_export(
    scenarios: list[StressScenario],
    portfolio_value: float = DEFAULT_PORTFOLIO_VALUE,
) -> list[dict]:
    """One flat row per scenario.

    Each row contains ``order``, ``name``, ``group``, ``description``,
    ``impact_pct``, ``impact_amount``, ``projected_value``,
    ``vulnerability``, ``recovery_time``, ``vulnerable_assets``, ``hedging``.
    """
    rows: list[dict] = []
    for order, s in enumerate(scenarios, start=1):
        amount = portfolio_impact(s, portfolio_value)
        rows.append(
            {
                "order":             order,
                "name":              s.name,
                "group":             str(s.group),
                "description":       s.description,
                "impact_pct":        s.impact,
                "impact_amount":     round(amount, 2),
                "projected_value":   round(portfolio_value + amount, 2),
                "vulnerability":     str(s.vulnerability),
                "recovery_time":     s.recovery_time,
                "vulnerable_assets": s.vulnerable_assets,
                "hedging":           s.hedging,
            }
        )
    return rows


def assessment_to_dict(assessment: Assessment) -> dict:
    """JSON-ready dict of an ``Assessment``."""
    return assessment.model_dump(mode="json")


def write_text_report(text: str, path: Path) -> Path:
    """Write a rendered text report (parent dirs created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path
