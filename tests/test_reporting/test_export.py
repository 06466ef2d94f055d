"""Tests for risk_report.reporting.export."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from risk_report.models.assessment import Assessment
from risk_report.reporting.export import (
    assessment_to_dict,
    export_to_csv,
    export_to_json,
    flatten_scenarios_for_export,
    write_text_report,
)
from risk_report.stress.projector import project_for_assessment


# ── export_to_csv ─────────────────────────────────────────────────────────────


def test_export_to_csv_basic(tmp_path: Path) -> None:
    """Writes a valid CSV with correct headers and values."""
    records = [
        {"name": "Recession Scenario", "impact_pct": -12.0},
        {"name": "Currency Crisis", "impact_pct": -5.44},
    ]
    out = tmp_path / "test.csv"
    result = export_to_csv(records, out)

    assert result == out
    with out.open(encoding="utf-8") as f:
        reader = list(csv.DictReader(f))
    assert len(reader) == 2
    assert reader[1]["name"] == "Currency Crisis"


def test_export_to_csv_custom_fieldnames(tmp_path: Path) -> None:
    """Custom fieldnames control column order and drop extra keys."""
    out = tmp_path / "cols.csv"
    export_to_csv([{"a": 1, "b": 2, "c": 3}], out, fieldnames=["c", "a"])
    with out.open(encoding="utf-8") as f:
        assert f.readline().strip() == "c,a"


def test_export_to_csv_empty_records(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "empty.csv"
    export_to_csv([], out)
    assert out.read_text(encoding="utf-8") == ""


# ── export_to_json ────────────────────────────────────────────────────────────


def test_export_to_json(tmp_path: Path, moderate_assessment: Assessment) -> None:
    out = tmp_path / "a" / "assessment.json"
    export_to_json(assessment_to_dict(moderate_assessment), out)
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["score"] == 50
    assert loaded["risk_level"] == "Moderate"
    assert len(loaded["recommendations"]) == 4


# ── flatten_scenarios_for_export ──────────────────────────────────────────────


def test_flatten_scenarios(moderate_assessment: Assessment) -> None:
    rows = flatten_scenarios_for_export(project_for_assessment(moderate_assessment), 100_000)

    assert [r["order"] for r in rows] == list(range(1, 10))
    second = rows[1]
    assert second["name"] == "Interest Rate Shock (+200bp)"
    assert second["group"] == "interest_rate"
    assert second["impact_pct"] == pytest.approx(-5.76)
    assert second["impact_amount"] == pytest.approx(-5_760)
    assert second["projected_value"] == pytest.approx(94_240)
    assert second["vulnerability"] == "Medium"


def test_flatten_to_csv(tmp_path: Path, moderate_assessment: Assessment) -> None:
    rows = flatten_scenarios_for_export(project_for_assessment(moderate_assessment))
    out = export_to_csv(rows, tmp_path / "scenarios.csv")
    with out.open(encoding="utf-8") as f:
        reader = list(csv.DictReader(f))
    assert len(reader) == 9
    assert reader[0]["recovery_time"] == "6-12 months"


# ── write_text_report ─────────────────────────────────────────────────────────


def test_write_text_report(tmp_path: Path) -> None:
    out = write_text_report("hello\n", tmp_path / "r" / "report.txt")
    assert out.read_text(encoding="utf-8") == "hello\n"
