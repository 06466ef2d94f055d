"""Tests for the risk-report Typer CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from risk_report.cli import app
from risk_report.questionnaire.questions import QUESTIONS

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """``configure_logging`` replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def answers_file(tmp_path: Path) -> Path:
    """Highest option everywhere (score 100)."""
    answers = {q.id: q.scores.index(max(q.scores)) + 1 for q in QUESTIONS}
    path = tmp_path / "answers.json"
    path.write_text(json.dumps(answers), encoding="utf-8")
    return path


@pytest.fixture
def contact_file(tmp_path: Path) -> Path:
    path = tmp_path / "contact.json"
    path.write_text(
        json.dumps(
            {
                "first_name": "Jordan",
                "last_name": "Rivera",
                "email": "jordan.rivera@example.com",
                "city": "Portland",
            }
        ),
        encoding="utf-8",
    )
    return path


def test_questions_lists_bank() -> None:
    result = runner.invoke(app, ["questions"])
    assert result.exit_code == 0
    assert "[game_show]" in result.output
    assert "Maximum possible score: 100" in result.output


def test_score_text(answers_file: Path) -> None:
    result = runner.invoke(app, ["score", str(answers_file)])
    assert result.exit_code == 0
    assert "Risk Number:     100" in result.output
    assert "Aggressive" in result.output


def test_score_json(answers_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RISK_REPORT_LOG_LEVEL", "WARNING")
    result = runner.invoke(app, ["score", str(answers_file), "--json"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["score"] == 100
    assert payload["risk_level"] == "Aggressive"


def test_score_invalid_index(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"game_show": 9}), encoding="utf-8")
    result = runner.invoke(app, ["score", str(path)])
    assert result.exit_code == 1
    assert "Scoring failed" in result.output


def test_score_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["score", str(tmp_path / "nope.json")])
    assert result.exit_code == 1


@pytest.fixture
def repeated_answers_file(tmp_path: Path) -> Path:
    """Record form answering one question thirteen times."""
    records = [{"question_id": "friend_description", "value": 1}] * 13
    path = tmp_path / "repeated.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "args",
    [
        ["score"],
        ["stress-test", "--answers"],
    ],
)
def test_repeated_answers_exit_cleanly(args: list[str], repeated_answers_file: Path) -> None:
    result = runner.invoke(app, [*args, str(repeated_answers_file)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "answered more than once" in result.output


def test_generate_report_rejects_repeated_answers(
    repeated_answers_file: Path, contact_file: Path, tmp_path: Path
) -> None:
    out = tmp_path / "report.pdf"
    result = runner.invoke(
        app,
        ["generate-report", "--answers", str(repeated_answers_file),
         "--contact", str(contact_file), "--output", str(out)],
    )
    assert result.exit_code == 1
    assert "Scoring failed" in result.output
    assert not out.exists()


def test_stress_test_by_category() -> None:
    result = runner.invoke(app, ["stress-test", "--category", "moderate"])
    assert result.exit_code == 0
    assert "Risk category: Moderate" in result.output
    assert "Interest Rate Shock (+200bp)" in result.output
    assert "-5.76%" in result.output
    assert "Risk number" not in result.output


def test_stress_test_by_answers_shows_score(answers_file: Path) -> None:
    result = runner.invoke(app, ["stress-test", "--answers", str(answers_file)])
    assert result.exit_code == 0
    assert "Risk category: Aggressive" in result.output
    assert "Risk number:   100" in result.output


def test_stress_test_json_export(tmp_path: Path) -> None:
    out = tmp_path / "out" / "projection.json"
    result = runner.invoke(
        app, ["stress-test", "--category", "Aggressive", "--json-out", str(out)]
    )
    assert result.exit_code == 0
    assert "[OK] Projection exported" in result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["risk_level"] == "Aggressive"
    assert payload["score"] is None
    assert payload["allocation"] == {"stocks": 80, "bonds": 15, "alternatives": 5, "cash": 0}
    assert payload["worst_case_pct"] == -19.2
    assert len(payload["scenarios"]) == 9
    assert payload["scenarios"][0]["name"] == "Interest Rate Shock (+100bp)"


def test_stress_test_csv_export(answers_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "scenarios.csv"
    result = runner.invoke(app, ["stress-test", "--answers", str(answers_file), "--csv", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert len(out.read_text(encoding="utf-8").strip().splitlines()) == 10


@pytest.mark.parametrize(
    "args",
    [
        ["stress-test"],
        ["stress-test", "--category", "Moderate", "--answers", "a.json"],
        ["stress-test", "--category", "Reckless"],
    ],
)
def test_stress_test_bad_arguments(args: list[str]) -> None:
    result = runner.invoke(app, args)
    assert result.exit_code == 1


def test_generate_report(answers_file: Path, contact_file: Path, tmp_path: Path) -> None:
    out = tmp_path / "report.pdf"
    result = runner.invoke(
        app,
        ["generate-report", "--answers", str(answers_file), "--contact", str(contact_file),
         "--output", str(out)],
    )
    assert result.exit_code == 0, result.output
    assert "[OK] Report written" in result.output
    assert out.read_bytes().startswith(b"%PDF")


def test_generate_report_falls_back_to_text(
    answers_file: Path, contact_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def boom(self, data):
        raise RuntimeError("renderer down")

    monkeypatch.setattr("risk_report.reporting.generator.ReportGenerator.render", boom)
    out = tmp_path / "report.pdf"
    result = runner.invoke(
        app,
        ["generate-report", "--answers", str(answers_file), "--contact", str(contact_file),
         "--output", str(out)],
    )
    assert result.exit_code == 2
    assert "Failed to generate PDF report" in result.output
    assert not out.exists()
    text = out.with_suffix(".txt").read_text(encoding="utf-8")
    assert "=== Stress Testing Analysis ===" in text
    assert "Jordan Rivera" in text


def test_generate_report_bad_contact(answers_file: Path, tmp_path: Path) -> None:
    contact = tmp_path / "contact.json"
    contact.write_text(json.dumps({"first_name": "OnlyFirst"}), encoding="utf-8")
    result = runner.invoke(
        app, ["generate-report", "--answers", str(answers_file), "--contact", str(contact)]
    )
    assert result.exit_code == 1
    assert "Invalid contact" in result.output


def test_validate_config() -> None:
    result = runner.invoke(app, ["validate-config"])
    assert result.exit_code == 0
    assert "[OK] Config valid." in result.output


def test_validate_config_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "x.toml")])
    assert result.exit_code == 1
