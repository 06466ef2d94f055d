"""
Risk Assessment Report — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs (answer, contact and profile JSON files).
  4. Execute action (score, project, render).
  5. Report result to stdout.

Install and run::

    pip install -e .
    risk-report --help
    risk-report questions
    risk-report score answers.json
    risk-report stress-test --category Moderate --json-out projection.json
    risk-report generate-report --answers answers.json --contact contact.json
    risk-report validate-config
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="risk-report",
    help="Investment risk questionnaire scoring and PDF stress-test reports.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from risk_report.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from risk_report.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _load_answers_or_exit(answers_file: str):
    from risk_report.questionnaire.answers import AnswerFileError, load_answers

    try:
        return load_answers(Path(answers_file))
    except AnswerFileError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _score_or_exit(answers):
    from risk_report.scoring.scorer import ScoringError, calculate_score

    try:
        return calculate_score(answers)
    except ScoringError as exc:
        typer.echo(f"[ERROR] Scoring failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _load_model_or_exit(path_str: str, model_cls, label: str):
    """Read a JSON object file and validate it into ``model_cls``."""
    path = Path(path_str)
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        typer.echo(f"[ERROR] Could not read {label} file {path}: {exc}", err=True)
        raise typer.Exit(code=1)

    if not isinstance(raw, dict):
        typer.echo(f"[ERROR] {label.capitalize()} file must contain an object.", err=True)
        raise typer.Exit(code=1)

    try:
        return model_cls(**raw)
    except Exception as exc:
        typer.echo(f"[ERROR] Invalid {label}: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("questions")
def questions() -> None:
    """List the questionnaire with option numbers and scores."""
    from risk_report.questionnaire.questions import QUESTIONS
    from risk_report.scoring.scorer import max_possible_score

    for n, q in enumerate(QUESTIONS, start=1):
        typer.echo(f"{n:>2}. [{q.id}] {q.text}")
        for i, (option, score) in enumerate(zip(q.options, q.scores), start=1):
            typer.echo(f"      {i}) {option}  (score {score})")
    typer.echo("")
    typer.echo(f"Maximum possible score: {max_possible_score():g}")


@app.command("score")
def score(
    answers_file: str = typer.Argument(..., help="JSON answers file."),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the assessment as JSON.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score a completed questionnaire and print the risk category."""
    from risk_report.reporting.export import assessment_to_dict
    from risk_report.reporting.formatters import format_assessment_summary, format_recommendations

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    assessment = _score_or_exit(_load_answers_or_exit(answers_file))

    if as_json:
        typer.echo(json.dumps(assessment_to_dict(assessment), indent=2))
        return

    typer.echo(format_assessment_summary(assessment, date.today()))
    typer.echo(format_recommendations(assessment))


@app.command("stress-test")
def stress_test(
    category: Optional[str] = typer.Option(
        None,
        "--category",
        help="Risk category: Conservative, Moderate or Aggressive.",
    ),
    answers_file: Optional[str] = typer.Option(
        None,
        "--answers",
        help="Score this answers file and use its category.",
    ),
    csv_path: Optional[str] = typer.Option(
        None,
        "--csv",
        help="Also export the scenario table to this CSV file.",
    ),
    json_path: Optional[str] = typer.Option(
        None,
        "--json-out",
        help="Also export category, allocation and scenarios to this JSON file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Project the nine stress scenarios for a category or an answer set."""
    from risk_report.reporting.export import (
        export_to_csv,
        export_to_json,
        flatten_scenarios_for_export,
    )
    from risk_report.reporting.formatters import format_allocation, format_stress_table
    from risk_report.stress.allocation import allocate
    from risk_report.stress.projector import project_stress_scenarios, worst_case_impact
    from risk_report.taxonomy.risk_taxonomy import RiskCategory

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if (category is None) == (answers_file is None):
        typer.echo("[ERROR] Give exactly one of --category or --answers.", err=True)
        raise typer.Exit(code=1)

    score: Optional[int] = None
    if answers_file is not None:
        assessment = _score_or_exit(_load_answers_or_exit(answers_file))
        risk_level, score = assessment.risk_level, assessment.score
    else:
        try:
            risk_level = RiskCategory(category.capitalize())
        except ValueError:
            valid = ", ".join(c.value for c in RiskCategory)
            typer.echo(f"[ERROR] Unknown category '{category}'. Use one of: {valid}.", err=True)
            raise typer.Exit(code=1)

    value = config.report.portfolio_value
    allocation = allocate(risk_level)
    scenarios = project_stress_scenarios(risk_level, allocation)

    typer.echo(f"Risk category: {risk_level}")
    if score is not None:
        typer.echo(f"Risk number:   {score}")
    typer.echo(format_allocation(allocation, value))
    typer.echo(format_stress_table(scenarios, value))

    rows = flatten_scenarios_for_export(scenarios, value)
    if csv_path or json_path:
        typer.echo("")
    if csv_path:
        out = export_to_csv(rows, Path(csv_path))
        typer.echo(f"[OK] Scenarios exported to {out}")
    if json_path:
        payload = {
            "risk_level":      str(risk_level),
            "score":           score,
            "portfolio_value": value,
            "allocation":      allocation.as_dict(),
            "worst_case_pct":  worst_case_impact(scenarios),
            "scenarios":       rows,
        }
        out = export_to_json(payload, Path(json_path))
        typer.echo(f"[OK] Projection exported to {out}")


@app.command("generate-report")
def generate_report_cmd(
    answers_file: str = typer.Option(
        ...,
        "--answers",
        help="JSON answers file.",
    ),
    contact_file: str = typer.Option(
        ...,
        "--contact",
        help="JSON file with submitter contact details.",
    ),
    profile_file: Optional[str] = typer.Option(
        None,
        "--profile",
        help="Optional JSON file with the financial profile.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="PDF path (default: <output_dir>/<prefix>_<name>_<date>.pdf).",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score answers and render the full PDF report.

    If PDF generation fails, a plain-text report is written next to the
    intended PDF path instead and the command exits with code 2.
    """
    from risk_report.models.report import ContactInfo, FinancialProfile, ReportData
    from risk_report.reporting.export import write_text_report
    from risk_report.reporting.formatters import render_text_report
    from risk_report.reporting.generator import ReportGenerator

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    answers = _load_answers_or_exit(answers_file)
    assessment = _score_or_exit(answers)
    contact = _load_model_or_exit(contact_file, ContactInfo, "contact")
    profile = (
        _load_model_or_exit(profile_file, FinancialProfile, "profile")
        if profile_file else None
    )

    data = ReportData(
        assessment=assessment,
        contact_info=contact,
        profile=profile,
        answers=tuple(answers),
    )

    generator = ReportGenerator(config)
    target = Path(output) if output else generator.default_output_path(data)
    typer.echo(
        f"Generating report | score={assessment.score} | "
        f"category={assessment.risk_level} | path={target}"
    )

    result = generator.generate(data, target)
    if result.ok:
        typer.echo(f"  Pages: {result.page_count}")
        typer.echo(f"[OK] Report written to {result.path}")
        return

    typer.echo(f"[ERROR] {result.error}", err=True)
    text = render_text_report(
        data, config.report.portfolio_value, title=config.report.title
    )
    fallback = write_text_report(text, target.with_suffix(".txt"))
    typer.echo(f"[FALLBACK] Text report written to {fallback}")
    raise typer.Exit(code=2)


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Output dir:       {config.report.output_dir}")
    typer.echo(f"  Portfolio value:  {config.report.portfolio_value:,.2f}")
    typer.echo(
        f"  Page (mm):        {config.layout.page_width:g} x "
        f"{config.layout.page_height:g}, margin {config.layout.margin:g}"
    )
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


if __name__ == "__main__":
    app()
