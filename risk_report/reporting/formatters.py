"""
Plain-text formatters for CLI output and the text fallback report.

All formatters take domain objects and return multi-line strings suitable
for ``typer.echo()`` or writing straight to a ``.txt`` file.

No third-party dependencies (no ``rich``, no ``colorama``).

The text report mirrors the PDF section order (results, stress analysis,
executive summary, submitter, profile, strategy) so a reader switching
between the two finds the same content in the same place.
"""

from __future__ import annotations

from datetime import date

from risk_report.models.assessment import Assessment, AssetAllocation, StressScenario
from risk_report.models.report import ContactInfo, FinancialProfile, ReportData
from risk_report.stress.allocation import ASSET_CLASS_RISKS, allocation_amounts
from risk_report.stress.projector import (
    DEFAULT_PORTFOLIO_VALUE,
    impact_severity,
    portfolio_impact,
)
from risk_report.stress.summary import (
    ACTION_ITEMS,
    HEDGING_STRATEGIES,
    RECOVERY_PROJECTION,
    StressSummary,
    build_stress_summary,
)


# ── Value formatting ──────────────────────────────────────────────────────────


def format_currency(amount: float) -> str:
    """Whole-dollar USD, e.g. ``-$5,760`` or ``$100,000``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def format_pct(value: float) -> str:
    """Signed percentage without trailing zeros, e.g. ``-5.76%`` or ``-12%``."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


def format_report_date(report_date: date) -> str:
    return f"{report_date.month}/{report_date.day}/{report_date.year}"


# ── Sections ──────────────────────────────────────────────────────────────────


def format_assessment_summary(assessment: Assessment, report_date: date) -> str:
    """Score, category and date block."""
    lines = [
        "",
        "=== Assessment Results ===",
        f"  Risk Number:     {assessment.score}",
        f"  Risk Level:      {assessment.risk_level}",
        f"  Assessment Date: {format_report_date(report_date)}",
    ]
    return "\n".join(lines)


def format_stress_table(
    scenarios: list[StressScenario],
    portfolio_value: float = DEFAULT_PORTFOLIO_VALUE,
) -> str:
    """ASCII table of projected scenarios on a ``portfolio_value`` portfolio.

    Columns: scenario, projected value, impact, severity band, vulnerability,
    recovery.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Stress Testing Analysis ===")
    lines.append(f"  Sample portfolio: {format_currency(portfolio_value)}")

    if not scenarios:
        lines.append("")
        lines.append("  (no scenarios projected)")
        return "\n".join(lines)

    header = (
        f"    {'Scenario':<30}  {'Value':>10}  {'Impact':>8}  {'Severity':>8}  "
        f"{'Vulnerability':>13}  {'Recovery':>12}"
    )
    lines.append("")
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for s in scenarios:
        value = portfolio_value + portfolio_impact(s, portfolio_value)
        lines.append(
            f"    {s.name[:30]:<30}  {format_currency(value):>10}  "
            f"{format_pct(s.impact):>8}  {impact_severity(s.impact):>8}  "
            f"{s.vulnerability:>13}  {s.recovery_time:>12}"
        )
    return "\n".join(lines)


def format_allocation(allocation: AssetAllocation, portfolio_value: float) -> str:
    """One line per asset class with percent, dollar amount and exposure notes."""
    lines = ["", "=== Model Asset Allocation ==="]
    amounts = allocation_amounts(allocation, portfolio_value)
    for asset, pct in allocation.as_dict().items():
        lines.append(
            f"  {asset.capitalize():<14} {pct:>3}%  {format_currency(amounts[asset]):>10}"
            f"  ({', '.join(ASSET_CLASS_RISKS[asset])})"
        )
    return "\n".join(lines)


def format_executive_summary(summary: StressSummary) -> str:
    """Worst case, vulnerabilities, mitigations, history and action items."""
    a = summary.assessment
    lines: list[str] = []
    lines.append("")
    lines.append("=== Stress Testing Executive Summary ===")
    lines.append(
        f"  Profile: {a.risk_level} (risk score {a.score}), "
        f"{format_currency(summary.portfolio_value)} portfolio"
    )
    lines.append(
        f"  Worst case: {format_pct(summary.worst_case_pct)} "
        f"({format_currency(summary.worst_case_amount)})"
    )
    lines.append(f"  Typical recovery: {RECOVERY_PROJECTION}")

    lines.append("")
    lines.append("  Key vulnerabilities:")
    lines.extend(f"    - {v}" for v in summary.key_vulnerabilities)
    lines.append("  Mitigation strategies:")
    lines.extend(f"    - {m}" for m in summary.mitigations)
    lines.append("  Hedging strategies:")
    for heading, instruments in HEDGING_STRATEGIES.items():
        lines.append(f"    {heading}: {', '.join(instruments)}")

    lines.append("")
    lines.append("  Historical context:")
    for event in summary.historical:
        lines.append(
            f"    {event.name:<22} market {format_pct(event.market_decline):>5}, "
            f"recovery {event.recovery_months} months, "
            f"your portfolio {format_pct(event.portfolio_impact)}"
        )

    lines.append("")
    lines.append("  Action items:")
    lines.extend(f"    {i}. {item}" for i, item in enumerate(ACTION_ITEMS, start=1))
    return "\n".join(lines)


def format_contact_block(contact: ContactInfo) -> str:
    lines = [
        "",
        "=== Submitter Information ===",
        f"  Full Legal Name: {contact.full_name}",
        f"  Email Address:   {contact.email}",
        f"  Primary Phone:   {contact.phone}",
        f"  Street Address:  {contact.address}",
        f"  City:            {contact.city}",
        f"  State:           {contact.state}",
        f"  ZIP/Postal Code: {contact.zipcode}",
    ]
    return "\n".join(lines)


def format_profile_block(profile: FinancialProfile) -> str:
    properties = ", ".join(profile.properties) if profile.properties else "None"
    lines = [
        "",
        "=== Financial Profile ===",
        f"  Age:                     {profile.age}",
        f"  Annual Income:           {profile.income}",
        f"  Properties Owned:        {properties}",
        f"  Alternative Investments: {'Yes' if profile.has_alternative_investments else 'No'}",
    ]
    return "\n".join(lines)


def format_recommendations(assessment: Assessment) -> str:
    lines = ["", "=== Recommended Strategy ==="]
    lines.extend(f"  - {r}" for r in assessment.recommendations)
    return "\n".join(lines)


# ── Full report ───────────────────────────────────────────────────────────────


def render_text_report(
    data: ReportData,
    portfolio_value: float = DEFAULT_PORTFOLIO_VALUE,
    report_date: date | None = None,
    title: str = "COMPREHENSIVE RISK ASSESSMENT REPORT",
) -> str:
    """Full plain-text report, used when PDF generation fails."""
    if report_date is None:
        report_date = date.today()

    summary = build_stress_summary(data.assessment, portfolio_value)
    parts = [
        title,
        "=" * len(title),
        format_assessment_summary(data.assessment, report_date),
        format_stress_table(summary.scenarios, portfolio_value),
        format_executive_summary(summary),
        format_contact_block(data.contact_info),
    ]
    if data.profile is not None:
        parts.append(format_profile_block(data.profile))
    parts.append(format_recommendations(data.assessment))
    parts.append(format_allocation(summary.allocation, portfolio_value))
    parts.append("")
    parts.append(
        "Note: These are illustrative projections. Actual outcomes may vary. "
        "Consult a financial advisor for personalized risk mitigation."
    )
    return "\n".join(parts) + "\n"
