"""
PDF report generation: drives the layout engine through the fixed section
sequence and persists the finished document.

Section order
-------------
  1. Header band          — fixed 40 mm band at the top of page 1.
  2. Results summary      — score, category, assessment date.
  3. Stress analysis      — intro paragraph, 9-scenario table, 6-bar loss
                            strip coloured by severity band; measured up
                            front and kept on one page.
     (unconditional page break)
  4. Executive summary    — two paragraphs and an italic disclaimer.
  5. Submitter info       — seven label/value lines.
  6. Financial profile    — only when a profile was supplied.
  7. Recommended strategy — advisory list, model allocation bars
                            with exposure notes, category mitigations.

Every section reserves its own space with ``ensure_space`` before drawing.

Failure handling
----------------
``ReportGenerator.generate()`` never raises for rendering or I/O faults.  It
logs the exception, removes any partially written file and returns a
``ReportResult`` with ``status="failed"`` carrying a ``GenerationError`` whose
message tells the user to fall back to the text report.  The PDF is written
to a temporary sibling and renamed into place only once complete.  Nothing is
retried.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Literal, Optional

from risk_report.config import AppConfig
from risk_report.layout.cursor import PageGeometry
from risk_report.layout.engine import DocumentLayoutEngine, RenderedDocument
from risk_report.layout.surface import RGB, DrawingSurface, ReportLabSurface
from risk_report.models.assessment import Assessment
from risk_report.models.report import ContactInfo, FinancialProfile, ReportData
from risk_report.reporting.formatters import (
    format_currency,
    format_pct,
    format_report_date,
)
from risk_report.stress.allocation import ASSET_CLASS_RISKS, allocation_amounts
from risk_report.stress.projector import impact_severity
from risk_report.stress.summary import StressSummary, build_stress_summary
from risk_report.taxonomy.risk_taxonomy import ImpactSeverity

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = (
    "Failed to generate PDF report. "
    "Please try the text report instead or contact support."
)

# ── Palette ───────────────────────────────────────────────────────────────────

WHITE:      RGB = (255, 255, 255)
BLUE_700:   RGB = (29, 78, 216)
BLUE_600:   RGB = (37, 99, 235)
BLUE_50:    RGB = (239, 246, 255)
NAVY_700:   RGB = (51, 65, 85)
TEAL_900:   RGB = (21, 94, 117)
SLATE_600:  RGB = (71, 85, 105)
CYAN_100:   RGB = (207, 250, 254)
RED_500:    RGB = (239, 68, 68)
ORANGE_500: RGB = (249, 115, 22)
AMBER_500:  RGB = (245, 158, 11)
GRAY_50:    RGB = (248, 250, 252)

SEVERITY_COLORS: dict[ImpactSeverity, RGB] = {
    ImpactSeverity.LOW:      AMBER_500,
    ImpactSeverity.MODERATE: ORANGE_500,
    ImpactSeverity.SEVERE:   RED_500,
}

ASSET_COLORS: dict[str, RGB] = {
    "stocks":       (59, 130, 246),
    "bonds":        (34, 197, 94),
    "alternatives": (168, 85, 247),
    "cash":         (156, 163, 175),
}

# ── Fixed section geometry (mm) ───────────────────────────────────────────────

HEADER_HEIGHT          = 40.0
CONTENT_TOP            = 50.0
RESULTS_BOX_HEIGHT     = 30.0
RESULTS_ADVANCE        = 40.0
STRESS_MIN_HEIGHT      = 90.0
SCENARIO_ROW_HEIGHT    = 6.0
LOSS_BAR_COUNT         = 6
LOSS_BAR_PITCH         = 6.0
LOSS_BAR_HEIGHT        = 4.0
LOSS_BAR_LABEL_WIDTH   = 25.0
SUBMITTER_BOX_HEIGHT   = 60.0
SUBMITTER_ADVANCE      = 70.0
SUBMITTER_LINE_PITCH   = 5.0
PROFILE_BOX_HEIGHT     = 40.0
PROFILE_ADVANCE        = 50.0
ALLOCATION_ROW_PITCH   = 11.0
ALLOCATION_NOTE_OFFSET = 8.0

SCENARIO_TABLE_HEADER = ("Scenario", "Portfolio Value", "Loss (%)", "Vulnerable Asset", "Hedging")
SCENARIO_COLUMN_WIDTHS = (32.0, 28.0, 20.0, 42.0, 42.0)

STRESS_INTRO = (
    "This section analyzes the estimated impact on a sample {value} portfolio under "
    "severe market scenarios, reflecting their correlation to your risk number. Stress "
    "tests include interest rate shocks, equity market crashes, and economic stress "
    "events. All projections are for illustration and educational purposes."
)

EXECUTIVE_VULNERABILITIES = (
    "Key vulnerabilities identified: Fixed income assets are most sensitive to interest "
    "rate shocks; equity positions are exposed during sharp market declines and recession "
    "scenarios. Diversification, tactical hedging (using options, inverse ETFs, TIPS), and "
    "maintaining adequate liquidity are recommended mitigation strategies."
)

EXECUTIVE_HISTORY = (
    "In the most severe stress scenario your {category} portfolio could experience a "
    "maximum drawdown of approximately {worst_pct}, a potential loss of {worst_amount} "
    "on a {value} portfolio. Historical data shows portfolios with similar risk profiles "
    "experienced losses of 10-25% during events like the 2008 Financial Crisis and the "
    "2020 COVID crash, but diversified allocations with hedging recovered within "
    "18-36 months."
)

DISCLAIMER = (
    "Note: These are illustrative projections. Actual outcomes may vary. "
    "Consult a financial advisor for personalized risk mitigation."
)

SurfaceFactory = Callable[[PageGeometry, str, str], DrawingSurface]


class GenerationError(RuntimeError):
    """User-facing PDF failure; the original fault is kept on ``cause``."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(GENERATION_FAILED_MESSAGE)


@dataclass(frozen=True)
class ReportResult:
    """Outcome of one ``ReportGenerator.generate()`` call.

    Attributes:
        status:     ``"success"`` or ``"failed"``.
        path:       Written PDF path on success.
        page_count: Pages in the written document (0 on failure).
        error:      ``GenerationError`` on failure.
    """

    status:     Literal["success", "failed"]
    path:       Optional[Path] = None
    page_count: int = 0
    error:      Optional[GenerationError] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


def _reportlab_surface(geometry: PageGeometry, title: str, author: str) -> DrawingSurface:
    return ReportLabSurface(geometry, title=title, author=author)


class ReportGenerator:
    """Renders ``ReportData`` into a paginated PDF.

    One generator may render any number of reports; every ``render()`` call
    builds its own surface, engine and cursor.

    Args:
        config:          Application config (defaults to built-in defaults).
        surface_factory: Builds the drawing surface; ReportLab by default.
        report_date:     Date printed on the report; today when ``None``.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
        report_date: date | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.surface_factory = surface_factory or _reportlab_surface
        self.report_date = report_date
        layout = self.config.layout
        self.geometry = PageGeometry(
            width=layout.page_width,
            height=layout.page_height,
            margin=layout.margin,
        )

    # ── Public API ────────────────────────────────────────────────────────────

    def render(self, data: ReportData) -> RenderedDocument:
        """Lay out every section and return the finalized document.

        Raises whatever the drawing surface raises; ``generate()`` is the
        non-raising entry point.
        """
        report = self.config.report
        surface = self.surface_factory(self.geometry, report.title, report.author)
        engine = DocumentLayoutEngine(
            surface, self.geometry, footer_text=report.footer_text
        )
        summary = build_stress_summary(data.assessment, report.portfolio_value)
        report_date = self.report_date or date.today()

        self._draw_header(engine)
        self._draw_results(engine, data.assessment, report_date)
        self._draw_stress_analysis(engine, summary)
        engine.new_page()
        self._draw_executive_summary(engine, summary)
        self._draw_submitter(engine, data.contact_info)
        if data.profile is not None:
            self._draw_profile(engine, data.profile)
        self._draw_strategy(engine, summary)
        return engine.finalize()

    def generate(self, data: ReportData, output_path: Path | None = None) -> ReportResult:
        """Render and persist a report; never raises for generation faults.

        Args:
            data:        Report input bundle.
            output_path: Destination PDF; defaults to ``default_output_path()``.

        Returns:
            ``ReportResult`` with ``status="success"`` and the written path, or
            ``status="failed"`` and a ``GenerationError``.
        """
        path = Path(output_path) if output_path else self.default_output_path(data)
        logger.info(
            "Generating PDF report | category=%s score=%d path=%s",
            data.assessment.risk_level, data.assessment.score, path,
        )
        try:
            document = self.render(data)
            persist_document(document, path)
        except Exception as exc:
            logger.exception("Error generating PDF report for %s", path)
            return ReportResult(status="failed", error=GenerationError(exc))

        logger.info("PDF report written | pages=%d path=%s", document.page_count, path)
        return ReportResult(status="success", path=path, page_count=document.page_count)

    def default_output_path(self, data: ReportData) -> Path:
        """``<output_dir>/<prefix>_<last name>_<YYYYMMDD>.pdf``."""
        report = self.config.report
        report_date = self.report_date or date.today()
        name = _slug(data.contact_info.last_name) or "report"
        return Path(report.output_dir) / (
            f"{report.filename_prefix}_{name}_{report_date:%Y%m%d}.pdf"
        )

    # ── Sections ──────────────────────────────────────────────────────────────

    def _draw_header(self, engine: DocumentLayoutEngine) -> None:
        width = self.geometry.width
        report = self.config.report
        engine.draw_box(0, 0, width, HEADER_HEIGHT, BLUE_700)
        engine.draw_box(0, HEADER_HEIGHT - 10, width, 10, BLUE_600)
        engine.set_text_color(WHITE)
        engine.draw_text(report.title, width / 2, 20, font_size=20, style="bold", align="center")
        engine.draw_text(report.subtitle, width / 2, 28, font_size=11, align="center")
        engine.move_to(CONTENT_TOP)
        engine.set_text_color(NAVY_700)

    def _draw_results(
        self,
        engine: DocumentLayoutEngine,
        assessment: Assessment,
        report_date: date,
    ) -> None:
        m, cw = self.geometry.margin, self.geometry.content_width
        engine.ensure_space(RESULTS_BOX_HEIGHT)
        y = engine.y
        engine.draw_box(m, y, cw, RESULTS_BOX_HEIGHT, BLUE_50)
        engine.draw_text("ASSESSMENT RESULTS", m + 5, y + 8, font_size=14, style="bold")
        engine.draw_text(f"Risk Number: {assessment.score}", m + 5, y + 16, font_size=11)
        engine.draw_text(f"Risk Level: {assessment.risk_level}", m + 5, y + 22, font_size=11)
        engine.draw_text(
            f"Assessment Date: {format_report_date(report_date)}",
            m + 5, y + 28, font_size=11,
        )
        engine.advance(RESULTS_ADVANCE)

    def stress_section_height(
        self,
        engine: DocumentLayoutEngine,
        intro: str,
        scenario_count: int,
    ) -> float:
        """Height of the stress analysis block, never less than 90 mm."""
        cw = self.geometry.content_width
        intro_height = engine.measure_text(intro, cw - 10, font_size=10)
        table_height = engine.table_height(scenario_count, SCENARIO_ROW_HEIGHT)
        chart_height = 12 + LOSS_BAR_COUNT * LOSS_BAR_PITCH + 12
        measured = 14 + intro_height + 2 + 4 + table_height + chart_height
        return max(STRESS_MIN_HEIGHT, measured)

    def _draw_stress_analysis(
        self,
        engine: DocumentLayoutEngine,
        summary: StressSummary,
    ) -> None:
        m, cw = self.geometry.margin, self.geometry.content_width
        value = summary.portfolio_value
        intro = STRESS_INTRO.format(value=format_currency(value))

        engine.ensure_space(
            self.stress_section_height(engine, intro, len(summary.scenarios))
        )
        top = engine.y

        engine.set_text_color(TEAL_900)
        engine.draw_text(
            "COMPREHENSIVE STRESS TESTING ANALYSIS", m + 5, top + 8,
            font_size=14, style="bold",
        )
        engine.set_text_color(NAVY_700)

        y = top + 14
        y += engine.draw_wrapped_text(intro, m + 5, y, cw - 10, font_size=10) + 2

        rows = [
            (
                s.short_name,
                format_currency(value + value * s.impact / 100),
                format_pct(s.impact),
                s.vulnerable_assets,
                s.hedging,
            )
            for s in summary.scenarios
        ]
        table_y = y + 4
        table_y += engine.draw_table(
            SCENARIO_TABLE_HEADER,
            rows,
            x=m + 3,
            y=table_y,
            width=cw - 6,
            row_height=SCENARIO_ROW_HEIGHT,
            column_widths=SCENARIO_COLUMN_WIDTHS,
            header_fill=CYAN_100,
        )

        engine.draw_text(
            "Portfolio Loss Visualization", m + 5, table_y + 6, font_size=10, style="italic"
        )
        bar_base = table_y + 12
        bar_x = m + LOSS_BAR_LABEL_WIDTH
        max_length = cw - LOSS_BAR_LABEL_WIDTH - 20
        for i, s in enumerate(summary.scenarios[:LOSS_BAR_COUNT]):
            bar_y = bar_base + i * LOSS_BAR_PITCH
            engine.draw_text(s.short_name, m + 1, bar_y + 3, font_size=7)
            engine.draw_proportional_bar(
                max_length,
                s.impact,
                self.config.layout.loss_bar_scale,
                x=bar_x,
                y=bar_y,
                height=LOSS_BAR_HEIGHT,
                fill=SEVERITY_COLORS[impact_severity(s.impact)],
                label=format_pct(s.impact),
            )

        engine.move_to(bar_base + LOSS_BAR_COUNT * LOSS_BAR_PITCH + 12)

    def _draw_executive_summary(
        self,
        engine: DocumentLayoutEngine,
        summary: StressSummary,
    ) -> None:
        m, cw = self.geometry.margin, self.geometry.content_width
        engine.set_text_color(TEAL_900)
        engine.draw_text(
            "STRESS TESTING EXECUTIVE SUMMARY", m + 5, engine.y, font_size=13, style="bold"
        )
        engine.set_text_color(NAVY_700)
        engine.advance(10)

        history = EXECUTIVE_HISTORY.format(
            category=str(summary.assessment.risk_level).lower(),
            worst_pct=format_pct(summary.worst_case_pct),
            worst_amount=format_currency(abs(summary.worst_case_amount)),
            value=format_currency(summary.portfolio_value),
        )
        for paragraph, gap in ((EXECUTIVE_VULNERABILITIES, 2), (history, 0)):
            height = engine.measure_text(paragraph, cw - 10)
            engine.ensure_space(height)
            engine.advance(
                engine.draw_wrapped_text(paragraph, m + 5, engine.y, cw - 10) + gap
            )

        engine.advance(8)
        engine.set_text_color(SLATE_600)
        height = engine.measure_text(DISCLAIMER, cw - 10, style="italic")
        engine.ensure_space(height)
        engine.advance(
            engine.draw_wrapped_text(DISCLAIMER, m + 5, engine.y, cw - 10, style="italic")
        )
        engine.set_text_color(NAVY_700)
        engine.advance(6)

    def _draw_submitter(self, engine: DocumentLayoutEngine, contact: ContactInfo) -> None:
        m, cw = self.geometry.margin, self.geometry.content_width
        engine.ensure_space(SUBMITTER_BOX_HEIGHT)
        y = engine.y
        engine.draw_box(m, y, cw, SUBMITTER_BOX_HEIGHT, GRAY_50)
        engine.draw_text("SUBMITTER INFORMATION", m + 5, y + 8, font_size=14, style="bold")
        lines = (
            f"Full Legal Name: {contact.full_name}",
            f"Email Address: {contact.email}",
            f"Primary Phone: {contact.phone}",
            f"Street Address: {contact.address}",
            f"City: {contact.city}",
            f"State: {contact.state}",
            f"ZIP/Postal Code: {contact.zipcode}",
        )
        for i, line in enumerate(lines):
            engine.draw_text(line, m + 5, y + 16 + i * SUBMITTER_LINE_PITCH, font_size=10)
        engine.advance(SUBMITTER_ADVANCE)

    def _draw_profile(self, engine: DocumentLayoutEngine, profile: FinancialProfile) -> None:
        m, cw = self.geometry.margin, self.geometry.content_width
        engine.ensure_space(PROFILE_BOX_HEIGHT)
        y = engine.y
        engine.draw_box(m, y, cw, PROFILE_BOX_HEIGHT, GRAY_50)
        engine.draw_text("FINANCIAL PROFILE", m + 5, y + 8, font_size=14, style="bold")
        properties = ", ".join(profile.properties) if profile.properties else "None"
        alternatives = "Yes" if profile.has_alternative_investments else "No"
        lines = (
            f"Age: {profile.age}",
            f"Annual Income: {profile.income}",
            f"Properties Owned: {properties}",
            f"Alternative Investments: {alternatives}",
        )
        for i, line in enumerate(lines):
            engine.draw_text(line, m + 5, y + 16 + i * SUBMITTER_LINE_PITCH, font_size=10)
        engine.advance(PROFILE_ADVANCE)

    def _draw_strategy(self, engine: DocumentLayoutEngine, summary: StressSummary) -> None:
        m, cw = self.geometry.margin, self.geometry.content_width
        text_width = cw - 15

        def heading(text: str, first_item_height: float) -> None:
            # keep a heading on the same page as its first item
            engine.ensure_space(8 + first_item_height)
            engine.set_text_color(TEAL_900)
            engine.draw_text(text, m + 5, engine.y, font_size=13, style="bold")
            engine.set_text_color(NAVY_700)
            engine.advance(8)

        def bullets(items: tuple[str, ...]) -> None:
            for item in items:
                height = engine.measure_text(item, text_width)
                engine.ensure_space(height + 2)
                engine.draw_text("-", m + 7, engine.y)
                engine.advance(engine.draw_wrapped_text(item, m + 12, engine.y, text_width) + 2)

        recommendations = summary.assessment.recommendations
        first = engine.measure_text(recommendations[0], text_width) if recommendations else 0
        heading("RECOMMENDED INVESTMENT STRATEGY", first)
        bullets(recommendations)

        engine.advance(4)
        allocation = summary.allocation.as_dict()
        amounts = allocation_amounts(summary.allocation, summary.portfolio_value)
        heading("MODEL ASSET ALLOCATION", ALLOCATION_ROW_PITCH * len(allocation))
        bar_x = m + 35
        max_length = cw - 35 - 40
        for asset, pct in allocation.items():
            engine.draw_text(asset.capitalize(), m + 5, engine.y + 3, font_size=10)
            engine.draw_proportional_bar(
                max_length,
                pct,
                self.config.layout.allocation_bar_scale,
                x=bar_x,
                y=engine.y,
                fill=ASSET_COLORS[asset],
                label=f"{pct}% ({format_currency(amounts[asset])})",
            )
            engine.set_text_color(SLATE_600)
            engine.draw_text(
                ", ".join(ASSET_CLASS_RISKS[asset]),
                bar_x, engine.y + ALLOCATION_NOTE_OFFSET,
                font_size=7, style="italic",
            )
            engine.set_text_color(NAVY_700)
            engine.advance(ALLOCATION_ROW_PITCH)

        engine.advance(4)
        first = engine.measure_text(summary.mitigations[0], text_width)
        heading(f"MITIGATION STRATEGIES ({summary.assessment.risk_level.upper()})", first)
        bullets(summary.mitigations)


# ── Persistence ───────────────────────────────────────────────────────────────


def persist_document(document: RenderedDocument, path: Path) -> Path:
    """Write ``document`` to ``path`` atomically (temp file + rename)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = document.surface.to_bytes()
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path


def generate_report(
    data: ReportData,
    output_path: Path | None = None,
    config: AppConfig | None = None,
    report_date: date | None = None,
) -> ReportResult:
    """Render and persist one report with the ReportLab backend."""
    return ReportGenerator(config, report_date=report_date).generate(data, output_path)


async def generate_report_async(
    data: ReportData,
    output_path: Path | None = None,
    config: AppConfig | None = None,
    report_date: date | None = None,
) -> ReportResult:
    """Non-blocking ``generate_report``; resolves once the file is written."""
    return await asyncio.to_thread(generate_report, data, output_path, config, report_date)


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")
