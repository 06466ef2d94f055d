"""
Shared pytest fixtures for the risk report test suite.

Provides:
  - ``RecordingSurface``: an in-memory ``DrawingSurface`` that records every
    primitive, so layout tests can assert on positions without parsing PDFs.
  - Sample domain object factories for use in multiple test modules.
"""

from __future__ import annotations

import textwrap
from datetime import date

import pytest

from risk_report.config import AppConfig
from risk_report.layout.cursor import PageGeometry
from risk_report.models.assessment import Assessment
from risk_report.models.questionnaire import Answer
from risk_report.models.report import ContactInfo, FinancialProfile, ReportData
from risk_report.questionnaire.questions import QUESTIONS
from risk_report.scoring.recommendations import RECOMMENDATIONS
from risk_report.taxonomy.risk_taxonomy import RiskCategory

# Approximate glyph width per point of font size, in mm.
CHAR_WIDTH_PER_PT = 0.18


class RecordingSurface:
    """``DrawingSurface`` that keeps a log of calls instead of drawing.

    ``ops`` holds ``(op, page, *args)`` tuples in call order.
    """

    def __init__(self, geometry: PageGeometry | None = None, title: str = "", author: str = "") -> None:
        self.geometry = geometry or PageGeometry()
        self.title = title
        self.author = author
        self.ops: list[tuple] = []
        self.font = ("helvetica", "normal", 10.0)
        self.text_color = (0, 0, 0)
        self.fill_color = (0, 0, 0)
        self._pages = 1

    def set_font(self, family: str, style: str, size: float) -> None:
        self.font = (family, style, size)

    def set_text_color(self, rgb) -> None:
        self.text_color = rgb

    def set_fill_color(self, rgb) -> None:
        self.fill_color = rgb

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        self.ops.append(("rect", self._pages, x, y, width, height, self.fill_color))

    def text(self, text: str, x: float, y: float, align: str = "left") -> None:
        self.ops.append(("text", self._pages, text, x, y, align, self.text_color, self.font))

    def split_text(self, text: str, max_width: float) -> list[str]:
        chars = max(1, int(max_width / (CHAR_WIDTH_PER_PT * self.font[2])))
        return textwrap.wrap(text, width=chars)

    def add_page(self) -> None:
        self.ops.append(("add_page", self._pages))
        self._pages += 1

    @property
    def page_count(self) -> int:
        return self._pages

    def to_bytes(self) -> bytes:
        return b"%PDF-recorded\n"

    # ── Query helpers ─────────────────────────────────────────────────────────

    def texts(self, page: int | None = None) -> list[tuple]:
        return [op for op in self.ops if op[0] == "text" and (page is None or op[1] == page)]

    def rects(self, page: int | None = None) -> list[tuple]:
        return [op for op in self.ops if op[0] == "rect" and (page is None or op[1] == page)]

    def find_text(self, needle: str) -> tuple | None:
        """First text op whose string contains ``needle``."""
        for op in self.texts():
            if needle in op[2]:
                return op
        return None


class FailingSurface(RecordingSurface):
    """Surface whose page breaks raise, for failure-path tests."""

    def add_page(self) -> None:
        raise RuntimeError("backend exploded")


@pytest.fixture
def geometry() -> PageGeometry:
    return PageGeometry()


@pytest.fixture
def surface(geometry: PageGeometry) -> RecordingSurface:
    return RecordingSurface(geometry)


@pytest.fixture
def recording_factory():
    """``ReportGenerator`` surface factory; built surfaces land in ``.built``."""
    built: list[RecordingSurface] = []

    def factory(geometry: PageGeometry, title: str, author: str) -> RecordingSurface:
        s = RecordingSurface(geometry, title, author)
        built.append(s)
        return s

    factory.built = built
    return factory


@pytest.fixture
def failing_factory():
    """Surface factory whose surfaces raise on the first page break."""
    def factory(geometry: PageGeometry, title: str, author: str) -> FailingSurface:
        return FailingSurface(geometry, title, author)

    return factory


# ── Sample domain object factories ────────────────────────────────────────────

@pytest.fixture
def lowest_answers() -> list[Answer]:
    """Answers selecting the lowest-scoring option of every question (score 25)."""
    return [
        Answer(question_id=q.id, value=q.scores.index(min(q.scores)) + 1)
        for q in QUESTIONS
    ]


@pytest.fixture
def highest_answers() -> list[Answer]:
    """Answers selecting the highest-scoring option of every question (score 100)."""
    return [
        Answer(question_id=q.id, value=q.scores.index(max(q.scores)) + 1)
        for q in QUESTIONS
    ]


@pytest.fixture
def moderate_assessment() -> Assessment:
    return Assessment(
        score=50,
        risk_level=RiskCategory.MODERATE,
        recommendations=RECOMMENDATIONS[RiskCategory.MODERATE],
    )


@pytest.fixture
def sample_contact() -> ContactInfo:
    return ContactInfo(
        first_name="Jordan",
        last_name="Rivera",
        email="jordan.rivera@example.com",
        phone="555-0142",
        address="12 Harbor Lane",
        city="Portland",
        state="OR",
        zipcode="97201",
    )


@pytest.fixture
def sample_profile() -> FinancialProfile:
    return FinancialProfile(
        age="35-44",
        income="$100,000-$149,999",
        properties=("Primary residence",),
        has_alternative_investments=True,
    )


@pytest.fixture
def sample_report_data(
    moderate_assessment: Assessment,
    sample_contact: ContactInfo,
    sample_profile: FinancialProfile,
) -> ReportData:
    return ReportData(
        assessment=moderate_assessment,
        contact_info=sample_contact,
        profile=sample_profile,
    )


@pytest.fixture
def report_date() -> date:
    return date(2024, 3, 5)


@pytest.fixture
def app_config(tmp_path) -> AppConfig:
    """Built-in defaults with output redirected into ``tmp_path``."""
    return AppConfig.model_validate(
        {"report": {"output_dir": str(tmp_path / "reports")}}
    )
