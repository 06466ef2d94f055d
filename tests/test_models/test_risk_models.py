"""Tests for risk_report.models (questionnaire, assessment, report)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from risk_report.models.assessment import Assessment, StressScenario
from risk_report.models.questionnaire import Answer, Question
from risk_report.models.report import ContactInfo, ReportData
from risk_report.taxonomy.risk_taxonomy import RiskCategory, ScenarioGroup, Vulnerability


# ── Question ──────────────────────────────────────────────────────────────────


def test_question_max_score_uses_weight() -> None:
    q = Question(id="q", text="Q", options=("a", "b"), scores=(2, 6), weight=1.5)
    assert q.max_score == 9.0


def test_question_scores_must_align() -> None:
    with pytest.raises(ValidationError, match="align"):
        Question(id="q", text="Q", options=("a", "b"), scores=(1,))


def test_question_needs_options() -> None:
    with pytest.raises(ValidationError):
        Question(id="q", text="Q", options=(), scores=())


@pytest.mark.parametrize("weight", [0, -1.0])
def test_question_weight_positive(weight: float) -> None:
    with pytest.raises(ValidationError):
        Question(id="q", text="Q", options=("a",), scores=(1,), weight=weight)


def test_answer_is_frozen() -> None:
    answer = Answer(question_id="q", value=1)
    with pytest.raises(ValidationError):
        answer.value = 2  # type: ignore[misc]


# ── Assessment ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize("score", [-1, 101])
def test_assessment_score_range(score: int) -> None:
    with pytest.raises(ValidationError):
        Assessment(score=score, risk_level=RiskCategory.MODERATE)


def test_assessment_accepts_category_string() -> None:
    a = Assessment(score=70, risk_level="Aggressive")
    assert a.risk_level is RiskCategory.AGGRESSIVE


# ── StressScenario ────────────────────────────────────────────────────────────


def _scenario(impact: float) -> StressScenario:
    return StressScenario(
        name="Test",
        short_name="T",
        description="d",
        group=ScenarioGroup.ECONOMIC,
        impact=impact,
        recovery_time="1-2 months",
        vulnerability=Vulnerability.LOW,
    )


def test_scenario_impact_zero_allowed() -> None:
    assert _scenario(0.0).impact == 0.0


def test_scenario_impact_positive_rejected() -> None:
    with pytest.raises(ValidationError, match="zero or negative"):
        _scenario(0.5)


# ── Report input ──────────────────────────────────────────────────────────────


def test_contact_full_name() -> None:
    c = ContactInfo(first_name="Ada", last_name="Lovelace", email="ada@example.com")
    assert c.full_name == "Ada Lovelace"
    assert c.zipcode == ""


def test_report_data_profile_optional(moderate_assessment, sample_contact) -> None:
    data = ReportData(assessment=moderate_assessment, contact_info=sample_contact)
    assert data.profile is None
    assert data.answers is None
