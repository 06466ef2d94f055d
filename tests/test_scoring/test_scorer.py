"""
Tests for risk_report/scoring/scorer.py.

What we test
------------
max_possible_score():
  - Built-in bank sums to 100; weights multiply the best option.

calculate_score():
  - Lowest answers give 25 (Conservative); highest give 100 (Aggressive).
  - Category boundaries: 34 -> Conservative, 35/64 -> Moderate, 65 -> Aggressive.
  - Unknown question ids are skipped, not rejected.
  - Out-of-range option indexes raise InvalidAnswerIndex.
  - A question answered twice raises DuplicateAnswer instead of inflating
    the score past 100.
  - Halves round up (12.5 -> 13).
  - Recommendations match the category.

normalize_score():
  - Raises ScoringError when the maximum is not positive.
"""

from __future__ import annotations

import pytest

from risk_report.models.questionnaire import Answer, Question
from risk_report.questionnaire.questions import QUESTIONS
from risk_report.scoring.recommendations import RECOMMENDATIONS
from risk_report.scoring.scorer import (
    DuplicateAnswer,
    InvalidAnswerIndex,
    ScoringError,
    achieved_score,
    calculate_score,
    categorize,
    max_possible_score,
    normalize_score,
)
from risk_report.taxonomy.risk_taxonomy import RiskCategory


# ── Helpers ────────────────────────────────────────────────────────────────────

# Single question whose option scores are the category boundary values.
_BOUNDARY_BANK = (
    Question(
        id="boundary",
        text="Pick one",
        options=("a", "b", "c", "d", "e"),
        scores=(34, 35, 64, 65, 100),
    ),
)


def _answer(qid: str, value: int) -> Answer:
    return Answer(question_id=qid, value=value)


# ── max_possible_score ─────────────────────────────────────────────────────────


def test_builtin_bank_max_is_100() -> None:
    assert max_possible_score() == 100


def test_max_score_applies_weight() -> None:
    bank = (
        Question(id="a", text="A", options=("x", "y"), scores=(1, 3), weight=2.0),
        Question(id="b", text="B", options=("x", "y"), scores=(1, 2)),
    )
    assert max_possible_score(bank) == 8


# ── calculate_score: extremes ─────────────────────────────────────────────────


def test_lowest_answers_score_25(lowest_answers: list[Answer]) -> None:
    assessment = calculate_score(lowest_answers)
    assert assessment.score == 25
    assert assessment.risk_level == RiskCategory.CONSERVATIVE


def test_highest_answers_score_100(highest_answers: list[Answer]) -> None:
    assessment = calculate_score(highest_answers)
    assert assessment.score == 100
    assert assessment.risk_level == RiskCategory.AGGRESSIVE


def test_no_answers_scores_zero() -> None:
    assessment = calculate_score([])
    assert assessment.score == 0
    assert assessment.risk_level == RiskCategory.CONSERVATIVE


def test_answer_order_does_not_matter(highest_answers: list[Answer]) -> None:
    forward = calculate_score(highest_answers)
    backward = calculate_score(list(reversed(highest_answers)))
    assert forward == backward


# ── calculate_score: boundaries ───────────────────────────────────────────────


@pytest.mark.parametrize(
    "option, expected_score, expected_category",
    [
        (1, 34, RiskCategory.CONSERVATIVE),
        (2, 35, RiskCategory.MODERATE),
        (3, 64, RiskCategory.MODERATE),
        (4, 65, RiskCategory.AGGRESSIVE),
        (5, 100, RiskCategory.AGGRESSIVE),
    ],
)
def test_category_boundaries(
    option: int, expected_score: int, expected_category: RiskCategory
) -> None:
    assessment = calculate_score([_answer("boundary", option)], _BOUNDARY_BANK)
    assert assessment.score == expected_score
    assert assessment.risk_level == expected_category


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, RiskCategory.CONSERVATIVE),
        (34, RiskCategory.CONSERVATIVE),
        (35, RiskCategory.MODERATE),
        (64, RiskCategory.MODERATE),
        (65, RiskCategory.AGGRESSIVE),
        (100, RiskCategory.AGGRESSIVE),
    ],
)
def test_categorize(score: int, expected: RiskCategory) -> None:
    assert categorize(score) == expected


# ── calculate_score: input handling ───────────────────────────────────────────


def test_unknown_question_id_is_skipped(highest_answers: list[Answer]) -> None:
    answers = [*highest_answers, _answer("not_a_question", 7)]
    assert calculate_score(answers).score == 100


def test_only_unknown_ids_score_zero() -> None:
    assert achieved_score([_answer("nope", 1), _answer("also_nope", 2)]) == 0


@pytest.mark.parametrize("value", [0, -1, 5])
def test_out_of_range_index_raises(value: int) -> None:
    # friend_description has four options
    with pytest.raises(InvalidAnswerIndex) as exc_info:
        calculate_score([_answer("friend_description", value)])
    err = exc_info.value
    assert err.question_id == "friend_description"
    assert err.value == value
    assert err.option_count == 4
    assert isinstance(err, ScoringError)


def test_repeated_answers_raise_duplicate_answer() -> None:
    answers = [_answer("friend_description", 1)] * 13
    with pytest.raises(DuplicateAnswer) as exc_info:
        calculate_score(answers)
    assert exc_info.value.question_id == "friend_description"
    assert isinstance(exc_info.value, ScoringError)


def test_duplicate_detected_even_with_different_values(
    highest_answers: list[Answer],
) -> None:
    answers = [*highest_answers, _answer(highest_answers[0].question_id, 1)]
    with pytest.raises(DuplicateAnswer):
        achieved_score(answers)


def test_repeated_unknown_ids_are_still_skipped() -> None:
    assert achieved_score([_answer("nope", 1), _answer("nope", 1)]) == 0


def test_last_option_is_valid() -> None:
    q = QUESTIONS[0]
    achieved = achieved_score([_answer(q.id, len(q.options))])
    assert achieved == q.scores[-1]


def test_weighted_achieved_score() -> None:
    bank = (
        Question(id="a", text="A", options=("x", "y"), scores=(1, 3), weight=2.0),
    )
    assert achieved_score([_answer("a", 2)], bank) == 6.0


# ── Rounding ──────────────────────────────────────────────────────────────────


def test_half_rounds_up() -> None:
    bank = (Question(id="h", text="H", options=("lo", "hi"), scores=(1, 8)),)
    # 1 / 8 * 100 = 12.5
    assert calculate_score([_answer("h", 1)], bank).score == 13


def test_normalize_score_rejects_zero_maximum() -> None:
    with pytest.raises(ScoringError):
        normalize_score(0, 0)


def test_empty_bank_raises() -> None:
    with pytest.raises(ScoringError):
        calculate_score([], ())


# ── Recommendations wiring ────────────────────────────────────────────────────


def test_recommendations_follow_category(lowest_answers: list[Answer]) -> None:
    assessment = calculate_score(lowest_answers)
    assert assessment.recommendations == RECOMMENDATIONS[RiskCategory.CONSERVATIVE]
    assert len(assessment.recommendations) == 4
