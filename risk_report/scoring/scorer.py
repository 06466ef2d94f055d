"""
Questionnaire scoring: converts ordered answers into a normalized 0–100
score and a ``RiskCategory``.

Score formula
-------------
    maximum  = sum(max(q.scores) * q.weight  for q in questions)
    achieved = sum(q.scores[a.value - 1] * q.weight  for a in answers
                   if a.question_id is a known question)
    score    = round(achieved / maximum * 100)        # half rounds up

Answers for unknown question ids contribute nothing and are not an error.
An option index outside ``[1, len(q.options)]`` raises ``InvalidAnswerIndex``;
a second answer to the same question raises ``DuplicateAnswer``.  Together
they keep ``achieved <= maximum``.

Category thresholds live in ``scoring.recommendations`` with the advice
tied to them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from risk_report.models.assessment import Assessment
from risk_report.models.questionnaire import Answer, Question
from risk_report.questionnaire.questions import QUESTIONS
from risk_report.scoring.recommendations import categorize, generate_recommendations

logger = logging.getLogger(__name__)


# ── Custom exceptions ─────────────────────────────────────────────────────────


class ScoringError(ValueError):
    """Raised when a questionnaire cannot be scored."""


class InvalidAnswerIndex(ScoringError):
    """Raised when an answer selects an option the question does not have.

    Attributes:
        question_id:  Id of the answered question.
        value:        The 1-based option index supplied.
        option_count: Number of options the question defines.
    """

    def __init__(self, question_id: str, value: int, option_count: int) -> None:
        self.question_id  = question_id
        self.value        = value
        self.option_count = option_count
        super().__init__(
            f"Answer to '{question_id}' selects option {value}; "
            f"valid options are 1..{option_count}."
        )


class DuplicateAnswer(ScoringError):
    """Raised when one question is answered more than once.

    Attributes:
        question_id: Id of the question answered twice.
    """

    def __init__(self, question_id: str) -> None:
        self.question_id = question_id
        super().__init__(f"Question '{question_id}' is answered more than once.")


# ── Scoring ───────────────────────────────────────────────────────────────────


def max_possible_score(questions: Iterable[Question] = QUESTIONS) -> float:
    """Sum of each question's best weighted score."""
    return sum(q.max_score for q in questions)


def achieved_score(
    answers: Iterable[Answer],
    questions: Sequence[Question] = QUESTIONS,
) -> float:
    """Weighted total of the selected option scores.

    Raises:
        InvalidAnswerIndex: If an answer's ``value`` is outside the question's
            option range.
        DuplicateAnswer: If a known question appears in more than one answer.
    """
    by_id = {q.id: q for q in questions}
    seen: set[str] = set()
    total = 0.0
    for answer in answers:
        question = by_id.get(answer.question_id)
        if question is None:
            logger.debug("Skipping answer for unknown question '%s'", answer.question_id)
            continue
        if question.id in seen:
            raise DuplicateAnswer(question.id)
        seen.add(question.id)
        if not 1 <= answer.value <= len(question.scores):
            raise InvalidAnswerIndex(question.id, answer.value, len(question.scores))
        total += question.scores[answer.value - 1] * question.weight
    return total


def normalize_score(achieved: float, maximum: float) -> int:
    """Scale ``achieved`` onto 0–100, rounding half up."""
    if maximum <= 0:
        raise ScoringError("Question bank has no attainable score; cannot normalize.")
    return math.floor(achieved / maximum * 100 + 0.5)


def calculate_score(
    answers: Iterable[Answer],
    questions: Sequence[Question] = QUESTIONS,
) -> Assessment:
    """Score a set of answers and build the ``Assessment``.

    Args:
        answers:   Respondent answers, in any order.
        questions: Question bank to score against (defaults to the built-in bank).

    Returns:
        Frozen ``Assessment`` with score, category and recommendations.

    Raises:
        InvalidAnswerIndex: On an out-of-range option index.
        DuplicateAnswer: If a question is answered twice.
        ScoringError: If the question bank is empty.
    """
    answers = list(answers)
    maximum = max_possible_score(questions)
    achieved = achieved_score(answers, questions)
    score = normalize_score(achieved, maximum)
    category = categorize(score)

    logger.info(
        "Scored %d answers | achieved=%.1f max=%.1f score=%d category=%s",
        len(answers), achieved, maximum, score, category,
    )
    return Assessment(
        score=score,
        risk_level=category,
        recommendations=generate_recommendations(score),
    )
