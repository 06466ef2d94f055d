"""Tests for risk_report/questionnaire/answers.py and the question bank."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from risk_report.questionnaire.answers import AnswerFileError, load_answers, parse_answers
from risk_report.questionnaire.questions import QUESTIONS, QUESTIONS_BY_ID


# ── Question bank ─────────────────────────────────────────────────────────────


def test_bank_has_thirteen_unique_questions() -> None:
    assert len(QUESTIONS) == 13
    assert len(QUESTIONS_BY_ID) == 13


def test_bank_min_and_max() -> None:
    assert sum(max(q.scores) * q.weight for q in QUESTIONS) == 100
    assert sum(min(q.scores) * q.weight for q in QUESTIONS) == 25


# ── parse_answers ─────────────────────────────────────────────────────────────


def test_parse_mapping_form() -> None:
    answers = parse_answers({"game_show": 2, "risk_word": 4})
    assert [(a.question_id, a.value) for a in answers] == [("game_show", 2), ("risk_word", 4)]


def test_parse_record_form() -> None:
    answers = parse_answers([{"question_id": "game_show", "value": 1}])
    assert answers[0].question_id == "game_show"
    assert answers[0].value == 1


def test_parse_rejects_scalar() -> None:
    with pytest.raises(AnswerFileError, match="object or an array"):
        parse_answers(42)


def test_parse_rejects_non_object_entry() -> None:
    with pytest.raises(AnswerFileError, match="entry #1"):
        parse_answers([{"question_id": "a", "value": 1}, "b"])


def test_parse_rejects_non_integer_value() -> None:
    with pytest.raises(AnswerFileError):
        parse_answers({"game_show": "second"})


# ── load_answers ──────────────────────────────────────────────────────────────


def test_load_answers_from_file(tmp_path: Path) -> None:
    path = tmp_path / "answers.json"
    path.write_text(json.dumps({"game_show": 3}), encoding="utf-8")
    answers = load_answers(path)
    assert len(answers) == 1


def test_load_answers_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(AnswerFileError) as exc_info:
        load_answers(path)
    assert exc_info.value.path == path


def test_load_answers_missing_file(tmp_path: Path) -> None:
    with pytest.raises(AnswerFileError):
        load_answers(tmp_path / "nope.json")
