"""
Answer file parsing.

Two JSON shapes are accepted::

    {"age": 3, "income": 4, ...}                     # mapping form
    [{"question_id": "age", "value": 3}, ...]        # record form

Values are 1-based option indices.  Range checks against the question bank
happen at scoring time, not here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from risk_report.models.questionnaire import Answer


class AnswerFileError(ValueError):
    """Raised when an answer file cannot be read or has the wrong shape."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" in {path}" if path else ""
        super().__init__(f"Invalid answers{where}: {reason}")


def parse_answers(raw: Any, path: Path | None = None) -> list[Answer]:
    """Build ``Answer`` objects from a decoded JSON payload."""
    if isinstance(raw, dict):
        items = [{"question_id": k, "value": v} for k, v in raw.items()]
    elif isinstance(raw, list):
        items = raw
    else:
        raise AnswerFileError(path, "expected an object or an array.")

    answers: list[Answer] = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise AnswerFileError(path, f"entry #{i} is not an object.")
        try:
            answers.append(Answer(**item))
        except ValidationError as exc:
            raise AnswerFileError(path, f"entry #{i}: {exc}") from exc
    return answers


def load_answers(path: Path) -> list[Answer]:
    """Read and parse a JSON answer file."""
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        raise AnswerFileError(path, str(exc)) from exc
    return parse_answers(raw, path)
