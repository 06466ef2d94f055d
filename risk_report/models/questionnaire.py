"""
Questionnaire models.

``Question`` is one scored multiple-choice item: option labels and their
integer scores are index-aligned, and the question's contribution is
multiplied by ``weight``.

``Answer`` is a respondent's pick for one question, as a **1-based** option
index.  Answers are not checked against the question bank here; unknown
question ids are skipped by the scorer and out-of-range indexes are rejected
there (see ``risk_report.scoring.scorer``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Question(BaseModel):
    """A scored multiple-choice question.

    Attributes:
        id: Stable identifier, e.g. ``"game_show"``.
        text: Prompt shown to the respondent.
        options: Ordered option labels.
        scores: Integer score per option, index-aligned with ``options``.
        weight: Multiplier applied to the selected score; must be > 0.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    options: tuple[str, ...]
    scores: tuple[int, ...]
    weight: float = 1.0

    @field_validator("weight")
    @classmethod
    def validate_weight_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"weight must be > 0, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_scores_aligned(self) -> "Question":
        if not self.options:
            raise ValueError(f"Question '{self.id}' has no options.")
        if len(self.scores) != len(self.options):
            raise ValueError(
                f"Question '{self.id}': {len(self.scores)} scores for "
                f"{len(self.options)} options; scores must align with options."
            )
        return self

    @property
    def max_score(self) -> float:
        """Highest weighted score this question can contribute."""
        return max(self.scores) * self.weight


class Answer(BaseModel):
    """A respondent's selection for one question.

    Attributes:
        question_id: Id of the ``Question`` being answered.
        value: Selected option, 1-based.
    """

    model_config = ConfigDict(frozen=True)

    question_id: str
    value: int
