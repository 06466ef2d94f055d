"""
Report input models.

``ReportData`` is the complete, read-only bundle handed to the report
generator once per document.  ``ContactInfo`` and ``FinancialProfile`` are
display-only; nothing is derived from them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from risk_report.models.assessment import Assessment
from risk_report.models.questionnaire import Answer


class ContactInfo(BaseModel):
    """Submitter contact details printed in the submitter box."""

    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    email: str
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zipcode: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class FinancialProfile(BaseModel):
    """Self-reported demographic and holdings summary.

    Attributes:
        age: Age band as entered, e.g. ``"35-44"``.
        income: Income band as entered, e.g. ``"$100,000-$149,999"``.
        properties: Property types owned (free text labels).
        has_alternative_investments: Whether the respondent holds alternatives.
    """

    model_config = ConfigDict(frozen=True)

    age: str
    income: str
    properties: tuple[str, ...] = ()
    has_alternative_investments: bool = False


class ReportData(BaseModel):
    """Everything one report needs.

    Attributes:
        assessment: Finished ``Assessment`` (scored upstream).
        contact_info: Submitter details.
        profile: Optional financial profile; its section is skipped when ``None``.
        answers: Raw answers, carried for reference and not laid out.
    """

    model_config = ConfigDict(frozen=True)

    assessment: Assessment
    contact_info: ContactInfo
    profile: Optional[FinancialProfile] = None
    answers: Optional[tuple[Answer, ...]] = None
