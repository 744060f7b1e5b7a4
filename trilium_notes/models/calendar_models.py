"""Pydantic input models for journal (calendar) operations."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

_WEEK_RE = re.compile(r"^\d{4}-W\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")
_YEAR_RE = re.compile(r"^\d{4}$")


class DateInput(BaseModel):
    """Input model for get_day_note and get_inbox_note tools.

    ``date`` defaults to today (server local time).
    """

    date: Optional[str] = Field(
        None,
        description="Date in YYYY-MM-DD format (defaults to today)",
        examples=["2024-01-15"],
    )

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        cleaned = v.strip()
        try:
            date.fromisoformat(cleaned)
        except ValueError:
            raise ValueError(
                f"Invalid date '{v}'. Expected YYYY-MM-DD, e.g. '2024-01-15'."
            ) from None
        if len(cleaned) != 10:
            raise ValueError(f"Invalid date '{v}'. Expected YYYY-MM-DD, e.g. '2024-01-15'.")
        return cleaned

    def resolved_date(self) -> str:
        return self.date or date.today().isoformat()


class PeriodNoteInput(BaseModel):
    """Input model for get_period_note tool.

    Examples:
        >>> PeriodNoteInput(period="2024-W03")
        >>> PeriodNoteInput(period="2024-01")
        >>> PeriodNoteInput(period="2024")
    """

    period: str = Field(
        min_length=1,
        description="Week (YYYY-Www), month (YYYY-MM) or year (YYYY)",
        examples=["2024-W03", "2024-01", "2024"],
    )

    @field_validator('period')
    @classmethod
    def validate_period(cls, v: str) -> str:
        cleaned = v.strip()
        if not (_WEEK_RE.match(cleaned) or _MONTH_RE.match(cleaned) or _YEAR_RE.match(cleaned)):
            raise ValueError(
                f"Invalid period '{v}'. Use a week ('2024-W03'), month ('2024-01') or year ('2024')."
            )
        return cleaned

    @property
    def kind(self) -> str:
        if _WEEK_RE.match(self.period):
            return "week"
        if _MONTH_RE.match(self.period):
            return "month"
        return "year"
