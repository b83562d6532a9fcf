"""Pydantic model for one respondent's survey submission."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from maturity_engine.models.base import CamelModel


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive timestamp; aware timestamps pass through unchanged."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SurveyResponse(CamelModel):
    id: str
    survey_id: str
    organization_id: str
    respondent_id: str
    stakeholder: str
    expertise: List[str] = Field(default_factory=list)
    # question_id -> answer; the answer shape depends on the question type
    responses: Dict[str, Any] = Field(default_factory=dict)
    start_time: datetime
    completion_time: Optional[datetime] = None
    progress: int = Field(default=0, ge=0, le=100)
    metadata: Optional[Dict[str, Any]] = None

    @field_validator("start_time", "completion_time")
    @classmethod
    def _naive_is_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Mixed naive/aware timestamps cannot be compared or subtracted
        return as_utc(v)

    @property
    def is_complete(self) -> bool:
        return self.progress == 100


__all__ = ["SurveyResponse", "as_utc"]
