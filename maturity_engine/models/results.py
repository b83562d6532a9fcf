"""Pydantic models for engine outputs.

These are computed values handed to the persistence/response layer; none of
them is read back as engine input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from maturity_engine.models.base import CamelModel
from maturity_engine.models.survey_schema import MaturityLevel


class ValidationResult(CamelModel):
    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @classmethod
    def from_messages(cls, errors: List[str], warnings: List[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=list(errors), warnings=list(warnings))


class SurveyResult(CamelModel):
    survey_id: str
    organization_id: str
    overall_score: float
    domain_scores: Dict[str, float]
    # domain_id -> stakeholder_id -> weighted contribution
    stakeholder_contributions: Dict[str, Dict[str, float]]
    maturity_level: Optional[MaturityLevel] = None
    recommendations: List[str] = Field(default_factory=list)
    response_count: int = 0
    stakeholder_breakdown: Dict[str, int] = Field(default_factory=dict)
    completion_date: Optional[datetime] = None


class StakeholderStatistics(CamelModel):
    name: str
    total_responses: int
    completed_responses: int
    completion_rate: float
    unique_organizations: int


class DomainCoverage(CamelModel):
    name: str
    question_count: int
    total_answers: int
    possible_answers: int
    coverage_rate: float


class Statistics(CamelModel):
    total_responses: int
    completed_responses: int
    partial_responses: int
    completion_rate: float
    unique_organizations: int
    organization_counts: Dict[str, int]
    average_completion_time_ms: float
    average_completion_time_minutes: int
    stakeholder_breakdown: Dict[str, StakeholderStatistics]
    domain_coverage: Dict[str, DomainCoverage]


class QuestionSummary(CamelModel):
    total_questions: int
    questions_by_domain: Dict[str, int]
    questions_by_stakeholder: Dict[str, int]
    questions_by_type: Dict[str, int]


class StakeholderPreview(CamelModel):
    stakeholder_id: str
    stakeholder: str
    question_count: int
    estimated_minutes: int
    domains: List[str]


class StakeholderRecommendation(CamelModel):
    stakeholder_id: str
    confidence: float
    reason: str


__all__ = [
    "ValidationResult",
    "SurveyResult",
    "StakeholderStatistics",
    "DomainCoverage",
    "Statistics",
    "QuestionSummary",
    "StakeholderPreview",
    "StakeholderRecommendation",
]
