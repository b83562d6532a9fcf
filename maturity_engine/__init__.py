"""Scoring and aggregation core for multi-stakeholder maturity surveys.

This package exposes pure data-in/data-out operations: question filtering
per respondent, response validation, weighted-average scoring with maturity
classification, and response statistics. Persistence, transport and UI are
left to the embedding application. Business logic lives in
`maturity_engine/logic/` and data types in `maturity_engine/models/`.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from maturity_engine.config import EngineSettings
from maturity_engine.errors import (
    CustomScoringExecutionError,
    ScoringError,
    SchemaIntegrityError,
    UnsupportedScoringMethodError,
)
from maturity_engine.logic.question_filter import select_questions
from maturity_engine.logic.schema_integrity import ensure_schema_integrity
from maturity_engine.logic.scoring_engine import calculate_score
from maturity_engine.logic.scoring_registry import register_scoring_strategy
from maturity_engine.logic.statistics import compute_statistics
from maturity_engine.logic.validation import validate_response
from maturity_engine.models.results import Statistics, SurveyResult, ValidationResult
from maturity_engine.models.survey_response import SurveyResponse
from maturity_engine.models.survey_schema import Question, SurveySchema


def compute_result(
    schema: SurveySchema,
    responses: Sequence[SurveyResponse],
    *,
    settings: Optional[EngineSettings] = None,
) -> SurveyResult:
    """Score ``responses`` against ``schema``; see `logic.scoring_engine`."""
    return calculate_score(schema, responses, settings=settings)


def filter_questions_for_respondent(
    schema: SurveySchema,
    stakeholder_id: str,
    expertise: Iterable[str] = (),
) -> List[Question]:
    return select_questions(schema, stakeholder_id, expertise)


def load_survey_schema(data: Mapping[str, Any]) -> SurveySchema:
    """Parse a raw schema document and run ingestion-time integrity checks.

    Raises pydantic.ValidationError for a structurally malformed document and
    SchemaIntegrityError for referential problems.
    """
    return ensure_schema_integrity(SurveySchema.model_validate(data))


__all__ = [
    "compute_result",
    "filter_questions_for_respondent",
    "validate_response",
    "compute_statistics",
    "load_survey_schema",
    "register_scoring_strategy",
    "EngineSettings",
    "SurveySchema",
    "SurveyResponse",
    "SurveyResult",
    "Question",
    "Statistics",
    "ValidationResult",
    "ScoringError",
    "UnsupportedScoringMethodError",
    "CustomScoringExecutionError",
    "SchemaIntegrityError",
]
