"""Response progress tracking and finalization.

A response starts at progress 0, is updated on every saved answer and is
finalized (completion time set, progress 100) once it validates. Helpers
return new SurveyResponse instances; the inputs are never mutated.

In-progress answers can also be parked in a ProgressStore, an injectable
key-value interface standing in for client-side caching.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Tuple
import logging
import threading

from maturity_engine.errors import ResponseIncompleteError
from maturity_engine.logic.answer_canonical import is_answered
from maturity_engine.logic.question_filter import select_questions
from maturity_engine.logic.validation import validate_response
from maturity_engine.logic.visibility_rules import visible_questions
from maturity_engine.models.survey_response import SurveyResponse, as_utc
from maturity_engine.models.survey_schema import SurveySchema

logger = logging.getLogger(__name__)

# Progress shown for a fully answered but not yet finalized response
MAX_OPEN_PROGRESS = 99

ProgressKey = Tuple[str, str, str, str]


def compute_progress(
    schema: SurveySchema,
    stakeholder_id: str,
    expertise: Iterable[str],
    answers: Mapping[str, Any],
) -> int:
    """Return the percentage (rounded down) of visible applicable questions answered."""
    questions = visible_questions(select_questions(schema, stakeholder_id, expertise), answers)
    if not questions:
        return 0
    answered = sum(1 for q in questions if is_answered(answers.get(q.id)))
    return (answered * 100) // len(questions)


def record_answer(schema: SurveySchema, response: SurveyResponse, question_id: str, answer: Any) -> SurveyResponse:
    """Return a copy of ``response`` with one answer saved and progress updated.

    Saving reopens a finalized response: the completion time is cleared.
    """
    answers: Dict[str, Any] = dict(response.responses)
    answers[question_id] = answer
    progress = min(compute_progress(schema, response.stakeholder, response.expertise, answers), MAX_OPEN_PROGRESS)
    logger.info(
        "answer_recorded response_id=%s question_id=%s progress=%s",
        response.id,
        question_id,
        progress,
    )
    return response.model_copy(update={"responses": answers, "progress": progress, "completion_time": None})


def finalize_response(
    schema: SurveySchema,
    response: SurveyResponse,
    *,
    completed_at: Optional[datetime] = None,
) -> SurveyResponse:
    """Mark a response complete, or raise ResponseIncompleteError if it does not validate."""
    result = validate_response(schema, response)
    if not result.is_valid:
        logger.info("response_finalize_rejected response_id=%s errors=%s", response.id, len(result.errors))
        raise ResponseIncompleteError(result)
    completed_at = as_utc(completed_at) or datetime.now(timezone.utc)
    return response.model_copy(update={"completion_time": completed_at, "progress": 100})


def progress_key(response: SurveyResponse) -> ProgressKey:
    return (response.survey_id, response.organization_id, response.stakeholder, response.respondent_id)


class ProgressStore(Protocol):
    def get(self, key: ProgressKey) -> Optional[Dict[str, Any]]: ...

    def save(self, key: ProgressKey, answers: Mapping[str, Any]) -> None: ...

    def clear(self, key: ProgressKey) -> None: ...


class InMemoryProgressStore:
    """Process-local ProgressStore for tests and local development."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._answers: Dict[ProgressKey, Dict[str, Any]] = {}

    def get(self, key: ProgressKey) -> Optional[Dict[str, Any]]:
        with self._lock:
            stored = self._answers.get(key)
            return dict(stored) if stored is not None else None

    def save(self, key: ProgressKey, answers: Mapping[str, Any]) -> None:
        with self._lock:
            self._answers[key] = dict(answers)

    def clear(self, key: ProgressKey) -> None:
        with self._lock:
            self._answers.pop(key, None)


__all__ = [
    "MAX_OPEN_PROGRESS",
    "compute_progress",
    "record_answer",
    "finalize_response",
    "progress_key",
    "ProgressStore",
    "InMemoryProgressStore",
]
