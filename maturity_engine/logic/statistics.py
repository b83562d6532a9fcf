"""Descriptive response statistics.

Derives completion and coverage metrics from the same schema and response
collection the scoring engine consumes, independently of scoring.
"""

from __future__ import annotations

from typing import Dict, List, Sequence
import logging

from maturity_engine.logic.answer_canonical import is_answered
from maturity_engine.logic.question_filter import select_questions
from maturity_engine.models.results import DomainCoverage, StakeholderStatistics, Statistics
from maturity_engine.models.survey_response import SurveyResponse
from maturity_engine.models.survey_schema import SurveySchema

logger = logging.getLogger(__name__)

_MS_PER_MINUTE = 1000 * 60


def _rate(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def average_completion_time_ms(responses: Sequence[SurveyResponse]) -> float:
    """Mean duration of completed responses that carry both timestamps."""
    durations: List[float] = []
    for response in responses:
        if not response.is_complete or response.completion_time is None:
            continue
        delta = response.completion_time - response.start_time
        durations.append(delta.total_seconds() * 1000)
    if not durations:
        return 0.0
    return sum(durations) / len(durations)


def stakeholder_statistics(
    schema: SurveySchema,
    responses: Sequence[SurveyResponse],
) -> Dict[str, StakeholderStatistics]:
    stats: Dict[str, StakeholderStatistics] = {}
    for stakeholder in schema.stakeholders:
        mine = [r for r in responses if r.stakeholder == stakeholder.id]
        completed = [r for r in mine if r.is_complete]
        stats[stakeholder.id] = StakeholderStatistics(
            name=stakeholder.name,
            total_responses=len(mine),
            completed_responses=len(completed),
            completion_rate=_rate(len(completed), len(mine)),
            unique_organizations=len({r.organization_id for r in mine}),
        )
    return stats


def domain_coverage(
    schema: SurveySchema,
    responses: Sequence[SurveyResponse],
) -> Dict[str, DomainCoverage]:
    """Answer coverage per domain over completed responses.

    A response can only be expected to answer the domain questions addressed
    to its own stakeholder and expertise, so possible answers are counted per
    response rather than as questions x responses.
    """
    completed = [r for r in responses if r.is_complete]
    applicable = [
        (r, select_questions(schema, r.stakeholder, r.expertise)) for r in completed
    ]

    coverage: Dict[str, DomainCoverage] = {}
    for domain in schema.domains:
        question_count = sum(1 for q in schema.questions if q.domain == domain.id)
        total_answers = 0
        possible_answers = 0
        for response, questions in applicable:
            for question in questions:
                if question.domain != domain.id:
                    continue
                possible_answers += 1
                if is_answered(response.responses.get(question.id)):
                    total_answers += 1
        coverage[domain.id] = DomainCoverage(
            name=domain.name,
            question_count=question_count,
            total_answers=total_answers,
            possible_answers=possible_answers,
            coverage_rate=_rate(total_answers, possible_answers),
        )
    return coverage


def compute_statistics(schema: SurveySchema, responses: Sequence[SurveyResponse]) -> Statistics:
    """Compute completion, timing, per-stakeholder and per-domain statistics."""
    responses = list(responses)
    total = len(responses)
    completed = sum(1 for r in responses if r.is_complete)

    organization_counts: Dict[str, int] = {}
    for response in responses:
        organization_counts[response.organization_id] = organization_counts.get(response.organization_id, 0) + 1

    avg_ms = average_completion_time_ms(responses)
    stats = Statistics(
        total_responses=total,
        completed_responses=completed,
        partial_responses=total - completed,
        completion_rate=_rate(completed, total),
        unique_organizations=len(organization_counts),
        organization_counts=organization_counts,
        average_completion_time_ms=avg_ms,
        average_completion_time_minutes=round(avg_ms / _MS_PER_MINUTE),
        stakeholder_breakdown=stakeholder_statistics(schema, responses),
        domain_coverage=domain_coverage(schema, responses),
    )
    logger.info(
        "statistics_complete survey_id=%s total=%s completed=%s",
        schema.id,
        total,
        completed,
    )
    return stats


__all__ = [
    "average_completion_time_ms",
    "stakeholder_statistics",
    "domain_coverage",
    "compute_statistics",
]
