"""Stakeholder and expertise question filtering.

Selects the exact, order-preserving subset of a schema's questions that is
addressed to one respondent. Pure functions of schema and inputs.
"""

from __future__ import annotations

from typing import Iterable, List

from maturity_engine.models.survey_schema import Question, SurveySchema


def targets_respondent(question: Question, stakeholder_id: str, expertise: Iterable[str] = ()) -> bool:
    """Return True if the question is addressed to this stakeholder and expertise.

    A question with no (or an empty) target_expertise list is open to every
    member of its target stakeholders; otherwise at least one tag must match.
    """
    if stakeholder_id not in question.target_stakeholders:
        return False
    if not question.target_expertise:
        return True
    tags = set(expertise or ())
    return any(tag in tags for tag in question.target_expertise)


def select_questions(
    schema: SurveySchema,
    stakeholder_id: str,
    expertise: Iterable[str] = (),
) -> List[Question]:
    """Return the questions a respondent must answer, in schema order.

    An unknown stakeholder id yields an empty list rather than an error so
    callers can surface a not-found condition at their own boundary.
    """
    tags = list(expertise or ())
    return [q for q in schema.questions if targets_respondent(q, stakeholder_id, tags)]


def questions_for_domain(schema: SurveySchema, domain_id: str, stakeholder_id: str) -> List[Question]:
    """Return a domain's questions targeted at a stakeholder role.

    Expertise is not considered; scoring aggregates at role granularity.
    """
    return [
        q
        for q in schema.questions
        if q.domain == domain_id and stakeholder_id in q.target_stakeholders
    ]


__all__ = ["targets_respondent", "select_questions", "questions_for_domain"]
