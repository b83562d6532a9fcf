"""Stakeholder role selection helpers.

Validates a respondent's chosen role and expertise tags before questions are
served, and ranks roles by how well their required expertise matches a
respondent's tags.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from maturity_engine.models.results import StakeholderRecommendation, ValidationResult
from maturity_engine.models.survey_schema import SurveySchema


def validate_stakeholder_selection(
    schema: SurveySchema,
    stakeholder_id: Optional[str],
    expertise: Sequence[str] = (),
) -> ValidationResult:
    errors: List[str] = []
    warnings: List[str] = []
    if not stakeholder_id:
        errors.append("Please select a stakeholder role")
    elif schema.stakeholder_by_id(stakeholder_id) is None:
        errors.append("Selected stakeholder role is not valid")
    if not expertise:
        warnings.append("No expertise areas selected - you will receive general questions for your role")
    return ValidationResult.from_messages(errors, warnings)


def recommend_stakeholders(schema: SurveySchema, expertise: Sequence[str] = ()) -> List[StakeholderRecommendation]:
    """Rank declared stakeholder roles for a respondent's expertise tags.

    Confidence is the share of a role's required expertise the respondent
    holds, capped at 1. Without tags every role gets a neutral 0.5 and the
    declared order is kept.
    """
    if not expertise:
        return [
            StakeholderRecommendation(
                stakeholder_id=s.id,
                confidence=0.5,
                reason="No expertise provided - general recommendation",
            )
            for s in schema.stakeholders
        ]

    tags = set(expertise)
    ranked: List[StakeholderRecommendation] = []
    for stakeholder in schema.stakeholders:
        required = stakeholder.required_expertise
        matching = [tag for tag in required if tag in tags]
        confidence = min(len(matching) / max(len(required), 1), 1.0)
        if matching:
            reason = f"Strong match: {', '.join(matching)}"
        elif not required:
            reason = "Open role - suitable for all backgrounds"
        else:
            reason = "General role match"
        ranked.append(
            StakeholderRecommendation(stakeholder_id=stakeholder.id, confidence=confidence, reason=reason)
        )
    ranked.sort(key=lambda rec: rec.confidence, reverse=True)
    return ranked


def format_expertise(expertise: Sequence[str]) -> str:
    items = list(expertise)
    if not items:
        return "No specific expertise"
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return " and ".join(items)
    return ", ".join(items[:-1]) + ", and " + items[-1]


__all__ = ["validate_stakeholder_selection", "recommend_stakeholders", "format_expertise"]
