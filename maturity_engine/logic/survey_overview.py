"""Survey structure summary and per-stakeholder preview."""

from __future__ import annotations

from typing import Dict, List, Optional
import math

from maturity_engine.config import EngineSettings
from maturity_engine.logic.question_filter import select_questions
from maturity_engine.models.results import QuestionSummary, StakeholderPreview
from maturity_engine.models.survey_schema import SurveySchema


def summarize_questions(schema: SurveySchema) -> QuestionSummary:
    by_domain: Dict[str, int] = {}
    by_stakeholder: Dict[str, int] = {}
    by_type: Dict[str, int] = {}
    for question in schema.questions:
        by_domain[question.domain] = by_domain.get(question.domain, 0) + 1
        for stakeholder in question.target_stakeholders:
            by_stakeholder[stakeholder] = by_stakeholder.get(stakeholder, 0) + 1
        by_type[question.type] = by_type.get(question.type, 0) + 1
    return QuestionSummary(
        total_questions=len(schema.questions),
        questions_by_domain=by_domain,
        questions_by_stakeholder=by_stakeholder,
        questions_by_type=by_type,
    )


def build_preview(schema: SurveySchema, *, settings: Optional[EngineSettings] = None) -> List[StakeholderPreview]:
    """Preview what each stakeholder role will be asked, without expertise tags.

    Domain names are listed in the order the role first meets them.
    """
    settings = settings or EngineSettings()
    previews: List[StakeholderPreview] = []
    for stakeholder in schema.stakeholders:
        questions = select_questions(schema, stakeholder.id)
        domain_names: List[str] = []
        for question in questions:
            domain = schema.domain_by_id(question.domain)
            name = domain.name if domain else question.domain
            if name not in domain_names:
                domain_names.append(name)
        previews.append(
            StakeholderPreview(
                stakeholder_id=stakeholder.id,
                stakeholder=stakeholder.name,
                question_count=len(questions),
                estimated_minutes=math.ceil(len(questions) * settings.minutes_per_question),
                domains=domain_names,
            )
        )
    return previews


__all__ = ["summarize_questions", "build_preview"]
