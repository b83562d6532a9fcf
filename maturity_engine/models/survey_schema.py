"""Pydantic models for survey schemas.

A SurveySchema is the immutable configuration of one survey instance:
stakeholder roles, thematic domains, questions and the scoring setup.
Structural parsing happens here; referential integrity (unknown domains,
duplicate ids, overlapping bands) is checked separately by
`maturity_engine.logic.schema_integrity`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from maturity_engine.models.base import CamelModel


class StakeholderDefinition(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    weight: float = 0.0
    required_expertise: List[str] = Field(default_factory=list)


class DomainDefinition(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    weight: float = 0.0


class QuestionOption(CamelModel):
    value: Any
    label: str
    description: Optional[str] = None


class QuestionValidation(CamelModel):
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    required: Optional[bool] = None


class ConditionalLogic(CamelModel):
    depends_on: str
    # equals | not_equals | greater_than | less_than; unknown names are tolerated
    condition: str
    value: Any = None


class Question(CamelModel):
    id: str
    text: str
    description: Optional[str] = None
    type: str
    domain: str
    target_stakeholders: List[str] = Field(default_factory=list)
    target_expertise: Optional[List[str]] = None
    required: bool = False
    options: Optional[List[QuestionOption]] = None
    validation: Optional[QuestionValidation] = None
    conditional: Optional[ConditionalLogic] = None

    def option_values(self) -> list:
        """Return declared option values in schema order."""
        return [opt.value for opt in (self.options or [])]


class MaturityLevel(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    min_score: float
    max_score: float
    recommendations: List[str] = Field(default_factory=list)


class ScoringConfiguration(CamelModel):
    method: str = "weighted_average"
    stakeholder_weights: Dict[str, float] = Field(default_factory=dict)
    domain_weights: Dict[str, float] = Field(default_factory=dict)
    maturity_levels: List[MaturityLevel] = Field(default_factory=list)
    # Name of a registered strategy; only consulted when method == "custom"
    custom_strategy: Optional[str] = None


class SurveySchema(CamelModel):
    id: str
    name: str
    version: str
    description: Optional[str] = None
    stakeholders: List[StakeholderDefinition] = Field(default_factory=list)
    domains: List[DomainDefinition] = Field(default_factory=list)
    questions: List[Question] = Field(default_factory=list)
    scoring: ScoringConfiguration = Field(default_factory=ScoringConfiguration)

    def question_by_id(self, question_id: str) -> Question | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def stakeholder_by_id(self, stakeholder_id: str) -> StakeholderDefinition | None:
        for stakeholder in self.stakeholders:
            if stakeholder.id == stakeholder_id:
                return stakeholder
        return None

    def domain_by_id(self, domain_id: str) -> DomainDefinition | None:
        for domain in self.domains:
            if domain.id == domain_id:
                return domain
        return None


__all__ = [
    "StakeholderDefinition",
    "DomainDefinition",
    "QuestionOption",
    "QuestionValidation",
    "ConditionalLogic",
    "Question",
    "MaturityLevel",
    "ScoringConfiguration",
    "SurveySchema",
]
