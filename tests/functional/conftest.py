"""Shared builders for functional engine tests.

Schemas are built from camelCase documents, the shape survey files arrive in,
so parsing aliases are exercised by every test that uses them.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest

from maturity_engine.models.survey_response import SurveyResponse
from maturity_engine.models.survey_schema import SurveySchema

T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

LIKERT_5_OPTIONS = [{"value": v, "label": str(v)} for v in range(1, 6)]


def _likert(qid: str, domain: str, targets: List[str], **extra: Any) -> Dict[str, Any]:
    doc = {
        "id": qid,
        "text": f"Question {qid}",
        "type": "likert_5",
        "domain": domain,
        "targetStakeholders": targets,
        "required": True,
        "options": LIKERT_5_OPTIONS,
    }
    doc.update(extra)
    return doc


def _base_document() -> Dict[str, Any]:
    return {
        "id": "survey-1",
        "name": "Digital maturity",
        "version": "1.0",
        "stakeholders": [
            {"id": "manager", "name": "Manager", "weight": 0.6, "requiredExpertise": ["strategy"]},
            {"id": "specialist", "name": "Specialist", "weight": 0.4, "requiredExpertise": ["data", "security"]},
        ],
        "domains": [
            {"id": "quality", "name": "Quality", "weight": 0.5},
            {"id": "support", "name": "Support", "weight": 0.5},
        ],
        "questions": [
            _likert("q1", "quality", ["manager", "specialist"]),
            _likert("q2", "support", ["manager", "specialist"]),
            _likert("q3", "quality", ["specialist"], targetExpertise=["security"], required=False),
        ],
        "scoring": {
            "method": "weighted_average",
            "stakeholderWeights": {"manager": 0.6, "specialist": 0.4},
            "domainWeights": {"quality": 0.5, "support": 0.5},
            "maturityLevels": [
                {
                    "id": "building",
                    "name": "Building",
                    "minScore": 0,
                    "maxScore": 2.5,
                    "recommendations": ["Establish a baseline"],
                },
                {
                    "id": "thriving",
                    "name": "Thriving",
                    "minScore": 2.51,
                    "maxScore": 5,
                    "recommendations": ["Share practices with peers"],
                },
            ],
        },
    }


@pytest.fixture
def schema_document() -> Dict[str, Any]:
    """Return a fresh, mutable camelCase schema document."""
    return _base_document()


@pytest.fixture
def build_schema() -> Callable[..., SurveySchema]:
    """Factory: build a SurveySchema from the base document plus overrides."""

    def _build(document: Optional[Dict[str, Any]] = None, **overrides: Any) -> SurveySchema:
        doc = document if document is not None else _base_document()
        doc.update(overrides)
        return SurveySchema.model_validate(doc)

    return _build


@pytest.fixture
def schema(build_schema) -> SurveySchema:
    return build_schema()


@pytest.fixture
def make_response() -> Callable[..., SurveyResponse]:
    """Factory: build a SurveyResponse with sensible defaults."""
    counter = {"n": 0}

    def _make(
        stakeholder: str = "manager",
        answers: Optional[Dict[str, Any]] = None,
        *,
        organization_id: str = "org-1",
        expertise: Optional[List[str]] = None,
        progress: int = 100,
        minutes: Optional[float] = 10,
    ) -> SurveyResponse:
        counter["n"] += 1
        completion = T0 + timedelta(minutes=minutes) if (progress == 100 and minutes is not None) else None
        return SurveyResponse(
            id=f"resp-{counter['n']}",
            survey_id="survey-1",
            organization_id=organization_id,
            respondent_id=f"person-{counter['n']}",
            stakeholder=stakeholder,
            expertise=list(expertise or []),
            responses=dict(answers or {}),
            start_time=T0,
            completion_time=completion,
            progress=progress,
        )

    return _make
