"""Functional tests for the response statistics aggregator."""

from __future__ import annotations

import pytest

from maturity_engine import compute_statistics
from maturity_engine.models.survey_response import SurveyResponse


def test_empty_collection_yields_zero_statistics(schema):
    stats = compute_statistics(schema, [])

    assert stats.total_responses == 0
    assert stats.completion_rate == 0.0
    assert stats.average_completion_time_ms == 0.0
    assert stats.stakeholder_breakdown["manager"].completion_rate == 0.0
    assert stats.domain_coverage["quality"].coverage_rate == 0.0
    assert stats.domain_coverage["quality"].question_count == 2


def test_completion_rate_and_average_time(schema, make_response):
    responses = [
        make_response("manager", {"q1": 4, "q2": 4}, minutes=10),
        make_response("manager", {"q1": 4, "q2": 4}, minutes=20),
        make_response("specialist", {"q1": 3}, progress=50),
        make_response("specialist", {"q1": 3}, progress=100, minutes=None),
    ]
    stats = compute_statistics(schema, responses)

    assert stats.total_responses == 4
    assert stats.completed_responses == 3
    assert stats.partial_responses == 1
    assert stats.completion_rate == pytest.approx(75.0)
    # Completed response without a completion time is excluded from timing
    assert stats.average_completion_time_ms == pytest.approx(15 * 60 * 1000)
    assert stats.average_completion_time_minutes == 15


def test_stakeholder_breakdown(schema, make_response):
    responses = [
        make_response("manager", {"q1": 4}, organization_id="org-1"),
        make_response("manager", {"q1": 4}, organization_id="org-2", progress=30),
        make_response("manager", {"q1": 4}, organization_id="org-2"),
    ]
    stats = compute_statistics(schema, responses)
    manager = stats.stakeholder_breakdown["manager"]

    assert manager.name == "Manager"
    assert manager.total_responses == 3
    assert manager.completed_responses == 2
    assert manager.completion_rate == pytest.approx(200 / 3)
    assert manager.unique_organizations == 2
    assert stats.stakeholder_breakdown["specialist"].total_responses == 0
    assert stats.unique_organizations == 2
    assert stats.organization_counts == {"org-1": 1, "org-2": 2}


def test_domain_coverage_counts_applicable_questions_of_completed_responses(schema, make_response):
    responses = [
        # manager: quality has q1 only
        make_response("manager", {"q1": 4, "q2": None}),
        # specialist with security: quality has q1 and q3
        make_response("specialist", {"q1": 2}, expertise=["security"]),
        # partial responses are ignored
        make_response("specialist", {"q1": 2, "q3": 5}, expertise=["security"], progress=60),
    ]
    stats = compute_statistics(schema, responses)
    quality = stats.domain_coverage["quality"]
    support = stats.domain_coverage["support"]

    assert quality.possible_answers == 3
    assert quality.total_answers == 2
    assert quality.coverage_rate == pytest.approx(200 / 3)
    assert support.possible_answers == 2
    assert support.total_answers == 0
    assert support.coverage_rate == 0.0


def test_naive_and_utc_timestamps_on_one_response_are_comparable(schema):
    response = SurveyResponse.model_validate(
        {
            "id": "resp-tz",
            "surveyId": "survey-1",
            "organizationId": "org-1",
            "respondentId": "person-tz",
            "stakeholder": "manager",
            "responses": {"q1": 4, "q2": 4},
            "startTime": "2024-03-01T09:00:00",
            "completionTime": "2024-03-01T09:12:00Z",
            "progress": 100,
        }
    )
    stats = compute_statistics(schema, [response])

    assert response.start_time.tzinfo is not None
    assert stats.average_completion_time_ms == pytest.approx(12 * 60 * 1000)
