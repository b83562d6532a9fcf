"""Survey scoring and aggregation.

Maps raw per-question answers from many respondents, across stakeholder
roles, into domain scores and an overall maturity score using nested
weighted averages:

1. within a stakeholder role, per domain: mean of numeric answers per
   response, then combined across the role's responses;
2. across stakeholder roles, per domain: weighted by stakeholder weight;
3. across domains: weighted by domain weight.

The overall score selects a maturity band, whose recommendations are
extended with one line per low-scoring domain.

Degenerate inputs (no responses, zero weights, missing answers) yield zero
scores rather than errors; callers distinguish "no data" through
``response_count``. The only raised errors are the two ScoringError
subclasses for an unsupported method and a failing custom strategy.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence
import logging

from maturity_engine.config import LAST_RESPONSE, EngineSettings
from maturity_engine.errors import CustomScoringExecutionError, UnsupportedScoringMethodError
from maturity_engine.logic.answer_canonical import coerce_number
from maturity_engine.logic.question_filter import questions_for_domain
from maturity_engine.logic.scoring_registry import get_scoring_strategy
from maturity_engine.models.results import SurveyResult
from maturity_engine.models.survey_response import SurveyResponse
from maturity_engine.models.survey_schema import MaturityLevel, Question, SurveySchema

logger = logging.getLogger(__name__)

WEIGHTED_AVERAGE = "weighted_average"
CUSTOM = "custom"


def calculate_score(
    schema: SurveySchema,
    responses: Sequence[SurveyResponse],
    *,
    settings: Optional[EngineSettings] = None,
) -> SurveyResult:
    """Compute the survey result for a collection of responses.

    Raises UnsupportedScoringMethodError for an unknown method (or a custom
    method without a registered strategy) and CustomScoringExecutionError
    when a custom strategy fails.
    """
    method = schema.scoring.method
    responses = list(responses)
    if method == WEIGHTED_AVERAGE:
        return calculate_weighted_score(schema, responses, settings=settings)
    if method == CUSTOM:
        return _run_custom_strategy(schema, responses)
    logger.error("scoring_method_unsupported survey_id=%s method=%s", schema.id, method)
    raise UnsupportedScoringMethodError(method)


def _run_custom_strategy(schema: SurveySchema, responses: List[SurveyResponse]) -> SurveyResult:
    name = schema.scoring.custom_strategy
    strategy = get_scoring_strategy(name)
    if strategy is None:
        logger.error("scoring_strategy_missing survey_id=%s strategy=%s", schema.id, name)
        raise UnsupportedScoringMethodError(f"{CUSTOM} (no registered strategy {name!r})")
    try:
        result = strategy(responses, schema)
    except Exception as exc:
        logger.error("scoring_strategy_failed survey_id=%s strategy=%s", schema.id, name, exc_info=True)
        raise CustomScoringExecutionError(name) from exc
    if not isinstance(result, SurveyResult):
        logger.error(
            "scoring_strategy_bad_result survey_id=%s strategy=%s type=%s",
            schema.id,
            name,
            type(result).__name__,
        )
        raise CustomScoringExecutionError(name, "Custom scoring function returned an invalid result")
    return result


def response_domain_average(response: SurveyResponse, questions: Sequence[Question]) -> Optional[float]:
    """Return the mean numeric answer of a response over ``questions``.

    Answers that cannot be coerced to a number are not counted. Returns None
    when the response answered none of the questions.
    """
    total = 0.0
    count = 0
    for question in questions:
        value = coerce_number(response.responses.get(question.id))
        if value is None:
            continue
        total += value
        count += 1
    if count == 0:
        return None
    return total / count


def _role_average(averages: List[float], aggregation: str) -> float:
    if aggregation == LAST_RESPONSE:
        return averages[-1]
    return sum(averages) / len(averages)


def compute_stakeholder_contributions(
    schema: SurveySchema,
    responses: Sequence[SurveyResponse],
    aggregation: str,
) -> Dict[str, Dict[str, float]]:
    """Return domain_id -> stakeholder_id -> weighted contribution.

    Only stakeholders with a non-zero weight contribute. Every declared domain
    has an entry, possibly empty.
    """
    weights = schema.scoring.stakeholder_weights
    by_stakeholder: Dict[str, List[SurveyResponse]] = {}
    for response in responses:
        by_stakeholder.setdefault(response.stakeholder, []).append(response)

    contributions: Dict[str, Dict[str, float]] = {}
    for domain in schema.domains:
        contributions[domain.id] = {}
        for stakeholder_id, weight in weights.items():
            if not weight:
                continue
            role_responses = by_stakeholder.get(stakeholder_id)
            if not role_responses:
                continue
            questions = questions_for_domain(schema, domain.id, stakeholder_id)
            if not questions:
                continue
            averages = [
                avg
                for avg in (response_domain_average(r, questions) for r in role_responses)
                if avg is not None
            ]
            if not averages:
                continue
            contributions[domain.id][stakeholder_id] = _role_average(averages, aggregation) * weight
    return contributions


def compute_domain_scores(
    schema: SurveySchema,
    contributions: Dict[str, Dict[str, float]],
) -> Dict[str, float]:
    weights = schema.scoring.stakeholder_weights
    scores: Dict[str, float] = {}
    for domain in schema.domains:
        domain_contrib = contributions.get(domain.id, {})
        total_weight = sum(weights.get(s, 0.0) for s in domain_contrib)
        if total_weight > 0:
            scores[domain.id] = sum(domain_contrib.values()) / total_weight
        else:
            scores[domain.id] = 0.0
    return scores


def compute_overall_score(schema: SurveySchema, domain_scores: Dict[str, float]) -> float:
    weights = schema.scoring.domain_weights
    weighted_sum = 0.0
    total_weight = 0.0
    for domain in schema.domains:
        weight = weights.get(domain.id, 0.0)
        weighted_sum += domain_scores.get(domain.id, 0.0) * weight
        total_weight += weight
    if total_weight == 0:
        return 0.0
    return weighted_sum / total_weight


def select_maturity_level(levels: Sequence[MaturityLevel], score: float) -> Optional[MaturityLevel]:
    """Return the first band (ascending min_score) containing ``score``.

    Falls back to the first declared band when no band matches; None only
    when no bands are declared.
    """
    if not levels:
        return None
    for level in sorted(levels, key=lambda lvl: lvl.min_score):
        if level.min_score <= score <= level.max_score:
            return level
    return levels[0]


def generate_recommendations(
    schema: SurveySchema,
    domain_scores: Dict[str, float],
    maturity_level: Optional[MaturityLevel],
    threshold: float,
) -> List[str]:
    recommendations: List[str] = list(maturity_level.recommendations) if maturity_level else []
    for domain in schema.domains:
        if domain_scores.get(domain.id, 0.0) < threshold:
            recommendations.append(f"Focus on improving {domain.name} capabilities")
    return recommendations


def stakeholder_breakdown(responses: Sequence[SurveyResponse]) -> Dict[str, int]:
    breakdown: Dict[str, int] = {}
    for response in responses:
        breakdown[response.stakeholder] = breakdown.get(response.stakeholder, 0) + 1
    return breakdown


def _latest_completion(responses: Sequence[SurveyResponse]) -> Optional[datetime]:
    times = [r.completion_time for r in responses if r.completion_time is not None]
    return max(times) if times else None


def calculate_weighted_score(
    schema: SurveySchema,
    responses: Sequence[SurveyResponse],
    *,
    settings: Optional[EngineSettings] = None,
) -> SurveyResult:
    """Weighted-average scoring; see the module docstring for the algorithm."""
    settings = settings or EngineSettings()
    contributions = compute_stakeholder_contributions(schema, responses, settings.stakeholder_aggregation)
    domain_scores = compute_domain_scores(schema, contributions)
    overall = compute_overall_score(schema, domain_scores)
    level = select_maturity_level(schema.scoring.maturity_levels, overall)
    recommendations = generate_recommendations(schema, domain_scores, level, settings.low_score_threshold)

    logger.info(
        "scoring_complete survey_id=%s responses=%s overall=%s level=%s",
        schema.id,
        len(responses),
        overall,
        level.id if level else None,
    )
    return SurveyResult(
        survey_id=schema.id,
        organization_id=responses[0].organization_id if responses else "",
        overall_score=overall,
        domain_scores=domain_scores,
        stakeholder_contributions=contributions,
        maturity_level=level,
        recommendations=recommendations,
        response_count=len(responses),
        stakeholder_breakdown=stakeholder_breakdown(responses),
        completion_date=_latest_completion(responses),
    )


__all__ = [
    "WEIGHTED_AVERAGE",
    "CUSTOM",
    "calculate_score",
    "calculate_weighted_score",
    "response_domain_average",
    "compute_stakeholder_contributions",
    "compute_domain_scores",
    "compute_overall_score",
    "select_maturity_level",
    "generate_recommendations",
    "stakeholder_breakdown",
]
