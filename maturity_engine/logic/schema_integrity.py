"""Ingestion-time integrity checks for survey schemas.

The scoring engine assumes a structurally valid schema and never calls these
checks itself; they run once when a schema document is accepted.
"""

from __future__ import annotations

from typing import Iterable, List, Set
import logging

from maturity_engine.errors import SchemaIntegrityError
from maturity_engine.logic.visibility_rules import KNOWN_CONDITIONS
from maturity_engine.models.question_type import ALL_TYPES, CHOICE_TYPES
from maturity_engine.models.results import ValidationResult
from maturity_engine.models.survey_schema import SurveySchema

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 0.01


def _blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def _check_weighted_items(kind: str, items: Iterable, errors: List[str], warnings: List[str]) -> Set[str]:
    seen: Set[str] = set()
    total = 0.0
    for item in items:
        if _blank(item.id):
            errors.append(f"All {kind}s must have valid IDs")
        elif item.id in seen:
            errors.append(f"Duplicate {kind} ID: {item.id}")
        else:
            seen.add(item.id)
        if _blank(item.name):
            errors.append(f"{kind.capitalize()} {item.id} must have a valid name")
        if item.weight < 0 or item.weight > 1:
            errors.append(f"{kind.capitalize()} {item.id} weight must be between 0 and 1")
        total += item.weight
    if seen and abs(total - 1) > WEIGHT_SUM_TOLERANCE:
        warnings.append(f"{kind.capitalize()} weights sum to {total:.2f}, should sum to 1.0")
    return seen


def check_schema_integrity(schema: SurveySchema) -> ValidationResult:
    """Return every integrity violation of ``schema`` as an error string."""
    errors: List[str] = []
    warnings: List[str] = []

    for field in ("id", "name", "version"):
        if _blank(getattr(schema, field)):
            errors.append(f"Survey schema must have a valid {field}")

    if not schema.stakeholders:
        errors.append("Survey schema must have at least one stakeholder")
    stakeholder_ids = _check_weighted_items("stakeholder", schema.stakeholders, errors, warnings)

    if not schema.domains:
        errors.append("Survey schema must have at least one domain")
    domain_ids = _check_weighted_items("domain", schema.domains, errors, warnings)

    if not schema.questions:
        errors.append("Survey schema must have at least one question")
    question_ids: Set[str] = set()
    for question in schema.questions:
        if _blank(question.id):
            errors.append("All questions must have valid IDs")
        elif question.id in question_ids:
            errors.append(f"Duplicate question ID: {question.id}")
        else:
            question_ids.add(question.id)
        if _blank(question.text):
            errors.append(f"Question {question.id} must have valid text")
        if question.type not in ALL_TYPES:
            errors.append(f"Question {question.id} has unknown type: {question.type}")
        if question.domain not in domain_ids:
            errors.append(f"Question {question.id} references unknown domain: {question.domain}")
        if not question.target_stakeholders:
            errors.append(f"Question {question.id} must target at least one stakeholder")
        for stakeholder in question.target_stakeholders:
            if stakeholder not in stakeholder_ids:
                errors.append(f"Question {question.id} targets unknown stakeholder: {stakeholder}")
        if question.type in CHOICE_TYPES:
            if not question.options:
                errors.append(f"Question {question.id} of type {question.type} must have options")
            else:
                values: list = []
                for option in question.options:
                    if option.value is None:
                        errors.append(f"Question {question.id} has option with undefined value")
                    elif option.value in values:
                        errors.append(f"Question {question.id} has duplicate option value: {option.value}")
                    else:
                        values.append(option.value)
                    if _blank(option.label):
                        errors.append(f"Question {question.id} has option with empty label")

    # Conditionals may point forward, so check after every id is known
    all_question_ids = {q.id for q in schema.questions}
    for question in schema.questions:
        cond = question.conditional
        if cond is None:
            continue
        if cond.depends_on not in all_question_ids:
            errors.append(f"Question {question.id} depends on unknown question: {cond.depends_on}")
        elif cond.depends_on == question.id:
            errors.append(f"Question {question.id} cannot depend on itself")
        if cond.condition not in KNOWN_CONDITIONS:
            warnings.append(f"Question {question.id} uses unknown condition: {cond.condition}")

    scoring = schema.scoring
    for key in scoring.stakeholder_weights:
        if key not in stakeholder_ids:
            errors.append(f"Scoring weight references unknown stakeholder: {key}")
    for key in scoring.domain_weights:
        if key not in domain_ids:
            errors.append(f"Scoring weight references unknown domain: {key}")

    bands = sorted(scoring.maturity_levels, key=lambda lvl: lvl.min_score)
    for band in bands:
        if band.min_score >= band.max_score:
            errors.append(f"Maturity level {band.id} must have min_score below max_score")
    for lower, upper in zip(bands, bands[1:]):
        if upper.min_score <= lower.max_score:
            errors.append(f"Maturity levels {lower.id} and {upper.id} overlap")

    result = ValidationResult.from_messages(errors, warnings)
    logger.info(
        "schema_integrity_checked survey_id=%s errors=%s warnings=%s",
        schema.id,
        len(errors),
        len(warnings),
    )
    return result


def ensure_schema_integrity(schema: SurveySchema) -> SurveySchema:
    """Return ``schema`` unchanged, or raise SchemaIntegrityError."""
    result = check_schema_integrity(schema)
    if not result.is_valid:
        raise SchemaIntegrityError(result.errors)
    return schema


__all__ = ["check_schema_integrity", "ensure_schema_integrity", "WEIGHT_SUM_TOLERANCE"]
