"""Type-aware validation for survey answers.

`validate_answer` checks a single answer against its question's declared
type and constraints; `validate_response` aggregates required-answer checks
and per-answer checks for a whole submission. Neither raises for malformed
answers: every violated rule becomes one error string.
"""

from __future__ import annotations

from typing import Any, List, Tuple
import logging
import math
import re

from maturity_engine.logic.question_filter import select_questions, targets_respondent
from maturity_engine.logic.visibility_rules import is_question_visible
from maturity_engine.models.question_type import LIKERT_BOUNDS, QuestionType
from maturity_engine.models.results import ValidationResult
from maturity_engine.models.survey_response import SurveyResponse
from maturity_engine.models.survey_schema import Question, SurveySchema

logger = logging.getLogger(__name__)

Messages = Tuple[List[str], List[str]]


def _is_whole_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def _check_likert(question: Question, answer: Any) -> Messages:
    upper = LIKERT_BOUNDS[question.type]
    if not _is_whole_number(answer) or answer < 1 or answer > upper:
        return [f"Answer must be between 1 and {upper} for question: {question.text}"], []
    return [], []


def _check_multiple_choice(question: Question, answer: Any) -> Messages:
    if not isinstance(answer, (list, tuple, set, frozenset)) or len(answer) == 0:
        return [f"At least one option must be selected for question: {question.text}"], []
    errors: List[str] = []
    allowed = question.option_values()
    if allowed:
        for value in answer:
            if value not in allowed:
                errors.append(f"Invalid option '{value}' for question: {question.text}")
    return errors, []


def _check_single_select(question: Question, answer: Any) -> Messages:
    if answer is None:
        return [f"An option must be selected for question: {question.text}"], []
    if isinstance(answer, (list, tuple, set, frozenset)):
        return [f"Exactly one option must be selected for question: {question.text}"], []
    allowed = question.option_values()
    if allowed and answer not in allowed:
        return [f"Invalid option '{answer}' for question: {question.text}"], []
    return [], []


def _check_text(question: Question, answer: Any) -> Messages:
    if not isinstance(answer, str):
        return [f"Text answer required for question: {question.text}"], []
    errors: List[str] = []
    warnings: List[str] = []
    rules = question.validation
    if rules is None:
        return errors, warnings
    if rules.min_length is not None and len(answer) < rules.min_length:
        errors.append(f"Answer too short for question: {question.text}")
    if rules.max_length is not None and len(answer) > rules.max_length:
        errors.append(f"Answer too long for question: {question.text}")
    if rules.pattern:
        try:
            matched = re.fullmatch(rules.pattern, answer) is not None
        except re.error:
            logger.warning("validation_pattern_invalid question_id=%s pattern=%r", question.id, rules.pattern)
            warnings.append(f"Validation pattern could not be applied for question: {question.text}")
        else:
            if not matched:
                errors.append(f"Answer format invalid for question: {question.text}")
    return errors, warnings


def _check_number(question: Question, answer: Any) -> Messages:
    if isinstance(answer, bool) or not isinstance(answer, (int, float)) or (
        isinstance(answer, float) and not math.isfinite(answer)
    ):
        return [f"Valid number required for question: {question.text}"], []
    return [], []


def _check_boolean(question: Question, answer: Any) -> Messages:
    if not isinstance(answer, bool):
        return [f"Yes/No answer required for question: {question.text}"], []
    return [], []


_CHECKS = {
    QuestionType.LIKERT_5: _check_likert,
    QuestionType.LIKERT_3: _check_likert,
    QuestionType.MULTIPLE_CHOICE: _check_multiple_choice,
    QuestionType.SINGLE_SELECT: _check_single_select,
    QuestionType.TEXT: _check_text,
    QuestionType.NUMBER: _check_number,
    QuestionType.BOOLEAN: _check_boolean,
}


def validate_answer(question: Question, answer: Any) -> ValidationResult:
    """Validate one answer against its question's type contract."""
    check = _CHECKS.get(question.type)
    if check is None:
        return ValidationResult.from_messages([f"Unknown question type: {question.type}"], [])
    errors, warnings = check(question, answer)
    return ValidationResult.from_messages(errors, warnings)


def validate_response(schema: SurveySchema, response: SurveyResponse) -> ValidationResult:
    """Validate a whole submission.

    Required questions are those addressed to the respondent (stakeholder and
    expertise) that are currently visible given the submitted answers. Every
    present answer is then checked against its question's type rules.
    """
    errors: List[str] = []
    warnings: List[str] = []
    answers = response.responses

    applicable = select_questions(schema, response.stakeholder, response.expertise)
    for question in applicable:
        if not question.required or not is_question_visible(question, answers):
            continue
        if question.id not in answers:
            errors.append(f'Question "{question.text}" is required but not answered')

    for question_id, answer in answers.items():
        question = schema.question_by_id(question_id)
        if question is None:
            warnings.append(f"Response for unknown question: {question_id}")
            continue
        if not targets_respondent(question, response.stakeholder, response.expertise):
            warnings.append(
                f"Question {question_id} is not addressed to stakeholder {response.stakeholder}"
            )
        result = validate_answer(question, answer)
        errors.extend(result.errors)
        warnings.extend(result.warnings)

    logger.info(
        "response_validated response_id=%s stakeholder=%s errors=%s warnings=%s",
        response.id,
        response.stakeholder,
        len(errors),
        len(warnings),
    )
    return ValidationResult.from_messages(errors, warnings)


__all__ = ["validate_answer", "validate_response"]
