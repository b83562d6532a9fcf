"""Conditional visibility evaluation.

Centralizes the dependency checks that decide whether a question with a
`conditional` clause is currently shown and counted, given a partial answer
map.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Set
import logging

from maturity_engine.logic.answer_canonical import coerce_number, strict_equals
from maturity_engine.models.survey_schema import ConditionalLogic, Question

logger = logging.getLogger(__name__)

EQUALS = "equals"
NOT_EQUALS = "not_equals"
GREATER_THAN = "greater_than"
LESS_THAN = "less_than"

KNOWN_CONDITIONS = frozenset({EQUALS, NOT_EQUALS, GREATER_THAN, LESS_THAN})


def _compare_numeric(dependency_answer: Any, target: Any, condition: str) -> bool:
    left = coerce_number(dependency_answer)
    right = coerce_number(target)
    if left is None or right is None:
        return False
    if condition == GREATER_THAN:
        return left > right
    return left < right


def evaluate_condition(conditional: ConditionalLogic, answers: Mapping[str, Any]) -> bool:
    """Return True if the condition holds for the current answers.

    - Dependency absent from answers -> False (a stored None is still compared)
    - equals / not_equals   -> strict equality against the configured value
    - greater_than / less_than -> numeric comparison; non-numeric operands fail
    - Unknown comparator    -> True (permissive fallback)
    """
    if conditional.depends_on not in answers:
        return False
    dependency_answer = answers[conditional.depends_on]
    condition = conditional.condition
    if condition == EQUALS:
        return strict_equals(dependency_answer, conditional.value)
    if condition == NOT_EQUALS:
        return not strict_equals(dependency_answer, conditional.value)
    if condition in (GREATER_THAN, LESS_THAN):
        return _compare_numeric(dependency_answer, conditional.value, condition)
    logger.warning(
        "visibility_unknown_condition depends_on=%s condition=%s",
        conditional.depends_on,
        condition,
    )
    return True


def is_question_visible(question: Question, answers: Mapping[str, Any]) -> bool:
    """Return True if the question should currently be shown and counted."""
    if question.conditional is None:
        return True
    return evaluate_condition(question.conditional, answers)


def compute_visible_set(questions: Iterable[Question], answers: Mapping[str, Any]) -> Set[str]:
    """Compute the set of visible question ids among the given questions."""
    return {q.id for q in questions if is_question_visible(q, answers)}


def visible_questions(questions: Iterable[Question], answers: Mapping[str, Any]) -> List[Question]:
    """Return the visible subset of ``questions`` in their original order."""
    return [q for q in questions if is_question_visible(q, answers)]


__all__ = [
    "EQUALS",
    "NOT_EQUALS",
    "GREATER_THAN",
    "LESS_THAN",
    "KNOWN_CONDITIONS",
    "evaluate_condition",
    "is_question_visible",
    "compute_visible_set",
    "visible_questions",
]
