"""QuestionType enumeration for the assessment question taxonomy.

Provides a simple constants container instead of an Enum so schema documents
can carry plain strings and unknown types can be reported by the validator
rather than rejected at parse time.
"""

from __future__ import annotations


class QuestionType:
    LIKERT_5 = "likert_5"
    LIKERT_3 = "likert_3"
    MULTIPLE_CHOICE = "multiple_choice"
    SINGLE_SELECT = "single_select"
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"


ALL_TYPES = frozenset(
    {
        QuestionType.LIKERT_5,
        QuestionType.LIKERT_3,
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.SINGLE_SELECT,
        QuestionType.TEXT,
        QuestionType.NUMBER,
        QuestionType.BOOLEAN,
    }
)

# Types whose questions must declare options
CHOICE_TYPES = frozenset(
    {
        QuestionType.LIKERT_5,
        QuestionType.LIKERT_3,
        QuestionType.MULTIPLE_CHOICE,
        QuestionType.SINGLE_SELECT,
    }
)

# Inclusive upper bound per Likert scale
LIKERT_BOUNDS = {
    QuestionType.LIKERT_5: 5,
    QuestionType.LIKERT_3: 3,
}


__all__ = ["QuestionType", "ALL_TYPES", "CHOICE_TYPES", "LIKERT_BOUNDS"]
