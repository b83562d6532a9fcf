"""Engine exception taxonomy and the central error-code mapping.

Boundary layers must import codes and user-visible messages from
`ERROR_CODE_MAP` instead of hardcoding strings.
"""

from __future__ import annotations

from typing import Dict, List
import logging

logger = logging.getLogger(__name__)


class MaturityEngineError(Exception):
    pass


class ScoringError(MaturityEngineError):
    pass


class UnsupportedScoringMethodError(ScoringError):
    def __init__(self, method: object) -> None:
        super().__init__(f"Unsupported scoring method: {method}")
        self.method = method


class CustomScoringExecutionError(ScoringError):
    def __init__(self, strategy: str | None, message: str = "Custom scoring function execution failed") -> None:
        super().__init__(message)
        self.strategy = strategy


class SchemaIntegrityError(MaturityEngineError, ValueError):
    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors) or "survey schema failed integrity checks")
        self.errors = list(errors)


class ResponseIncompleteError(MaturityEngineError, ValueError):
    def __init__(self, result) -> None:
        super().__init__("; ".join(result.errors) or "survey response is incomplete")
        self.result = result


# Scoring failures indicate a misconfigured survey, so the admin view gets a
# generic message rather than the underlying detail.
ERROR_CODE_MAP: Dict[type, Dict[str, str]] = {
    UnsupportedScoringMethodError: {
        "code": "SCORING_METHOD_UNSUPPORTED",
        "message": "Unable to compute results",
    },
    CustomScoringExecutionError: {
        "code": "SCORING_CUSTOM_EXECUTION_FAILED",
        "message": "Unable to compute results",
    },
    SchemaIntegrityError: {
        "code": "SCHEMA_INTEGRITY_INVALID",
        "message": "Survey schema is invalid",
    },
    ResponseIncompleteError: {
        "code": "RESPONSE_INCOMPLETE",
        "message": "Survey response is incomplete",
    },
}

_FALLBACK = {"code": "ENGINE_ERROR", "message": "Unexpected engine error"}


def describe_error(exc: BaseException) -> Dict[str, object]:
    """Return a boundary payload ``{code, message, detail}`` for an engine error.

    Lookup follows the exception's MRO so subclasses inherit their parent's
    mapping. ``detail`` carries the per-item errors where the exception has
    them (integrity and incomplete-response errors).
    """
    entry = _FALLBACK
    for klass in type(exc).__mro__:
        if klass in ERROR_CODE_MAP:
            entry = ERROR_CODE_MAP[klass]
            break
    detail: List[str] = []
    if isinstance(exc, SchemaIntegrityError):
        detail = list(exc.errors)
    elif isinstance(exc, ResponseIncompleteError):
        detail = list(exc.result.errors)
    logger.info("error_describe code=%s type=%s", entry["code"], type(exc).__name__)
    return {"code": entry["code"], "message": entry["message"], "detail": detail}


__all__ = [
    "MaturityEngineError",
    "ScoringError",
    "UnsupportedScoringMethodError",
    "CustomScoringExecutionError",
    "SchemaIntegrityError",
    "ResponseIncompleteError",
    "ERROR_CODE_MAP",
    "describe_error",
]
