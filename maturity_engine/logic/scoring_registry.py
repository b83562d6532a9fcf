"""Registry of named custom scoring strategies.

A schema with ``scoring.method == "custom"`` names a strategy in
``scoring.custom_strategy``. Strategies are plain callables with the fixed
signature ``(responses, schema) -> SurveyResult`` registered ahead of time;
stored scoring source is never evaluated.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence
import logging

from maturity_engine.models.results import SurveyResult
from maturity_engine.models.survey_response import SurveyResponse
from maturity_engine.models.survey_schema import SurveySchema

logger = logging.getLogger(__name__)

ScoringStrategy = Callable[[Sequence[SurveyResponse], SurveySchema], SurveyResult]

SCORING_STRATEGIES: Dict[str, ScoringStrategy] = {}


def register_scoring_strategy(name: str) -> Callable[[ScoringStrategy], ScoringStrategy]:
    """Decorator registering ``func`` under ``name``.

    Re-registering a name replaces the previous strategy.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("strategy name must be a non-empty string")

    def _decorator(func: ScoringStrategy) -> ScoringStrategy:
        if name in SCORING_STRATEGIES:
            logger.warning("scoring_strategy_replaced name=%s", name)
        SCORING_STRATEGIES[name] = func
        return func

    return _decorator


def unregister_scoring_strategy(name: str) -> None:
    SCORING_STRATEGIES.pop(name, None)


def get_scoring_strategy(name: Optional[str]) -> Optional[ScoringStrategy]:
    if not name:
        return None
    return SCORING_STRATEGIES.get(name)


__all__ = [
    "ScoringStrategy",
    "SCORING_STRATEGIES",
    "register_scoring_strategy",
    "unregister_scoring_strategy",
    "get_scoring_strategy",
]
