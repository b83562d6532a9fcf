"""Configuration utilities for the maturity engine.

This module loads engine configuration with the following rules:
- Primary source: `maturity_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("maturity_config.json")
logger = logging.getLogger(__name__)

RESPONDENT_MEAN = "respondent_mean"
LAST_RESPONSE = "last_response"


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class EngineSettings(BaseModel):
    # Domains scoring below this get a "Focus on improving ..." recommendation
    low_score_threshold: float = Field(default=2.5, ge=0)
    stakeholder_aggregation: Literal["respondent_mean", "last_response"] = RESPONDENT_MEAN
    minutes_per_question: float = Field(default=1.5, gt=0)

    @field_validator("stakeholder_aggregation", mode="before")
    @classmethod
    def aggregation_normalised(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class AppConfig(BaseModel):
    engine: EngineSettings = Field(default_factory=EngineSettings)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) maturity_config.json at project root (primary base)
    4) Defaults
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    threshold_text = (
        _env("MATURITY_LOW_SCORE_THRESHOLD")
        or _read_config_file("engine.low_score_threshold")
        or _base("engine.low_score_threshold", "2.5")
    )
    aggregation = (
        _env("MATURITY_STAKEHOLDER_AGGREGATION")
        or _read_config_file("engine.stakeholder_aggregation")
        or _base("engine.stakeholder_aggregation", RESPONDENT_MEAN)
    )
    minutes_text = (
        _env("MATURITY_MINUTES_PER_QUESTION")
        or _read_config_file("engine.minutes_per_question")
        or _base("engine.minutes_per_question", "1.5")
    )

    try:
        cfg = AppConfig(
            engine=EngineSettings(
                low_score_threshold=str(threshold_text).strip(),
                stakeholder_aggregation=aggregation,
                minutes_per_question=str(minutes_text).strip(),
            )
        )
        return cfg
    except PydanticValidationError as e:
        logger.error("Invalid engine configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "EngineSettings",
    "RESPONDENT_MEAN",
    "LAST_RESPONSE",
    "load_config",
]
