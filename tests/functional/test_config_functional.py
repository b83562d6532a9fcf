"""Functional tests for configuration loading precedence and validation."""

from __future__ import annotations

import json
import logging

import pytest
from pydantic import ValidationError

from maturity_engine.config import load_config
from maturity_engine.logging_setup import configure_logging

_ENV_KEYS = (
    "MATURITY_LOW_SCORE_THRESHOLD",
    "MATURITY_STAKEHOLDER_AGGREGATION",
    "MATURITY_MINUTES_PER_QUESTION",
)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run config loading in an empty directory with no engine env vars."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(isolated_config):
    cfg = load_config()

    assert cfg.engine.low_score_threshold == 2.5
    assert cfg.engine.stakeholder_aggregation == "respondent_mean"
    assert cfg.engine.minutes_per_question == 1.5


def test_json_file_then_override_file_then_env(isolated_config, monkeypatch):
    (isolated_config / "maturity_config.json").write_text(
        json.dumps({"engine": {"low_score_threshold": 3, "stakeholder_aggregation": "last_response"}}),
        encoding="utf-8",
    )
    assert load_config().engine.low_score_threshold == 3.0
    assert load_config().engine.stakeholder_aggregation == "last_response"

    (isolated_config / "config").mkdir()
    (isolated_config / "config" / "engine.low_score_threshold").write_text("3.5\n", encoding="utf-8")
    assert load_config().engine.low_score_threshold == 3.5

    monkeypatch.setenv("MATURITY_LOW_SCORE_THRESHOLD", "4")
    monkeypatch.setenv("MATURITY_STAKEHOLDER_AGGREGATION", " Respondent_Mean ")
    cfg = load_config()
    assert cfg.engine.low_score_threshold == 4.0
    assert cfg.engine.stakeholder_aggregation == "respondent_mean"


def test_invalid_values_raise(isolated_config, monkeypatch):
    monkeypatch.setenv("MATURITY_STAKEHOLDER_AGGREGATION", "median")

    with pytest.raises(ValidationError):
        load_config()


def test_unreadable_json_falls_back_to_defaults(isolated_config):
    (isolated_config / "maturity_config.json").write_text("{not json", encoding="utf-8")

    assert load_config().engine.minutes_per_question == 1.5


def test_configure_logging_is_idempotent():
    root = logging.getLogger()
    configure_logging()
    handlers = list(root.handlers)
    configure_logging("debug")

    assert root.handlers == handlers
    assert logging.getLogger("maturity_engine").level == logging.DEBUG
    logging.getLogger("maturity_engine").setLevel(logging.NOTSET)


def test_engine_records_reach_the_console_handler(capsys):
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    for handler in saved:
        root.removeHandler(handler)
    try:
        configure_logging()
        logging.getLogger("maturity_engine.logic.scoring_engine").info("scoring_complete survey_id=s-1")
        assert "scoring_complete survey_id=s-1" in capsys.readouterr().out
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in saved:
            root.addHandler(handler)
        root.setLevel(saved_level)
        logging.getLogger("maturity_engine").setLevel(logging.NOTSET)
