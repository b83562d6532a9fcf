"""Optional logging configuration for processes embedding the engine.

The engine itself never configures logging: every module only does
``logger = logging.getLogger(__name__)`` and emits key=value messages such as
``scoring_complete survey_id=... overall=...``. A host that already configures
logging (a web framework, a job runner) needs nothing from here; records from
the ``maturity_engine`` loggers propagate to its root handlers.

A bare script or CLI calls ``configure_logging()`` once at start-up, before
computing results, to get those records on stdout. Pass ``level="debug"`` to
raise or lower only the engine's verbosity. Calling it again never adds a
second handler.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig
from typing import Optional

ENGINE_LOGGER = "maturity_engine"

_DICT_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "stream": "ext://sys.stdout",
        }
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
    "loggers": {
        ENGINE_LOGGER: {"level": "INFO", "propagate": True},
    },
}


def configure_logging(level: Optional[str] = None) -> None:
    """Install the stdout handler unless the root logger already has one.

    ``level`` (e.g. "debug", "warning") applies to the engine loggers only and
    is honoured even when the host owns the handlers.
    """
    if not logging.getLogger().handlers:
        dictConfig(_DICT_CONFIG)
    if level:
        logging.getLogger(ENGINE_LOGGER).setLevel(level.upper())


__all__ = ["configure_logging", "ENGINE_LOGGER"]
