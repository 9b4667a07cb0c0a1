"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging
import os
from typing import Final

from .errors import ConfigurationError

LOG_LEVEL_ENV: Final[str] = "CELLRECON_LOG_LEVEL"
LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Statement echo from the engine is only wanted when debugging.
_SQL_LOGGERS: Final[tuple[str, ...]] = ("sqlalchemy.engine", "sqlalchemy.pool")


def log_level_from_env(default: int = logging.INFO) -> int:
    raw = os.getenv(LOG_LEVEL_ENV, "").strip()
    if not raw:
        return default
    level = logging.getLevelNamesMapping().get(raw.upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level {raw!r} in {LOG_LEVEL_ENV}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger for a CLI run.

    ``level`` wins over ``CELLRECON_LOG_LEVEL``; without either, INFO is used.
    SQLAlchemy loggers stay at WARNING unless the effective level is DEBUG.
    """

    effective = log_level_from_env() if level is None else level
    logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
    sql_level = logging.INFO if effective <= logging.DEBUG else logging.WARNING
    for name in _SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)
