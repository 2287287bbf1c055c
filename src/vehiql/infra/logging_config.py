from __future__ import annotations

import logging

from vehiql.infra.config import log_level

LOGGER_NAME = "vehiql"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single console handler to the package logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or log_level())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    return logger
