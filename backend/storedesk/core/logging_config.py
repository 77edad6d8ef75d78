"""Logging setup, called once at application startup."""

import logging
import sys

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger.

    Falls back to INFO for unknown level names. Unless at DEBUG, the SQLAlchemy
    engine and uvicorn access loggers are quieted to WARNING.
    """
    from storedesk.core.config import settings

    level = (level or settings.LOG_LEVEL).upper()
    if level not in VALID_LEVELS:
        level = "INFO"
    numeric_level = getattr(logging, level)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    logging.getLogger("storedesk").setLevel(numeric_level)

    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logging.getLogger(__name__).debug("Logging configured at %s level", level)
