"""Logging configuration for the path tracer.

The library modules only create loggers; handlers are attached here, and only
by applications (the CLI, example scripts) that call setup_logging().
"""

import logging
import logging.handlers
from pathlib import Path

from pathtracer.config import LOG_FORMAT, LOG_LEVEL

ROOT_LOGGER_NAME = "pathtracer"


def setup_logging(
    level: str | None = None,
    log_file: Path | None = None,
) -> logging.Logger:
    """Set up logging for the ``pathtracer`` logger hierarchy.

    Calling this more than once replaces the handlers installed by the
    previous call instead of stacking duplicates.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to ``config.LOG_LEVEL``.
        log_file: Optional path of a rotating log file.

    Returns:
        The configured ``pathtracer`` logger.
    """
    if level is None:
        level = LOG_LEVEL
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        if getattr(handler, "_pathtracer_handler", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler._pathtracer_handler = True
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10485760,  # 10MB
            backupCount=5,
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        file_handler._pathtracer_handler = True
        logger.addHandler(file_handler)

    return logger
