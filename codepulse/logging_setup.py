"""Console logging configuration for the CLI."""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "codepulse"

_HANDLER: Optional[logging.Handler] = None


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    ``verbosity`` 0 shows warnings, 1 adds info, 2 or more adds debug output.
    """

    global _HANDLER
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Replace rather than stack handlers when main() runs more than once.
    if _HANDLER is not None:
        logger.removeHandler(_HANDLER)
    _HANDLER = logging.StreamHandler(sys.stderr)
    _HANDLER.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(_HANDLER)
    return logger
