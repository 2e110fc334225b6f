"""Log setup for the check command.

stdout carries the version JSON read by the pipeline, so every pullwatch
record goes to a stderr handler on the ``pullwatch`` logger. Level and format
come from the logging section of config.yaml or LOGGING_LEVEL / LOGGING_FORMAT.
"""

import logging
import sys
from typing import TextIO

from pullwatch.config import LoggingConfig

LOGGER_NAME = "pullwatch"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_level(level: str) -> int:
    """Map a level name (any case) to its number; unknown names give INFO."""
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(config: LoggingConfig | None = None, stream: TextIO | None = None) -> logging.Handler:
    """Send pullwatch records to stream (stderr by default) and return the handler.

    Replaces any handler from an earlier call. Records do not propagate to the
    root logger, so a root handler on stdout cannot corrupt the output.
    """
    config = config or LoggingConfig()
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(config.format or DEFAULT_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(resolve_level(config.level))
    logger.propagate = False
    return handler
