"""Logging setup shared by the command-line entry points."""

import logging
import sys
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
PACKAGE_LOGGER = "json_query_transformer"


def setup_logging(level: Union[int, str] = logging.WARNING,
                  stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Send package logs to a single stream handler.

    Logs go to stderr by default so stdout stays reserved for JSON output.
    Calling this again replaces the previous handler.

    Args:
        level: Logging level name or number
        stream: Stream for the handler (defaults to the current stderr)

    Returns:
        The package logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
