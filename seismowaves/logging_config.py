"""
Console and file output for the package's loggers.

Every module logs through ``logging.getLogger(__name__)`` below the
``seismowaves`` namespace and never installs handlers itself.
:func:`setup_logging` is the one place that does, for scripts and notebooks
that want to see the root search and configuration messages.
"""

import logging
import sys
from typing import IO, List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Route records of all ``seismowaves.*`` loggers to a stream and optionally a file.

    Args:
        level: Threshold for the namespace logger and its handlers.
        log_file: Optional path; the file is truncated on every call.
        stream: Text stream for console output, stdout by default.

    Handlers installed by an earlier call are closed and replaced, so re-running
    a notebook cell does not duplicate records.
    """
    logger = logging.getLogger(__package__)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(
        "Logging %s records to %d handler(s)", logging.getLevelName(level), len(handlers)
    )
    return logger
