"""Python logging setup for the command line tools.

Diagnostics always go to stderr: stdout carries the generated bulk stream.
Structured fields passed through ``extra=`` are rendered as key=value pairs
after the message.
"""

import logging
import sys
from typing import TextIO

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER = "tsloadgen"


class KeyValueFormatter(logging.Formatter):
    """Formatter that appends extra record attributes as key=value pairs.

    Example:
        ```python
        logger.info("generation finished", extra={"records": 6, "group_id": 0})
        # ... INFO tsloadgen.cli: generation finished records=6 group_id=0
        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        extras = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_LOGRECORD_ATTRS
            and isinstance(value, (str, int, float, bool))
        ]
        if not extras:
            return message
        # keep a traceback, if any, on the lines after the key=value pairs
        head, sep, tail = message.partition("\n")
        return f"{head} {' '.join(extras)}{sep}{tail}"


def configure_logging(debug: int = 0, stream: TextIO | None = None) -> logging.Logger:
    """Install a single stderr handler on the package logger.

    Args:
        debug: 0 logs INFO and above, 1 or more logs DEBUG.
        stream: Destination stream (default: sys.stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(KeyValueFormatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug >= 1 else logging.INFO)
    logger.propagate = False
    return logger
