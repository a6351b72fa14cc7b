"""Python logging setup for the druid-spec command.

Log lines go to stderr so that the generated spec on stdout stays clean.
Structured fields passed via ``extra=`` are appended as key=value pairs.
"""

import logging
import sys
from typing import TextIO

PACKAGE_LOGGER = "druid_ingestion"

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

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"


class KeyValueFormatter(logging.Formatter):
    """Formatter that appends extra record attributes as key=value pairs.

    Example:
        ``logger.info("spec written", extra={"path": "spec.json"})`` renders
        as ``INFO druid_ingestion.cli: spec written path=spec.json``.
    """

    def __init__(self, fmt: str = DEFAULT_FORMAT) -> None:
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then append its extra attributes."""
        line = super().format(record)

        extras: list[str] = []
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                extras.append(f"{key}={value}")

        if record.exc_info and record.exc_info[0] is not None:
            extras.append(f"exc_type={record.exc_info[0].__name__}")

        if extras:
            # Traceback (if any) stays below the first line
            first, sep, rest = line.partition("\n")
            line = f"{first} {' '.join(extras)}{sep}{rest}"
        return line


class _CommandHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging."""


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling it again replaces the previously installed handler.

    Args:
        verbose: Log at DEBUG instead of INFO.
        stream: Output stream, defaults to sys.stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if isinstance(existing, _CommandHandler):
            logger.removeHandler(existing)

    handler = _CommandHandler(stream or sys.stderr)
    handler.setFormatter(KeyValueFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger
