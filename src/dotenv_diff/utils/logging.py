"""Logging setup for dotenv-diff.

Reports own stdout (``--format json`` is piped into other tools), so log
records are always written to a separate stream, stderr unless a test
passes its own.
"""

import logging
import sys
from typing import Any, TextIO

LOGGER_NAMESPACE = "dotenv_diff"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends context fields as ``key=value`` pairs.

    Values containing whitespace are quoted so a line splits cleanly on
    spaces.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "extra_fields", None)
        if not fields:
            return message
        pairs = " ".join(f"{k}={_field_value(v)}" for k, v in fields.items())
        return f"{message} {pairs}"


def _field_value(value: Any) -> str:
    text = str(value)
    if any(c.isspace() for c in text):
        return '"' + text.replace('"', '\\"') + '"'
    return text


def level_for(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a log level.

    ``--verbose`` wins over ``--quiet``. Without either, only warnings
    such as a missing env file are shown.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    level: int | str = logging.WARNING,
    structured: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure the ``dotenv_diff`` logger.

    Calling it again replaces the previous handler.

    Args:
        level: Log level, as a number or a name such as "DEBUG"
        structured: Timestamped lines with context fields
        stream: Destination, stderr by default
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    handler = logging.StreamHandler(stream or sys.stderr)
    if structured:
        handler.setFormatter(StructuredFormatter(STRUCTURED_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``dotenv_diff`` namespace."""
    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Adapter that attaches its context to every record as ``extra_fields``."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        extra["extra_fields"] = {**self.extra, **extra.get("extra_fields", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> LoggerAdapter:
    """Get a logger whose records carry ``context``, e.g. the scanned path."""
    return LoggerAdapter(get_logger(name), context)
