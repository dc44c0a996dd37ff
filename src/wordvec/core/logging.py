"""
Logging utilities for the wordvec package.

Provides JSON or human-readable log lines that surface store and provider
context (endpoint, batch index, handle) passed through the 'extra' parameter.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional


CONTEXT_FIELDS = ("endpoint", "batch_index", "batch_size", "handle", "word_count")


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs JSON-structured log lines.

    Each log line includes:
    - Standard log fields (timestamp, level, message, logger)
    - Context fields if present (endpoint, batch_index, handle, ...)
    """

    def __init__(self, include_timestamp: bool = True):
        super().__init__()
        self.include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_entry = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_timestamp:
            log_entry["timestamp"] = datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat()

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Formatter that outputs human-readable log lines with context.

    Format: TIMESTAMP - LOGGER - LEVEL - MESSAGE [batch_index=X handle=Y]
    """

    def __init__(self, include_timestamp: bool = True):
        if include_timestamp:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(name)s - %(levelname)s - %(message)s"
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with context suffix."""
        base = super().format(record)

        context_parts = []
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                context_parts.append(f"{field}={value}")

        if context_parts:
            return f"{base} [{' '.join(context_parts)}]"
        return base


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance for the wordvec package.

    Args:
        name: Logger name (typically __name__ of the calling module)
        level: Optional logging level override

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger


def configure_logging(
    level: int = logging.INFO,
    include_timestamp: bool = True,
    structured: bool = False,
) -> logging.Logger:
    """
    Configure the 'wordvec' package logger.

    Adds a stdout handler once; later calls only adjust the level.

    Args:
        level: Logging level (default: INFO)
        include_timestamp: Whether to include timestamp in log messages
        structured: If True, output JSON-structured logs; if False, human-readable

    Returns:
        The configured package logger

    Example:
        >>> from wordvec.core.logging import configure_logging
        >>> configure_logging(level=logging.DEBUG, structured=True)
    """
    package_logger = logging.getLogger("wordvec")
    package_logger.setLevel(level)

    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)

        if structured:
            formatter = StructuredFormatter(include_timestamp=include_timestamp)
        else:
            formatter = HumanReadableFormatter(include_timestamp=include_timestamp)

        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        handler.setLevel(level)

    return package_logger
