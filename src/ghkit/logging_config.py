"""Structured logging configuration for ghkit.

- JSON structured logging with StructuredFormatter
- Logger hierarchy under the ``ghkit`` namespace
- Environment variable control (GHKIT_LOG_LEVEL, GHKIT_LOG_FORMAT)
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

# Keys redacted from the structured context of a log record.
SENSITIVE_KEYS = {
    "password", "token", "secret", "apikey", "api_key",
    "authorization", "credential", "auth", "key", "bearer", "jwt", "oauth",
}

ROOT_LOGGER_NAME = "ghkit"

_STANDARD_FIELDS = {
    "name",
    "msg",
    "args",
    "created",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "thread",
    "threadName",
    "exc_info",
    "exc_text",
    "stack_info",
    "taskName",
}


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter.

    Outputs logs in JSON format with:
    - timestamp: UTC ISO 8601 format with 'Z' suffix
    - level: Log level name (INFO, ERROR, etc.)
    - logger: Logger name (ghkit hierarchy)
    - message: Log message
    - context: Extras dict merged from LogRecord attributes

    Sensitive keys (token, authorization, etc.) are redacted so credentials
    passed through ``extra=`` never reach the log output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: LogRecord to format

        Returns:
            JSON string with structured log data
        """
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            k: ("[REDACTED]" if k.lower() in SENSITIVE_KEYS else v)
            for k, v in record.__dict__.items()
            if k not in _STANDARD_FIELDS and not k.startswith("_")
        }

        if extras:
            log_data["context"] = extras

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter, used when GHKIT_LOG_FORMAT=text."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [
        h for h in logger.handlers if isinstance(h.formatter, (StructuredFormatter, TextFormatter))
    ]


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging for all ghkit loggers.

    Args:
        level: Optional log level override. If not provided, uses GHKIT_LOG_LEVEL
               environment variable (default: INFO).

    Environment Variables:
        GHKIT_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
        GHKIT_LOG_FORMAT: Output format (json, text). Default: json
    """
    if level is None:
        level = os.getenv("GHKIT_LOG_LEVEL", "INFO")

    log_level = getattr(logging, level.upper(), logging.INFO)

    log_format = os.getenv("GHKIT_LOG_FORMAT", "json").lower()

    if log_format == "text":
        formatter = TextFormatter()
    else:
        formatter = StructuredFormatter()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)

    # Idempotent: one ghkit handler no matter how often this is called.
    # Handlers attached by the application are left alone.
    owned = _owned_handlers(logger)
    if not owned:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in owned:
            handler.setFormatter(formatter)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger inside the ghkit hierarchy.

    Args:
        name: Dotted suffix, e.g. ``"client"`` -> ``ghkit.client``
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
