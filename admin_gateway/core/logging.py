"""Structured logging setup with an explicit redaction policy.

Both formatters carry the same fields; the policy decides the line layout and
which structured fields are masked. Nothing is masked unless listed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from datetime import timezone
import json
import logging
from typing import Any

PACKAGE_LOGGER = "admin_gateway"
REDACTED = "<redacted>"

STRUCTURED_FIELDS = (
    "handler",
    "error_type",
    "error",
    "method",
    "path",
    "route",
    "status",
    "latency_ms",
    "client_ip",
    "user_agent",
)


@dataclass(frozen=True)
class LoggingPolicy:
    """Log level, line format and redacted field names."""

    level: str = "INFO"
    fmt: str = "text"
    redact_fields: frozenset[str] = field(default_factory=frozenset)

    def redact(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Return a copy of ``fields`` with every listed field masked."""
        return {key: REDACTED if key in self.redact_fields else value for key, value in fields.items()}


def structured_fields(record: logging.LogRecord) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key in STRUCTURED_FIELDS:
        value = record.__dict__.get(key)
        if value is not None:
            values[key] = value
    return values


class JSONFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def __init__(self, policy: LoggingPolicy) -> None:
        super().__init__()
        self.policy = policy

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(self.policy.redact(structured_fields(record)))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human readable lines with structured fields appended as key=value."""

    def __init__(self, policy: LoggingPolicy) -> None:
        super().__init__("%(asctime)s %(levelname)s %(name)s - %(message)s")
        self.policy = policy

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = self.policy.redact(structured_fields(record))
        if not fields:
            return line
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{line} | {rendered}"


def build_formatter(policy: LoggingPolicy) -> logging.Formatter:
    if policy.fmt == "json":
        return JSONFormatter(policy)
    return TextFormatter(policy)


def setup_logging(policy: LoggingPolicy) -> logging.Logger:
    """Install a single stream handler on the package logger."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(policy))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, policy.level.upper(), logging.INFO))
    logger.propagate = False
    return logger


def log_failure(logger: logging.Logger, message: str, *, handler: str, category: str, error: str) -> None:
    """Log a handler failure at debug level with the full error message."""
    logger.debug(
        message,
        extra={"handler": handler, "error_type": category, "error": error},
    )
