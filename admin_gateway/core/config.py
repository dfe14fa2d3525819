"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from functools import lru_cache
import os

from admin_gateway.core.logging import LoggingPolicy

DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_ADMIN_PORT = 8001
DEFAULT_MODE = "development"
PRODUCTION_MODE = "production"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TELEMETRY_NAMESPACE = "admin_gateway.admin"
DEFAULT_DOCS_DIR = "/docs"
DEFAULT_STATIC_MAX_AGE_SECONDS = 3600
DEFAULT_SHUTDOWN_TIMEOUT_SECONDS = 5.0

ENV_PREFIX = "ADMIN_GATEWAY_"


def _env(name: str) -> str | None:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _get_float_env(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    return float(raw)


def _get_int_env(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    return int(raw)


def _get_list_env(name: str) -> frozenset[str]:
    raw = _env(name)
    if not raw:
        return frozenset()
    return frozenset(item.strip() for item in raw.split(",") if item.strip())


def redact_secret(secret: str) -> str:
    """Return a non-recoverable placeholder for sensitive values."""
    if not secret:
        return "<empty>"
    return "<redacted>"


def default_log_format(mode: str) -> str:
    """Production mode logs json lines, every other mode logs plain text."""
    return "json" if mode == PRODUCTION_MODE else "text"


@dataclass(frozen=True)
class AdminSettings:
    """Runtime settings for the admin server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_ADMIN_PORT
    mode: str = DEFAULT_MODE
    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = "text"
    log_redact_fields: frozenset[str] = field(default_factory=frozenset)
    telemetry_namespace: str = DEFAULT_TELEMETRY_NAMESPACE
    docs_dir: str = DEFAULT_DOCS_DIR
    static_max_age_seconds: int = DEFAULT_STATIC_MAX_AGE_SECONDS
    admin_password: str = ""
    shutdown_timeout_seconds: float = DEFAULT_SHUTDOWN_TIMEOUT_SECONDS

    @property
    def logging_policy(self) -> LoggingPolicy:
        return LoggingPolicy(
            level=self.log_level,
            fmt=self.log_format,
            redact_fields=self.log_redact_fields,
        )

    def safe_for_logging(self) -> dict[str, str | int | float | list[str]]:
        """Return admin settings safe for logs."""
        return {
            "host": self.host,
            "port": self.port,
            "mode": self.mode,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_redact_fields": sorted(self.log_redact_fields),
            "telemetry_namespace": self.telemetry_namespace,
            "docs_dir": self.docs_dir,
            "static_max_age_seconds": self.static_max_age_seconds,
            "admin_password": redact_secret(self.admin_password),
            "shutdown_timeout_seconds": self.shutdown_timeout_seconds,
        }


def load_admin_settings() -> AdminSettings:
    """Build admin settings from the current environment."""
    mode = _env("MODE") or DEFAULT_MODE
    return AdminSettings(
        host=_env("HOST") or DEFAULT_HOST,
        port=_get_int_env("PORT", DEFAULT_ADMIN_PORT),
        mode=mode,
        log_level=(_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        log_format=_env("LOG_FORMAT") or default_log_format(mode),
        log_redact_fields=_get_list_env("LOG_REDACT_FIELDS"),
        telemetry_namespace=_env("TELEMETRY_NAMESPACE") or DEFAULT_TELEMETRY_NAMESPACE,
        docs_dir=_env("DOCS_DIR") or DEFAULT_DOCS_DIR,
        static_max_age_seconds=_get_int_env("STATIC_MAX_AGE_SECONDS", DEFAULT_STATIC_MAX_AGE_SECONDS),
        admin_password=_env("ADMIN_PASSWORD") or "",
        shutdown_timeout_seconds=_get_float_env("SHUTDOWN_TIMEOUT_SECONDS", DEFAULT_SHUTDOWN_TIMEOUT_SECONDS),
    )


@lru_cache(maxsize=1)
def get_admin_settings() -> AdminSettings:
    """Load admin settings from the environment once per process."""
    return load_admin_settings()
