from __future__ import annotations

import pytest

from admin_gateway.core.config import AdminSettings
from admin_gateway.core.config import default_log_format
from admin_gateway.core.config import load_admin_settings
from admin_gateway.core.config import redact_secret

ENV_NAMES = (
    "HOST",
    "PORT",
    "MODE",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_REDACT_FIELDS",
    "TELEMETRY_NAMESPACE",
    "DOCS_DIR",
    "STATIC_MAX_AGE_SECONDS",
    "ADMIN_PASSWORD",
    "SHUTDOWN_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(f"ADMIN_GATEWAY_{name}", raising=False)


def test_defaults() -> None:
    settings = load_admin_settings()

    assert settings == AdminSettings()
    assert settings.port == 8001
    assert settings.log_format == "text"
    assert settings.log_redact_fields == frozenset()
    assert settings.telemetry_namespace == "admin_gateway.admin"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_GATEWAY_PORT", "9100")
    monkeypatch.setenv("ADMIN_GATEWAY_MODE", "production")
    monkeypatch.setenv("ADMIN_GATEWAY_LOG_LEVEL", "debug")
    monkeypatch.setenv("ADMIN_GATEWAY_LOG_REDACT_FIELDS", "error, user_agent,,")
    monkeypatch.setenv("ADMIN_GATEWAY_SHUTDOWN_TIMEOUT_SECONDS", "1.5")

    settings = load_admin_settings()

    assert settings.port == 9100
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"
    assert settings.log_redact_fields == frozenset({"error", "user_agent"})
    assert settings.shutdown_timeout_seconds == 1.5


def test_explicit_log_format_wins_over_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_GATEWAY_MODE", "production")
    monkeypatch.setenv("ADMIN_GATEWAY_LOG_FORMAT", "text")

    assert load_admin_settings().log_format == "text"


def test_invalid_port_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_GATEWAY_PORT", "eighty")

    with pytest.raises(ValueError):
        load_admin_settings()


def test_default_log_format() -> None:
    assert default_log_format("production") == "json"
    assert default_log_format("development") == "text"


def test_safe_for_logging_hides_admin_password() -> None:
    settings = AdminSettings(admin_password="s3cret", log_redact_fields=frozenset({"error"}))

    safe = settings.safe_for_logging()

    assert safe["admin_password"] == "<redacted>"
    assert safe["log_redact_fields"] == ["error"]
    assert "s3cret" not in str(safe)


def test_redact_secret_empty() -> None:
    assert redact_secret("") == "<empty>"


def test_logging_policy_from_settings() -> None:
    policy = AdminSettings(log_level="DEBUG", log_format="json").logging_policy

    assert policy.level == "DEBUG"
    assert policy.fmt == "json"
