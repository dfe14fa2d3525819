"""Shared pytest fixtures for admin gateway test suites."""

from collections.abc import Generator
from pathlib import Path
import sys
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

NAMESPACE = "admin_gateway.admin"


@pytest.fixture
def managers():
    """Manager doubles that record every call."""
    from admin_gateway.services.managers import CustomProvidersManager
    from admin_gateway.services.managers import KeyManager
    from admin_gateway.services.managers import KeyReportingManager
    from admin_gateway.services.managers import Managers
    from admin_gateway.services.managers import PoliciesManager
    from admin_gateway.services.managers import ProviderSettingsManager
    from admin_gateway.services.managers import RouteManager
    from admin_gateway.services.managers import UserManager

    return Managers(
        keys=Mock(spec=KeyManager),
        key_reporting=Mock(spec=KeyReportingManager),
        provider_settings=Mock(spec=ProviderSettingsManager),
        custom_providers=Mock(spec=CustomProvidersManager),
        routes=Mock(spec=RouteManager),
        policies=Mock(spec=PoliciesManager),
        users=Mock(spec=UserManager),
    )


@pytest.fixture
def sink():
    from admin_gateway.core.telemetry import PrometheusSink

    return PrometheusSink()


@pytest.fixture
def telemetry(sink):
    from admin_gateway.core.telemetry import Telemetry

    return Telemetry(sink, namespace=NAMESPACE)


@pytest.fixture
def settings(tmp_path: Path):
    from admin_gateway.core.config import AdminSettings

    return AdminSettings(docs_dir=str(tmp_path))


@pytest.fixture
def client(managers, settings, telemetry) -> Generator[TestClient, None, None]:
    """Provide an API test client backed by manager doubles."""
    from admin_gateway.main import create_app

    app = create_app(managers, settings=settings, telemetry=telemetry)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def metric(sink):
    """Read a sample recorded under ``<namespace>.<name>``."""
    from admin_gateway.core.telemetry import prometheus_name

    def read(name: str, **labels: str) -> float:
        value = sink.registry.get_sample_value(prometheus_name(f"{NAMESPACE}.{name}"), labels or None)
        return value or 0.0

    return read
