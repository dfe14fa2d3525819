"""FastAPI application factory for the admin gateway."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from fastapi import FastAPI
from fastapi import Response

from admin_gateway.api import keys
from admin_gateway.api import policies
from admin_gateway.api import providers
from admin_gateway.api import reporting
from admin_gateway.api import routes
from admin_gateway.api import users
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.api.handlers import build_router
from admin_gateway.api.middleware import HEALTH_PATH
from admin_gateway.api.middleware import AdminRequestMiddleware
from admin_gateway.api.static import STATIC_FILES
from admin_gateway.api.static import StaticCacheMiddleware
from admin_gateway.api.static import register_static_routes
from admin_gateway.core.config import AdminSettings
from admin_gateway.core.config import get_admin_settings
from admin_gateway.core.errors import register_error_handlers
from admin_gateway.core.telemetry import PrometheusSink
from admin_gateway.core.telemetry import Telemetry
from admin_gateway.services.managers import Managers

logger = logging.getLogger(__name__)

ADMIN_ROUTES: list[AdminRoute] = [
    *keys.ROUTES,
    *reporting.ROUTES,
    *providers.ROUTES,
    *routes.ROUTES,
    *policies.ROUTES,
    *users.ROUTES,
]


def route_table(routes: Sequence[AdminRoute] = ADMIN_ROUTES) -> list[tuple[str, str]]:
    """Every ``(method, path)`` the admin app serves, in registration order."""
    table = [("GET", HEALTH_PATH)]
    table.extend((route.method, route.path) for route in routes)
    table.extend(("GET", path) for path in STATIC_FILES)
    return table


def health() -> Response:
    """Liveness probe, always 200 with an empty body."""
    return Response(status_code=200)


def create_app(
    managers: Managers,
    *,
    settings: AdminSettings | None = None,
    telemetry: Telemetry | None = None,
) -> FastAPI:
    """Build the admin application without opening a socket."""
    settings = settings or get_admin_settings()
    if telemetry is None:
        telemetry = Telemetry(PrometheusSink(), namespace=settings.telemetry_namespace)

    table = route_table()
    app = FastAPI(title="Admin Gateway", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.telemetry = telemetry
    app.state.managers = managers
    app.state.route_table = table

    register_error_handlers(app)
    app.add_middleware(StaticCacheMiddleware, max_age_seconds=settings.static_max_age_seconds)
    app.add_middleware(
        AdminRequestMiddleware,
        admin_password=settings.admin_password,
        route_paths=[path for _, path in table],
    )

    app.add_api_route(HEALTH_PATH, health, methods=["GET"], include_in_schema=False)
    app.include_router(build_router(ADMIN_ROUTES, managers, telemetry))
    register_static_routes(app, settings.docs_dir)

    logger.debug("admin app created with settings=%s", settings.safe_for_logging())
    return app
