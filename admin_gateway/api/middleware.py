"""Admin request logging and admin password check."""

from __future__ import annotations

from collections.abc import Sequence
import hmac
import logging
import time

from fastapi import Request
from fastapi import Response
from fastapi import status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.base import RequestResponseEndpoint
from starlette.routing import compile_path
from starlette.types import ASGIApp

from admin_gateway.core.errors import UNAUTHORIZED
from admin_gateway.core.errors import ProblemError
from admin_gateway.core.errors import problem_response
from admin_gateway.core.errors import route_template

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-API-KEY"
HEALTH_PATH = "/api/health"


class AdminRequestMiddleware(BaseHTTPMiddleware):
    """Log every admin request and enforce the admin password when set."""

    def __init__(self, app: ASGIApp, admin_password: str = "", route_paths: Sequence[str] = ()) -> None:
        super().__init__(app)
        self.admin_password = admin_password
        self._templates = [(compile_path(path)[0], route_template(path)) for path in route_paths]

    def template_for(self, path: str) -> str:
        """First registered route template matching ``path``, else the path itself."""
        for regex, template in self._templates:
            if regex.match(path):
                return template
        return path

    def _authorized(self, request: Request) -> bool:
        if not self.admin_password or request.url.path == HEALTH_PATH:
            return True
        presented = request.headers.get(ADMIN_KEY_HEADER, "")
        return hmac.compare_digest(presented.encode(), self.admin_password.encode())

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        if self._authorized(request):
            response = await call_next(request)
        else:
            error = ProblemError(
                status_code=status.HTTP_401_UNAUTHORIZED,
                problem=UNAUTHORIZED,
                detail=f"{ADMIN_KEY_HEADER} header does not match the admin password",
                category="unauthorized",
            )
            response = problem_response(error, self.template_for(request.url.path))

        client = request.client
        logger.info(
            "admin request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "route": self.template_for(request.url.path),
                "status": response.status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000, 3),
                "client_ip": client.host if client else None,
                "user_agent": request.headers.get("user-agent"),
            },
        )
        return response
