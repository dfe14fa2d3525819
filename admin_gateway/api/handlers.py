"""Generic admin endpoint and declarative route table support.

Every admin operation runs the same sequence: context check, decode,
manager call, encode. Telemetry is recorded on every path, and each failure
is rendered as a problem response carrying the route template as instance.
"""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass
import inspect
import logging
import time
from typing import Any

from fastapi import APIRouter
from fastapi import Request
from fastapi import Response
from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from admin_gateway.api.decoding import Arguments
from admin_gateway.api.decoding import Decoder
from admin_gateway.core.errors import ErrorKind
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemError
from admin_gateway.core.errors import empty_context_error
from admin_gateway.core.errors import problem_response
from admin_gateway.core.errors import route_template
from admin_gateway.core.logging import log_failure
from admin_gateway.core.telemetry import Telemetry
from admin_gateway.services.managers import Managers

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]


@dataclass(frozen=True)
class Operation:
    """Everything an endpoint needs besides the transport."""

    handler: str
    action: str
    manager: str
    method: str
    decode: Decoder
    problems: ProblemCatalog
    purpose: str
    empty_response: bool = False


@dataclass(frozen=True)
class AdminRoute:
    """One ``(method, path, operation)`` entry of the route table."""

    method: str
    path: str
    operation: Operation

    @property
    def instance(self) -> str:
        """Route template without Starlette path converters."""
        return route_template(self.path)


async def _call(method: Callable[..., Any], args: Arguments) -> Any:
    if inspect.iscoroutinefunction(method):
        return await method(*args)
    return await run_in_threadpool(method, *args)


def _encode(operation: Operation, result: Any) -> Response:
    if operation.empty_response:
        return Response(status_code=200)
    return JSONResponse(status_code=200, content=jsonable_encoder(result))


def build_endpoint(route: AdminRoute, managers: Managers, telemetry: Telemetry) -> Endpoint:
    """Wrap one operation into a FastAPI endpoint."""
    operation = route.operation
    instance = route.instance
    manager_method = getattr(getattr(managers, operation.manager), operation.method)

    def fail(error: ProblemError, message: str) -> Response:
        telemetry.incr(
            f"{operation.handler}.{operation.action}_error",
            [f"error_type:{error.category}"],
        )
        log_failure(
            logger,
            message,
            handler=operation.handler,
            category=error.category,
            error=error.detail,
        )
        return problem_response(error, instance)

    async def dispatch(request: Request | None) -> Response:
        if request is None or not isinstance(request, Request):
            return fail(empty_context_error(), f"empty request context for {operation.purpose}")

        try:
            args = await operation.decode(request, operation.purpose)
        except ProblemError as error:
            return fail(error, f"error when decoding request for {operation.purpose}")

        try:
            result = await _call(manager_method, args)
        except Exception as exc:  # noqa: BLE001
            error = ProblemError.from_manager_error(exc, operation.problems)
            return fail(error, f"error when {operation.purpose}")

        try:
            response = _encode(operation, result)
        except (TypeError, ValueError) as exc:
            error = ProblemError(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                problem=operation.problems.internal,
                detail=str(exc) or exc.__class__.__name__,
                category=ErrorKind.INTERNAL.value,
            )
            return fail(error, f"error when encoding response for {operation.purpose}")

        telemetry.incr(f"{operation.handler}.success")
        return response

    async def endpoint(request: Request) -> Response:
        telemetry.incr(f"{operation.handler}.requests")
        start = time.perf_counter()
        try:
            return await dispatch(request)
        finally:
            telemetry.timing(f"{operation.handler}.latency", time.perf_counter() - start)

    endpoint.__name__ = operation.handler
    endpoint.__doc__ = f"Admin endpoint for {operation.purpose}."
    return endpoint


def build_router(routes: Sequence[AdminRoute], managers: Managers, telemetry: Telemetry) -> APIRouter:
    """Turn a declarative route table into an APIRouter."""
    router = APIRouter()
    for route in routes:
        router.add_api_route(
            route.path,
            build_endpoint(route, managers, telemetry),
            methods=[route.method],
            name=route.operation.handler,
            include_in_schema=False,
        )
    return router
