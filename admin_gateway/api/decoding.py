"""Request decoding for admin operations.

A decoder turns one request into the positional arguments of one manager
method, or raises ``ProblemError`` without ever touching a manager. Body
decoders consume the request stream exactly once.
"""

from __future__ import annotations

from collections.abc import Awaitable
from collections.abc import Callable
import re
from typing import Any
from typing import TypeVar

from fastapi import Request
from fastapi import status
from pydantic import BaseModel
from pydantic import ValidationError as PayloadValidationError
from starlette.requests import ClientDisconnect

from admin_gateway.core.errors import JSON_UNMARSHAL
from admin_gateway.core.errors import MISSING_FILTERS
from admin_gateway.core.errors import REQUEST_BODY_READ
from admin_gateway.core.errors import ProblemError
from admin_gateway.core.errors import ProblemType

ModelT = TypeVar("ModelT", bound=BaseModel)

Arguments = tuple[Any, ...]
Decoder = Callable[[Request, str], Awaitable[Arguments]]


def _kebab(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "-", name).replace("_", "-").lower()


async def read_body(request: Request) -> bytes:
    """Read the full request body."""
    try:
        return await request.body()
    except (ClientDisconnect, RuntimeError, OSError) as exc:
        raise ProblemError(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            problem=REQUEST_BODY_READ,
            detail=str(exc) or exc.__class__.__name__,
            category="request_body_read",
        ) from exc


def unmarshal(data: bytes, model: type[ModelT]) -> ModelT:
    """Deserialize a JSON document into ``model``."""
    try:
        return model.model_validate_json(data)
    except PayloadValidationError as exc:
        raise ProblemError(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            problem=JSON_UNMARSHAL,
            detail=str(exc),
            category="json_unmarshal",
        ) from exc


def missing_param_error(name: str, purpose: str, *, source: str = "url param") -> ProblemError:
    return ProblemError(
        status_code=status.HTTP_400_BAD_REQUEST,
        problem=ProblemType(f"/errors/missing-param-{_kebab(name)}", f"{name} is empty"),
        detail=f"{name} {source} is missing from the request url. it is required for {purpose}.",
        category="missing_param",
    )


def missing_filters_error(purpose: str) -> ProblemError:
    return ProblemError(
        status_code=status.HTTP_400_BAD_REQUEST,
        problem=MISSING_FILTERS,
        detail=f"filters are missing from the request url. it is required for {purpose}.",
        category="missing_filters",
    )


def path_param(request: Request, name: str, purpose: str) -> str:
    value = request.path_params.get(name, "")
    if not value:
        raise missing_param_error(name, purpose)
    return value


def query_param(request: Request, name: str) -> str | None:
    """Return a single query value, treating an empty value as absent."""
    value = request.query_params.get(name)
    return value or None


def require_query_param(request: Request, name: str, purpose: str) -> str:
    value = query_param(request, name)
    if value is None:
        raise missing_param_error(name, purpose, source="query param")
    return value


def query_list(request: Request, name: str) -> list[str]:
    """Collect repeated ``name`` and ``name[]`` values, skipping empty ones."""
    values = request.query_params.getlist(name) + request.query_params.getlist(f"{name}[]")
    return [value for value in values if value]


def query_int(request: Request, name: str, default: int | None = None) -> int | None:
    raw = query_param(request, name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ProblemError(
            status_code=status.HTTP_400_BAD_REQUEST,
            problem=ProblemType(f"/errors/invalid-param-{_kebab(name)}", f"{name} is invalid"),
            detail=f"{name} query param must be an integer, got {raw!r}",
            category="invalid_param",
        ) from exc


def body(model: type[BaseModel]) -> Decoder:
    """Decode the whole body into ``model``."""

    async def decode(request: Request, purpose: str) -> Arguments:
        data = await read_body(request)
        return (unmarshal(data, model),)

    return decode


def path_id(name: str = "id") -> Decoder:
    """Extract a required resource identifier from the path."""

    async def decode(request: Request, purpose: str) -> Arguments:
        return (path_param(request, name, purpose),)

    return decode


def path_id_and_body(model: type[BaseModel], name: str = "id") -> Decoder:
    """Extract a resource identifier, then decode the body into ``model``."""

    async def decode(request: Request, purpose: str) -> Arguments:
        resource_id = path_param(request, name, purpose)
        data = await read_body(request)
        return (resource_id, unmarshal(data, model))

    return decode


async def no_arguments(request: Request, purpose: str) -> Arguments:
    return ()
