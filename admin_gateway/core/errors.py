"""Error taxonomy, manager error classification and problem response handlers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
import re

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_gateway.schemas.problem import Problem

PROBLEM_MEDIA_TYPE = "application/problem+json"

_PATH_CONVERTER = re.compile(r"\{(\w+):\w+\}")


class ErrorKind(str, Enum):
    """Closed set of failure kinds a manager may report."""

    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _KIND_STATUS[self]


_KIND_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ManagerError(Exception):
    """Base exception for failures reported by domain managers."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, *, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class DomainValidationError(ManagerError):
    """The manager rejected the submitted input."""

    kind = ErrorKind.VALIDATION


class NotFoundError(ManagerError):
    """The referenced resource does not exist."""

    kind = ErrorKind.NOT_FOUND


def classify(exc: BaseException) -> ErrorKind:
    """Map a manager failure to its error kind.

    Only the ``kind`` attribute is consulted; the message text never affects
    classification. Exceptions without a recognizable kind are internal.
    """
    kind = getattr(exc, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind
    return ErrorKind.INTERNAL


@dataclass(frozen=True)
class ProblemType:
    """A ``(type, title)`` pair identifying one error category of an endpoint."""

    type: str
    title: str


EMPTY_CONTEXT = ProblemType("/errors/empty-context", "context is empty error")
REQUEST_BODY_READ = ProblemType("/errors/request-body-read", "request body reader error")
JSON_UNMARSHAL = ProblemType("/errors/json-unmarshal", "json unmarshaller error")
MISSING_FILTERS = ProblemType("/errors/missing-filteres", "filters are not found")
VALIDATION = ProblemType("/errors/validation", "request validation failed")
NOT_FOUND = ProblemType("/errors/not-found", "resource is not found")
INTERNAL = ProblemType("/errors/internal", "internal server error")
UNAUTHORIZED = ProblemType("/errors/unauthorized", "admin key is invalid")


@dataclass(frozen=True)
class ProblemCatalog:
    """Per-endpoint problem types for each manager error kind."""

    internal: ProblemType
    validation: ProblemType = VALIDATION
    not_found: ProblemType = NOT_FOUND

    def for_kind(self, kind: ErrorKind) -> ProblemType:
        if kind is ErrorKind.NOT_FOUND:
            return self.not_found
        if kind is ErrorKind.VALIDATION:
            return self.validation
        return self.internal


class ProblemError(Exception):
    """An error that is rendered as a problem response."""

    def __init__(
        self,
        *,
        status_code: int,
        problem: ProblemType,
        detail: str,
        category: str,
        instance: str | None = None,
    ) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.problem = problem
        self.detail = detail
        self.category = category
        self.instance = instance

    @classmethod
    def from_manager_error(cls, exc: BaseException, catalog: ProblemCatalog) -> "ProblemError":
        kind = classify(exc)
        return cls(
            status_code=kind.status_code,
            problem=catalog.for_kind(kind),
            detail=str(exc),
            category=kind.value,
        )

    def to_problem(self, instance: str) -> Problem:
        return Problem(
            type=self.problem.type,
            title=self.problem.title,
            status=self.status_code,
            detail=self.detail,
            instance=self.instance or instance,
        )


def empty_context_error() -> ProblemError:
    return ProblemError(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        problem=EMPTY_CONTEXT,
        detail="request context is empty",
        category="empty_context",
    )


def problem_response(
    error: ProblemError,
    instance: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Serialize a problem error with its own status code."""
    payload = error.to_problem(instance)
    return JSONResponse(
        status_code=payload.status,
        content=payload.model_dump(),
        headers=headers,
        media_type=PROBLEM_MEDIA_TYPE,
    )


def _slugify(phrase: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", phrase.lower()).strip("-")


def _http_problem(status_code: int) -> ProblemType:
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return INTERNAL if status_code >= 500 else ProblemType("/errors/bad-request", "bad request")
    return ProblemType(f"/errors/{_slugify(phrase)}", phrase.lower())


def route_template(path: str) -> str:
    """Strip Starlette path converters: ``/keys/{id:path}`` becomes ``/keys/{id}``."""
    return _PATH_CONVERTER.sub(r"{\1}", path)


def request_instance(request: Request) -> str:
    """Return the matched route template, falling back to the raw path."""
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    if template:
        return route_template(template)
    return request.url.path


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Normalize framework validation errors to a problem response."""

    messages = [str(issue.get("msg", "Invalid value")) for issue in exc.errors()]
    error = ProblemError(
        status_code=status.HTTP_400_BAD_REQUEST,
        problem=VALIDATION,
        detail="; ".join(messages) or "request validation failed",
        category=ErrorKind.VALIDATION.value,
    )
    return problem_response(error, request_instance(request))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Normalize routing and HTTP exceptions to a problem response."""

    detail = exc.detail if isinstance(exc.detail, str) and exc.detail else "request failed"
    error = ProblemError(
        status_code=exc.status_code,
        problem=_http_problem(exc.status_code),
        detail=detail,
        category="http",
    )
    return problem_response(error, request_instance(request), headers=getattr(exc, "headers", None))


async def problem_error_handler(request: Request, exc: ProblemError) -> JSONResponse:
    """Render problem errors raised outside of an endpoint handler."""

    return problem_response(exc, request_instance(request))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep the response shape stable for unexpected failures."""

    error = ProblemError(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        problem=INTERNAL,
        detail=str(exc) or exc.__class__.__name__,
        category=ErrorKind.INTERNAL.value,
    )
    return problem_response(error, request_instance(request))


def register_error_handlers(app: FastAPI) -> None:
    """Attach all admin problem handlers to a FastAPI app instance."""

    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ProblemError, problem_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
