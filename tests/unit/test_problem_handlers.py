from __future__ import annotations

from fastapi import FastAPI
from fastapi import Query
from fastapi.testclient import TestClient
from starlette.exceptions import HTTPException as StarletteHTTPException

from admin_gateway.core.errors import EMPTY_CONTEXT
from admin_gateway.core.errors import ProblemError
from admin_gateway.core.errors import register_error_handlers
from admin_gateway.core.errors import route_template


def _app() -> FastAPI:
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("unexpected failure")

    @app.get("/teapot")
    def teapot() -> None:
        raise StarletteHTTPException(status_code=418, detail="short and stout", headers={"X-Reason": "tea"})

    @app.get("/problem/{item}")
    def problem(item: str) -> None:
        raise ProblemError(status_code=500, problem=EMPTY_CONTEXT, detail="no context", category="empty_context")

    @app.get("/files/{name:path}")
    def files(name: str) -> None:
        raise ProblemError(status_code=500, problem=EMPTY_CONTEXT, detail="no context", category="empty_context")

    @app.get("/typed")
    def typed(limit: int = Query()) -> dict[str, int]:
        return {"limit": limit}

    return app


def test_unhandled_exception_becomes_internal_problem() -> None:
    with TestClient(_app(), raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/problem+json"
    payload = response.json()
    assert payload["type"] == "/errors/internal"
    assert payload["detail"] == "unexpected failure"
    assert payload["instance"] == "/boom"


def test_http_exception_keeps_status_and_headers() -> None:
    with TestClient(_app()) as client:
        response = client.get("/teapot")

    assert response.status_code == 418
    assert response.headers["x-reason"] == "tea"
    payload = response.json()
    assert payload["type"] == "/errors/i-m-a-teapot"
    assert payload["detail"] == "short and stout"


def test_problem_error_uses_route_template_as_instance() -> None:
    with TestClient(_app()) as client:
        response = client.get("/problem/abc")

    assert response.status_code == 500
    payload = response.json()
    assert payload["type"] == "/errors/empty-context"
    assert payload["instance"] == "/problem/{item}"


def test_framework_validation_is_400_problem() -> None:
    with TestClient(_app()) as client:
        response = client.get("/typed", params={"limit": "x"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["type"] == "/errors/validation"
    assert payload["instance"] == "/typed"


def test_instance_strips_path_converters() -> None:
    with TestClient(_app()) as client:
        response = client.get("/files/a/b.txt")

    assert response.json()["instance"] == "/files/{name}"
    assert route_template("/api/users/{id:path}") == "/api/users/{id}"
    assert route_template("/api/users/{id}") == "/api/users/{id}"
