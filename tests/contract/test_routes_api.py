"""Contract tests for custom route endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from admin_gateway.core.errors import NotFoundError
from admin_gateway.schemas.route import Route
from admin_gateway.schemas.route import RouteStep


def test_create_route(client: TestClient, managers) -> None:
    managers.routes.create_route.return_value = {"id": "r-1", "path": "/chat"}

    response = client.post(
        "/api/routes",
        json={"name": "chat", "path": "/chat", "steps": [{"provider": "openai", "model": "gpt-4o"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"id": "r-1", "path": "/chat"}
    managers.routes.create_route.assert_called_once_with(
        Route(name="chat", path="/chat", steps=[RouteStep(provider="openai", model="gpt-4o")]),
    )


def test_get_route_not_found(client: TestClient, managers) -> None:
    managers.routes.get_route.side_effect = NotFoundError("route r-9 is not found")

    response = client.get("/api/routes/r-9")

    assert response.status_code == 404
    payload = response.json()
    assert payload["type"] == "/errors/not-found"
    assert payload["instance"] == "/api/routes/{id}"


def test_list_routes(client: TestClient, managers) -> None:
    managers.routes.get_routes.return_value = [{"id": "r-1"}]

    response = client.get("/api/routes")

    assert response.status_code == 200
    assert response.json() == [{"id": "r-1"}]
    managers.routes.get_routes.assert_called_once_with()


def test_delete_route_returns_empty_body(client: TestClient, managers) -> None:
    response = client.delete("/api/routes/r-1")

    assert response.status_code == 200
    assert response.content == b""
    managers.routes.delete_route.assert_called_once_with("r-1")


def test_delete_route_with_empty_id(client: TestClient, managers, metric) -> None:
    response = client.delete("/api/routes/")

    assert response.status_code == 400
    assert response.json()["type"] == "/errors/missing-param-id"
    managers.routes.delete_route.assert_not_called()
    assert metric("delete_route_handler.delete_route_error_total", error_type="missing_param") == 1
