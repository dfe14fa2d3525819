"""Contract tests for reporting and event endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from admin_gateway.core.errors import NotFoundError
from admin_gateway.schemas.reporting import EventRequest
from admin_gateway.schemas.reporting import KeyReporting
from admin_gateway.schemas.reporting import KeyReportingRequest
from admin_gateway.schemas.reporting import ReportingRequest


def test_key_reporting_returns_usage(client: TestClient, managers) -> None:
    managers.key_reporting.get_key_reporting.return_value = KeyReporting(cost_in_micro_dollars=1200)

    response = client.get("/api/reporting/keys/k-1")

    assert response.status_code == 200
    assert response.json() == {"costInMicroDollars": 1200}
    managers.key_reporting.get_key_reporting.assert_called_once_with("k-1")


def test_key_reporting_unknown_key_is_404(client: TestClient, managers, metric) -> None:
    managers.key_reporting.get_key_reporting.side_effect = NotFoundError("key k-2 is not found")

    response = client.get("/api/reporting/keys/k-2")

    assert response.status_code == 404
    payload = response.json()
    assert payload["type"] == "/errors/key-not-found"
    assert payload["status"] == 404
    assert payload["instance"] == "/api/reporting/keys/{id}"
    assert metric("get_key_reporting_handler.get_key_reporting_error_total", error_type="not_found") == 1


def test_key_reporting_with_empty_id_is_missing_param(client: TestClient, managers) -> None:
    response = client.get("/api/reporting/keys/")

    assert response.status_code == 400
    assert response.json()["type"] == "/errors/missing-param-id"
    managers.key_reporting.get_key_reporting.assert_not_called()


def test_event_metrics_decodes_reporting_request(client: TestClient, managers) -> None:
    managers.key_reporting.get_event_reporting.return_value = {"dataPoints": []}

    response = client.post(
        "/api/reporting/events",
        json={"keyIds": ["k-1"], "start": 100, "end": 200, "increment": 60},
    )

    assert response.status_code == 200
    assert response.json() == {"dataPoints": []}
    managers.key_reporting.get_event_reporting.assert_called_once_with(
        ReportingRequest(key_ids=["k-1"], start=100, end=200, increment=60),
    )


def test_event_metrics_by_day_failure_uses_reporting_problem(client: TestClient, managers) -> None:
    managers.key_reporting.get_aggregated_event_by_day_reporting.side_effect = RuntimeError("query timeout")

    response = client.post("/api/reporting/events-by-day", json={"tags": ["team-a"]})

    assert response.status_code == 500
    payload = response.json()
    assert payload["type"] == "/errors/key-reporting-manager"
    assert payload["detail"] == "query timeout"


def test_get_events_requires_a_filter(client: TestClient, managers, metric) -> None:
    response = client.get("/api/events", params={"start": "10"})

    assert response.status_code == 400
    assert response.json()["type"] == "/errors/missing-filteres"
    managers.key_reporting.get_events.assert_not_called()
    assert metric("get_events_handler.get_events_error_total", error_type="missing_filters") == 1


def test_get_events_passes_filters_and_window(client: TestClient, managers) -> None:
    managers.key_reporting.get_events.return_value = []

    response = client.get("/api/events?userId=u-1&keyIds=k-1&keyIds=k-2&start=10&end=20")

    assert response.status_code == 200
    assert response.json() == []
    managers.key_reporting.get_events.assert_called_once_with("u-1", None, ["k-1", "k-2"], 10, 20)


def test_get_events_rejects_non_numeric_window(client: TestClient, managers) -> None:
    response = client.get("/api/events", params={"customId": "c-1", "start": "yesterday"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["type"] == "/errors/invalid-param-start"
    assert "yesterday" in payload["detail"]
    managers.key_reporting.get_events.assert_not_called()


def test_get_events_v2_decodes_body(client: TestClient, managers) -> None:
    managers.key_reporting.get_events_v2.return_value = {"events": [], "count": 0}

    response = client.post("/api/v2/events", json={"customIds": ["c-1"], "limit": 5, "returnCount": True})

    assert response.status_code == 200
    managers.key_reporting.get_events_v2.assert_called_once_with(
        EventRequest(custom_ids=["c-1"], limit=5, return_count=True),
    )


def test_get_events_v2_failure_uses_event_problem(client: TestClient, managers) -> None:
    managers.key_reporting.get_events_v2.side_effect = RuntimeError("store unavailable")

    response = client.post("/api/v2/events", json={})

    assert response.status_code == 500
    assert response.json()["type"] == "/errors/event-manager"


def test_user_ids_require_key_id(client: TestClient, managers) -> None:
    response = client.get("/api/reporting/user-ids")

    assert response.status_code == 400
    payload = response.json()
    assert payload["type"] == "/errors/missing-param-key-id"
    assert payload["title"] == "keyId is empty"
    managers.key_reporting.get_user_ids.assert_not_called()


def test_user_and_custom_ids_by_key(client: TestClient, managers) -> None:
    managers.key_reporting.get_user_ids.return_value = ["u-1", "u-2"]
    managers.key_reporting.get_custom_ids.return_value = ["c-1"]

    users = client.get("/api/reporting/user-ids", params={"keyId": "k-1"})
    customs = client.get("/api/reporting/custom-ids", params={"keyId": "k-1"})

    assert users.json() == ["u-1", "u-2"]
    assert customs.json() == ["c-1"]
    managers.key_reporting.get_user_ids.assert_called_once_with("k-1")
    managers.key_reporting.get_custom_ids.assert_called_once_with("k-1")


def test_top_keys_decodes_ranking_request(client: TestClient, managers) -> None:
    managers.key_reporting.get_top_key_reporting.return_value = {"keyReportings": []}

    response = client.post("/api/reporting/top-keys", json={"order": "desc", "limit": 3})

    assert response.status_code == 200
    managers.key_reporting.get_top_key_reporting.assert_called_once_with(
        KeyReportingRequest(order="desc", limit=3),
    )


def test_unencodable_result_counts_as_error_not_success(client: TestClient, managers, metric) -> None:
    managers.key_reporting.get_key_reporting.return_value = {"costInMicroDollars": float("nan")}

    response = client.get("/api/reporting/keys/k-1")

    assert response.status_code == 500
    payload = response.json()
    assert payload["type"] == "/errors/key-reporting-manager"
    assert payload["instance"] == "/api/reporting/keys/{id}"
    assert metric("get_key_reporting_handler.success_total") == 0
    assert metric("get_key_reporting_handler.get_key_reporting_error_total", error_type="internal") == 1
    assert metric("get_key_reporting_handler.latency_count") == 1
