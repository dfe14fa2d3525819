"""Usage reporting and event routes."""

from __future__ import annotations

from fastapi import Request

from admin_gateway.api.decoding import Arguments
from admin_gateway.api.decoding import body
from admin_gateway.api.decoding import missing_filters_error
from admin_gateway.api.decoding import path_id
from admin_gateway.api.decoding import query_int
from admin_gateway.api.decoding import query_list
from admin_gateway.api.decoding import query_param
from admin_gateway.api.decoding import require_query_param
from admin_gateway.api.handlers import Operation
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemType
from admin_gateway.schemas.reporting import EventRequest
from admin_gateway.schemas.reporting import KeyReportingRequest
from admin_gateway.schemas.reporting import ReportingRequest

REPORTING_PROBLEMS = ProblemCatalog(
    internal=ProblemType("/errors/key-reporting-manager", "key reporting error"),
    validation=ProblemType("/errors/validation", "reporting request validation failed"),
    not_found=ProblemType("/errors/key-not-found", "key not found error"),
)

EVENTS_PROBLEMS = ProblemCatalog(
    internal=ProblemType("/errors/event-manager", "getting events error"),
    validation=ProblemType("/errors/validation", "events request validation failed"),
)


async def decode_event_filters(request: Request, purpose: str) -> Arguments:
    user_id = query_param(request, "userId")
    custom_id = query_param(request, "customId")
    key_ids = query_list(request, "keyIds")

    if not user_id and not custom_id and not key_ids:
        raise missing_filters_error(purpose)

    start = query_int(request, "start")
    end = query_int(request, "end")
    return (user_id, custom_id, key_ids, start, end)


async def decode_key_id_query(request: Request, purpose: str) -> Arguments:
    return (require_query_param(request, "keyId", purpose),)


ROUTES = [
    AdminRoute(
        "GET",
        "/api/reporting/keys/{id:path}",
        Operation(
            handler="get_key_reporting_handler",
            action="get_key_reporting",
            manager="key_reporting",
            method="get_key_reporting",
            decode=path_id(),
            problems=REPORTING_PROBLEMS,
            purpose="retrieving api key reporting",
        ),
    ),
    AdminRoute(
        "POST",
        "/api/reporting/events",
        Operation(
            handler="get_event_metrics_handler",
            action="get_event_reporting",
            manager="key_reporting",
            method="get_event_reporting",
            decode=body(ReportingRequest),
            problems=REPORTING_PROBLEMS,
            purpose="retrieving event metrics",
        ),
    ),
    AdminRoute(
        "POST",
        "/api/reporting/events-by-day",
        Operation(
            handler="get_event_metrics_by_day_handler",
            action="get_event_reporting_by_day",
            manager="key_reporting",
            method="get_aggregated_event_by_day_reporting",
            decode=body(ReportingRequest),
            problems=REPORTING_PROBLEMS,
            purpose="retrieving daily event metrics",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/events",
        Operation(
            handler="get_events_handler",
            action="get_events",
            manager="key_reporting",
            method="get_events",
            decode=decode_event_filters,
            problems=EVENTS_PROBLEMS,
            purpose="retrieving events",
        ),
    ),
    AdminRoute(
        "POST",
        "/api/v2/events",
        Operation(
            handler="get_events_v2_handler",
            action="get_events_v2",
            manager="key_reporting",
            method="get_events_v2",
            decode=body(EventRequest),
            problems=EVENTS_PROBLEMS,
            purpose="retrieving events",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/reporting/user-ids",
        Operation(
            handler="get_user_ids_handler",
            action="get_user_ids",
            manager="key_reporting",
            method="get_user_ids",
            decode=decode_key_id_query,
            problems=REPORTING_PROBLEMS,
            purpose="retrieving user ids",
        ),
    ),
    AdminRoute(
        "POST",
        "/api/reporting/top-keys",
        Operation(
            handler="get_top_keys_metrics_handler",
            action="get_top_key_reporting",
            manager="key_reporting",
            method="get_top_key_reporting",
            decode=body(KeyReportingRequest),
            problems=REPORTING_PROBLEMS,
            purpose="retrieving top keys",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/reporting/custom-ids",
        Operation(
            handler="get_custom_ids_handler",
            action="get_custom_ids",
            manager="key_reporting",
            method="get_custom_ids",
            decode=decode_key_id_query,
            problems=REPORTING_PROBLEMS,
            purpose="retrieving custom ids",
        ),
    ),
]
