"""Custom route definition routes."""

from __future__ import annotations

from admin_gateway.api.decoding import body
from admin_gateway.api.decoding import no_arguments
from admin_gateway.api.decoding import path_id
from admin_gateway.api.handlers import Operation
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.core.errors import NOT_FOUND
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemType
from admin_gateway.schemas.route import Route

ROUTE_PATH = "/api/routes/{id:path}"


def _route_problems(title: str) -> ProblemCatalog:
    return ProblemCatalog(
        internal=ProblemType("/errors/route-manager", title),
        validation=ProblemType("/errors/validation", "route validation failed"),
        not_found=ProblemType(NOT_FOUND.type, "route is not found"),
    )


ROUTES = [
    AdminRoute(
        "POST",
        "/api/routes",
        Operation(
            handler="create_route_handler",
            action="create_route",
            manager="routes",
            method="create_route",
            decode=body(Route),
            problems=_route_problems("creating a route error"),
            purpose="creating a route",
        ),
    ),
    AdminRoute(
        "GET",
        ROUTE_PATH,
        Operation(
            handler="get_route_handler",
            action="get_route",
            manager="routes",
            method="get_route",
            decode=path_id(),
            problems=_route_problems("getting a route error"),
            purpose="retrieving a route",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/routes",
        Operation(
            handler="get_routes_handler",
            action="get_routes",
            manager="routes",
            method="get_routes",
            decode=no_arguments,
            problems=_route_problems("getting routes error"),
            purpose="retrieving routes",
        ),
    ),
    AdminRoute(
        "DELETE",
        ROUTE_PATH,
        Operation(
            handler="delete_route_handler",
            action="delete_route",
            manager="routes",
            method="delete_route",
            decode=path_id(),
            problems=_route_problems("deleting a route error"),
            purpose="deleting a route",
            empty_response=True,
        ),
    ),
]
