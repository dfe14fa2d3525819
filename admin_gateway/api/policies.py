"""Access policy routes."""

from __future__ import annotations

from fastapi import Request

from admin_gateway.api.decoding import Arguments
from admin_gateway.api.decoding import body
from admin_gateway.api.decoding import missing_filters_error
from admin_gateway.api.decoding import path_id_and_body
from admin_gateway.api.decoding import query_list
from admin_gateway.api.handlers import Operation
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.core.errors import NOT_FOUND
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemType
from admin_gateway.schemas.policy import Policy
from admin_gateway.schemas.policy import UpdatePolicy


def _policy_problems(title: str) -> ProblemCatalog:
    return ProblemCatalog(
        internal=ProblemType("/errors/policy-manager", title),
        validation=ProblemType("/errors/validation", "policy validation failed"),
        not_found=ProblemType(NOT_FOUND.type, "policy is not found"),
    )


async def decode_policy_tags(request: Request, purpose: str) -> Arguments:
    tags = query_list(request, "tags")
    if not tags:
        raise missing_filters_error(purpose)
    return (tags,)


ROUTES = [
    AdminRoute(
        "POST",
        "/api/policies",
        Operation(
            handler="create_policy_handler",
            action="create_policy",
            manager="policies",
            method="create_policy",
            decode=body(Policy),
            problems=_policy_problems("creating a policy error"),
            purpose="creating a policy",
        ),
    ),
    AdminRoute(
        "PATCH",
        "/api/policies/{id:path}",
        Operation(
            handler="update_policy_handler",
            action="update_policy",
            manager="policies",
            method="update_policy",
            decode=path_id_and_body(UpdatePolicy),
            problems=_policy_problems("updating a policy error"),
            purpose="updating a policy",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/policies",
        Operation(
            handler="get_policies_handler",
            action="get_policies",
            manager="policies",
            method="get_policies_by_tags",
            decode=decode_policy_tags,
            problems=_policy_problems("getting policies error"),
            purpose="retrieving policies",
        ),
    ),
]
