"""User account routes."""

from __future__ import annotations

from fastapi import Request

from admin_gateway.api.decoding import Arguments
from admin_gateway.api.decoding import body
from admin_gateway.api.decoding import missing_filters_error
from admin_gateway.api.decoding import path_id_and_body
from admin_gateway.api.decoding import query_int
from admin_gateway.api.decoding import query_list
from admin_gateway.api.decoding import read_body
from admin_gateway.api.decoding import require_query_param
from admin_gateway.api.decoding import unmarshal
from admin_gateway.api.handlers import Operation
from admin_gateway.api.handlers import AdminRoute
from admin_gateway.core.errors import NOT_FOUND
from admin_gateway.core.errors import ProblemCatalog
from admin_gateway.core.errors import ProblemType
from admin_gateway.schemas.user import UpdateUser
from admin_gateway.schemas.user import User


def _user_problems(title: str) -> ProblemCatalog:
    return ProblemCatalog(
        internal=ProblemType("/errors/user-manager", title),
        validation=ProblemType("/errors/validation", "user validation failed"),
        not_found=ProblemType(NOT_FOUND.type, "user is not found"),
    )


async def decode_user_filters(request: Request, purpose: str) -> Arguments:
    tags = query_list(request, "tags")
    key_ids = query_list(request, "keyIds")
    user_ids = query_list(request, "userIds")

    if not tags and not key_ids and not user_ids:
        raise missing_filters_error(purpose)

    offset = query_int(request, "offset", default=0)
    limit = query_int(request, "limit", default=0)
    return (tags, key_ids, user_ids, offset, limit)


async def decode_user_update_by_tags(request: Request, purpose: str) -> Arguments:
    tags = query_list(request, "tags")
    if not tags:
        raise missing_filters_error(purpose)
    user_id = require_query_param(request, "userId", purpose)
    data = await read_body(request)
    return (tags, user_id, unmarshal(data, UpdateUser))


ROUTES = [
    AdminRoute(
        "POST",
        "/api/users",
        Operation(
            handler="create_user_handler",
            action="create_user",
            manager="users",
            method="create_user",
            decode=body(User),
            problems=_user_problems("creating a user error"),
            purpose="creating a user",
        ),
    ),
    AdminRoute(
        "PATCH",
        "/api/users/{id:path}",
        Operation(
            handler="update_user_handler",
            action="update_user",
            manager="users",
            method="update_user",
            decode=path_id_and_body(UpdateUser),
            problems=_user_problems("updating a user error"),
            purpose="updating a user",
        ),
    ),
    AdminRoute(
        "PATCH",
        "/api/users",
        Operation(
            handler="update_user_via_tags_and_user_id_handler",
            action="update_user_via_tags_and_user_id",
            manager="users",
            method="update_user_via_tags_and_user_id",
            decode=decode_user_update_by_tags,
            problems=_user_problems("updating a user error"),
            purpose="updating a user",
        ),
    ),
    AdminRoute(
        "GET",
        "/api/users",
        Operation(
            handler="get_users_handler",
            action="get_users",
            manager="users",
            method="get_users",
            decode=decode_user_filters,
            problems=_user_problems("getting users error"),
            purpose="retrieving users",
        ),
    ),
]
